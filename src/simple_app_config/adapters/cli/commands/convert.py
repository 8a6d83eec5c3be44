"""``convert`` command: run the typed value converter on a literal."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from ....domain.converter import convert
from ....domain.enums import OutputFormat
from ....domain.errors import SimpleAppConfigError
from ..constants import CLICK_CONTEXT_SETTINGS
from ._shared import FORMAT_OPTION, abort, render_value

logger = logging.getLogger(__name__)


@click.command("convert", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("type_token", metavar="TYPE")
@click.argument("value")
@click.argument("subtype1", metavar="[SUBTYPE1]", required=False)
@click.argument("subtype2", metavar="[SUBTYPE2]", required=False)
@FORMAT_OPTION
def cli_convert(type_token: str, value: str, subtype1: str | None, subtype2: str | None, output_format: str) -> None:
    """Convert VALUE to TYPE, e.g. ``convert map '{"a": "1"}' string number``.

    Example:
        >>> from click.testing import CliRunner
        >>> CliRunner().invoke(cli_convert, ["array", "[1, 2]", "number", "--format", "json"]).output
        '[\\n  1,\\n  2\\n]\\n'
    """
    fmt = OutputFormat(output_format.lower())
    with lib_log_rich.runtime.bind(job_id="cli-convert", extra={"command": "convert", "type": type_token}):
        try:
            result = convert(type_token, value, subtype1, subtype2)
        except SimpleAppConfigError as exc:
            abort(exc)
        logger.debug("Converted value", extra={"type": type_token})
        click.echo(render_value(result, fmt))


__all__ = ["cli_convert"]
