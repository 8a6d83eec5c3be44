"""``get`` command: print one configuration value."""

from __future__ import annotations

import logging
from pathlib import Path

import lib_log_rich.runtime
import rich_click as click

from ....domain.enums import OutputFormat
from ....domain.errors import UndefinedConfigValueError
from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context
from ._shared import FORMAT_OPTION, abort, engine_options, render_value, run_configuration

logger = logging.getLogger(__name__)


@click.command("get", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@FORMAT_OPTION
@click.option("--default", "default", type=str, default=None, help="Print this instead of failing when KEY is missing")
@engine_options
@click.pass_context
def cli_get(
    ctx: click.Context,
    key: str,
    output_format: str,
    default: str | None,
    engine_argv: tuple[str, ...],
    project_root: Path | None,
) -> None:
    """Print the value at the dotted KEY; write ``\\.`` for a dot inside a key."""
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())

    with lib_log_rich.runtime.bind(job_id="cli-get", extra={"command": "get", "key": key}):
        configuration = run_configuration(cli_ctx, engine_argv, project_root)
        try:
            value = configuration.get(key)
        except UndefinedConfigValueError as exc:
            if default is None:
                abort(exc)
            value = default
        logger.debug("Configuration value read", extra={"key": key})
        click.echo(render_value(value, fmt))


__all__ = ["cli_get"]
