"""``expand`` command: run the expansion engine against the resolved environment."""

from __future__ import annotations

import logging
from pathlib import Path

import lib_log_rich.runtime
import rich_click as click

from ....domain.enums import OutputFormat
from ....domain.errors import SimpleAppConfigError
from ....domain.expansion import expand
from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context
from ._shared import FORMAT_OPTION, abort, engine_options, render_value, run_configuration

logger = logging.getLogger(__name__)


@click.command("expand", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("text")
@FORMAT_OPTION
@engine_options
@click.pass_context
def cli_expand(
    ctx: click.Context,
    text: str,
    output_format: str,
    engine_argv: tuple[str, ...],
    project_root: Path | None,
) -> None:
    """Expand TEXT as a configuration leaf, e.g. ``'$PORT::number'`` or ``'http://${HOST}/'``.

    Variables from the resolved env file are visible.
    """
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())

    with lib_log_rich.runtime.bind(job_id="cli-expand", extra={"command": "expand"}):
        configuration = run_configuration(cli_ctx, engine_argv, project_root)
        try:
            result = expand(text, configuration.lookup)
        except SimpleAppConfigError as exc:
            abort(exc)
        logger.debug("Expanded text", extra={"environment": configuration.environment})
        click.echo(render_value(result, fmt))


__all__ = ["cli_expand"]
