"""``show`` command: run a configuration pass and display the merged tree."""

from __future__ import annotations

import logging
from pathlib import Path

import lib_log_rich.runtime
import rich_click as click

from ....domain.enums import OutputFormat
from ....domain.errors import UndefinedConfigValueError
from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context
from ._shared import FORMAT_OPTION, abort, engine_options, run_configuration

logger = logging.getLogger(__name__)


@click.command("show", context_settings=CLICK_CONTEXT_SETTINGS)
@FORMAT_OPTION
@click.option(
    "--section",
    type=str,
    default=None,
    help="Show only the value at this dotted key (e.g. 'server.http')",
)
@engine_options
@click.pass_context
def cli_show(
    ctx: click.Context,
    output_format: str,
    section: str | None,
    engine_argv: tuple[str, ...],
    project_root: Path | None,
) -> None:
    """Display the configuration merged from the environment-specific and default documents.

    Precedence for every source: command-line flag, then environment
    variable, then the path derived from the environment name.
    """
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())

    extra = {"command": "show", "format": fmt.value, "section": section}
    with lib_log_rich.runtime.bind(job_id="cli-show", extra=extra):
        configuration = run_configuration(cli_ctx, engine_argv, project_root)
        logger.info("Displaying configuration", extra={"environment": configuration.environment})
        try:
            cli_ctx.services.display_config(configuration, output_format=fmt, section=section)
        except UndefinedConfigValueError as exc:
            abort(exc)


__all__ = ["cli_show"]
