"""Root CLI command group and global option handling.

Contents:
    * :func:`cli` - Root command group with ``--traceback``, ``--profile``
      and ``--set``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import rich_click as click
from lib_layered_config import Config

from ... import __init__conf__
from ..config.overrides import apply_overrides
from .constants import CLICK_CONTEXT_SETTINGS
from .context import apply_traceback_preferences, store_cli_context

if TYPE_CHECKING:
    from ...composition import AppServices


def _apply_cli_overrides(settings: Config, set_overrides: tuple[str, ...]) -> Config:
    """Apply ``--set`` overrides, reporting malformed ones as usage errors."""
    try:
        return apply_overrides(settings, set_overrides)
    except (TypeError, ValueError) as exc:
        raise click.UsageError(str(exc)) from exc


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option(
    "--profile",
    type=str,
    default=None,
    help="Load the tool's own settings from a named profile",
)
@click.option(
    "--set",
    "set_overrides",
    multiple=True,
    default=(),
    metavar="SECTION.KEY=VALUE",
    help="Override a setting of the tool itself (repeatable), e.g. lib_log_rich.console_level=DEBUG.",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, profile: str | None, set_overrides: tuple[str, ...]) -> None:
    """Load the tool settings, start logging, and store shared state for subcommands.

    Example:
        >>> from click.testing import CliRunner
        >>> from simple_app_config.composition import build_testing
        >>> result = CliRunner().invoke(cli, ["info"], obj=build_testing)
        >>> result.exit_code
        0
    """
    # ctx.obj is always the services factory (production or test)
    if not callable(ctx.obj):
        raise RuntimeError("Services factory not provided. This is a bug.")
    services: AppServices = ctx.obj()  # type: ignore[assignment]  # Click's obj is typed as Any
    try:
        settings = services.get_settings(profile=profile)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--profile") from exc
    settings = _apply_cli_overrides(settings, set_overrides)
    services.init_logging(settings)
    store_cli_context(ctx, traceback=traceback, settings=settings, services=services, profile=profile)
    apply_traceback_preferences(traceback)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Deferred import: command modules import from package ancestors that
# import this module.
def _register_commands() -> None:
    from .commands import cli_convert, cli_expand, cli_get, cli_info, cli_show, cli_sources

    for cmd in (cli_info, cli_show, cli_get, cli_sources, cli_convert, cli_expand):
        cli.add_command(cmd)


_register_commands()


__all__ = ["cli"]
