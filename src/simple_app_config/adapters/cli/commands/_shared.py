"""Shared helpers for CLI command modules.

Contents:
    * :func:`engine_options` - Adds the resolver flags to a command.
    * :func:`run_configuration` - Run a pass or exit with ``CONFIG_ERROR``.
    * :func:`abort` - Report a configuration error and exit.
    * :func:`render_value` - Format a value for human or JSON output.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from pathlib import Path
from typing import Any, NoReturn, TypeVar

import orjson
import rich_click as click

from ....application.resolver import SOURCE_SETTINGS, SourceSetting
from ....application.session import Configuration
from ....domain.enums import OutputFormat
from ....domain.errors import SimpleAppConfigError
from ...config.display import to_display_value
from ..context import CLIContext
from ..exit_codes import exit_code_for

F = TypeVar("F", bound=Callable[..., Any])

FORMAT_OPTION = click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="Output format (human-readable or JSON)",
)


def _param_name(setting: SourceSetting) -> str:
    return setting.flag.lstrip("-").replace("-", "_")


def engine_options(command: F) -> F:
    """Add ``--env``, ``--config-dir`` and the other resolver flags plus ``--project-root``.

    The wrapped command receives ``engine_argv`` (the flags rebuilt as
    ``--flag=value`` arguments, in resolver syntax) and ``project_root``.
    """

    @functools.wraps(command)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        values = {setting.flag: kwargs.pop(_param_name(setting)) for setting in SOURCE_SETTINGS}
        engine_argv = tuple(f"{flag}={value}" for flag, value in values.items() if value)
        return command(*args, engine_argv=engine_argv, **kwargs)

    decorated: Any = click.option(
        "--project-root",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Directory every configuration file must live in (default: working directory)",
    )(wrapper)
    for setting in reversed(SOURCE_SETTINGS):
        decorated = click.option(
            setting.flag,
            _param_name(setting),
            type=str,
            default=None,
            metavar="VALUE",
            help=f"Takes precedence over ${setting.variable}",
        )(decorated)
    return decorated


def abort(exc: SimpleAppConfigError, *, during_pass: bool = False) -> NoReturn:
    """Print *exc* to stderr and exit with the matching code."""
    click.echo(f"Error: {exc}", err=True)
    raise SystemExit(exit_code_for(exc, during_pass=during_pass)) from exc


def run_configuration(cli_ctx: CLIContext, engine_argv: tuple[str, ...], project_root: Path | None) -> Configuration:
    """Run a fresh configuration pass for this invocation."""
    try:
        return cli_ctx.services.configure(force=True, argv=engine_argv, project_root=project_root)
    except SimpleAppConfigError as exc:
        abort(exc, during_pass=True)


def render_value(value: Any, output_format: OutputFormat) -> str:
    """Format *value* for output.

    Human output prints strings as they are and everything else as JSON.

    Examples:
        >>> render_value("abc", OutputFormat.HUMAN)
        'abc'
        >>> render_value("abc", OutputFormat.JSON)
        '"abc"'
        >>> render_value({"b": {1, 2}}, OutputFormat.HUMAN)
        '{\\n  "b": [\\n    1,\\n    2\\n  ]\\n}'
    """
    if output_format is OutputFormat.HUMAN and isinstance(value, str):
        return value
    return orjson.dumps(to_display_value(value), option=orjson.OPT_INDENT_2).decode("utf-8")


__all__ = [
    "FORMAT_OPTION",
    "abort",
    "engine_options",
    "render_value",
    "run_configuration",
]
