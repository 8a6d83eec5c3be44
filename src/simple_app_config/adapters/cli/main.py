"""CLI entry point and execution wrapper.

Contents:
    * :func:`main` - Run the CLI and return an exit code; used by the console
      script and ``python -m simple_app_config``.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import click
import lib_cli_exit_tools
import lib_log_rich.runtime

from ... import __init__conf__
from .constants import TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import (
    apply_traceback_preferences,
    restore_traceback_state,
    snapshot_traceback_state,
)

if TYPE_CHECKING:
    from ...composition import AppServices


def _run_cli(argv: Sequence[str] | None, *, services_factory: Callable[[], AppServices]) -> int:
    """Invoke the root group in non-standalone mode and translate the outcome to an exit code."""
    from .root import cli

    args = list(argv) if argv is not None else sys.argv[1:]
    try:
        cli.main(
            args=args,
            prog_name=__init__conf__.shell_command,
            obj=services_factory,
            standalone_mode=False,
        )
        return 0
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except BaseException as exc:
        # Every failure, SystemExit and KeyboardInterrupt included, is reported through lib_cli_exit_tools.
        tracebacks_enabled = bool(getattr(lib_cli_exit_tools.config, "traceback", False))
        apply_traceback_preferences(tracebacks_enabled)
        length_limit = TRACEBACK_VERBOSE_LIMIT if tracebacks_enabled else TRACEBACK_SUMMARY_LIMIT
        if not isinstance(exc, SystemExit):
            lib_cli_exit_tools.print_exception_message(trace_back=tracebacks_enabled, length_limit=length_limit)
        return lib_cli_exit_tools.get_system_exit_code(exc)


def main(
    argv: Sequence[str] | None = None,
    *,
    restore_traceback: bool = True,
    services_factory: Callable[[], AppServices] | None = None,
) -> int:
    """Execute the CLI with error handling and return the exit code.

    Args:
        argv: CLI arguments; None uses ``sys.argv[1:]``.
        restore_traceback: Restore the previous traceback configuration afterwards.
        services_factory: Returns the AppServices container; callers outside
            the adapters layer pass ``build_production``.

    Raises:
        ValueError: If *services_factory* is not provided.

    Example:
        >>> from simple_app_config.composition import build_testing
        >>> main(["info"], services_factory=build_testing)  # doctest: +ELLIPSIS
        Info for simple_app_config:
        ...
        0
    """
    if services_factory is None:
        raise ValueError("services_factory is required. Pass build_production from composition layer.")

    previous_state = snapshot_traceback_state()
    try:
        return _run_cli(argv, services_factory=services_factory)
    finally:
        if restore_traceback:
            restore_traceback_state(previous_state)
        # Shutting down from a worker thread would stop logging for the main thread.
        if threading.current_thread() is threading.main_thread() and lib_log_rich.runtime.is_initialised():
            lib_log_rich.runtime.shutdown()


__all__ = ["main"]
