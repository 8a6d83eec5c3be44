"""Click context helpers for CLI state management."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import lib_cli_exit_tools
import rich_click as click
from lib_layered_config import Config

if TYPE_CHECKING:
    from ...composition import AppServices

TracebackState = tuple[bool, bool]
"""Captured traceback configuration: (traceback_enabled, force_color)."""


@dataclass(slots=True)
class CLIContext:
    """Typed CLI state shared with every subcommand.

    Attributes:
        traceback: Whether verbose tracebacks were requested.
        settings: The tool's own settings with ``--set`` overrides applied.
        services: Port implementations from the composition root.
        profile: Settings profile selected with ``--profile``.
    """

    traceback: bool
    settings: Config
    services: AppServices
    profile: str | None = None


def store_cli_context(
    ctx: click.Context,
    *,
    traceback: bool,
    settings: Config,
    services: AppServices,
    profile: str | None = None,
) -> None:
    """Store CLI state in the Click context for subcommand access.

    Example:
        >>> from unittest.mock import MagicMock
        >>> from simple_app_config.composition import build_testing
        >>> ctx = MagicMock()
        >>> store_cli_context(ctx, traceback=True, settings=Config({}, {}), services=build_testing())
        >>> ctx.obj.traceback
        True
    """
    ctx.obj = CLIContext(traceback=traceback, settings=settings, services=services, profile=profile)


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Retrieve typed CLI state from Click context.

    Raises:
        RuntimeError: If CLI context was not properly initialized.
    """
    if not isinstance(ctx.obj, CLIContext):
        raise RuntimeError("CLI context not initialized. Call store_cli_context first.")
    return ctx.obj


def apply_traceback_preferences(enabled: bool) -> None:
    """Synchronise shared traceback flags with the requested preference.

    Example:
        >>> apply_traceback_preferences(True)
        >>> bool(lib_cli_exit_tools.config.traceback)
        True
    """
    lib_cli_exit_tools.config.traceback = bool(enabled)
    lib_cli_exit_tools.config.traceback_force_color = bool(enabled)


def snapshot_traceback_state() -> TracebackState:
    """Capture the current traceback configuration for later restoration."""
    return (
        bool(getattr(lib_cli_exit_tools.config, "traceback", False)),
        bool(getattr(lib_cli_exit_tools.config, "traceback_force_color", False)),
    )


def restore_traceback_state(state: TracebackState) -> None:
    """Reapply a configuration captured by :func:`snapshot_traceback_state`.

    Example:
        >>> original = snapshot_traceback_state()
        >>> apply_traceback_preferences(True)
        >>> restore_traceback_state(original)
        >>> lib_cli_exit_tools.config.traceback == original[0]
        True
    """
    lib_cli_exit_tools.config.traceback = state[0]
    lib_cli_exit_tools.config.traceback_force_color = state[1]


__all__ = [
    "CLIContext",
    "TracebackState",
    "apply_traceback_preferences",
    "get_cli_context",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
]
