"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Configuration services
from ..adapters.config.display import display_config
from ..adapters.config.loader import configure
from ..adapters.config.settings import get_settings

# Logging services
from ..adapters.logging.setup import init_logging

if TYPE_CHECKING:
    from ..adapters.memory import InMemoryConfigure
    from ..application.ports import (
        Configure,
        DisplayConfig,
        GetSettings,
        InitLogging,
        InspectSources,
    )

    _assert_configure: Configure = configure
    _assert_inspect_sources: InspectSources = configure.inspect
    _assert_get_settings: GetSettings = get_settings
    _assert_display_config: DisplayConfig = display_config
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    configure: Configure
    inspect_sources: InspectSources
    get_settings: GetSettings
    display_config: DisplayConfig
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire the disk, ``os.environ`` and lib_log_rich into an AppServices container."""
    return AppServices(
        configure=configure,
        inspect_sources=configure.inspect,
        get_settings=get_settings,
        display_config=display_config,
        init_logging=init_logging,
    )


def build_testing(*, configure_in_memory: InMemoryConfigure | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        configure_in_memory: Pass runner over an in-memory file system and
            environment. When None, an empty one is created. Pass your own
            to seed files and variables.

    Example:
        >>> services = build_testing()
        >>> services.configure().as_dict()
        {}
    """
    from ..adapters.memory import (
        InMemoryConfigure,
        display_config_in_memory,
        get_settings_in_memory,
        init_logging_in_memory,
    )

    runner = configure_in_memory if configure_in_memory is not None else InMemoryConfigure()
    return AppServices(
        configure=runner,
        inspect_sources=runner.inspect,
        get_settings=get_settings_in_memory,
        display_config=display_config_in_memory,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    # Configuration
    "configure",
    "display_config",
    "get_settings",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
