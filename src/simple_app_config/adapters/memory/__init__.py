"""In-memory adapter implementations for testing.

Provides lightweight implementations of all application ports that operate
entirely in memory -- no disk, no ``os.environ``, no logging framework.

Contents:
    * :mod:`.filesystem` - Dictionary-backed file system
    * :mod:`.environment` - Dictionary-backed process environment and env file parser
    * :mod:`.config` - In-memory configuration pass runner and settings adapters
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    IN_MEMORY_ROOT,
    InMemoryConfigure,
    display_config_in_memory,
    get_settings_in_memory,
)
from .environment import InMemoryEnvironment, dotenv_parser_for
from .filesystem import InMemoryFileSystem
from .logging import init_logging_in_memory

# Static conformance assertions
if TYPE_CHECKING:
    from ...application.ports import (
        Configure,
        DisplayConfig,
        FileSystem,
        GetSettings,
        InitLogging,
        ProcessEnvironment,
    )

    _assert_configure: Configure = InMemoryConfigure()
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_filesystem: FileSystem = InMemoryFileSystem()
    _assert_environment: ProcessEnvironment = InMemoryEnvironment()
    _assert_get_settings: GetSettings = get_settings_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory

__all__ = [
    "IN_MEMORY_ROOT",
    "InMemoryConfigure",
    "InMemoryEnvironment",
    "InMemoryFileSystem",
    "display_config_in_memory",
    "dotenv_parser_for",
    "get_settings_in_memory",
    "init_logging_in_memory",
]
