"""In-memory configuration adapters for testing.

Provides callables that satisfy the same Protocols as the production
adapters but run against an :class:`InMemoryFileSystem` and an
:class:`InMemoryEnvironment` instead of the disk and ``os.environ``.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from lib_layered_config import Config

from ...application.session import Configuration, ConfigurationCache
from ...domain.enums import OutputFormat
from .environment import InMemoryEnvironment, dotenv_parser_for
from .filesystem import InMemoryFileSystem

#: Project root used when a test does not pass one.
IN_MEMORY_ROOT = Path("/app")


class InMemoryConfigure(ConfigurationCache):
    """Cached configuration pass over in-memory ports.

    Example:
        >>> fs = InMemoryFileSystem({"/app/config/default.json": '{"port": 80}'})
        >>> configure = InMemoryConfigure(fs, InMemoryEnvironment())
        >>> configure().get("port")
        80
        >>> configure() is configure()
        True
    """

    filesystem: InMemoryFileSystem
    environment: InMemoryEnvironment

    def __init__(
        self,
        filesystem: InMemoryFileSystem | None = None,
        environment: InMemoryEnvironment | None = None,
        *,
        argv: Sequence[str] = (),
        project_root: Path = IN_MEMORY_ROOT,
    ) -> None:
        files = filesystem if filesystem is not None else InMemoryFileSystem()
        default_argv = tuple(argv)
        super().__init__(
            filesystem=files,
            environment=environment if environment is not None else InMemoryEnvironment(),
            parse_dotenv=dotenv_parser_for(files),
            default_argv=lambda: default_argv,
            default_root=lambda: project_root,
        )


def get_settings_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """Return an empty in-memory Config."""
    return Config({}, {})


def display_config_in_memory(
    configuration: Configuration,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
) -> None:
    """No-op display; satisfies the DisplayConfig protocol."""


__all__ = [
    "IN_MEMORY_ROOT",
    "InMemoryConfigure",
    "display_config_in_memory",
    "get_settings_in_memory",
]
