"""Application ports: Protocol definitions for the collaborators the engine consumes.

The configuration engine never touches the file system or ``os.environ``
directly. It talks to the :class:`FileSystem`, :class:`ProcessEnvironment`
and :class:`ParseDotenv` ports; production and in-memory adapters satisfy
them via structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters. CLI service ports (``Configure``,
    ``InspectSources``, ``GetSettings``, ``DisplayConfig``, ``InitLogging``)
    import infrastructure types under ``TYPE_CHECKING`` only.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from ..domain.enums import OutputFormat

if TYPE_CHECKING:
    from lib_layered_config import Config

    from .resolver import Verdict
    from .session import Configuration


class FileSystem(Protocol):
    """Read-only file access used by the resolver and the document loader."""

    def exists(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    def read_text(self, path: Path) -> str: ...

    def resolve(self, path: Path) -> Path:
        """Return the canonical absolute form of *path*."""
        ...


class ProcessEnvironment(Protocol):
    """Access to the process-wide environment variables."""

    def get_all(self) -> Mapping[str, str]: ...

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class ParseDotenv(Protocol):
    """Parse a ``KEY=value`` environment file into a flat mapping."""

    def __call__(self, path: Path) -> dict[str, str]: ...


class Configure(Protocol):
    """Run (or reuse) a configuration pass."""

    def __call__(
        self,
        *,
        force: bool = ...,
        argv: Sequence[str] | None = ...,
        project_root: Path | None = ...,
    ) -> Configuration: ...


class InspectSources(Protocol):
    """Report every candidate path of every source with its verdict."""

    def __call__(
        self,
        *,
        argv: Sequence[str] | None = ...,
        project_root: Path | None = ...,
    ) -> dict[str, list[Verdict]]: ...


class GetSettings(Protocol):
    """Load the command-line tool's own layered settings."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Display a resolved configuration in the requested format."""

    def __call__(
        self,
        configuration: Configuration,
        *,
        output_format: OutputFormat = ...,
        section: str | None = ...,
    ) -> None: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided settings."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "Configure",
    "DisplayConfig",
    "FileSystem",
    "GetSettings",
    "InitLogging",
    "InspectSources",
    "ParseDotenv",
    "ProcessEnvironment",
]
