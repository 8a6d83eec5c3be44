"""In-memory file system for tests.

Paths are normalised lexically; there are no symlinks, so ``resolve`` only
collapses ``.`` and ``..`` segments.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterable, Mapping
from pathlib import Path, PurePosixPath


def _normalise(path: Path | str) -> Path:
    return Path(posixpath.normpath(PurePosixPath(path).as_posix()))


class InMemoryFileSystem:
    """Dictionary-backed ``FileSystem`` port.

    Args:
        files: Absolute path to file content.
        directories: Extra directories that exist without files in them.

    Example:
        >>> fs = InMemoryFileSystem({"/app/config/default.json": "{}"})
        >>> fs.exists(Path("/app/config")), fs.is_dir(Path("/app/config"))
        (True, True)
        >>> fs.resolve(Path("/app/config/../.env"))
        PosixPath('/app/.env')
    """

    def __init__(self, files: Mapping[str | Path, str] | None = None, directories: Iterable[str | Path] = ()) -> None:
        self._files: dict[Path, str] = {_normalise(path): text for path, text in (files or {}).items()}
        self._directories: set[Path] = {_normalise(path) for path in directories}
        for path in self._files:
            self._directories.update(path.parents)

    def write(self, path: str | Path, text: str) -> None:
        """Add or replace a file."""
        normalised = _normalise(path)
        self._files[normalised] = text
        self._directories.update(normalised.parents)

    def exists(self, path: Path) -> bool:
        normalised = _normalise(path)
        return normalised in self._files or normalised in self._directories

    def is_dir(self, path: Path) -> bool:
        return _normalise(path) in self._directories

    def read_text(self, path: Path) -> str:
        normalised = _normalise(path)
        if normalised in self._directories:
            raise IsADirectoryError(str(path))
        try:
            return self._files[normalised]
        except KeyError:
            raise FileNotFoundError(str(path)) from None

    def resolve(self, path: Path) -> Path:
        return _normalise(path)


__all__ = ["InMemoryFileSystem"]
