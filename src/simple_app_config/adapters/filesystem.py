"""Local file system adapter built on :mod:`pathlib`."""

from __future__ import annotations

from pathlib import Path


class LocalFileSystem:
    """Satisfies the ``FileSystem`` port against the real disk.

    Example:
        >>> fs = LocalFileSystem()
        >>> fs.resolve(Path(".")).is_absolute()
        True
    """

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def resolve(self, path: Path) -> Path:
        return path.resolve()


__all__ = ["LocalFileSystem"]
