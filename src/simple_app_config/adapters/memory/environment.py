"""In-memory process environment and env file parser for tests."""

from __future__ import annotations

import io
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values

from ...application.ports import FileSystem, ParseDotenv


class InMemoryEnvironment:
    """Dictionary-backed ``ProcessEnvironment`` port.

    Example:
        >>> env = InMemoryEnvironment({"NODE_ENV": "production"})
        >>> env.get("NODE_ENV")
        'production'
        >>> env.delete("NODE_ENV")
        >>> env.get_all()
        {}
    """

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self.variables: dict[str, str] = dict(initial or {})

    def get_all(self) -> Mapping[str, str]:
        return dict(self.variables)

    def get(self, key: str) -> str | None:
        return self.variables.get(key)

    def set(self, key: str, value: str) -> None:
        self.variables[key] = value

    def delete(self, key: str) -> None:
        self.variables.pop(key, None)


def dotenv_parser_for(filesystem: FileSystem) -> ParseDotenv:
    """Return an env file parser that reads through *filesystem*.

    Example:
        >>> from simple_app_config.adapters.memory.filesystem import InMemoryFileSystem
        >>> fs = InMemoryFileSystem({"/app/.env.development": "PORT=8080\\nEMPTY\\n"})
        >>> dotenv_parser_for(fs)(Path("/app/.env.development"))
        {'PORT': '8080'}
    """

    def parse(path: Path) -> dict[str, str]:
        stream = io.StringIO(filesystem.read_text(path))
        parsed = dotenv_values(stream=stream, interpolate=False)
        return {key: value for key, value in parsed.items() if value is not None}

    return parse


__all__ = ["InMemoryEnvironment", "dotenv_parser_for"]
