"""Process environment accessor backed by ``os.environ``."""

from __future__ import annotations

import os
from collections.abc import Mapping


class OsEnvironment:
    """Read and write the real process environment.

    Example:
        >>> env = OsEnvironment()
        >>> env.set("SIMPLE_APP_CONFIG_DOCTEST", "1")
        >>> env.get("SIMPLE_APP_CONFIG_DOCTEST")
        '1'
        >>> env.delete("SIMPLE_APP_CONFIG_DOCTEST")
        >>> env.get("SIMPLE_APP_CONFIG_DOCTEST") is None
        True
    """

    def get_all(self) -> Mapping[str, str]:
        return dict(os.environ)

    def get(self, key: str) -> str | None:
        return os.environ.get(key)

    def set(self, key: str, value: str) -> None:
        os.environ[key] = value

    def delete(self, key: str) -> None:
        os.environ.pop(key, None)


__all__ = ["OsEnvironment"]
