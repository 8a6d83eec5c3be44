"""Cached, write-through view of the process environment.

Contents:
    * :class:`EnvironmentStore` - snapshot cache with typed getters.

System Role:
    Supplies values to the expansion engine. Lookups that miss are read
    from the process environment once and cached, absent values included.
    ``set`` and ``delete`` change the real process environment as well as
    the cache. The store is single-writer and read-mostly; it does no
    locking.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any

from ..domain import converter
from ..domain.errors import UndefinedEnvVarError
from .ports import ProcessEnvironment

logger = logging.getLogger(__name__)


class EnvironmentStore:
    """In-memory mirror of a :class:`ProcessEnvironment`.

    Example:
        >>> from simple_app_config.adapters.memory import InMemoryEnvironment
        >>> store = EnvironmentStore(InMemoryEnvironment({"PORT": "8080"}))
        >>> store.refresh()
        >>> store.get_number("PORT")
        8080
        >>> store.get("MISSING") is None
        True
    """

    def __init__(self, environment: ProcessEnvironment) -> None:
        self._environment = environment
        self._cache: dict[str, str | None] = {}

    def refresh(self) -> None:
        """Clear the cache and reload a full snapshot of the process environment."""
        self._cache.clear()
        self._cache.update(self._environment.get_all())
        logger.debug("Environment cache refreshed", extra={"variables": len(self._cache)})

    def get(self, key: str) -> str | None:
        """Return the value of *key*, or None when it is undefined.

        A miss is read from the process environment and cached, including
        the fact that the variable is undefined.
        """
        if key in self._cache:
            return self._cache[key]
        value = self._environment.get(key)
        self._cache[key] = value
        return value

    def set(self, key: str, value: str) -> None:
        """Set *key* in the process environment and the cache."""
        self._environment.set(key, value)
        self._cache[key] = value

    def delete(self, key: str) -> None:
        """Remove *key* from the process environment and the cache."""
        self._environment.delete(key)
        self._cache.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        """Return the cached variables that are defined."""
        return {key: value for key, value in self._cache.items() if value is not None}

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def get_string(self, key: str) -> str:
        """Return *key* as a string.

        Raises:
            UndefinedEnvVarError: If the variable is undefined.
        """
        value = self.get(key)
        if value is None:
            raise UndefinedEnvVarError(key)
        return value

    def get_number(self, key: str) -> int | float:
        return converter.to_number(self.get_string(key))

    def get_boolean(self, key: str) -> bool:
        return converter.to_boolean(self.get_string(key))

    def get_date(self, key: str) -> datetime:
        return converter.to_date(self.get_string(key))

    def get_regexp(self, key: str) -> re.Pattern[str]:
        return converter.to_regexp(self.get_string(key))

    def get_object(self, key: str) -> Any:
        return converter.to_object(self.get_string(key))

    def get_array(self, key: str, subtype: str | None = None) -> list[Any]:
        """Return *key* as a list; elements default to strings."""
        return converter.to_array(self.get_string(key), subtype)

    def get_set(self, key: str, subtype: str | None = None) -> set[Any]:
        """Return *key* as a set; elements default to strings."""
        return converter.to_set(self.get_string(key), subtype)

    def get_map(self, key: str, key_type: str | None = None, value_type: str | None = None) -> dict[Any, Any]:
        """Return *key* as a dict; keys and values default to strings."""
        return converter.to_map(self.get_string(key), key_type, value_type)


__all__ = ["EnvironmentStore"]
