"""``--set SECTION.KEY=VALUE`` overrides for the tool's own settings.

Keys use the same dotted syntax as configuration lookups, so ``\\.``
keeps a dot inside one key segment. Values are decoded as JSON when they
parse, otherwise they stay strings.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import orjson
from lib_layered_config import Config

from ...domain.keys import split_key


@dataclass(frozen=True, slots=True)
class SettingOverride:
    """One parsed ``--set`` argument."""

    path: tuple[str, ...]
    value: Any

    @property
    def section(self) -> str:
        return self.path[0]


def parse_override(raw: str) -> SettingOverride:
    """Parse ``SECTION.KEY[.SUBKEY...]=VALUE``.

    Raises:
        ValueError: If ``=`` is missing, the key has no section, or a key
            segment is empty.

    Examples:
        >>> parse_override("lib_log_rich.console_level=DEBUG")
        SettingOverride(path=('lib_log_rich', 'console_level'), value='DEBUG')
        >>> parse_override("lib_log_rich.payload_limits.max_chars=8192").value
        8192
        >>> parse_override("novalue")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: Invalid override 'novalue': must contain '='
    """
    key, sep, text = raw.partition("=")
    if not sep:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")
    path = split_key(key)
    if len(path) < 2:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")
    if not all(path):
        raise ValueError(f"Invalid override {raw!r}: key contains an empty segment")
    return SettingOverride(path=path, value=decode_value(text))


def decode_value(text: str) -> Any:
    """Decode *text* as JSON, falling back to the text itself.

    Examples:
        >>> decode_value("true"), decode_value("3.5"), decode_value("null")
        (True, 3.5, None)
        >>> decode_value("DEBUG")
        'DEBUG'
        >>> decode_value("")
        ''
    """
    if not text:
        return text
    try:
        return orjson.loads(text)
    except orjson.JSONDecodeError:
        return text


def nest_overrides(overrides: Iterable[SettingOverride]) -> dict[str, Any]:
    """Fold parsed overrides into one nested mapping; later overrides win.

    Raises:
        TypeError: If an override descends into a key that already holds a value.

    Example:
        >>> nest_overrides([parse_override("s.a.b=1"), parse_override("s.a.c=2")])
        {'s': {'a': {'b': 1, 'c': 2}}}
    """
    nested: dict[str, Any] = {}
    for override in overrides:
        node = nested
        for segment in override.path[:-1]:
            child = node.setdefault(segment, {})
            if not isinstance(child, dict):
                raise TypeError(f"Cannot set {'.'.join(override.path)}: {segment!r} already holds a value")
            node = child
        node[override.path[-1]] = override.value
    return nested


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Return *config* with every ``--set`` override merged in.

    Raises:
        ValueError: If an override is malformed.

    Examples:
        >>> cfg = Config({"s": {"k": 1, "keep": True}}, {})
        >>> apply_overrides(cfg, ("s.k=2",))["s"]["k"]
        2
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config
    return config.with_overrides(nest_overrides(parse_override(raw) for raw in raw_overrides))


__all__ = [
    "SettingOverride",
    "apply_overrides",
    "decode_value",
    "nest_overrides",
    "parse_override",
]
