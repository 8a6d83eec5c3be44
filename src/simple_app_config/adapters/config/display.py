"""Display a resolved configuration through lib_layered_config.

Converted values (dates, patterns, sets, maps with non-string keys) are
first rendered into JSON-compatible data, then wrapped into a
lib_layered_config :class:`Config` and handed to its Rich-styled
``display_config``. Pending log output is flushed first so it does not
interleave with the rendered tree.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _lib_display
from rich.console import Console

from ...application.session import Configuration
from ...domain.enums import OutputFormat


def to_display_value(value: Any) -> Any:
    """Return *value* as JSON-compatible data.

    Examples:
        >>> to_display_value({"when": datetime(2024, 1, 2), 1: {"b", "a"}})
        {'when': '2024-01-02T00:00:00', '1': ['a', 'b']}
        >>> to_display_value(re.compile("^a+$"))
        '^a+$'
    """
    if isinstance(value, Mapping):
        return {str(key): to_display_value(child) for key, child in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted((to_display_value(item) for item in value), key=repr)
    if isinstance(value, (list, tuple)):
        return [to_display_value(item) for item in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, re.Pattern):
        return value.pattern
    return value


def display_config(
    configuration: Configuration,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
) -> None:
    """Render the merged tree of *configuration*.

    Args:
        configuration: Result of a configuration pass.
        output_format: TOML-like human output or JSON.
        section: Optional dotted key; only the addressed value is rendered,
            under the key as its heading.
        console: Optional Rich console, mostly for tests.

    Raises:
        UndefinedConfigValueError: If *section* does not exist.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    if section:
        data = {section: to_display_value(configuration.get(section))}
    else:
        data = to_display_value(configuration.as_dict())
    lib_format = LibOutputFormat(output_format.value)
    _lib_display(Config(data, {}), output_format=lib_format, profile=configuration.environment, console=console)


__all__ = ["display_config", "to_display_value"]
