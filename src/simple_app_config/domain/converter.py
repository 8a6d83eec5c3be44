"""Typed value conversion for environment variable strings.

Converts raw strings into one of the nine types named by :class:`DataType`.
Container types (array, set, map) convert their elements with the nestable
subset only, so a type expression never nests containers inside containers.

Contents:
    * :func:`convert` - table-driven entry point keyed by type token.
    * :func:`convert_nestable` - convert one value to a nestable type.
    * ``to_*`` helpers - one converter per type.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Final

import orjson

from .enums import DataType
from .errors import TypeConversionError, UnsupportedTypeError

TRUTHY_VALUES: Final[frozenset[str]] = frozenset({"t", "true", "y", "yes", "on"})
FALSY_VALUES: Final[frozenset[str]] = frozenset({"f", "false", "n", "no", "off"})

#: Textual date layouts tried after ISO-8601 and RFC 2822.
DATE_FORMATS: Final[tuple[str, ...]] = (
    "%a %b %d %Y",
    "%a %b %d %Y %H:%M:%S",
    "%b %d %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
)


def to_string(value: str) -> str:
    return value


def to_number(value: str) -> int | float:
    """Convert *value* to an int when it is an integer literal, else a float.

    Examples:
        >>> to_number("5")
        5
        >>> to_number(" 2.5 ")
        2.5
        >>> to_number("1e3")
        1000.0
        >>> to_number("100ABC")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        TypeConversionError: The string with value 100ABC cannot be converted to type number.
    """
    text = value.strip()
    if not text or "_" in text:
        raise TypeConversionError(value, DataType.NUMBER.value)
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError as exc:
        raise TypeConversionError(value, DataType.NUMBER.value) from exc
    if not math.isfinite(number):
        raise TypeConversionError(value, DataType.NUMBER.value)
    return number


def to_boolean(value: str) -> bool:
    """Convert a truthy or falsy word to a bool, ignoring case.

    Examples:
        >>> to_boolean("YES")
        True
        >>> to_boolean("off")
        False
    """
    lowered = value.lower()
    if lowered in TRUTHY_VALUES:
        return True
    if lowered in FALSY_VALUES:
        return False
    raise TypeConversionError(value, DataType.BOOLEAN.value)


def to_date(value: str) -> datetime:
    """Convert an epoch-millisecond timestamp or a date string to a datetime.

    Numeric input is read as milliseconds since the Unix epoch. Other input
    is tried as ISO-8601, RFC 2822, and then :data:`DATE_FORMATS`. Results
    without a timezone are taken as UTC.

    Examples:
        >>> to_date("1000").isoformat()
        '1970-01-01T00:00:01+00:00'
        >>> to_date("2024-01-31T10:00:00Z").isoformat()
        '2024-01-31T10:00:00+00:00'
        >>> to_date("Wed Dec 31 1969").date().isoformat()
        '1969-12-31'
    """
    try:
        millis = to_number(value)
    except TypeConversionError:
        pass
    else:
        try:
            return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise TypeConversionError(value, DataType.DATE.value) from exc

    parsed = _parse_date_text(value.strip())
    if parsed is None:
        raise TypeConversionError(value, DataType.DATE.value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_date_text(text: str) -> datetime | None:
    if not text:
        return None
    iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        pass
    for layout in DATE_FORMATS:
        try:
            return datetime.strptime(text, layout)
        except ValueError:
            continue
    return None


def to_regexp(value: str) -> re.Pattern[str]:
    """Compile *value* into a regular expression.

    Example:
        >>> bool(to_regexp("[0-9]").search("9"))
        True
    """
    try:
        return re.compile(value)
    except re.error as exc:
        raise TypeConversionError(value, DataType.REGEXP.value) from exc


def to_object(value: str) -> Any:
    """Parse *value* as JSON.

    Example:
        >>> to_object('{"a": [1, 2]}')
        {'a': [1, 2]}
    """
    try:
        return orjson.loads(value)
    except orjson.JSONDecodeError as exc:
        raise TypeConversionError(value, DataType.OBJECT.value) from exc


_NESTABLE_CONVERTERS: Final[dict[DataType, Callable[[str], Any]]] = {
    DataType.STRING: to_string,
    DataType.NUMBER: to_number,
    DataType.BOOLEAN: to_boolean,
    DataType.DATE: to_date,
    DataType.REGEXP: to_regexp,
    DataType.OBJECT: to_object,
}


def _nestable_type(token: str | None) -> DataType:
    """Resolve a subtype token, defaulting to string; containers are rejected."""
    if token is None:
        return DataType.STRING
    data_type = DataType.parse(token)
    if data_type is None or not data_type.nestable:
        raise UnsupportedTypeError(token)
    return data_type


def _already_converted(data_type: DataType, item: object) -> bool:
    """True when a JSON-decoded *item* already has the requested type."""
    if data_type is DataType.STRING:
        return isinstance(item, str)
    if data_type is DataType.NUMBER:
        return isinstance(item, (int, float)) and not isinstance(item, bool)
    if data_type is DataType.BOOLEAN:
        return isinstance(item, bool)
    if data_type is DataType.OBJECT:
        return not isinstance(item, str)
    return False


def _as_text(item: object) -> str:
    if isinstance(item, str):
        return item
    return orjson.dumps(item).decode()


def _convert_element(data_type: DataType, item: object) -> Any:
    if _already_converted(data_type, item):
        return item
    return _NESTABLE_CONVERTERS[data_type](_as_text(item))


def convert_nestable(type_token: str, value: object) -> Any:
    """Convert *value* to a nestable type (string, number, boolean, date, regexp, object).

    Non-string values are kept when they already have the requested JSON
    type and are otherwise converted from their JSON text.

    Examples:
        >>> convert_nestable("number", "5")
        5
        >>> convert_nestable("string", 5)
        '5'
        >>> convert_nestable("array", "[]")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        UnsupportedTypeError: Converting to type 'array' is not supported.
    """
    return _convert_element(_nestable_type(type_token), value)


def _parse_json(value: str, target: str) -> Any:
    try:
        return orjson.loads(value)
    except orjson.JSONDecodeError as exc:
        raise TypeConversionError(value, target) from exc


def to_array(value: str, subtype: str | None = None) -> list[Any]:
    """Convert a JSON array string, converting every element to *subtype*.

    Examples:
        >>> to_array("[1, 2, 3]", "number")
        [1, 2, 3]
        >>> to_array('["a", 1]')
        ['a', '1']
    """
    element_type = _nestable_type(subtype)
    target = f"{DataType.ARRAY.value}<{element_type.value}>"
    parsed = _parse_json(value, target)
    if not isinstance(parsed, list):
        raise TypeConversionError(value, target)
    try:
        return [_convert_element(element_type, item) for item in parsed]
    except TypeConversionError as exc:
        raise TypeConversionError(value, target) from exc


def to_set(value: str, subtype: str | None = None) -> set[Any]:
    """Convert a JSON array string into a set of *subtype* elements.

    Example:
        >>> sorted(to_set('["b", "a", "b"]'))
        ['a', 'b']
    """
    element_type = _nestable_type(subtype)
    target = f"{DataType.SET.value}<{element_type.value}>"
    try:
        items = to_array(value, element_type.value)
    except TypeConversionError as exc:
        raise TypeConversionError(value, target) from exc
    try:
        return set(items)
    except TypeError as exc:
        raise TypeConversionError(value, target) from exc


def to_map(value: str, key_type: str | None = None, value_type: str | None = None) -> dict[Any, Any]:
    """Convert a JSON object string, converting keys and values independently.

    Example:
        >>> to_map('{"1": "true", "2": "off"}', "number", "boolean")
        {1: True, 2: False}
    """
    converted_key_type = _nestable_type(key_type)
    converted_value_type = _nestable_type(value_type)
    target = f"{DataType.MAP.value}<{converted_key_type.value}, {converted_value_type.value}>"
    parsed = _parse_json(value, target)
    if not isinstance(parsed, dict):
        raise TypeConversionError(value, target)
    result: dict[Any, Any] = {}
    try:
        for key, item in parsed.items():
            result[_convert_element(converted_key_type, key)] = _convert_element(converted_value_type, item)
    except (TypeConversionError, TypeError) as exc:
        raise TypeConversionError(value, target) from exc
    return result


_CONVERTERS: Final[dict[DataType, Callable[[str, str | None, str | None], Any]]] = {
    DataType.STRING: lambda raw, _s1, _s2: to_string(raw),
    DataType.NUMBER: lambda raw, _s1, _s2: to_number(raw),
    DataType.BOOLEAN: lambda raw, _s1, _s2: to_boolean(raw),
    DataType.DATE: lambda raw, _s1, _s2: to_date(raw),
    DataType.REGEXP: lambda raw, _s1, _s2: to_regexp(raw),
    DataType.OBJECT: lambda raw, _s1, _s2: to_object(raw),
    DataType.ARRAY: lambda raw, s1, _s2: to_array(raw, s1),
    DataType.SET: lambda raw, s1, _s2: to_set(raw, s1),
    DataType.MAP: to_map,
}


def convert(type_token: str, raw: str, subtype1: str | None = None, subtype2: str | None = None) -> Any:
    """Convert *raw* to the type named by *type_token* (case-insensitive).

    Args:
        type_token: One of string, number, boolean, date, regexp, object,
            array, set, map.
        raw: The string to convert.
        subtype1: Element type for array/set, key type for map.
        subtype2: Value type for map.

    Returns:
        The converted value.

    Raises:
        UnsupportedTypeError: If the type or a subtype token is not recognised.
        TypeConversionError: If *raw* cannot be converted.

    Examples:
        >>> convert("NUMBER", "42")
        42
        >>> convert("map", '{"cat": "test"}', "string", "string")
        {'cat': 'test'}
        >>> convert("tuple", "x")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        UnsupportedTypeError: Converting to type 'tuple' is not supported.
    """
    data_type = DataType.parse(type_token)
    if data_type is None:
        raise UnsupportedTypeError(type_token)
    return _CONVERTERS[data_type](raw, subtype1, subtype2)


__all__ = [
    "DATE_FORMATS",
    "FALSY_VALUES",
    "TRUTHY_VALUES",
    "convert",
    "convert_nestable",
    "to_array",
    "to_boolean",
    "to_date",
    "to_map",
    "to_number",
    "to_object",
    "to_regexp",
    "to_set",
    "to_string",
]
