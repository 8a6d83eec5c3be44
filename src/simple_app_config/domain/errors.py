"""Domain-specific exceptions for typed error handling at boundaries.

Every error carries an :class:`ErrorKind` so callers can dispatch on the
kind of failure instead of catching individual classes.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import ClassVar


class ErrorKind(str, Enum):
    """Failure categories raised by a configuration pass or a lookup.

    Example:
        >>> ErrorKind.UNDEFINED_ENV_VAR.value
        'undefined-env-var'
    """

    UNDEFINED_ENV_VAR = "undefined-env-var"
    UNSUPPORTED_TYPE = "unsupported-type"
    TYPE_CONVERSION = "type-conversion"
    UNDEFINED_CONFIG_VALUE = "undefined-config-value"
    CONFIG_FILE = "config-file"


class SimpleAppConfigError(Exception):
    """Base class for every error raised by the configuration engine."""

    kind: ClassVar[ErrorKind]


class UndefinedEnvVarError(SimpleAppConfigError):
    """A referenced environment variable has no value.

    Example:
        >>> err = UndefinedEnvVarError("DB_HOST")
        >>> str(err)
        'The environment variable DB_HOST is undefined.'
        >>> err.kind is ErrorKind.UNDEFINED_ENV_VAR
        True
    """

    kind = ErrorKind.UNDEFINED_ENV_VAR

    def __init__(self, name: str) -> None:
        super().__init__(f"The environment variable {name} is undefined.")
        self.name = name


class UnsupportedTypeError(SimpleAppConfigError):
    """A type or subtype token is not one of the recognised tokens.

    Example:
        >>> str(UnsupportedTypeError("tuple"))
        "Converting to type 'tuple' is not supported."
    """

    kind = ErrorKind.UNSUPPORTED_TYPE

    def __init__(self, type_token: str) -> None:
        super().__init__(f"Converting to type '{type_token}' is not supported.")
        self.type_token = type_token


class TypeConversionError(SimpleAppConfigError, ValueError):
    """A value was present but could not be converted to the requested type.

    Inherits from ValueError so generic ``except ValueError`` handlers at
    the CLI boundary keep working.

    Example:
        >>> err = TypeConversionError("abc", "number")
        >>> str(err)
        'The string with value abc cannot be converted to type number.'
        >>> isinstance(err, ValueError)
        True
    """

    kind = ErrorKind.TYPE_CONVERSION

    def __init__(self, value: str, target_type: str) -> None:
        super().__init__(f"The string with value {value} cannot be converted to type {target_type}.")
        self.value = value
        self.target_type = target_type


class UndefinedConfigValueError(SimpleAppConfigError, LookupError):
    """A dotted lookup key does not resolve to a configuration node.

    Example:
        >>> str(UndefinedConfigValueError("missing.key"))
        "The configuration value 'missing.key' is undefined."
    """

    kind = ErrorKind.UNDEFINED_CONFIG_VALUE

    def __init__(self, key: str) -> None:
        super().__init__(f"The configuration value '{key}' is undefined.")
        self.key = key


class ConfigFileError(SimpleAppConfigError):
    """A resolved configuration document is not a well-formed JSON object."""

    kind = ErrorKind.CONFIG_FILE

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Configuration file {path} is invalid: {reason}")
        self.path = path
        self.reason = reason


__all__ = [
    "ConfigFileError",
    "ErrorKind",
    "SimpleAppConfigError",
    "TypeConversionError",
    "UndefinedConfigValueError",
    "UndefinedEnvVarError",
    "UnsupportedTypeError",
]
