"""Type-safe domain enums for type tokens, candidate sources, and output formats."""

from __future__ import annotations

from enum import Enum
from typing import Final


class DataType(str, Enum):
    """Type tokens understood by the typed value converter.

    Inherits from str so members compare equal to their lower-case token.
    Lookups through :meth:`parse` are case-insensitive.

    Example:
        >>> DataType.parse("Map")
        <DataType.MAP: 'map'>
        >>> DataType.NUMBER == "number"
        True
        >>> DataType.parse("tuple") is None
        True
    """

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    REGEXP = "regexp"
    OBJECT = "object"
    ARRAY = "array"
    SET = "set"
    MAP = "map"

    @classmethod
    def parse(cls, token: str) -> DataType | None:
        """Return the member matching *token* ignoring case, or None."""
        try:
            return cls(token.lower())
        except ValueError:
            return None

    @property
    def nestable(self) -> bool:
        """True for types allowed inside array, set, and map conversions."""
        return self not in _CONTAINER_TYPES


_CONTAINER_TYPES: Final[frozenset[DataType]] = frozenset({DataType.ARRAY, DataType.SET, DataType.MAP})


class SourceKind(str, Enum):
    """Where a candidate path came from, highest priority first.

    Example:
        >>> [kind.rank for kind in SourceKind]
        [0, 1, 2]
    """

    CLI_ARGUMENT = "cli-argument"
    ENVIRONMENT_VARIABLE = "environment-variable"
    ENVIRONMENT_DEFAULT = "environment-default"

    @property
    def rank(self) -> int:
        """Priority rank, lower wins."""
        return list(SourceKind).index(self)


class FileType(str, Enum):
    """Supported configuration document extensions."""

    JSON = ".json"


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


#: Recognised environment names when neither ``--env-names`` nor ``ENV_NAMES`` is set.
DEFAULT_ENVIRONMENTS: Final[tuple[str, ...]] = ("development", "testing", "staging", "production")

#: Environment used when neither ``--env`` nor ``NODE_ENV`` is set.
DEFAULT_ENVIRONMENT: Final[str] = "development"


__all__ = [
    "DEFAULT_ENVIRONMENT",
    "DEFAULT_ENVIRONMENTS",
    "DataType",
    "FileType",
    "OutputFormat",
    "SourceKind",
]
