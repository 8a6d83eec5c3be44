"""Domain layer - pure configuration logic with no I/O or framework dependencies.

Contents:
    * :mod:`.converter` - Typed value conversion
    * :mod:`.enums` - Domain enumerations (DataType, SourceKind, FileType, OutputFormat)
    * :mod:`.errors` - Domain exception types
    * :mod:`.expansion` - ``$NAME::TYPE`` / ``${NAME}`` expansion language
    * :mod:`.keys` - Dotted key handling
    * :mod:`.merge` - First-writer-wins merge
    * :mod:`.nodes` - Configuration tree nodes
"""

from __future__ import annotations

from .converter import convert, convert_nestable
from .enums import DEFAULT_ENVIRONMENT, DEFAULT_ENVIRONMENTS, DataType, FileType, OutputFormat, SourceKind
from .errors import (
    ConfigFileError,
    ErrorKind,
    SimpleAppConfigError,
    TypeConversionError,
    UndefinedConfigValueError,
    UndefinedEnvVarError,
    UnsupportedTypeError,
)
from .expansion import ExpansionExpression, evaluate, expand, parse_expression
from .keys import join_key, resolve_node, split_key
from .merge import merge_defaults
from .nodes import ConfigNode, MappingNode, ScalarNode, SequenceNode, to_python

__all__ = [
    # Conversion
    "convert",
    "convert_nestable",
    # Enums
    "DEFAULT_ENVIRONMENT",
    "DEFAULT_ENVIRONMENTS",
    "DataType",
    "FileType",
    "OutputFormat",
    "SourceKind",
    # Errors
    "ConfigFileError",
    "ErrorKind",
    "SimpleAppConfigError",
    "TypeConversionError",
    "UndefinedConfigValueError",
    "UndefinedEnvVarError",
    "UnsupportedTypeError",
    # Expansion
    "ExpansionExpression",
    "evaluate",
    "expand",
    "parse_expression",
    # Keys
    "join_key",
    "resolve_node",
    "split_key",
    # Merge
    "merge_defaults",
    # Nodes
    "ConfigNode",
    "MappingNode",
    "ScalarNode",
    "SequenceNode",
    "to_python",
]
