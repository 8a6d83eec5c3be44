"""Document loading: read JSON, expand string leaves, build configuration nodes."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, cast

import orjson

from ..domain.errors import ConfigFileError
from ..domain.expansion import Lookup, expand
from ..domain.nodes import ConfigNode, MappingNode, ScalarNode, SequenceNode
from .ports import FileSystem

logger = logging.getLogger(__name__)

_ESCAPED_KEY_PREFIX = "\\$"


def unescape_key(key: str) -> str:
    """Drop the backslash of a key written as ``\\$name``.

    Example:
        >>> unescape_key("\\\\$ref")
        '$ref'
        >>> unescape_key("plain")
        'plain'
    """
    return key[1:] if key.startswith(_ESCAPED_KEY_PREFIX) else key


def build_node(value: Any, lookup: Lookup) -> ConfigNode:
    """Convert decoded JSON into configuration nodes.

    Arrays become sequences, objects become mappings, strings go through
    the expansion engine, and every other scalar is kept unchanged.

    Example:
        >>> from simple_app_config.domain.nodes import to_python
        >>> to_python(build_node({"port": "$PORT::number", "tags": ["a", 1]}, {"PORT": "80"}.get))
        {'port': 80, 'tags': ['a', 1]}
    """
    if isinstance(value, dict):
        return MappingNode({unescape_key(key): build_node(child, lookup) for key, child in value.items()})
    if isinstance(value, list):
        return SequenceNode(tuple(build_node(child, lookup) for child in value))
    if isinstance(value, str):
        return ScalarNode(expand(value, lookup))
    return ScalarNode(value)


class DocumentLoader:
    """Load configuration documents from a :class:`FileSystem`.

    Args:
        filesystem: Source of document text.
        lookup: Environment lookup used to expand string leaves.
    """

    def __init__(self, filesystem: FileSystem, lookup: Lookup) -> None:
        self._filesystem = filesystem
        self._lookup = lookup

    def load(self, path: Path) -> MappingNode:
        """Read, parse and expand the document at *path*.

        Raises:
            ConfigFileError: If the text is not JSON or its root is not an object.
            UndefinedEnvVarError: If a leaf references an undefined variable.
            UnsupportedTypeError: If a leaf requests an unknown type.
            TypeConversionError: If a variable cannot be converted.
        """
        text = self._filesystem.read_text(path).strip()
        try:
            decoded = orjson.loads(text)
        except orjson.JSONDecodeError as exc:
            raise ConfigFileError(path, str(exc)) from exc
        if not isinstance(decoded, dict):
            raise ConfigFileError(path, f"top-level value must be an object, got {type(decoded).__name__}")
        node = cast(MappingNode, build_node(decoded, self._lookup))
        logger.info("Loaded configuration document", extra={"path": str(path), "keys": len(node)})
        return node


__all__ = ["DocumentLoader", "build_node", "unescape_key"]
