"""Dotted configuration keys with backslash escapes.

``a.b`` addresses key ``b`` inside mapping ``a``; ``a\\.b`` addresses the
single key ``a.b``. A doubled backslash stands for one literal backslash.
"""

from __future__ import annotations

from .errors import UndefinedConfigValueError
from .nodes import ConfigNode, MappingNode


def split_key(dotted_key: str) -> tuple[str, ...]:
    """Split *dotted_key* on unescaped dots and unescape each segment.

    Examples:
        >>> split_key("server.port")
        ('server', 'port')
        >>> split_key("a\\\\.b")
        ('a.b',)
        >>> split_key("a\\\\.b.c")
        ('a.b', 'c')
    """
    segments: list[str] = []
    current: list[str] = []
    chars = iter(dotted_key)
    for char in chars:
        if char == "\\":
            escaped = next(chars, None)
            if escaped in (".", "\\"):
                current.append(escaped)
            else:
                current.append(char)
                if escaped is not None:
                    current.append(escaped)
        elif char == ".":
            segments.append("".join(current))
            current = []
        else:
            current.append(char)
    segments.append("".join(current))
    return tuple(segments)


def join_key(segments: tuple[str, ...] | list[str]) -> str:
    """Inverse of :func:`split_key`.

    Example:
        >>> join_key(("a.b", "c"))
        'a\\\\.b.c'
    """
    return ".".join(segment.replace("\\", "\\\\").replace(".", "\\.") for segment in segments)


def resolve_node(tree: MappingNode, dotted_key: str) -> ConfigNode:
    """Walk *tree* segment by segment and return the addressed node.

    Raises:
        UndefinedConfigValueError: If any segment is missing or an
            intermediate node is not a mapping.
    """
    node: ConfigNode = tree
    for segment in split_key(dotted_key):
        if not isinstance(node, MappingNode):
            raise UndefinedConfigValueError(dotted_key)
        child = node.get(segment)
        if child is None:
            raise UndefinedConfigValueError(dotted_key)
        node = child
    return node


__all__ = ["join_key", "resolve_node", "split_key"]
