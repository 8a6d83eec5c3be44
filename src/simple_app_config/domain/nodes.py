"""Configuration tree nodes.

A configuration tree is built from exactly three node kinds: scalars,
sequences, and mappings. Consumers branch on these three classes only.

Contents:
    * :class:`ScalarNode` - a converted leaf value.
    * :class:`SequenceNode` - an ordered list of nodes.
    * :class:`MappingNode` - unique string keys to nodes.
    * :func:`to_python` - unwrap a node into plain Python values.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class ScalarNode:
    """Leaf holding a JSON scalar or a value produced by the converter."""

    value: Any


@dataclass(frozen=True, slots=True)
class SequenceNode:
    """Ordered list of child nodes built from a JSON array."""

    items: tuple[ConfigNode, ...] = ()

    def __iter__(self) -> Iterator[ConfigNode]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class MappingNode:
    """String-keyed children built from a JSON object.

    Example:
        >>> node = MappingNode({"port": ScalarNode(8080)})
        >>> "port" in node
        True
        >>> node.get("port")
        ScalarNode(value=8080)
        >>> node.get("host") is None
        True
    """

    entries: Mapping[str, ConfigNode] = field(default_factory=dict)

    def get(self, key: str) -> ConfigNode | None:
        return self.entries.get(key)

    def keys(self) -> Iterator[str]:
        return iter(self.entries)

    def items(self) -> Iterator[tuple[str, ConfigNode]]:
        return iter(self.entries.items())

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)


ConfigNode = Union[ScalarNode, SequenceNode, MappingNode]
"""Closed union of the three node kinds."""


def to_python(node: ConfigNode) -> Any:
    """Return *node* as plain Python values.

    Mappings become dicts, sequences become lists, scalars yield their value.
    Containers made by the converter (objects, arrays, sets, maps) are
    copied, so changing the result never changes the tree.

    Example:
        >>> tree = MappingNode({"hosts": SequenceNode((ScalarNode("a"), ScalarNode("b")))})
        >>> to_python(tree)
        {'hosts': ['a', 'b']}
    """
    if isinstance(node, MappingNode):
        return {key: to_python(child) for key, child in node.items()}
    if isinstance(node, SequenceNode):
        return [to_python(child) for child in node]
    if isinstance(node, ScalarNode):
        if isinstance(node.value, (dict, list, set)):
            return copy.deepcopy(node.value)
        return node.value
    raise TypeError(f"Unknown configuration node: {type(node).__name__}")


__all__ = [
    "ConfigNode",
    "MappingNode",
    "ScalarNode",
    "SequenceNode",
    "to_python",
]
