"""First-writer-wins merge of configuration trees."""

from __future__ import annotations

from .nodes import ConfigNode, MappingNode


def merge_defaults(target: MappingNode, defaults: MappingNode) -> MappingNode:
    """Return *target* with gaps filled from *defaults*.

    A key already present in *target* is never overwritten. When both sides
    hold a mapping under the same key, the rule applies again one level down.
    Merging the same defaults twice yields the same tree as merging once.

    Example:
        >>> from simple_app_config.domain.nodes import ScalarNode, to_python
        >>> env = MappingNode({"db": MappingNode({"host": ScalarNode("prod")})})
        >>> base = MappingNode({"db": MappingNode({"host": ScalarNode("local"), "port": ScalarNode(5432)}),
        ...                     "debug": ScalarNode(False)})
        >>> to_python(merge_defaults(env, base))
        {'db': {'host': 'prod', 'port': 5432}, 'debug': False}
    """
    merged: dict[str, ConfigNode] = dict(target.entries)
    for key, default in defaults.items():
        existing = merged.get(key)
        if existing is None:
            merged[key] = default
        elif isinstance(existing, MappingNode) and isinstance(default, MappingNode):
            merged[key] = merge_defaults(existing, default)
    return MappingNode(merged)


__all__ = ["merge_defaults"]
