"""Compaction: collapse chains of single-child wrapper elements.

A *container* is a node with exactly one child, no attributes and no
character data.  A field referring to a container is rewritten to refer to
the first non-container node reached by repeatedly following the sole child,
and its serialization path becomes the ``>``-joined element names along the
way::

    <a><d><b/></d></a>          field "b", path "d>b"

The schema graph can be cyclic (named-types mode aliases nodes by name), so
the walk carries a visited set and stops at the point of recurrence.  When
the recurrence is a direct self-loop, the path repeats the node's name once
per observed self-nesting::

    <a><b><b><b/></b></b></a>   field "b", path "b>b>b", repeated
"""

from __future__ import annotations

from dataclasses import dataclass

from xmlshape.schema.names import QName
from xmlshape.schema.nodes import SchemaNode

__all__ = ["CompactedChain", "compact_chain"]


@dataclass(frozen=True, slots=True)
class CompactedChain:
    """Result of walking a container chain.

    Attributes:
        target:   Node the compacted field refers to.
        names:    Element names along the chain, starting with the walk's
                  start node.
        repeated: A link after the first is repeated, or the walk ended on a
                  self-loop.
        optional: A link after the first is optional (self-loop links
                  excluded).
        cyclic:   The walk stopped because the chain recurred.
    """

    target: SchemaNode
    names: tuple[QName, ...]
    repeated: bool = False
    optional: bool = False
    cyclic: bool = False

    @property
    def path(self) -> str:
        """Serialization path tag, e.g. ``"d>b"``."""
        return ">".join(name.local for name in self.names)

    @property
    def compacted(self) -> bool:
        """True when at least one container was elided."""
        return len(self.names) > 1


def compact_chain(start: SchemaNode) -> CompactedChain:
    """Walk ``start``'s sole-child chain to the first non-container node.

    A non-container ``start`` yields a trivial chain targeting itself.
    """
    names = [start.name]
    visited = {start}
    node = start
    repeated = False
    optional = False
    cyclic = False
    while node.is_container():
        child_name, child = next(iter(node.children.items()))
        if child is node:
            names.extend([node.name] * node.self_nesting_depth)
            repeated = True
            cyclic = True
            break
        if child in visited:
            cyclic = True
            break
        if child_name in node.repeated_children:
            repeated = True
        if child_name in node.optional_children:
            optional = True
        names.append(child_name)
        visited.add(child)
        node = child
    return CompactedChain(
        target=node,
        names=tuple(names),
        repeated=repeated,
        optional=optional,
        cyclic=cyclic,
    )
