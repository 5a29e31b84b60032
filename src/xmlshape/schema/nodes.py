"""SchemaNode and SchemaGraph: the mutable schema built during observation.

A ``SchemaNode`` is the observed shape of one normalized element name.  The
``SchemaGraph`` owns the top-level registry and the global discovery
counter.  In named-types mode the registry holds *every* node, so the same
element name under different parents resolves to one shared node; an element
nesting itself then produces a genuine self-loop (``node.children[name] is
node``), which makes the graph cyclic.

Nodes compare and hash by identity (``eq=False``): merging relies on "same
normalized name in the same scope => same object", never on structural
equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from xmlshape.schema.names import QName
from xmlshape.schema.values import ValueClassifier

__all__ = ["SchemaGraph", "SchemaNode"]


@dataclass(slots=True, eq=False)
class SchemaNode:
    """Observed shape of one normalized element identity.

    Attributes:
        name:               Normalized name of the element.
        attributes:         Attribute name -> classifier, in first-seen order.
        char_data:          Classifier for text directly inside the element.
        children:           Child name -> child node.  May contain ``self``.
        optional_children:  Child names absent from at least one occurrence.
        repeated_children:  Child names seen more than once in one occurrence.
        child_order:        Child name -> global sequence number of the first
                            time that child was seen under this node.
        discovery_order:    Global sequence number of this node's creation.
        is_root:            First top-level element of the first document.
        self_nesting_depth: Number of direct self-loop observations.
        occurrences:        Number of occurrences observed.
        attribute_occurrences: Occurrences whose attributes were observed.
        child_presence:     Child name -> occurrences containing that child.
        attribute_presence: Attribute name -> occurrences containing it.
    """

    name: QName
    discovery_order: int = 0
    is_root: bool = False
    attributes: dict[QName, ValueClassifier] = field(default_factory=dict)
    char_data: ValueClassifier = field(default_factory=ValueClassifier)
    # repr=False: children may point back at this node.
    children: dict[QName, SchemaNode] = field(default_factory=dict, repr=False)
    optional_children: set[QName] = field(default_factory=set)
    repeated_children: set[QName] = field(default_factory=set)
    child_order: dict[QName, int] = field(default_factory=dict)
    self_nesting_depth: int = 0
    occurrences: int = 0
    attribute_occurrences: int = 0
    child_presence: dict[QName, int] = field(default_factory=dict)
    attribute_presence: dict[QName, int] = field(default_factory=dict)

    def is_container(self) -> bool:
        """True for exactly one child, no attributes and no character data."""
        return (
            len(self.children) == 1
            and not self.attributes
            and self.char_data.observations == 0
        )

    def is_simple(self) -> bool:
        """True when the node carries nothing but (possibly empty) text."""
        return not self.attributes and not self.children

    def sole_child(self) -> SchemaNode:
        """Return the only child of a container node.

        Raises:
            ValueError: If the node does not have exactly one child.
        """
        if len(self.children) != 1:
            msg = f"{self.name}: expected exactly one child, got {len(self.children)}"
            raise ValueError(msg)
        return next(iter(self.children.values()))


class SchemaGraph:
    """Registry of schema nodes plus the global discovery counter.

    In full-tree mode ``types`` holds only top-level elements and each parent
    owns its children.  In named-types mode ``types`` holds every node and
    children are shared through it.

    Example::

        graph = SchemaGraph(named_types=True)
        a = graph.resolve_top_level(QName("a"))
        b = graph.resolve_child(a, QName("b"))
        assert graph.types[QName("b")] is b
    """

    def __init__(self, named_types: bool = False) -> None:
        self.named_types: bool = named_types
        self.types: dict[QName, SchemaNode] = {}
        self._order: int = 0
        self._root_seen: bool = False

    def next_order(self) -> int:
        """Return the next global sequence number."""
        self._order += 1
        return self._order

    def _new_node(self, name: QName) -> SchemaNode:
        return SchemaNode(name=name, discovery_order=self.next_order())

    def resolve_top_level(self, name: QName) -> SchemaNode:
        """Return the registry node for a top-level element, creating it.

        The first top-level element ever resolved on this graph is flagged
        ``is_root``.
        """
        node = self.types.get(name)
        if node is None:
            node = self._new_node(name)
            self.types[name] = node
        if not self._root_seen:
            self._root_seen = True
            node.is_root = True
        return node

    def resolve_child(self, parent: SchemaNode, name: QName) -> SchemaNode:
        """Return ``parent``'s child node for ``name``, creating it.

        Records the child's first-seen order under ``parent`` and counts a
        self-loop when the resolved child is ``parent`` itself.
        """
        child = parent.children.get(name)
        if child is None:
            if self.named_types:
                child = self.types.get(name)
                if child is None:
                    child = self._new_node(name)
                    self.types[name] = child
            else:
                child = self._new_node(name)
            parent.children[name] = child
        if child is parent:
            parent.self_nesting_depth += 1
        if name not in parent.child_order:
            parent.child_order[name] = self.next_order()
        return child

    def __len__(self) -> int:
        return len(self.types)
