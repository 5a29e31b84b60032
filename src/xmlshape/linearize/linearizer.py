"""Linearizer: turns a finished SchemaGraph into ordered type declarations.

Architecture:
- Declaration selection: in full-tree mode every top-level element is a
  declaration.  In named-types mode every registry node is promoted, except
  *simple* nodes (no attributes, no children, not the root), whose scalar
  type is inlined at each reference, and, under compaction, non-root
  containers, which are always elided by the fields that refer to them.
- Body construction: an optional element-name field (named root), then
  attributes, then character data, then child elements.  Child fields
  referring to containers are compacted via ``compact_chain``.
- Ordering: DISCOVERY sorts by first-seen sequence numbers; LEXICAL sorts by
  output identifier with the normalized name as tie-break.  Both are total,
  so the output never depends on registry iteration order.
- Conflicts: two fields of one body, or two declarations, with the same
  identifier raise ``NamingConflictError``.  The one tolerated collision is a
  compacted field against a plain field for the node it compacts into: the
  compacted field is kept.

The graph is only read; linearizing the same graph twice with the same
configuration and policy yields equal models.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from xmlshape.config import FieldOrder, SchemaConfig
from xmlshape.errors import NamingConflictError
from xmlshape.identifiers import IdentifierPolicy
from xmlshape.linearize.compaction import CompactedChain, compact_chain
from xmlshape.model import (
    Declaration,
    Field,
    FieldKind,
    NamedTypeRef,
    ScalarType,
    SchemaModel,
    StructType,
    TypeRef,
)
from xmlshape.schema.names import QName
from xmlshape.schema.nodes import SchemaGraph, SchemaNode
from xmlshape.schema.values import ValueClassifier, ValueKind

__all__ = ["XML_NAME_FIELD", "Linearizer"]

XML_NAME_FIELD = "XMLName"


@dataclass(frozen=True, slots=True)
class _TypeTables:
    """Per-run lookup tables for named-types mode."""

    named: dict[QName, SchemaNode]
    simple: frozenset[QName]


@dataclass(frozen=True, slots=True)
class _ChildField:
    name: QName
    field: Field
    chain: CompactedChain


class Linearizer:
    """Builds an ordered ``SchemaModel`` from a ``SchemaGraph``.

    Example::

        graph = SchemaGraph()
        Observer(graph).observe(tokenize_string("<a><b>2</b></a>"))
        model = Linearizer().linearize(graph)
        model.get("A").field("B").type   # ScalarType(kind=ValueKind.INT)
    """

    def __init__(
        self,
        config: SchemaConfig | None = None,
        policy: IdentifierPolicy | None = None,
    ) -> None:
        """Initialise the linearizer.

        Args:
            config: Generation options.  Defaults to ``SchemaConfig()``.  The
                named-types mode is taken from the graph, which records the
                mode it was observed in.
            policy: Identifier policy.  Defaults to ``IdentifierPolicy()``.
        """
        self._config = config if config is not None else SchemaConfig()
        self._policy = policy if policy is not None else IdentifierPolicy()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def linearize(self, graph: SchemaGraph) -> SchemaModel:
        """Return the ordered declarations for ``graph``.

        Raises:
            NamingConflictError: On duplicate type or field identifiers.
        """
        tables = self._type_tables(graph)
        if graph.named_types:
            nodes = list(tables.named.values())
        else:
            nodes = list(graph.types.values())
        nodes = self._sort_declarations(nodes)

        type_names: list[str] = []
        for node in nodes:
            type_name = self._policy.export_type_name(node.name)
            if type_name in type_names:
                raise NamingConflictError(type_name, kind="type")
            type_names.append(type_name)

        declarations = [
            Declaration(
                name=type_name,
                source=node.name,
                type=self._node_type(node, tables),
                is_root=node.is_root,
            )
            for type_name, node in zip(type_names, nodes, strict=True)
        ]

        logger.debug(
            f"Linearized {len(declarations)} declaration(s) "
            f"(named_types={graph.named_types}, "
            f"compact_types={self._config.compact_types}, "
            f"order={self._config.order})"
        )
        return SchemaModel(declarations=tuple(declarations))

    # ------------------------------------------------------------------
    # Declaration selection and ordering
    # ------------------------------------------------------------------

    def _type_tables(self, graph: SchemaGraph) -> _TypeTables:
        if not graph.named_types:
            return _TypeTables(named={}, simple=frozenset())
        compact = self._config.compact_types
        named = {
            name: node
            for name, node in graph.types.items()
            if not compact or not node.is_container() or node.is_root
        }
        simple = frozenset(
            name for name, node in named.items() if node.is_simple() and not node.is_root
        )
        for name in simple:
            del named[name]
        return _TypeTables(named=named, simple=simple)

    def _sort_declarations(self, nodes: list[SchemaNode]) -> list[SchemaNode]:
        if self._config.order is FieldOrder.DISCOVERY:
            return sorted(nodes, key=lambda n: n.discovery_order)
        return sorted(
            nodes, key=lambda n: (self._policy.export_type_name(n.name), n.name)
        )

    # ------------------------------------------------------------------
    # Type construction
    # ------------------------------------------------------------------

    def _scalar(self, classifier: ValueClassifier) -> ScalarType:
        kind = classifier.kind()
        if kind is ValueKind.EMPTY and not self._config.empty_elements:
            kind = ValueKind.STRING
        return ScalarType(kind)

    def _node_type(
        self, node: SchemaNode, tables: _TypeTables
    ) -> StructType | ScalarType:
        """Return the body of ``node``: a scalar for text-only nodes, else a struct."""
        if (
            self._config.compact_types
            and node.is_container()
            and node.sole_child() is node
        ):
            return self._scalar(node.char_data)
        if node.is_simple() and not (node.is_root and self._config.named_root):
            return self._scalar(node.char_data)

        fields: dict[str, Field] = {}

        def add(f: Field) -> None:
            if f.name in fields:
                raise NamingConflictError(f.name)
            fields[f.name] = f

        if node.is_root and self._config.named_root:
            add(
                Field(
                    name=XML_NAME_FIELD,
                    type=ScalarType(ValueKind.STRING),
                    kind=FieldKind.XML_NAME,
                    path=node.name.local,
                    source=node.name,
                )
            )

        for f in self._attribute_fields(node):
            add(f)

        if node.char_data.observations > 0:
            add(
                Field(
                    name=self._config.char_data_field_name,
                    type=self._scalar(node.char_data),
                    kind=FieldKind.CHAR_DATA,
                    path="",
                )
            )

        self._add_child_fields(node, tables, fields)
        return StructType(fields=tuple(fields.values()))

    def _attribute_fields(self, node: SchemaNode) -> list[Field]:
        suffix = self._config.attr_name_suffix
        attribute_fields = [
            Field(
                name=self._policy.export_name(name) + suffix,
                type=self._scalar(classifier),
                kind=FieldKind.ATTRIBUTE,
                path=name.local,
                repeated=classifier.repeated,
                optional=classifier.optional,
                source=name,
            )
            for name, classifier in node.attributes.items()
        ]
        if self._config.order is FieldOrder.LEXICAL:
            attribute_fields.sort(key=lambda f: (f.name, f.source))
        return attribute_fields

    def _child_field(
        self, node: SchemaNode, name: QName, child: SchemaNode, tables: _TypeTables
    ) -> _ChildField:
        if self._config.compact_types and child.is_container():
            chain = compact_chain(child)
        else:
            chain = CompactedChain(target=child, names=(name,))
        target = chain.target

        type_: TypeRef
        if target.name in tables.named:
            type_ = NamedTypeRef(self._policy.export_type_name(target.name))
        elif chain.cyclic and target.is_container():
            type_ = self._scalar(target.char_data)
        elif target.name in tables.simple:
            type_ = self._scalar(target.char_data)
        else:
            type_ = self._node_type(target, tables)

        return _ChildField(
            name=name,
            field=Field(
                name=self._policy.export_name(target.name) + self._config.elem_name_suffix,
                type=type_,
                kind=FieldKind.ELEMENT,
                path=chain.path,
                repeated=name in node.repeated_children or chain.repeated,
                optional=name in node.optional_children or chain.optional,
                source=name,
            ),
            chain=chain,
        )

    def _add_child_fields(
        self, node: SchemaNode, tables: _TypeTables, fields: dict[str, Field]
    ) -> None:
        children = [
            self._child_field(node, name, child, tables)
            for name, child in node.children.items()
        ]
        if self._config.order is FieldOrder.DISCOVERY:
            children.sort(key=lambda c: node.child_order[c.name])
        else:
            children.sort(key=lambda c: (c.field.name, c.name))

        placed: dict[str, _ChildField] = {}
        for child in children:
            f = child.field
            if f.name not in fields:
                fields[f.name] = f
                placed[f.name] = child
                continue
            existing = placed.get(f.name)
            if existing is None or not _compacts_into(existing, child):
                raise NamingConflictError(f.name)
            kept = child if child.chain.compacted else existing
            logger.warning(
                f"{node.name}: element {f.name} collides with compacted path "
                f"{kept.field.path!r}; keeping the compacted field"
            )
            fields[f.name] = kept.field
            placed[f.name] = kept


def _compacts_into(a: _ChildField, b: _ChildField) -> bool:
    """True when exactly one of ``a``/``b`` is compacted into the other's element."""
    if a.chain.compacted == b.chain.compacted:
        return False
    compacted, plain = (a, b) if a.chain.compacted else (b, a)
    return compacted.chain.target.name == plain.name
