"""Output model: the ordered type declarations produced by the Linearizer.

This module provides the language-agnostic result types.  A renderer turns a
``SchemaModel`` into concrete source text; this package does not.

A field's ``type`` is one of:
- ``ScalarType``:   a widened scalar kind (simple elements, attributes, text);
- ``NamedTypeRef``: a reference to another ``Declaration`` by name;
- ``StructType``:   an inline, anonymous structure.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum, auto

from xmlshape.schema.names import QName
from xmlshape.schema.values import ValueKind

__all__ = [
    "Declaration",
    "Field",
    "FieldKind",
    "NamedTypeRef",
    "ScalarType",
    "SchemaModel",
    "StructType",
    "TypeRef",
]


class FieldKind(StrEnum):
    """Where a field's value lives in the document.

    - ELEMENT:   child element(s); ``path`` is the ``>``-joined element path.
    - ATTRIBUTE: an attribute; ``path`` is the attribute's local name.
    - CHAR_DATA: the element's own text; ``path`` is empty.
    - XML_NAME:  the element's own name (named root); ``path`` is its local name.
    """

    ELEMENT = auto()
    ATTRIBUTE = auto()
    CHAR_DATA = auto()
    XML_NAME = auto()


@dataclass(frozen=True, slots=True)
class ScalarType:
    """A scalar type resolved from a ValueClassifier."""

    kind: ValueKind


@dataclass(frozen=True, slots=True)
class NamedTypeRef:
    """A reference to a top-level declaration."""

    name: str


@dataclass(frozen=True, slots=True)
class StructType:
    """An anonymous structure with ordered fields."""

    fields: tuple[Field, ...] = ()


TypeRef = ScalarType | NamedTypeRef | StructType


@dataclass(frozen=True, slots=True)
class Field:
    """One field of a structure.

    Attributes:
        name:     Output identifier.
        type:     Field type.
        kind:     Where the value is serialized.
        path:     Serialization tag (see ``FieldKind``).
        repeated: The field holds a sequence.
        optional: The field may be absent.
        source:   Normalized name the field was generated from, if any.
    """

    name: str
    type: TypeRef
    kind: FieldKind
    path: str
    repeated: bool = False
    optional: bool = False
    source: QName | None = None


@dataclass(frozen=True, slots=True)
class Declaration:
    """A standalone named type.

    Attributes:
        name:    Output type identifier.
        source:  Normalized element name.
        type:    ``StructType`` or ``ScalarType`` body.
        is_root: The declaration describes the root element.
    """

    name: str
    source: QName
    type: StructType | ScalarType
    is_root: bool = False

    @property
    def fields(self) -> tuple[Field, ...]:
        """Fields of a struct body; empty for scalar declarations."""
        if isinstance(self.type, StructType):
            return self.type.fields
        return ()

    def field(self, name: str) -> Field:
        """Return the field called ``name``.

        Raises:
            KeyError: If no such field exists.
        """
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)


@dataclass(frozen=True, slots=True)
class SchemaModel:
    """Ordered, deduplicated declarations for an observed corpus."""

    declarations: tuple[Declaration, ...] = ()

    @property
    def names(self) -> list[str]:
        """Declaration names in output order."""
        return [d.name for d in self.declarations]

    def get(self, name: str) -> Declaration:
        """Return the declaration called ``name``.

        Raises:
            KeyError: If no such declaration exists.
        """
        for declaration in self.declarations:
            if declaration.name == name:
                return declaration
        raise KeyError(name)

    def __iter__(self) -> Iterator[Declaration]:
        return iter(self.declarations)

    def __len__(self) -> int:
        return len(self.declarations)
