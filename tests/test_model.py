"""Tests for the output model types."""

from __future__ import annotations

import pytest

from xmlshape.model import (
    Declaration,
    Field,
    FieldKind,
    NamedTypeRef,
    ScalarType,
    SchemaModel,
    StructType,
)
from xmlshape.schema.names import QName
from xmlshape.schema.values import ValueKind


def _model() -> SchemaModel:
    b = Field(name="B", type=NamedTypeRef("B"), kind=FieldKind.ELEMENT, path="b")
    return SchemaModel(
        declarations=(
            Declaration(name="A", source=QName("a"), type=StructType((b,)), is_root=True),
            Declaration(name="B", source=QName("b"), type=ScalarType(ValueKind.INT)),
        )
    )


class TestDeclaration:
    def test_struct_fields(self) -> None:
        declaration = _model().get("A")
        assert [f.name for f in declaration.fields] == ["B"]
        assert declaration.field("B").type == NamedTypeRef("B")

    def test_scalar_has_no_fields(self) -> None:
        assert _model().get("B").fields == ()

    def test_missing_field(self) -> None:
        with pytest.raises(KeyError):
            _model().get("A").field("C")


class TestSchemaModel:
    def test_names_in_order(self) -> None:
        assert _model().names == ["A", "B"]

    def test_iteration_and_length(self) -> None:
        model = _model()
        assert len(model) == 2
        assert [d.name for d in model] == ["A", "B"]

    def test_missing_declaration(self) -> None:
        with pytest.raises(KeyError):
            _model().get("Z")

    def test_value_equality(self) -> None:
        assert _model() == _model()

    def test_empty(self) -> None:
        assert len(SchemaModel()) == 0
