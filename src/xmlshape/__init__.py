"""xmlshape - infer type declarations from example XML documents."""

from __future__ import annotations

from xmlshape.api import infer_schema, infer_schema_from_files
from xmlshape.config import FieldOrder, NamespaceMode, SchemaConfig
from xmlshape.errors import MalformedDocumentError, NamingConflictError, XmlShapeError
from xmlshape.generator import SchemaGenerator
from xmlshape.identifiers import (
    IdentifierPolicy,
    default_export_name,
    default_unexport_name,
    title_first_rune_export_name,
)
from xmlshape.linearize import Linearizer
from xmlshape.model import (
    Declaration,
    Field,
    FieldKind,
    NamedTypeRef,
    ScalarType,
    SchemaModel,
    StructType,
)
from xmlshape.observer import Observer
from xmlshape.schema import QName, SchemaGraph, SchemaNode, ValueClassifier, ValueKind

__version__: str = "0.1.0"
__all__: list[str] = [
    "Declaration",
    "Field",
    "FieldKind",
    "FieldOrder",
    "IdentifierPolicy",
    "Linearizer",
    "MalformedDocumentError",
    "NamedTypeRef",
    "NamespaceMode",
    "NamingConflictError",
    "Observer",
    "QName",
    "ScalarType",
    "SchemaConfig",
    "SchemaGenerator",
    "SchemaGraph",
    "SchemaModel",
    "SchemaNode",
    "StructType",
    "ValueClassifier",
    "ValueKind",
    "XmlShapeError",
    "default_export_name",
    "default_unexport_name",
    "infer_schema",
    "infer_schema_from_files",
    "title_first_rune_export_name",
]
