"""Schema subpackage: the mutable schema graph built during observation.

Re-exports the public API for the schema module:
- QName: normalized element/attribute name (merge key)
- ignore_namespace / keep_namespace / only_namespaces: name normalizers
- ValueClassifier, ValueKind: scalar slot statistics and the widening lattice
- SchemaNode, SchemaGraph: observed element shapes and their registry
"""

from xmlshape.schema.names import (
    NameNormalizer,
    QName,
    ignore_namespace,
    keep_namespace,
    only_namespaces,
)
from xmlshape.schema.nodes import SchemaGraph, SchemaNode
from xmlshape.schema.values import ValueClassifier, ValueKind, classify_value, widen

__all__ = [
    "NameNormalizer",
    "QName",
    "SchemaGraph",
    "SchemaNode",
    "ValueClassifier",
    "ValueKind",
    "classify_value",
    "ignore_namespace",
    "keep_namespace",
    "only_namespaces",
    "widen",
]
