"""Public API functions for xmlshape.

This module provides the one-shot entry points: infer_schema and
infer_schema_from_files.  Each call creates a fresh SchemaGenerator to
guarantee zero state shared between calls.
"""

from __future__ import annotations

import os
from collections.abc import Iterable

from xmlshape.config import SchemaConfig
from xmlshape.generator import SchemaGenerator
from xmlshape.identifiers import IdentifierPolicy
from xmlshape.model import SchemaModel

__all__ = ["infer_schema", "infer_schema_from_files"]


def infer_schema(
    documents: Iterable[str | bytes],
    config: SchemaConfig | None = None,
    policy: IdentifierPolicy | None = None,
) -> SchemaModel:
    """Infer declarations from in-memory XML documents.

    Args:
        documents: XML documents as text or bytes.
        config:    Options.  Defaults to ``SchemaConfig()`` when None.
        policy:    Identifier policy.  Defaults to ``IdentifierPolicy()``.

    Returns:
        The ordered ``SchemaModel`` describing all documents.

    Raises:
        MalformedDocumentError: If any document is not well formed.
        NamingConflictError: On duplicate type or field identifiers.
    """
    generator = SchemaGenerator(config=config, policy=policy)
    for i, document in enumerate(documents):
        generator.observe_string(document, document=f"<document {i}>")
    return generator.generate()


def infer_schema_from_files(
    paths: Iterable[str | os.PathLike[str]],
    config: SchemaConfig | None = None,
    policy: IdentifierPolicy | None = None,
    skip_malformed: bool = False,
) -> SchemaModel:
    """Infer declarations from XML files.

    Args:
        paths:          Files to observe.
        config:         Options.  Defaults to ``SchemaConfig()`` when None.
        policy:         Identifier policy.  Defaults to ``IdentifierPolicy()``.
        skip_malformed: Log and skip malformed files instead of raising.

    Returns:
        The ordered ``SchemaModel`` describing all observed files.
    """
    generator = SchemaGenerator(config=config, policy=policy)
    generator.observe_files(paths, skip_malformed=skip_malformed)
    return generator.generate()
