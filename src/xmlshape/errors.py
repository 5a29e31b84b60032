"""
Custom exceptions for schema inference and generation.
"""

from __future__ import annotations


class XmlShapeError(Exception):
    """Base exception for all xmlshape errors."""

    pass


class MalformedDocumentError(XmlShapeError):
    """Raised when a document's token stream is not well formed.

    Fatal to the document being observed; the rest of a corpus may still be
    observed.
    """

    def __init__(self, message: str, document: str | None = None):
        self.document = document
        prefix = f"{document}: " if document else ""
        super().__init__(f"{prefix}{message}")


class NamingConflictError(XmlShapeError):
    """Raised when two fields of a declaration, or two declarations, share an identifier."""

    def __init__(self, identifier: str, kind: str = "field"):
        self.identifier = identifier
        self.kind = kind
        super().__init__(f"{identifier}: duplicate {kind} name")
