"""SchemaConfig, FieldOrder and NamespaceMode for schema inference.

SchemaConfig is a frozen (immutable) dataclass holding every option that
affects observation and generation.  FieldOrder selects how declarations and
fields are ordered; NamespaceMode selects the default name normalizer.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum, auto

from xmlshape.schema.names import NameNormalizer, ignore_namespace, keep_namespace

__all__ = ["DEFAULT_TIME_FORMAT", "FieldOrder", "NamespaceMode", "SchemaConfig"]

DEFAULT_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_IDENTIFIER_CHARS = re.compile(r"\w*")


class FieldOrder(StrEnum):
    """How declarations and fields are ordered in the output.

    - DISCOVERY: first-seen order during observation.
    - LEXICAL:   output identifier, ties broken by normalized name.
    """

    DISCOVERY = auto()
    LEXICAL = auto()


class NamespaceMode(StrEnum):
    """Default name normalization.

    - IGNORE: the same local name in different namespaces is one name.
    - KEEP:   namespaces keep otherwise-equal local names distinct.
    """

    IGNORE = auto()
    KEEP = auto()

    def normalizer(self) -> NameNormalizer:
        """Return the name normalizer implementing this mode."""
        if self is NamespaceMode.KEEP:
            return keep_namespace
        return ignore_namespace


@dataclass(frozen=True, slots=True)
class SchemaConfig:
    """Immutable configuration for observation and generation.

    Attributes:
        named_types: Promote every element to a standalone named declaration;
            elements with the same name share one schema globally.
        compact_types: Collapse chains of single-child wrapper elements into
            one field with a ``>``-joined path.
        order: Declaration and field ordering.
        namespaces: Default name normalizer.
        time_format: ``strptime`` format recognising timestamps.  None
            disables the timestamp category.
        top_level_attributes: Observe attributes of top-level elements.
        named_root: Emit an element-name field on the root declaration.
        empty_elements: When False, the empty marker type resolves to string.
        char_data_field_name: Identifier of the character-data field.
        attr_name_suffix: Suffix appended to attribute field identifiers.
        elem_name_suffix: Suffix appended to element field identifiers.
    """

    named_types: bool = False
    compact_types: bool = False
    order: FieldOrder = FieldOrder.LEXICAL
    namespaces: NamespaceMode = NamespaceMode.IGNORE
    time_format: str | None = DEFAULT_TIME_FORMAT
    top_level_attributes: bool = False
    named_root: bool = False
    empty_elements: bool = True
    char_data_field_name: str = "CharData"
    attr_name_suffix: str = ""
    elem_name_suffix: str = ""

    def __post_init__(self) -> None:
        if not self.char_data_field_name:
            msg = "char_data_field_name must not be empty"
            raise ValueError(msg)
        if self.time_format is not None and not self.time_format:
            msg = "time_format must be None or a non-empty format string"
            raise ValueError(msg)
        for attr in ("attr_name_suffix", "elem_name_suffix"):
            value = getattr(self, attr)
            if not _IDENTIFIER_CHARS.fullmatch(value):
                msg = f"{attr} must contain only identifier characters, got {value!r}"
                raise ValueError(msg)
