"""Identifier policy: normalized names to output identifiers.

The default transform converts kebab- and snake-case word boundaries to
camel case, replaces any remaining non-letter/non-digit character with
``_``, capitalizes the first character and canonicalizes a trailing ``Id``
to ``ID``::

    default_export_name(QName("kebab--case"))   # "KebabCase"
    default_export_name(QName("camelCaseId"))   # "CamelCaseID"
    default_unexport_name(QName("ID"))          # "id"

``IdentifierPolicy`` layers an explicit rename table over the default
transform and memoizes results in a per-instance ``LRUCache``.  Supplying an
``export_name`` function replaces both the table and the default transform.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping

from cachetools import LRUCache

from xmlshape.schema.names import QName

__all__ = [
    "ExportNameFunc",
    "IdentifierPolicy",
    "default_export_name",
    "default_unexport_name",
    "title_first_rune_export_name",
]

ExportNameFunc = Callable[[QName], str]

# A run of separators followed by a letter, e.g. "-c" in "kebab-case"
_WORD_BOUNDARY = re.compile(r"[-_]+([^\W\d_])")

# Anything that is neither a letter nor a digit
_NON_IDENTIFIER = re.compile(r"[\W_]")


def _camel(local: str) -> str:
    s = _WORD_BOUNDARY.sub(lambda m: m.group(1).upper(), local)
    return _NON_IDENTIFIER.sub("_", s)


def title_first_rune_export_name(name: QName) -> str:
    """Return the local name with its first character upper-cased."""
    local = name.local
    return local[:1].upper() + local[1:]


def default_export_name(name: QName) -> str:
    """Return an UpperCamelCase identifier with any ``Id`` suffix as ``ID``."""
    s = _camel(name.local)
    s = s[:1].upper() + s[1:]
    if len(s) > 1 and s.endswith("Id"):
        s = s[:-1] + "D"
    return s


def default_unexport_name(name: QName) -> str:
    """Return a lowerCamelCase identifier.

    Any ``Id`` suffix becomes ``ID`` and an ``iD`` prefix becomes ``id``.
    """
    s = _camel(name.local)
    s = s[:1].lower() + s[1:]
    if len(s) > 1:
        if s.endswith("Id"):
            s = s[:-1] + "D"
        if s.startswith("iD"):
            s = "id" + s[2:]
    return s


class IdentifierPolicy:
    """Maps normalized names to field and type identifiers.

    Args:
        export_name: Field identifier function.  Overrides ``renames`` and the
            default transform when given.
        export_type_name: Type identifier function.  Defaults to the field
            identifier function.
        renames: Exact normalized name (``str(qname)``) -> identifier.
        max_cache_size: Maximum number of memoized identifiers per function.

    Example::

        policy = IdentifierPolicy(renames={"PGROUP": "PersonaGroup"})
        policy.export_name(QName("PGROUP"))     # "PersonaGroup"
        policy.export_name(QName("speech"))     # "Speech"
    """

    def __init__(
        self,
        export_name: ExportNameFunc | None = None,
        export_type_name: ExportNameFunc | None = None,
        renames: Mapping[str, str] | None = None,
        max_cache_size: int = 512,
    ) -> None:
        self._renames: dict[str, str] = dict(renames or {})
        self._export_name: ExportNameFunc = (
            export_name if export_name is not None else self._renamed_export_name
        )
        self._export_type_name: ExportNameFunc = (
            export_type_name if export_type_name is not None else self._export_name
        )
        self._names: LRUCache[QName, str] = LRUCache(maxsize=max_cache_size)
        self._type_names: LRUCache[QName, str] = LRUCache(maxsize=max_cache_size)

    def _renamed_export_name(self, name: QName) -> str:
        rename = self._renames.get(str(name))
        if rename is not None:
            return rename
        return default_export_name(name)

    def export_name(self, name: QName) -> str:
        """Return the field identifier for ``name``."""
        identifier = self._names.get(name)
        if identifier is None:
            identifier = self._export_name(name)
            self._names[name] = identifier
        return identifier

    def export_type_name(self, name: QName) -> str:
        """Return the declaration identifier for ``name``."""
        identifier = self._type_names.get(name)
        if identifier is None:
            identifier = self._export_type_name(name)
            self._type_names[name] = identifier
        return identifier
