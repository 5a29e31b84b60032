"""Normalized element and attribute names, and the policies that produce them.

A ``QName`` is the merge key for schema identity: two occurrences whose
normalized names are equal are folded into the same ``SchemaNode``.

Raw names arrive from the tokenizer in Clark notation (``"{namespace}local"``
or plain ``"local"``).  A name normalizer maps a raw ``QName`` to the
``QName`` used as merge key, or to ``None`` to ignore the element (and its
whole subtree) or attribute entirely.

Built-in normalizers:
- ``ignore_namespace``: same local name in any namespace is one name.
- ``keep_namespace``:   namespaces keep otherwise-equal names distinct.
- ``only_namespaces``:  factory that drops names outside a namespace set.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

__all__ = [
    "NameNormalizer",
    "QName",
    "ignore_namespace",
    "keep_namespace",
    "only_namespaces",
]


@dataclass(frozen=True, slots=True, order=True)
class QName:
    """A qualified name: local part plus optional namespace URI.

    Field order matters: ``order=True`` sorts by local name first, then by
    namespace, which is the tie-break used by lexical ordering.

    Attributes:
        local: Local part of the name, e.g. ``"item"``.
        space: Namespace URI, or empty string for no namespace.
    """

    local: str
    space: str = ""

    @classmethod
    def parse(cls, raw: str) -> QName:
        """Parse a Clark-notation name (``"{uri}local"`` or ``"local"``).

        Raises:
            ValueError: If the namespace brace is never closed.
        """
        if raw.startswith("{"):
            end = raw.find("}")
            if end == -1:
                msg = f"unterminated namespace in name {raw!r}"
                raise ValueError(msg)
            return cls(local=raw[end + 1 :], space=raw[1:end])
        return cls(local=raw)

    def __str__(self) -> str:
        if self.space:
            return f"{{{self.space}}}{self.local}"
        return self.local


NameNormalizer = Callable[[QName], "QName | None"]


def ignore_namespace(name: QName) -> QName:
    """Return ``name`` with its namespace cleared."""
    return QName(local=name.local)


def keep_namespace(name: QName) -> QName:
    """Return ``name`` unchanged; namespaces keep names distinct."""
    return name


def only_namespaces(*spaces: str, strip: bool = True) -> NameNormalizer:
    """Build a normalizer that ignores names outside ``spaces``.

    Use ``""`` in ``spaces`` to accept names without a namespace.

    Args:
        spaces: Namespace URIs to keep.
        strip:  When True, kept names have their namespace cleared.
    """
    allowed = frozenset(spaces)

    def normalize(name: QName) -> QName | None:
        if name.space not in allowed:
            return None
        return ignore_namespace(name) if strip else name

    return normalize
