"""linearize subpackage: public API for declaration generation.

Turns a finished (possibly cyclic) schema graph into an ordered, named,
deduplicated sequence of type declarations, optionally compacting chains of
single-child wrapper elements.  Import from this module (not from
sub-modules directly) to stay on the stable public interface.

Example::

    from xmlshape.linearize import Linearizer

    model = Linearizer(SchemaConfig(compact_types=True)).linearize(graph)
"""

from __future__ import annotations

from xmlshape.linearize.compaction import CompactedChain, compact_chain
from xmlshape.linearize.linearizer import XML_NAME_FIELD, Linearizer

__all__ = ["XML_NAME_FIELD", "CompactedChain", "Linearizer", "compact_chain"]
