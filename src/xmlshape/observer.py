"""Observer: folds a document's token stream into a shared SchemaGraph.

Uses recursive descent over the token stream: each ``StartElement`` resolves
(or creates) the schema node for its normalized name in the current scope and
recurses until the matching ``EndElement``.  The scope is the parent node in
full-tree mode, or the graph's global registry in named-types mode.

Per occurrence of an element the Observer keeps a tally of child names and
attribute names.  When the occurrence ends the tally is folded into the node:

- a name seen more than once in this occurrence is marked repeated;
- a name present in fewer occurrences than the node has had is marked
  optional.  Comparing presence counts with occurrence counts (rather than
  only checking names already known) makes the result independent of the
  order in which documents are observed.

Character data is concatenated over all text runs of one occurrence,
stripped, and classified once when non-empty.

Shape differences between documents are never errors; only a structurally
invalid token stream raises ``MalformedDocumentError``.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator

from loguru import logger

from xmlshape.config import SchemaConfig
from xmlshape.errors import MalformedDocumentError
from xmlshape.schema.names import NameNormalizer, QName
from xmlshape.schema.nodes import SchemaGraph, SchemaNode
from xmlshape.schema.values import ValueClassifier
from xmlshape.tokens import EndElement, StartElement, Text, Token

__all__ = ["Observer"]


class Observer:
    """Drives token streams against a SchemaGraph.

    Example::

        graph = SchemaGraph()
        observer = Observer(graph)
        observer.observe(tokenize_string("<a><b>1</b></a>"))
        graph.types[QName("a")].children[QName("b")].char_data.kind()  # INT
    """

    def __init__(
        self,
        graph: SchemaGraph,
        config: SchemaConfig | None = None,
        name_normalizer: NameNormalizer | None = None,
    ) -> None:
        """Initialise the observer.

        Args:
            graph: The schema graph to mutate.  Its ``named_types`` flag
                selects the resolution scope.
            config: Observation options.  Defaults to ``SchemaConfig()``.
            name_normalizer: Maps raw names to merge keys, or to None to
                ignore them.  Defaults to the normalizer for
                ``config.namespaces``.
        """
        self._graph = graph
        self._config = config if config is not None else SchemaConfig()
        self._normalize: NameNormalizer = (
            name_normalizer
            if name_normalizer is not None
            else self._config.namespaces.normalizer()
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def observe(self, tokens: Iterable[Token], document: str = "<tokens>") -> None:
        """Observe one document's token stream.

        Args:
            tokens:   Ordered token events for one document.
            document: Label used in error messages.

        Raises:
            MalformedDocumentError: On unbalanced or unexpected events.
        """
        stream = iter(tokens)
        top_level = 0
        for token in stream:
            if isinstance(token, StartElement):
                name = self._normalize(QName.parse(token.name))
                if name is None:
                    self._skip_subtree(stream, document)
                    continue
                node = self._graph.resolve_top_level(name)
                self._observe_occurrence(stream, node, token, 0, document)
                top_level += 1
            elif isinstance(token, EndElement):
                msg = f"unexpected end element {token.name!r} at top level"
                raise MalformedDocumentError(msg, document=document)
            # Text outside the top-level element is ignored.
        logger.debug(f"Observed {top_level} top-level element(s) in {document}")

    def observe_element(
        self,
        tokens: Iterable[Token],
        node: SchemaNode,
        start: StartElement,
        depth: int = 0,
        document: str = "<tokens>",
    ) -> None:
        """Observe one occurrence of ``node`` opened by ``start``.

        ``tokens`` must be positioned just after ``start``; consumption stops
        after the matching ``EndElement``.
        """
        self._observe_occurrence(iter(tokens), node, start, depth, document)

    # ------------------------------------------------------------------
    # Occurrence handling
    # ------------------------------------------------------------------

    def _observe_occurrence(
        self,
        stream: Iterator[Token],
        node: SchemaNode,
        start: StartElement,
        depth: int,
        document: str,
    ) -> None:
        node.occurrences += 1
        if self._config.top_level_attributes or depth != 0:
            self._observe_attributes(node, start)

        child_counts: Counter[QName] = Counter()
        text_parts: list[str] = []
        for token in stream:
            if isinstance(token, StartElement):
                name = self._normalize(QName.parse(token.name))
                if name is None:
                    self._skip_subtree(stream, document)
                    continue
                child_counts[name] += 1
                child = self._graph.resolve_child(node, name)
                self._observe_occurrence(stream, child, token, depth + 1, document)
            elif isinstance(token, Text):
                text_parts.append(token.data)
            elif isinstance(token, EndElement):
                if token.name != start.name:
                    msg = f"end element {token.name!r} does not match {start.name!r}"
                    raise MalformedDocumentError(msg, document=document)
                break
        else:
            msg = f"unexpected end of document inside element {start.name!r}"
            raise MalformedDocumentError(msg, document=document)

        for name, count in child_counts.items():
            node.child_presence[name] = node.child_presence.get(name, 0) + 1
            if count > 1:
                node.repeated_children.add(name)
        for name in node.children:
            if node.child_presence.get(name, 0) < node.occurrences:
                node.optional_children.add(name)

        text = "".join(text_parts).strip()
        if text:
            node.char_data.classify(text, self._config.time_format)

    def _observe_attributes(self, node: SchemaNode, start: StartElement) -> None:
        node.attribute_occurrences += 1
        counts: Counter[QName] = Counter()
        for raw_name, value in start.attributes:
            name = self._normalize(QName.parse(raw_name))
            if name is None:
                continue
            counts[name] += 1
            classifier = node.attributes.get(name)
            if classifier is None:
                classifier = ValueClassifier()
                node.attributes[name] = classifier
            classifier.classify(value, self._config.time_format)

        for name, count in counts.items():
            node.attribute_presence[name] = node.attribute_presence.get(name, 0) + 1
            if count > 1:
                node.attributes[name].repeated = True
        for name, classifier in node.attributes.items():
            if node.attribute_presence.get(name, 0) < node.attribute_occurrences:
                classifier.optional = True

    def _skip_subtree(self, stream: Iterator[Token], document: str) -> None:
        depth = 1
        for token in stream:
            if isinstance(token, StartElement):
                depth += 1
            elif isinstance(token, EndElement):
                depth -= 1
                if depth == 0:
                    return
        msg = "unexpected end of document inside an ignored element"
        raise MalformedDocumentError(msg, document=document)
