"""SchemaGenerator: orchestrator that wires tokenizer + Observer + Linearizer.

This is the central wiring layer between the inference core and the public
API.  A generator owns one ``SchemaGraph``; every observed document is folded
into it, and ``generate()`` linearizes the graph into a ``SchemaModel``.

Architecture:
- observe_*() methods tokenize a document with lxml and hand the token
  stream to the Observer.  Malformed documents raise
  ``MalformedDocumentError``; the graph keeps whatever was merged before the
  failure, which is safe to keep observing into.
- observe_files() can instead log and skip malformed documents.
- generate() never mutates the graph, so it may be called repeatedly, and
  observation may continue afterwards.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from typing import BinaryIO

from loguru import logger

from xmlshape.config import SchemaConfig
from xmlshape.errors import MalformedDocumentError
from xmlshape.identifiers import IdentifierPolicy
from xmlshape.linearize import Linearizer
from xmlshape.model import SchemaModel
from xmlshape.observer import Observer
from xmlshape.schema.names import NameNormalizer
from xmlshape.schema.nodes import SchemaGraph
from xmlshape.tokens import Token, tokenize, tokenize_string

__all__ = ["SchemaGenerator"]


class SchemaGenerator:
    """Observes XML documents and generates the declarations describing them.

    Two separate ``SchemaGenerator`` instances never share state; each owns
    its own graph.

    Example::

        from xmlshape.generator import SchemaGenerator

        gen = SchemaGenerator()
        gen.observe_string("<a><b>1</b></a>")
        gen.observe_string("<a/>")
        model = gen.generate()
        model.get("A").field("B").optional   # True
    """

    def __init__(
        self,
        config: SchemaConfig | None = None,
        policy: IdentifierPolicy | None = None,
        name_normalizer: NameNormalizer | None = None,
    ) -> None:
        """Initialise the generator.

        Args:
            config: Observation and generation options.  Defaults to
                ``SchemaConfig()``.
            policy: Identifier policy.  Defaults to ``IdentifierPolicy()``.
            name_normalizer: Overrides the normalizer selected by
                ``config.namespaces``.
        """
        self._config: SchemaConfig = config if config is not None else SchemaConfig()
        self._graph = SchemaGraph(named_types=self._config.named_types)
        self._observer = Observer(
            self._graph, config=self._config, name_normalizer=name_normalizer
        )
        self._linearizer = Linearizer(config=self._config, policy=policy)
        self._documents = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def graph(self) -> SchemaGraph:
        """The schema graph accumulated so far."""
        return self._graph

    @property
    def config(self) -> SchemaConfig:
        """The configuration in use."""
        return self._config

    @property
    def documents(self) -> int:
        """Number of documents observed successfully."""
        return self._documents

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def observe_tokens(self, tokens: Iterable[Token], document: str = "<tokens>") -> None:
        """Observe a document given as a token stream."""
        self._observer.observe(tokens, document=document)
        self._documents += 1

    def observe_string(self, data: str | bytes, document: str = "<string>") -> None:
        """Observe an in-memory XML document."""
        self.observe_tokens(tokenize_string(data, document=document), document=document)

    def observe_bytes(self, data: bytes, document: str = "<bytes>") -> None:
        """Observe an in-memory XML document given as bytes."""
        self.observe_string(data, document=document)

    def observe_reader(self, reader: BinaryIO, document: str | None = None) -> None:
        """Observe an XML document read from a binary file object."""
        label = document if document is not None else getattr(reader, "name", "<stream>")
        self.observe_tokens(tokenize(reader, document=label), document=label)

    def observe_file(self, path: str | os.PathLike[str]) -> None:
        """Observe the XML document stored at ``path``."""
        label = os.fspath(path)
        logger.debug(f"Observing {label}")
        self.observe_tokens(tokenize(path, document=label), document=label)

    def observe_files(
        self,
        paths: Iterable[str | os.PathLike[str]],
        skip_malformed: bool = False,
    ) -> int:
        """Observe every file in ``paths``.

        Args:
            paths: Files to observe, in order.
            skip_malformed: When True, malformed documents are logged and
                skipped; otherwise the first one raises.

        Returns:
            Number of documents skipped.
        """
        skipped = 0
        for path in paths:
            try:
                self.observe_file(path)
            except MalformedDocumentError as e:
                if not skip_malformed:
                    raise
                skipped += 1
                logger.warning(f"Skipping malformed document: {e}")
        return skipped

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate(self) -> SchemaModel:
        """Return the declarations for every document observed so far.

        Raises:
            NamingConflictError: On duplicate type or field identifiers.
        """
        return self._linearizer.linearize(self._graph)
