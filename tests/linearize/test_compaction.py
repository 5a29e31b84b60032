"""Tests for compact_chain: container chain walking over a SchemaGraph."""

from __future__ import annotations

from xmlshape.config import SchemaConfig
from xmlshape.linearize.compaction import CompactedChain, compact_chain
from xmlshape.observer import Observer
from xmlshape.schema.names import QName
from xmlshape.schema.nodes import SchemaGraph, SchemaNode
from xmlshape.tokens import tokenize_string


def _graph(*documents: str, named_types: bool = False) -> SchemaGraph:
    graph = SchemaGraph(named_types=named_types)
    observer = Observer(graph, config=SchemaConfig(named_types=named_types))
    for document in documents:
        observer.observe(tokenize_string(document))
    return graph


def _child(node: SchemaNode, *names: str) -> SchemaNode:
    for name in names:
        node = node.children[QName(name)]
    return node


# ---------------------------------------------------------------------------
# Trivial chains
# ---------------------------------------------------------------------------


class TestTrivialChain:
    def test_non_container_targets_itself(self) -> None:
        graph = _graph("<a><b x='1'/></a>")
        b = _child(graph.types[QName("a")], "b")
        chain = compact_chain(b)
        assert chain.target is b
        assert chain.names == (QName("b"),)
        assert not chain.compacted
        assert chain.path == "b"

    def test_path_uses_local_names(self) -> None:
        chain = CompactedChain(
            target=SchemaNode(name=QName("b")),
            names=(QName("d", "urn:x"), QName("b", "urn:x")),
        )
        assert chain.path == "d>b"
        assert chain.compacted


# ---------------------------------------------------------------------------
# Acyclic chains
# ---------------------------------------------------------------------------


class TestAcyclicChain:
    def test_single_wrapper(self) -> None:
        graph = _graph("<a><d><b/></d></a>")
        d = _child(graph.types[QName("a")], "d")
        chain = compact_chain(d)
        assert chain.target is _child(d, "b")
        assert chain.path == "d>b"
        assert not chain.repeated
        assert not chain.optional
        assert not chain.cyclic

    def test_nested_wrappers(self) -> None:
        graph = _graph("<a><x><y><z>1</z></y></x></a>")
        x = _child(graph.types[QName("a")], "x")
        chain = compact_chain(x)
        assert chain.path == "x>y>z"
        assert chain.target.name == QName("z")

    def test_walk_stops_at_first_non_container(self) -> None:
        graph = _graph("<a><d><e k='v'><b/></e></d></a>")
        d = _child(graph.types[QName("a")], "d")
        chain = compact_chain(d)
        assert chain.target.name == QName("e")
        assert chain.path == "d>e"

    def test_repeated_inner_link(self) -> None:
        graph = _graph("<a><d><b/><b/></d></a>")
        chain = compact_chain(_child(graph.types[QName("a")], "d"))
        assert chain.repeated
        assert not chain.optional

    def test_optional_inner_link(self) -> None:
        graph = _graph("<a><d><b/></d><d/></a>", "<a><d><b/></d></a>")
        chain = compact_chain(_child(graph.types[QName("a")], "d"))
        assert chain.optional
        assert chain.path == "d>b"

    def test_full_tree_self_nesting_is_not_cyclic(self) -> None:
        graph = _graph("<a><b><b><b/></b></b></a>")
        chain = compact_chain(_child(graph.types[QName("a")], "b"))
        assert chain.path == "b>b>b"
        assert not chain.cyclic
        assert not chain.repeated


# ---------------------------------------------------------------------------
# Cyclic chains (named types)
# ---------------------------------------------------------------------------


class TestCyclicChain:
    def test_self_loop_repeats_name_per_nesting(self) -> None:
        graph = _graph("<a><b><b><b/></b></b></a>", named_types=True)
        b = graph.types[QName("b")]
        assert b.self_nesting_depth == 2
        chain = compact_chain(b)
        assert chain.target is b
        assert chain.path == "b>b>b"
        assert chain.repeated
        assert chain.cyclic

    def test_single_self_nesting(self) -> None:
        graph = _graph("<a><b><b/></b></a>", named_types=True)
        chain = compact_chain(graph.types[QName("b")])
        assert chain.path == "b>b"
        assert chain.repeated

    def test_self_loop_links_do_not_make_chain_optional(self) -> None:
        graph = _graph("<a><b><b><b/></b></b></a>", named_types=True)
        b = graph.types[QName("b")]
        assert QName("b") in b.optional_children
        assert not compact_chain(b).optional

    def test_indirect_cycle_terminates(self) -> None:
        graph = _graph("<a><x><y><x><y/></x></y></x></a>", named_types=True)
        x = graph.types[QName("x")]
        chain = compact_chain(x)
        assert chain.cyclic
        assert chain.path == "x>y"
        assert chain.target is graph.types[QName("y")]
