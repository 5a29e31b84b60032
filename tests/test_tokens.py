"""Tests for the lxml-backed tokenizer."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from xmlshape.errors import MalformedDocumentError
from xmlshape.tokens import EndElement, StartElement, Text, tokenize, tokenize_string


class TestTokenizeString:
    def test_event_sequence(self) -> None:
        tokens = list(tokenize_string("<a x='1'>hi<b/>there</a>"))
        assert tokens == [
            StartElement("a", (("x", "1"),)),
            Text("hi"),
            StartElement("b"),
            EndElement("b"),
            Text("there"),
            EndElement("a"),
        ]

    def test_namespaced_names_use_clark_notation(self) -> None:
        tokens = list(tokenize_string('<x:a xmlns:x="urn:x" x:k="v"/>'))
        assert tokens[0] == StartElement("{urn:x}a", (("{urn:x}k", "v"),))
        assert tokens[-1] == EndElement("{urn:x}a")

    def test_namespace_declarations_are_not_attributes(self) -> None:
        (start, _) = list(tokenize_string('<a xmlns="urn:d" xmlns:x="urn:x"/>'))
        assert isinstance(start, StartElement)
        assert start.attributes == ()

    def test_bytes_input(self) -> None:
        tokens = list(tokenize_string(b"<a>1</a>"))
        assert tokens == [StartElement("a"), Text("1"), EndElement("a")]

    def test_comment_tail_is_text(self) -> None:
        tokens = list(tokenize_string("<a>x<!-- c -->y</a>"))
        assert [t for t in tokens if isinstance(t, Text)] == [Text("x"), Text("y")]

    def test_mismatched_tags(self) -> None:
        with pytest.raises(MalformedDocumentError) as exc_info:
            list(tokenize_string("<a><b></a>", document="doc.xml"))
        assert exc_info.value.document == "doc.xml"
        assert str(exc_info.value).startswith("doc.xml: ")

    def test_unclosed_document(self) -> None:
        with pytest.raises(MalformedDocumentError):
            list(tokenize_string("<a>"))

    def test_text_runs_in_document_order(self) -> None:
        tokens = list(tokenize_string("<a>1<b/>2<!-- c -->3<c>x</c>4</a>"))
        assert tokens == [
            StartElement("a"),
            Text("1"),
            StartElement("b"),
            EndElement("b"),
            Text("2"),
            Text("3"),
            StartElement("c"),
            Text("x"),
            EndElement("c"),
            Text("4"),
            EndElement("a"),
        ]

    def test_many_siblings(self) -> None:
        items = "".join(f"<i>{n}</i>," for n in range(500))
        tokens = list(tokenize_string(f"<a>{items}</a>"))
        starts = [t for t in tokens if isinstance(t, StartElement)]
        texts = [t.data for t in tokens if isinstance(t, Text)]
        assert len(starts) == 501
        assert texts[:4] == ["0", ",", "1", ","]
        assert texts[-2:] == ["499", ","]

    def test_utf8_declaration_in_text_input(self) -> None:
        tokens = list(
            tokenize_string('<?xml version="1.0" encoding="UTF-8"?><a k="é"/>')
        )
        assert tokens[0] == StartElement("a", (("k", "é"),))

    def test_other_declared_encoding_in_text_input(self) -> None:
        with pytest.raises(MalformedDocumentError, match="ISO-8859-1") as exc_info:
            tokenize_string(
                '<?xml version="1.0" encoding="ISO-8859-1"?><a k="é"/>', document="d"
            )
        assert exc_info.value.document == "d"

    def test_other_declared_encoding_in_bytes_input(self) -> None:
        data = b'<?xml version="1.0" encoding="ISO-8859-1"?><a k="\xe9"/>'
        assert list(tokenize_string(data))[0] == StartElement("a", (("k", "é"),))


class TestTokenize:
    def test_path(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.xml"
        path.write_text("<a><b/></a>")
        assert [type(t) for t in tokenize(path)] == [
            StartElement,
            StartElement,
            EndElement,
            EndElement,
        ]

    def test_path_label_in_error(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.xml"
        path.write_text("<a><b></a>")
        with pytest.raises(MalformedDocumentError) as exc_info:
            list(tokenize(path))
        assert exc_info.value.document == str(path)

    def test_file_object(self) -> None:
        tokens = list(tokenize(io.BytesIO(b"<a/>")))
        assert tokens == [StartElement("a"), EndElement("a")]
