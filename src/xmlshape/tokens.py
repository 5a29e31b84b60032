"""Token stream boundary between documents and the Observer.

The Observer consumes an ordered sequence of three event types:

- ``StartElement(name, attributes)``: an element opens; names are raw
  Clark-notation strings (``"{uri}local"`` or ``"local"``).
- ``Text(data)``: character data inside the current element.
- ``EndElement(name)``: the current element closes.

Any iterable of these events can be observed, which keeps the inference core
independent of the parser.  The default producer, ``tokenize``, streams
events from lxml's ``iterparse`` and wraps parser failures in
``MalformedDocumentError`` tied to the document label.

Text events are emitted in document order as soon as lxml has the text
complete: an element's leading text when its first child opens (or at its
end when it has none), and each child's tail when the next sibling opens or
the parent ends.  Released siblings are detached from the tree.
"""

from __future__ import annotations

import io
import os
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import BinaryIO

from lxml import etree

from xmlshape.errors import MalformedDocumentError

__all__ = [
    "EndElement",
    "StartElement",
    "Text",
    "Token",
    "tokenize",
    "tokenize_string",
]


@dataclass(frozen=True, slots=True)
class StartElement:
    """An element opened; ``attributes`` is a tuple of ``(name, value)`` pairs."""

    name: str
    attributes: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True, slots=True)
class Text:
    """Character data inside the current element."""

    data: str


@dataclass(frozen=True, slots=True)
class EndElement:
    """The current element closed."""

    name: str


Token = StartElement | Text | EndElement

XmlSource = str | os.PathLike[str] | BinaryIO

_ENCODING_DECLARATION = re.compile(
    r"\s*<\?xml\b[^>]*?\bencoding\s*=\s*[\"']([^\"']+)[\"']"
)
_UTF8_NAMES = frozenset({"utf-8", "utf8"})


def _label(source: XmlSource) -> str:
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    return getattr(source, "name", "<stream>")


def _release_previous(elem: etree._Element, parent: etree._Element) -> Iterator[Token]:
    """Yield the tails of ``elem``'s earlier siblings and detach them."""
    while elem.getprevious() is not None:
        sibling = parent[0]
        if sibling.tail:
            yield Text(sibling.tail)
        del parent[0]


def tokenize(source: XmlSource, document: str | None = None) -> Iterator[Token]:
    """Stream tokens from an XML file path or binary file object.

    Finished elements are cleared and detached as parsing proceeds, so memory
    stays proportional to the depth of the document rather than its size.

    Args:
        source:   Filesystem path or binary file-like object.
        document: Label used in error messages.  Defaults to the path or the
                  file object's ``name``.

    Yields:
        ``StartElement``, ``Text`` and ``EndElement`` tokens in document order.

    Raises:
        MalformedDocumentError: If the document is not well-formed XML.
    """
    label = document if document is not None else _label(source)
    # One flag per open element: its leading text was already emitted.
    text_done: list[bool] = []
    try:
        for event, elem in etree.iterparse(source, events=("start", "end")):
            if event == "start":
                parent = elem.getparent()
                if parent is not None:
                    if not text_done[-1]:
                        text_done[-1] = True
                        if parent.text:
                            yield Text(parent.text)
                    yield from _release_previous(elem, parent)
                text_done.append(False)
                yield StartElement(
                    name=elem.tag,
                    attributes=tuple((str(k), str(v)) for k, v in elem.attrib.items()),
                )
                continue
            if not text_done.pop() and elem.text:
                yield Text(elem.text)
            for child in elem:
                if child.tail:
                    yield Text(child.tail)
            yield EndElement(name=elem.tag)
            elem.clear(keep_tail=True)
    except etree.XMLSyntaxError as e:
        raise MalformedDocumentError(str(e), document=label) from e


def tokenize_string(data: str | bytes, document: str = "<string>") -> Iterator[Token]:
    """Stream tokens from an in-memory XML document.

    ``str`` input is encoded as UTF-8, so it may not declare another encoding;
    pass such documents as ``bytes``.

    Raises:
        MalformedDocumentError: If ``str`` input declares a non-UTF-8 encoding.
    """
    if isinstance(data, str):
        declared = _ENCODING_DECLARATION.match(data)
        if declared is not None and declared.group(1).lower() not in _UTF8_NAMES:
            msg = (
                f"text input declares encoding {declared.group(1)!r}; "
                "pass the document as bytes"
            )
            raise MalformedDocumentError(msg, document=document)
        data = data.encode("utf-8")
    return tokenize(io.BytesIO(data), document=document)
