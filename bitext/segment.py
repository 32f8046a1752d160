#!/usr/bin/env python3
"""
Segment model and inline-markup parser shared by every reader.

A segment is the ordered mixed content of one translatable span
(``<seg>``, ``<source>``, ``<target>``, ``<term>``, or a spreadsheet cell):

    Text       literal character data
    Container  inline tag wrapping further content (<g>, <bpt>, <mrk>, ...)
    Marker     self-closing placeholder (<x/>, <bx/>, <ex/>)

Example:
    ``Click <g id="1">here</g><x id="2"/>`` parses to
    ``[Text("Click "), Container("g", {"id": "1"}, (Text("here", raw=True),)),
    Marker("x", {"id": "2"})]``
"""

import html
from dataclasses import dataclass, field
from typing import Union

from .xml_tokens import TokenType, XmlTokenizer


# Inline tags that carry content (TMX 1.4 and XLIFF 1.2)
CONTAINER_TAGS = frozenset({"bpt", "ept", "ph", "it", "ut", "g", "mrk", "hi", "sub"})

# Self-closing placeholders
MARKER_TAGS = frozenset({"x", "bx", "ex"})

# Containers whose content is translatable text rather than native code
INLINE_TEXT_TAGS = frozenset({"g", "mrk", "hi"})


@dataclass(frozen=True)
class Text:
    """Character data. ``raw`` text is escaped markup (``&lt;b&gt;``)."""
    text: str
    raw: bool = False


@dataclass(frozen=True)
class Container:
    tag: str
    attributes: dict[str, str] = field(default_factory=dict, hash=False)
    children: tuple["SegmentNode", ...] = ()


@dataclass(frozen=True)
class Marker:
    tag: str
    attributes: dict[str, str] = field(default_factory=dict, hash=False)


SegmentNode = Union[Text, Container, Marker]


def parse_segment(tokenizer: XmlTokenizer, terminators: frozenset[str]) -> list[SegmentNode]:
    """
    Read inline content until a terminating end tag or end of input.

    The terminating end tag is consumed. Unrecognized tags are skipped but
    their text is kept, so unknown markup degrades to plain text.

    Args:
        tokenizer: Tokenizer positioned just after the opening content tag
        terminators: End-tag names that close the segment

    Returns:
        Segment nodes in document order
    """
    nodes: list[SegmentNode] = []
    while True:
        token = tokenizer.next_event()
        if token.type is TokenType.EOF:
            break
        if token.type is TokenType.START and token.name in CONTAINER_TAGS:
            raw = tokenizer.read_raw_until(token.name)
            container = _build_container(token.name, token.attributes, raw)
            if container is not None:
                nodes.append(container)
        elif token.type is TokenType.EMPTY and token.name in MARKER_TAGS:
            nodes.append(Marker(token.name, token.attributes))
        elif token.type is TokenType.TEXT:
            if token.text:
                nodes.append(Text(token.text))
        elif token.type is TokenType.END and token.name in terminators:
            break
    return nodes


def parse_inline(text: str) -> list[SegmentNode]:
    """Parse a standalone markup string such as a spreadsheet cell."""
    return parse_segment(XmlTokenizer(text, fragment=True), frozenset())


def _build_container(tag: str, attributes: dict[str, str], raw: str):
    if "<" in raw or ">" in raw:
        children = parse_inline(raw)
        if not children:
            return None
        return Container(tag, attributes, tuple(children))
    return Container(tag, attributes, (Text(raw, raw=True),))


def extract_text(nodes, include_tags: bool = False) -> str:
    """
    Flatten segment nodes to a string.

    Args:
        nodes: Segment nodes
        include_tags: Render the content of every container. When False,
            only text and INLINE_TEXT_TAGS containers contribute.

    Returns:
        Plain text; markers never contribute
    """
    parts = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(html.unescape(node.text) if node.raw else node.text)
        elif isinstance(node, Container):
            if include_tags or node.tag in INLINE_TEXT_TAGS:
                parts.append(extract_text(node.children, include_tags))
    return "".join(parts)
