#!/usr/bin/env python3
"""
Event stream over XML documents and inline markup fragments.

The document is parsed by ElementTree's XMLParser with a target that records
a flat list of START/END/EMPTY/TEXT events instead of building a tree. The
parser does the decoding (byte order marks and the ``encoding`` declaration),
entity expansion and well-formedness checks.

Names are reduced to their local part, so ``{urn:oasis:names:tc:xliff:document:1.2}file``
is reported as ``file``; the reserved ``xml`` prefix is kept (``xml:lang``).

Fragments such as the spreadsheet cell ``Hello <g id="1">world</g>`` have no
root element. They are parsed inside a synthetic root that never shows up
in the event stream.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Union
from xml.etree import ElementTree as ET
from xml.parsers import expat
from xml.sax.saxutils import escape, quoteattr

logger = logging.getLogger(__name__)

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
FRAGMENT_ROOT = "bitext-fragment"

# Reported by expat at end of input while elements are still open
_NO_ELEMENTS = expat.errors.codes[expat.errors.XML_ERROR_NO_ELEMENTS]


class XmlSyntaxError(ValueError):
    """Raised when the input is not well-formed XML."""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.line = line
        self.column = column
        super().__init__(message)


class TokenType(Enum):
    START = "start"
    END = "end"
    EMPTY = "empty"
    TEXT = "text"
    EOF = "eof"


@dataclass
class Token:
    """
    One event of the stream.

    Attributes:
        type: Event type
        name: Local element name (START, END, EMPTY)
        attributes: Decoded attribute values (START, EMPTY)
        text: Decoded character data (TEXT)
    """
    type: TokenType
    name: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    text: str = ""


def local_name(name: str) -> str:
    """Strip the ``{namespace}`` part ElementTree puts in front of names."""
    if name.startswith("{"):
        namespace, _, local = name[1:].partition("}")
        if namespace == XML_NAMESPACE:
            return f"xml:{local}"
        return local
    return name


def serialize(token: Token) -> str:
    """Render an event back to markup."""
    if token.type is TokenType.TEXT:
        return escape(token.text)
    if token.type is TokenType.END:
        return f"</{token.name}>"
    attributes = "".join(f" {name}={quoteattr(value)}" for name, value in token.attributes.items())
    if token.type is TokenType.EMPTY:
        return f"<{token.name}{attributes}/>"
    return f"<{token.name}{attributes}>"


class _EventCollector:
    """XMLParser target recording events in document order."""

    def __init__(self):
        self.events: list[Token] = []

    def start(self, tag, attrib):
        attributes = {local_name(name): value for name, value in attrib.items()}
        self.events.append(Token(TokenType.START, local_name(tag), attributes))

    def end(self, tag):
        last = self.events[-1] if self.events else None
        # An element with no content at all is reported once, as EMPTY
        if last is not None and last.type is TokenType.START and last.name == local_name(tag):
            last.type = TokenType.EMPTY
        else:
            self.events.append(Token(TokenType.END, local_name(tag)))

    def data(self, text):
        if self.events and self.events[-1].type is TokenType.TEXT:
            self.events[-1].text += text
        else:
            self.events.append(Token(TokenType.TEXT, text=text))

    def close(self):
        return self.events


def parse_events(content: Union[str, bytes], fragment: bool = False) -> list[Token]:
    """
    Parse content into a flat event list.

    Args:
        content: Document bytes (decoded by the parser) or text
        fragment: Parse mixed content without a root element

    Returns:
        Events in document order

    Raises:
        XmlSyntaxError: If the content is not well-formed. Elements left
            open at end of input are tolerated with a warning.
    """
    if fragment:
        content = f"<{FRAGMENT_ROOT}>{content}</{FRAGMENT_ROOT}>"

    collector = _EventCollector()
    parser = ET.XMLParser(target=collector)
    try:
        parser.feed(content)
    except ET.ParseError as e:
        raise XmlSyntaxError(f"Invalid XML: {e}", *e.position) from e
    try:
        parser.close()
    except ET.ParseError as e:
        if fragment or e.code != _NO_ELEMENTS:
            raise XmlSyntaxError(f"Invalid XML: {e}", *e.position) from e
        logger.warning("Input ends inside an open element (line %d, column %d)", *e.position)

    events = collector.events
    if fragment:
        # Drop the synthetic root
        return [] if events[0].type is TokenType.EMPTY else events[1:-1]
    return events


class XmlTokenizer:
    """
    Cursor over the events of one document or fragment.

    Example:
        >>> tokenizer = XmlTokenizer('<seg>Hello <x id="1"/></seg>')
        >>> tokenizer.next_event().type
        <TokenType.START: 'start'>
    """

    def __init__(self, content: Union[str, bytes], fragment: bool = False):
        self._events = parse_events(content, fragment)
        self._index = 0
        self._depth = 0

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return self._depth

    def next_event(self) -> Token:
        """Return the next event, or an EOF token once the input is exhausted."""
        if self._index >= len(self._events):
            return Token(TokenType.EOF)
        token = self._events[self._index]
        self._index += 1
        if token.type is TokenType.START:
            self._depth += 1
        elif token.type is TokenType.END:
            self._depth -= 1
        return token

    def read_raw_until(self, name: str) -> str:
        """
        Consume everything up to the end tag closing the element just opened.

        The content is handed back as markup, with character data escaped
        again, so it can be stored verbatim or parsed as a fragment. The
        closing end tag is consumed but not included.

        Raises:
            XmlSyntaxError: If input ends before the element is closed
        """
        depth = self._depth
        parts = []
        while True:
            token = self.next_event()
            if token.type is TokenType.EOF:
                raise XmlSyntaxError(f"Unexpected end of input inside <{name}>")
            if token.type is TokenType.END and self._depth < depth:
                return "".join(parts)
            parts.append(serialize(token))
