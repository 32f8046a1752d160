#!/usr/bin/env python3
"""
Base classes for format readers.

FormatReader is the abstract base class that all format-specific readers
must implement. XmlRecordReader drives the tokenizer for the XML formats:
it keeps one RecordBuilder per nesting level (entry/lang-set, unit/variant,
file/trans-unit), hands inline content to the segment parser, and on each
end tag keeps the finished record only if its builder says it is complete.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Union

from ..documents import Document
from ..segment import parse_segment
from ..xml_tokens import TokenType, XmlTokenizer

logger = logging.getLogger(__name__)


class ReaderError(ValueError):
    """A file cannot be read. Aborts the read of that file."""


class UnsupportedFormatError(ReaderError):
    """No reader is registered for a file extension or format name."""


class MissingAttributeError(ReaderError):
    """A structurally required attribute is absent."""

    def __init__(self, element: str, attribute: str):
        self.element = element
        self.attribute = attribute
        super().__init__(f"<{element}> is missing required attribute '{attribute}'")


class ArchiveEntryError(ReaderError):
    """The expected entry is not present in an archive."""


def read_xml(path: str) -> bytes:
    """
    Read a whole XML file.

    The bytes are returned undecoded: the XML parser picks the encoding from
    the byte order mark or the encoding declaration (UTF-8 by default).

    Args:
        path: File path

    Returns:
        File bytes

    Raises:
        ReaderError: If the file cannot be read
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise ReaderError(f"Cannot read {path}: {e}")


def language_attribute(attributes: dict[str, str], *names: str) -> str:
    """First present language attribute, lowercased. Empty when absent."""
    for name in names:
        if name in attributes:
            return attributes[name].lower()
    return ""


class RecordBuilder(ABC):
    """
    Accumulates one record while its element is open.

    build() returns the finished record, or None when the record is
    incomplete and must be dropped.
    """

    def add(self, record: Any) -> None:
        """Receive a finished record from the next level down."""
        pass

    def add_content(self, tag: str, nodes: list) -> None:
        """Receive parsed segment content of a content element."""
        pass

    @abstractmethod
    def build(self) -> Optional[Any]:
        pass


class FormatReader(ABC):
    """
    Abstract base class for format-specific readers.

    A reader turns one input file into a Document. Readers are cheap to
    create and hold no state between reads.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short format name."""
        pass

    @property
    @abstractmethod
    def file_extensions(self) -> list[str]:
        """List of file extensions this reader supports (without dot)."""
        pass

    @property
    def description(self) -> str:
        return self.name

    @abstractmethod
    def read(self, path: str) -> Document:
        """
        Parse a file into a document.

        Args:
            path: Path to the input file

        Returns:
            Parsed document

        Raises:
            ReaderError: On any fatal problem with the file
        """
        pass


class XmlRecordReader(FormatReader):
    """
    Generic reader for nested record formats.

    Subclasses declare the element names of each nesting level (outermost
    first), the content elements parsed as segments, elements skipped
    without interpretation, and create a builder per level.
    """

    levels: tuple[frozenset[str], ...] = ()
    content_tags: frozenset[str] = frozenset()
    skipped_tags: frozenset[str] = frozenset()

    def read(self, path: str) -> Document:
        return self.parse(read_xml(path), path)

    @abstractmethod
    def parse(self, content: Union[str, bytes], path: str = "") -> Document:
        """Parse XML content into a document."""
        pass

    @abstractmethod
    def new_builder(self, level: int, attributes: dict[str, str]) -> RecordBuilder:
        """Create the builder for an element opening ``level``."""
        pass

    def collect_records(self, content: Union[str, bytes]) -> list:
        """
        Run one pass over content and return the kept top-level records.

        Raises:
            XmlSyntaxError: If the content is not well-formed XML
            ReaderError: If a builder rejects a required attribute
        """
        tokenizer = XmlTokenizer(content)
        open_builders: list[Optional[RecordBuilder]] = [None] * len(self.levels)
        records = []
        dropped = 0

        while True:
            token = tokenizer.next_event()
            if token.type is TokenType.EOF:
                break

            if token.type is TokenType.START and token.name in self.skipped_tags:
                tokenizer.read_raw_until(token.name)
                continue
            if token.type is TokenType.START and token.name in self.content_tags:
                nodes = parse_segment(tokenizer, self.content_tags)
                innermost = open_builders[-1]
                if innermost is not None:
                    innermost.add_content(token.name, nodes)
                continue

            level = self._level_of(token.name)
            if level is None:
                continue

            # An EMPTY level element opens and closes its record at once
            if token.type in (TokenType.START, TokenType.EMPTY):
                open_builders[level] = self.new_builder(level, token.attributes)
                for deeper in range(level + 1, len(open_builders)):
                    open_builders[deeper] = None

            if token.type in (TokenType.END, TokenType.EMPTY):
                if open_builders[level] is None:
                    continue
                record = open_builders[level].build()
                open_builders[level] = None
                if record is None:
                    dropped += 1
                elif level == 0:
                    records.append(record)
                elif open_builders[level - 1] is not None:
                    open_builders[level - 1].add(record)

        logger.debug("%s: kept %d records, dropped %d incomplete", self.name, len(records), dropped)
        return records

    def _level_of(self, tag: str) -> Optional[int]:
        for level, names in enumerate(self.levels):
            if tag in names:
                return level
        return None


class ReaderRegistry:
    """Registry of available format readers."""

    _readers: dict[str, type[FormatReader]] = {}
    _extension_map: dict[str, str] = {}  # extension -> reader name

    @classmethod
    def register(cls, reader_class: type[FormatReader]) -> None:
        """Register a format reader class."""
        reader = reader_class()
        cls._readers[reader.name.lower()] = reader_class
        for ext in reader.file_extensions:
            cls._extension_map[ext.lower()] = reader.name.lower()

    @classmethod
    def get_reader(cls, name: str) -> FormatReader:
        """Get reader instance by name."""
        name_lower = name.lower()
        if name_lower not in cls._readers:
            available = ', '.join(cls._readers.keys())
            raise UnsupportedFormatError(f"Unknown format: {name}. Available: {available}")
        return cls._readers[name_lower]()

    @classmethod
    def get_reader_for_extension(cls, extension: str) -> FormatReader:
        """Get reader instance by file extension."""
        ext = extension.lower().lstrip('.')
        if ext not in cls._extension_map:
            available = ', '.join(cls._extension_map.keys())
            raise UnsupportedFormatError(f"Unknown extension: .{ext}. Supported: {available}")
        return cls.get_reader(cls._extension_map[ext])

    @classmethod
    def reader_for_path(cls, filepath: str) -> FormatReader:
        """Select the reader for a file by its extension."""
        return cls.get_reader_for_extension(Path(filepath).suffix)

    @classmethod
    def list_formats(cls) -> list[dict[str, Any]]:
        """List all registered formats with their extensions."""
        result = []
        for reader_class in cls._readers.values():
            reader = reader_class()
            result.append({
                'name': reader.name,
                'description': reader.description,
                'extensions': reader.file_extensions,
            })
        return result


def read_document(path: str, format_name: Optional[str] = None) -> Document:
    """
    Read a file with the reader for its extension (or an explicit format).

    Args:
        path: Input file
        format_name: Registered reader name overriding extension lookup

    Returns:
        Parsed document
    """
    if format_name:
        reader = ReaderRegistry.get_reader(format_name)
    else:
        reader = ReaderRegistry.reader_for_path(path)
    logger.info("Reading %s as %s", path, reader.name)
    return reader.read(path)
