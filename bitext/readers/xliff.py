#!/usr/bin/env python3
"""
XLIFF 1.2 reader and its dialects.

One reader covers plain XLIFF and the tool-specific variants that keep the
1.2 element structure (SDL Trados .sdlxliff, memoQ .mqxliff, Wordfast
.txlf, Memsource .mxliff), plus .xlz archives that wrap a content.xlf.

XLIFF structure:
```xml
<xliff version="1.2">
  <file source-language="en-US" target-language="fr-FR" original="ui.properties">
    <body>
      <trans-unit id="welcome" translate="yes">
        <source>Hello <g id="1">world</g></source>
        <target>Bonjour <g id="1">monde</g></target>
        <alt-trans><source>Hello</source><target>Salut</target></alt-trans>
      </trans-unit>
    </body>
  </file>
</xliff>
```

<alt-trans> holds suggestions, not the unit's own content, and is skipped
unread. A trans-unit is kept only with both a source and a target; each kept
unit gets the next sequence number of the document, starting at 1.
"""

import dataclasses
import itertools
import logging
import zipfile
from typing import Iterator, Optional, Union

from ..documents import TranslationFile, TransUnit, XliffDocument
from .base import (
    ArchiveEntryError,
    MissingAttributeError,
    ReaderError,
    RecordBuilder,
    XmlRecordReader,
)

logger = logging.getLogger(__name__)


class _FileBuilder(RecordBuilder):
    def __init__(self, attributes: dict[str, str], sequence: Iterator[int]):
        for required in ("source-language", "target-language"):
            if required not in attributes:
                raise MissingAttributeError("file", required)
        self.source_language = attributes["source-language"].lower()
        self.target_language = attributes["target-language"].lower()
        self.trans_units: list[TransUnit] = []
        self._sequence = sequence

    def add(self, record: TransUnit) -> None:
        # Only units kept in a file are numbered
        self.trans_units.append(dataclasses.replace(record, sequence_number=next(self._sequence)))

    def build(self) -> Optional[TranslationFile]:
        if not self.trans_units:
            return None
        return TranslationFile(self.source_language, self.target_language, tuple(self.trans_units))


class _TransUnitBuilder(RecordBuilder):
    def __init__(self, attributes: dict[str, str]):
        self.id = attributes.get("id", "")
        self.translate = attributes.get("translate", "yes")
        self.source: tuple = ()
        self.target: tuple = ()

    def add_content(self, tag: str, nodes: list) -> None:
        if not nodes:
            return
        if tag == "source":
            self.source = tuple(nodes)
        elif tag == "target":
            self.target = tuple(nodes)

    def build(self) -> Optional[TransUnit]:
        if not self.source or not self.target:
            return None
        return TransUnit(
            id=self.id,
            sequence_number=0,
            translate=self.translate,
            source=self.source,
            target=self.target,
        )


class XliffReader(XmlRecordReader):
    """Reader for XLIFF 1.2 files and dialects."""

    levels = (frozenset({"file"}), frozenset({"trans-unit"}))
    content_tags = frozenset({"source", "target"})
    skipped_tags = frozenset({"alt-trans"})

    def __init__(self):
        self._sequence: Iterator[int] = itertools.count(1)

    @property
    def name(self) -> str:
        return "xliff"

    @property
    def file_extensions(self) -> list[str]:
        return ["xlf", "xliff", "sdlxliff", "mqxliff", "txlf", "mxliff"]

    @property
    def description(self) -> str:
        return "XML Localization Interchange File Format 1.2"

    def new_builder(self, level: int, attributes: dict[str, str]) -> RecordBuilder:
        if level == 0:
            return _FileBuilder(attributes, self._sequence)
        return _TransUnitBuilder(attributes)

    def parse(self, content: Union[str, bytes], path: str = "") -> XliffDocument:
        self._sequence = itertools.count(1)
        return XliffDocument(path=path, files=self.collect_records(content))


class XlzReader(XliffReader):
    """
    Reader for .xlz archives.

    An .xlz is a zip archive whose XLIFF content is stored in the entry
    named content.xlf.
    """

    CONTENT_ENTRY = "content.xlf"

    @property
    def name(self) -> str:
        return "xlz"

    @property
    def file_extensions(self) -> list[str]:
        return ["xlz"]

    @property
    def description(self) -> str:
        return "Zipped XLIFF (content.xlf)"

    def read(self, path: str) -> XliffDocument:
        return self.parse(self.read_content(path), path)

    def read_content(self, path: str) -> bytes:
        """
        Extract the XLIFF bytes from the archive.

        Raises:
            ArchiveEntryError: If content.xlf is not in the archive
            ReaderError: If the file is missing or not a zip archive
        """
        try:
            with zipfile.ZipFile(path) as archive:
                try:
                    data = archive.read(self.CONTENT_ENTRY)
                except KeyError:
                    raise ArchiveEntryError(f"{self.CONTENT_ENTRY} not found in {path}")
        except zipfile.BadZipFile as e:
            raise ReaderError(f"Invalid xlz file {path}: {e}")
        except OSError as e:
            raise ReaderError(f"Cannot open xlz file {path}: {e}")
        logger.debug("Extracted %s from %s (%d bytes)", self.CONTENT_ENTRY, path, len(data))
        return data
