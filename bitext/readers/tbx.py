#!/usr/bin/env python3
"""
TBX (TermBase eXchange) reader.

Handles both the TBX 2 element names and the TBX 3 (ISO 30042:2019) ones:

    TBX 2:  <termEntry> / <langSet> / <tig> / <term>
    TBX 3:  <conceptEntry> / <langSec> / <termSec> / <term>

Example:
```xml
<termEntry id="c42">
  <langSet xml:lang="EN"><tig><term>router</term></tig></langSet>
  <langSet xml:lang="de"><tig><term>Router</term></tig></langSet>
</termEntry>
```
"""

from typing import Optional, Union

from ..documents import LangSet, TermBase, TermEntry
from .base import RecordBuilder, XmlRecordReader, language_attribute


class _EntryBuilder(RecordBuilder):
    def __init__(self, attributes: dict[str, str]):
        self.id = attributes.get("id", "")
        self.lang_sets: list[LangSet] = []

    def add(self, record: LangSet) -> None:
        self.lang_sets.append(record)

    def build(self) -> Optional[TermEntry]:
        if not self.lang_sets:
            return None
        return TermEntry(self.id, tuple(self.lang_sets))


class _LangSetBuilder(RecordBuilder):
    def __init__(self, attributes: dict[str, str]):
        self.language = language_attribute(attributes, "xml:lang")
        self.term: tuple = ()

    def add_content(self, tag: str, nodes: list) -> None:
        # Synonyms: the last non-empty term wins
        if nodes:
            self.term = tuple(nodes)

    def build(self) -> Optional[LangSet]:
        if not self.language or not self.term:
            return None
        return LangSet(self.language, self.term)


class TbxReader(XmlRecordReader):
    """Reader for .tbx term bases."""

    levels = (
        frozenset({"termEntry", "conceptEntry"}),
        frozenset({"langSet", "langSec"}),
    )
    content_tags = frozenset({"term"})

    @property
    def name(self) -> str:
        return "tbx"

    @property
    def file_extensions(self) -> list[str]:
        return ["tbx"]

    @property
    def description(self) -> str:
        return "TermBase eXchange"

    def new_builder(self, level: int, attributes: dict[str, str]) -> RecordBuilder:
        if level == 0:
            return _EntryBuilder(attributes)
        return _LangSetBuilder(attributes)

    def parse(self, content: Union[str, bytes], path: str = "") -> TermBase:
        return TermBase(path=path, term_entries=self.collect_records(content))
