#!/usr/bin/env python3
"""
TMX (Translation Memory eXchange) reader.

TMX structure:
```xml
<tmx version="1.4">
  <header srclang="en-US" .../>
  <body>
    <tu tuid="42">
      <tuv xml:lang="en-US"><seg>Press <bpt i="1">&lt;b&gt;</bpt>OK<ept i="1">&lt;/b&gt;</ept></seg></tuv>
      <tuv xml:lang="de-DE"><seg>Drücken Sie <bpt i="1">&lt;b&gt;</bpt>OK<ept i="1">&lt;/b&gt;</ept></seg></tuv>
    </tu>
  </body>
</tmx>
```

A variant is kept when it has a language and a non-empty segment; a unit
is kept when at least one variant survives.
"""

from typing import Optional, Union

from ..documents import TranslationMemory, TranslationUnit, TranslationUnitVariant
from .base import RecordBuilder, XmlRecordReader, language_attribute


class _UnitBuilder(RecordBuilder):
    def __init__(self, attributes: dict[str, str]):
        self.tuid = attributes.get("tuid", "")
        self.variants: list[TranslationUnitVariant] = []

    def add(self, record: TranslationUnitVariant) -> None:
        self.variants.append(record)

    def build(self) -> Optional[TranslationUnit]:
        if not self.variants:
            return None
        return TranslationUnit(self.tuid, tuple(self.variants))


class _VariantBuilder(RecordBuilder):
    def __init__(self, attributes: dict[str, str]):
        # TMX 1.1 used "lang" before switching to xml:lang
        self.language = language_attribute(attributes, "xml:lang", "lang")
        self.segment: tuple = ()

    def add_content(self, tag: str, nodes: list) -> None:
        if nodes:
            self.segment = tuple(nodes)

    def build(self) -> Optional[TranslationUnitVariant]:
        if not self.language or not self.segment:
            return None
        return TranslationUnitVariant(self.language, self.segment)


class TmxReader(XmlRecordReader):
    """Reader for .tmx translation memories."""

    levels = (frozenset({"tu"}), frozenset({"tuv"}))
    content_tags = frozenset({"seg"})

    @property
    def name(self) -> str:
        return "tmx"

    @property
    def file_extensions(self) -> list[str]:
        return ["tmx"]

    @property
    def description(self) -> str:
        return "Translation Memory eXchange"

    def new_builder(self, level: int, attributes: dict[str, str]) -> RecordBuilder:
        if level == 0:
            return _UnitBuilder(attributes)
        return _VariantBuilder(attributes)

    def parse(self, content: Union[str, bytes], path: str = "") -> TranslationMemory:
        return TranslationMemory(path=path, units=self.collect_records(content))
