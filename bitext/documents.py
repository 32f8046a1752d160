#!/usr/bin/env python3
"""
Record model for parsed interchange files.

Records are built once by a reader and never modified afterwards. Each
document class groups the records of one input file and provides search and
per-language statistics over them.
"""

from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field

from .search import Matcher, MatchResult, count_in_texts, search_trans_units, search_variants
from .segment import SegmentNode, extract_text


# --- Term base (TBX) ---

@dataclass(frozen=True)
class LangSet:
    language: str
    term: tuple[SegmentNode, ...]


@dataclass(frozen=True)
class TermEntry:
    id: str
    lang_sets: tuple[LangSet, ...]


# --- Translation memory (TMX) ---

@dataclass(frozen=True)
class TranslationUnitVariant:
    language: str
    segment: tuple[SegmentNode, ...]


@dataclass(frozen=True)
class TranslationUnit:
    tuid: str
    variants: tuple[TranslationUnitVariant, ...]


# --- Bilingual files (XLIFF, XLSX) ---

@dataclass(frozen=True)
class TransUnit:
    """
    One source/target pair.

    Attributes:
        id: Declared unit id (may repeat across files)
        sequence_number: 1-based position among kept units of the document
        translate: Value of the translate flag, "yes" when absent
        source: Source segment
        target: Target segment
    """
    id: str
    sequence_number: int
    translate: str
    source: tuple[SegmentNode, ...]
    target: tuple[SegmentNode, ...]


@dataclass(frozen=True)
class TranslationFile:
    source_language: str
    target_language: str
    trans_units: tuple[TransUnit, ...]


class Document(ABC):
    """Base class for the parsed content of one input file."""

    path: str

    @abstractmethod
    def search(self, matcher: Matcher, include_tags: bool = False) -> list[MatchResult]:
        """
        Find the first match in each record.

        Args:
            matcher: Matcher to apply
            include_tags: Search inline code content too

        Returns:
            At most one MatchResult per record
        """
        pass

    @abstractmethod
    def texts(self, include_tags: bool = False) -> list[str]:
        """Extracted text of every segment in the document."""
        pass

    def count_matches(self, matcher: Matcher, include_tags: bool = False) -> int:
        """Total number of matches over every segment."""
        return count_in_texts(self.texts(include_tags), matcher)

    @abstractmethod
    def language_counts(self) -> Counter:
        """Language code -> number of records in that language."""
        pass


@dataclass
class TermBase(Document):
    path: str
    term_entries: list[TermEntry] = field(default_factory=list)

    def search(self, matcher: Matcher, include_tags: bool = False) -> list[MatchResult]:
        results = []
        for entry in self.term_entries:
            result = search_variants(
                entry.id, [ls.term for ls in entry.lang_sets], matcher, include_tags
            )
            if result is not None:
                results.append(result)
        return results

    def texts(self, include_tags: bool = False) -> list[str]:
        return [
            extract_text(ls.term, include_tags)
            for entry in self.term_entries
            for ls in entry.lang_sets
        ]

    def language_counts(self) -> Counter:
        counts = Counter()
        for entry in self.term_entries:
            for lang_set in entry.lang_sets:
                counts[lang_set.language] += 1
        return counts


@dataclass
class TranslationMemory(Document):
    path: str
    units: list[TranslationUnit] = field(default_factory=list)

    def search(self, matcher: Matcher, include_tags: bool = False) -> list[MatchResult]:
        results = []
        for unit in self.units:
            result = search_variants(
                unit.tuid, [v.segment for v in unit.variants], matcher, include_tags
            )
            if result is not None:
                results.append(result)
        return results

    def texts(self, include_tags: bool = False) -> list[str]:
        return [
            extract_text(variant.segment, include_tags)
            for unit in self.units
            for variant in unit.variants
        ]

    def language_counts(self) -> Counter:
        counts = Counter()
        for unit in self.units:
            for variant in unit.variants:
                counts[variant.language] += 1
        return counts


class BilingualDocument(Document):
    """Documents made of TransUnits grouped under a language pair."""

    @property
    @abstractmethod
    def trans_units(self) -> list[TransUnit]:
        pass

    def search(self, matcher: Matcher, include_tags: bool = False) -> list[MatchResult]:
        return search_trans_units(self.trans_units, matcher, include_tags)

    def texts(self, include_tags: bool = False) -> list[str]:
        texts = []
        for unit in self.trans_units:
            texts.append(extract_text(unit.source, include_tags))
            texts.append(extract_text(unit.target, include_tags))
        return texts


@dataclass
class XliffDocument(BilingualDocument):
    path: str
    files: list[TranslationFile] = field(default_factory=list)

    @property
    def trans_units(self) -> list[TransUnit]:
        return [unit for xfile in self.files for unit in xfile.trans_units]

    def language_counts(self) -> Counter:
        # Counted per file, not per unit: each file adds its unit count to
        # both of its languages.
        counts = Counter()
        for xfile in self.files:
            total = len(xfile.trans_units)
            counts[xfile.source_language] += total
            counts[xfile.target_language] += total
        return counts


@dataclass
class Spreadsheet(BilingualDocument):
    path: str
    source_language: str
    target_language: str
    units: list[TransUnit] = field(default_factory=list)

    @property
    def trans_units(self) -> list[TransUnit]:
        return self.units

    def language_counts(self) -> Counter:
        counts = Counter()
        counts[self.source_language] += len(self.units)
        counts[self.target_language] += len(self.units)
        return counts


def summarize_languages(documents) -> dict[str, int]:
    """
    Merge per-language record counts of several documents.

    Args:
        documents: Parsed documents

    Returns:
        Language code -> count, sorted by language code
    """
    total = Counter()
    for document in documents:
        total.update(document.language_counts())
    return dict(sorted(total.items()))
