#!/usr/bin/env python3
"""
Search over parsed records.

A Matcher is chosen once (literal substring or regular expression) and then
applied to the extracted text of every record. Each record yields at most one
MatchResult.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .segment import extract_text


@dataclass(frozen=True)
class MatchResult:
    """
    One matching record.

    Attributes:
        text: Full extracted text of the side that matched
        matched: The matched substring
        extra: Record id followed by the other side(s) of the record
    """
    text: str
    matched: str
    extra: tuple[str, ...] = ()


class Matcher(ABC):
    """Strategy for finding a query in extracted text."""

    @abstractmethod
    def find(self, text: str) -> Optional[str]:
        """Return the first matched substring, or None."""
        pass

    @abstractmethod
    def count(self, text: str) -> int:
        """Return the number of matches in text."""
        pass


class LiteralMatcher(Matcher):
    """Case-sensitive substring match."""

    def __init__(self, needle: str):
        if not needle:
            raise ValueError("Search string must not be empty")
        self.needle = needle

    def find(self, text: str) -> Optional[str]:
        return self.needle if self.needle in text else None

    def count(self, text: str) -> int:
        return text.count(self.needle)


class PatternMatcher(Matcher):
    """Regular expression match."""

    def __init__(self, pattern: str):
        try:
            self.pattern = re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Invalid pattern {pattern!r}: {e}")

    def find(self, text: str) -> Optional[str]:
        match = self.pattern.search(text)
        return match.group(0) if match else None

    def count(self, text: str) -> int:
        return sum(1 for _ in self.pattern.finditer(text))


def create_matcher(query: str, regex: bool = False) -> Matcher:
    """Build the matcher for a query string."""
    if regex:
        return PatternMatcher(query)
    return LiteralMatcher(query)


def search_trans_units(units, matcher: Matcher, include_tags: bool = False) -> list[MatchResult]:
    """
    Search source text, then target text, of each unit.

    The target is only checked when the source has no match, so a unit is
    reported at most once.

    Args:
        units: TransUnit records
        matcher: Matcher to apply
        include_tags: Passed to extract_text

    Returns:
        One MatchResult per matching unit, in unit order
    """
    results = []
    for unit in units:
        source = extract_text(unit.source, include_tags)
        target = extract_text(unit.target, include_tags)

        matched = matcher.find(source)
        if matched is not None:
            results.append(MatchResult(source, matched, (unit.id, target)))
            continue

        matched = matcher.find(target)
        if matched is not None:
            results.append(MatchResult(target, matched, (unit.id, source)))
    return results


def search_variants(record_id: str, segments, matcher: Matcher, include_tags: bool = False) -> Optional[MatchResult]:
    """
    Search the language variants of one multilingual record.

    Args:
        record_id: Id reported in the result (tuid, term entry id)
        segments: Segment node sequences, one per language, in document order
        matcher: Matcher to apply
        include_tags: Passed to extract_text

    Returns:
        MatchResult for the first matching variant, or None
    """
    texts = [extract_text(segment, include_tags) for segment in segments]
    for i, text in enumerate(texts):
        matched = matcher.find(text)
        if matched is not None:
            others = texts[:i] + texts[i + 1:]
            return MatchResult(text, matched, (record_id, *others))
    return None


def count_in_texts(texts, matcher: Matcher) -> int:
    """Total number of matches across texts."""
    return sum(matcher.count(text) for text in texts)
