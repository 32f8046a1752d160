"""
bitext - search and inspect bilingual translation interchange files

Parses TMX, TBX, XLIFF 1.2 (and dialects), XLZ and bilingual XLSX files into
one segment model of text, inline containers and placeholders, then extracts
plain text, searches source/target pairs and counts records per language.

Quick start:
    bitext search --query "Hello" memory.tmx glossary.tbx
    bitext meta project/*.sdlxliff
    bitext extract strings.xlsx --include-tags
"""

__version__ = "1.0.0"

from .documents import (
    Document,
    LangSet,
    Spreadsheet,
    TermBase,
    TermEntry,
    TransUnit,
    TranslationFile,
    TranslationMemory,
    TranslationUnit,
    TranslationUnitVariant,
    XliffDocument,
    summarize_languages,
)
from .readers import ReaderError, ReaderRegistry, read_document
from .search import LiteralMatcher, Matcher, MatchResult, PatternMatcher, create_matcher
from .segment import Container, Marker, Text, extract_text, parse_inline, parse_segment
from .xml_tokens import XmlSyntaxError, XmlTokenizer

__all__ = [
    "Container",
    "Document",
    "LangSet",
    "LiteralMatcher",
    "Marker",
    "Matcher",
    "MatchResult",
    "PatternMatcher",
    "ReaderError",
    "ReaderRegistry",
    "Spreadsheet",
    "TermBase",
    "TermEntry",
    "Text",
    "TransUnit",
    "TranslationFile",
    "TranslationMemory",
    "TranslationUnit",
    "TranslationUnitVariant",
    "XliffDocument",
    "XmlSyntaxError",
    "XmlTokenizer",
    "create_matcher",
    "extract_text",
    "parse_inline",
    "parse_segment",
    "read_document",
    "summarize_languages",
]
