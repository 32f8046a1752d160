#!/usr/bin/env python3
"""
Tests for XlsxReader.

Tests verify:
1. Header row supplies lowercased source/target languages
2. Cells are parsed as inline markup
3. Rows without an id are skipped, sequence numbers follow data rows
4. Missing header or header languages are fatal
"""

import openpyxl
import pytest

from bitext.readers import MissingAttributeError, ReaderError, read_document
from bitext.readers.xlsx import XlsxReader
from bitext.search import LiteralMatcher
from bitext.segment import extract_text


def write_workbook(path, rows):
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = "Translations"
    for row in rows:
        sheet.append(row)
    workbook.save(path)


@pytest.fixture
def spreadsheet(tmp_path):
    path = tmp_path / "strings.xlsx"
    write_workbook(path, [
        ["id", "EN", "fr"],
        ["t1", 'Hello <g id="1">world</g>', 'Bonjour <g id="1">monde</g>'],
        [None, "orphan", "orphelin"],
        [42, "Total: <ph id=\"1\">{n}</ph>", "Total : <ph id=\"1\">{n}</ph>"],
    ])
    return read_document(str(path))


def test_header_languages(spreadsheet):
    assert spreadsheet.source_language == "en"
    assert spreadsheet.target_language == "fr"


def test_cells_are_parsed_as_markup(spreadsheet):
    unit = spreadsheet.trans_units[0]

    assert unit.id == "t1"
    assert unit.translate == "yes"
    assert extract_text(unit.source) == "Hello world"
    assert extract_text(unit.target) == "Bonjour monde"


def test_rows_without_id_are_skipped(spreadsheet):
    assert [u.id for u in spreadsheet.trans_units] == ["t1", "42"]
    assert [u.sequence_number for u in spreadsheet.trans_units] == [1, 3]


def test_language_counts(spreadsheet):
    assert spreadsheet.language_counts() == {"en": 2, "fr": 2}


def test_search_with_and_without_tags(spreadsheet):
    matcher = LiteralMatcher("{n}")

    assert spreadsheet.search(matcher) == []
    results = spreadsheet.search(matcher, include_tags=True)
    assert results[0].text == "Total: {n}"
    assert results[0].extra == ("42", "Total : {n}")


def test_missing_header_row_is_fatal():
    with pytest.raises(ReaderError):
        XlsxReader().parse_rows([])


def test_blank_header_language_is_fatal():
    with pytest.raises(MissingAttributeError):
        XlsxReader().parse_rows([("id", "en", None), ("t1", "a", "b")])


def test_short_rows_give_empty_cells():
    document = XlsxReader().parse_rows([("id", "en", "de"), ("t1", "Hello")])

    unit = document.trans_units[0]
    assert extract_text(unit.source) == "Hello"
    assert unit.target == ()


def test_unreadable_workbook_is_fatal(tmp_path):
    path = tmp_path / "broken.xlsx"
    path.write_text("not a workbook", encoding="utf-8")

    with pytest.raises(ReaderError):
        XlsxReader().read(str(path))
