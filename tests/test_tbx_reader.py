#!/usr/bin/env python3
"""
Tests for TbxReader.

Tests verify:
1. Lang-sets with empty terms and entries without lang-sets are dropped
2. TBX 2 and TBX 3 element names are both understood
3. Language counts and search across lang-sets
"""

import pytest

from bitext.readers import TbxReader
from bitext.search import LiteralMatcher
from bitext.segment import extract_text


TEST_TBX = """<?xml version="1.0" encoding="UTF-8"?>
<martif type="TBX" xml:lang="en">
  <text>
    <body>
      <termEntry id="c1">
        <descrip type="subjectField">networking</descrip>
        <langSet xml:lang="EN">
          <tig><term>router</term><termNote type="partOfSpeech">noun</termNote></tig>
        </langSet>
        <langSet xml:lang="de">
          <tig><term>Router</term></tig>
        </langSet>
        <langSet xml:lang="fr">
          <tig><term></term></tig>
        </langSet>
      </termEntry>
      <termEntry id="c2">
        <langSet xml:lang="en"><tig><term/></tig></langSet>
      </termEntry>
      <termEntry id="c3">
        <langSet xml:lang="en">
          <tig><term>big <hi type="italics">cat</hi></term></tig>
          <tig><term></term></tig>
        </langSet>
      </termEntry>
    </body>
  </text>
</martif>
"""

TEST_TBX3 = """<?xml version="1.0" encoding="UTF-8"?>
<tbx type="TBX-Basic" style="dca" xml:lang="en" xmlns="urn:iso:std:iso:30042:ed-2">
  <text><body>
    <conceptEntry id="ce1">
      <langSec xml:lang="en"><termSec><term>hard disk</term></termSec></langSec>
      <langSec xml:lang="es"><termSec><term>disco duro</term></termSec></langSec>
    </conceptEntry>
  </body></text>
</tbx>
"""


@pytest.fixture
def termbase():
    return TbxReader().parse(TEST_TBX, "test.tbx")


def test_incomplete_records_are_dropped(termbase):
    assert [e.id for e in termbase.term_entries] == ["c1", "c3"]
    assert [ls.language for ls in termbase.term_entries[0].lang_sets] == ["en", "de"]


def test_every_entry_has_lang_sets(termbase):
    for entry in termbase.term_entries:
        assert entry.lang_sets
        for lang_set in entry.lang_sets:
            assert lang_set.term


def test_empty_synonym_does_not_erase_term(termbase):
    term = termbase.term_entries[1].lang_sets[0].term
    assert extract_text(term) == "big cat"


def test_tbx3_names():
    termbase = TbxReader().parse(TEST_TBX3)

    entry = termbase.term_entries[0]
    assert entry.id == "ce1"
    assert {ls.language: extract_text(ls.term) for ls in entry.lang_sets} == {
        "en": "hard disk",
        "es": "disco duro",
    }


def test_language_counts(termbase):
    assert termbase.language_counts() == {"en": 2, "de": 1}


def test_search_returns_entry_id_and_other_terms(termbase):
    results = termbase.search(LiteralMatcher("Router"))

    assert len(results) == 1
    assert results[0].text == "Router"
    assert results[0].extra == ("c1", "router")
