#!/usr/bin/env python3
"""
Tests for TmxReader.

Tests verify:
1. Variants with an empty segment or no language are dropped
2. Units without any surviving variant are dropped
3. Language codes are lowercased, TMX 1.1 "lang" is understood
4. Per-variant language counts and search
"""

import pytest

from bitext.readers import ReaderError, TmxReader, read_document
from bitext.search import LiteralMatcher
from bitext.segment import Container, extract_text
from bitext.xml_tokens import XmlSyntaxError


TEST_TMX = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE tmx SYSTEM "tmx14.dtd">
<tmx version="1.4">
  <header srclang="en-US" datatype="plaintext" segtype="sentence" adminlang="en"/>
  <body>
    <tu tuid="1">
      <prop type="x-origin">import</prop>
      <tuv xml:lang="EN-US"><seg>Hello <bpt i="1">&lt;b&gt;</bpt>world<ept i="1">&lt;/b&gt;</ept></seg></tuv>
      <tuv xml:lang="fr-FR"><seg></seg></tuv>
    </tu>
    <tu tuid="2">
      <tuv xml:lang="en-US"><seg>Good bye</seg></tuv>
      <tuv xml:lang="fr-FR"><seg>Au revoir</seg></tuv>
    </tu>
    <tu tuid="3">
      <tuv xml:lang="en-US"><seg/></tuv>
      <tuv><seg>No language</seg></tuv>
    </tu>
    <tu>
      <tuv lang="DE"><seg>Tschüss</seg></tuv>
    </tu>
  </body>
</tmx>
"""


@pytest.fixture
def memory():
    return TmxReader().parse(TEST_TMX, "test.tmx")


def test_empty_variant_is_dropped_but_unit_kept(memory):
    """A unit keeps its non-empty variant when another variant is empty."""
    first = memory.units[0]

    assert first.tuid == "1"
    assert [v.language for v in first.variants] == ["en-us"]


def test_unit_without_variants_is_dropped(memory):
    assert [u.tuid for u in memory.units] == ["1", "2", ""]


def test_every_kept_record_is_complete(memory):
    for unit in memory.units:
        assert unit.variants
        for variant in unit.variants:
            assert variant.language
            assert variant.segment


def test_tmx11_lang_attribute(memory):
    last = memory.units[-1]
    assert last.variants[0].language == "de"
    assert extract_text(last.variants[0].segment) == "Tschüss"


def test_inline_codes_are_parsed(memory):
    segment = memory.units[0].variants[0].segment

    assert isinstance(segment[1], Container)
    assert extract_text(segment) == "Hello world"
    assert extract_text(segment, include_tags=True) == "Hello <b>world</b>"


def test_language_counts_per_variant(memory):
    assert memory.language_counts() == {"en-us": 2, "fr-fr": 1, "de": 1}


def test_search_reports_other_variants(memory):
    results = memory.search(LiteralMatcher("revoir"))

    assert len(results) == 1
    assert results[0].text == "Au revoir"
    assert results[0].extra == ("2", "Good bye")


def test_count_matches_over_all_variants(memory):
    assert memory.count_matches(LiteralMatcher("o")) == 5


def test_read_utf16_file(tmp_path):
    path = tmp_path / "memory.tmx"
    path.write_bytes(TEST_TMX.replace("UTF-8", "UTF-16").encode("utf-16"))

    document = read_document(str(path))
    assert document.path == str(path)
    assert len(document.units) == 3


def test_read_latin1_file(tmp_path):
    """The encoding declaration decides how the bytes are decoded."""
    path = tmp_path / "legacy.tmx"
    path.write_bytes(
        '<?xml version="1.0" encoding="ISO-8859-1"?>\n'
        '<tmx version="1.4"><body><tu tuid="1">'
        '<tuv xml:lang="de"><seg>Grüße</seg></tuv>'
        '</tu></body></tmx>'.encode("latin-1")
    )

    document = read_document(str(path))
    assert extract_text(document.units[0].variants[0].segment) == "Grüße"


def test_malformed_xml_is_fatal():
    with pytest.raises(XmlSyntaxError):
        TmxReader().parse("<tmx><body><tu><tuv xml:lang='en'><seg>a</tuv></tu></body></tmx>")


@pytest.mark.parametrize("tuv", [
    '<tuv xml:lang="en" xml:lang="fr"><seg>a</seg></tuv>',
    '<tuv xml:lang="en"><seg>a & b</seg></tuv>',
    '<tuv xml:lang="en"><seg>a&nbsp;b</seg></tuv>',
], ids=["duplicate-attribute", "bare-ampersand", "undeclared-entity"])
def test_ill_formed_variant_is_fatal(tuv):
    with pytest.raises(XmlSyntaxError):
        TmxReader().parse(f"<tmx><body><tu>{tuv}</tu></body></tmx>")


def test_missing_file_is_fatal(tmp_path):
    with pytest.raises(ReaderError):
        TmxReader().read(str(tmp_path / "missing.tmx"))
