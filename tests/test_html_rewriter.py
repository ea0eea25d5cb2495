"""Tests for MarkupParser - document scan and node-anchored substitution."""

import pytest
from sdmarkup.parsers import MarkupParser
from sdmarkup.parsers.html_rewriter import _find_attribute_text

MOVIE_SCOPE = "itemscope itemtype='https://schema.org/Movie'"
PERSON_SCOPE = "itemscope itemtype='https://schema.org/Person'"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("SDMARKUP_SEMANTIC", raising=False)
    monkeypatch.delenv("SDMARKUP_SUFFIXES", raising=False)


@pytest.fixture
def parser(vocabulary) -> MarkupParser:
    return MarkupParser("microdata", vocabulary=vocabulary)


# ─── Document rewriting ──────────────────────────────────────────────────────


class TestParse:
    def test_nested_document(self, parser):
        html = (
            '<div data-sd="Movie">\n'
            '  <h1 data-sd="name">Avatar</h1>\n'
            '  <div data-sd="director.Person">\n'
            '    <span data-sd="name">James Cameron</span>\n'
            "  </div>\n"
            "</div>"
        )
        assert parser.parse(html) == (
            f"<div {MOVIE_SCOPE}>\n"
            "  <h1 itemprop='name'>Avatar</h1>\n"
            f"  <div itemprop='director' {PERSON_SCOPE}>\n"
            "    <span itemprop='name'>James Cameron</span>\n"
            "  </div>\n"
            "</div>"
        )

    def test_no_directives_returns_input(self, parser):
        html = "<div class='x'><p>Hello<br></div>"
        assert parser.parse(html) == html

    def test_empty_input(self, parser):
        assert parser.parse("") == ""

    def test_rest_of_document_untouched(self, parser):
        html = (
            "<!DOCTYPE html>\n"
            "<html><body>\n"
            '<DIV class="card" Data-SD=\'Person\' id=p1>\n'
            "  <B id=t data-sd=name>Alice</B> &amp; friends\n"
            "</DIV>\n"
            "</body></html>"
        )
        assert parser.parse(html) == (
            "<!DOCTYPE html>\n"
            "<html><body>\n"
            f'<DIV class="card" {PERSON_SCOPE} id=p1>\n'
            "  <B id=t itemprop='name'>Alice</B> &amp; friends\n"
            "</DIV>\n"
            "</body></html>"
        )

    def test_attributes_across_lines(self, parser):
        html = '<div\n   class="a"\n   data-sd="Movie"\n>x</div>'
        assert parser.parse(html) == f'<div\n   class="a"\n   {MOVIE_SCOPE}\n>x</div>'

    def test_malformed_html_still_rewritten(self, parser):
        html = '<div data-sd="Person"><p data-sd="name">Alice</div></span>'
        assert parser.parse(html) == f"<div {PERSON_SCOPE}><p itemprop='name'>Alice</div></span>"

    def test_valueless_directive(self, parser):
        assert parser.parse("<div data-sd>x</div>") == "<div >x</div>"

    def test_disabled_parser_strips_directives(self, vocabulary):
        parser = MarkupParser("microdata", vocabulary=vocabulary, enabled=False)
        assert parser.parse('<div data-sd="Movie">x</div>') == "<div >x</div>"

    def test_rdfa(self, vocabulary):
        parser = MarkupParser("rdfa", vocabulary=vocabulary)
        html = '<div data-sd="Movie"><h1 data-sd="name">Avatar</h1></div>'
        assert parser.parse(html) == (
            "<div vocab='https://schema.org' typeof='Movie'><h1 property='name'>Avatar</h1></div>"
        )

    def test_bundled_vocabulary(self):
        parser = MarkupParser("microdata")
        html = (
            '<div data-sd="Product"><span data-sd="name">Widget</span>'
            '<div data-sd="offers.Offer"><span data-sd="price">9.99</span>'
            '<meta data-sd="priceCurrency" content="USD"></div></div>'
        )
        assert parser.parse(html) == (
            "<div itemscope itemtype='https://schema.org/Product'><span itemprop='name'>Widget</span>"
            "<div itemprop='offers' itemscope itemtype='https://schema.org/Offer'><span itemprop='price'>9.99</span>"
            "<meta itemprop='priceCurrency' content=\"USD\"></div></div>"
        )


# ─── Node anchoring ──────────────────────────────────────────────────────────


class TestNodeAnchoring:
    """Each fragment replaces the attribute of its own element."""

    def test_comment_text_is_not_replaced(self, parser):
        html = '<!-- <b data-sd="name"> -->\n<div data-sd="Person"><b data-sd="name">x</b></div>'
        assert parser.parse(html) == (
            f"<!-- <b data-sd=\"name\"> -->\n<div {PERSON_SCOPE}><b itemprop='name'>x</b></div>"
        )

    def test_script_text_is_not_replaced(self, parser):
        html = (
            "<script>var tpl = '<b data-sd=\"name\">';</script>"
            '<div data-sd="Person"><b data-sd="name">x</b></div>'
        )
        assert parser.parse(html) == (
            "<script>var tpl = '<b data-sd=\"name\">';</script>"
            f"<div {PERSON_SCOPE}><b itemprop='name'>x</b></div>"
        )

    def test_repeated_directives_each_replaced(self, parser):
        html = '<ul data-sd="Person"><li data-sd="name">a</li><li data-sd="name">b</li></ul>'
        assert parser.parse(html) == (
            f"<ul {PERSON_SCOPE}><li itemprop='name'>a</li><li itemprop='name'>b</li></ul>"
        )

    def test_repeated_attribute_keeps_first_value(self, parser):
        """Only the first data-sd of a start tag counts; later copies are removed."""
        html = '<div data-sd="Movie" data-sd="Person"><b data-sd="director.Person">x</b></div>'
        assert parser.parse(html) == f"<div {MOVIE_SCOPE} ><b itemprop='director' {PERSON_SCOPE}>x</b></div>"

    def test_text_fallback_skips_claimed_offsets(self):
        source = "<a data-sd=\"name\"></a><b data-sd='name'></b>"
        first = _find_attribute_text(source, "data-sd", "name", set())
        assert first == (3, 17)
        second = _find_attribute_text(source, "data-sd", "name", {first[0]})
        assert source[second[0] : second[1]] == "data-sd='name'"
        assert _find_attribute_text(source, "data-sd", "name", {first[0], second[0]}) is None

    def test_deterministic_across_runs(self, parser):
        html = '<div data-sd="Movie"><div data-sd="director.Person"><b data-sd="name">x</b></div></div>'
        first = parser.parse(html)
        assert parser.parse(html) == first
        assert parser.get_handler().get_type() == "Person"

    def test_type_reset_between_documents(self, parser):
        parser.parse('<div data-sd="Person"></div>')
        # Thing declares name; Person's jobTitle must not leak into the next document
        assert parser.parse('<b data-sd="jobTitle name">x</b>') == "<b itemprop='name'>x</b>"


# ─── Configuration ───────────────────────────────────────────────────────────


class TestSuffixes:
    def test_default_suffix(self, parser):
        assert parser.get_suffix() == ["sd"]

    def test_extra_suffix(self, vocabulary):
        parser = MarkupParser("microdata", suffix="item", vocabulary=vocabulary)
        assert parser.get_suffix() == ["sd", "item"]
        assert parser.parse('<div data-item="Person"><b data-item="name">x</b></div>') == (
            f"<div {PERSON_SCOPE}><b itemprop='name'>x</b></div>"
        )

    def test_suffix_list_normalized(self, parser):
        parser.suffix([" Item ", "item", "", "SD", "meta"])
        assert parser.get_suffix() == ["sd", "item", "meta"]

    def test_first_configured_suffix_wins(self, vocabulary):
        parser = MarkupParser("microdata", suffix="item", vocabulary=vocabulary)
        html = '<div data-sd="Person"><b data-item="Movie" data-sd="name">x</b></div>'
        assert parser.parse(html) == f"<div {PERSON_SCOPE}><b data-item=\"Movie\" itemprop='name'>x</b></div>"

    def test_remove_suffix(self, vocabulary):
        parser = MarkupParser("microdata", suffix="item", vocabulary=vocabulary)
        parser.remove_suffix(" SD")
        assert parser.get_suffix() == ["item"]
        html = '<div data-sd="Movie"></div><div data-item="Movie"></div>'
        assert parser.parse(html) == f'<div data-sd="Movie"></div><div {MOVIE_SCOPE}></div>'

    def test_no_suffixes_returns_input(self, parser):
        parser.remove_suffix("sd")
        html = '<div data-sd="Movie"></div>'
        assert parser.parse(html) == html

    def test_get_suffix_returns_copy(self, parser):
        parser.get_suffix().append("x")
        assert parser.get_suffix() == ["sd"]

    def test_env_suffixes(self, vocabulary, monkeypatch):
        monkeypatch.setenv("SDMARKUP_SUFFIXES", "sd, Item")
        assert MarkupParser("microdata", vocabulary=vocabulary).get_suffix() == ["sd", "item"]


class TestSemantic:
    def test_invalid_semantic_rejected(self, vocabulary):
        with pytest.raises(ValueError, match="json-ld"):
            MarkupParser("json-ld", vocabulary=vocabulary)

    def test_switch_semantic(self, parser):
        parser.semantic(" RDFa ")
        assert parser.get_semantic() == "rdfa"
        assert parser.get_handler().get_semantic() == "rdfa"

    def test_env_default_semantic(self, vocabulary, monkeypatch):
        monkeypatch.setenv("SDMARKUP_SEMANTIC", "rdfa")
        assert MarkupParser(vocabulary=vocabulary).get_semantic() == "rdfa"
