"""Tests for the string XML helpers and text escaping in runs."""

from lxml import etree

from python_dockit.constants import NSMAP_DOCUMENT, w, xmlns_declarations
from python_dockit.document.run import Run
from python_dockit.xmlutil import XML_DECLARATION, attrs, empty_element, escape_xml, on_off


def parse_fragment(xml: str) -> etree._Element:
    """Parse a w:-prefixed fragment by wrapping it in a namespaced root."""
    root = etree.fromstring(f"<root {xmlns_declarations(NSMAP_DOCUMENT)}>{xml}</root>")
    return root[0]


class TestEscapeXml:
    """Test escape_xml()."""

    def test_escapes_all_five_entities(self) -> None:
        """Ampersand, angle brackets and both quotes become entities."""
        assert escape_xml("& < > \" '") == "&amp; &lt; &gt; &quot; &apos;"

    def test_ampersand_escaped_first(self) -> None:
        """Existing entities are escaped again rather than passed through."""
        assert escape_xml("&lt;") == "&amp;lt;"

    def test_plain_text_unchanged(self) -> None:
        """Text without special characters is returned as-is."""
        assert escape_xml("Quarterly report 2024") == "Quarterly report 2024"

    def test_invalid_xml_characters_dropped(self) -> None:
        """Control characters XML 1.0 forbids are removed; tab and newline stay."""
        assert escape_xml("a\x00b\x0bc\x1fd") == "abcd"
        assert escape_xml("a\tb\nc\rd") == "a\tb\nc\rd"

    def test_unicode_unchanged(self) -> None:
        """Non-ASCII characters are not escaped."""
        assert escape_xml("中文 – ünïcode") == "中文 – ünïcode"


class TestAttrs:
    """Test attrs() and empty_element()."""

    def test_keeps_order_and_skips_none(self) -> None:
        """Attributes render in the given order; None values are dropped."""
        result = attrs(("w:val", "single"), ("w:sz", 4), ("w:color", None))
        assert result == ' w:val="single" w:sz="4"'

    def test_zero_is_not_skipped(self) -> None:
        """Zero is a real value and is emitted."""
        assert attrs(("w:space", 0)) == ' w:space="0"'

    def test_values_are_escaped(self) -> None:
        """Attribute values are escaped."""
        assert attrs(("name", 'a "b" & c')) == ' name="a &quot;b&quot; &amp; c"'

    def test_empty_element(self) -> None:
        """empty_element() renders a self-closing tag."""
        assert empty_element("w:jc", ("w:val", "center")) == '<w:jc w:val="center"/>'

    def test_on_off(self) -> None:
        """Booleans render as 1 and 0."""
        assert on_off(True) == "1"
        assert on_off(False) == "0"

    def test_declaration(self) -> None:
        """The declaration is standalone UTF-8."""
        assert XML_DECLARATION.startswith('<?xml version="1.0" encoding="UTF-8" standalone="yes"?>')


class TestRunTextEscaping:
    """Test that run text is escaped and nothing else changes."""

    def test_special_characters_in_text(self) -> None:
        """A run with < & " emits entities in its w:t."""
        xml = Run().add_text('Price < 5 & "cheap"').to_xml()
        assert '<w:t xml:space="preserve">Price &lt; 5 &amp; &quot;cheap&quot;</w:t>' in xml

    def test_escaped_text_round_trips(self) -> None:
        """Parsing the escaped run returns the original text."""
        original = "Hello & <World> 'quoted'"
        run = parse_fragment(Run().add_text(original).to_xml())
        assert run.find(w("t")).text == original

    def test_tabs_and_newlines(self) -> None:
        """Tabs and newlines become w:tab and w:br between text segments."""
        run = parse_fragment(Run().add_text("a\tb\nc").to_xml())
        tags = [etree.QName(child).localname for child in run if child.tag != w("rPr")]
        assert tags == ["t", "tab", "t", "br", "t"]

    def test_control_characters_removed_from_text(self) -> None:
        """A vertical tab pasted into run text does not break the part."""
        run = parse_fragment(Run().add_text("line\x0bbreak").to_xml())
        assert run.find(w("t")).text == "linebreak"
