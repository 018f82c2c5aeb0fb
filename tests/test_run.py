"""Tests for Run, its content variants and RunProperties."""

from lxml import etree

from python_dockit.constants import NSMAP_DOCUMENT, w, xmlns_declarations
from python_dockit.document.run import (
    Break,
    BreakType,
    FieldChar,
    FieldCharType,
    InstrText,
    Run,
    RunProperties,
    Text,
    VerticalAlignment,
)


def parse_fragment(xml: str) -> etree._Element:
    """Parse a w:-prefixed fragment by wrapping it in a namespaced root."""
    root = etree.fromstring(f"<root {xmlns_declarations(NSMAP_DOCUMENT)}>{xml}</root>")
    return root[0]


def child_names(element: etree._Element) -> list[str]:
    return [etree.QName(child).localname for child in element]


class TestRunContent:
    """Test that a run holds exactly one content value."""

    def test_new_run_is_empty(self) -> None:
        """A new run has no content and renders only its properties."""
        run = Run()
        assert run.content is None
        assert run.text == ""
        assert child_names(parse_fragment(run.to_xml())) == ["rPr"]

    def test_text_replaces_break(self) -> None:
        """Setting text replaces a previous break."""
        run = Run().add_break(BreakType.PAGE).add_text("after")
        assert isinstance(run.content, Text)
        assert "w:br" not in run.to_xml()

    def test_break_replaces_text(self) -> None:
        """Setting a break replaces previous text."""
        run = Run().add_text("before").add_break(BreakType.PAGE)
        assert run.content == Break(BreakType.PAGE)
        assert run.text == ""

    def test_add_tab_appends_to_text(self) -> None:
        """add_tab() extends existing text rather than replacing it."""
        run = Run().add_text("Name").add_tab()
        assert run.text == "Name\t"

    def test_page_break_xml(self) -> None:
        """Page breaks carry w:type; line breaks do not."""
        assert Break(BreakType.PAGE).to_xml() == '<w:br w:type="page"/>'
        assert Break().to_xml() == "<w:br/>"
        assert Run().add_break("column").content == Break(BreakType.COLUMN)

    def test_field_char_and_instruction(self) -> None:
        """Field markers and instructions render their own elements."""
        assert FieldChar(FieldCharType.BEGIN).to_xml() == '<w:fldChar w:fldCharType="begin"/>'
        assert InstrText("PAGE").to_xml() == (
            '<w:instrText xml:space="preserve"> PAGE </w:instrText>'
        )
        run = Run().add_field_char("end")
        assert run.content == FieldChar(FieldCharType.END)


class TestRunProperties:
    """Test w:rPr emission."""

    def test_defaults(self) -> None:
        """Defaults emit Calibri fonts, black color and 11pt size."""
        rpr = parse_fragment(RunProperties().to_xml())
        assert child_names(rpr) == ["rFonts", "color", "sz", "szCs"]
        assert rpr.find(w("rFonts")).get(w("ascii")) == "Calibri"
        assert rpr.find(w("sz")).get(w("val")) == "22"

    def test_empty_properties_render_nothing(self) -> None:
        """With every field cleared, no w:rPr element is written."""
        props = RunProperties(
            font_ascii=None, font_h_ansi=None, font_east_asia=None, font_cs=None,
            color=None, font_size=None,
        )
        assert props.to_xml() == ""

    def test_schema_order(self) -> None:
        """All properties set are emitted in schema order."""
        run = (
            Run()
            .set_style("Emphasis")
            .set_bold()
            .set_italic()
            .set_caps()
            .set_small_caps()
            .set_strike()
            .set_double_strike()
            .set_color("FF0000")
            .set_character_spacing(20)
            .set_font_size(28)
            .set_highlight("yellow")
            .set_underline("double")
            .set_shading("D9D9D9")
            .set_superscript()
            .set_rtl()
            .set_language("en-US", "zh-CN", "ar-SA")
        )
        rpr = parse_fragment(run.to_xml()).find(w("rPr"))
        assert child_names(rpr) == [
            "rStyle", "rFonts", "b", "bCs", "i", "iCs", "caps", "smallCaps", "strike",
            "dstrike", "color", "spacing", "sz", "szCs", "highlight", "u", "shd",
            "vertAlign", "rtl", "lang",
        ]

    def test_strike_and_double_strike_both_emitted(self) -> None:
        """Conflicting settings are not validated; both are written."""
        xml = Run().set_strike().set_double_strike().to_xml()
        assert "<w:strike/>" in xml
        assert "<w:dstrike/>" in xml

    def test_font_family_sets_all_slots(self) -> None:
        """set_font_family() applies to ascii, hAnsi, eastAsia and cs."""
        rpr = parse_fragment(Run().set_font_family("SimSun").to_xml()).find(w("rPr"))
        fonts = rpr.find(w("rFonts"))
        for slot in ("ascii", "hAnsi", "eastAsia", "cs"):
            assert fonts.get(w(slot)) == "SimSun"

    def test_subscript_replaces_superscript(self) -> None:
        """Vertical alignment holds a single value."""
        run = Run().set_superscript().set_subscript()
        assert run.properties.vertical_alignment is VerticalAlignment.SUBSCRIPT

    def test_negative_values_pass_through(self) -> None:
        """Out-of-range numbers are written verbatim."""
        assert '<w:spacing w:val="-40"/>' in Run().set_character_spacing(-40).to_xml()


class TestDeterminism:
    """Test that rendering has no side effects."""

    def test_to_xml_is_stable(self) -> None:
        """Rendering twice gives identical output."""
        run = Run().add_text("Stable & <same>").set_bold().set_color("1F4E79")
        assert run.to_xml() == run.to_xml()
