"""Tests for section properties and section breaks."""

import pytest
from lxml import etree

from python_dockit.constants import NSMAP_DOCUMENT, PAGE_SIZE_A4, r, w, xmlns_declarations
from python_dockit.document.body import Body
from python_dockit.document.section import (
    HeaderFooterType,
    Orientation,
    SectionProperties,
    SectionType,
)


def parse_fragment(xml: str) -> etree._Element:
    """Parse a w:-prefixed fragment by wrapping it in a namespaced root."""
    root = etree.fromstring(f"<root {xmlns_declarations(NSMAP_DOCUMENT)}>{xml}</root>")
    return root[0]


def child_names(element: etree._Element) -> list[str]:
    return [etree.QName(child).localname for child in element]


class TestSectionProperties:
    """Test w:sectPr emission."""

    def test_defaults(self) -> None:
        """A default section is US Letter portrait with one-inch margins."""
        sect = parse_fragment(SectionProperties().to_xml())
        assert child_names(sect) == ["pgSz", "pgMar", "cols", "docGrid"]
        pg_sz = sect.find(w("pgSz"))
        assert (pg_sz.get(w("w")), pg_sz.get(w("h"))) == ("12240", "15840")
        assert pg_sz.get(w("orient")) == "portrait"
        assert sect.find(w("pgMar")).get(w("top")) == "1440"

    def test_a4_landscape_preset(self) -> None:
        """Landscape presets swap width and height."""
        section = SectionProperties().set_page_size_preset("A4", "landscape")
        assert section.page_size.width == PAGE_SIZE_A4[1]
        assert section.page_size.height == PAGE_SIZE_A4[0]
        assert section.page_size.orientation is Orientation.LANDSCAPE

    def test_unknown_preset(self) -> None:
        """Unknown preset names raise KeyError."""
        with pytest.raises(KeyError):
            SectionProperties().set_page_size_preset("tabloid")

    def test_explicit_size_used_verbatim(self) -> None:
        """set_page_size() does not swap sides for landscape."""
        section = SectionProperties().set_page_size(12240, 15840, Orientation.LANDSCAPE)
        assert section.page_size.width == 12240

    def test_columns_and_margins(self) -> None:
        """Columns and margins are written as given."""
        section = SectionProperties().set_columns(2, 360).set_page_margin(720, 720, 720, 720)
        sect = parse_fragment(section.to_xml())
        assert sect.find(w("cols")).get(w("num")) == "2"
        assert sect.find(w("cols")).get(w("space")) == "360"
        assert sect.find(w("pgMar")).get(w("left")) == "720"

    def test_line_pitch(self) -> None:
        """The document grid line pitch is configurable."""
        sect = parse_fragment(SectionProperties().set_line_pitch(312).to_xml())
        assert sect.find(w("docGrid")).get(w("linePitch")) == "312"

    def test_references_precede_page_setup(self) -> None:
        """Header and footer references come first, and titlePg before docGrid."""
        section = SectionProperties()
        section.add_header_reference(HeaderFooterType.DEFAULT, "rId7")
        section.add_footer_reference("first", "rId8")
        sect = parse_fragment(section.to_xml())
        assert child_names(sect) == [
            "headerReference", "footerReference", "pgSz", "pgMar", "cols", "titlePg", "docGrid",
        ]
        assert sect.find(w("headerReference")).get(r("id")) == "rId7"
        assert sect.find(w("footerReference")).get(w("type")) == "first"

    def test_title_page_without_first_reference(self) -> None:
        """titlePg can be set explicitly."""
        sect = parse_fragment(SectionProperties().set_title_page().to_xml())
        assert sect.find(w("titlePg")) is not None


class TestSectionBreaks:
    """Test Body.add_section_break()."""

    def test_break_paragraph_carries_section(self) -> None:
        """The break paragraph holds the properties of the section it closes."""
        body = Body()
        body.section_properties.set_page_size_preset("a4")
        body.add_paragraph("first section")
        closing = body.add_section_break(SectionType.CONTINUOUS)
        body.section_properties.set_page_size_preset("a4", "landscape")

        closed = closing.properties.section_properties
        assert closed.page_size.orientation is Orientation.PORTRAIT
        assert body.section_properties.page_size.orientation is Orientation.LANDSCAPE
        assert body.section_properties.section_type is SectionType.CONTINUOUS

    def test_body_xml_layout(self) -> None:
        """sectPr is the last child of the body and of the break paragraph's pPr."""
        body = Body()
        body.add_paragraph("one")
        body.add_section_break()
        body.add_paragraph("two")
        element = parse_fragment(body.to_xml())
        assert child_names(element) == ["p", "p", "p", "sectPr"]
        break_ppr = element[1].find(w("pPr"))
        assert child_names(break_ppr)[-1] == "sectPr"
        assert element[-1].find(w("type")).get(w("val")) == "nextPage"

    def test_page_break(self) -> None:
        """add_page_break() appends a paragraph with a page break run."""
        body = Body()
        body.add_page_break()
        br = parse_fragment(body.to_xml()).find(f".//{w('br')}")
        assert br.get(w("type")) == "page"
