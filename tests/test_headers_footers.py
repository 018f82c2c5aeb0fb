"""Tests for header and footer parts and their section bindings."""

import io
import zipfile

from lxml import etree
from PIL import Image

from python_dockit import Document
from python_dockit.constants import RelationshipTypes, r, w
from python_dockit.document.drawing import Drawing
from python_dockit.document.header_footer import Footer, Header
from python_dockit.document.section import HeaderFooterType


def png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (16, 16)).save(buffer, format="PNG")
    return buffer.getvalue()


def parse_part(data: bytes | str) -> etree._Element:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return etree.fromstring(data)


class TestHeaderFooterParts:
    """Test the part objects themselves."""

    def test_part_names(self) -> None:
        """Parts are numbered per kind under the document directory."""
        header = Header(2)
        footer = Footer(1, HeaderFooterType.FIRST)
        assert header.part_name == "document/header2.xml"
        assert footer.filename == "footer1.xml"
        assert header.relationships.rels_path == "document/_rels/header2.xml.rels"

    def test_empty_part_has_paragraph(self) -> None:
        """An empty header still contains one paragraph."""
        root = parse_part(Header(1).to_xml())
        assert root.tag == w("hdr")
        assert [child.tag for child in root] == [w("p")]

    def test_footer_content(self) -> None:
        """Footer content renders under w:ftr."""
        footer = Footer(1)
        footer.add_paragraph("Confidential")
        root = parse_part(footer.to_xml())
        assert root.tag == w("ftr")
        assert root.find(f".//{w('t')}").text == "Confidential"


class TestDocumentBindings:
    """Test header and footer registration on a Document."""

    def test_relationships_after_fixed_parts(self) -> None:
        """Headers then footers follow styles, numbering, settings and theme."""
        doc = Document()
        footer = doc.add_footer_with_reference()
        header = doc.add_header_with_reference()
        doc.allocate_ids()
        assert header.rel_id == "rId5"
        assert footer.rel_id == "rId6"
        assert doc.relationships.get_by_id("rId5").type == RelationshipTypes.HEADER
        assert doc.relationships.get_by_id("rId6").target == "footer1.xml"

    def test_section_references_resolved(self) -> None:
        """sectPr references carry the allocated relationship IDs."""
        doc = Document()
        doc.add_header_with_reference(HeaderFooterType.DEFAULT)
        doc.add_footer_with_reference(HeaderFooterType.FIRST)
        doc.allocate_ids()
        root = parse_part(doc.document_xml())
        sect = root.find(f"{w('body')}/{w('sectPr')}")
        header_ref = sect.find(w("headerReference"))
        footer_ref = sect.find(w("footerReference"))
        assert header_ref.get(r("id")) == "rId5"
        assert footer_ref.get(r("id")) == "rId6"
        assert footer_ref.get(w("type")) == "first"
        assert sect.find(w("titlePg")) is not None

    def test_even_reference_enables_setting(self) -> None:
        """Binding an even-page header turns on evenAndOddHeaders."""
        doc = Document()
        doc.add_header_with_reference(HeaderFooterType.EVEN)
        assert doc.settings.even_and_odd_headers
        assert b"<w:evenAndOddHeaders/>" in doc.to_package().get_part("document/settings.xml")

    def test_literal_relationship_id(self) -> None:
        """A reference can name a relationship ID directly."""
        doc = Document()
        doc.add_footer_reference("default", "rId42")
        root = parse_part(doc.document_xml())
        assert root.find(f".//{w('footerReference')}").get(r("id")) == "rId42"

    def test_parts_and_content_types(self) -> None:
        """Header and footer parts are packaged with overrides."""
        doc = Document()
        doc.add_header_with_reference().add_paragraph("Head")
        doc.add_footer_with_reference().add_page_number("Page ")
        with zipfile.ZipFile(io.BytesIO(doc.save_to_bytes())) as zf:
            names = zf.namelist()
            content_types = zf.read("[Content_Types].xml").decode("utf-8")
            footer = parse_part(zf.read("document/footer1.xml"))
        assert "document/header1.xml" in names
        assert "document/footer1.xml" in names
        assert 'PartName="/document/header1.xml"' in content_types
        assert footer.find(f".//{w('instrText')}").text.strip() == "PAGE"

    def test_header_image_uses_part_relationships(self) -> None:
        """Images in a header get IDs from the header's own relationship set."""
        doc = Document()
        doc.add_image_bytes(png_bytes(), "png")
        header = doc.add_header_with_reference()
        drawing = Drawing.from_bytes(png_bytes(), "png")
        header.add_paragraph().add_drawing(drawing)
        writer = doc.to_package()

        assert drawing.rel_id == "rId1"
        assert drawing.target == "media/image2.png"
        rels = parse_part(writer.get_part("document/_rels/header1.xml.rels"))
        assert rels[0].get("Target") == "media/image2.png"
        assert writer.get_part("document/media/image2.png") == drawing.image_data
        assert len(doc.relationships) == 6

    def test_header_without_images_has_no_rels_part(self) -> None:
        """A header with no relationships writes no .rels part."""
        doc = Document()
        doc.add_header_with_reference().add_paragraph("Text only")
        assert "document/_rels/header1.xml.rels" not in doc.to_package().part_names()
