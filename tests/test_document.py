"""End-to-end tests for Document packaging."""

import io
import zipfile
from datetime import datetime, timezone

from lxml import etree
from PIL import Image

from python_dockit import Document
from python_dockit.constants import (
    CONTENT_TYPES_NAMESPACE,
    PACKAGE_RELATIONSHIPS_NAMESPACE,
    RelationshipTypes,
    w,
)

EXPECTED_PARTS = [
    "[Content_Types].xml",
    "_rels/.rels",
    "docProps/app.xml",
    "docProps/core.xml",
    "document/document.xml",
    "document/styles.xml",
    "document/numbering.xml",
    "document/theme/theme1.xml",
    "document/settings.xml",
    "document/_rels/document.xml.rels",
]


def png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8)).save(buffer, format="PNG")
    return buffer.getvalue()


def build_sample_document() -> Document:
    doc = Document()
    doc.set_title("Quarterly report").set_creator("Finance")
    doc.set_created(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
    doc.set_modified(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
    doc.add_heading("Summary", 1)
    doc.add_paragraph("Revenue grew.").set_alignment("both")
    bullets = doc.numbering.create_bullet_list()
    doc.add_paragraph("North").set_numbering(bullets)
    table = doc.add_table(2, 2)
    table.cell(0, 0).add_text("Region")
    doc.add_image_bytes(png_bytes(), "png")
    doc.add_header_with_reference().add_paragraph("Header")
    doc.add_footer_with_reference().add_page_number("Page ")
    return doc


class TestEndToEnd:
    """Test saving complete documents."""

    def test_hello_world(self, tmp_path) -> None:
        """Escaped text and the document override reach the saved package."""
        doc = Document()
        doc.add_paragraph().add_text("Hello & <World>")
        path = tmp_path / "hello.docx"
        doc.save(path)

        with zipfile.ZipFile(path) as zf:
            document_xml = zf.read("document/document.xml").decode("utf-8")
            content_types = etree.fromstring(zf.read("[Content_Types].xml"))
        assert '<w:t xml:space="preserve">Hello &amp; &lt;World&gt;</w:t>' in document_xml
        overrides = {
            el.get("PartName"): el.get("ContentType")
            for el in content_types.iter(f"{{{CONTENT_TYPES_NAMESPACE}}}Override")
        }
        assert "/document/document.xml" in overrides

    def test_part_order(self) -> None:
        """The manifest comes first and document parts precede the rels declaring them."""
        names = Document().to_package().part_names()
        assert names == EXPECTED_PARTS

    def test_save_to_stream(self) -> None:
        """save() accepts a writable binary stream."""
        buffer = io.BytesIO()
        Document().save(buffer)
        with zipfile.ZipFile(io.BytesIO(buffer.getvalue())) as zf:
            assert zf.namelist() == EXPECTED_PARTS

    def test_save_overwrites(self, tmp_path) -> None:
        """Saving to an existing path truncates it."""
        path = tmp_path / "out.docx"
        path.write_bytes(b"x" * 100_000)
        Document().save(path)
        assert zipfile.is_zipfile(path)

    def test_package_relationships(self) -> None:
        """_rels/.rels points at the document and both property parts."""
        rels = etree.fromstring(Document().to_package().get_part("_rels/.rels"))
        targets = {
            el.get("Type"): el.get("Target")
            for el in rels.iter(f"{{{PACKAGE_RELATIONSHIPS_NAMESPACE}}}Relationship")
        }
        assert targets[RelationshipTypes.OFFICE_DOCUMENT] == "document/document.xml"
        assert targets[RelationshipTypes.CORE_PROPERTIES] == "docProps/core.xml"

    def test_fixed_relationship_ids(self) -> None:
        """Styles, numbering, settings and theme take rId1-rId4."""
        doc = Document()
        doc.allocate_ids()
        assert [rel.type for rel in doc.relationships] == [
            RelationshipTypes.STYLES,
            RelationshipTypes.NUMBERING,
            RelationshipTypes.SETTINGS,
            RelationshipTypes.THEME,
        ]

    def test_heading_uses_heading_style(self) -> None:
        """add_heading() creates the heading style on demand."""
        doc = Document()
        paragraph = doc.add_heading("Title", 2)
        assert paragraph.properties.style == "Heading2"
        assert "Heading2" in doc.styles


class TestRelationshipRoundTrip:
    """Test that every minted relationship ID is referenced exactly once."""

    def test_each_id_appears_once(self) -> None:
        """Header, footer and image IDs appear once in rels and once in content."""
        doc = build_sample_document()
        writer = doc.to_package()
        rels_xml = writer.get_part("document/_rels/document.xml.rels").decode("utf-8")
        document_xml = writer.get_part("document/document.xml").decode("utf-8")

        minted = [
            rel.id
            for rel in doc.relationships
            if rel.type
            in (RelationshipTypes.HEADER, RelationshipTypes.FOOTER, RelationshipTypes.IMAGE)
        ]
        assert len(minted) == 3
        for rel_id in minted:
            assert rels_xml.count(f'Id="{rel_id}"') == 1
            assert document_xml.count(f'"{rel_id}"') == 1

    def test_relationship_ids_unique(self) -> None:
        """No relationship ID repeats within a part."""
        doc = build_sample_document()
        doc.allocate_ids()
        ids = [rel.id for rel in doc.relationships]
        assert len(ids) == len(set(ids))

    def test_allocation_is_repeatable(self) -> None:
        """Running the allocation pass twice yields the same IDs."""
        doc = build_sample_document()
        doc.allocate_ids()
        first = [(rel.id, rel.target) for rel in doc.relationships]
        doc.allocate_ids()
        assert [(rel.id, rel.target) for rel in doc.relationships] == first

    def test_declared_relationship(self) -> None:
        """Caller-declared relationships come after images."""
        doc = Document()
        doc.add_image_bytes(png_bytes(), "png")
        link = doc.add_relationship(RelationshipTypes.HYPERLINK, "https://example.com", True)
        doc.allocate_ids()
        assert link.rel_id == "rId6"
        assert doc.relationships.get_by_id("rId6").is_external


class TestDeterminism:
    """Test that rendering an unchanged document is stable."""

    def test_parts_identical_across_renders(self) -> None:
        """Two renders of the same document produce identical parts."""
        doc = build_sample_document()
        first = doc.to_package()
        second = doc.to_package()
        assert first.part_names() == second.part_names()
        for name in first.part_names():
            assert first.get_part(name) == second.get_part(name)

    def test_document_xml_is_well_formed(self) -> None:
        """document.xml parses and holds body content before sectPr."""
        doc = build_sample_document()
        doc.allocate_ids()
        root = etree.fromstring(doc.document_xml().encode("utf-8"))
        body = root.find(w("body"))
        assert etree.QName(body[-1]).localname == "sectPr"
        assert [etree.QName(child).localname for child in body[:-1]] == [
            "p", "p", "p", "tbl", "p",
        ]


class TestDocumentSetters:
    """Test the property and page setup passthroughs."""

    def test_core_property_setters(self) -> None:
        """Metadata setters land in docProps/core.xml."""
        doc = Document().set_subject("Q3").set_keywords("sales, north")
        doc.set_description("Draft").set_last_modified_by("Reviewer").set_revision(4)
        core = doc.core_properties
        assert (core.subject, core.keywords, core.description) == ("Q3", "sales, north", "Draft")
        assert core.last_modified_by == "Reviewer"
        xml = doc.to_package().get_part("docProps/core.xml")
        assert b"<cp:revision>4</cp:revision>" in xml

    def test_page_number_paragraph(self) -> None:
        """The page-number paragraph is centered; its text includes the field placeholder."""
        para = Document().add_page_number_paragraph("Page ")
        assert para.properties.alignment == "center"
        assert para.text == "Page 1"

    def test_page_size_presets(self) -> None:
        """Letter and A5 presets set the section page size."""
        doc = Document().set_page_size_letter()
        assert doc.body.section_properties.page_size.width == 12240
        doc.set_page_size_a5(landscape=True)
        page_size = doc.body.section_properties.page_size
        assert (page_size.width, page_size.height) == (11906, 8419)
