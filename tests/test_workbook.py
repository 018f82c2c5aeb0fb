"""End-to-end tests for Workbook packaging."""

import io
import zipfile
from datetime import date

from lxml import etree

from python_dockit import Workbook
from python_dockit.constants import (
    CONTENT_TYPES_NAMESPACE,
    PACKAGE_RELATIONSHIPS_NAMESPACE,
    RelationshipTypes,
    r,
    x,
)


def open_package(book: Workbook) -> zipfile.ZipFile:
    return zipfile.ZipFile(io.BytesIO(book.save_to_bytes()))


class TestSharedStringScenario:
    """Test interning through the workbook API."""

    def test_overwritten_string_still_interned(self, tmp_path) -> None:
        """Writing "Total" then "Sum" to A1 leaves two shared strings."""
        book = Workbook()
        sheet = book.add_worksheet("Report")
        sheet.add_cell("A1", "Total")
        sheet.add_cell("A1", "Sum")
        path = tmp_path / "report.xlsx"
        book.save(path)

        assert len(book.shared_strings) == 2
        assert sheet.get_cell("A1").value == "Sum"
        with zipfile.ZipFile(path) as zf:
            sst = etree.fromstring(zf.read("xl/sharedStrings.xml"))
            sheet_xml = etree.fromstring(zf.read("xl/worksheets/sheet1.xml"))
        assert sst.get("uniqueCount") == "2"
        assert sheet_xml.find(f".//{x('c')}/{x('v')}").text == "1"

    def test_repeated_string_one_entry(self) -> None:
        """The same text in many cells is stored once."""
        book = Workbook()
        sheet = book.add_worksheet()
        for row in range(1, 6):
            sheet.add_cell(f"A{row}", "North")
        assert book.shared_strings.unique_count == 1
        assert book.shared_strings.count == 5


class TestWorksheets:
    """Test worksheet management."""

    def test_default_names_and_ids(self) -> None:
        """Unnamed sheets are called Sheet<N>."""
        book = Workbook()
        first = book.add_worksheet()
        second = book.add_worksheet("Summary")
        third = book.add_worksheet()
        assert (first.name, second.name, third.name) == ("Sheet1", "Summary", "Sheet3")
        assert third.part_name == "xl/worksheets/sheet3.xml"
        assert book.get_worksheet("Summary") is second
        assert book.get_worksheet("Missing") is None

    def test_duplicate_name_warns(self, caplog) -> None:
        """Duplicate sheet names are allowed but logged."""
        book = Workbook()
        book.add_worksheet("Data")
        with caplog.at_level("WARNING"):
            book.add_worksheet("Data")
        assert "Duplicate worksheet name 'Data'" in caplog.text

    def test_long_name_warns(self, caplog) -> None:
        """Names over 31 characters are logged."""
        with caplog.at_level("WARNING"):
            Workbook().add_worksheet("A" * 32)
        assert "longer than 31 characters" in caplog.text

    def test_empty_workbook_gets_sheet(self, caplog) -> None:
        """Saving without sheets adds an empty Sheet1."""
        book = Workbook()
        with caplog.at_level("WARNING"):
            with open_package(book) as zf:
                assert "xl/worksheets/sheet1.xml" in zf.namelist()
        assert book.worksheets[0].name == "Sheet1"
        assert "no worksheets" in caplog.text

    def test_sheet_styles_shared(self) -> None:
        """Date cells use the workbook's stylesheet."""
        book = Workbook()
        cell = book.add_worksheet().add_cell("A1", date(2024, 1, 1))
        assert book.styles.cell_formats[cell.style].number_format_id == 14


class TestPackage:
    """Test the .xlsx package layout."""

    def test_part_order(self) -> None:
        """The manifest comes first and workbook parts precede the rels declaring them."""
        book = Workbook()
        book.add_worksheet()
        book.add_worksheet()
        assert book.to_package().part_names() == [
            "[Content_Types].xml",
            "_rels/.rels",
            "docProps/app.xml",
            "docProps/core.xml",
            "xl/workbook.xml",
            "xl/worksheets/sheet1.xml",
            "xl/worksheets/sheet2.xml",
            "xl/styles.xml",
            "xl/theme/theme1.xml",
            "xl/sharedStrings.xml",
            "xl/_rels/workbook.xml.rels",
        ]

    def test_workbook_relationships(self) -> None:
        """Styles, theme and shared strings precede worksheets."""
        book = Workbook()
        book.add_worksheet("One")
        book.add_worksheet("Two")
        with open_package(book) as zf:
            rels = etree.fromstring(zf.read("xl/_rels/workbook.xml.rels"))
            workbook = etree.fromstring(zf.read("xl/workbook.xml"))
        entries = [
            (el.get("Id"), el.get("Target"))
            for el in rels.iter(f"{{{PACKAGE_RELATIONSHIPS_NAMESPACE}}}Relationship")
        ]
        assert entries == [
            ("rId1", "styles.xml"),
            ("rId2", "theme/theme1.xml"),
            ("rId3", "sharedStrings.xml"),
            ("rId4", "worksheets/sheet1.xml"),
            ("rId5", "worksheets/sheet2.xml"),
        ]
        sheets = workbook.find(x("sheets"))
        assert [(s.get("name"), s.get("sheetId"), s.get(r("id"))) for s in sheets] == [
            ("One", "1", "rId4"),
            ("Two", "2", "rId5"),
        ]

    def test_workbook_xml_before_allocation(self) -> None:
        """workbook.xml renders before IDs are allocated; sheets get r:id afterwards."""
        book = Workbook()
        book.add_worksheet("Summary")
        path = f"{x('sheets')}/{x('sheet')}"
        sheet = etree.fromstring(book.workbook_xml().encode("utf-8")).find(path)
        assert sheet.get("name") == "Summary"
        assert sheet.get(r("id")) is None
        book.allocate_ids()
        sheet = etree.fromstring(book.workbook_xml().encode("utf-8")).find(path)
        assert sheet.get(r("id")) == "rId4"

    def test_content_types(self) -> None:
        """Every XML part has an override with its content type."""
        book = Workbook()
        book.add_worksheet()
        with open_package(book) as zf:
            manifest = etree.fromstring(zf.read("[Content_Types].xml"))
            names = zf.namelist()
        overrides = {
            el.get("PartName")
            for el in manifest.iter(f"{{{CONTENT_TYPES_NAMESPACE}}}Override")
        }
        for name in names:
            if name.endswith(".xml") and name != "[Content_Types].xml":
                assert f"/{name}" in overrides

    def test_package_relationship_targets_workbook(self) -> None:
        """_rels/.rels points the office document at xl/workbook.xml."""
        book = Workbook()
        book.add_worksheet()
        rels = etree.fromstring(book.to_package().get_part("_rels/.rels"))
        targets = {
            el.get("Type"): el.get("Target")
            for el in rels.iter(f"{{{PACKAGE_RELATIONSHIPS_NAMESPACE}}}Relationship")
        }
        assert targets[RelationshipTypes.OFFICE_DOCUMENT] == "xl/workbook.xml"

    def test_styled_cells_round_trip(self) -> None:
        """A styled cell references the xf written to styles.xml."""
        book = Workbook()
        sheet = book.add_worksheet()
        header = book.create_style(bold=True, fill_color="DDEBF7", border_style="thin")
        sheet.add_cell("A1", "Region")
        sheet.set_cell_style("A1", header)
        with open_package(book) as zf:
            styles = etree.fromstring(zf.read("xl/styles.xml"))
            sheet_xml = etree.fromstring(zf.read("xl/worksheets/sheet1.xml"))
        cell = sheet_xml.find(f".//{x('c')}")
        xf = styles.find(x("cellXfs"))[int(cell.get("s"))]
        assert xf.get("fontId") == "1"
        assert xf.get("fillId") == "2"
        assert xf.get("borderId") == "1"

    def test_properties(self) -> None:
        """Title and creator reach docProps/core.xml."""
        book = Workbook().set_title("Sales").set_creator("Finance")
        book.add_worksheet()
        core = book.to_package().get_part("docProps/core.xml")
        assert b"<dc:title>Sales</dc:title>" in core
        assert b"<dc:creator>Finance</dc:creator>" in core

    def test_descriptive_properties(self) -> None:
        """Subject, keywords and description are written when set."""
        book = Workbook().set_subject("Q3").set_keywords("north").set_description("Draft")
        core = book.to_package().get_part("docProps/core.xml")
        assert b"<dc:subject>Q3</dc:subject>" in core
        assert b"<cp:keywords>north</cp:keywords>" in core
        assert b"<dc:description>Draft</dc:description>" in core
