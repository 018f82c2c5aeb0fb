"""Tests for the ZIP package writer."""

import io
import zipfile

import pytest

from python_dockit.package import OOXMLPackageWriter


class TestOOXMLPackageWriter:
    """Test part collection and archive writing."""

    def test_parts_written_in_insertion_order(self) -> None:
        """The archive lists parts in the order they were added."""
        writer = OOXMLPackageWriter()
        writer.add_part("[Content_Types].xml", "<Types/>")
        writer.add_part("_rels/.rels", "<Relationships/>")
        writer.add_part("document/document.xml", "<doc/>")
        with zipfile.ZipFile(io.BytesIO(writer.save_to_bytes())) as zf:
            assert zf.namelist() == [
                "[Content_Types].xml", "_rels/.rels", "document/document.xml",
            ]

    def test_strings_encoded_as_utf8(self) -> None:
        """String parts are stored as UTF-8 bytes."""
        writer = OOXMLPackageWriter()
        writer.add_part("a.xml", "<t>Größe</t>")
        assert writer.get_part("a.xml") == "<t>Größe</t>".encode("utf-8")

    def test_leading_slash_stripped(self) -> None:
        """Part names are stored without a leading slash."""
        writer = OOXMLPackageWriter()
        writer.add_part("/xl/workbook.xml", b"<workbook/>")
        assert writer.part_names() == ["xl/workbook.xml"]
        assert writer.get_part("/xl/workbook.xml") == b"<workbook/>"

    def test_replacing_keeps_position(self) -> None:
        """Adding a name again replaces its data in place."""
        writer = OOXMLPackageWriter()
        writer.add_part("one", b"1")
        writer.add_part("two", b"2")
        writer.add_part("one", b"updated")
        assert writer.part_names() == ["one", "two"]
        assert writer.get_part("one") == b"updated"

    def test_binary_parts_unchanged(self) -> None:
        """Binary media is written byte for byte."""
        data = bytes(range(256))
        writer = OOXMLPackageWriter()
        writer.add_part("document/media/image1.png", data)
        with zipfile.ZipFile(io.BytesIO(writer.save_to_bytes())) as zf:
            assert zf.read("document/media/image1.png") == data

    def test_save_to_path(self, tmp_path) -> None:
        """save() accepts a string path."""
        writer = OOXMLPackageWriter()
        writer.add_part("a.xml", "<a/>")
        path = tmp_path / "out.zip"
        writer.save(str(path))
        with zipfile.ZipFile(path) as zf:
            assert zf.read("a.xml") == b"<a/>"

    def test_unwritable_path(self, tmp_path) -> None:
        """I/O errors propagate to the caller."""
        writer = OOXMLPackageWriter()
        writer.add_part("a.xml", "<a/>")
        with pytest.raises(OSError):
            writer.save(tmp_path / "missing" / "out.zip")
