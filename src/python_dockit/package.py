"""
OOXMLPackageWriter class for assembling OOXML ZIP packages.

This module provides the container-level half of saving: an ordered list of
part names and their serialized bytes, written as one ZIP archive. Building the
parts themselves is the job of the Document and Workbook orchestrators.
"""

import io
import logging
import zipfile
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)


class OOXMLPackageWriter:
    """Collects package parts in write order and packs them into a ZIP.

    Parts are written in the order they were added, which lets the caller put
    ``[Content_Types].xml`` first and relationship parts before their targets.
    Adding a part name twice replaces the earlier data but keeps its position.

    Example:
        >>> writer = OOXMLPackageWriter()
        >>> writer.add_part("[Content_Types].xml", content_types_xml)
        >>> writer.add_part("document/document.xml", document_xml)
        >>> writer.save("output.docx")
    """

    def __init__(self) -> None:
        self._parts: dict[str, bytes] = {}

    def add_part(self, part_name: str, data: bytes | str) -> None:
        """Queue a part for writing.

        Args:
            part_name: Path inside the archive, without a leading slash
            data: Part content; strings are encoded as UTF-8
        """
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._parts[part_name.lstrip("/")] = data

    def part_names(self) -> list[str]:
        """List queued part names in write order."""
        return list(self._parts)

    def get_part(self, part_name: str) -> bytes | None:
        return self._parts.get(part_name.lstrip("/"))

    def _write(self, target: str | Path | BinaryIO) -> None:
        with zipfile.ZipFile(target, "w", zipfile.ZIP_DEFLATED) as zip_ref:
            for part_name, data in self._parts.items():
                zip_ref.writestr(part_name, data)
                logger.debug(f"Wrote part {part_name} ({len(data)} bytes)")

    def save(self, output: str | Path | BinaryIO) -> None:
        """Write the package to a file path or a writable binary stream.

        I/O errors propagate to the caller. A partially written file may be
        left on disk if writing fails midway.

        Args:
            output: Destination path (created or truncated) or binary stream
        """
        if isinstance(output, (str, Path)):
            output = Path(output)
        self._write(output)
        logger.debug(f"Saved package with {len(self._parts)} parts to {output}")

    def save_to_bytes(self) -> bytes:
        """Save the package to bytes.

        Returns:
            The complete package as bytes
        """
        buffer = io.BytesIO()
        self._write(buffer)
        buffer.seek(0)
        return buffer.read()
