"""
Document class: the WordprocessingML package orchestrator.

A Document owns the body, styles, numbering, settings, theme, header and
footer parts and the package metadata. Content is built first; relationship
IDs, drawing IDs and media names are assigned in one allocation pass that runs
right before rendering, so the order of ``add_*`` calls never affects which IDs
end up in the XML.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

from ..constants import (
    APP_PROPERTIES_PART,
    CONTENT_TYPES_PART,
    CORE_PROPERTIES_PART,
    DOCUMENT_DIR,
    DOCUMENT_NUMBERING_PART,
    DOCUMENT_PART,
    DOCUMENT_SETTINGS_PART,
    DOCUMENT_STYLES_PART,
    DOCUMENT_THEME_PART,
    NSMAP_DOCUMENT,
    PACKAGE_RELS_PART,
    ContentTypes,
    RelationshipTypes,
    xmlns_declarations,
)
from ..content_types import ContentTypesManifest
from ..errors import ImageNotFoundError
from ..package import OOXMLPackageWriter
from ..properties import AppProperties, CoreProperties
from ..relationships import Relationships
from ..theme import Theme
from ..xmlutil import XML_DECLARATION
from .body import Body
from .drawing import Drawing
from .header_footer import Footer, Header
from .numbering import Numbering
from .paragraph import Paragraph
from .run import Run
from .section import HeaderFooterType, Orientation, SectionType
from .settings import Settings
from .styles import Styles
from .table import Table

logger = logging.getLogger(__name__)


@dataclass
class ExtraRelationship:
    """A caller-declared document relationship.

    ``rel_id`` is filled in by the allocation pass.
    """

    rel_type: str
    target: str
    external: bool = False
    rel_id: str | None = None


class Document:
    """A Word document under construction.

    Example:
        >>> doc = Document()
        >>> doc.set_title("Report").set_creator("Finance")
        >>> doc.add_paragraph().add_text("Hello & <World>")
        >>> footer = doc.add_footer_with_reference(HeaderFooterType.DEFAULT)
        >>> footer.add_page_number("Page ")
        >>> doc.save("report.docx")

    Attributes:
        body: Main content and final section properties
        styles: The styles part
        numbering: The numbering part
        settings: The settings part
        theme: The theme part
        headers: Header parts in creation order
        footers: Footer parts in creation order
        core_properties: docProps/core.xml metadata
        app_properties: docProps/app.xml metadata
        relationships: Document-level relationships (filled by allocate_ids)
        content_types: Package content types (filled when the package is built)
    """

    def __init__(self) -> None:
        self.body = Body()
        self.styles = Styles()
        self.numbering = Numbering()
        self.settings = Settings()
        self.theme = Theme()
        self.headers: list[Header] = []
        self.footers: list[Footer] = []
        self.core_properties = CoreProperties()
        self.app_properties = AppProperties()
        self.relationships = Relationships(DOCUMENT_PART)
        self.content_types = ContentTypesManifest.for_images()
        self._extra_relationships: list[ExtraRelationship] = []

    # =========================================================================
    # Body content
    # =========================================================================

    def add_paragraph(self, text: str | None = None) -> Paragraph:
        return self.body.add_paragraph(text)

    def add_heading(self, text: str, level: int = 1) -> Paragraph:
        """Append a paragraph using the built-in "Heading<level>" style."""
        style = self.styles.ensure_heading_style(level)
        paragraph = self.body.add_paragraph(text)
        paragraph.set_style(style.style_id)
        return paragraph

    def add_table(self, rows: int, cols: int) -> Table:
        return self.body.add_table(rows, cols)

    def add_page_break(self) -> Paragraph:
        return self.body.add_page_break()

    def add_section_break(
        self, section_type: SectionType | str = SectionType.NEXT_PAGE
    ) -> Paragraph:
        return self.body.add_section_break(section_type)

    def add_page_number_paragraph(self, prefix: str = "", suffix: str = "") -> Paragraph:
        """Append a centered paragraph with a PAGE field to the body."""
        return self.body.add_page_number(prefix, suffix)

    def add_image(
        self, path: str | Path, width: int | None = None, height: int | None = None
    ) -> Run:
        """Append a new paragraph holding an inline picture read from a file.

        Args:
            path: Image file path
            width: Width in EMU (None to derive from the image)
            height: Height in EMU (None to derive from the image)

        Returns:
            The run holding the drawing

        Raises:
            FileNotFoundError: If the image file does not exist
        """
        drawing = Drawing.from_file(path, width, height)
        return self.body.add_paragraph().add_drawing(drawing)

    def add_image_bytes(
        self,
        data: bytes,
        image_format: str,
        name: str = "Picture",
        width: int | None = None,
        height: int | None = None,
    ) -> Run:
        """Append a new paragraph holding an inline picture from raw bytes.

        Args:
            data: Image bytes
            image_format: Format hint used as the media file extension (e.g., "png")
            name: Picture name
            width: Width in EMU (None to derive from the image)
            height: Height in EMU (None to derive from the image)

        Returns:
            The run holding the drawing
        """
        drawing = Drawing.from_bytes(data, image_format, name, width, height)
        return self.body.add_paragraph().add_drawing(drawing)

    def add_relationship(
        self, rel_type: str, target: str, external: bool = False
    ) -> ExtraRelationship:
        """Declare an additional document relationship (e.g., a hyperlink).

        The relationship ID is assigned by ``allocate_ids`` and is available on
        the returned object afterwards.
        """
        relationship = ExtraRelationship(rel_type, target, external)
        self._extra_relationships.append(relationship)
        return relationship

    # =========================================================================
    # Headers and footers
    # =========================================================================

    def add_header(self, header_type: HeaderFooterType | str = HeaderFooterType.DEFAULT) -> Header:
        """Create a header part without binding it to a section."""
        header = Header(len(self.headers) + 1, HeaderFooterType(header_type))
        self.headers.append(header)
        logger.debug(f"Added {header!r}")
        return header

    def add_footer(self, footer_type: HeaderFooterType | str = HeaderFooterType.DEFAULT) -> Footer:
        """Create a footer part without binding it to a section."""
        footer = Footer(len(self.footers) + 1, HeaderFooterType(footer_type))
        self.footers.append(footer)
        logger.debug(f"Added {footer!r}")
        return footer

    def add_header_reference(
        self, header_type: HeaderFooterType | str, header: Header | str
    ) -> Document:
        """Bind a header (object or relationship ID) to the final section."""
        header_type = HeaderFooterType(header_type)
        self.body.section_properties.add_header_reference(header_type, header)
        if header_type is HeaderFooterType.EVEN:
            self.settings.set_even_and_odd_headers()
        return self

    def add_footer_reference(
        self, footer_type: HeaderFooterType | str, footer: Footer | str
    ) -> Document:
        """Bind a footer (object or relationship ID) to the final section."""
        footer_type = HeaderFooterType(footer_type)
        self.body.section_properties.add_footer_reference(footer_type, footer)
        if footer_type is HeaderFooterType.EVEN:
            self.settings.set_even_and_odd_headers()
        return self

    def add_header_with_reference(
        self, header_type: HeaderFooterType | str = HeaderFooterType.DEFAULT
    ) -> Header:
        """Create a header and bind it to the final section."""
        header = self.add_header(header_type)
        self.add_header_reference(header.header_footer_type, header)
        return header

    def add_footer_with_reference(
        self, footer_type: HeaderFooterType | str = HeaderFooterType.DEFAULT
    ) -> Footer:
        """Create a footer and bind it to the final section."""
        footer = self.add_footer(footer_type)
        self.add_footer_reference(footer.header_footer_type, footer)
        return footer

    # =========================================================================
    # Properties
    # =========================================================================

    def set_title(self, title: str) -> Document:
        self.core_properties.title = title
        return self

    def set_subject(self, subject: str) -> Document:
        self.core_properties.subject = subject
        return self

    def set_creator(self, creator: str) -> Document:
        """Set the author; also records them as the last editor."""
        self.core_properties.creator = creator
        self.core_properties.last_modified_by = creator
        return self

    def set_keywords(self, keywords: str) -> Document:
        self.core_properties.keywords = keywords
        return self

    def set_description(self, description: str) -> Document:
        self.core_properties.description = description
        return self

    def set_last_modified_by(self, name: str) -> Document:
        self.core_properties.last_modified_by = name
        return self

    def set_revision(self, revision: int) -> Document:
        self.core_properties.revision = revision
        return self

    def set_created(self, created: datetime) -> Document:
        self.core_properties.created = created
        return self

    def set_modified(self, modified: datetime) -> Document:
        self.core_properties.modified = modified
        return self

    # =========================================================================
    # Page setup
    # =========================================================================

    def set_page_size(
        self, width: int, height: int, orientation: Orientation | str = Orientation.PORTRAIT
    ) -> Document:
        self.body.section_properties.set_page_size(width, height, orientation)
        return self

    def _set_page_size_preset(self, name: str, landscape: bool) -> Document:
        orientation = Orientation.LANDSCAPE if landscape else Orientation.PORTRAIT
        self.body.section_properties.set_page_size_preset(name, orientation)
        return self

    def set_page_size_a4(self, landscape: bool = False) -> Document:
        return self._set_page_size_preset("a4", landscape)

    def set_page_size_a5(self, landscape: bool = False) -> Document:
        return self._set_page_size_preset("a5", landscape)

    def set_page_size_letter(self, landscape: bool = False) -> Document:
        return self._set_page_size_preset("letter", landscape)

    def set_page_margin(
        self,
        top: int,
        right: int,
        bottom: int,
        left: int,
        header: int = 720,
        footer: int = 720,
        gutter: int = 0,
    ) -> Document:
        """Set page margins in twips."""
        self.body.section_properties.set_page_margin(
            top, right, bottom, left, header, footer, gutter
        )
        return self

    def set_columns(self, num: int, space: int = 720) -> Document:
        self.body.section_properties.set_columns(num, space)
        return self

    # =========================================================================
    # ID allocation
    # =========================================================================

    def _parts_with_content(self) -> Iterator[tuple[str, Relationships, Body | Header | Footer]]:
        yield DOCUMENT_PART, self.relationships, self.body
        for part in [*self.headers, *self.footers]:
            yield part.part_name, part.relationships, part

    def allocate_ids(self) -> None:
        """Assign every relationship ID, drawing ID and media name.

        Document relationships are numbered in a fixed order: styles,
        numbering, settings, theme, headers, footers, body images, then
        caller-declared relationships. Images inside a header or footer are
        numbered in that part's own relationship set. Running the pass again
        on an unchanged document yields the same IDs.
        """
        rels = self.relationships
        rels.clear()
        rels.add_relationship(RelationshipTypes.STYLES, "styles.xml")
        rels.add_relationship(RelationshipTypes.NUMBERING, "numbering.xml")
        rels.add_relationship(RelationshipTypes.SETTINGS, "settings.xml")
        rels.add_relationship(RelationshipTypes.THEME, "theme/theme1.xml")
        for part in [*self.headers, *self.footers]:
            if isinstance(part, Header):
                rel_type = RelationshipTypes.HEADER
            else:
                rel_type = RelationshipTypes.FOOTER
            part.rel_id = rels.add_unique_relationship(rel_type, part.filename)

        drawing_count = 0
        for part_name, part_rels, container in self._parts_with_content():
            if part_rels is not rels:
                part_rels.clear()
            for drawing in container.iter_drawings():
                drawing_count += 1
                drawing.doc_pr_id = drawing_count
                drawing.target = f"media/image{drawing_count}.{drawing.extension}"
                drawing.rel_id = part_rels.add_unique_relationship(
                    RelationshipTypes.IMAGE, drawing.target
                )
                logger.debug(f"Allocated {drawing.rel_id} in {part_name} for {drawing.target}")

        for extra in self._extra_relationships:
            extra.rel_id = rels.add_unique_relationship(
                extra.rel_type, extra.target, extra.external
            )

    # =========================================================================
    # Serialization
    # =========================================================================

    def document_xml(self) -> str:
        """Render document.xml. Call ``allocate_ids`` first for resolved IDs."""
        return (
            f"{XML_DECLARATION}"
            f"<w:document {xmlns_declarations(NSMAP_DOCUMENT)}>"
            f"{self.body.to_xml()}"
            "</w:document>"
        )

    def _build_content_types(self) -> ContentTypesManifest:
        manifest = ContentTypesManifest.for_images()
        manifest.add_override(f"/{DOCUMENT_PART}", ContentTypes.DOCUMENT)
        manifest.add_override(f"/{DOCUMENT_STYLES_PART}", ContentTypes.STYLES)
        manifest.add_override(f"/{DOCUMENT_NUMBERING_PART}", ContentTypes.NUMBERING)
        manifest.add_override(f"/{DOCUMENT_SETTINGS_PART}", ContentTypes.SETTINGS)
        manifest.add_override(f"/{DOCUMENT_THEME_PART}", ContentTypes.THEME)
        manifest.add_override(f"/{CORE_PROPERTIES_PART}", ContentTypes.CORE_PROPERTIES)
        manifest.add_override(f"/{APP_PROPERTIES_PART}", ContentTypes.EXTENDED_PROPERTIES)
        for header in self.headers:
            manifest.add_override(f"/{header.part_name}", ContentTypes.HEADER)
        for footer in self.footers:
            manifest.add_override(f"/{footer.part_name}", ContentTypes.FOOTER)
        for _, _, container in self._parts_with_content():
            for drawing in container.iter_drawings():
                if drawing.content_type is None:
                    logger.warning(
                        f"Unknown image extension '{drawing.extension}', "
                        "declaring it as application/octet-stream"
                    )
                manifest.add_default(
                    drawing.extension, drawing.content_type or ContentTypes.OCTET_STREAM
                )
        return manifest

    def _build_package_relationships(self) -> Relationships:
        rels = Relationships()
        rels.add_relationship(RelationshipTypes.OFFICE_DOCUMENT, DOCUMENT_PART)
        rels.add_relationship(RelationshipTypes.CORE_PROPERTIES, CORE_PROPERTIES_PART)
        rels.add_relationship(RelationshipTypes.EXTENDED_PROPERTIES, APP_PROPERTIES_PART)
        return rels

    def _resolve_images(
        self, part_name: str, part_rels: Relationships, container: Body | Header | Footer
    ) -> list[Drawing]:
        """Find the drawing behind every image relationship of one part.

        Raises:
            ImageNotFoundError: If a relationship has no drawing with its ID
        """
        drawings = {drawing.rel_id: drawing for drawing in container.iter_drawings()}
        resolved = []
        for rel in part_rels.get_by_type(RelationshipTypes.IMAGE):
            if rel.is_external:
                continue
            drawing = drawings.get(rel.id)
            if drawing is None:
                raise ImageNotFoundError(rel.id, part_name)
            resolved.append(drawing)
        return resolved

    def to_package(self) -> OOXMLPackageWriter:
        """Allocate IDs and render every part into a package writer.

        Raises:
            ImageNotFoundError: If an image relationship has no drawing
        """
        self.allocate_ids()
        self.content_types = self._build_content_types()

        writer = OOXMLPackageWriter()
        writer.add_part(CONTENT_TYPES_PART, self.content_types.to_xml())
        writer.add_part(PACKAGE_RELS_PART, self._build_package_relationships().to_xml())
        writer.add_part(APP_PROPERTIES_PART, self.app_properties.to_xml())
        writer.add_part(CORE_PROPERTIES_PART, self.core_properties.to_xml())
        writer.add_part(DOCUMENT_PART, self.document_xml())
        writer.add_part(DOCUMENT_STYLES_PART, self.styles.to_xml())
        writer.add_part(DOCUMENT_NUMBERING_PART, self.numbering.to_xml())
        writer.add_part(DOCUMENT_THEME_PART, self.theme.to_xml())
        writer.add_part(DOCUMENT_SETTINGS_PART, self.settings.to_xml())
        writer.add_part(self.relationships.rels_path, self.relationships.to_xml())
        for part in [*self.headers, *self.footers]:
            writer.add_part(part.part_name, part.to_xml())
            if part.relationships:
                writer.add_part(part.relationships.rels_path, part.relationships.to_xml())

        for part_name, part_rels, container in self._parts_with_content():
            for drawing in self._resolve_images(part_name, part_rels, container):
                writer.add_part(f"{DOCUMENT_DIR}/{drawing.target}", drawing.image_data)

        return writer

    def save(self, output: str | Path | BinaryIO) -> None:
        """Save the document as a .docx package.

        Args:
            output: Destination path (created or truncated) or writable binary stream

        Raises:
            ImageNotFoundError: If an image relationship has no drawing
            OSError: If the file cannot be written
        """
        self.to_package().save(output)
        logger.debug(f"Saved document to {output}")

    def save_to_bytes(self) -> bytes:
        """Save the document and return the .docx package as bytes."""
        return self.to_package().save_to_bytes()

