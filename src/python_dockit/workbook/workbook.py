"""
Workbook class: the SpreadsheetML package orchestrator.

A Workbook owns its worksheets, the shared string table, the stylesheet, the
theme and the package metadata. Relationship IDs for workbook parts are
assigned when the package is rendered.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

from ..constants import (
    APP_PROPERTIES_PART,
    CONTENT_TYPES_PART,
    CORE_PROPERTIES_PART,
    OFFICE_RELATIONSHIPS_NAMESPACE,
    PACKAGE_RELS_PART,
    SHARED_STRINGS_PART,
    SPREADSHEET_NAMESPACE,
    WORKBOOK_PART,
    WORKBOOK_STYLES_PART,
    WORKBOOK_THEME_PART,
    ContentTypes,
    RelationshipTypes,
)
from ..content_types import ContentTypesManifest
from ..package import OOXMLPackageWriter
from ..properties import AppProperties, CoreProperties
from ..relationships import Relationships
from ..theme import Theme
from ..xmlutil import XML_DECLARATION, attrs
from .shared_strings import SharedStrings
from .styles import WorkbookStyles
from .worksheet import Worksheet

logger = logging.getLogger(__name__)

MAX_SHEET_NAME_LENGTH = 31


class Workbook:
    """An Excel workbook under construction.

    Example:
        >>> book = Workbook()
        >>> sheet = book.add_worksheet("Sales")
        >>> bold = book.create_style(bold=True)
        >>> sheet.add_cell("A1", "Total")
        >>> sheet.set_cell_style("A1", bold)
        >>> sheet.add_cell("B1", 1250.5)
        >>> book.save("sales.xlsx")
    """

    def __init__(self) -> None:
        self.worksheets: list[Worksheet] = []
        self.shared_strings = SharedStrings()
        self.styles = WorkbookStyles()
        self.theme = Theme()
        self.core_properties = CoreProperties()
        self.app_properties = AppProperties()
        self.relationships = Relationships(WORKBOOK_PART)
        self._sheet_rel_ids: dict[int, str] = {}

    # ==========================================================================
    # Worksheets and styles
    # ==========================================================================

    def add_worksheet(self, name: str | None = None) -> Worksheet:
        """Append a worksheet; the default name is "Sheet<N>"."""
        sheet_id = len(self.worksheets) + 1
        if name is None:
            name = f"Sheet{sheet_id}"
        if self.get_worksheet(name) is not None:
            logger.warning(f"Duplicate worksheet name '{name}'; Excel will not open the file")
        if len(name) > MAX_SHEET_NAME_LENGTH:
            logger.warning(
                f"Worksheet name '{name}' is longer than {MAX_SHEET_NAME_LENGTH} characters"
            )
        sheet = Worksheet(name, sheet_id, self.shared_strings, self.styles)
        self.worksheets.append(sheet)
        logger.debug(f"Added worksheet {sheet_id}: {name}")
        return sheet

    def get_worksheet(self, name: str) -> Worksheet | None:
        for sheet in self.worksheets:
            if sheet.name == name:
                return sheet
        return None

    def create_style(self, **kwargs) -> int:
        """Create a cell style and return its index. See ``WorkbookStyles.create_style``."""
        return self.styles.create_style(**kwargs)

    # ==========================================================================
    # Properties
    # ==========================================================================

    def set_title(self, title: str) -> Workbook:
        self.core_properties.title = title
        return self

    def set_subject(self, subject: str) -> Workbook:
        self.core_properties.subject = subject
        return self

    def set_creator(self, creator: str) -> Workbook:
        self.core_properties.creator = creator
        self.core_properties.last_modified_by = creator
        return self

    def set_keywords(self, keywords: str) -> Workbook:
        self.core_properties.keywords = keywords
        return self

    def set_description(self, description: str) -> Workbook:
        self.core_properties.description = description
        return self

    def set_created(self, created: datetime) -> Workbook:
        self.core_properties.created = created
        return self

    def set_modified(self, modified: datetime) -> Workbook:
        self.core_properties.modified = modified
        return self

    # ==========================================================================
    # Serialization
    # ==========================================================================

    def allocate_ids(self) -> None:
        """Assign workbook relationship IDs: styles, theme, shared strings, then sheets."""
        self.relationships.clear()
        self.relationships.add_relationship(RelationshipTypes.STYLES, "styles.xml")
        self.relationships.add_relationship(RelationshipTypes.THEME, "theme/theme1.xml")
        self.relationships.add_relationship(RelationshipTypes.SHARED_STRINGS, "sharedStrings.xml")
        self._sheet_rel_ids = {
            sheet.sheet_id: self.relationships.add_unique_relationship(
                RelationshipTypes.WORKSHEET, sheet.filename
            )
            for sheet in self.worksheets
        }

    def workbook_xml(self) -> str:
        """Render workbook.xml. Call ``allocate_ids`` first for resolved sheet IDs."""
        sheets = "".join(
            "<sheet"
            + attrs(
                ("name", sheet.name),
                ("sheetId", sheet.sheet_id),
                ("r:id", self._sheet_rel_ids.get(sheet.sheet_id)),
            )
            + "/>"
            for sheet in self.worksheets
        )
        return (
            XML_DECLARATION
            + f'<workbook xmlns="{SPREADSHEET_NAMESPACE}" '
            f'xmlns:r="{OFFICE_RELATIONSHIPS_NAMESPACE}">'
            + '<workbookPr defaultThemeVersion="124226"/>'
            + "<bookViews><workbookView/></bookViews>"
            + f"<sheets>{sheets}</sheets>"
            + "</workbook>"
        )

    def _build_content_types(self) -> ContentTypesManifest:
        manifest = ContentTypesManifest()
        manifest.add_default("rels", ContentTypes.RELATIONSHIPS)
        manifest.add_default("xml", ContentTypes.XML)
        manifest.add_override(f"/{WORKBOOK_PART}", ContentTypes.WORKBOOK)
        for sheet in self.worksheets:
            manifest.add_override(f"/{sheet.part_name}", ContentTypes.WORKSHEET)
        manifest.add_override(f"/{WORKBOOK_STYLES_PART}", ContentTypes.WORKBOOK_STYLES)
        manifest.add_override(f"/{WORKBOOK_THEME_PART}", ContentTypes.THEME)
        manifest.add_override(f"/{SHARED_STRINGS_PART}", ContentTypes.SHARED_STRINGS)
        manifest.add_override(f"/{CORE_PROPERTIES_PART}", ContentTypes.CORE_PROPERTIES)
        manifest.add_override(f"/{APP_PROPERTIES_PART}", ContentTypes.EXTENDED_PROPERTIES)
        return manifest

    def _build_package_relationships(self) -> Relationships:
        rels = Relationships()
        rels.add_relationship(RelationshipTypes.OFFICE_DOCUMENT, WORKBOOK_PART)
        rels.add_relationship(RelationshipTypes.CORE_PROPERTIES, CORE_PROPERTIES_PART)
        rels.add_relationship(RelationshipTypes.EXTENDED_PROPERTIES, APP_PROPERTIES_PART)
        return rels

    def to_package(self) -> OOXMLPackageWriter:
        """Allocate IDs and render every part into a package writer."""
        if not self.worksheets:
            logger.warning("Workbook has no worksheets; adding an empty 'Sheet1'")
            self.add_worksheet()
        self.allocate_ids()

        writer = OOXMLPackageWriter()
        writer.add_part(CONTENT_TYPES_PART, self._build_content_types().to_xml())
        writer.add_part(PACKAGE_RELS_PART, self._build_package_relationships().to_xml())
        writer.add_part(APP_PROPERTIES_PART, self.app_properties.to_xml())
        writer.add_part(CORE_PROPERTIES_PART, self.core_properties.to_xml())
        writer.add_part(WORKBOOK_PART, self.workbook_xml())
        for sheet in self.worksheets:
            writer.add_part(sheet.part_name, sheet.to_xml())
        writer.add_part(WORKBOOK_STYLES_PART, self.styles.to_xml())
        writer.add_part(WORKBOOK_THEME_PART, self.theme.to_xml())
        writer.add_part(SHARED_STRINGS_PART, self.shared_strings.to_xml())
        writer.add_part(self.relationships.rels_path, self.relationships.to_xml())
        logger.debug(f"Rendered workbook package with {len(self.worksheets)} worksheets")
        return writer

    def save(self, output: str | Path | BinaryIO) -> None:
        """Save the workbook as a .xlsx package.

        Args:
            output: Destination path (created or truncated) or writable binary stream

        Raises:
            OSError: If the file cannot be written
        """
        self.to_package().save(output)
        logger.debug(f"Saved workbook to {output}")

    def save_to_bytes(self) -> bytes:
        """Save the workbook and return the .xlsx package as bytes."""
        return self.to_package().save_to_bytes()
