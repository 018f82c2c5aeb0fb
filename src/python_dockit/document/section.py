"""
Section properties (w:sectPr): page setup and header/footer bindings.

The body carries one SectionProperties for the final section. A section break
paragraph carries a copy describing the section it closes.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ..constants import (
    DEFAULT_COLUMN_SPACE,
    DEFAULT_HEADER_FOOTER_MARGIN,
    DEFAULT_LINE_PITCH,
    DEFAULT_MARGIN,
    PAGE_SIZE_A4,
    PAGE_SIZE_A5,
    PAGE_SIZE_LETTER,
)
from ..xmlutil import attrs, empty_element, escape_xml

if TYPE_CHECKING:
    from .header_footer import Footer, Header


class HeaderFooterType(Enum):
    """Types of headers and footers in Word documents.

    Word supports three types of headers/footers per section:
    - DEFAULT: Used on all pages except first (if first is different) and even pages
    - FIRST: Used on the first page of the section (if enabled)
    - EVEN: Used on even-numbered pages (if different from odd)
    """

    DEFAULT = "default"
    FIRST = "first"
    EVEN = "even"


class Orientation(Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class SectionType(Enum):
    """How a section starts relative to the previous one."""

    NEXT_PAGE = "nextPage"
    CONTINUOUS = "continuous"
    EVEN_PAGE = "evenPage"
    ODD_PAGE = "oddPage"
    NEXT_COLUMN = "nextColumn"


PAGE_SIZES = {
    "letter": PAGE_SIZE_LETTER,
    "a4": PAGE_SIZE_A4,
    "a5": PAGE_SIZE_A5,
}


@dataclass
class PageSize:
    width: int = PAGE_SIZE_LETTER[0]
    height: int = PAGE_SIZE_LETTER[1]
    orientation: Orientation = Orientation.PORTRAIT


@dataclass
class PageMargin:
    top: int = DEFAULT_MARGIN
    right: int = DEFAULT_MARGIN
    bottom: int = DEFAULT_MARGIN
    left: int = DEFAULT_MARGIN
    header: int = DEFAULT_HEADER_FOOTER_MARGIN
    footer: int = DEFAULT_HEADER_FOOTER_MARGIN
    gutter: int = 0


@dataclass
class HeaderFooterReference:
    """Binding of a header or footer part to a section.

    The target is either the part object, whose relationship ID is resolved
    when the section is rendered, or a literal relationship ID string.
    """

    kind: str  # "header" or "footer"
    reference_type: HeaderFooterType
    target: Header | Footer | str

    @property
    def rel_id(self) -> str:
        if isinstance(self.target, str):
            return self.target
        return self.target.rel_id or ""

    def to_xml(self) -> str:
        return (
            f'<w:{self.kind}Reference w:type="{self.reference_type.value}" '
            f'r:id="{escape_xml(self.rel_id)}"/>'
        )


@dataclass
class SectionProperties:
    """Page setup for one section.

    Attributes:
        page_size: Page width/height in twips and orientation
        page_margin: Margins in twips
        columns: Number of text columns
        column_space: Space between columns in twips
        line_pitch: Document grid line pitch in twips
        section_type: Section start type, emitted only when set
        title_page: Use a distinct first-page header/footer
        header_references: Header bindings in insertion order
        footer_references: Footer bindings in insertion order
    """

    page_size: PageSize = field(default_factory=PageSize)
    page_margin: PageMargin = field(default_factory=PageMargin)
    columns: int = 1
    column_space: int = DEFAULT_COLUMN_SPACE
    line_pitch: int = DEFAULT_LINE_PITCH
    section_type: SectionType | None = None
    title_page: bool = False
    header_references: list[HeaderFooterReference] = field(default_factory=list)
    footer_references: list[HeaderFooterReference] = field(default_factory=list)

    def set_page_size(
        self,
        width: int,
        height: int,
        orientation: Orientation | str = Orientation.PORTRAIT,
    ) -> SectionProperties:
        """Set the page size in twips. Values are used verbatim."""
        self.page_size = PageSize(width, height, Orientation(orientation))
        return self

    def set_page_size_preset(
        self, name: str, orientation: Orientation | str = Orientation.PORTRAIT
    ) -> SectionProperties:
        """Set a named page size ("letter", "a4", "a5"); landscape swaps the sides.

        Raises:
            KeyError: If the preset name is unknown
        """
        width, height = PAGE_SIZES[name.lower()]
        orientation = Orientation(orientation)
        if orientation is Orientation.LANDSCAPE:
            width, height = height, width
        return self.set_page_size(width, height, orientation)

    def set_page_margin(
        self,
        top: int,
        right: int,
        bottom: int,
        left: int,
        header: int = DEFAULT_HEADER_FOOTER_MARGIN,
        footer: int = DEFAULT_HEADER_FOOTER_MARGIN,
        gutter: int = 0,
    ) -> SectionProperties:
        self.page_margin = PageMargin(top, right, bottom, left, header, footer, gutter)
        return self

    def set_columns(self, num: int, space: int = DEFAULT_COLUMN_SPACE) -> SectionProperties:
        self.columns = num
        self.column_space = space
        return self

    def set_line_pitch(self, line_pitch: int) -> SectionProperties:
        self.line_pitch = line_pitch
        return self

    def set_title_page(self, title_page: bool = True) -> SectionProperties:
        self.title_page = title_page
        return self

    def add_header_reference(
        self, reference_type: HeaderFooterType | str, header: Header | str
    ) -> SectionProperties:
        self.header_references.append(
            HeaderFooterReference("header", HeaderFooterType(reference_type), header)
        )
        return self

    def add_footer_reference(
        self, reference_type: HeaderFooterType | str, footer: Footer | str
    ) -> SectionProperties:
        self.footer_references.append(
            HeaderFooterReference("footer", HeaderFooterType(reference_type), footer)
        )
        return self

    def copy(self) -> SectionProperties:
        """Copy the page setup, sharing the referenced header/footer parts."""
        clone = copy.copy(self)
        clone.page_size = copy.copy(self.page_size)
        clone.page_margin = copy.copy(self.page_margin)
        clone.header_references = list(self.header_references)
        clone.footer_references = list(self.footer_references)
        return clone

    def _uses_first_page(self) -> bool:
        return any(
            ref.reference_type is HeaderFooterType.FIRST
            for ref in self.header_references + self.footer_references
        )

    def to_xml(self) -> str:
        parts = ["<w:sectPr>"]
        parts.extend(ref.to_xml() for ref in self.header_references)
        parts.extend(ref.to_xml() for ref in self.footer_references)
        if self.section_type is not None:
            parts.append(f'<w:type w:val="{self.section_type.value}"/>')
        size = self.page_size
        parts.append(
            empty_element(
                "w:pgSz",
                ("w:w", size.width),
                ("w:h", size.height),
                ("w:orient", size.orientation.value),
            )
        )
        margin = self.page_margin
        parts.append(
            "<w:pgMar"
            + attrs(
                ("w:top", margin.top),
                ("w:right", margin.right),
                ("w:bottom", margin.bottom),
                ("w:left", margin.left),
                ("w:header", margin.header),
                ("w:footer", margin.footer),
                ("w:gutter", margin.gutter),
            )
            + "/>"
        )
        parts.append(f'<w:cols w:num="{self.columns}" w:space="{self.column_space}"/>')
        if self.title_page or self._uses_first_page():
            parts.append("<w:titlePg/>")
        parts.append(f'<w:docGrid w:linePitch="{self.line_pitch}"/>')
        parts.append("</w:sectPr>")
        return "".join(parts)
