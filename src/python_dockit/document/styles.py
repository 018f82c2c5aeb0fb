"""
Styles part (styles.xml): document defaults and named styles.

A new Styles object already contains the Normal paragraph style, the Default
Paragraph Font character style and the Normal Table style, which is the
minimum set Word expects to find.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from ..constants import DEFAULT_FONT, DEFAULT_FONT_SIZE, WORD_NAMESPACE
from ..xmlutil import XML_DECLARATION, attrs, escape_xml
from .formatting import CellMargins
from .paragraph import ParagraphProperties
from .run import RunProperties
from .table import TableProperties

logger = logging.getLogger(__name__)

# Heading level -> font size in half-points
HEADING_SIZES = {1: 32, 2: 26, 3: 24, 4: 22, 5: 22, 6: 22, 7: 22, 8: 22, 9: 22}
HEADING_COLOR = "2F5496"


class StyleType(Enum):
    """Types of styles in Word documents."""

    PARAGRAPH = "paragraph"
    CHARACTER = "character"
    TABLE = "table"
    NUMBERING = "numbering"


def blank_run_properties() -> RunProperties:
    """Run properties with every field unset, for use inside styles."""
    return RunProperties(
        font_ascii=None,
        font_h_ansi=None,
        font_east_asia=None,
        font_cs=None,
        color=None,
        font_size=None,
    )


def blank_paragraph_properties() -> ParagraphProperties:
    """Paragraph properties with every field unset, for use inside styles."""
    return ParagraphProperties(widow_control=False, alignment=None)


@dataclass
class Style:
    """A named style (w:style).

    Attributes:
        style_id: Identifier referenced by pStyle/rStyle/tblStyle
        style_type: What the style applies to
        name: Display name
        based_on: Parent style ID
        next_style: Style applied to the following paragraph
        link: Linked paragraph/character style ID
        is_default: Default style for its type (w:default)
        quick_format: Show in the quick style gallery (w:qFormat)
        custom_style: User-defined rather than built-in (w:customStyle)
        ui_priority: Sort order in the style pane
        semi_hidden: Hide from the main style gallery
        paragraph_properties: Formatting for paragraph styles
        run_properties: Character formatting
        table_properties: Formatting for table styles
    """

    style_id: str
    style_type: StyleType
    name: str
    based_on: str | None = None
    next_style: str | None = None
    link: str | None = None
    is_default: bool = False
    quick_format: bool = False
    custom_style: bool = True
    ui_priority: int | None = None
    semi_hidden: bool = False
    paragraph_properties: ParagraphProperties = field(default_factory=blank_paragraph_properties)
    run_properties: RunProperties = field(default_factory=blank_run_properties)
    table_properties: TableProperties | None = None

    def set_based_on(self, style_id: str) -> Style:
        self.based_on = style_id
        return self

    def set_next(self, style_id: str) -> Style:
        self.next_style = style_id
        return self

    def set_link(self, style_id: str) -> Style:
        self.link = style_id
        return self

    def set_default(self, is_default: bool = True) -> Style:
        self.is_default = is_default
        return self

    def set_quick_format(self, quick_format: bool = True) -> Style:
        self.quick_format = quick_format
        return self

    def set_paragraph_properties(self, properties: ParagraphProperties) -> Style:
        self.paragraph_properties = properties
        return self

    def set_run_properties(self, properties: RunProperties) -> Style:
        self.run_properties = properties
        return self

    def set_table_properties(self, properties: TableProperties) -> Style:
        self.table_properties = properties
        return self

    def to_xml(self) -> str:
        style_attrs = attrs(
            ("w:type", self.style_type.value),
            ("w:default", "1" if self.is_default else None),
            ("w:customStyle", "1" if self.custom_style else None),
            ("w:styleId", self.style_id),
        )
        parts = [f"<w:style{style_attrs}>"]
        parts.append(f'<w:name w:val="{escape_xml(self.name)}"/>')
        if self.based_on:
            parts.append(f'<w:basedOn w:val="{escape_xml(self.based_on)}"/>')
        if self.next_style:
            parts.append(f'<w:next w:val="{escape_xml(self.next_style)}"/>')
        if self.link:
            parts.append(f'<w:link w:val="{escape_xml(self.link)}"/>')
        if self.ui_priority is not None:
            parts.append(f'<w:uiPriority w:val="{self.ui_priority}"/>')
        if self.semi_hidden:
            parts.append("<w:semiHidden/><w:unhideWhenUsed/>")
        if self.quick_format:
            parts.append("<w:qFormat/>")
        if self.style_type in (StyleType.PARAGRAPH, StyleType.TABLE):
            parts.append(self.paragraph_properties.to_xml())
        if self.style_type is not StyleType.NUMBERING:
            parts.append(self.run_properties.to_xml())
        if self.style_type is StyleType.TABLE and self.table_properties is not None:
            parts.append(self.table_properties.to_xml())
        parts.append("</w:style>")
        return "".join(parts)


class Styles:
    """The styles part of a document.

    Example:
        >>> styles = Styles()
        >>> quote = styles.add_style("Quote", "Quote", StyleType.PARAGRAPH)
        >>> quote.set_based_on("Normal").run_properties.italic = True
        >>> "Quote" in styles
        True
    """

    def __init__(self) -> None:
        self.default_font = DEFAULT_FONT
        self.default_font_size = DEFAULT_FONT_SIZE
        self.default_language = "en-US"
        self.default_spacing_after = 200
        self.default_spacing_line = 276
        self._styles: list[Style] = []
        self._add_builtin_styles()

    def _add_builtin_styles(self) -> None:
        normal = self.add_style("Normal", "Normal", StyleType.PARAGRAPH)
        normal.custom_style = False
        normal.set_default().set_quick_format()

        font = self.add_style("DefaultParagraphFont", "Default Paragraph Font", StyleType.CHARACTER)
        font.custom_style = False
        font.set_default()
        font.ui_priority = 1
        font.semi_hidden = True

        table = self.add_style("TableNormal", "Normal Table", StyleType.TABLE)
        table.custom_style = False
        table.set_default()
        table.ui_priority = 99
        table.semi_hidden = True
        table_properties = TableProperties(alignment=None, layout=None, borders={})
        table_properties.cell_margins = CellMargins(top=0, left=108, bottom=0, right=108)
        table.set_table_properties(table_properties)

    # -------------------------------------------------------------------------
    # Style lookup and creation
    # -------------------------------------------------------------------------

    def add_style(self, style_id: str, name: str, style_type: StyleType | str) -> Style:
        """Add a custom style and return it.

        A style with the same ID is replaced in place.

        Args:
            style_id: Identifier referenced from content
            name: Display name
            style_type: Paragraph, character, table or numbering

        Returns:
            The new Style
        """
        style = Style(style_id, StyleType(style_type), name)
        for i, existing in enumerate(self._styles):
            if existing.style_id == style_id:
                logger.debug(f"Replacing style {style_id}")
                self._styles[i] = style
                return style
        self._styles.append(style)
        return style

    def get_style(self, style_id: str) -> Style | None:
        for style in self._styles:
            if style.style_id == style_id:
                return style
        return None

    def ensure_heading_style(self, level: int) -> Style:
        """Return the "Heading<level>" paragraph style, creating it if needed.

        Args:
            level: Heading level 1-9

        Returns:
            The heading style
        """
        style_id = f"Heading{level}"
        existing = self.get_style(style_id)
        if existing is not None:
            return existing
        style = self.add_style(style_id, f"heading {level}", StyleType.PARAGRAPH)
        style.custom_style = False
        style.set_based_on("Normal").set_next("Normal").set_quick_format()
        style.ui_priority = 9
        style.paragraph_properties.keep_next = True
        style.paragraph_properties.keep_lines = True
        style.paragraph_properties.spacing_before = 240 if level == 1 else 40
        style.paragraph_properties.spacing_after = 0
        style.paragraph_properties.outline_level = level - 1
        style.run_properties.bold = level <= 2
        style.run_properties.color = HEADING_COLOR
        style.run_properties.font_size = HEADING_SIZES.get(level, DEFAULT_FONT_SIZE)
        return style

    def __contains__(self, style_id: str) -> bool:
        return self.get_style(style_id) is not None

    def __iter__(self) -> Iterator[Style]:
        return iter(self._styles)

    def __len__(self) -> int:
        return len(self._styles)

    # -------------------------------------------------------------------------
    # XML emission
    # -------------------------------------------------------------------------

    def _doc_defaults_xml(self) -> str:
        font = escape_xml(self.default_font)
        lang = escape_xml(self.default_language)
        return (
            "<w:docDefaults>"
            "<w:rPrDefault><w:rPr>"
            f'<w:rFonts w:ascii="{font}" w:eastAsia="{font}" w:hAnsi="{font}" w:cs="{font}"/>'
            f'<w:sz w:val="{self.default_font_size}"/>'
            f'<w:szCs w:val="{self.default_font_size}"/>'
            f'<w:lang w:val="{lang}" w:eastAsia="{lang}" w:bidi="ar-SA"/>'
            "</w:rPr></w:rPrDefault>"
            "<w:pPrDefault><w:pPr>"
            f'<w:spacing w:after="{self.default_spacing_after}" '
            f'w:line="{self.default_spacing_line}" w:lineRule="auto"/>'
            "</w:pPr></w:pPrDefault>"
            "</w:docDefaults>"
        )

    def to_xml(self) -> str:
        styles = "".join(style.to_xml() for style in self._styles)
        return (
            f'{XML_DECLARATION}<w:styles xmlns:w="{WORD_NAMESPACE}">'
            f"{self._doc_defaults_xml()}{styles}</w:styles>"
        )
