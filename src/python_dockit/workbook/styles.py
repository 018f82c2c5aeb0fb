"""
Workbook stylesheet (styles.xml).

SpreadsheetML styles are a set of deduplicated tables: fonts, fills, borders
and custom number formats. A cell format (xf) combines one entry from each
table with an optional alignment, and cells refer to it by its index in
cellXfs. Every table here interns entries by value, so building the same
style twice returns the same index.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..constants import (
    DEFAULT_FONT,
    DEFAULT_SHEET_FONT_SIZE,
    FIRST_CUSTOM_NUMBER_FORMAT_ID,
    SPREADSHEET_NAMESPACE,
)
from ..xmlutil import XML_DECLARATION, attrs
from .cells import format_number

logger = logging.getLogger(__name__)

# Number formats Excel knows by ID without a numFmt entry
BUILTIN_NUMBER_FORMATS: dict[str, int] = {
    "General": 0,
    "0": 1,
    "0.00": 2,
    "#,##0": 3,
    "#,##0.00": 4,
    "0%": 9,
    "0.00%": 10,
    "0.00E+00": 11,
    "# ?/?": 12,
    "# ??/??": 13,
    "mm-dd-yy": 14,
    "d-mmm-yy": 15,
    "d-mmm": 16,
    "mmm-yy": 17,
    "h:mm AM/PM": 18,
    "h:mm:ss AM/PM": 19,
    "h:mm": 20,
    "h:mm:ss": 21,
    "m/d/yy h:mm": 22,
    "#,##0 ;(#,##0)": 37,
    "#,##0 ;[Red](#,##0)": 38,
    "#,##0.00;(#,##0.00)": 39,
    "#,##0.00;[Red](#,##0.00)": 40,
    "mm:ss": 45,
    "[h]:mm:ss": 46,
    "mmss.0": 47,
    "##0.0E+0": 48,
    "@": 49,
}

BORDER_EDGES = ("left", "right", "top", "bottom")


def normalize_color(color: str | None) -> str | None:
    """Convert "#RRGGBB" or "RRGGBB" to the ARGB form SpreadsheetML expects."""
    if not color:
        return None
    color = color.lstrip("#").upper()
    if len(color) == 6:
        return "FF" + color
    return color


def builtin_number_format_id(code: str) -> int | None:
    """Return the builtin ID for a format code, or None for custom codes."""
    return BUILTIN_NUMBER_FORMATS.get(code)


# ==============================================================================
# Table entries
# ==============================================================================


@dataclass(frozen=True)
class Font:
    name: str = DEFAULT_FONT
    size: float = DEFAULT_SHEET_FONT_SIZE
    bold: bool = False
    italic: bool = False
    underline: bool = False
    color: str | None = None

    def to_xml(self) -> str:
        parts = ["<font>"]
        if self.bold:
            parts.append("<b/>")
        if self.italic:
            parts.append("<i/>")
        if self.underline:
            parts.append("<u/>")
        parts.append(f'<sz val="{format_number(self.size)}"/>')
        if self.color:
            parts.append(f"<color{attrs(('rgb', self.color))}/>")
        parts.append(f"<name{attrs(('val', self.name))}/>")
        parts.append("</font>")
        return "".join(parts)


@dataclass(frozen=True)
class Fill:
    pattern: str = "none"
    color: str | None = None

    def to_xml(self) -> str:
        if not self.color:
            return f"<fill><patternFill{attrs(('patternType', self.pattern))}/></fill>"
        return (
            f"<fill><patternFill{attrs(('patternType', self.pattern))}>"
            f"<fgColor{attrs(('rgb', self.color))}/>"
            '<bgColor indexed="64"/>'
            "</patternFill></fill>"
        )


@dataclass(frozen=True)
class BorderEdge:
    style: str | None = None
    color: str | None = None

    def to_xml(self, tag: str) -> str:
        if not self.style:
            return f"<{tag}/>"
        color = f"<color{attrs(('rgb', self.color))}/>" if self.color else ""
        return f"<{tag}{attrs(('style', self.style))}>{color}</{tag}>"


@dataclass(frozen=True)
class Border:
    left: BorderEdge = BorderEdge()
    right: BorderEdge = BorderEdge()
    top: BorderEdge = BorderEdge()
    bottom: BorderEdge = BorderEdge()

    @classmethod
    def uniform(cls, style: str, color: str | None = None) -> Border:
        """A border with the same style and color on all four edges."""
        edge = BorderEdge(style, normalize_color(color))
        return cls(edge, edge, edge, edge)

    def to_xml(self) -> str:
        edges = "".join(getattr(self, edge).to_xml(edge) for edge in BORDER_EDGES)
        return f"<border>{edges}<diagonal/></border>"


@dataclass(frozen=True)
class Alignment:
    horizontal: str | None = None
    vertical: str | None = None
    wrap_text: bool = False

    def to_xml(self) -> str:
        return (
            "<alignment"
            + attrs(
                ("horizontal", self.horizontal),
                ("vertical", self.vertical),
                ("wrapText", "1" if self.wrap_text else None),
            )
            + "/>"
        )


@dataclass(frozen=True)
class CellFormat:
    """One xf record: indexes into the font, fill, border and numFmt tables."""

    font_id: int = 0
    fill_id: int = 0
    border_id: int = 0
    number_format_id: int = 0
    alignment: Alignment | None = None

    def to_xml(self, xf_id: int | None = 0) -> str:
        attributes = attrs(
            ("numFmtId", self.number_format_id),
            ("fontId", self.font_id),
            ("fillId", self.fill_id),
            ("borderId", self.border_id),
            ("xfId", xf_id),
            ("applyNumberFormat", "1" if self.number_format_id else None),
            ("applyFont", "1" if self.font_id else None),
            ("applyFill", "1" if self.fill_id else None),
            ("applyBorder", "1" if self.border_id else None),
            ("applyAlignment", "1" if self.alignment else None),
        )
        if self.alignment is None:
            return f"<xf{attributes}/>"
        return f"<xf{attributes}>{self.alignment.to_xml()}</xf>"


# ==============================================================================
# Stylesheet
# ==============================================================================


class WorkbookStyles:
    """Deduplicated style tables for one workbook.

    A new stylesheet holds the entries Excel requires: the default font, the
    "none" and "gray125" fills, an empty border and the default cell format
    at index 0.

    Example:
        >>> styles = WorkbookStyles()
        >>> header = styles.create_style(bold=True, fill_color="DDEBF7")
        >>> styles.create_style(bold=True, fill_color="DDEBF7") == header
        True
    """

    def __init__(self) -> None:
        self.fonts: list[Font] = [Font()]
        self.fills: list[Fill] = [Fill("none"), Fill("gray125")]
        self.borders: list[Border] = [Border()]
        self.number_formats: dict[str, int] = {}
        self.cell_formats: list[CellFormat] = [CellFormat()]

    @staticmethod
    def _intern(table: list, entry) -> int:
        try:
            return table.index(entry)
        except ValueError:
            table.append(entry)
            return len(table) - 1

    def add_font(self, font: Font) -> int:
        return self._intern(self.fonts, font)

    def add_fill(self, fill: Fill) -> int:
        return self._intern(self.fills, fill)

    def add_border(self, border: Border) -> int:
        return self._intern(self.borders, border)

    def add_number_format(self, code: str) -> int:
        """Return the numFmtId for a format code.

        Builtin codes map to their fixed IDs; custom codes are numbered from
        164 in the order they are first seen.
        """
        builtin = builtin_number_format_id(code)
        if builtin is not None:
            return builtin
        if code not in self.number_formats:
            number_format_id = FIRST_CUSTOM_NUMBER_FORMAT_ID + len(self.number_formats)
            self.number_formats[code] = number_format_id
            logger.debug(f"Added custom number format {number_format_id}: {code}")
        return self.number_formats[code]

    def add_cell_format(self, cell_format: CellFormat) -> int:
        """Intern a cell format and return its cellXfs index."""
        return self._intern(self.cell_formats, cell_format)

    def create_style(
        self,
        font_name: str | None = None,
        font_size: float | None = None,
        bold: bool = False,
        italic: bool = False,
        underline: bool = False,
        font_color: str | None = None,
        fill_pattern: str | None = None,
        fill_color: str | None = None,
        border_style: str | None = None,
        border_color: str | None = None,
        number_format: str | None = None,
        horizontal: str | None = None,
        vertical: str | None = None,
        wrap_text: bool = False,
    ) -> int:
        """Build a complete cell style and return its index for ``s=``.

        Unset font fields fall back to the default font. A fill color without a
        pattern implies a solid fill. The border applies to all four edges.

        Args:
            font_name: Font family name
            font_size: Size in points
            bold: Bold font
            italic: Italic font
            underline: Single underline
            font_color: RGB or ARGB hex color
            fill_pattern: patternFill type such as "solid"
            fill_color: RGB or ARGB hex foreground color
            border_style: Border style such as "thin" or "medium"
            border_color: RGB or ARGB hex border color
            number_format: Format code; builtin codes use their fixed IDs
            horizontal: Horizontal alignment
            vertical: Vertical alignment
            wrap_text: Wrap text in the cell

        Returns:
            Index into cellXfs
        """
        font_id = 0
        if font_name or font_size or bold or italic or underline or font_color:
            font_id = self.add_font(
                Font(
                    name=font_name or DEFAULT_FONT,
                    size=font_size or DEFAULT_SHEET_FONT_SIZE,
                    bold=bold,
                    italic=italic,
                    underline=underline,
                    color=normalize_color(font_color),
                )
            )

        fill_id = 0
        if fill_pattern or fill_color:
            fill_id = self.add_fill(Fill(fill_pattern or "solid", normalize_color(fill_color)))

        border_id = 0
        if border_style:
            border_id = self.add_border(Border.uniform(border_style, border_color))

        number_format_id = self.add_number_format(number_format) if number_format else 0

        alignment = None
        if horizontal or vertical or wrap_text:
            alignment = Alignment(horizontal, vertical, wrap_text)

        return self.add_cell_format(
            CellFormat(font_id, fill_id, border_id, number_format_id, alignment)
        )

    def to_xml(self) -> str:
        parts = [XML_DECLARATION, f'<styleSheet xmlns="{SPREADSHEET_NAMESPACE}">']
        if self.number_formats:
            parts.append(f'<numFmts count="{len(self.number_formats)}">')
            for code, number_format_id in self.number_formats.items():
                parts.append(
                    f"<numFmt{attrs(('numFmtId', number_format_id), ('formatCode', code))}/>"
                )
            parts.append("</numFmts>")

        parts.append(f'<fonts count="{len(self.fonts)}">')
        parts.extend(font.to_xml() for font in self.fonts)
        parts.append("</fonts>")

        parts.append(f'<fills count="{len(self.fills)}">')
        parts.extend(fill.to_xml() for fill in self.fills)
        parts.append("</fills>")

        parts.append(f'<borders count="{len(self.borders)}">')
        parts.extend(border.to_xml() for border in self.borders)
        parts.append("</borders>")

        parts.append('<cellStyleXfs count="1">')
        parts.append(CellFormat().to_xml(xf_id=None))
        parts.append("</cellStyleXfs>")

        parts.append(f'<cellXfs count="{len(self.cell_formats)}">')
        parts.extend(cell_format.to_xml() for cell_format in self.cell_formats)
        parts.append("</cellXfs>")

        parts.append('<cellStyles count="1">')
        parts.append('<cellStyle name="Normal" xfId="0" builtinId="0"/>')
        parts.append("</cellStyles>")
        parts.append("</styleSheet>")
        return "".join(parts)
