"""
Tables (w:tbl) with rows, cells and their properties.

Cells hold the same block content as the body (paragraphs and nested tables),
so tables can be nested to any depth.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..constants import DEFAULT_CELL_MARGIN
from ..xmlutil import attrs, empty_element, escape_xml, on_off
from .formatting import Border, CellMargins, Shading, borders_xml
from .paragraph import Paragraph

TABLE_BORDER_EDGES = ("top", "left", "bottom", "right", "insideH", "insideV")
CELL_BORDER_EDGES = ("top", "left", "bottom", "right")
CELL_MARGIN_EDGES = ("top", "left", "bottom", "right")

# Bits of the legacy w:tblLook/@w:val mask
LOOK_FIRST_ROW = 0x0020
LOOK_LAST_ROW = 0x0040
LOOK_FIRST_COLUMN = 0x0080
LOOK_LAST_COLUMN = 0x0100
LOOK_NO_H_BAND = 0x0200
LOOK_NO_V_BAND = 0x0400

# Percentage widths are fiftieths of a percent
PCT_FULL_WIDTH = 5000


def _parse_width(width: int | str, width_type: str) -> tuple[int, str]:
    """Normalize a width to (value, type).

    Percent strings such as "100%" become fiftieths of a percent with type
    "pct". Any other string falls back to automatic width.
    """
    if isinstance(width, str):
        if width.endswith("%"):
            try:
                percent = float(width[:-1])
            except ValueError:
                return 0, "auto"
            return round(percent * PCT_FULL_WIDTH / 100), "pct"
        return 0, "auto"
    return width, width_type


def _expand_edges(position: str, edges: tuple[str, ...]) -> tuple[str, ...]:
    return edges if position == "all" else (position,)


def _make_border(style: str, size: int, color: str) -> Border:
    return Border(style or "none", size, color or "000000", 0)


@dataclass
class TableLook:
    first_row: bool = False
    last_row: bool = False
    first_column: bool = False
    last_column: bool = False
    no_h_band: bool = False
    no_v_band: bool = False

    @property
    def mask(self) -> int:
        value = 0
        for flag, bit in (
            (self.first_row, LOOK_FIRST_ROW),
            (self.last_row, LOOK_LAST_ROW),
            (self.first_column, LOOK_FIRST_COLUMN),
            (self.last_column, LOOK_LAST_COLUMN),
            (self.no_h_band, LOOK_NO_H_BAND),
            (self.no_v_band, LOOK_NO_V_BAND),
        ):
            if flag:
                value |= bit
        return value

    def to_xml(self) -> str:
        return (
            "<w:tblLook"
            + attrs(
                ("w:val", f"{self.mask:04X}"),
                ("w:firstRow", on_off(self.first_row)),
                ("w:lastRow", on_off(self.last_row)),
                ("w:firstColumn", on_off(self.first_column)),
                ("w:lastColumn", on_off(self.last_column)),
                ("w:noHBand", on_off(self.no_h_band)),
                ("w:noVBand", on_off(self.no_v_band)),
            )
            + "/>"
        )


@dataclass
class TableProperties:
    """Table-level formatting (w:tblPr)."""

    style: str | None = None
    width: int = 0
    width_type: str = "auto"
    alignment: str | None = "left"
    indent: int | None = None
    borders: dict[str, Border] = field(
        default_factory=lambda: {edge: Border() for edge in TABLE_BORDER_EDGES}
    )
    layout: str | None = "autofit"
    cell_margins: CellMargins = field(
        default_factory=lambda: CellMargins(left=DEFAULT_CELL_MARGIN, right=DEFAULT_CELL_MARGIN)
    )
    look: TableLook | None = None

    def to_xml(self) -> str:
        parts = ["<w:tblPr>"]
        if self.style:
            parts.append(f'<w:tblStyle w:val="{escape_xml(self.style)}"/>')
        parts.append(f'<w:tblW w:w="{self.width}" w:type="{escape_xml(self.width_type)}"/>')
        if self.alignment:
            parts.append(f'<w:jc w:val="{escape_xml(self.alignment)}"/>')
        if self.indent is not None:
            parts.append(f'<w:tblInd w:w="{self.indent}" w:type="dxa"/>')
        edges = [(edge, self.borders.get(edge)) for edge in TABLE_BORDER_EDGES]
        parts.append(borders_xml("tblBorders", edges))
        if self.layout:
            parts.append(f'<w:tblLayout w:type="{escape_xml(self.layout)}"/>')
        parts.append(self.cell_margins.to_xml())
        if self.look is not None:
            parts.append(self.look.to_xml())
        parts.append("</w:tblPr>")
        return "".join(parts)


@dataclass
class TableCellProperties:
    """Cell-level formatting (w:tcPr). The cell width is always emitted."""

    width: int = 0
    width_type: str = "auto"
    grid_span: int = 1
    vertical_merge: str | None = None
    borders: dict[str, Border] = field(default_factory=dict)
    shading: Shading | None = None
    no_wrap: bool = False
    fit_text: bool = False
    vertical_alignment: str | None = "top"

    def to_xml(self) -> str:
        parts = ["<w:tcPr>"]
        parts.append(f'<w:tcW w:w="{self.width}" w:type="{escape_xml(self.width_type)}"/>')
        if self.grid_span > 1:
            parts.append(f'<w:gridSpan w:val="{self.grid_span}"/>')
        if self.vertical_merge == "continue":
            parts.append("<w:vMerge/>")
        elif self.vertical_merge:
            parts.append(f'<w:vMerge w:val="{escape_xml(self.vertical_merge)}"/>')
        parts.append(
            borders_xml("tcBorders", [(edge, self.borders.get(edge)) for edge in CELL_BORDER_EDGES])
        )
        if self.shading is not None:
            parts.append(self.shading.to_xml())
        if self.no_wrap:
            parts.append("<w:noWrap/>")
        if self.fit_text:
            parts.append("<w:tcFitText/>")
        if self.vertical_alignment:
            parts.append(f'<w:vAlign w:val="{escape_xml(self.vertical_alignment)}"/>')
        parts.append("</w:tcPr>")
        return "".join(parts)


@dataclass
class TableCell:
    """A table cell owning block content.

    A cell with no content renders one empty paragraph, and a cell whose last
    item is a nested table gets a trailing empty paragraph, since a cell must
    end with a paragraph.
    """

    properties: TableCellProperties = field(default_factory=TableCellProperties)
    content: list[Paragraph | Table] = field(default_factory=list)

    def add_paragraph(self) -> Paragraph:
        paragraph = Paragraph()
        self.content.append(paragraph)
        return paragraph

    def add_text(self, text: str) -> Paragraph:
        """Append a paragraph holding one text run and return the paragraph."""
        paragraph = self.add_paragraph()
        paragraph.add_text(text)
        return paragraph

    def add_table(self, rows: int, cols: int) -> Table:
        table = Table(rows, cols)
        self.content.append(table)
        return table

    def set_width(self, width: int | str, width_type: str = "dxa") -> TableCell:
        self.properties.width, self.properties.width_type = _parse_width(width, width_type)
        return self

    def set_vertical_alignment(self, alignment: str) -> TableCell:
        """Set vertical alignment ("top", "center", "bottom")."""
        self.properties.vertical_alignment = alignment
        return self

    def set_borders(
        self, position: str, style: str = "single", size: int = 4, color: str = "000000"
    ) -> TableCell:
        """Set a cell border edge, or every edge with position "all"."""
        border = _make_border(style, size, color)
        for edge in _expand_edges(position, CELL_BORDER_EDGES):
            self.properties.borders[edge] = border
        return self

    def set_shading(self, fill: str, color: str = "auto", pattern: str = "clear") -> TableCell:
        self.properties.shading = Shading(fill, color, pattern)
        return self

    def set_grid_span(self, span: int) -> TableCell:
        self.properties.grid_span = span
        return self

    def set_vertical_merge(self, merge: str | None) -> TableCell:
        """Set vertical merge state: "restart" starts a merge, "continue" extends it."""
        self.properties.vertical_merge = merge
        return self

    def set_no_wrap(self, no_wrap: bool = True) -> TableCell:
        self.properties.no_wrap = no_wrap
        return self

    def set_fit_text(self, fit_text: bool = True) -> TableCell:
        self.properties.fit_text = fit_text
        return self

    def to_xml(self) -> str:
        content = "".join(item.to_xml() for item in self.content)
        if not self.content or isinstance(self.content[-1], Table):
            content += "<w:p/>"
        return f"<w:tc>{self.properties.to_xml()}{content}</w:tc>"


@dataclass
class TableRowProperties:
    height: int | None = None
    height_rule: str = "auto"
    cant_split: bool = False
    is_header: bool = False

    def to_xml(self) -> str:
        parts = []
        if self.cant_split:
            parts.append("<w:cantSplit/>")
        if self.height is not None:
            parts.append(
                empty_element("w:trHeight", ("w:val", self.height), ("w:hRule", self.height_rule))
            )
        if self.is_header:
            parts.append("<w:tblHeader/>")
        inner = "".join(parts)
        return f"<w:trPr>{inner}</w:trPr>" if inner else ""


@dataclass
class TableRow:
    properties: TableRowProperties = field(default_factory=TableRowProperties)
    cells: list[TableCell] = field(default_factory=list)

    def add_cell(self) -> TableCell:
        cell = TableCell()
        self.cells.append(cell)
        return cell

    def set_height(self, height: int, rule: str = "atLeast") -> TableRow:
        """Set row height in twips with rule "atLeast", "exact" or "auto"."""
        self.properties.height = height
        self.properties.height_rule = rule
        return self

    def set_cant_split(self, cant_split: bool = True) -> TableRow:
        self.properties.cant_split = cant_split
        return self

    def set_is_header(self, is_header: bool = True) -> TableRow:
        """Repeat this row at the top of each page."""
        self.properties.is_header = is_header
        return self

    @property
    def grid_width(self) -> int:
        return sum(max(cell.properties.grid_span, 1) for cell in self.cells)

    def to_xml(self) -> str:
        cells = "".join(cell.to_xml() for cell in self.cells)
        return f"<w:tr>{self.properties.to_xml()}{cells}</w:tr>"


class Table:
    """A table with a fixed initial grid.

    Example:
        >>> table = Table(2, 3).set_width("100%").set_borders("all", "single", 8)
        >>> table.cell(0, 0).add_text("Name")
        >>> table.rows[0].set_is_header()

    Attributes:
        properties: Table formatting
        rows: Rows in document order
    """

    def __init__(self, rows: int = 0, cols: int = 0) -> None:
        self.properties = TableProperties()
        self.rows: list[TableRow] = []
        for _ in range(rows):
            row = self.add_row()
            for _ in range(cols):
                row.add_cell()

    def add_row(self) -> TableRow:
        row = TableRow()
        self.rows.append(row)
        return row

    def cell(self, row: int, col: int) -> TableCell:
        """Return the cell at (row, col), zero-based.

        Raises:
            IndexError: If the position is outside the table
        """
        return self.rows[row].cells[col]

    def set_width(self, width: int | str, width_type: str = "dxa") -> Table:
        """Set table width in twips, in fiftieths of a percent, or as "NN%"."""
        self.properties.width, self.properties.width_type = _parse_width(width, width_type)
        return self

    def set_alignment(self, alignment: str) -> Table:
        self.properties.alignment = alignment
        return self

    def set_indent(self, twips: int) -> Table:
        self.properties.indent = twips
        return self

    def set_layout(self, layout: str) -> Table:
        """Set layout algorithm ("autofit" or "fixed")."""
        self.properties.layout = layout
        return self

    def set_style(self, style_id: str) -> Table:
        self.properties.style = style_id
        return self

    def set_borders(
        self, position: str, style: str = "single", size: int = 4, color: str = "000000"
    ) -> Table:
        """Set a table border edge, or all six edges with position "all".

        An empty style means "none" and an empty color means black.
        """
        border = _make_border(style, size, color)
        for edge in _expand_edges(position, TABLE_BORDER_EDGES):
            self.properties.borders[edge] = border
        return self

    def set_cell_margin(self, position: str, twips: int) -> Table:
        """Set the default cell margin for one edge, or every edge with "all"."""
        for edge in _expand_edges(position, CELL_MARGIN_EDGES):
            setattr(self.properties.cell_margins, edge, twips)
        return self

    def set_look(
        self,
        first_row: bool = False,
        last_row: bool = False,
        first_column: bool = False,
        last_column: bool = False,
        no_h_band: bool = False,
        no_v_band: bool = False,
    ) -> Table:
        """Choose which conditional formats of the table style apply."""
        self.properties.look = TableLook(
            first_row, last_row, first_column, last_column, no_h_band, no_v_band
        )
        return self

    def iter_paragraphs(self):
        """Yield every paragraph in the table, descending into nested tables."""
        for row in self.rows:
            for cell in row.cells:
                for item in cell.content:
                    if isinstance(item, Table):
                        yield from item.iter_paragraphs()
                    else:
                        yield item

    def _grid_xml(self) -> str:
        columns = max((row.grid_width for row in self.rows), default=0)
        widths: list[int | None] = [None] * columns
        if self.rows:
            position = 0
            for cell in self.rows[0].cells:
                span = max(cell.properties.grid_span, 1)
                if span == 1 and cell.properties.width_type == "dxa" and position < columns:
                    widths[position] = cell.properties.width
                position += span
        cols = "".join(
            f'<w:gridCol w:w="{width}"/>' if width is not None else "<w:gridCol/>"
            for width in widths
        )
        return f"<w:tblGrid>{cols}</w:tblGrid>"

    def to_xml(self) -> str:
        rows = "".join(row.to_xml() for row in self.rows)
        return f"<w:tbl>{self.properties.to_xml()}{self._grid_xml()}{rows}</w:tbl>"
