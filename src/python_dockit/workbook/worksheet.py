"""
Worksheet part (xl/worksheets/sheetN.xml).

A worksheet is a sparse map from A1 references to cells, plus column widths,
row heights and merged ranges. String values are interned into the workbook's
shared string table when the cell is set, so the table records every distinct
string ever written even if a later write replaces it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from ..constants import OFFICE_RELATIONSHIPS_NAMESPACE, SPREADSHEET_NAMESPACE
from ..xmlutil import XML_DECLARATION, attrs, escape_xml
from .cells import (
    cell_ref,
    column_index,
    excel_serial_date,
    format_number,
    normalize_cell_ref,
    parse_cell_ref,
    parse_range,
)
from .shared_strings import SharedStrings
from .styles import WorkbookStyles

logger = logging.getLogger(__name__)

CellValue = str | int | float | bool | date | datetime | None

DATE_FORMAT = "mm-dd-yy"
DATETIME_FORMAT = "m/d/yy h:mm"

# Error value Excel shows for NaN and infinite results
NUMBER_ERROR = "#NUM!"


class CellType(Enum):
    """Value types written to the ``t`` attribute of a cell."""

    STRING = "s"
    NUMBER = "n"
    BOOLEAN = "b"
    ERROR = "e"


@dataclass
class Cell:
    """A single cell.

    For string cells ``value`` is the text and ``shared_string_index`` its
    index in the shared string table. Dates are stored as Excel serial numbers.
    """

    reference: str
    value: str | int | float | bool | None = None
    data_type: CellType | None = None
    formula: str | None = None
    style: int = 0
    shared_string_index: int | None = None

    def _value_xml(self) -> str:
        if self.data_type is CellType.STRING:
            return f"<v>{self.shared_string_index}</v>"
        if self.data_type is CellType.BOOLEAN:
            return f"<v>{'1' if self.value else '0'}</v>"
        if self.data_type is CellType.NUMBER:
            return f"<v>{format_number(self.value)}</v>"
        if self.data_type is CellType.ERROR:
            return f"<v>{escape_xml(self.value)}</v>"
        return ""

    def to_xml(self) -> str:
        attributes = attrs(
            ("r", self.reference),
            ("s", self.style or None),
            ("t", self.data_type.value if self.data_type not in (None, CellType.NUMBER) else None),
        )
        content = ""
        if self.formula:
            content += f"<f>{escape_xml(self.formula)}</f>"
        content += self._value_xml()
        if not content:
            return f"<c{attributes}/>"
        return f"<c{attributes}>{content}</c>"


@dataclass
class ColumnInfo:
    width: float | None = None
    hidden: bool = False


@dataclass
class RowInfo:
    height: float | None = None
    hidden: bool = False


def _column_position(column: str | int) -> int:
    if isinstance(column, int):
        return column
    return column_index(column)


class Worksheet:
    """One sheet of a workbook.

    Columns are addressed by letters ("B") or zero-based index; rows by their
    one-based row number as shown in Excel.

    Args:
        name: Sheet tab name
        sheet_id: sheetId in workbook.xml
        shared_strings: The workbook's string table
        styles: The workbook's stylesheet, used for automatic date formats

    Example:
        >>> sheet = Worksheet("Report")
        >>> sheet.add_cell("A1", "Total").value
        'Total'
    """

    def __init__(
        self,
        name: str,
        sheet_id: int = 1,
        shared_strings: SharedStrings | None = None,
        styles: WorkbookStyles | None = None,
    ) -> None:
        self.name = name
        self.sheet_id = sheet_id
        self.shared_strings = shared_strings if shared_strings is not None else SharedStrings()
        self.styles = styles if styles is not None else WorkbookStyles()
        self.cells: dict[str, Cell] = {}
        self.columns: dict[int, ColumnInfo] = {}
        self.rows: dict[int, RowInfo] = {}
        self.merged_cells: list[str] = []

    @property
    def part_name(self) -> str:
        return f"xl/worksheets/sheet{self.sheet_id}.xml"

    @property
    def filename(self) -> str:
        return f"worksheets/sheet{self.sheet_id}.xml"

    # ==========================================================================
    # Cells
    # ==========================================================================

    def add_cell(self, reference: str, value: CellValue) -> Cell:
        """Set a cell value, replacing any previous value at that reference.

        Strings are interned into the shared string table; booleans, integers
        and floats are stored as-is, except NaN and infinities, which become a
        ``#NUM!`` error cell; dates and datetimes become serial numbers
        and get a date format unless the cell already carries a style. Any other
        object is stored as its ``str()``. ``None`` leaves an empty cell.

        Args:
            reference: A1 reference such as "B7" (absolute markers allowed)
            value: The cell value

        Returns:
            The new cell

        Raises:
            CellReferenceError: If the reference is malformed
        """
        reference = normalize_cell_ref(reference)
        previous = self.cells.get(reference)
        cell = Cell(reference, style=previous.style if previous else 0)

        if value is None:
            pass
        elif isinstance(value, bool):
            cell.data_type = CellType.BOOLEAN
            cell.value = value
        elif isinstance(value, float) and not math.isfinite(value):
            logger.warning(f"Non-finite number {value} in {reference}; writing #NUM!")
            cell.data_type = CellType.ERROR
            cell.value = NUMBER_ERROR
        elif isinstance(value, (int, float)):
            cell.data_type = CellType.NUMBER
            cell.value = value
        elif isinstance(value, (datetime, date)):
            cell.data_type = CellType.NUMBER
            cell.value = excel_serial_date(value)
            if not cell.style:
                number_format = DATETIME_FORMAT if isinstance(value, datetime) else DATE_FORMAT
                cell.style = self.styles.create_style(number_format=number_format)
        else:
            if not isinstance(value, str):
                logger.debug(f"Storing {type(value).__name__} in {reference} as text")
                value = str(value)
            cell.data_type = CellType.STRING
            cell.value = value
            cell.shared_string_index = self.shared_strings.add_string(value)

        self.cells[reference] = cell
        return cell

    def get_cell(self, reference: str) -> Cell | None:
        """Return the cell at a reference, or None if it was never set."""
        return self.cells.get(normalize_cell_ref(reference))

    def _get_or_create(self, reference: str) -> Cell:
        cell = self.get_cell(reference)
        if cell is None:
            cell = self.add_cell(reference, None)
        return cell

    def set_cell_formula(self, reference: str, formula: str) -> Cell:
        """Give a cell a formula; Excel computes the value on open.

        A leading "=" is dropped. A cached string value is cleared so the cell
        is not typed as a shared string; numeric and boolean values stay as the
        cached result.
        """
        cell = self._get_or_create(reference)
        cell.formula = formula[1:] if formula.startswith("=") else formula
        if cell.data_type is CellType.STRING:
            cell.data_type = None
            cell.value = None
            cell.shared_string_index = None
        return cell

    def set_cell_style(self, reference: str, style: int) -> Cell:
        """Apply a style index from ``Workbook.create_style`` to a cell."""
        cell = self._get_or_create(reference)
        cell.style = style
        return cell

    # ==========================================================================
    # Columns, rows and merges
    # ==========================================================================

    def set_column_width(self, column: str | int, width: float) -> Worksheet:
        """Set a column width in characters of the default font."""
        self.columns.setdefault(_column_position(column), ColumnInfo()).width = width
        return self

    def hide_column(self, column: str | int, hidden: bool = True) -> Worksheet:
        self.columns.setdefault(_column_position(column), ColumnInfo()).hidden = hidden
        return self

    def set_row_height(self, row: int, height: float) -> Worksheet:
        """Set a row height in points. ``row`` is the one-based row number."""
        self.rows.setdefault(row, RowInfo()).height = height
        return self

    def hide_row(self, row: int, hidden: bool = True) -> Worksheet:
        self.rows.setdefault(row, RowInfo()).hidden = hidden
        return self

    def merge_cells(self, first: str, last: str | None = None) -> str:
        """Merge a range given as "A1:C3" or as two corner references.

        Returns:
            The normalized range reference
        """
        if last is None:
            first, last = parse_range(first)
        else:
            first, last = normalize_cell_ref(first), normalize_cell_ref(last)
        merged = f"{first}:{last}"
        self.merged_cells.append(merged)
        return merged

    # ==========================================================================
    # XML
    # ==========================================================================

    def dimension(self) -> str:
        """The used range, e.g. "A1:C4"; "A1" for an empty sheet."""
        if not self.cells:
            return "A1"
        positions = [parse_cell_ref(reference) for reference in self.cells]
        top = min(row for row, _ in positions)
        bottom = max(row for row, _ in positions)
        left = min(col for _, col in positions)
        right = max(col for _, col in positions)
        first, last = cell_ref(top, left), cell_ref(bottom, right)
        return first if first == last else f"{first}:{last}"

    def _cols_xml(self) -> str:
        if not self.columns:
            return ""
        cols = []
        for position in sorted(self.columns):
            info = self.columns[position]
            cols.append(
                "<col"
                + attrs(
                    ("min", position + 1),
                    ("max", position + 1),
                    ("width", format_number(info.width) if info.width is not None else None),
                    ("hidden", "1" if info.hidden else None),
                    ("customWidth", "1" if info.width is not None else None),
                )
                + "/>"
            )
        return "<cols>" + "".join(cols) + "</cols>"

    def _sheet_data_xml(self) -> str:
        by_row: dict[int, list[tuple[int, Cell]]] = {}
        for reference, cell in self.cells.items():
            row, col = parse_cell_ref(reference)
            by_row.setdefault(row + 1, []).append((col, cell))

        rows = []
        for row_number in sorted(set(by_row) | set(self.rows)):
            info = self.rows.get(row_number, RowInfo())
            row_attrs = attrs(
                ("r", row_number),
                ("ht", format_number(info.height) if info.height is not None else None),
                ("hidden", "1" if info.hidden else None),
                ("customHeight", "1" if info.height is not None else None),
            )
            cells = sorted(by_row.get(row_number, []), key=lambda item: item[0])
            if not cells:
                rows.append(f"<row{row_attrs}/>")
                continue
            cells_xml = "".join(cell.to_xml() for _, cell in cells)
            rows.append(f"<row{row_attrs}>{cells_xml}</row>")

        if not rows:
            return "<sheetData/>"
        return "<sheetData>" + "".join(rows) + "</sheetData>"

    def _merge_cells_xml(self) -> str:
        if not self.merged_cells:
            return ""
        merges = "".join(f'<mergeCell ref="{merged}"/>' for merged in self.merged_cells)
        return f'<mergeCells count="{len(self.merged_cells)}">{merges}</mergeCells>'

    def to_xml(self) -> str:
        return (
            XML_DECLARATION
            + f'<worksheet xmlns="{SPREADSHEET_NAMESPACE}" '
            f'xmlns:r="{OFFICE_RELATIONSHIPS_NAMESPACE}">'
            + f'<dimension ref="{self.dimension()}"/>'
            + '<sheetFormatPr defaultRowHeight="15"/>'
            + self._cols_xml()
            + self._sheet_data_xml()
            + self._merge_cells_xml()
            + "</worksheet>"
        )
