"""
SpreadsheetML model classes for python_dockit.
"""

from python_dockit.workbook.cells import (
    cell_ref,
    column_index,
    column_name,
    excel_serial_date,
    parse_cell_ref,
)
from python_dockit.workbook.shared_strings import SharedStrings
from python_dockit.workbook.styles import WorkbookStyles
from python_dockit.workbook.workbook import Workbook
from python_dockit.workbook.worksheet import Cell, CellType, Worksheet

__all__ = [
    "Workbook",
    "Worksheet",
    "Cell",
    "CellType",
    "SharedStrings",
    "WorkbookStyles",
    "cell_ref",
    "column_name",
    "column_index",
    "parse_cell_ref",
    "excel_serial_date",
]
