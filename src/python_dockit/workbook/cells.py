"""
Cell reference and date helpers for SpreadsheetML.

Row and column indexes are zero-based here; A1 references are one-based for
rows, as Excel writes them.
"""

import re
from datetime import date, datetime, time, timedelta

from ..errors import CellReferenceError

_CELL_REF_RE = re.compile(r"^\$?([A-Za-z]{1,3})\$?([0-9]+)$")

EXCEL_EPOCH = datetime(1899, 12, 30)
MAX_COLUMNS = 16384
MAX_ROWS = 1048576


def column_name(col: int) -> str:
    """Convert a zero-based column index to letters (0 -> "A", 26 -> "AA").

    Raises:
        CellReferenceError: If the index is negative
    """
    if col < 0:
        raise CellReferenceError(str(col), "column index must not be negative")
    name = ""
    col += 1
    while col > 0:
        col, remainder = divmod(col - 1, 26)
        name = chr(ord("A") + remainder) + name
    return name


def column_index(name: str) -> int:
    """Convert column letters to a zero-based index ("A" -> 0, "AA" -> 26).

    Raises:
        CellReferenceError: If the name contains anything but letters
    """
    if not name or not name.isalpha() or not name.isascii():
        raise CellReferenceError(name, "column name must be letters")
    result = 0
    for char in name.upper():
        result = result * 26 + (ord(char) - ord("A") + 1)
    return result - 1


def cell_ref(row: int, col: int) -> str:
    """Build an A1 reference from zero-based row and column indexes."""
    if row < 0:
        raise CellReferenceError(str(row), "row index must not be negative")
    return f"{column_name(col)}{row + 1}"


def parse_cell_ref(reference: str) -> tuple[int, int]:
    """Parse an A1 reference into zero-based (row, col).

    Absolute markers ("$B$7") and lower case letters are accepted.

    Raises:
        CellReferenceError: If the reference is malformed or out of range
    """
    match = _CELL_REF_RE.match(reference.strip())
    if match is None:
        raise CellReferenceError(reference)
    col = column_index(match.group(1))
    row = int(match.group(2)) - 1
    if row < 0 or row >= MAX_ROWS or col >= MAX_COLUMNS:
        raise CellReferenceError(reference, "outside the sheet")
    return row, col


def normalize_cell_ref(reference: str) -> str:
    """Canonical form of a reference ("$b$7" -> "B7")."""
    return cell_ref(*parse_cell_ref(reference))


def parse_range(reference: str) -> tuple[str, str]:
    """Split "A1:B2" into normalized corners; a single cell is its own range."""
    first, _, last = reference.partition(":")
    first = normalize_cell_ref(first)
    last = normalize_cell_ref(last) if last else first
    return first, last


def excel_serial_date(value: datetime | date) -> float:
    """Convert a date or datetime to an Excel serial number (1900 date system).

    Day 0 is 1899-12-30, which reproduces Excel's 1900 leap-year quirk for
    every date after 1900-02-28. Timezone-aware values keep their wall-clock
    time and drop the zone; the time of day becomes the fractional part.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.replace(tzinfo=None)
    else:
        value = datetime.combine(value, time())
    delta: timedelta = value - EXCEL_EPOCH
    return delta.days + delta.seconds / 86400 + delta.microseconds / 86400e6


def format_number(value: int | float) -> str:
    """Render a numeric cell value or size the way Excel writes it.

    Integral floats drop their ".0"; other floats use the shortest repr that
    round-trips.
    """
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)
