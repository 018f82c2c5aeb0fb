"""Tests for cell reference, serial date and number helpers."""

from datetime import date, datetime, timezone

import pytest

from python_dockit.errors import CellReferenceError
from python_dockit.workbook.cells import (
    cell_ref,
    column_index,
    column_name,
    excel_serial_date,
    format_number,
    normalize_cell_ref,
    parse_cell_ref,
    parse_range,
)


class TestColumns:
    """Test column letter conversion."""

    @pytest.mark.parametrize(
        "index, name",
        [(0, "A"), (25, "Z"), (26, "AA"), (51, "AZ"), (52, "BA"), (701, "ZZ"), (702, "AAA")],
    )
    def test_column_name(self, index: int, name: str) -> None:
        """Indexes convert to bijective base-26 letters."""
        assert column_name(index) == name
        assert column_index(name) == index

    def test_lower_case_column(self) -> None:
        """Lower case letters are accepted."""
        assert column_index("ab") == 27

    def test_negative_column(self) -> None:
        """Negative indexes are rejected."""
        with pytest.raises(CellReferenceError):
            column_name(-1)

    def test_non_letter_column(self) -> None:
        """Column names must be ASCII letters."""
        with pytest.raises(CellReferenceError, match="letters"):
            column_index("A1")


class TestCellReferences:
    """Test A1 reference parsing."""

    def test_parse(self) -> None:
        """References parse to zero-based (row, col)."""
        assert parse_cell_ref("B7") == (6, 1)
        assert cell_ref(6, 1) == "B7"

    def test_absolute_and_lower_case(self) -> None:
        """Absolute markers and lower case normalize away."""
        assert normalize_cell_ref("$b$7") == "B7"

    @pytest.mark.parametrize("reference", ["", "7B", "A0", "A", "ABCD1", "A1B", "A-1"])
    def test_malformed(self, reference: str) -> None:
        """Malformed references raise CellReferenceError."""
        with pytest.raises(CellReferenceError):
            parse_cell_ref(reference)

    def test_outside_sheet(self) -> None:
        """References beyond the last row or column are rejected."""
        with pytest.raises(CellReferenceError, match="outside the sheet"):
            parse_cell_ref("XFE1")
        with pytest.raises(CellReferenceError):
            parse_cell_ref("A1048577")
        assert parse_cell_ref("XFD1048576") == (1048575, 16383)

    def test_error_is_value_error(self) -> None:
        """CellReferenceError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_cell_ref("nope")

    def test_parse_range(self) -> None:
        """Ranges split into normalized corners."""
        assert parse_range("a1:$c$3") == ("A1", "C3")
        assert parse_range("D4") == ("D4", "D4")


class TestSerialDates:
    """Test conversion to Excel serial numbers."""

    def test_date(self) -> None:
        """Dates are whole days since 1899-12-30."""
        assert excel_serial_date(date(2024, 1, 1)) == 45292
        assert excel_serial_date(date(1900, 3, 1)) == 61

    def test_datetime_fraction(self) -> None:
        """The time of day becomes the fractional part."""
        assert excel_serial_date(datetime(2024, 1, 1, 12, 0)) == 45292.5
        assert excel_serial_date(datetime(2024, 1, 1, 6, 0)) == 45292.25

    def test_aware_datetime_uses_wall_time(self) -> None:
        """Timezone information is dropped, keeping the wall clock time."""
        aware = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert excel_serial_date(aware) == 45292.5


class TestFormatNumber:
    """Test numeric text rendering."""

    def test_integral_float(self) -> None:
        """Integral floats drop the decimal part."""
        assert format_number(42.0) == "42"
        assert format_number(45292.0) == "45292"

    def test_fractional_float(self) -> None:
        """Fractions use the shortest round-trip form."""
        assert format_number(0.1) == "0.1"
        assert format_number(1250.5) == "1250.5"

    def test_int_and_bool(self) -> None:
        """Integers print as-is and booleans as 1/0."""
        assert format_number(-7) == "-7"
        assert format_number(True) == "1"
