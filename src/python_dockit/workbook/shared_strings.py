"""
Shared string table (sharedStrings.xml).

Every string cell value is stored once and referenced from worksheets by its
zero-based index. Indexes are stable once assigned.
"""

import logging

from ..constants import SPREADSHEET_NAMESPACE
from ..errors import SharedStringIndexError
from ..xmlutil import XML_DECLARATION, escape_xml

logger = logging.getLogger(__name__)


class SharedStrings:
    """String interning table for a workbook.

    Attributes:
        count: Number of ``add_string`` calls, i.e. total string references
    """

    def __init__(self) -> None:
        self._strings: list[str] = []
        self._index: dict[str, int] = {}
        self.count = 0

    def __len__(self) -> int:
        return len(self._strings)

    def __contains__(self, value: str) -> bool:
        return value in self._index

    def __iter__(self):
        return iter(self._strings)

    @property
    def unique_count(self) -> int:
        """Number of distinct strings in the table."""
        return len(self._strings)

    def add_string(self, value: str) -> int:
        """Intern a string and return its index.

        A byte-identical string returns the index it was first given.
        """
        self.count += 1
        index = self._index.get(value)
        if index is not None:
            return index
        index = len(self._strings)
        self._strings.append(value)
        self._index[value] = index
        logger.debug(f"Interned shared string {index}")
        return index

    def get_string(self, index: int) -> str:
        """Look up a string by index.

        Raises:
            SharedStringIndexError: If the index is outside the table
        """
        if index < 0 or index >= len(self._strings):
            raise SharedStringIndexError(index, len(self._strings))
        return self._strings[index]

    def to_xml(self) -> str:
        items = []
        for value in self._strings:
            # leading/trailing whitespace is dropped by Excel without xml:space
            space = ' xml:space="preserve"' if value != value.strip() else ""
            items.append(f"<si><t{space}>{escape_xml(value)}</t></si>")
        return (
            XML_DECLARATION
            + f'<sst xmlns="{SPREADSHEET_NAMESPACE}" count="{self.count}" '
            f'uniqueCount="{self.unique_count}">'
            + "".join(items)
            + "</sst>"
        )
