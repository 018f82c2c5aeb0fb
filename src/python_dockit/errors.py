"""
Custom exception classes for python_dockit package.

Writing a package is mostly permissive: property setters never validate their
input. These exceptions cover the few conditions that abort generation, such as
an image relationship with no matching drawing or a malformed cell reference.
"""


class DockitError(Exception):
    """Base exception for all python_dockit errors."""

    pass


class ImageNotFoundError(DockitError):
    """Raised when an image relationship has no drawing in the content tree.

    Attributes:
        rel_id: The relationship ID that could not be resolved
        part_name: The part whose relationships declared the image
    """

    def __init__(self, rel_id: str, part_name: str | None = None) -> None:
        self.rel_id = rel_id
        self.part_name = part_name
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format an error message naming the missing image."""
        msg = f"Image not found for relationship ID '{self.rel_id}'"
        if self.part_name:
            msg += f" in part '{self.part_name}'"
        return msg


class CellReferenceError(DockitError, ValueError):
    """Raised when a cell reference or column name cannot be parsed.

    Attributes:
        reference: The offending reference string
    """

    def __init__(self, reference: str, reason: str | None = None) -> None:
        self.reference = reference
        self.reason = reason
        msg = f"Invalid cell reference: '{reference}'"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class SharedStringIndexError(DockitError, IndexError):
    """Raised when a shared string index is outside the table.

    Attributes:
        index: The requested index
        size: Number of entries in the table
    """

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Shared string index {index} out of range (table has {size} entries)")
