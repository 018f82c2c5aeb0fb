"""
python_dockit - Build Word (.docx) and Excel (.xlsx) files from Python objects.

This package provides an in-memory model of WordprocessingML and SpreadsheetML
content with fluent setters. Every model object renders itself to
schema-ordered XML, and the Document and Workbook classes package the parts
into an OPC ZIP archive.

Example:
    >>> from python_dockit import Document, Workbook
    >>> doc = Document()
    >>> doc.add_paragraph("Hello & <World>")
    >>> doc.save("hello.docx")
    >>> book = Workbook()
    >>> book.add_worksheet("Totals").add_cell("A1", "Total")
    >>> book.save("totals.xlsx")
"""

__version__ = "0.1.0"
__all__ = [
    "Document",
    "Workbook",
    "Worksheet",
    "Paragraph",
    "Run",
    "Table",
    "Drawing",
    "WrapType",
    "Header",
    "Footer",
    "HeaderFooterType",
    "SectionType",
    "Numbering",
    "Styles",
    "OOXMLPackageWriter",
    "ContentTypesManifest",
    "Relationships",
    "Relationship",
    "CoreProperties",
    "AppProperties",
    "Theme",
    "DockitError",
    "ImageNotFoundError",
    "CellReferenceError",
    "SharedStringIndexError",
]

# Import package-level building blocks
from .content_types import ContentTypesManifest

# Import document model
from .document import (
    Document,
    Drawing,
    Footer,
    Header,
    HeaderFooterType,
    Numbering,
    Paragraph,
    Run,
    SectionType,
    Styles,
    Table,
    WrapType,
)
from .errors import (
    CellReferenceError,
    DockitError,
    ImageNotFoundError,
    SharedStringIndexError,
)
from .package import OOXMLPackageWriter
from .properties import AppProperties, CoreProperties
from .relationships import Relationship, Relationships
from .theme import Theme

# Import workbook model
from .workbook import Workbook, Worksheet
