"""
WordprocessingML model classes for python_dockit.

Each class renders its own XML fragment; ``Document`` composes them into parts
and packages the result.
"""

from python_dockit.document.body import Body
from python_dockit.document.document import Document
from python_dockit.document.drawing import Drawing, DrawingPosition, WrapType
from python_dockit.document.formatting import Border, CellMargins, Shading
from python_dockit.document.header_footer import Footer, Header
from python_dockit.document.numbering import (
    AbstractNum,
    LevelOverride,
    Num,
    Numbering,
    NumberingLevel,
)
from python_dockit.document.paragraph import Paragraph, ParagraphProperties
from python_dockit.document.run import (
    BreakType,
    FieldCharType,
    Run,
    RunProperties,
    VerticalAlignment,
)
from python_dockit.document.section import (
    HeaderFooterType,
    Orientation,
    PageMargin,
    PageSize,
    SectionProperties,
    SectionType,
)
from python_dockit.document.settings import Settings
from python_dockit.document.styles import Style, Styles, StyleType
from python_dockit.document.table import Table, TableCell, TableLook, TableRow

__all__ = [
    "Document",
    "Body",
    "Paragraph",
    "ParagraphProperties",
    "Run",
    "RunProperties",
    "BreakType",
    "FieldCharType",
    "VerticalAlignment",
    "Drawing",
    "DrawingPosition",
    "WrapType",
    "Table",
    "TableRow",
    "TableCell",
    "TableLook",
    "Border",
    "Shading",
    "CellMargins",
    "Header",
    "Footer",
    "HeaderFooterType",
    "SectionProperties",
    "SectionType",
    "Orientation",
    "PageSize",
    "PageMargin",
    "Numbering",
    "NumberingLevel",
    "AbstractNum",
    "Num",
    "LevelOverride",
    "Styles",
    "Style",
    "StyleType",
    "Settings",
]
