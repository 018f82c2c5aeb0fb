"""
Block containers: the document body and the shared content API.

Body, Header and Footer all own an ordered sequence of block items (paragraphs
and tables). ``BlockItem`` is that union; each item renders itself, so
containers never switch on the item type when serializing.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .drawing import Drawing
from .paragraph import Paragraph
from .run import BreakType
from .section import SectionProperties, SectionType
from .table import Table

BlockItem = Paragraph | Table


def iter_paragraphs(items: Iterable[BlockItem]) -> Iterator[Paragraph]:
    """Yield paragraphs in document order, descending into tables."""
    for item in items:
        if isinstance(item, Table):
            yield from item.iter_paragraphs()
        else:
            yield item


def iter_drawings(items: Iterable[BlockItem]) -> Iterator[Drawing]:
    """Yield drawings in document order, descending into tables."""
    for paragraph in iter_paragraphs(items):
        yield from paragraph.iter_drawings()


class BlockContainer:
    """Ordered paragraphs and tables with append-only helpers.

    Attributes:
        content: Block items in document order
    """

    def __init__(self) -> None:
        self.content: list[BlockItem] = []

    def add_paragraph(self, text: str | None = None) -> Paragraph:
        """Append a paragraph, optionally with one text run, and return it."""
        paragraph = Paragraph()
        if text is not None:
            paragraph.add_text(text)
        self.content.append(paragraph)
        return paragraph

    def add_table(self, rows: int, cols: int) -> Table:
        table = Table(rows, cols)
        self.content.append(table)
        return table

    def add_page_number(self, prefix: str = "", suffix: str = "") -> Paragraph:
        """Append a centered paragraph holding a PAGE field."""
        return self.add_paragraph().set_alignment("center").add_page_number(prefix, suffix)

    @property
    def paragraphs(self) -> list[Paragraph]:
        return [item for item in self.content if isinstance(item, Paragraph)]

    @property
    def tables(self) -> list[Table]:
        return [item for item in self.content if isinstance(item, Table)]

    def iter_drawings(self) -> Iterator[Drawing]:
        return iter_drawings(self.content)

    def content_xml(self) -> str:
        return "".join(item.to_xml() for item in self.content)


class Body(BlockContainer):
    """The document body (w:body) and its final section properties."""

    def __init__(self) -> None:
        super().__init__()
        self.section_properties = SectionProperties()

    def add_page_break(self) -> Paragraph:
        """Append a paragraph holding a page break run."""
        paragraph = self.add_paragraph()
        paragraph.add_break(BreakType.PAGE)
        return paragraph

    def add_section_break(
        self, section_type: SectionType | str = SectionType.NEXT_PAGE
    ) -> Paragraph:
        """End the current section with a break paragraph.

        The break paragraph carries a copy of the current section properties.
        Later changes to ``section_properties`` only affect the sections that
        follow the break.

        Returns:
            The paragraph that closes the section
        """
        closing = self.section_properties.copy()
        self.section_properties.section_type = SectionType(section_type)
        paragraph = self.add_paragraph()
        paragraph.properties.section_properties = closing
        return paragraph

    def to_xml(self) -> str:
        return f"<w:body>{self.content_xml()}{self.section_properties.to_xml()}</w:body>"
