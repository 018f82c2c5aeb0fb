"""
Header and Footer parts.

Headers and footers in OOXML are stored in separate XML files (header1.xml,
footer1.xml, etc.) and are linked to a section via relationships referenced
from sectPr. Each part also owns the relationships for the images it contains.
"""

from ..constants import DOCUMENT_DIR, NSMAP_DOCUMENT, xmlns_declarations
from ..relationships import Relationships
from ..xmlutil import XML_DECLARATION
from .body import BlockContainer
from .section import HeaderFooterType


class _HeaderFooterPart(BlockContainer):
    """Shared behavior of header and footer parts.

    Attributes:
        index: 1-based part number, used in the file name
        header_footer_type: The type the part was created for
        rel_id: Document relationship ID, assigned by the allocation pass
        relationships: The part's own relationships (images)
    """

    kind = ""
    root_tag = ""

    def __init__(
        self, index: int, header_footer_type: HeaderFooterType = HeaderFooterType.DEFAULT
    ) -> None:
        super().__init__()
        self.index = index
        self.header_footer_type = header_footer_type
        self.rel_id: str | None = None
        self.relationships = Relationships(self.part_name)

    @property
    def filename(self) -> str:
        return f"{self.kind}{self.index}.xml"

    @property
    def part_name(self) -> str:
        return f"{DOCUMENT_DIR}/{self.filename}"

    def to_xml(self) -> str:
        return (
            f"{XML_DECLARATION}"
            f"<w:{self.root_tag} {xmlns_declarations(NSMAP_DOCUMENT)}>"
            f"{self.content_xml() or '<w:p/>'}"
            f"</w:{self.root_tag}>"
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.filename} type={self.header_footer_type.value}>"


class Header(_HeaderFooterPart):
    """A header part (w:hdr)."""

    kind = "header"
    root_tag = "hdr"


class Footer(_HeaderFooterPart):
    """A footer part (w:ftr)."""

    kind = "footer"
    root_tag = "ftr"
