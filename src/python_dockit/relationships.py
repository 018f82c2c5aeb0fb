"""
Relationships class for building .rels parts in OOXML packages.

A relationship links one part to another (or to an external resource) using a
unique ID (rId), a relationship type URI, and a target path. Each source part
owns its own relationship set, written next to it under a ``_rels`` folder.
"""

import logging
import posixpath
from dataclasses import dataclass

from lxml import etree

from .constants import PACKAGE_RELATIONSHIPS_NAMESPACE

logger = logging.getLogger(__name__)

TARGET_MODE_EXTERNAL = "External"


@dataclass(frozen=True)
class Relationship:
    """One entry of a relationship part.

    Attributes:
        id: Relationship ID, unique within its part (e.g., "rId3")
        type: Relationship type URI
        target: Target path relative to the source part's folder, or a URL
        target_mode: "External" for targets outside the package, else None
    """

    id: str
    type: str
    target: str
    target_mode: str | None = None

    @property
    def is_external(self) -> bool:
        return self.target_mode == TARGET_MODE_EXTERNAL


class Relationships:
    """Ordered relationship set for one source part.

    IDs are minted by counting the relationships already present, so the n-th
    relationship added is always "rId<n>". Single entries are never removed,
    which keeps every minted ID stable once it has been embedded in part XML;
    ``clear`` only exists so an allocation pass can start over.

    Example:
        >>> rels = Relationships("document/document.xml")
        >>> rels.add_relationship(RelationshipTypes.STYLES, "styles.xml")
        'rId1'
        >>> rels.rels_path
        'document/_rels/document.xml.rels'

    Attributes:
        part_name: The part this relationship set belongs to ("" for the package)
    """

    def __init__(self, part_name: str = "") -> None:
        """Initialize an empty relationship set.

        Args:
            part_name: Source part path inside the package, without leading slash.
                      An empty string denotes the package itself (``_rels/.rels``).
        """
        self.part_name = part_name
        self._relationships: list[Relationship] = []

    @property
    def rels_path(self) -> str:
        """Compute the .rels path for the source part.

        For example, "document/document.xml" -> "document/_rels/document.xml.rels"
        and the package itself -> "_rels/.rels".
        """
        if not self.part_name:
            return "_rels/.rels"
        folder, filename = posixpath.split(self.part_name)
        return posixpath.join(folder, "_rels", f"{filename}.rels")

    def __len__(self) -> int:
        return len(self._relationships)

    def __iter__(self):
        return iter(self._relationships)

    def __bool__(self) -> bool:
        return bool(self._relationships)

    def _next_id(self) -> str:
        return f"rId{len(self._relationships) + 1}"

    def get_relationship(self, rel_type: str) -> str | None:
        """Get the ID of the first relationship of a given type.

        Args:
            rel_type: The relationship type URI to look for

        Returns:
            The relationship ID if found, None otherwise
        """
        for rel in self._relationships:
            if rel.type == rel_type:
                return rel.id
        return None

    def get_by_id(self, rel_id: str) -> Relationship | None:
        """Get a relationship by its ID."""
        for rel in self._relationships:
            if rel.id == rel_id:
                return rel
        return None

    def get_by_type(self, rel_type: str) -> list[Relationship]:
        """Get every relationship of a given type, in insertion order."""
        return [rel for rel in self._relationships if rel.type == rel_type]

    def add_relationship(self, rel_type: str, target: str) -> str:
        """Add a new relationship or return the existing one of the same type.

        Use this for singleton parts such as styles or settings.

        Args:
            rel_type: The relationship type URI
            target: The target path (relative to the part's directory)

        Returns:
            The relationship ID (e.g., "rId3")
        """
        existing_id = self.get_relationship(rel_type)
        if existing_id is not None:
            logger.debug(f"Relationship {rel_type} already exists: {existing_id}")
            return existing_id
        return self.add_unique_relationship(rel_type, target)

    def add_unique_relationship(
        self, rel_type: str, target: str, external: bool = False
    ) -> str:
        """Add a new relationship, always creating a new ID.

        Use this for relationship types that can have multiple instances, like
        headers, footers, images and hyperlinks.

        Args:
            rel_type: The relationship type URI
            target: The target path (relative to the part's directory) or URL
            external: Mark the target as outside the package

        Returns:
            The new relationship ID (e.g., "rId3")
        """
        rel_id = self._next_id()
        target_mode = TARGET_MODE_EXTERNAL if external else None
        self._relationships.append(Relationship(rel_id, rel_type, target, target_mode))
        logger.debug(f"Added relationship {rel_id}: {rel_type} -> {target}")
        return rel_id

    def clear(self) -> None:
        """Drop every relationship so IDs can be allocated again from rId1."""
        self._relationships.clear()

    def to_element(self) -> etree._Element:
        root = etree.Element(
            f"{{{PACKAGE_RELATIONSHIPS_NAMESPACE}}}Relationships",
            nsmap={None: PACKAGE_RELATIONSHIPS_NAMESPACE},
        )
        for rel in self._relationships:
            rel_elem = etree.SubElement(
                root, f"{{{PACKAGE_RELATIONSHIPS_NAMESPACE}}}Relationship"
            )
            rel_elem.set("Id", rel.id)
            rel_elem.set("Type", rel.type)
            rel_elem.set("Target", rel.target)
            if rel.target_mode:
                rel_elem.set("TargetMode", rel.target_mode)
        return root

    def to_xml(self) -> bytes:
        """Serialize the relationship part with an XML declaration."""
        return etree.tostring(
            self.to_element(),
            encoding="UTF-8",
            xml_declaration=True,
            standalone=True,
        )
