"""
ContentTypes class for building [Content_Types].xml in OOXML packages.

Content types define the MIME type for each part in the package. They use two
mechanisms:
- Default: Maps file extensions to content types (e.g., .xml -> application/xml)
- Override: Maps specific part names to content types (e.g., /document/document.xml)
"""

import logging

from lxml import etree

from .constants import CONTENT_TYPES_NAMESPACE, ContentTypes

logger = logging.getLogger(__name__)


class ContentTypesManifest:
    """Collects Default and Override entries and renders the manifest.

    Entries keep insertion order and are deduplicated: adding a default for an
    extension, or an override for a part, that is already present is a no-op.

    Example:
        >>> manifest = ContentTypesManifest.for_images()
        >>> manifest.add_override("/document/document.xml", ContentTypes.DOCUMENT)
        True
        >>> xml_bytes = manifest.to_xml()
    """

    def __init__(self) -> None:
        self._defaults: dict[str, str] = {}
        self._overrides: dict[str, str] = {}

    @classmethod
    def for_images(cls) -> "ContentTypesManifest":
        """Create a manifest pre-populated with xml, rels and image defaults."""
        manifest = cls()
        manifest.add_default("rels", ContentTypes.RELATIONSHIPS)
        manifest.add_default("xml", ContentTypes.XML)
        for extension, content_type in ContentTypes.IMAGE_EXTENSION_MAP.items():
            manifest.add_default(extension, content_type)
        return manifest

    def add_default(self, extension: str, content_type: str) -> bool:
        """Add a content type default for a file extension.

        Args:
            extension: File extension without the leading dot (e.g., "png")
            content_type: The content type for files with this extension

        Returns:
            True if a new default was added, False if it already existed
        """
        extension = extension.lower().lstrip(".")
        if extension in self._defaults:
            return False
        self._defaults[extension] = content_type
        logger.debug(f"Added content type default: {extension} -> {content_type}")
        return True

    def add_override(self, part_name: str, content_type: str) -> bool:
        """Add a content type override for a part.

        If an override already exists for the part, this is a no-op.

        Args:
            part_name: The part name (e.g., "/document/header1.xml")
            content_type: The content type (e.g., "application/...header+xml")

        Returns:
            True if a new override was added, False if it already existed
        """
        if not part_name.startswith("/"):
            part_name = f"/{part_name}"
        if part_name in self._overrides:
            logger.debug(f"Content type override already exists for {part_name}")
            return False
        self._overrides[part_name] = content_type
        logger.debug(f"Added content type override: {part_name} -> {content_type}")
        return True

    def get_content_type(self, part_name: str) -> str | None:
        """Get the content type for a part, checking overrides then defaults.

        Args:
            part_name: The part name to look up (e.g., "/document/media/image1.png")

        Returns:
            The content type string if found, None otherwise
        """
        if not part_name.startswith("/"):
            part_name = f"/{part_name}"
        if part_name in self._overrides:
            return self._overrides[part_name]
        _, dot, extension = part_name.rpartition(".")
        if not dot:
            return None
        return self._defaults.get(extension.lower())

    def has_override(self, part_name: str) -> bool:
        """Check if an override exists for the given part name."""
        if not part_name.startswith("/"):
            part_name = f"/{part_name}"
        return part_name in self._overrides

    @property
    def defaults(self) -> dict[str, str]:
        return dict(self._defaults)

    @property
    def overrides(self) -> dict[str, str]:
        return dict(self._overrides)

    def to_element(self) -> etree._Element:
        """Build the Types element with Default entries before Override entries."""
        root = etree.Element(
            f"{{{CONTENT_TYPES_NAMESPACE}}}Types",
            nsmap={None: CONTENT_TYPES_NAMESPACE},
        )
        for extension, content_type in self._defaults.items():
            default = etree.SubElement(root, f"{{{CONTENT_TYPES_NAMESPACE}}}Default")
            default.set("Extension", extension)
            default.set("ContentType", content_type)
        for part_name, content_type in self._overrides.items():
            override = etree.SubElement(root, f"{{{CONTENT_TYPES_NAMESPACE}}}Override")
            override.set("PartName", part_name)
            override.set("ContentType", content_type)
        return root

    def to_xml(self) -> bytes:
        """Serialize the manifest with an XML declaration."""
        return etree.tostring(
            self.to_element(),
            encoding="UTF-8",
            xml_declaration=True,
            standalone=True,
        )
