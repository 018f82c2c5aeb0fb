"""
Core and extended document properties (docProps/core.xml, docProps/app.xml).

Both parts are small manifests built with lxml, the same way as the content
types and relationship parts.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from lxml import etree

from .constants import (
    APPLICATION_NAME,
    CORE_PROPERTIES_NAMESPACE,
    DC_NAMESPACE,
    DCTERMS_NAMESPACE,
    EXTENDED_PROPERTIES_NAMESPACE,
    NSMAP_CORE_PROPERTIES,
    XSI_NAMESPACE,
)
from .xmlutil import strip_invalid_xml_chars

W3CDTF_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


def format_w3cdtf(value: datetime) -> str:
    """Format a timestamp as W3CDTF in UTC.

    Naive datetimes are assumed to already be UTC.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(W3CDTF_FORMAT)


@dataclass
class CoreProperties:
    """Dublin Core metadata written to docProps/core.xml.

    Empty string fields are omitted from the output. Created and modified
    default to the time the properties object was built. Characters XML
    cannot represent are dropped from text fields.

    Attributes:
        title: Document title
        subject: Document subject
        creator: Author name
        keywords: Keyword list as free text
        description: Free-form description
        last_modified_by: Name of the last editor
        revision: Revision number
        created: Creation timestamp
        modified: Last modification timestamp
    """

    title: str = ""
    subject: str = ""
    creator: str = ""
    keywords: str = ""
    description: str = ""
    last_modified_by: str = ""
    revision: int = 1
    created: datetime = field(default_factory=_now)
    modified: datetime = field(default_factory=_now)

    def to_element(self) -> etree._Element:
        root = etree.Element(
            f"{{{CORE_PROPERTIES_NAMESPACE}}}coreProperties",
            nsmap=NSMAP_CORE_PROPERTIES,
        )

        def add(namespace: str, tag: str, text: str) -> etree._Element:
            elem = etree.SubElement(root, f"{{{namespace}}}{tag}")
            elem.text = strip_invalid_xml_chars(text)
            return elem

        if self.title:
            add(DC_NAMESPACE, "title", self.title)
        if self.subject:
            add(DC_NAMESPACE, "subject", self.subject)
        if self.creator:
            add(DC_NAMESPACE, "creator", self.creator)
        if self.keywords:
            add(CORE_PROPERTIES_NAMESPACE, "keywords", self.keywords)
        if self.description:
            add(DC_NAMESPACE, "description", self.description)
        if self.last_modified_by:
            add(CORE_PROPERTIES_NAMESPACE, "lastModifiedBy", self.last_modified_by)
        if self.revision > 0:
            add(CORE_PROPERTIES_NAMESPACE, "revision", str(self.revision))

        for tag, value in (("created", self.created), ("modified", self.modified)):
            elem = add(DCTERMS_NAMESPACE, tag, format_w3cdtf(value))
            elem.set(f"{{{XSI_NAMESPACE}}}type", "dcterms:W3CDTF")

        return root

    def to_xml(self) -> bytes:
        return etree.tostring(
            self.to_element(), encoding="UTF-8", xml_declaration=True, standalone=True
        )


@dataclass
class AppProperties:
    """Extended properties written to docProps/app.xml."""

    application: str = APPLICATION_NAME
    app_version: str = "1.0000"

    def to_element(self) -> etree._Element:
        root = etree.Element(
            f"{{{EXTENDED_PROPERTIES_NAMESPACE}}}Properties",
            nsmap={None: EXTENDED_PROPERTIES_NAMESPACE},
        )
        application = etree.SubElement(root, f"{{{EXTENDED_PROPERTIES_NAMESPACE}}}Application")
        application.text = strip_invalid_xml_chars(self.application)
        version = etree.SubElement(root, f"{{{EXTENDED_PROPERTIES_NAMESPACE}}}AppVersion")
        version.text = strip_invalid_xml_chars(self.app_version)
        return root

    def to_xml(self) -> bytes:
        return etree.tostring(
            self.to_element(), encoding="UTF-8", xml_declaration=True, standalone=True
        )
