"""
Centralized constants for OOXML namespaces, part paths and defaults.

This module consolidates the namespace URLs, content types, relationship types,
package paths and default values used when writing WordprocessingML and
SpreadsheetML packages. Import from here to keep both writers consistent.
"""

# =============================================================================
# Word Processing Namespaces
# =============================================================================

# Main WordprocessingML namespace (Word 2007+)
WORD_NAMESPACE = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


# =============================================================================
# DrawingML Namespaces
# =============================================================================

# DrawingML main namespace
A_NAMESPACE = "http://schemas.openxmlformats.org/drawingml/2006/main"

# Drawing picture namespace
PIC_NAMESPACE = "http://schemas.openxmlformats.org/drawingml/2006/picture"

# Word Processing Drawing namespace (inline/anchor positioning)
WP_NAMESPACE = "http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing"


# =============================================================================
# Spreadsheet Namespaces
# =============================================================================

SPREADSHEET_NAMESPACE = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"


# =============================================================================
# Package and Relationship Namespaces
# =============================================================================

# Open Packaging Convention namespaces
PACKAGE_RELATIONSHIPS_NAMESPACE = "http://schemas.openxmlformats.org/package/2006/relationships"
CONTENT_TYPES_NAMESPACE = "http://schemas.openxmlformats.org/package/2006/content-types"

# Office Document relationships
OFFICE_RELATIONSHIPS_NAMESPACE = (
    "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
)

# Core and extended properties
CORE_PROPERTIES_NAMESPACE = (
    "http://schemas.openxmlformats.org/package/2006/metadata/core-properties"
)
EXTENDED_PROPERTIES_NAMESPACE = (
    "http://schemas.openxmlformats.org/officeDocument/2006/extended-properties"
)
DC_NAMESPACE = "http://purl.org/dc/elements/1.1/"
DCTERMS_NAMESPACE = "http://purl.org/dc/terms/"
DCMITYPE_NAMESPACE = "http://purl.org/dc/dcmitype/"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"


# =============================================================================
# Namespace Maps
# =============================================================================

# Namespaces declared on the root of document.xml, header and footer parts
NSMAP_DOCUMENT = {
    "w": WORD_NAMESPACE,
    "r": OFFICE_RELATIONSHIPS_NAMESPACE,
    "wp": WP_NAMESPACE,
    "a": A_NAMESPACE,
    "pic": PIC_NAMESPACE,
}

NSMAP_CORE_PROPERTIES = {
    "cp": CORE_PROPERTIES_NAMESPACE,
    "dc": DC_NAMESPACE,
    "dcterms": DCTERMS_NAMESPACE,
    "dcmitype": DCMITYPE_NAMESPACE,
    "xsi": XSI_NAMESPACE,
}


def xmlns_declarations(nsmap: dict[str, str]) -> str:
    """Render a namespace map as xmlns attributes for a string-built root.

    Args:
        nsmap: Mapping of prefix to namespace URI

    Returns:
        Space separated ``xmlns:prefix="uri"`` declarations
    """
    return " ".join(f'xmlns:{prefix}="{uri}"' for prefix, uri in nsmap.items())


# =============================================================================
# Relationship Types
# =============================================================================


class RelationshipTypes:
    """Common OOXML relationship type URIs."""

    OFFICE_DOCUMENT = (
        "http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument"
    )
    CORE_PROPERTIES = (
        "http://schemas.openxmlformats.org/package/2006/relationships/metadata/core-properties"
    )
    EXTENDED_PROPERTIES = (
        "http://schemas.openxmlformats.org/officeDocument/2006/relationships/extended-properties"
    )
    STYLES = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/styles"
    NUMBERING = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/numbering"
    SETTINGS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/settings"
    THEME = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/theme"
    HEADER = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/header"
    FOOTER = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/footer"
    IMAGE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/image"
    HYPERLINK = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/hyperlink"
    WORKSHEET = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/worksheet"
    SHARED_STRINGS = (
        "http://schemas.openxmlformats.org/officeDocument/2006/relationships/sharedStrings"
    )


# =============================================================================
# Content Types
# =============================================================================


class ContentTypes:
    """Common OOXML content type strings."""

    # Package parts
    RELATIONSHIPS = "application/vnd.openxmlformats-package.relationships+xml"
    XML = "application/xml"
    CORE_PROPERTIES = "application/vnd.openxmlformats-package.core-properties+xml"
    EXTENDED_PROPERTIES = (
        "application/vnd.openxmlformats-officedocument.extended-properties+xml"
    )
    THEME = "application/vnd.openxmlformats-officedocument.theme+xml"

    # Word document parts
    DOCUMENT = "application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"
    STYLES = "application/vnd.openxmlformats-officedocument.wordprocessingml.styles+xml"
    SETTINGS = "application/vnd.openxmlformats-officedocument.wordprocessingml.settings+xml"
    NUMBERING = "application/vnd.openxmlformats-officedocument.wordprocessingml.numbering+xml"
    HEADER = "application/vnd.openxmlformats-officedocument.wordprocessingml.header+xml"
    FOOTER = "application/vnd.openxmlformats-officedocument.wordprocessingml.footer+xml"

    # Spreadsheet parts
    WORKBOOK = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet.main+xml"
    WORKSHEET = "application/vnd.openxmlformats-officedocument.spreadsheetml.worksheet+xml"
    SHARED_STRINGS = (
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sharedStrings+xml"
    )
    WORKBOOK_STYLES = "application/vnd.openxmlformats-officedocument.spreadsheetml.styles+xml"

    # Image types
    PNG = "image/png"
    JPEG = "image/jpeg"
    GIF = "image/gif"
    BMP = "image/bmp"
    TIFF = "image/tiff"
    WMF = "image/x-wmf"
    EMF = "image/x-emf"

    # Fallback for unknown binary parts
    OCTET_STREAM = "application/octet-stream"

    # Image extension to content type mapping
    IMAGE_EXTENSION_MAP = {
        "png": PNG,
        "jpg": JPEG,
        "jpeg": JPEG,
        "gif": GIF,
        "bmp": BMP,
        "tiff": TIFF,
        "tif": TIFF,
        "wmf": WMF,
        "emf": EMF,
    }


def image_content_type(extension: str) -> str | None:
    """Look up the MIME type for an image file extension.

    Args:
        extension: Extension with or without the leading dot, any case

    Returns:
        The content type, or None if the extension is not a known image format
    """
    return ContentTypes.IMAGE_EXTENSION_MAP.get(extension.lower().lstrip("."))


# =============================================================================
# Package Paths
# =============================================================================

CONTENT_TYPES_PART = "[Content_Types].xml"
PACKAGE_RELS_PART = "_rels/.rels"
CORE_PROPERTIES_PART = "docProps/core.xml"
APP_PROPERTIES_PART = "docProps/app.xml"

# Word packages keep their main part under "document/"
DOCUMENT_DIR = "document"
DOCUMENT_PART = "document/document.xml"
DOCUMENT_STYLES_PART = "document/styles.xml"
DOCUMENT_NUMBERING_PART = "document/numbering.xml"
DOCUMENT_SETTINGS_PART = "document/settings.xml"
DOCUMENT_THEME_PART = "document/theme/theme1.xml"

# Spreadsheet packages
WORKBOOK_PART = "xl/workbook.xml"
WORKBOOK_STYLES_PART = "xl/styles.xml"
WORKBOOK_THEME_PART = "xl/theme/theme1.xml"
SHARED_STRINGS_PART = "xl/sharedStrings.xml"

APPLICATION_NAME = "python-dockit"


# =============================================================================
# Measurement Units
# =============================================================================

TWIPS_PER_POINT = 20
TWIPS_PER_INCH = 1440
EMU_PER_INCH = 914400
EMU_PER_CM = 360000
EMU_PER_POINT = 12700
EMU_PER_PIXEL = 9525  # At 96 DPI
CM_PER_INCH = 2.54


# =============================================================================
# Document Defaults
# =============================================================================

# Page sizes in twips, portrait (width, height)
PAGE_SIZE_LETTER = (12240, 15840)
PAGE_SIZE_A4 = (11906, 16838)
PAGE_SIZE_A5 = (8419, 11906)

DEFAULT_MARGIN = 1440
DEFAULT_HEADER_FOOTER_MARGIN = 720
DEFAULT_COLUMN_SPACE = 720
DEFAULT_LINE_PITCH = 360

DEFAULT_FONT = "Calibri"
DEFAULT_FONT_SIZE = 22  # Half-points
DEFAULT_COLOR = "000000"

# Table cell left/right margin in twips
DEFAULT_CELL_MARGIN = 108

# Workbook defaults
DEFAULT_SHEET_FONT_SIZE = 11
FIRST_CUSTOM_NUMBER_FORMAT_ID = 164


# =============================================================================
# Helper Functions
# =============================================================================


def w(tag: str) -> str:
    """Create a fully qualified Word namespace tag.

    Args:
        tag: Tag name without namespace prefix (e.g., "p", "r", "t")

    Returns:
        Fully qualified tag (e.g., "{http://...wordprocessingml/2006/main}p")

    Example:
        >>> w("p")
        '{http://schemas.openxmlformats.org/wordprocessingml/2006/main}p'
    """
    return f"{{{WORD_NAMESPACE}}}{tag}"


def r(tag: str) -> str:
    """Create a fully qualified Office relationships namespace tag.

    Args:
        tag: Attribute or tag name without namespace prefix (e.g., "id", "embed")

    Returns:
        Fully qualified name with the relationships namespace
    """
    return f"{{{OFFICE_RELATIONSHIPS_NAMESPACE}}}{tag}"


def x(tag: str) -> str:
    """Create a fully qualified SpreadsheetML namespace tag.

    Args:
        tag: Tag name without namespace prefix (e.g., "c", "row")

    Returns:
        Fully qualified tag with the SpreadsheetML namespace
    """
    return f"{{{SPREADSHEET_NAMESPACE}}}{tag}"
