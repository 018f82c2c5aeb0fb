"""
Helpers for string-built XML fragments.

Content parts (paragraphs, runs, tables, worksheets) are rendered as strings and
composed bottom-up. These helpers keep escaping and attribute formatting in one
place so every fragment follows the same rules.
"""

import re

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'

# Characters XML 1.0 does not allow anywhere in a document
_INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def strip_invalid_xml_chars(text: str) -> str:
    """Remove control characters and other code points XML 1.0 forbids.

    Tab, newline and carriage return are kept.
    """
    return _INVALID_XML_CHARS.sub("", text)


def escape_xml(text: str) -> str:
    """Escape text for XML content or attribute values.

    Characters XML cannot represent are dropped first (see
    ``strip_invalid_xml_chars``).

    Args:
        text: Text to escape

    Returns:
        Text with ``& < > " '`` replaced by their entities
    """
    return (
        strip_invalid_xml_chars(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def on_off(value: bool) -> str:
    """Render a boolean as an OOXML on/off attribute value."""
    return "1" if value else "0"


def attrs(*pairs: tuple[str, object | None]) -> str:
    """Render attribute pairs in the given order, skipping None values.

    Args:
        *pairs: (name, value) tuples; values are converted with str() and escaped

    Returns:
        Attribute text with a leading space per attribute, or an empty string

    Example:
        >>> attrs(("w:val", "single"), ("w:sz", 4), ("w:color", None))
        ' w:val="single" w:sz="4"'
    """
    parts = []
    for name, value in pairs:
        if value is None:
            continue
        parts.append(f' {name}="{escape_xml(str(value))}"')
    return "".join(parts)


def empty_element(tag: str, *pairs: tuple[str, object | None]) -> str:
    """Render a self-closing element with ordered attributes."""
    return f"<{tag}{attrs(*pairs)}/>"
