"""
Document settings part (settings.xml).
"""

import logging

from ..constants import WORD_NAMESPACE
from ..xmlutil import XML_DECLARATION, escape_xml

logger = logging.getLogger(__name__)

COMPAT_SETTING_URI = "http://schemas.microsoft.com/office/document"

# Legacy w:compat flags, in schema order
COMPAT_FLAGS = (
    "doNotExpandShiftReturn",
    "doNotUseHTMLParagraphAutoSpacing",
    "doNotBreakWrappedTables",
    "doNotSnapToGridInCell",
    "doNotWrapTextWithPunct",
    "doNotUseEastAsianBreakRules",
    "doNotUseIndentAsNumberingTabStop",
    "allowSpaceOfSameStyleInTable",
    "doNotSuppressIndentation",
    "doNotAutofitConstrainedTables",
    "splitPgBreakAndParaMark",
    "doNotVertAlignCellWithSp",
    "doNotBreakConstrainedForcedTable",
    "doNotVertAlignInTxbx",
    "useAnsiKerningPairs",
)


class Settings:
    """Document-wide settings.

    Attributes:
        update_fields: Ask the application to refresh fields on open
        zoom: Zoom percentage
        default_tab_stop: Default tab stop in twips
        even_and_odd_headers: Use separate even-page headers and footers
        character_spacing_control: East Asian punctuation compression
        compatibility_mode: Word compatibility mode ("15" = Word 2013+)
        compat_flags: Enabled legacy compatibility flags
    """

    def __init__(self) -> None:
        self.update_fields = True
        self.zoom = 100
        self.default_tab_stop = 720
        self.even_and_odd_headers = False
        self.character_spacing_control = "doNotCompress"
        self.compatibility_mode = "15"
        self.compat_flags: set[str] = set()

    def set_update_fields(self, update_fields: bool = True) -> "Settings":
        self.update_fields = update_fields
        return self

    def set_zoom(self, percent: int) -> "Settings":
        self.zoom = percent
        return self

    def set_default_tab_stop(self, twips: int) -> "Settings":
        self.default_tab_stop = twips
        return self

    def set_even_and_odd_headers(self, enabled: bool = True) -> "Settings":
        self.even_and_odd_headers = enabled
        return self

    def set_compatibility_mode(self, mode: str) -> "Settings":
        self.compatibility_mode = mode
        return self

    def set_compat_flag(self, name: str, enabled: bool = True) -> "Settings":
        """Enable or disable one legacy compatibility flag.

        Names that are not a known w:compat child are logged and ignored.
        """
        if name not in COMPAT_FLAGS:
            logger.warning(f"Ignoring unknown compatibility flag: {name}")
            return self
        if enabled:
            self.compat_flags.add(name)
        else:
            self.compat_flags.discard(name)
        return self

    def to_xml(self) -> str:
        parts = [f'{XML_DECLARATION}<w:settings xmlns:w="{WORD_NAMESPACE}">']
        parts.append(f'<w:zoom w:percent="{self.zoom}"/>')
        parts.append(f'<w:defaultTabStop w:val="{self.default_tab_stop}"/>')
        if self.even_and_odd_headers:
            parts.append("<w:evenAndOddHeaders/>")
        if self.character_spacing_control:
            parts.append(
                f'<w:characterSpacingControl w:val="{escape_xml(self.character_spacing_control)}"/>'
            )
        if self.update_fields:
            parts.append('<w:updateFields w:val="true"/>')
        parts.append("<w:compat>")
        parts.extend(f"<w:{flag}/>" for flag in COMPAT_FLAGS if flag in self.compat_flags)
        if self.compatibility_mode:
            parts.append(
                f'<w:compatSetting w:name="compatibilityMode" w:uri="{COMPAT_SETTING_URI}" '
                f'w:val="{escape_xml(self.compatibility_mode)}"/>'
            )
        parts.append("</w:compat>")
        parts.append("</w:settings>")
        return "".join(parts)
