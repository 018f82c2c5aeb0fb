"""
Runs: the smallest formatted unit of WordprocessingML content.

A run owns one RunProperties and at most one piece of content. The content is a
single value whose type says what the run holds (text, a break, a drawing, a
field character or a field instruction), so a run can never carry two kinds of
content at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..constants import DEFAULT_COLOR, DEFAULT_FONT, DEFAULT_FONT_SIZE
from ..xmlutil import attrs, escape_xml
from .drawing import Drawing
from .formatting import Shading


class BreakType(Enum):
    """Kinds of w:br."""

    PAGE = "page"
    COLUMN = "column"
    LINE = "textWrapping"


class FieldCharType(Enum):
    """Field state transitions (w:fldChar/@w:fldCharType)."""

    BEGIN = "begin"
    SEPARATE = "separate"
    END = "end"


class VerticalAlignment(Enum):
    BASELINE = "baseline"
    SUPERSCRIPT = "superscript"
    SUBSCRIPT = "subscript"


# =============================================================================
# Run content variants
# =============================================================================


@dataclass
class Text:
    """Literal text. Tabs become w:tab and newlines become w:br."""

    value: str

    def to_xml(self) -> str:
        parts = []
        segment = ""
        for char in self.value:
            if char in "\t\n":
                if segment:
                    parts.append(f'<w:t xml:space="preserve">{escape_xml(segment)}</w:t>')
                    segment = ""
                parts.append("<w:tab/>" if char == "\t" else "<w:br/>")
            else:
                segment += char
        if segment:
            parts.append(f'<w:t xml:space="preserve">{escape_xml(segment)}</w:t>')
        return "".join(parts)


@dataclass
class Break:
    break_type: BreakType = BreakType.LINE

    def to_xml(self) -> str:
        if self.break_type is BreakType.LINE:
            return "<w:br/>"
        return f'<w:br w:type="{self.break_type.value}"/>'


@dataclass
class FieldChar:
    char_type: FieldCharType

    def to_xml(self) -> str:
        return f'<w:fldChar w:fldCharType="{self.char_type.value}"/>'


@dataclass
class InstrText:
    """Field instruction code (e.g., "PAGE"), padded with spaces as Word writes it."""

    code: str

    def to_xml(self) -> str:
        return f'<w:instrText xml:space="preserve"> {escape_xml(self.code)} </w:instrText>'


RunContent = Text | Break | Drawing | FieldChar | InstrText


# =============================================================================
# Run properties
# =============================================================================


@dataclass
class RunProperties:
    """Character formatting for a run (w:rPr).

    Boolean flags emit their element only when True; other fields emit only
    when set. Font size is in half-points.
    """

    style: str | None = None
    font_ascii: str | None = DEFAULT_FONT
    font_h_ansi: str | None = DEFAULT_FONT
    font_east_asia: str | None = DEFAULT_FONT
    font_cs: str | None = DEFAULT_FONT
    bold: bool = False
    italic: bool = False
    caps: bool = False
    small_caps: bool = False
    strike: bool = False
    double_strike: bool = False
    color: str | None = DEFAULT_COLOR
    character_spacing: int | None = None
    font_size: int | None = DEFAULT_FONT_SIZE
    highlight: str | None = None
    underline: str | None = None
    shading: Shading | None = None
    vertical_alignment: VerticalAlignment | None = None
    rtl: bool = False
    language: str | None = None
    east_asia_language: str | None = None
    bidi_language: str | None = None

    def set_font_family(self, font: str) -> None:
        self.font_ascii = self.font_h_ansi = self.font_east_asia = self.font_cs = font

    def _fonts_xml(self) -> str:
        fonts = attrs(
            ("w:ascii", self.font_ascii),
            ("w:hAnsi", self.font_h_ansi),
            ("w:eastAsia", self.font_east_asia),
            ("w:cs", self.font_cs),
        )
        return f"<w:rFonts{fonts}/>" if fonts else ""

    def to_xml(self) -> str:
        parts = []
        if self.style:
            parts.append(f'<w:rStyle w:val="{escape_xml(self.style)}"/>')
        parts.append(self._fonts_xml())
        if self.bold:
            parts.append("<w:b/><w:bCs/>")
        if self.italic:
            parts.append("<w:i/><w:iCs/>")
        if self.caps:
            parts.append("<w:caps/>")
        if self.small_caps:
            parts.append("<w:smallCaps/>")
        if self.strike:
            parts.append("<w:strike/>")
        if self.double_strike:
            parts.append("<w:dstrike/>")
        if self.color:
            parts.append(f'<w:color w:val="{escape_xml(self.color)}"/>')
        if self.character_spacing is not None:
            parts.append(f'<w:spacing w:val="{self.character_spacing}"/>')
        if self.font_size is not None:
            parts.append(f'<w:sz w:val="{self.font_size}"/><w:szCs w:val="{self.font_size}"/>')
        if self.highlight:
            parts.append(f'<w:highlight w:val="{escape_xml(self.highlight)}"/>')
        if self.underline:
            parts.append(f'<w:u w:val="{escape_xml(self.underline)}"/>')
        if self.shading is not None:
            parts.append(self.shading.to_xml())
        if self.vertical_alignment is not None:
            parts.append(f'<w:vertAlign w:val="{self.vertical_alignment.value}"/>')
        if self.rtl:
            parts.append("<w:rtl/>")
        lang = attrs(
            ("w:val", self.language),
            ("w:eastAsia", self.east_asia_language),
            ("w:bidi", self.bidi_language),
        )
        if lang:
            parts.append(f"<w:lang{lang}/>")
        inner = "".join(parts)
        return f"<w:rPr>{inner}</w:rPr>" if inner else ""


# =============================================================================
# Run
# =============================================================================


@dataclass
class Run:
    """A formatted run of content.

    Setters return the run so calls can be chained:

        >>> Run().add_text("Total").set_bold(True).set_font_size(28)

    Attributes:
        properties: Character formatting
        content: The run's single content value, or None for an empty run
    """

    properties: RunProperties = field(default_factory=RunProperties)
    content: RunContent | None = None

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------

    def add_text(self, text: str) -> Run:
        """Set the run's content to text, replacing any previous content."""
        self.content = Text(text)
        return self

    def add_tab(self) -> Run:
        """Append a tab to the run's text (starting new text if needed)."""
        if isinstance(self.content, Text):
            self.content.value += "\t"
        else:
            self.content = Text("\t")
        return self

    def add_break(self, break_type: BreakType | str = BreakType.LINE) -> Run:
        self.content = Break(BreakType(break_type))
        return self

    def add_drawing(self, drawing: Drawing) -> Run:
        self.content = drawing
        return self

    def add_field_char(self, char_type: FieldCharType | str) -> Run:
        self.content = FieldChar(FieldCharType(char_type))
        return self

    def add_instruction(self, code: str) -> Run:
        self.content = InstrText(code)
        return self

    @property
    def text(self) -> str:
        """The run's text, or an empty string for non-text content."""
        return self.content.value if isinstance(self.content, Text) else ""

    @property
    def drawing(self) -> Drawing | None:
        return self.content if isinstance(self.content, Drawing) else None

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------

    def set_style(self, style_id: str) -> Run:
        self.properties.style = style_id
        return self

    def set_bold(self, bold: bool = True) -> Run:
        self.properties.bold = bold
        return self

    def set_italic(self, italic: bool = True) -> Run:
        self.properties.italic = italic
        return self

    def set_underline(self, underline: str | None = "single") -> Run:
        self.properties.underline = underline
        return self

    def set_strike(self, strike: bool = True) -> Run:
        self.properties.strike = strike
        return self

    def set_double_strike(self, double_strike: bool = True) -> Run:
        self.properties.double_strike = double_strike
        return self

    def set_caps(self, caps: bool = True) -> Run:
        self.properties.caps = caps
        return self

    def set_small_caps(self, small_caps: bool = True) -> Run:
        self.properties.small_caps = small_caps
        return self

    def set_superscript(self, superscript: bool = True) -> Run:
        self.properties.vertical_alignment = (
            VerticalAlignment.SUPERSCRIPT if superscript else None
        )
        return self

    def set_subscript(self, subscript: bool = True) -> Run:
        self.properties.vertical_alignment = VerticalAlignment.SUBSCRIPT if subscript else None
        return self

    def set_vertical_alignment(self, alignment: VerticalAlignment | str) -> Run:
        self.properties.vertical_alignment = VerticalAlignment(alignment)
        return self

    def set_font_size(self, half_points: int) -> Run:
        """Set the font size in half-points (24 = 12pt)."""
        self.properties.font_size = half_points
        return self

    def set_font_family(self, font: str) -> Run:
        """Set the font for all four script slots (ascii, hAnsi, eastAsia, cs)."""
        self.properties.set_font_family(font)
        return self

    def set_color(self, color: str) -> Run:
        self.properties.color = color
        return self

    def set_highlight(self, highlight: str) -> Run:
        self.properties.highlight = highlight
        return self

    def set_character_spacing(self, twips: int) -> Run:
        self.properties.character_spacing = twips
        return self

    def set_shading(self, fill: str, color: str = "auto", pattern: str = "clear") -> Run:
        self.properties.shading = Shading(fill, color, pattern)
        return self

    def set_rtl(self, rtl: bool = True) -> Run:
        self.properties.rtl = rtl
        return self

    def set_language(
        self, language: str, east_asia: str | None = None, bidi: str | None = None
    ) -> Run:
        self.properties.language = language
        self.properties.east_asia_language = east_asia
        self.properties.bidi_language = bidi
        return self

    def to_xml(self) -> str:
        content = self.content.to_xml() if self.content is not None else ""
        return f"<w:r>{self.properties.to_xml()}{content}</w:r>"
