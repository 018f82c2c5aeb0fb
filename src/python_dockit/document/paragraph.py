"""
Paragraphs and their properties (w:p, w:pPr).
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path

from ..xmlutil import attrs, escape_xml
from .drawing import Drawing
from .formatting import Border, Shading, borders_xml
from .run import BreakType, FieldCharType, Run, Text
from .section import SectionProperties

# Edges in schema order; used for both SetBorder positions and emission
PARAGRAPH_BORDER_EDGES = ("top", "left", "bottom", "right", "between", "bar")


@dataclass
class ParagraphProperties:
    """Paragraph formatting (w:pPr).

    Spacing and indentation values are twips and are emitted whenever set,
    including zero or negative values. ``alignment`` defaults to "left" and
    ``widow_control`` to True.
    """

    style: str | None = None
    keep_next: bool = False
    keep_lines: bool = False
    page_break_before: bool = False
    widow_control: bool = True
    num_id: int | None = None
    num_level: int = 0
    borders: dict[str, Border] = field(default_factory=dict)
    shading: Shading | None = None
    spacing_before: int | None = None
    spacing_after: int | None = None
    spacing_line: int | None = None
    spacing_line_rule: str = "auto"
    indent_left: int | None = None
    indent_right: int | None = None
    indent_first_line: int | None = None
    indent_hanging: int | None = None
    alignment: str | None = "left"
    outline_level: int | None = None
    section_properties: SectionProperties | None = None

    def to_xml(self) -> str:
        parts = []
        if self.style:
            parts.append(f'<w:pStyle w:val="{escape_xml(self.style)}"/>')
        if self.keep_next:
            parts.append("<w:keepNext/>")
        if self.keep_lines:
            parts.append("<w:keepLines/>")
        if self.page_break_before:
            parts.append("<w:pageBreakBefore/>")
        if self.widow_control:
            parts.append("<w:widowControl/>")
        if self.num_id is not None:
            parts.append(
                f'<w:numPr><w:ilvl w:val="{self.num_level}"/>'
                f'<w:numId w:val="{self.num_id}"/></w:numPr>'
            )
        parts.append(
            borders_xml("pBdr", [(edge, self.borders.get(edge)) for edge in PARAGRAPH_BORDER_EDGES])
        )
        if self.shading is not None:
            parts.append(self.shading.to_xml())
        line_rule = self.spacing_line_rule if self.spacing_line is not None else None
        spacing = attrs(
            ("w:before", self.spacing_before),
            ("w:after", self.spacing_after),
            ("w:line", self.spacing_line),
            ("w:lineRule", line_rule),
        )
        if spacing:
            parts.append(f"<w:spacing{spacing}/>")
        indent = attrs(
            ("w:left", self.indent_left),
            ("w:right", self.indent_right),
            ("w:firstLine", self.indent_first_line),
            ("w:hanging", self.indent_hanging),
        )
        if indent:
            parts.append(f"<w:ind{indent}/>")
        if self.alignment:
            parts.append(f'<w:jc w:val="{escape_xml(self.alignment)}"/>')
        if self.outline_level is not None:
            parts.append(f'<w:outlineLvl w:val="{self.outline_level}"/>')
        if self.section_properties is not None:
            parts.append(self.section_properties.to_xml())
        inner = "".join(parts)
        return f"<w:pPr>{inner}</w:pPr>" if inner else ""


@dataclass
class Paragraph:
    """A paragraph of runs.

    Example:
        >>> para = Paragraph().set_alignment("center").set_spacing_after(200)
        >>> para.add_run().add_text("Hello ").set_bold(True)
        >>> para.add_text("World")

    Attributes:
        properties: Paragraph formatting
        runs: Runs in document order
    """

    properties: ParagraphProperties = field(default_factory=ParagraphProperties)
    runs: list[Run] = field(default_factory=list)

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------

    def add_run(self) -> Run:
        """Append an empty run and return it."""
        run = Run()
        self.runs.append(run)
        return run

    def add_text(self, text: str) -> Run:
        """Append a run holding text and return the run."""
        return self.add_run().add_text(text)

    def add_break(self, break_type: BreakType | str = BreakType.LINE) -> Run:
        return self.add_run().add_break(break_type)

    def add_drawing(self, drawing: Drawing) -> Run:
        return self.add_run().add_drawing(drawing)

    def add_image(
        self, path: str | Path, width: int | None = None, height: int | None = None
    ) -> Drawing:
        """Append a run with an inline picture read from a file.

        Args:
            path: Image file path
            width: Width in EMU (None to derive from the image)
            height: Height in EMU (None to derive from the image)

        Returns:
            The new Drawing
        """
        drawing = Drawing.from_file(path, width, height)
        self.add_drawing(drawing)
        return drawing

    def add_field(self, code: str, placeholder: str = "") -> Paragraph:
        """Append a complex field as five sibling runs.

        The runs are: begin marker, instruction, separator, placeholder text,
        end marker. The placeholder is shown until the consuming application
        updates the field.

        Args:
            code: Field instruction (e.g., "PAGE", "NUMPAGES", "DATE")
            placeholder: Cached result text

        Returns:
            The paragraph, for chaining
        """
        self.add_run().add_field_char(FieldCharType.BEGIN)
        self.add_run().add_instruction(code)
        self.add_run().add_field_char(FieldCharType.SEPARATE)
        self.add_run().add_text(placeholder)
        self.add_run().add_field_char(FieldCharType.END)
        return self

    def add_page_number(self, prefix: str = "", suffix: str = "") -> Paragraph:
        """Append a PAGE field, optionally surrounded by literal text."""
        if prefix:
            self.add_text(prefix)
        self.add_field("PAGE", "1")
        if suffix:
            self.add_text(suffix)
        return self

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)

    def set_font_family_for_chars(self, font: str, chars: str) -> Paragraph:
        """Apply a font to specific characters by splitting text runs.

        Every text run is cut into maximal segments whose characters are all in
        ``chars`` or all outside it. Matching segments get ``font``; the others
        keep the original run's formatting.

        Args:
            font: Font family for the matching characters
            chars: The characters that should use the font

        Returns:
            The paragraph, for chaining
        """
        charset = set(chars)
        new_runs: list[Run] = []
        for run in self.runs:
            if not isinstance(run.content, Text) or not charset.intersection(run.content.value):
                new_runs.append(run)
                continue
            for matches, segment in _split_by_charset(run.content.value, charset):
                piece = Run(copy.deepcopy(run.properties), Text(segment))
                if matches:
                    piece.properties.set_font_family(font)
                new_runs.append(piece)
        self.runs = new_runs
        return self

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------

    def set_style(self, style_id: str) -> Paragraph:
        self.properties.style = style_id
        return self

    def set_alignment(self, alignment: str) -> Paragraph:
        """Set justification ("left", "center", "right", "both", ...)."""
        self.properties.alignment = alignment
        return self

    def set_keep_next(self, keep_next: bool = True) -> Paragraph:
        self.properties.keep_next = keep_next
        return self

    def set_keep_lines(self, keep_lines: bool = True) -> Paragraph:
        self.properties.keep_lines = keep_lines
        return self

    def set_page_break_before(self, page_break_before: bool = True) -> Paragraph:
        self.properties.page_break_before = page_break_before
        return self

    def set_widow_control(self, widow_control: bool = True) -> Paragraph:
        self.properties.widow_control = widow_control
        return self

    def set_numbering(self, num_id: int, level: int = 0) -> Paragraph:
        """Attach the paragraph to a numbering instance (w:numId) at a level."""
        self.properties.num_id = num_id
        self.properties.num_level = level
        return self

    def set_border(
        self,
        position: str,
        style: str = "single",
        size: int = 4,
        color: str = "000000",
        space: int = 1,
    ) -> Paragraph:
        """Set one border edge ("top", "left", "bottom", "right", "between", "bar")."""
        self.properties.borders[position] = Border(style, size, color, space)
        return self

    def set_shading(self, fill: str, color: str = "auto", pattern: str = "clear") -> Paragraph:
        self.properties.shading = Shading(fill, color, pattern)
        return self

    def set_spacing_before(self, twips: int) -> Paragraph:
        self.properties.spacing_before = twips
        return self

    def set_spacing_after(self, twips: int) -> Paragraph:
        self.properties.spacing_after = twips
        return self

    def set_spacing_line(self, line: int, rule: str = "auto") -> Paragraph:
        """Set line spacing; with rule "auto", 240 means single spacing."""
        self.properties.spacing_line = line
        self.properties.spacing_line_rule = rule
        return self

    def set_indent_left(self, twips: int) -> Paragraph:
        self.properties.indent_left = twips
        return self

    def set_indent_right(self, twips: int) -> Paragraph:
        self.properties.indent_right = twips
        return self

    def set_indent_first_line(self, twips: int) -> Paragraph:
        self.properties.indent_first_line = twips
        return self

    def set_indent_hanging(self, twips: int) -> Paragraph:
        self.properties.indent_hanging = twips
        return self

    def set_outline_level(self, level: int) -> Paragraph:
        self.properties.outline_level = level
        return self

    def iter_drawings(self):
        for run in self.runs:
            if run.drawing is not None:
                yield run.drawing

    def to_xml(self) -> str:
        runs = "".join(run.to_xml() for run in self.runs)
        return f"<w:p>{self.properties.to_xml()}{runs}</w:p>"


def _split_by_charset(text: str, charset: set[str]) -> list[tuple[bool, str]]:
    segments: list[tuple[bool, str]] = []
    for char in text:
        matches = char in charset
        if segments and segments[-1][0] == matches:
            segments[-1] = (matches, segments[-1][1] + char)
        else:
            segments.append((matches, char))
    return segments
