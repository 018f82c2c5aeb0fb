"""
Numbering part (numbering.xml): list definitions and list instances.

Abstract numbering definitions (w:abstractNum) describe up to nine levels.
Concrete instances (w:num) bind to one definition by ID and are what
paragraphs reference through w:numPr. Both ID spaces start at 1 and grow by
one per addition.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..constants import WORD_NAMESPACE
from ..xmlutil import XML_DECLARATION, attrs, escape_xml

logger = logging.getLogger(__name__)

MAX_LEVELS = 9

# (format, text pattern) cycle for numbered lists; "{n}" is the 1-based level
NUMBER_LIST_FORMATS = (
    ("decimal", "%{n}."),
    ("lowerLetter", "%{n})."),
    ("lowerRoman", "%{n})."),
)

# (bullet character, font) cycle for bullet lists
BULLET_LIST_SYMBOLS = (
    ("•", "Symbol"),
    ("○", "Courier New"),
    ("▪", "Wingdings"),
)


@dataclass
class NumberingLevel:
    """One level of a list definition (w:lvl).

    Indents and tab stops are twips. Defaults follow ``AbstractNum.add_level``.
    """

    level: int
    start: int = 1
    number_format: str = "decimal"
    text: str = ""
    justification: str = "left"
    paragraph_style: str | None = None
    font: str | None = None
    indent: int = 720
    hanging_indent: int = 360
    tab_stop: int = 0
    suffix: str | None = "tab"

    def set_start(self, start: int) -> NumberingLevel:
        self.start = start
        return self

    def set_number_format(self, number_format: str) -> NumberingLevel:
        """Set the number format ("decimal", "bullet", "upperRoman", ...)."""
        self.number_format = number_format
        return self

    def set_text(self, text: str) -> NumberingLevel:
        """Set the level text pattern; "%1" is replaced by the level-1 counter."""
        self.text = text
        return self

    def set_justification(self, justification: str) -> NumberingLevel:
        self.justification = justification
        return self

    def set_paragraph_style(self, style_id: str) -> NumberingLevel:
        self.paragraph_style = style_id
        return self

    def set_font(self, font: str) -> NumberingLevel:
        self.font = font
        return self

    def set_indent(self, indent: int) -> NumberingLevel:
        self.indent = indent
        return self

    def set_hanging_indent(self, hanging_indent: int) -> NumberingLevel:
        self.hanging_indent = hanging_indent
        return self

    def set_tab_stop(self, tab_stop: int) -> NumberingLevel:
        self.tab_stop = tab_stop
        return self

    def set_suffix(self, suffix: str | None) -> NumberingLevel:
        """Set what follows the number: "tab", "space" or "nothing"."""
        self.suffix = suffix
        return self

    def to_xml(self) -> str:
        parts = [f'<w:lvl w:ilvl="{self.level}">']
        parts.append(f'<w:start w:val="{self.start}"/>')
        parts.append(f'<w:numFmt w:val="{escape_xml(self.number_format)}"/>')
        if self.paragraph_style:
            parts.append(f'<w:pStyle w:val="{escape_xml(self.paragraph_style)}"/>')
        if self.suffix:
            parts.append(f'<w:suff w:val="{escape_xml(self.suffix)}"/>')
        parts.append(f'<w:lvlText w:val="{escape_xml(self.text)}"/>')
        parts.append(f'<w:lvlJc w:val="{escape_xml(self.justification)}"/>')
        parts.append("<w:pPr>")
        if self.tab_stop > 0:
            parts.append(f'<w:tabs><w:tab w:val="num" w:pos="{self.tab_stop}"/></w:tabs>')
        parts.append(f'<w:ind w:left="{self.indent}" w:hanging="{self.hanging_indent}"/>')
        parts.append("</w:pPr>")
        if self.font:
            fonts = attrs(("w:ascii", self.font), ("w:hAnsi", self.font), ("w:hint", "default"))
            parts.append(f"<w:rPr><w:rFonts{fonts}/></w:rPr>")
        parts.append("</w:lvl>")
        return "".join(parts)


@dataclass
class AbstractNum:
    """A list definition (w:abstractNum)."""

    id: int
    levels: list[NumberingLevel] = field(default_factory=list)

    def add_level(self, level: int) -> NumberingLevel:
        """Add a level with defaults scaled to its depth.

        Defaults: start 1, decimal format, text "%<level+1>.", left
        justification, indent and tab stop of 720 twips per level, hanging
        indent 360, tab suffix.

        Args:
            level: Zero-based level (0-8); not range checked

        Returns:
            The new NumberingLevel
        """
        numbering_level = NumberingLevel(
            level=level,
            text=f"%{level + 1}.",
            indent=720 * (level + 1),
            tab_stop=720 * (level + 1),
        )
        self.levels.append(numbering_level)
        return numbering_level

    def to_xml(self) -> str:
        levels = "".join(level.to_xml() for level in self.levels)
        return (
            f'<w:abstractNum w:abstractNumId="{self.id}">'
            '<w:multiLevelType w:val="hybridMultilevel"/>'
            f"{levels}</w:abstractNum>"
        )


@dataclass
class LevelOverride:
    """Per-instance override of one level (w:lvlOverride)."""

    level: int
    start_at: int | None = 1
    numbering_level: NumberingLevel | None = None

    def set_start_at(self, start_at: int | None) -> LevelOverride:
        self.start_at = start_at
        return self

    def set_numbering_level(self, numbering_level: NumberingLevel) -> LevelOverride:
        self.numbering_level = numbering_level
        return self

    def to_xml(self) -> str:
        parts = [f'<w:lvlOverride w:ilvl="{self.level}">']
        if self.start_at is not None and self.start_at > 0:
            parts.append(f'<w:startOverride w:val="{self.start_at}"/>')
        if self.numbering_level is not None:
            parts.append(self.numbering_level.to_xml())
        parts.append("</w:lvlOverride>")
        return "".join(parts)


@dataclass
class Num:
    """A list instance (w:num) bound to an abstract definition."""

    id: int
    abstract_num_id: int
    level_overrides: list[LevelOverride] = field(default_factory=list)

    def add_level_override(self, level: int) -> LevelOverride:
        override = LevelOverride(level)
        self.level_overrides.append(override)
        return override

    def to_xml(self) -> str:
        overrides = "".join(override.to_xml() for override in self.level_overrides)
        return (
            f'<w:num w:numId="{self.id}">'
            f'<w:abstractNumId w:val="{self.abstract_num_id}"/>'
            f"{overrides}</w:num>"
        )


class Numbering:
    """The numbering part.

    Example:
        >>> numbering = Numbering()
        >>> bullets = numbering.create_bullet_list()
        >>> doc.add_paragraph().set_numbering(bullets, 0).add_text("First item")
    """

    def __init__(self) -> None:
        self.abstract_nums: list[AbstractNum] = []
        self.nums: list[Num] = []

    def add_abstract_num(self) -> AbstractNum:
        abstract_num = AbstractNum(id=len(self.abstract_nums) + 1)
        self.abstract_nums.append(abstract_num)
        return abstract_num

    def add_num(self, abstract_num_id: int) -> Num:
        """Create a list instance bound to an abstract definition.

        The ID is not validated; binding to a missing definition only logs a
        warning.
        """
        if not any(a.id == abstract_num_id for a in self.abstract_nums):
            logger.warning(f"Num bound to unknown abstractNumId {abstract_num_id}")
        num = Num(id=len(self.nums) + 1, abstract_num_id=abstract_num_id)
        self.nums.append(num)
        return num

    def get_abstract_num(self, abstract_num_id: int) -> AbstractNum | None:
        for abstract_num in self.abstract_nums:
            if abstract_num.id == abstract_num_id:
                return abstract_num
        return None

    def create_bullet_list(self) -> int:
        """Create a nine-level bullet list and return its numId."""
        abstract_num = self.add_abstract_num()
        for i in range(MAX_LEVELS):
            symbol, font = BULLET_LIST_SYMBOLS[i % len(BULLET_LIST_SYMBOLS)]
            abstract_num.add_level(i).set_number_format("bullet").set_text(symbol).set_font(font)
        return self.add_num(abstract_num.id).id

    def create_number_list(self) -> int:
        """Create a nine-level numbered list (1. / a). / i).) and return its numId."""
        abstract_num = self.add_abstract_num()
        for i in range(MAX_LEVELS):
            number_format, pattern = NUMBER_LIST_FORMATS[i % len(NUMBER_LIST_FORMATS)]
            abstract_num.add_level(i).set_number_format(number_format).set_text(
                pattern.format(n=i + 1)
            )
        return self.add_num(abstract_num.id).id

    def to_xml(self) -> str:
        abstract_nums = "".join(a.to_xml() for a in self.abstract_nums)
        nums = "".join(n.to_xml() for n in self.nums)
        return (
            f'{XML_DECLARATION}<w:numbering xmlns:w="{WORD_NAMESPACE}">'
            f"{abstract_nums}{nums}</w:numbering>"
        )
