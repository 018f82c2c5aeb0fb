"""
Primitive formatting records shared by paragraphs, runs and tables.

These are plain value objects. Each renders a single WordprocessingML element
and never validates its values.
"""

from dataclasses import dataclass

from ..xmlutil import empty_element


@dataclass
class Border:
    """One border edge (w:top, w:left, w:insideH, ...).

    Attributes:
        style: Border style (e.g., "single", "double", "dashed", "none")
        size: Width in eighths of a point
        color: Hex RGB color or "auto"
        space: Spacing from content in points
    """

    style: str = "single"
    size: int = 4
    color: str = "000000"
    space: int = 0

    def to_xml(self, tag: str) -> str:
        """Render the border as the given element (e.g., "top", "insideH")."""
        return empty_element(
            f"w:{tag}",
            ("w:val", self.style),
            ("w:sz", self.size),
            ("w:space", self.space),
            ("w:color", self.color),
        )


@dataclass
class Shading:
    """Background shading (w:shd).

    Attributes:
        fill: Background fill color
        color: Pattern color
        pattern: Shading pattern (e.g., "clear", "solid", "pct25")
    """

    fill: str = "auto"
    color: str = "auto"
    pattern: str = "clear"

    def to_xml(self) -> str:
        return empty_element(
            "w:shd", ("w:val", self.pattern), ("w:color", self.color), ("w:fill", self.fill)
        )


def borders_xml(container: str, edges: list[tuple[str, "Border | None"]]) -> str:
    """Render a border container, skipping unset edges.

    Args:
        container: Container tag (e.g., "pBdr", "tblBorders")
        edges: (tag, border) pairs in schema order

    Returns:
        The container XML, or an empty string when no edge is set
    """
    inner = "".join(border.to_xml(tag) for tag, border in edges if border is not None)
    if not inner:
        return ""
    return f"<w:{container}>{inner}</w:{container}>"


@dataclass
class CellMargins:
    """Default cell margins of a table (w:tblCellMar), in twips.

    Unset edges are omitted.
    """

    top: int | None = None
    left: int | None = None
    bottom: int | None = None
    right: int | None = None

    def to_xml(self, tag: str = "tblCellMar") -> str:
        inner = "".join(
            empty_element(f"w:{edge}", ("w:w", value), ("w:type", "dxa"))
            for edge, value in (
                ("top", self.top),
                ("left", self.left),
                ("bottom", self.bottom),
                ("right", self.right),
            )
            if value is not None
        )
        if not inner:
            return ""
        return f"<w:{tag}>{inner}</w:{tag}>"
