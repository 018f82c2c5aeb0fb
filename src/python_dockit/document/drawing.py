"""
Picture drawings for WordprocessingML runs.

A Drawing holds the image bytes and its layout (inline or anchored with a text
wrap). Its relationship ID and docPr ID are not known when it is built: the
owning Document assigns both in its allocation pass before rendering, and
writes the bytes to ``document/media/``.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from PIL import Image

from ..constants import EMU_PER_INCH, EMU_PER_PIXEL, PIC_NAMESPACE, image_content_type
from ..xmlutil import attrs, escape_xml

logger = logging.getLogger(__name__)

# Used when Pillow cannot read the image (e.g., WMF/EMF)
DEFAULT_IMAGE_SIZE = 2 * EMU_PER_INCH


class WrapType(Enum):
    """How text flows around a drawing."""

    INLINE = "inline"
    SQUARE = "square"
    TIGHT = "tight"
    THROUGH = "through"
    TOP_AND_BOTTOM = "topAndBottom"
    BEHIND = "behind"
    IN_FRONT = "inFront"


@dataclass
class DrawingPosition:
    """Anchor position along one axis.

    Either ``align`` (e.g., "center") or ``offset`` (EMU) is emitted; align wins
    when both are set.

    Attributes:
        relative_from: Reference frame (e.g., "column", "page", "paragraph")
        align: Alignment keyword
        offset: Offset in EMU
    """

    relative_from: str
    align: str | None = None
    offset: int = 0

    def to_xml(self, tag: str) -> str:
        if self.align:
            inner = f"<wp:align>{escape_xml(self.align)}</wp:align>"
        else:
            inner = f"<wp:posOffset>{self.offset}</wp:posOffset>"
        return f'<wp:{tag} relativeFrom="{escape_xml(self.relative_from)}">{inner}</wp:{tag}>'


def get_image_dimensions(data: bytes) -> tuple[int, int] | None:
    """Read pixel dimensions with Pillow.

    Args:
        data: Raw image bytes

    Returns:
        Tuple of (width, height) in pixels, or None if Pillow cannot identify the image
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.size
    except OSError as e:
        logger.debug(f"Could not read image dimensions: {e}")
        return None


def calculate_dimensions(
    data: bytes, width: int | None, height: int | None
) -> tuple[int, int]:
    """Resolve a drawing's extent in EMU.

    Given both dimensions they are used as-is. Given one, the other follows the
    image's aspect ratio. Given neither, the pixel size at 96 DPI is used.

    Args:
        data: Raw image bytes
        width: Width in EMU, or None
        height: Height in EMU, or None

    Returns:
        Tuple of (width_emu, height_emu)
    """
    if width is not None and height is not None:
        return width, height

    dimensions = get_image_dimensions(data)
    if dimensions and dimensions[0] > 0 and dimensions[1] > 0:
        pixel_width, pixel_height = dimensions
        aspect_ratio = pixel_width / pixel_height
        if width is not None:
            return width, round(width / aspect_ratio)
        if height is not None:
            return round(height * aspect_ratio), height
        return pixel_width * EMU_PER_PIXEL, pixel_height * EMU_PER_PIXEL

    logger.warning("Image size unknown, using default of 2 inches")
    return (
        width if width is not None else DEFAULT_IMAGE_SIZE,
        height if height is not None else DEFAULT_IMAGE_SIZE,
    )


class Drawing:
    """An embedded picture.

    Example:
        >>> drawing = Drawing.from_file("logo.png", width=inches_to_emu(2))
        >>> drawing.set_wrap_type(WrapType.SQUARE).set_position_h("margin", align="center")
        >>> paragraph.add_run().add_drawing(drawing)

    Attributes:
        image_data: Raw image bytes
        extension: Image format hint, lower case without dot (e.g., "png")
        width: Width in EMU
        height: Height in EMU
        name: Picture name shown in the consuming application
        description: Alternative text
        rel_id: Relationship ID assigned by the allocation pass
        doc_pr_id: Numeric drawing ID assigned by the allocation pass
        target: Media path relative to the owning part (e.g., "media/image1.png")
    """

    def __init__(
        self,
        image_data: bytes,
        extension: str,
        width: int | None = None,
        height: int | None = None,
        name: str = "Picture",
        description: str = "",
    ) -> None:
        self.image_data = image_data
        self.extension = extension.lower().lstrip(".")
        self.width, self.height = calculate_dimensions(image_data, width, height)
        self.name = name
        self.description = description
        self.wrap_type = WrapType.INLINE
        self.position_h = DrawingPosition("column", align="left")
        self.position_v = DrawingPosition("paragraph", offset=0)
        self.rel_id: str | None = None
        self.doc_pr_id: int | None = None
        self.target: str | None = None

    @classmethod
    def from_file(
        cls, path: str | Path, width: int | None = None, height: int | None = None
    ) -> Drawing:
        """Build a drawing from an image file.

        Args:
            path: Image file path; its suffix is the format hint
            width: Width in EMU (None to derive from the image)
            height: Height in EMU (None to derive from the image)

        Raises:
            FileNotFoundError: If the image file does not exist
        """
        path = Path(path)
        data = path.read_bytes()
        return cls(data, path.suffix, width, height, name=path.stem)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        image_format: str,
        name: str = "Picture",
        width: int | None = None,
        height: int | None = None,
    ) -> Drawing:
        """Build a drawing from raw bytes and a format hint (e.g., "png")."""
        return cls(data, image_format, width, height, name=name)

    @property
    def content_type(self) -> str | None:
        return image_content_type(self.extension)

    def set_size(self, width: int, height: int) -> Drawing:
        self.width = width
        self.height = height
        return self

    def set_name(self, name: str) -> Drawing:
        self.name = name
        return self

    def set_description(self, description: str) -> Drawing:
        self.description = description
        return self

    def set_wrap_type(self, wrap_type: WrapType | str) -> Drawing:
        self.wrap_type = WrapType(wrap_type)
        return self

    def set_position_h(
        self, relative_from: str, align: str | None = None, offset: int = 0
    ) -> Drawing:
        """Set the horizontal anchor position (anchored wraps only)."""
        self.position_h = DrawingPosition(relative_from, align, offset)
        return self

    def set_position_v(
        self, relative_from: str, align: str | None = None, offset: int = 0
    ) -> Drawing:
        """Set the vertical anchor position (anchored wraps only)."""
        self.position_v = DrawingPosition(relative_from, align, offset)
        return self

    # -------------------------------------------------------------------------
    # XML emission
    # -------------------------------------------------------------------------

    def _doc_pr_xml(self) -> str:
        doc_pr_attrs = attrs(
            ("id", self.doc_pr_id or 0),
            ("name", self.name),
            ("descr", self.description or None),
        )
        return f"<wp:docPr{doc_pr_attrs}/>"

    def _graphic_xml(self) -> str:
        return (
            "<wp:cNvGraphicFramePr>"
            '<a:graphicFrameLocks noChangeAspect="1"/>'
            "</wp:cNvGraphicFramePr>"
            "<a:graphic>"
            f'<a:graphicData uri="{PIC_NAMESPACE}">'
            "<pic:pic>"
            "<pic:nvPicPr>"
            f"<pic:cNvPr{attrs(('id', 0), ('name', self.name))}/>"
            '<pic:cNvPicPr><a:picLocks noChangeAspect="1" noChangeArrowheads="1"/></pic:cNvPicPr>'
            "</pic:nvPicPr>"
            "<pic:blipFill>"
            f"<a:blip{attrs(('r:embed', self.rel_id or ''))}/>"
            "<a:stretch><a:fillRect/></a:stretch>"
            "</pic:blipFill>"
            "<pic:spPr>"
            "<a:xfrm>"
            '<a:off x="0" y="0"/>'
            f'<a:ext cx="{self.width}" cy="{self.height}"/>'
            "</a:xfrm>"
            '<a:prstGeom prst="rect"><a:avLst/></a:prstGeom>'
            "</pic:spPr>"
            "</pic:pic>"
            "</a:graphicData>"
            "</a:graphic>"
        )

    def _extent_xml(self) -> str:
        return (
            f'<wp:extent cx="{self.width}" cy="{self.height}"/>'
            '<wp:effectExtent l="0" t="0" r="0" b="0"/>'
        )

    def _wrap_xml(self) -> str:
        # Tight/through wraps require a polygon; use the picture's bounding box
        polygon = (
            '<wp:wrapPolygon edited="0">'
            '<wp:start x="0" y="0"/>'
            '<wp:lineTo x="0" y="21600"/>'
            '<wp:lineTo x="21600" y="21600"/>'
            '<wp:lineTo x="21600" y="0"/>'
            '<wp:lineTo x="0" y="0"/>'
            "</wp:wrapPolygon>"
        )
        if self.wrap_type is WrapType.SQUARE:
            return '<wp:wrapSquare wrapText="bothSides"/>'
        if self.wrap_type is WrapType.TIGHT:
            return f'<wp:wrapTight wrapText="bothSides">{polygon}</wp:wrapTight>'
        if self.wrap_type is WrapType.THROUGH:
            return f'<wp:wrapThrough wrapText="bothSides">{polygon}</wp:wrapThrough>'
        if self.wrap_type is WrapType.TOP_AND_BOTTOM:
            return "<wp:wrapTopAndBottom/>"
        return "<wp:wrapNone/>"

    def _inline_xml(self) -> str:
        return (
            '<wp:inline distT="0" distB="0" distL="0" distR="0">'
            f"{self._extent_xml()}"
            f"{self._doc_pr_xml()}"
            f"{self._graphic_xml()}"
            "</wp:inline>"
        )

    def _anchor_xml(self) -> str:
        behind = "1" if self.wrap_type is WrapType.BEHIND else "0"
        return (
            '<wp:anchor distT="0" distB="0" distL="114300" distR="114300" simplePos="0" '
            f'relativeHeight="{self.doc_pr_id or 0}" behindDoc="{behind}" locked="0" '
            'layoutInCell="1" allowOverlap="1">'
            '<wp:simplePos x="0" y="0"/>'
            f"{self.position_h.to_xml('positionH')}"
            f"{self.position_v.to_xml('positionV')}"
            f"{self._extent_xml()}"
            f"{self._wrap_xml()}"
            f"{self._doc_pr_xml()}"
            f"{self._graphic_xml()}"
            "</wp:anchor>"
        )

    def to_xml(self) -> str:
        """Render the w:drawing element.

        The wp, a, pic and r prefixes are declared on the part root.
        """
        if self.wrap_type is WrapType.INLINE:
            body = self._inline_xml()
        else:
            body = self._anchor_xml()
        return f"<w:drawing>{body}</w:drawing>"
