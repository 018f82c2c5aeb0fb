"""
Measurement conversions between everyday units and OOXML units.

Word lengths are twips (1/20 point), font sizes are half-points, and drawings
are sized in EMU (914400 per inch). All results are rounded to int because the
XML attributes only accept integers.
"""

from .constants import (
    CM_PER_INCH,
    EMU_PER_CM,
    EMU_PER_INCH,
    EMU_PER_PIXEL,
    EMU_PER_POINT,
    TWIPS_PER_INCH,
    TWIPS_PER_POINT,
)


def inches_to_twips(inches: float) -> int:
    return round(inches * TWIPS_PER_INCH)


def cm_to_twips(cm: float) -> int:
    return round(cm / CM_PER_INCH * TWIPS_PER_INCH)


def points_to_twips(points: float) -> int:
    return round(points * TWIPS_PER_POINT)


def twips_to_points(twips: int) -> float:
    return twips / TWIPS_PER_POINT


def points_to_half_points(points: float) -> int:
    """Convert a font size in points to the half-point value used by w:sz."""
    return round(points * 2)


def inches_to_emu(inches: float) -> int:
    return round(inches * EMU_PER_INCH)


def cm_to_emu(cm: float) -> int:
    return round(cm * EMU_PER_CM)


def points_to_emu(points: float) -> int:
    return round(points * EMU_PER_POINT)


def pixels_to_emu(pixels: float) -> int:
    """Convert pixels at 96 DPI to EMU."""
    return round(pixels * EMU_PER_PIXEL)
