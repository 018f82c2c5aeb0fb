"""Tests for unit conversions."""

from python_dockit.units import (
    cm_to_emu,
    cm_to_twips,
    inches_to_emu,
    inches_to_twips,
    pixels_to_emu,
    points_to_emu,
    points_to_half_points,
    points_to_twips,
    twips_to_points,
)


class TestTwips:
    """Test conversions to and from twips."""

    def test_inches(self) -> None:
        """One inch is 1440 twips."""
        assert inches_to_twips(1) == 1440
        assert inches_to_twips(0.5) == 720

    def test_centimeters(self) -> None:
        """2.54 cm is one inch."""
        assert cm_to_twips(2.54) == 1440

    def test_points(self) -> None:
        """One point is 20 twips."""
        assert points_to_twips(12) == 240
        assert twips_to_points(240) == 12


class TestEmu:
    """Test conversions to EMU."""

    def test_inches_and_cm(self) -> None:
        """EMU per inch and per centimeter match the DrawingML definitions."""
        assert inches_to_emu(1) == 914400
        assert cm_to_emu(1) == 360000

    def test_points_and_pixels(self) -> None:
        """Points are 12700 EMU and pixels 9525 EMU at 96 DPI."""
        assert points_to_emu(1) == 12700
        assert pixels_to_emu(96) == 914400


class TestFontSizes:
    """Test point to half-point conversion."""

    def test_half_points(self) -> None:
        """Font sizes double and round."""
        assert points_to_half_points(11) == 22
        assert points_to_half_points(10.5) == 21
