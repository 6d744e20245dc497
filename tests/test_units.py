"""
Tests for unit conversion.
"""

import pytest

from pagedoc.exceptions import UnitConversionError
from pagedoc.models import Margin
from pagedoc.utils.units import (
    UnitsConverter,
    inch_to_pt,
    margin_patch_pt_to_pt100,
    margin_pt100_to_pt,
    margin_pt_to_pt100,
    mm_to_pt,
    pt100_to_pt,
    pt100_to_px,
    pt_to_pt100,
    pt_to_px,
    px_to_pt,
    px_to_pt100,
    round_half_up,
)


class TestScalarConversions:
    """Test cases for px / pt / centi-point helpers."""

    def test_px_pt(self):
        """96 px is 72 pt."""
        assert px_to_pt(96) == 72
        assert pt_to_px(72) == 96

    def test_pt100_rounds_to_int(self):
        """Centi-points are integers."""
        assert pt_to_pt100(10.004) == 1000
        assert pt_to_pt100(10.006) == 1001
        assert isinstance(pt_to_pt100(1.5), int)
        assert pt100_to_pt(1250) == 12.5

    def test_px_to_pt100(self):
        assert px_to_pt100(100) == 7500
        assert pt100_to_px(7500) == 100

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2
        assert round_half_up(2.49) == 2

    def test_paper_units(self):
        """Millimetres and inches use reportlab's constants."""
        assert inch_to_pt(1) == 72
        assert mm_to_pt(25.4) == pytest.approx(72)


class TestMarginConversions:
    """Test cases for margin helpers."""

    def test_full_margin_round_trip(self):
        margin = Margin(10, 12.5, 0, 7.25)
        converted = margin_pt_to_pt100(margin)
        assert converted == Margin(1000, 1250, 0, 725)
        assert margin_pt100_to_pt(converted) == margin

    def test_patch_keeps_only_defined_sides(self):
        """Missing and None sides are not introduced."""
        assert margin_patch_pt_to_pt100({"top": 1, "left": None}) == {"top": 100}
        assert margin_patch_pt_to_pt100({}) == {}


class TestUnitsConverter:
    """Test cases for UnitsConverter."""

    def test_convert_between_units(self):
        converter = UnitsConverter()
        assert converter.convert(96, "px", "pt") == 72
        assert converter.convert(1, "in", "px") == 96
        assert converter.convert(72, "pt", "pt100") == 7200
        assert converter.convert(5, "mm", "mm") == 5

    def test_custom_dpi(self):
        converter = UnitsConverter(dpi=72)
        assert converter.convert(10, "px", "pt") == 10

    def test_invalid_dpi(self):
        with pytest.raises(UnitConversionError):
            UnitsConverter(dpi=0)

    def test_unsupported_unit(self):
        converter = UnitsConverter()
        with pytest.raises(UnitConversionError):
            converter.to_points(1, "furlong")
        with pytest.raises(UnitConversionError):
            converter.from_points(1, "furlong")

    def test_non_numeric_value(self):
        with pytest.raises(UnitConversionError):
            UnitsConverter().to_points("12", "pt")
