"""
Units converter for pagedoc documents.

Handles conversion between display pixels, typographic points and the
internal fixed-point centi-point unit (1/100 pt), plus millimetres and
inches for paper definitions.
"""

from typing import Dict, Optional
import logging
import math

from reportlab.lib.units import inch, mm

from ..exceptions import UnitConversionError
from ..models.geometry import Margin

logger = logging.getLogger(__name__)

PT_PER_PX = 0.75
PT100_PER_PT = 100

_MARGIN_SIDES = ("top", "right", "bottom", "left")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upward (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def px_to_pt(px: float) -> float:
    return px * PT_PER_PX


def pt_to_px(pt: float) -> float:
    return pt / PT_PER_PX


def pt_to_pt100(value: float) -> int:
    """Points to centi-points, rounded to the nearest integer."""
    return round_half_up(value * PT100_PER_PT)


def pt100_to_pt(value: float) -> float:
    return value / PT100_PER_PT


def pt100_to_px(value: float) -> float:
    return pt_to_px(value / PT100_PER_PT)


def px_to_pt100(px: float) -> int:
    return round_half_up(px_to_pt(px) * PT100_PER_PT)


def mm_to_pt(value: float) -> float:
    return value * mm


def inch_to_pt(value: float) -> float:
    return value * inch


def margin_pt_to_pt100(margin):
    """Convert a full margin (any object with the four sides) from pt to pt100."""
    return Margin(*(pt_to_pt100(getattr(margin, side)) for side in _MARGIN_SIDES))


def margin_pt100_to_pt(margin):
    return Margin(*(pt100_to_pt(getattr(margin, side)) for side in _MARGIN_SIDES))


def margin_patch_pt_to_pt100(patch: Dict[str, Optional[float]]) -> Dict[str, int]:
    """
    Convert a partial margin patch from pt to pt100.

    Sides that are missing or ``None`` are left out of the result so the
    patch never introduces undefined sides.
    """
    return {
        side: pt_to_pt100(patch[side])
        for side in _MARGIN_SIDES
        if patch.get(side) is not None
    }


class UnitsConverter:
    """
    Converts lengths between the units understood by pagedoc.

    Everything is routed through points; ``dpi`` only matters for pixels.
    """

    SUPPORTED_UNITS = ("px", "pt", "pt100", "mm", "in")

    def __init__(self, dpi: int = 96):
        """
        Initialize units converter.

        Args:
            dpi: Dots per inch for pixel conversions
        """
        if not isinstance(dpi, int) or dpi <= 0:
            raise UnitConversionError("DPI must be a positive integer", str(dpi))
        self.dpi = dpi
        logger.debug(f"Units converter initialized with DPI: {dpi}")

    @property
    def pt_per_px(self) -> float:
        return 72.0 / self.dpi

    def to_points(self, value: float, unit: str) -> float:
        """
        Convert a value expressed in ``unit`` to points.

        Args:
            value: Value to convert
            unit: Source unit

        Returns:
            Points value
        """
        if not isinstance(value, (int, float)):
            raise UnitConversionError("Value must be a number", repr(value))

        if unit == "pt":
            return float(value)
        if unit == "px":
            return value * self.pt_per_px
        if unit == "pt100":
            return pt100_to_pt(value)
        if unit == "mm":
            return mm_to_pt(value)
        if unit == "in":
            return inch_to_pt(value)
        raise UnitConversionError("Unsupported unit", unit)

    def from_points(self, value: float, unit: str) -> float:
        """
        Convert a points value to ``unit``.

        Args:
            value: Points value
            unit: Target unit

        Returns:
            Converted value (pt100 values are rounded to integers)
        """
        if unit == "pt":
            return float(value)
        if unit == "px":
            return value / self.pt_per_px
        if unit == "pt100":
            return pt_to_pt100(value)
        if unit == "mm":
            return value / mm
        if unit == "in":
            return value / inch
        raise UnitConversionError("Unsupported unit", unit)

    def convert(self, value: float, from_unit: str, to_unit: str) -> float:
        """
        Convert between any supported units.

        Args:
            value: Value to convert
            from_unit: Source unit
            to_unit: Target unit

        Returns:
            Converted value
        """
        if from_unit == to_unit:
            return value
        result = self.from_points(self.to_points(value, from_unit), to_unit)
        logger.debug(f"{from_unit} to {to_unit}: {value} -> {result}")
        return result
