"""
System paper catalogue.

Sizes come from reportlab's page size table (points) and are rounded to
whole points, so A4 is 595 x 842.
"""

from typing import Dict, Tuple

from reportlab.lib import pagesizes

from ..utils.enums import Orientation

PAPER_SIZES: Dict[str, Tuple[int, int]] = {
    key: (round(getattr(pagesizes, key)[0]), round(getattr(pagesizes, key)[1]))
    for key in ("A3", "A4", "A5", "LETTER", "LEGAL")
}

DEFAULT_PAPER = "A4"


def paper_size_pt(paper_key: str, orientation: Orientation = Orientation.PORTRAIT) -> Tuple[int, int]:
    """
    Return ``(width, height)`` in points for a paper key.

    Unknown keys fall back to A4.
    """
    width, height = PAPER_SIZES.get(str(paper_key).upper(), PAPER_SIZES[DEFAULT_PAPER])
    if orientation == Orientation.LANDSCAPE:
        return height, width
    return width, height
