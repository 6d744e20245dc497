"""Margin rules shared by presets and page overrides."""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional, Union

from ..models.geometry import Margin
from ..utils.units import round_half_up

DEFAULT_MARGIN = Margin(10, 10, 10, 10)

SIDES = ("top", "right", "bottom", "left")

MarginLike = Union[Margin, Mapping[str, Any]]


def _fix(value: Any) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return max(0, round_half_up(number))


def _side(margin: MarginLike, side: str) -> Any:
    if isinstance(margin, Mapping):
        return margin.get(side, 0)
    return getattr(margin, side)


def clamp_margin(margin: MarginLike) -> Margin:
    """Round every side to an integer and clamp it to >= 0.

    Non-numeric and non-finite sides become 0. Idempotent.
    """
    return Margin(*(_fix(_side(margin, side)) for side in SIDES))


def clean_margin_patch(patch: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep only the sides a partial patch actually defines."""
    return {side: patch[side] for side in SIDES if patch.get(side) is not None}


def to_full_margin(base: Margin, patch: Optional[MarginLike] = None) -> Margin:
    """Expand a partial margin onto ``base``."""
    if patch is None:
        return base
    if isinstance(patch, Margin):
        return patch
    cleaned = clean_margin_patch(patch)
    return Margin(*(cleaned.get(side, getattr(base, side)) for side in SIDES))
