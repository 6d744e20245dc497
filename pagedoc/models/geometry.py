"""Scalar value objects shared by presets, pages and the geometry engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping


@dataclass(frozen=True, slots=True)
class Margin:
    top: float = 0
    right: float = 0
    bottom: float = 0
    left: float = 0

    @classmethod
    def uniform(cls, value: float) -> "Margin":
        return cls(value, value, value, value)

    @classmethod
    def from_mapping(cls, value: Mapping[str, Any]) -> "Margin":
        return cls(
            top=value.get("top", 0),
            right=value.get("right", 0),
            bottom=value.get("bottom", 0),
            left=value.get("left", 0),
        )

    def to_dict(self) -> Dict[str, float]:
        return {"top": self.top, "right": self.right, "bottom": self.bottom, "left": self.left}


@dataclass(frozen=True, slots=True)
class Size:
    width: float
    height: float

    @classmethod
    def from_tuple(cls, value: Iterable[float]) -> "Size":
        width, height = value
        return cls(width, height)

    @property
    def is_landscape(self) -> bool:
        return self.width > self.height

    def swapped(self) -> "Size":
        return Size(self.height, self.width)
