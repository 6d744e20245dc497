"""Utility helpers for pagedoc."""

from .enums import (
    DocumentUnit,
    EditorTool,
    GuideAxis,
    ImageFit,
    MarginSource,
    NodeType,
    Orientation,
    PresetSource,
    TextAlign,
    VerticalAlign,
    ZoneKind,
)
from .id_manager import IDManager, create_id

__all__ = [
    "DocumentUnit",
    "EditorTool",
    "GuideAxis",
    "ImageFit",
    "MarginSource",
    "NodeType",
    "Orientation",
    "PresetSource",
    "TextAlign",
    "VerticalAlign",
    "ZoneKind",
    "IDManager",
    "create_id",
]
