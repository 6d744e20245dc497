"""Common enumerations used across the pagedoc models."""

from __future__ import annotations

from enum import Enum


class DocumentUnit(str, Enum):
    """Unit a document's lengths are declared in."""

    PX = "px"
    PT = "pt"


class MarginSource(str, Enum):
    """Where a page takes its margin from."""

    PRESET = "preset"
    PAGE = "page"


class PresetSource(str, Enum):
    """Origin of a page preset."""

    SYSTEM = "system"
    CUSTOM = "custom"


class Orientation(str, Enum):
    """Paper orientation."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class ZoneKind(str, Enum):
    """Page zones that own an ordered node list."""

    PAGE = "page"
    HEADER = "header"
    FOOTER = "footer"


class NodeType(str, Enum):
    """Discriminant of the node union."""

    TEXT = "text"
    BOX = "box"
    IMAGE = "image"
    GROUP = "group"
    FIELD = "field"


class TextAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


class VerticalAlign(str, Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class ImageFit(str, Enum):
    CONTAIN = "contain"
    COVER = "cover"
    STRETCH = "stretch"


class GuideAxis(str, Enum):
    X = "x"
    Y = "y"


class EditorTool(str, Enum):
    """Active tool of an editing session."""

    SELECT = "select"
    PAN = "pan"
    TEXT = "text"
    BOX = "box"
    IMAGE = "image"
    FIELD = "field"
