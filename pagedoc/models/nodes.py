"""
Content nodes placed on pages and in header/footer zones.

Nodes form a closed tagged union. The discriminant is the class itself:
``node.type`` is read from a class constant, so a field update can never
turn a text node into a box.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import ClassVar, Dict, Optional, Tuple, Type, Union

from ..utils.enums import ImageFit, NodeType, TextAlign, VerticalAlign, ZoneKind


@dataclass(frozen=True, slots=True)
class NodeOwner:
    """Zone a node belongs to: a page, or a preset's header/footer."""

    kind: ZoneKind
    page_id: Optional[str] = None
    preset_id: Optional[str] = None

    @classmethod
    def page(cls, page_id: str) -> "NodeOwner":
        return cls(ZoneKind.PAGE, page_id=page_id)

    @classmethod
    def header(cls, preset_id: str) -> "NodeOwner":
        return cls(ZoneKind.HEADER, preset_id=preset_id)

    @classmethod
    def footer(cls, preset_id: str) -> "NodeOwner":
        return cls(ZoneKind.FOOTER, preset_id=preset_id)

    @property
    def is_page(self) -> bool:
        return self.kind == ZoneKind.PAGE


@dataclass(frozen=True, slots=True)
class PinConstraints:
    pin_left: bool = False
    pin_right: bool = False
    pin_top: bool = False
    pin_bottom: bool = False


@dataclass(frozen=True, slots=True)
class TextStyle:
    font_family: str = "system-ui"
    font_size: float = 12
    line_height: float = 18
    align: TextAlign = TextAlign.LEFT
    color: Optional[str] = None
    vertical_align: Optional[VerticalAlign] = None
    bold: bool = False
    italic: bool = False
    underline: bool = False


@dataclass(frozen=True, slots=True)
class TextAutosize:
    mode: str = "none"
    min_h: Optional[float] = None
    max_h: Optional[float] = None


@dataclass(frozen=True, slots=True)
class BoxStyle:
    fill: Optional[str] = None
    stroke: Optional[str] = None
    stroke_width: Optional[float] = None
    radius: Optional[float] = None


@dataclass(frozen=True, slots=True)
class CropRect:
    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True, slots=True, kw_only=True)
class NodeBase:
    node_type: ClassVar[NodeType]

    id: str
    owner: NodeOwner
    page_id: Optional[str] = None
    name: Optional[str] = None
    x: float = 0
    y: float = 0
    w: float = 0
    h: float = 0
    rotation: float = 0
    z: int = 0
    visible: bool = True
    locked: bool = False
    parent_id: Optional[str] = None
    constraints: Optional[PinConstraints] = None

    @property
    def type(self) -> str:
        return self.node_type.value

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))


@dataclass(frozen=True, slots=True, kw_only=True)
class TextNode(NodeBase):
    node_type: ClassVar[NodeType] = NodeType.TEXT

    text: str = ""
    style: TextStyle = field(default_factory=TextStyle)
    autosize: Optional[TextAutosize] = None


@dataclass(frozen=True, slots=True, kw_only=True)
class BoxNode(NodeBase):
    node_type: ClassVar[NodeType] = NodeType.BOX

    style: BoxStyle = field(default_factory=BoxStyle)


@dataclass(frozen=True, slots=True, kw_only=True)
class ImageNode(NodeBase):
    node_type: ClassVar[NodeType] = NodeType.IMAGE

    asset_id: str = ""
    fit: ImageFit = ImageFit.CONTAIN
    opacity: Optional[float] = None
    crop: Optional[CropRect] = None


@dataclass(frozen=True, slots=True, kw_only=True)
class GroupNode(NodeBase):
    node_type: ClassVar[NodeType] = NodeType.GROUP

    children: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldNode(NodeBase):
    """Text whose content is resolved at render time (page number, date...)."""

    node_type: ClassVar[NodeType] = NodeType.FIELD

    field_key: str = "page_number"
    fallback_text: str = ""
    style: TextStyle = field(default_factory=TextStyle)


Node = Union[TextNode, BoxNode, ImageNode, GroupNode, FieldNode]

NODE_CLASSES: Dict[str, Type[NodeBase]] = {
    cls.node_type.value: cls for cls in (TextNode, BoxNode, ImageNode, GroupNode, FieldNode)
}


def node_class_for(node_type: str) -> Type[NodeBase]:
    """Return the node class for a ``type`` discriminant (ValueError if unknown)."""
    return NODE_CLASSES[NodeType(node_type).value]
