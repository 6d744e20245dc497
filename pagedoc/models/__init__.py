"""Document model for pagedoc."""

from .geometry import Margin, Size
from .nodes import (
    NODE_CLASSES,
    BoxNode,
    BoxStyle,
    CropRect,
    FieldNode,
    GroupNode,
    ImageNode,
    Node,
    NodeBase,
    NodeOwner,
    PinConstraints,
    TextAutosize,
    TextNode,
    TextStyle,
    node_class_for,
)
from .document import (
    DOCUMENT_SCHEMA_VERSION,
    AssetLibrary,
    Document,
    DocumentMeta,
    Guide,
    GuideSet,
    GuideSnap,
    HeaderFooter,
    HeaderFooterZone,
    ImageAsset,
    Page,
    PagePreset,
    empty_document,
)
from .draft import DocumentDraft

__all__ = [
    "Margin",
    "Size",
    "NODE_CLASSES",
    "BoxNode",
    "BoxStyle",
    "CropRect",
    "FieldNode",
    "GroupNode",
    "ImageNode",
    "Node",
    "NodeBase",
    "NodeOwner",
    "PinConstraints",
    "TextAutosize",
    "TextNode",
    "TextStyle",
    "node_class_for",
    "DOCUMENT_SCHEMA_VERSION",
    "AssetLibrary",
    "Document",
    "DocumentMeta",
    "Guide",
    "GuideSet",
    "GuideSnap",
    "HeaderFooter",
    "HeaderFooterZone",
    "ImageAsset",
    "Page",
    "PagePreset",
    "empty_document",
    "DocumentDraft",
]
