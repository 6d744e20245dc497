"""
Document entity graph.

Presets, pages, header/footer zones, assets and guides are frozen
dataclasses. ``Document`` keeps id-keyed dicts plus explicit order tuples;
those dicts are never mutated after a document is built, every change goes
through :class:`pagedoc.models.draft.DocumentDraft`, which copies only the
branches it touches.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ..utils.enums import DocumentUnit, GuideAxis, MarginSource, PresetSource
from .geometry import Margin, Size
from .nodes import NodeBase

DOCUMENT_SCHEMA_VERSION = 1


@dataclass(frozen=True, slots=True)
class PagePreset:
    """Shared paper definition: size and default margin."""

    id: str
    name: str
    size: Size
    margin: Margin
    source: PresetSource = PresetSource.CUSTOM
    locked: bool = False
    usage_hint: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Page:
    id: str
    preset_id: str
    name: Optional[str] = None
    visible: bool = True
    locked: bool = False
    margin_source: MarginSource = MarginSource.PRESET
    margin_override: Optional[Margin] = None
    header_hidden: bool = False
    footer_hidden: bool = False


@dataclass(frozen=True, slots=True)
class HeaderFooterZone:
    """Repeating area shared by every page of a preset."""

    id: str
    name: str
    height: float
    min_height: Optional[float] = None
    max_height: Optional[float] = None
    anchor_to_margins: bool = True
    node_order: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class HeaderFooter:
    header: HeaderFooterZone
    footer: HeaderFooterZone

    def zone(self, kind: str) -> HeaderFooterZone:
        return self.header if kind == "header" else self.footer


@dataclass(frozen=True, slots=True)
class ImageAsset:
    id: str
    src: str
    mime: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    hash: Optional[str] = None


@dataclass(frozen=True, slots=True)
class AssetLibrary:
    image_order: Tuple[str, ...] = ()
    images_by_id: Dict[str, ImageAsset] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class GuideSnap:
    enabled: bool = True
    strength: Optional[float] = None


@dataclass(frozen=True, slots=True)
class Guide:
    id: str
    pos: float
    page_id: Optional[str] = None
    axis: GuideAxis = GuideAxis.X
    name: Optional[str] = None
    locked: bool = False
    visible: bool = True
    snap: Optional[GuideSnap] = None


@dataclass(frozen=True, slots=True)
class GuideSet:
    order: Tuple[str, ...] = ()
    by_id: Dict[str, Guide] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class DocumentMeta:
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None


@dataclass(frozen=True)
class Document:
    """
    Immutable document snapshot.

    Equality is structural, so two snapshots built independently compare
    equal when they describe the same document.
    """

    id: str
    name: str = "Untitled"
    version: int = DOCUMENT_SCHEMA_VERSION
    unit: DocumentUnit = DocumentUnit.PT
    preset_order: Tuple[str, ...] = ()
    presets_by_id: Dict[str, PagePreset] = field(default_factory=dict)
    page_order: Tuple[str, ...] = ()
    pages_by_id: Dict[str, Page] = field(default_factory=dict)
    nodes_by_id: Dict[str, NodeBase] = field(default_factory=dict)
    node_order_by_page_id: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    header_footer_by_preset_id: Dict[str, HeaderFooter] = field(default_factory=dict)
    assets: Optional[AssetLibrary] = None
    guides: Optional[GuideSet] = None
    meta: Optional[DocumentMeta] = None


def empty_document(doc_id: str = "doc-empty", name: str = "New Document") -> Document:
    """A point-denominated document with no presets and no pages."""
    return Document(
        id=doc_id,
        name=name,
        unit=DocumentUnit.PT,
        assets=AssetLibrary(),
        guides=GuideSet(),
    )
