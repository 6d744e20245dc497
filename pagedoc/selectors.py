"""
Read-only queries derived from a document.

Every selector is a pure function of its arguments, so callers may memoize
on ``(document, id)`` identity: a document snapshot never changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .engine.geometry import PageRects, ZoneOrigins, compute_page_rects, get_zone_origins
from .models.document import Document, Page, PagePreset
from .models.geometry import Margin, Size
from .models.nodes import NodeBase
from .utils.enums import MarginSource, ZoneKind


@dataclass(frozen=True, slots=True)
class HeaderFooterHeights:
    header_h: float
    footer_h: float
    header_anchor_to_margins: bool = True
    footer_anchor_to_margins: bool = True


@dataclass(frozen=True, slots=True)
class PageMetrics:
    """Everything a renderer needs to place a page and its zones."""

    page_id: str
    preset_id: str
    size: Size
    margin: Margin
    heights: HeaderFooterHeights
    rects: PageRects
    origins: ZoneOrigins


@dataclass(frozen=True, slots=True)
class TargetNodes:
    """Nodes of one zone of a page, in stored order."""

    target: ZoneKind
    order: Tuple[str, ...]
    nodes: Tuple[NodeBase, ...]


def get_pages(doc: Document) -> List[Page]:
    return [doc.pages_by_id[pid] for pid in doc.page_order if pid in doc.pages_by_id]


def get_page(doc: Document, page_id: str) -> Optional[Page]:
    return doc.pages_by_id.get(page_id)


def get_page_preset(doc: Document, page_id: str) -> Optional[PagePreset]:
    page = doc.pages_by_id.get(page_id)
    if page is None:
        return None
    return doc.presets_by_id.get(page.preset_id)


def get_page_node_ids(doc: Document, page_id: str) -> Tuple[str, ...]:
    return doc.node_order_by_page_id.get(page_id, ())


def get_page_nodes(doc: Document, page_id: str) -> List[NodeBase]:
    return [doc.nodes_by_id[nid] for nid in get_page_node_ids(doc, page_id) if nid in doc.nodes_by_id]


def get_effective_margin(doc: Document, page_id: str) -> Optional[Margin]:
    """
    Margin used for layout: the page override when the page owns its margin,
    otherwise the preset margin.

    Returns:
        None when the page or its preset does not exist
    """
    page = doc.pages_by_id.get(page_id)
    if page is None:
        return None
    if page.margin_source == MarginSource.PAGE and page.margin_override is not None:
        return page.margin_override
    preset = doc.presets_by_id.get(page.preset_id)
    return preset.margin if preset is not None else None


def get_effective_header_footer_heights(doc: Document, page_id: str) -> Optional[HeaderFooterHeights]:
    """
    Header/footer heights that apply to a page.

    A zone hidden on the page counts as height 0. A preset without
    header/footer zones yields zero heights with both anchors set.
    """
    page = doc.pages_by_id.get(page_id)
    if page is None:
        return None

    hf = doc.header_footer_by_preset_id.get(page.preset_id)
    if hf is None:
        return HeaderFooterHeights(0, 0)

    return HeaderFooterHeights(
        header_h=0 if page.header_hidden else hf.header.height,
        footer_h=0 if page.footer_hidden else hf.footer.height,
        header_anchor_to_margins=hf.header.anchor_to_margins,
        footer_anchor_to_margins=hf.footer.anchor_to_margins,
    )


def get_effective_page_metrics(doc: Document, page_id: str) -> Optional[PageMetrics]:
    page = doc.pages_by_id.get(page_id)
    if page is None:
        return None
    preset = doc.presets_by_id.get(page.preset_id)
    if preset is None:
        return None

    margin = get_effective_margin(doc, page_id)
    heights = get_effective_header_footer_heights(doc, page_id)
    rects = compute_page_rects(
        preset.size,
        margin,
        heights.header_h,
        heights.footer_h,
        header_anchor_to_margins=heights.header_anchor_to_margins,
        footer_anchor_to_margins=heights.footer_anchor_to_margins,
    )
    return PageMetrics(
        page_id=page.id,
        preset_id=preset.id,
        size=preset.size,
        margin=margin,
        heights=heights,
        rects=rects,
        origins=get_zone_origins(rects),
    )


def get_nodes_by_target(doc: Document, page_id: str, target: str) -> Optional[TargetNodes]:
    """
    Resolve the ordered nodes of a page's body, header or footer.

    Header and footer nodes come from the page's preset, so every page on
    that preset sees the same list. Ids without a node are skipped.
    """
    page = doc.pages_by_id.get(page_id)
    if page is None:
        return None
    try:
        kind = ZoneKind(target)
    except ValueError:
        return None

    if kind == ZoneKind.PAGE:
        order = doc.node_order_by_page_id.get(page_id, ())
    else:
        hf = doc.header_footer_by_preset_id.get(page.preset_id)
        order = hf.zone(kind.value).node_order if hf is not None else ()

    nodes = tuple(doc.nodes_by_id[nid] for nid in order if nid in doc.nodes_by_id)
    return TargetNodes(target=kind, order=order, nodes=nodes)
