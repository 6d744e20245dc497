"""
Absolute layout of a document.

For every page in order the layout pass resolves the page metrics and maps
each visible node from its zone's local coordinates to page space. Header
and footer nodes are resolved once per preset but placed on every page that
shows the zone. Nothing here measures text; node boxes are taken as stored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..models.document import Document, Page
from ..models.nodes import FieldNode, NodeBase
from ..utils.enums import ZoneKind
from .geometry import PageRects, Rect, zone_to_page

logger = logging.getLogger(__name__)

# zones are painted in this order; later zones sit on top
RENDER_ORDER = (ZoneKind.HEADER, ZoneKind.FOOTER, ZoneKind.PAGE)


###############################################################################
# Layout results
###############################################################################


@dataclass(slots=True)
class LayoutNode:
    """A node placed in page space."""

    id: str
    type: str
    target: ZoneKind
    frame: Rect
    node: NodeBase
    # resolved content of field nodes (page number, page count)
    text: Optional[str] = None


@dataclass(slots=True)
class PageLayout:
    page: Page
    index: int
    rects: PageRects
    nodes: List[LayoutNode] = field(default_factory=list)

    @property
    def page_width(self) -> float:
        return self.rects.page_w

    @property
    def page_height(self) -> float:
        return self.rects.page_h

    def nodes_in(self, target: ZoneKind) -> List[LayoutNode]:
        return [n for n in self.nodes if n.target == ZoneKind(target)]


@dataclass(slots=True)
class DocumentLayout:
    document: Document
    pages: List[PageLayout] = field(default_factory=list)

    def page(self, page_id: str) -> Optional[PageLayout]:
        for layout in self.pages:
            if layout.page.id == page_id:
                return layout
        return None


###############################################################################
# Layout pass
###############################################################################


def resolve_field_text(node: FieldNode, page_number: int, page_count: int) -> str:
    """Text shown by a field node on a given page."""
    if node.field_key == "page_number":
        return str(page_number)
    if node.field_key == "page_count":
        return str(page_count)
    if node.field_key == "page_of":
        return f"{page_number} / {page_count}"
    return node.fallback_text


def _place(node: NodeBase, target: ZoneKind, origin, page_number: int, page_count: int) -> LayoutNode:
    local = Rect(node.x, node.y, max(0, node.w), max(0, node.h))
    text = resolve_field_text(node, page_number, page_count) if isinstance(node, FieldNode) else None
    return LayoutNode(
        id=node.id,
        type=node.type,
        target=target,
        frame=zone_to_page(local, origin),
        node=node,
        text=text,
    )


def compute_layout(doc: Document, include_hidden: bool = False) -> DocumentLayout:
    """
    Place every node of every page in page space.

    Pages whose preset is missing are skipped. Within a zone nodes keep their
    stored order, stably sorted by ``z``.

    Args:
        doc: Document snapshot
        include_hidden: Also place invisible pages and nodes
    """
    # imported here: selectors depend on this package
    from ..selectors import get_effective_page_metrics, get_nodes_by_target

    result = DocumentLayout(document=doc)
    page_count = len(doc.page_order)

    for index, page_id in enumerate(doc.page_order):
        page = doc.pages_by_id.get(page_id)
        if page is None or (not page.visible and not include_hidden):
            continue

        metrics = get_effective_page_metrics(doc, page_id)
        if metrics is None:
            logger.warning(f"Page {page_id} skipped in layout: preset {page.preset_id} missing")
            continue

        layout = PageLayout(page=page, index=index, rects=metrics.rects)
        for target in RENDER_ORDER:
            if target == ZoneKind.HEADER and page.header_hidden:
                continue
            if target == ZoneKind.FOOTER and page.footer_hidden:
                continue

            origin = metrics.origins.for_target(target.value)
            zone_nodes = get_nodes_by_target(doc, page_id, target.value)
            for node in sorted(zone_nodes.nodes, key=lambda n: n.z):
                if not node.visible and not include_hidden:
                    continue
                layout.nodes.append(_place(node, target, origin, index + 1, page_count))

        result.pages.append(layout)

    return result
