"""Geometry and layout engine for pagedoc."""

from .geometry import (
    PageLines,
    PageRects,
    Point,
    Rect,
    ZoneOrigins,
    compute_page_rects,
    get_zone_origins,
    page_to_zone,
    zone_to_page,
)
from .layout import DocumentLayout, LayoutNode, PageLayout, compute_layout, resolve_field_text

__all__ = [
    "PageLines",
    "PageRects",
    "Point",
    "Rect",
    "ZoneOrigins",
    "compute_page_rects",
    "get_zone_origins",
    "page_to_zone",
    "zone_to_page",
    "DocumentLayout",
    "LayoutNode",
    "PageLayout",
    "compute_layout",
    "resolve_field_text",
]
