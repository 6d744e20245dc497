"""Geometry primitives and the page rectangle computation.

Page space has its origin at the top-left corner of the paper with y
growing downwards. All values are in the document's unit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..exceptions import GeometryError
from ..models.geometry import Margin, Size


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Rect:
    x: float
    y: float
    w: float
    h: float

    def __post_init__(self):
        if self.w < 0 or self.h < 0:
            raise GeometryError("Rect dimensions must be non-negative", f"w={self.w}, h={self.h}")

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def contains(self, point: Point) -> bool:
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom

    def intersects(self, other: "Rect") -> bool:
        """Check if this rectangle intersects with another rectangle.

        Args:
            other: Another Rect object

        Returns:
            True if rectangles intersect, False otherwise
        """
        return not (
            self.right < other.left or
            self.left > other.right or
            self.bottom < other.top or
            self.top > other.bottom
        )

    def union(self, other: "Rect") -> "Rect":
        """Calculate the bounding rectangle that contains both rectangles."""
        left = min(self.left, other.left)
        right = max(self.right, other.right)
        top = min(self.top, other.top)
        bottom = max(self.bottom, other.bottom)
        return Rect(left, top, right - left, bottom - top)

    def translated(self, dx: float, dy: float) -> "Rect":
        return Rect(self.x + dx, self.y + dy, self.w, self.h)


@dataclass(frozen=True, slots=True)
class PageLines:
    """Guide lines in page space, used for hit-testing and overlays."""

    margin_left_x: float
    margin_right_x: float
    margin_top_y: float
    margin_bottom_y: float
    header_bottom_y: float
    footer_top_y: float


@dataclass(frozen=True, slots=True)
class PageRects:
    page_w: float
    page_h: float
    margin: Margin
    header_h: float
    footer_h: float
    # margin box
    content_rect: Rect
    # body band left after header/footer consumed space inside the margin box
    body_rect: Rect
    # where the header/footer are drawn
    header_rect: Rect
    footer_rect: Rect
    lines: PageLines

    @property
    def body_h(self) -> float:
        return self.body_rect.h


def compute_page_rects(
    page_size: Size,
    margin: Margin,
    header_height: float = 0,
    footer_height: float = 0,
    header_anchor_to_margins: bool = True,
    footer_anchor_to_margins: bool = True,
) -> PageRects:
    """
    Compute the content, body, header and footer rectangles of a page.

    Header and footer *consume* height from inside the margin box: the body
    band is what remains between the header band's bottom and the footer
    band's top. Where each zone is *drawn* is independent of that: anchored
    zones sit on the margin box, unanchored ones on the paper edge. Changing
    an anchor moves the header/footer rect and never the body rect.

    Args:
        page_size: Paper size
        margin: Effective margin
        header_height: Effective header height (0 when hidden)
        footer_height: Effective footer height (0 when hidden)
        header_anchor_to_margins: Draw the header inside the margin box
        footer_anchor_to_margins: Draw the footer inside the margin box

    Returns:
        PageRects
    """
    page_w = max(0, page_size.width)
    page_h = max(0, page_size.height)
    header_h = max(0, header_height)
    footer_h = max(0, footer_height)

    content_left = min(page_w, max(0, margin.left))
    content_top = min(page_h, max(0, margin.top))
    content_right = max(content_left, page_w - max(0, margin.right))
    content_bottom = max(content_top, page_h - max(0, margin.bottom))
    content_rect = Rect(content_left, content_top, content_right - content_left, content_bottom - content_top)

    header_band_bottom = min(content_bottom, content_top + header_h)
    footer_band_top = max(content_top, content_bottom - footer_h)
    body_rect = Rect(
        content_left,
        header_band_bottom,
        content_rect.w,
        max(0, footer_band_top - header_band_bottom),
    )

    if header_anchor_to_margins:
        header_rect = Rect(content_left, content_top, content_rect.w, header_h)
    else:
        header_rect = Rect(0, 0, page_w, header_h)

    if footer_anchor_to_margins:
        footer_rect = Rect(content_left, content_bottom - footer_h, content_rect.w, footer_h)
    else:
        footer_rect = Rect(0, page_h - footer_h, page_w, footer_h)

    lines = PageLines(
        margin_left_x=content_left,
        margin_right_x=content_right,
        margin_top_y=content_top,
        margin_bottom_y=content_bottom,
        header_bottom_y=header_band_bottom,
        footer_top_y=footer_band_top,
    )

    return PageRects(
        page_w=page_w,
        page_h=page_h,
        margin=margin,
        header_h=header_h,
        footer_h=footer_h,
        content_rect=content_rect,
        body_rect=body_rect,
        header_rect=header_rect,
        footer_rect=footer_rect,
        lines=lines,
    )


@dataclass(frozen=True, slots=True)
class ZoneOrigins:
    """Top-left corner of each zone's local coordinate system, in page space."""

    body: Point
    header: Point
    footer: Point

    def for_target(self, target: Optional[str]) -> Point:
        if target == "header":
            return self.header
        if target == "footer":
            return self.footer
        return self.body


def get_zone_origins(rects: PageRects) -> ZoneOrigins:
    content_x = rects.content_rect.x
    return ZoneOrigins(
        body=Point(content_x, rects.body_rect.y),
        header=Point(content_x, rects.header_rect.y),
        footer=Point(content_x, rects.footer_rect.y),
    )


def zone_to_page(rect: Rect, origin: Point) -> Rect:
    """Map a zone-local rectangle to page space."""
    return rect.translated(origin.x, origin.y)


def page_to_zone(rect: Rect, origin: Point) -> Rect:
    """Map a page-space rectangle into a zone's local coordinates."""
    return rect.translated(-origin.x, -origin.y)
