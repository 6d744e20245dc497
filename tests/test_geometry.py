"""
Tests for the page rectangle computation and geometry primitives.
"""

import pytest

from pagedoc.engine.geometry import (
    Point,
    Rect,
    compute_page_rects,
    get_zone_origins,
    page_to_zone,
    zone_to_page,
)
from pagedoc.exceptions import GeometryError
from pagedoc.models import Margin, Size

PAGE = Size(1000, 2000)
MARGIN = Margin(100, 50, 100, 50)


class TestRect:
    """Test cases for Rect."""

    def test_negative_size_rejected(self):
        with pytest.raises(GeometryError):
            Rect(0, 0, -1, 10)

    def test_edges_and_contains(self):
        rect = Rect(10, 20, 30, 40)
        assert (rect.left, rect.top, rect.right, rect.bottom) == (10, 20, 40, 60)
        assert rect.contains(Point(10, 60))
        assert not rect.contains(Point(41, 30))

    def test_intersects_and_union(self):
        a = Rect(0, 0, 10, 10)
        b = Rect(5, 5, 10, 10)
        c = Rect(20, 20, 1, 1)
        assert a.intersects(b)
        assert not a.intersects(c)
        assert a.union(c) == Rect(0, 0, 21, 21)


class TestComputePageRects:
    """Test cases for compute_page_rects."""

    def test_header_consumes_body_height(self):
        """A 30000 header on a 110000 page with no margin leaves an 80000 body."""
        rects = compute_page_rects(Size(82000, 110000), Margin(0, 0, 0, 0), 30000, 0)
        assert rects.body_rect.h == 80000
        assert rects.body_rect.y == 30000
        assert rects.footer_rect.h == 0
        assert rects.lines.footer_top_y == 110000

    def test_bands_inside_margin_box(self):
        rects = compute_page_rects(PAGE, MARGIN, 200, 150)
        assert rects.content_rect == Rect(50, 100, 900, 1800)
        assert rects.body_rect == Rect(50, 300, 900, 1450)
        assert rects.header_rect == Rect(50, 100, 900, 200)
        assert rects.footer_rect == Rect(50, 1750, 900, 150)
        assert rects.body_h == 1450

    def test_lines(self):
        lines = compute_page_rects(PAGE, MARGIN, 200, 150).lines
        assert (lines.margin_left_x, lines.margin_right_x) == (50, 950)
        assert (lines.margin_top_y, lines.margin_bottom_y) == (100, 1900)
        assert (lines.header_bottom_y, lines.footer_top_y) == (300, 1750)

    def test_anchor_moves_zone_not_body(self):
        """Unanchored zones sit on the paper edge; the body band is unchanged."""
        anchored = compute_page_rects(PAGE, MARGIN, 200, 150)
        free = compute_page_rects(PAGE, MARGIN, 200, 150,
                                  header_anchor_to_margins=False, footer_anchor_to_margins=False)
        assert free.header_rect == Rect(0, 0, 1000, 200)
        assert free.footer_rect == Rect(0, 1850, 1000, 150)
        assert free.body_rect == anchored.body_rect

    def test_oversized_header_leaves_empty_body(self):
        rects = compute_page_rects(PAGE, MARGIN, 5000, 150)
        assert rects.lines.header_bottom_y == 1900
        assert rects.body_rect.h == 0

    def test_margin_wider_than_page(self):
        rects = compute_page_rects(Size(1000, 1000), Margin(0, 600, 0, 600))
        assert rects.content_rect.w == 0
        assert rects.body_rect.w == 0

    def test_negative_inputs_are_floored(self):
        rects = compute_page_rects(PAGE, Margin(-10, -10, -10, -10), -5, -5)
        assert rects.content_rect == Rect(0, 0, 1000, 2000)
        assert rects.header_h == 0 and rects.footer_h == 0


class TestZoneOrigins:
    """Test cases for zone-local coordinates."""

    def test_origins(self):
        origins = get_zone_origins(compute_page_rects(PAGE, MARGIN, 200, 150))
        assert origins.body == Point(50, 300)
        assert origins.header == Point(50, 100)
        assert origins.footer == Point(50, 1750)
        assert origins.for_target("page") == origins.body
        assert origins.for_target(None) == origins.body

    def test_zone_page_mapping(self):
        origin = Point(50, 300)
        local = Rect(10, 20, 5, 5)
        placed = zone_to_page(local, origin)
        assert placed == Rect(60, 320, 5, 5)
        assert page_to_zone(placed, origin) == local
