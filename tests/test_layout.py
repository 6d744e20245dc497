"""
Tests for the absolute layout pass.
"""

import logging

from pagedoc.commands import add_node, add_node_to_target, add_page_to_end, set_page_header_footer_hidden, update_page
from pagedoc.engine.geometry import Rect
from pagedoc.engine.layout import compute_layout, resolve_field_text
from pagedoc.models import DocumentDraft, FieldNode, NodeOwner, Page
from pagedoc.utils.enums import ZoneKind

from .conftest import run


def field(node_id, key, **kwargs):
    return FieldNode(id=node_id, owner=NodeOwner.page("unplaced"), field_key=key, w=300, h=200, **kwargs)


class TestResolveFieldText:
    """Test cases for field text."""

    def test_keys(self):
        assert resolve_field_text(field("f", "page_number"), 3, 7) == "3"
        assert resolve_field_text(field("f", "page_count"), 3, 7) == "7"
        assert resolve_field_text(field("f", "page_of"), 3, 7) == "3 / 7"
        assert resolve_field_text(field("f", "date", fallback_text="today"), 3, 7) == "today"


class TestComputeLayout:
    """Test cases for compute_layout."""

    def test_places_nodes_in_page_space(self, one_page_doc, make_text):
        doc, second = run(one_page_doc, add_page_to_end)
        doc, _ = run(doc, add_node, "page-1", make_text("body", x=10, y=20))
        doc, _ = run(doc, add_node_to_target, "page-1", "header", make_text("head", x=0, y=0))
        doc, _ = run(doc, add_node_to_target, "page-1", "footer", field("num", "page_of"))

        layout = compute_layout(doc)
        assert [p.page.id for p in layout.pages] == ["page-1", second]

        first = layout.page("page-1")
        assert [n.id for n in first.nodes] == ["head", "num", "body"]
        assert first.nodes_in(ZoneKind.PAGE)[0].frame == Rect(1010, 1120, 1000, 500)
        assert first.nodes_in(ZoneKind.HEADER)[0].frame == Rect(1000, 1000, 1000, 500)
        assert first.nodes_in("footer")[0].frame.y == 84200 - 1000 - 80
        assert first.nodes_in("footer")[0].text == "1 / 2"
        assert (first.page_width, first.page_height) == (59500, 84200)

        page_two = layout.page(second)
        assert [n.id for n in page_two.nodes] == ["head", "num"]
        assert page_two.nodes_in("footer")[0].text == "2 / 2"

    def test_hidden_zones_and_nodes(self, one_page_doc, make_text):
        doc, _ = run(one_page_doc, add_node_to_target, "page-1", "header", make_text("head"))
        doc, _ = run(doc, add_node, "page-1", make_text("ghost", visible=False))
        doc, _ = run(doc, set_page_header_footer_hidden, "page-1", True, None)

        assert compute_layout(doc).page("page-1").nodes == []
        assert [n.id for n in compute_layout(doc, include_hidden=True).page("page-1").nodes] == ["ghost"]

    def test_z_order_within_zone(self, one_page_doc, make_text):
        doc, _ = run(one_page_doc, add_node, "page-1", make_text("top", z=5))
        doc, _ = run(doc, add_node, "page-1", make_text("bottom", z=1))
        doc, _ = run(doc, add_node, "page-1", make_text("also-bottom", z=1))
        assert [n.id for n in compute_layout(doc).page("page-1").nodes] == ["bottom", "also-bottom", "top"]

    def test_invisible_page_skipped(self, one_page_doc):
        doc, _ = run(one_page_doc, update_page, "page-1", visible=False)
        assert compute_layout(doc).pages == []
        assert len(compute_layout(doc, include_hidden=True).pages) == 1

    def test_missing_preset_skipped(self, one_page_doc, caplog):
        draft = DocumentDraft(one_page_doc)
        draft.put_page(Page("page-1", "ghost"))
        with caplog.at_level(logging.WARNING, logger="pagedoc"):
            layout = compute_layout(draft.finish())
        assert layout.pages == []
        assert layout.page("page-1") is None
        assert "preset ghost missing" in caplog.text
