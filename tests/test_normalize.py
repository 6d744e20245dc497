"""
Tests for load-time repair and the px to pt migration.
"""

from dataclasses import replace

import pytest

from pagedoc.commands import (
    bootstrap_document,
    normalize_doc_margins,
    normalize_doc_to_pt,
    normalize_header_footer_heights,
)
from pagedoc.exceptions import UnitMigrationError
from pagedoc.models import (
    AssetLibrary,
    Document,
    DocumentDraft,
    GuideSet,
    HeaderFooter,
    HeaderFooterZone,
    ImageAsset,
    Margin,
    NodeOwner,
    Page,
    PagePreset,
    Size,
    TextNode,
    TextStyle,
)
from pagedoc.models.document import Guide
from pagedoc.utils.enums import DocumentUnit, MarginSource


@pytest.fixture
def px_doc() -> Document:
    """A legacy pixel document touching every length the migration converts."""
    node = TextNode(
        id="t1", owner=NodeOwner.page("page-1"), page_id="page-1",
        x=100, y=40, w=200, h=80, style=TextStyle(font_size=16, line_height=24),
    )
    return Document(
        id="legacy",
        unit=DocumentUnit.PX,
        preset_order=("preset-1",),
        presets_by_id={"preset-1": PagePreset("preset-1", "Legacy", Size(800, 1000), Margin.uniform(40))},
        page_order=("page-1",),
        pages_by_id={"page-1": Page("page-1", "preset-1", margin_source=MarginSource.PAGE,
                                    margin_override=Margin(20, 20, 20, 20))},
        nodes_by_id={"t1": node},
        node_order_by_page_id={"page-1": ("t1",)},
        header_footer_by_preset_id={"preset-1": HeaderFooter(
            header=HeaderFooterZone("h", "Header", 100, min_height=20),
            footer=HeaderFooterZone("f", "Footer", 80),
        )},
        assets=AssetLibrary(("img",), {"img": ImageAsset("img", "a.png", width=640, height=480)}),
        guides=GuideSet(("g",), {"g": Guide("g", 40)}),
    )


class TestNormalizeDocToPt:
    """Test cases for the px to pt migration."""

    def test_converts_every_length(self, px_doc):
        doc = normalize_doc_to_pt(px_doc)

        assert doc.unit == DocumentUnit.PT
        preset = doc.presets_by_id["preset-1"]
        assert preset.size == Size(60000, 75000)
        assert preset.margin == Margin.uniform(3000)
        assert doc.pages_by_id["page-1"].margin_override == Margin.uniform(1500)

        node = doc.nodes_by_id["t1"]
        assert (node.x, node.y, node.w, node.h) == (7500, 3000, 15000, 6000)
        assert (node.style.font_size, node.style.line_height) == (1200, 1800)

        hf = doc.header_footer_by_preset_id["preset-1"]
        assert (hf.header.height, hf.header.min_height, hf.footer.height) == (7500, 1500, 6000)
        assert hf.footer.max_height is None
        assert doc.guides.by_id["g"].pos == 3000

    def test_image_intrinsic_size_kept(self, px_doc):
        asset = normalize_doc_to_pt(px_doc).assets.images_by_id["img"]
        assert (asset.width, asset.height) == (640, 480)

    def test_input_not_mutated(self, px_doc):
        normalize_doc_to_pt(px_doc)
        assert px_doc.unit == DocumentUnit.PX
        assert px_doc.nodes_by_id["t1"].x == 100

    def test_rejects_point_document(self, px_doc):
        with pytest.raises(UnitMigrationError):
            normalize_doc_to_pt(normalize_doc_to_pt(px_doc))


class TestNormalizeMargins:
    """Test cases for the margin source repair."""

    def test_repairs_inconsistent_pages(self, one_page_doc):
        draft = DocumentDraft(one_page_doc)
        draft.put_page(Page("bad-source", "preset-1", margin_source=MarginSource.PAGE))
        draft.put_page(Page("stale", "preset-1", margin_override=Margin.uniform(5)))
        draft.put_page(Page("float", "preset-1", margin_source=MarginSource.PAGE,
                            margin_override=Margin(1.4, 2, 3, -4)))
        doc = draft.finish()

        draft = DocumentDraft(doc)
        assert normalize_doc_margins(draft) is True
        fixed = draft.finish()
        assert fixed.pages_by_id["bad-source"].margin_source == MarginSource.PRESET
        assert fixed.pages_by_id["stale"].margin_override is None
        assert fixed.pages_by_id["float"].margin_override == Margin(1, 2, 3, 0)

        assert normalize_doc_margins(DocumentDraft(fixed)) is False

    def test_valid_document_unchanged(self, one_page_doc):
        draft = DocumentDraft(one_page_doc)
        assert normalize_doc_margins(draft) is False
        assert draft.finish() is one_page_doc


class TestNormalizeHeights:
    """Test cases for the header/footer height repair."""

    def test_reclamps_out_of_range_heights(self, one_page_doc):
        hf = one_page_doc.header_footer_by_preset_id["preset-1"]
        draft = DocumentDraft(one_page_doc)
        draft.put_header_footer("preset-1", replace(hf, header=replace(hf.header, height=50000)))

        assert normalize_header_footer_heights(draft) is True
        assert draft.header_footer_by_preset_id["preset-1"].header.height == 21050
        assert normalize_header_footer_heights(draft) is False


class TestBootstrapDocument:
    """Test cases for the load pipeline."""

    def test_fills_missing_structures(self):
        doc = Document(
            id="bare",
            preset_order=("p",),
            presets_by_id={"p": PagePreset("p", "P", Size(59500, 84200), Margin())},
            page_order=("page",),
            pages_by_id={"page": Page("page", "p")},
        )
        fixed = bootstrap_document(doc)
        assert "p" in fixed.header_footer_by_preset_id
        assert fixed.node_order_by_page_id == {"page": ()}
        assert fixed.assets == AssetLibrary()
        assert fixed.guides == GuideSet()

    def test_migrates_px_documents(self, px_doc):
        fixed = bootstrap_document(px_doc)
        assert fixed.unit == DocumentUnit.PT
        assert fixed.pages_by_id["page-1"].margin_source == MarginSource.PAGE

    def test_idempotent(self, px_doc):
        once = bootstrap_document(px_doc)
        assert bootstrap_document(once) is once

    def test_valid_document_returned_as_is(self, one_page_doc):
        assert bootstrap_document(one_page_doc) is one_page_doc
