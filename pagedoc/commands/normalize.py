"""
Load-time repair and migration.

Documents of unknown or legacy provenance pass through
:func:`bootstrap_document` once before any command runs. Each repair step is
deterministic and idempotent: running it on its own output changes nothing.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..config import DEFAULT_CONFIG, EditorConfig, HeaderFooterConstraints
from ..exceptions import UnitMigrationError
from ..models.document import AssetLibrary, Document, GuideSet, HeaderFooter, HeaderFooterZone
from ..models.draft import DocumentDraft
from ..models.geometry import Margin, Size
from ..models.nodes import BoxNode, FieldNode, NodeBase, TextAutosize, TextNode, TextStyle
from ..utils.enums import DocumentUnit, MarginSource
from ..utils.units import px_to_pt100
from .header_footer import ensure_header_footer, reclamp_header_footer
from .margins import clamp_margin

logger = logging.getLogger(__name__)


def normalize_doc_margins(draft: DocumentDraft) -> bool:
    """
    Repair the margin-source invariant on every page.

    * ``margin_source == "page"`` without an override reverts to ``"preset"``.
    * ``margin_source == "page"`` with an override keeps it, clamped.
    * ``margin_source == "preset"`` drops any stale override.

    Returns:
        True if any page changed
    """
    changed = False

    for page_id, page in list(draft.pages_by_id.items()):
        if page.margin_source == MarginSource.PAGE:
            if page.margin_override is None:
                draft.put_page(replace(page, margin_source=MarginSource.PRESET))
                changed = True
                continue
            clamped = clamp_margin(page.margin_override)
            if clamped != page.margin_override:
                draft.put_page(replace(page, margin_override=clamped))
                changed = True
            continue

        if page.margin_source != MarginSource.PRESET or page.margin_override is not None:
            draft.put_page(replace(page, margin_source=MarginSource.PRESET, margin_override=None))
            changed = True

    if changed:
        logger.info("Page margin fields normalized")
    return changed


def normalize_header_footer_heights(draft: DocumentDraft,
                                    constraints: Optional[HeaderFooterConstraints] = None) -> bool:
    """
    Re-clamp every stored header/footer height (header first, then footer).

    Returns:
        True if any zone height changed
    """
    changed = False
    for preset_id in list(draft.header_footer_by_preset_id):
        changed = reclamp_header_footer(draft, preset_id, constraints) or changed
    return changed


def _px(value):
    return None if value is None else px_to_pt100(value)


def _text_style_to_pt(style: TextStyle) -> TextStyle:
    return replace(style, font_size=_px(style.font_size), line_height=_px(style.line_height))


def _node_to_pt(node: NodeBase) -> NodeBase:
    changes = {"x": _px(node.x), "y": _px(node.y), "w": _px(node.w), "h": _px(node.h)}
    if isinstance(node, (TextNode, FieldNode)):
        changes["style"] = _text_style_to_pt(node.style)
    if isinstance(node, TextNode) and node.autosize is not None:
        autosize: TextAutosize = node.autosize
        changes["autosize"] = replace(autosize, min_h=_px(autosize.min_h), max_h=_px(autosize.max_h))
    if isinstance(node, BoxNode):
        changes["style"] = replace(
            node.style, stroke_width=_px(node.style.stroke_width), radius=_px(node.style.radius)
        )
    return replace(node, **changes)


def _margin_to_pt(margin: Margin) -> Margin:
    return Margin(_px(margin.top), _px(margin.right), _px(margin.bottom), _px(margin.left))


def _zone_to_pt(zone: HeaderFooterZone) -> HeaderFooterZone:
    return replace(zone, height=_px(zone.height), min_height=_px(zone.min_height),
                   max_height=_px(zone.max_height))


def normalize_doc_to_pt(doc: Document) -> Document:
    """
    Migrate a legacy pixel document to the point unit.

    Every length (preset sizes and margins, page overrides, node geometry,
    font size and line height, box stroke and radius, header/footer heights,
    guide positions) is converted from pixels to centi-points. Image asset
    dimensions are intrinsic pixel sizes and are kept.

    Raises:
        UnitMigrationError: if ``doc`` is not a pixel document
    """
    if doc.unit != DocumentUnit.PX:
        raise UnitMigrationError("normalize_doc_to_pt expects a px document", f"unit={doc.unit!r}")

    draft = DocumentDraft(doc)

    presets = draft.edit("presets_by_id")
    for preset_id, preset in list(presets.items()):
        presets[preset_id] = replace(
            preset,
            size=Size(_px(preset.size.width), _px(preset.size.height)),
            margin=_margin_to_pt(preset.margin),
        )

    pages = draft.edit("pages_by_id")
    for page_id, page in list(pages.items()):
        if page.margin_override is not None:
            pages[page_id] = replace(page, margin_override=_margin_to_pt(page.margin_override))

    nodes = draft.edit("nodes_by_id")
    for node_id, node in list(nodes.items()):
        nodes[node_id] = _node_to_pt(node)

    zones = draft.edit("header_footer_by_preset_id")
    for preset_id, hf in list(zones.items()):
        zones[preset_id] = HeaderFooter(header=_zone_to_pt(hf.header), footer=_zone_to_pt(hf.footer))

    if doc.guides is not None:
        draft.set("guides", GuideSet(
            order=doc.guides.order,
            by_id={gid: replace(guide, pos=_px(guide.pos)) for gid, guide in doc.guides.by_id.items()},
        ))

    draft.set("unit", DocumentUnit.PT)
    logger.info(f"Document {doc.id} migrated from px to pt")
    return draft.finish()


def bootstrap_document(doc: Document, config: EditorConfig = DEFAULT_CONFIG) -> Document:
    """
    Bring a loaded document into a valid runtime shape.

    Migrates pixel documents, repairs margin sources, makes sure every
    preset has header/footer zones and every page a node order, then
    re-clamps header/footer heights. Returns ``doc`` itself when nothing
    needed repair.
    """
    if doc.unit == DocumentUnit.PX:
        doc = normalize_doc_to_pt(doc)

    draft = DocumentDraft(doc)
    normalize_doc_margins(draft)

    for preset_id in draft.preset_order:
        if draft.get_preset(preset_id) is not None:
            ensure_header_footer(draft, preset_id, config)

    missing_orders = [pid for pid in draft.page_order if pid not in draft.node_order_by_page_id]
    if missing_orders:
        orders = draft.edit("node_order_by_page_id")
        for page_id in missing_orders:
            orders[page_id] = ()

    if doc.assets is None:
        draft.set("assets", AssetLibrary())
    if doc.guides is None:
        draft.set("guides", GuideSet())

    normalize_header_footer_heights(draft, config.constraints)
    return draft.finish()
