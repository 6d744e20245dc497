"""Page commands."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Mapping, Optional

from ..config import DEFAULT_CONFIG, EditorConfig
from ..models.document import GuideSet, Page
from ..models.draft import DocumentDraft
from ..utils.enums import MarginSource
from ..utils.id_manager import create_id
from .header_footer import ensure_header_footer
from .margins import MarginLike, clamp_margin, clean_margin_patch, to_full_margin

logger = logging.getLogger(__name__)

IdFactory = Callable[[str], str]


def _insert_page(draft: DocumentDraft, page: Page, index: int) -> None:
    order = draft.page_order
    draft.put_page(page)
    draft.set("page_order", order[:index] + (page.id,) + order[index:])
    draft.edit("node_order_by_page_id")[page.id] = ()


def ensure_first_page(draft: DocumentDraft, preset_id: str,
                      id_factory: IdFactory = create_id) -> Optional[str]:
    """
    Create page 1 on ``preset_id`` when the document has no pages.

    Returns:
        The new page id, or None when the document already has pages
    """
    if draft.page_order:
        return None

    page_id = id_factory("page")
    _insert_page(draft, Page(id=page_id, preset_id=preset_id, name="Page 1", visible=True), 0)
    logger.debug(f"First page {page_id} created on preset {preset_id}")
    return page_id


def add_page_to_end(draft: DocumentDraft, id_factory: IdFactory = create_id,
                    config: EditorConfig = DEFAULT_CONFIG) -> Optional[str]:
    """
    Append a page that uses the last page's preset.

    Falls back to the first preset when the document has no pages; returns
    None when there is no preset at all.
    """
    last_page = draft.get_page(draft.page_order[-1]) if draft.page_order else None
    preset_id = last_page.preset_id if last_page else None
    if preset_id is None:
        preset_id = draft.preset_order[0] if draft.preset_order else next(iter(draft.presets_by_id), None)
    if preset_id is None:
        logger.debug("add_page_to_end ignored: document has no preset")
        return None

    page_id = id_factory("page")
    ensure_header_footer(draft, preset_id, config)
    index = len(draft.page_order)
    _insert_page(draft, Page(id=page_id, preset_id=preset_id, name=f"Page {index + 1}"), index)
    return page_id


def insert_page_after(draft: DocumentDraft, after_page_id: str,
                      id_factory: IdFactory = create_id) -> Optional[str]:
    """Insert an unnamed page right after ``after_page_id``, on the same preset."""
    after = draft.get_page(after_page_id)
    if after is None or after_page_id not in draft.page_order:
        return None

    page_id = id_factory("page")
    index = draft.page_order.index(after_page_id) + 1
    _insert_page(draft, Page(id=page_id, preset_id=after.preset_id), index)
    return page_id


def delete_page(draft: DocumentDraft, page_id: str) -> Optional[int]:
    """
    Delete a page together with the nodes it owns.

    Returns:
        The page's index before deletion, or None when it did not exist
    """
    if page_id not in draft.page_order:
        return None

    index = draft.page_order.index(page_id)
    owned = set(draft.node_order_by_page_id.get(page_id, ()))
    owned.update(
        node.id for node in draft.nodes_by_id.values()
        if node.owner.is_page and node.owner.page_id == page_id
    )

    draft.set("page_order", tuple(pid for pid in draft.page_order if pid != page_id))
    draft.edit("pages_by_id").pop(page_id, None)
    draft.edit("node_order_by_page_id").pop(page_id, None)
    if owned:
        nodes = draft.edit("nodes_by_id")
        for node_id in owned:
            nodes.pop(node_id, None)

    guides = draft.guides
    if guides is not None and any(g.page_id == page_id for g in guides.by_id.values()):
        kept = {gid: g for gid, g in guides.by_id.items() if g.page_id != page_id}
        draft.set("guides", GuideSet(order=tuple(g for g in guides.order if g in kept), by_id=kept))

    logger.debug(f"Page {page_id} deleted with {len(owned)} node(s)")
    return index


def set_page_preset(draft: DocumentDraft, page_id: str, preset_id: str,
                    config: EditorConfig = DEFAULT_CONFIG) -> None:
    page = draft.get_page(page_id)
    if page is None or draft.get_preset(preset_id) is None:
        return
    ensure_header_footer(draft, preset_id, config)
    draft.put_page(replace(page, preset_id=preset_id))


def update_page(draft: DocumentDraft, page_id: str, name: Optional[str] = None,
                visible: Optional[bool] = None, locked: Optional[bool] = None) -> None:
    page = draft.get_page(page_id)
    if page is None:
        return
    changes = {}
    if name is not None:
        changes["name"] = name.strip() or None
    if visible is not None:
        changes["visible"] = bool(visible)
    if locked is not None:
        changes["locked"] = bool(locked)
    if changes:
        draft.put_page(replace(page, **changes))


def set_page_margin_override(draft: DocumentDraft, page_id: str,
                             margin_override: Optional[MarginLike] = None) -> None:
    """
    Set or clear a page's own margin.

    A margin switches the page to ``margin_source="page"`` with the clamped
    override; ``None`` clears the override and reverts to the preset margin.
    """
    page = draft.get_page(page_id)
    if page is None:
        return

    if margin_override is None:
        draft.put_page(replace(page, margin_source=MarginSource.PRESET, margin_override=None))
    else:
        draft.put_page(replace(page, margin_source=MarginSource.PAGE,
                               margin_override=clamp_margin(margin_override)))


def set_page_margin_source(draft: DocumentDraft, page_id: str, source: MarginSource) -> None:
    """
    Switch where a page takes its margin from.

    Switching to ``page`` materialises the preset margin as the override so
    the page does not visibly change.
    """
    page = draft.get_page(page_id)
    if page is None:
        return

    if MarginSource(source) == MarginSource.PAGE:
        if page.margin_override is not None:
            set_page_margin_override(draft, page_id, page.margin_override)
            return
        preset = draft.get_preset(page.preset_id)
        if preset is None:
            return
        set_page_margin_override(draft, page_id, preset.margin)
    else:
        set_page_margin_override(draft, page_id, None)


def update_page_margin(draft: DocumentDraft, page_id: str, patch: Mapping[str, float]) -> None:
    """Apply a partial margin patch on top of the page's effective margin."""
    page = draft.get_page(page_id)
    if page is None:
        return
    preset = draft.get_preset(page.preset_id)
    if preset is None:
        return

    base = to_full_margin(preset.margin, page.margin_override)
    merged = {**base.to_dict(), **clean_margin_patch(patch)}
    set_page_margin_override(draft, page_id, merged)
