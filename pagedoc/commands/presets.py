"""Page preset commands."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Mapping, Optional

from ..config import DEFAULT_CONFIG, EditorConfig, HeaderFooterConstraints
from ..models.document import Page, PagePreset
from ..models.draft import DocumentDraft
from ..models.geometry import Margin, Size
from ..utils.enums import Orientation, PresetSource, ZoneKind
from ..utils.id_manager import create_id
from ..utils.paper_sizes import paper_size_pt
from ..utils.units import pt_to_pt100
from .header_footer import ensure_header_footer, reclamp_header_footer
from .margins import MarginLike, clamp_margin

logger = logging.getLogger(__name__)

IdFactory = Callable[[str], str]


def add_page_preset(
    draft: DocumentDraft,
    name: str,
    size: Size,
    margin: Optional[MarginLike] = None,
    preset_id: Optional[str] = None,
    source: PresetSource = PresetSource.CUSTOM,
    locked: bool = False,
    usage_hint: Optional[str] = None,
    config: EditorConfig = DEFAULT_CONFIG,
) -> str:
    """
    Add (or overwrite) a preset and return its id.

    The margin is clamped, or the configured default is used. The id is
    appended to the preset order only once, even when the same id is added
    repeatedly.
    """
    preset_id = preset_id or create_id("preset")

    preset = PagePreset(
        id=preset_id,
        name=name,
        size=size,
        margin=clamp_margin(margin) if margin is not None else config.default_margin,
        source=PresetSource(source),
        locked=bool(locked),
        usage_hint=usage_hint,
    )
    draft.put_preset(preset)

    if preset_id not in draft.preset_order:
        draft.set("preset_order", draft.preset_order + (preset_id,))

    logger.debug(f"Preset {preset_id} added: {size.width}x{size.height}")
    return preset_id


def set_preset_margin(draft: DocumentDraft, preset_id: str, margin: MarginLike) -> None:
    preset = draft.get_preset(preset_id)
    if preset is None:
        return
    draft.put_preset(replace(preset, margin=clamp_margin(margin)))


def update_preset_margin(draft: DocumentDraft, preset_id: str, patch: Mapping[str, float]) -> None:
    """Merge a partial margin patch into a preset; locked presets are left alone."""
    preset = draft.get_preset(preset_id)
    if preset is None or preset.locked:
        return
    merged = {**preset.margin.to_dict(), **{k: v for k, v in patch.items() if v is not None}}
    set_preset_margin(draft, preset_id, merged)


def normalize_preset_orientation(preset: PagePreset, orientation: Orientation) -> PagePreset:
    """Swap width/height so the preset matches ``orientation``."""
    size = preset.size
    wants_landscape = Orientation(orientation) == Orientation.LANDSCAPE
    if size.is_landscape != wants_landscape and size.width != size.height:
        return replace(preset, size=size.swapped())
    return preset


def set_preset_orientation(draft: DocumentDraft, preset_id: str, orientation: Orientation,
                           constraints: Optional[HeaderFooterConstraints] = None) -> None:
    preset = draft.get_preset(preset_id)
    if preset is None or preset.locked:
        return
    draft.put_preset(normalize_preset_orientation(preset, orientation))
    reclamp_header_footer(draft, preset_id, constraints)


def update_preset_size(draft: DocumentDraft, preset_id: str,
                       width: Optional[float] = None, height: Optional[float] = None,
                       constraints: Optional[HeaderFooterConstraints] = None) -> None:
    preset = draft.get_preset(preset_id)
    if preset is None or preset.locked:
        return
    size = Size(
        preset.size.width if width is None else width,
        preset.size.height if height is None else height,
    )
    draft.put_preset(replace(preset, size=size))
    reclamp_header_footer(draft, preset_id, constraints)


def update_preset(
    draft: DocumentDraft,
    preset_id: str,
    name: Optional[str] = None,
    size: Optional[Size] = None,
    orientation: Optional[Orientation] = None,
    constraints: Optional[HeaderFooterConstraints] = None,
) -> None:
    """
    Rename, resize and/or re-orient an unlocked preset.

    A size change re-clamps the preset's header/footer heights.
    """
    preset = draft.get_preset(preset_id)
    if preset is None or preset.locked:
        return

    updated = preset
    if name and name.strip():
        updated = replace(updated, name=name.strip())
    if size is not None:
        updated = replace(updated, size=size)
    if orientation is not None:
        updated = normalize_preset_orientation(updated, orientation)

    if updated != preset:
        draft.put_preset(updated)
        if updated.size != preset.size:
            reclamp_header_footer(draft, preset_id, constraints)


def create_page_preset(
    draft: DocumentDraft,
    name: str,
    paper_key: str = "A4",
    orientation: Orientation = Orientation.PORTRAIT,
    bootstrap: bool = False,
    id_factory: IdFactory = create_id,
    config: EditorConfig = DEFAULT_CONFIG,
) -> Optional[str]:
    """
    Create a preset from the paper catalogue together with its header/footer.

    With ``bootstrap=True`` and an empty document, page 1 is created on the
    new preset and its id is returned; otherwise returns ``None``.
    """
    width_pt, height_pt = paper_size_pt(paper_key, Orientation(orientation))
    preset_id = add_page_preset(
        draft,
        name=name,
        size=Size(pt_to_pt100(width_pt), pt_to_pt100(height_pt)),
        margin=Margin.uniform(1000),
        preset_id=id_factory("preset"),
        source=PresetSource.CUSTOM,
        config=config,
    )
    ensure_header_footer(draft, preset_id, config)

    if bootstrap and not draft.page_order:
        page_id = id_factory("page")
        draft.put_page(Page(id=page_id, preset_id=preset_id, name="Page 1"))
        draft.set("page_order", draft.page_order + (page_id,))
        draft.edit("node_order_by_page_id")[page_id] = ()
        return page_id
    return None


def delete_preset_and_reassign_pages(
    draft: DocumentDraft,
    preset_id: str,
    reassign_map: Optional[Mapping[str, str]] = None,
    config: EditorConfig = DEFAULT_CONFIG,
) -> bool:
    """
    Delete a preset, moving its pages to other presets.

    Pages listed in ``reassign_map`` move to their mapped preset. Pages that
    are not listed, or whose target is missing, move to the fallback preset:
    the first remaining preset in preset order. If some page needs the
    fallback and no other preset exists, nothing is deleted. Header/footer
    zones of the deleted preset and the nodes they own are removed with it.

    Returns:
        True when the preset was deleted
    """
    if draft.get_preset(preset_id) is None:
        return False

    reassign_map = dict(reassign_map or {})
    remaining = [pid for pid in draft.preset_order if pid != preset_id and pid in draft.presets_by_id]
    fallback = remaining[0] if remaining else None

    moves = {}
    for page_id, page in list(draft.pages_by_id.items()):
        if page.preset_id != preset_id:
            continue
        target = reassign_map.get(page_id)
        if target is None or target == preset_id or draft.get_preset(target) is None:
            if target is not None:
                logger.warning(f"Invalid reassignment {page_id} -> {target}; using fallback preset")
            target = fallback
        if target is None:
            logger.warning(f"Cannot delete preset {preset_id}: page {page_id} has no preset to move to")
            return False
        moves[page_id] = target

    for page_id, target in moves.items():
        ensure_header_footer(draft, target, config)
        draft.put_page(replace(draft.get_page(page_id), preset_id=target))

    hf = draft.get_header_footer(preset_id)
    if hf is not None:
        nodes = draft.edit("nodes_by_id")
        for node_id in hf.header.node_order + hf.footer.node_order:
            nodes.pop(node_id, None)
        del draft.edit("header_footer_by_preset_id")[preset_id]

    # zone nodes that were never registered in an order list
    orphans = [
        node.id for node in draft.nodes_by_id.values()
        if node.owner.kind != ZoneKind.PAGE and node.owner.preset_id == preset_id
    ]
    if orphans:
        nodes = draft.edit("nodes_by_id")
        for node_id in orphans:
            del nodes[node_id]

    del draft.edit("presets_by_id")[preset_id]
    draft.set("preset_order", tuple(pid for pid in draft.preset_order if pid != preset_id))

    logger.info(f"Preset {preset_id} deleted; {len(moves)} page(s) reassigned")
    return True
