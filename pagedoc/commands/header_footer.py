"""
Header/footer zones.

Every preset owns one header and one footer zone, shared by all pages using
that preset. Heights are always stored clamped by
:func:`clamp_repeat_area_height`; the same function serves live previews,
commits and load-time repair.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Optional, Tuple, Union

from ..config import DEFAULT_CONFIG, DEFAULT_HF_CONSTRAINTS, EditorConfig, HeaderFooterConstraints
from ..models.document import Document, HeaderFooter, HeaderFooterZone
from ..models.draft import DocumentDraft
from ..utils.units import round_half_up

logger = logging.getLogger(__name__)

ZONE_KINDS = ("header", "footer")


def ensure_header_footer(draft: DocumentDraft, preset_id: str,
                         config: EditorConfig = DEFAULT_CONFIG) -> HeaderFooter:
    """Return the preset's header/footer, creating default zones if missing."""
    hf = draft.get_header_footer(preset_id)
    if hf is not None:
        return hf

    hf = HeaderFooter(
        header=HeaderFooterZone(
            id=f"hf-{preset_id}-header",
            name="Header",
            height=config.default_header_height,
        ),
        footer=HeaderFooterZone(
            id=f"hf-{preset_id}-footer",
            name="Footer",
            height=config.default_footer_height,
        ),
    )
    draft.put_header_footer(preset_id, hf)
    logger.debug(f"Created header/footer zones for preset {preset_id}")
    return hf


def replace_zone(draft: DocumentDraft, preset_id: str, kind: str, zone: HeaderFooterZone) -> None:
    hf = ensure_header_footer(draft, preset_id)
    if kind == "header":
        draft.put_header_footer(preset_id, replace(hf, header=zone))
    else:
        draft.put_header_footer(preset_id, replace(hf, footer=zone))


def clamp_repeat_area_height(
    kind: str,
    desired: float,
    page_h: float,
    other: float,
    area_min: Optional[float] = None,
    area_max: Optional[float] = None,
    constraints: Optional[HeaderFooterConstraints] = None,
) -> int:
    """
    Clamp a header or footer height to what the page can hold.

    The result lies in ``[max(area_min, kind_min), min(area_max, pct * page_h,
    page_h - other - min_body)]``. ``other`` is the other zone's stored
    height. When the bounds cross, the upper bound wins so the body band is
    never squeezed below ``min_body`` by a minimum height; the result is
    never negative.

    Args:
        kind: ``"header"`` or ``"footer"``
        desired: Requested height
        page_h: Page height
        other: Height of the other zone
        area_min: Zone-specific minimum height
        area_max: Zone-specific maximum height
        constraints: Percentage caps and minimum body height

    Returns:
        Clamped integer height
    """
    constraints = constraints or DEFAULT_HF_CONSTRAINTS

    lower = max(0.0, float(area_min or 0), float(constraints.kind_min(kind)))
    upper_candidates = [
        page_h * constraints.max_pct(kind),
        page_h - max(0, other) - constraints.min_body,
    ]
    if area_max is not None:
        upper_candidates.append(area_max)
    upper = math.floor(min(upper_candidates))

    try:
        value = float(desired)
    except (TypeError, ValueError):
        value = lower
    if not math.isfinite(value):
        value = lower

    clamped = min(max(round_half_up(value), math.ceil(lower)), upper)
    return max(0, clamped)


def clamp_header_footer_pair(
    desired_header: float,
    desired_footer: float,
    page_h: float,
    current_footer: float,
    header_zone: Optional[HeaderFooterZone] = None,
    footer_zone: Optional[HeaderFooterZone] = None,
    constraints: Optional[HeaderFooterConstraints] = None,
) -> Tuple[int, int]:
    """
    Clamp header and footer committed together.

    The header is clamped first against the footer's current height, then
    the footer against the newly clamped header, so when both ask for more
    than the page allows the header keeps the remaining space.
    """
    header = clamp_repeat_area_height(
        "header", desired_header, page_h, current_footer,
        area_min=header_zone.min_height if header_zone else None,
        area_max=header_zone.max_height if header_zone else None,
        constraints=constraints,
    )
    footer = clamp_repeat_area_height(
        "footer", desired_footer, page_h, header,
        area_min=footer_zone.min_height if footer_zone else None,
        area_max=footer_zone.max_height if footer_zone else None,
        constraints=constraints,
    )
    return header, footer


def clamp_repeat_area_height_for_preset(
    doc: Union[Document, DocumentDraft],
    preset_id: str,
    kind: str,
    desired: float,
    constraints: Optional[HeaderFooterConstraints] = None,
) -> Optional[int]:
    """Clamp ``desired`` against a preset's page height and its other zone.

    Returns ``None`` when the preset does not exist.
    """
    preset = doc.presets_by_id.get(preset_id)
    if preset is None:
        return None

    hf = doc.header_footer_by_preset_id.get(preset_id)
    zone = hf.zone(kind) if hf else None
    other_zone = hf.zone("footer" if kind == "header" else "header") if hf else None

    return clamp_repeat_area_height(
        kind,
        desired,
        preset.size.height,
        other_zone.height if other_zone else 0,
        area_min=zone.min_height if zone else None,
        area_max=zone.max_height if zone else None,
        constraints=constraints,
    )


_MAX_HEIGHT_PASSES = 3


def reclamp_header_footer(draft: DocumentDraft, preset_id: str,
                          constraints: Optional[HeaderFooterConstraints] = None) -> bool:
    """
    Re-clamp a preset's stored header/footer heights against its page height.

    Runs the header-first pair clamp until the heights settle. Called after
    anything that changes the preset's size.

    Returns:
        True if either height changed
    """
    preset = draft.get_preset(preset_id)
    if preset is None or draft.get_header_footer(preset_id) is None:
        return False

    changed = False
    for _ in range(_MAX_HEIGHT_PASSES):
        hf = draft.get_header_footer(preset_id)
        header, footer = clamp_header_footer_pair(
            hf.header.height, hf.footer.height, preset.size.height, hf.footer.height,
            header_zone=hf.header, footer_zone=hf.footer, constraints=constraints,
        )
        if header == hf.header.height and footer == hf.footer.height:
            break
        logger.info(
            f"Preset {preset_id}: header/footer {hf.header.height}/{hf.footer.height} "
            f"clamped to {header}/{footer}"
        )
        draft.put_header_footer(preset_id, HeaderFooter(
            header=replace(hf.header, height=header),
            footer=replace(hf.footer, height=footer),
        ))
        changed = True
    return changed


def set_repeat_area_height(draft: DocumentDraft, preset_id: str, kind: str, desired: float,
                           constraints: Optional[HeaderFooterConstraints] = None) -> None:
    """Commit a header or footer height for a preset, clamped."""
    if kind not in ZONE_KINDS or draft.get_preset(preset_id) is None:
        logger.debug(f"set_repeat_area_height ignored: preset={preset_id} kind={kind}")
        return

    hf = ensure_header_footer(draft, preset_id)
    clamped = clamp_repeat_area_height_for_preset(draft, preset_id, kind, desired, constraints)
    replace_zone(draft, preset_id, kind, replace(hf.zone(kind), height=clamped))


def set_header_footer_heights(
    draft: DocumentDraft,
    preset_id: str,
    header: Optional[float] = None,
    footer: Optional[float] = None,
    constraints: Optional[HeaderFooterConstraints] = None,
) -> None:
    """Commit both heights in one step (header first, then footer)."""
    preset = draft.get_preset(preset_id)
    if preset is None:
        logger.debug(f"set_header_footer_heights ignored: missing preset {preset_id}")
        return

    hf = ensure_header_footer(draft, preset_id)
    new_header, new_footer = clamp_header_footer_pair(
        hf.header.height if header is None else header,
        hf.footer.height if footer is None else footer,
        preset.size.height,
        hf.footer.height,
        header_zone=hf.header,
        footer_zone=hf.footer,
        constraints=constraints,
    )
    draft.put_header_footer(preset_id, HeaderFooter(
        header=replace(hf.header, height=new_header),
        footer=replace(hf.footer, height=new_footer),
    ))


def set_repeat_area_anchor_to_margins(draft: DocumentDraft, preset_id: str, kind: str,
                                      anchor_to_margins: bool) -> None:
    if kind not in ZONE_KINDS or draft.get_preset(preset_id) is None:
        return
    hf = ensure_header_footer(draft, preset_id)
    replace_zone(draft, preset_id, kind, replace(hf.zone(kind), anchor_to_margins=bool(anchor_to_margins)))


def set_repeat_area_limits(draft: DocumentDraft, preset_id: str, kind: str,
                           min_height: Optional[float] = None, max_height: Optional[float] = None,
                           constraints: Optional[HeaderFooterConstraints] = None) -> None:
    """Set a zone's own min/max height and re-clamp its stored height."""
    if kind not in ZONE_KINDS or draft.get_preset(preset_id) is None:
        return
    hf = ensure_header_footer(draft, preset_id)
    replace_zone(draft, preset_id, kind, replace(hf.zone(kind), min_height=min_height, max_height=max_height))
    set_repeat_area_height(draft, preset_id, kind, hf.zone(kind).height, constraints)


def set_page_header_footer_hidden(draft: DocumentDraft, page_id: str,
                                  header_hidden: Optional[bool] = None,
                                  footer_hidden: Optional[bool] = None) -> None:
    """Hide or show the shared header/footer on a single page."""
    page = draft.get_page(page_id)
    if page is None:
        return

    changes = {}
    if header_hidden is not None:
        changes["header_hidden"] = bool(header_hidden)
    if footer_hidden is not None:
        changes["footer_hidden"] = bool(footer_hidden)
    if changes:
        draft.put_page(replace(page, **changes))
