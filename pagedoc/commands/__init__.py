"""
Command layer: the only code that changes a document.

Every command takes a :class:`~pagedoc.models.draft.DocumentDraft` as its
first argument and writes the next state into it. Commands referencing a
missing page, preset or node do nothing.
"""

from .assets import add_guide, add_image_asset, remove_guide, remove_image_asset, update_guide
from .header_footer import (
    ZONE_KINDS,
    clamp_header_footer_pair,
    clamp_repeat_area_height,
    clamp_repeat_area_height_for_preset,
    ensure_header_footer,
    set_header_footer_heights,
    set_page_header_footer_hidden,
    set_repeat_area_anchor_to_margins,
    set_repeat_area_height,
    reclamp_header_footer,
    set_repeat_area_limits,
)
from .margins import DEFAULT_MARGIN, clamp_margin, clean_margin_patch, to_full_margin
from .nodes import add_node, add_node_to_target, delete_node, update_node
from .normalize import (
    bootstrap_document,
    normalize_doc_margins,
    normalize_doc_to_pt,
    normalize_header_footer_heights,
)
from .pages import (
    add_page_to_end,
    delete_page,
    ensure_first_page,
    insert_page_after,
    set_page_margin_override,
    set_page_margin_source,
    set_page_preset,
    update_page,
    update_page_margin,
)
from .presets import (
    add_page_preset,
    create_page_preset,
    delete_preset_and_reassign_pages,
    normalize_preset_orientation,
    set_preset_margin,
    set_preset_orientation,
    update_preset,
    update_preset_margin,
    update_preset_size,
)

__all__ = [
    "add_guide",
    "add_image_asset",
    "remove_guide",
    "remove_image_asset",
    "update_guide",
    "ZONE_KINDS",
    "clamp_header_footer_pair",
    "clamp_repeat_area_height",
    "clamp_repeat_area_height_for_preset",
    "ensure_header_footer",
    "set_header_footer_heights",
    "set_page_header_footer_hidden",
    "set_repeat_area_anchor_to_margins",
    "set_repeat_area_height",
    "set_repeat_area_limits",
    "reclamp_header_footer",
    "DEFAULT_MARGIN",
    "clamp_margin",
    "clean_margin_patch",
    "to_full_margin",
    "add_node",
    "add_node_to_target",
    "delete_node",
    "update_node",
    "bootstrap_document",
    "normalize_doc_margins",
    "normalize_doc_to_pt",
    "normalize_header_footer_heights",
    "add_page_to_end",
    "delete_page",
    "ensure_first_page",
    "insert_page_after",
    "set_page_margin_override",
    "set_page_margin_source",
    "set_page_preset",
    "update_page",
    "update_page_margin",
    "add_page_preset",
    "create_page_preset",
    "delete_preset_and_reassign_pages",
    "normalize_preset_orientation",
    "set_preset_margin",
    "set_preset_orientation",
    "update_preset",
    "update_preset_margin",
    "update_preset_size",
]
