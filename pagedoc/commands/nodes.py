"""Node commands.

A node lives in ``nodes_by_id`` and its id is listed in exactly one ordered
list: the owning page's ``node_order_by_page_id`` entry, or the node order of
its preset's header or footer zone.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional

from ..exceptions import NodeTypeMismatchError
from ..models.draft import DocumentDraft
from ..models.nodes import GroupNode, NodeBase, NodeOwner
from ..utils.enums import ZoneKind
from .header_footer import ensure_header_footer, replace_zone

logger = logging.getLogger(__name__)

# fields that decide where a node is registered; moved only by add_node_to_target
_STRUCTURAL_FIELDS = frozenset({"id", "owner", "page_id"})


def _detach(draft: DocumentDraft, node: NodeBase) -> None:
    """Remove ``node.id`` from the order list its current owner implies."""
    owner = node.owner
    if owner.kind == ZoneKind.PAGE:
        order = draft.node_order_by_page_id.get(owner.page_id)
        if order and node.id in order:
            draft.edit("node_order_by_page_id")[owner.page_id] = tuple(i for i in order if i != node.id)
        return

    hf = draft.get_header_footer(owner.preset_id)
    if hf is None:
        return
    kind = owner.kind.value
    zone = hf.zone(kind)
    if node.id in zone.node_order:
        replace_zone(draft, owner.preset_id, kind,
                     replace(zone, node_order=tuple(i for i in zone.node_order if i != node.id)))


def add_node(draft: DocumentDraft, page_id: str, node: NodeBase) -> Optional[str]:
    """Add ``node`` to a page's body zone."""
    return add_node_to_target(draft, page_id, "page", node)


def add_node_to_target(draft: DocumentDraft, page_id: str, target: str, node: NodeBase) -> Optional[str]:
    """
    Add ``node`` to a page's body, or to the header/footer of the page's preset.

    The node's owner is rewritten to match the target (and ``page_id`` is set
    for body nodes, cleared for header/footer nodes) before the id is
    appended to the matching ordered list. Re-adding an existing id moves it.

    Returns:
        The node id, or None when the page does not exist
    """
    page = draft.get_page(page_id)
    if page is None:
        logger.debug(f"add_node_to_target ignored: missing page {page_id}")
        return None

    try:
        zone_kind = ZoneKind(target)
    except ValueError:
        logger.warning(f"add_node_to_target ignored: unknown target {target!r}")
        return None

    if zone_kind == ZoneKind.PAGE:
        placed = replace(node, owner=NodeOwner.page(page_id), page_id=page_id)
    elif zone_kind == ZoneKind.HEADER:
        placed = replace(node, owner=NodeOwner.header(page.preset_id), page_id=None)
    else:
        placed = replace(node, owner=NodeOwner.footer(page.preset_id), page_id=None)

    existing = draft.get_node(node.id)
    if existing is not None:
        _detach(draft, existing)

    draft.put_node(placed)

    if zone_kind == ZoneKind.PAGE:
        order = draft.node_order_by_page_id.get(page_id, ())
        draft.edit("node_order_by_page_id")[page_id] = order + (placed.id,)
    else:
        hf = ensure_header_footer(draft, page.preset_id)
        zone = hf.zone(zone_kind.value)
        replace_zone(draft, page.preset_id, zone_kind.value,
                     replace(zone, node_order=zone.node_order + (placed.id,)))

    return placed.id


def update_node(draft: DocumentDraft, node_id: str, patch: Optional[Mapping[str, Any]] = None,
                **changes: Any) -> None:
    """
    Shallow-merge ``patch`` into a node.

    Raises:
        NodeTypeMismatchError: if the patch asks for a different ``type``
    """
    previous = draft.get_node(node_id)
    if previous is None:
        return

    merged = {**(patch or {}), **changes}

    if "type" in merged:
        requested = merged.pop("type")
        requested = getattr(requested, "value", requested)
        if requested != previous.type:
            raise NodeTypeMismatchError(node_id, previous.type, str(requested))

    allowed = set(previous.field_names()) - _STRUCTURAL_FIELDS
    ignored = sorted(set(merged) - allowed)
    if ignored:
        logger.warning(f"update_node({node_id}): ignoring fields {ignored}")

    values = {key: value for key, value in merged.items() if key in allowed}
    if values:
        draft.put_node(replace(previous, **values))


def delete_node(draft: DocumentDraft, node_id: str) -> None:
    """Remove a node from its zone and from any group that lists it."""
    node = draft.get_node(node_id)
    if node is None:
        return

    _detach(draft, node)
    nodes = draft.edit("nodes_by_id")
    del nodes[node_id]

    if node.parent_id and isinstance(nodes.get(node.parent_id), GroupNode):
        parent = nodes[node.parent_id]
        nodes[parent.id] = replace(parent, children=tuple(c for c in parent.children if c != node_id))

    if isinstance(node, GroupNode):
        for child_id in node.children:
            child = nodes.get(child_id)
            if child is not None and child.parent_id == node_id:
                nodes[child_id] = replace(child, parent_id=None)
