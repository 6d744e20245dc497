"""
Transient editor state.

The session tracks what the user is looking at and working on. It is never
persisted and never recorded in history; after a document change it is
reconciled so it does not point at pages or nodes that no longer exist.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .models.document import Document
from .utils.enums import EditorTool, ZoneKind

logger = logging.getLogger(__name__)

MIN_ZOOM = 0.25
MAX_ZOOM = 3.0


@dataclass
class EditorSession:
    active_page_id: Optional[str] = None
    zoom: float = 1.0
    selected_node_ids: List[str] = field(default_factory=list)
    hover_node_id: Optional[str] = None
    tool: EditorTool = EditorTool.SELECT
    editing_target: ZoneKind = ZoneKind.PAGE

    @classmethod
    def for_document(cls, doc: Document) -> "EditorSession":
        """Start a session on the document's first page."""
        return cls(active_page_id=doc.page_order[0] if doc.page_order else None)

    def set_active_page(self, page_id: Optional[str]) -> None:
        self.active_page_id = page_id

    def set_zoom(self, zoom: float) -> float:
        self.zoom = max(MIN_ZOOM, min(MAX_ZOOM, round(float(zoom), 2)))
        return self.zoom

    def set_tool(self, tool: EditorTool) -> None:
        self.tool = EditorTool(tool)

    def set_hover(self, node_id: Optional[str]) -> None:
        self.hover_node_id = node_id

    def select_nodes(self, node_ids: Iterable[str], additive: bool = False) -> None:
        """Replace (or extend) the selection; duplicates are dropped, order kept."""
        ids = list(self.selected_node_ids) if additive else []
        for node_id in node_ids:
            if node_id not in ids:
                ids.append(node_id)
        self.selected_node_ids = ids

    def clear_selection(self) -> None:
        self.selected_node_ids = []

    def set_editing_target(self, target: ZoneKind) -> None:
        """Switch between body, header and footer editing; selection is reset."""
        self.editing_target = ZoneKind(target)
        self.selected_node_ids = []
        self.hover_node_id = None

    def reconcile_after_page_delete(self, doc: Document, page_id: str, index_before: int,
                                    deleted_node_ids: Iterable[str] = ()) -> None:
        """
        Update the session after ``page_id`` was removed from ``doc``.

        When the deleted page was active, the page before it becomes active,
        else the one that took its place, else the first page, else none.
        Deleted nodes drop out of the selection and hover.
        """
        deleted = set(deleted_node_ids)

        if self.active_page_id == page_id:
            order = doc.page_order
            if 0 <= index_before - 1 < len(order):
                self.active_page_id = order[index_before - 1]
            elif 0 <= index_before < len(order):
                self.active_page_id = order[index_before]
            else:
                self.active_page_id = order[0] if order else None
            logger.debug(f"Active page moved to {self.active_page_id} after deleting {page_id}")

        self.selected_node_ids = [nid for nid in self.selected_node_ids if nid not in deleted]
        if self.hover_node_id in deleted:
            self.hover_node_id = None

    def heal(self, doc: Document) -> bool:
        """
        Drop references to pages or nodes missing from ``doc``.

        Returns:
            True if anything was reset
        """
        changed = False
        if self.active_page_id is not None and self.active_page_id not in doc.pages_by_id:
            self.active_page_id = doc.page_order[0] if doc.page_order else None
            changed = True
        if self.hover_node_id is not None and self.hover_node_id not in doc.nodes_by_id:
            self.hover_node_id = None
            changed = True
        selected = [nid for nid in self.selected_node_ids if nid in doc.nodes_by_id]
        if len(selected) != len(self.selected_node_ids):
            self.selected_node_ids = selected
            changed = True
        return changed
