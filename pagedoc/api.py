"""
High level editing API for pagedoc.

Main entry point for hosts: one object holding the current document, its
undo/redo history and the transient editor session.

Example:
    >>> from pagedoc import PageEditor
    >>>
    >>> editor = PageEditor.create("Report", paper="A4")
    >>> page_id = editor.session.active_page_id
    >>>
    >>> # Override the margin of one page
    >>> editor.set_page_margin_override(page_id, {"top": 500, "right": 500, "bottom": 500, "left": 500})
    >>>
    >>> # Geometry for a renderer
    >>> metrics = editor.metrics(page_id)
    >>>
    >>> editor.undo()
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from . import commands as cmd
from .config import DEFAULT_CONFIG, EditorConfig
from .engine.layout import DocumentLayout, compute_layout
from .export.json_exporter import JSONExporter, document_to_json
from .history import HistoryManager
from .importers.json_importer import document_from_json, load_document
from .media.image_probe import content_hash, find_asset_by_hash, probe_image
from .models.document import Document, Guide, empty_document
from .models.draft import DocumentDraft
from .models.geometry import Size
from .models.nodes import NodeBase
from .selectors import PageMetrics, get_effective_page_metrics, get_nodes_by_target, get_page_node_ids
from .session import EditorSession
from .utils.enums import MarginSource, Orientation
from .utils.id_manager import create_id
from .validator import ValidationIssue, ValidationLevel, validate_document

logger = logging.getLogger(__name__)

__all__ = [
    "PageEditor",
    "create_document",
    "open_document",
]


class PageEditor:
    """
    Editing facade over a document.

    Every mutating method runs one command through the
    :class:`~pagedoc.history.HistoryManager`, so each call is one undo step
    (calls that change nothing are not recorded). The session is kept in
    step with the document after deletions, undo and redo.

    Examples:
        >>> editor = PageEditor.open("report.json")
        >>> editor.add_page()
        >>> editor.can_undo()
        True
    """

    def __init__(self, document: Optional[Document] = None, config: EditorConfig = DEFAULT_CONFIG,
                 validate: bool = False):
        """
        Args:
            document: Initial document (an empty point document when omitted)
            config: Defaults for presets and header/footer zones
            validate: Check invariants after every change and log violations
        """
        self.config = config
        self.validate_changes = validate
        self.history = HistoryManager(document if document is not None else empty_document())
        self.session = EditorSession.for_document(self.history.document)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(cls, name: str = "New Document", paper: str = "A4",
               orientation: Orientation = Orientation.PORTRAIT,
               config: EditorConfig = DEFAULT_CONFIG) -> "PageEditor":
        """New document with one preset and page 1; history starts empty."""
        editor = cls(create_document(name, paper, orientation, config), config=config)
        return editor

    @classmethod
    def open(cls, path: Union[str, Path], config: EditorConfig = DEFAULT_CONFIG) -> "PageEditor":
        return cls(load_document(path, config=config), config=config)

    @classmethod
    def from_json(cls, text: str, config: EditorConfig = DEFAULT_CONFIG) -> "PageEditor":
        return cls(document_from_json(text, config=config), config=config)

    @property
    def document(self) -> Document:
        return self.history.document

    def _run(self, command, *args: Any, **kwargs: Any) -> Any:
        result = self.history.apply(command, *args, **kwargs)
        if self.validate_changes:
            errors = [issue for issue in validate_document(self.document, self.config.constraints)
                      if issue.level == ValidationLevel.ERROR]
            for issue in errors:
                logger.warning(f"{getattr(command, '__name__', 'command')}: {issue}")
        return result

    # ------------------------------------------------------------------
    # Presets
    # ------------------------------------------------------------------

    def add_preset(self, name: str, size: Size, margin: Optional[Mapping[str, float]] = None,
                   preset_id: Optional[str] = None, **options: Any) -> str:
        return self._run(cmd.add_page_preset, name, size, margin, preset_id, config=self.config, **options)

    def create_preset(self, name: str, paper: str = "A4",
                      orientation: Orientation = Orientation.PORTRAIT) -> Optional[str]:
        """Create a catalogue preset; returns its id."""
        created: List[str] = []

        def create_preset(draft: DocumentDraft) -> None:
            before = set(draft.preset_order)
            cmd.create_page_preset(draft, name, paper, orientation, config=self.config)
            created.extend(pid for pid in draft.preset_order if pid not in before)

        self._run(create_preset)
        return created[0] if created else None

    def update_preset(self, preset_id: str, name: Optional[str] = None, size: Optional[Size] = None,
                      orientation: Optional[Orientation] = None) -> None:
        self._run(cmd.update_preset, preset_id, name, size, orientation, self.config.constraints)

    def set_preset_margin(self, preset_id: str, margin: Mapping[str, float]) -> None:
        self._run(cmd.set_preset_margin, preset_id, margin)

    def update_preset_margin(self, preset_id: str, patch: Mapping[str, float]) -> None:
        self._run(cmd.update_preset_margin, preset_id, patch)

    def delete_preset(self, preset_id: str, reassign_map: Optional[Mapping[str, str]] = None) -> bool:
        before = self.document
        deleted = self._run(cmd.delete_preset_and_reassign_pages, preset_id, reassign_map, config=self.config)
        if deleted and before is not self.document:
            self.session.heal(self.document)
        return deleted

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def ensure_first_page(self, preset_id: str) -> Optional[str]:
        page_id = self._run(cmd.ensure_first_page, preset_id)
        if page_id is not None:
            self.session.set_active_page(page_id)
        return page_id

    def add_page(self) -> Optional[str]:
        page_id = self._run(cmd.add_page_to_end, config=self.config)
        if page_id is not None:
            self.session.set_active_page(page_id)
        return page_id

    def insert_page_after(self, after_page_id: str) -> Optional[str]:
        page_id = self._run(cmd.insert_page_after, after_page_id)
        if page_id is not None:
            self.session.set_active_page(page_id)
        return page_id

    def delete_page(self, page_id: str) -> Optional[int]:
        deleted_nodes = get_page_node_ids(self.document, page_id)
        index = self._run(cmd.delete_page, page_id)
        if index is not None:
            self.session.reconcile_after_page_delete(self.document, page_id, index, deleted_nodes)
        return index

    def set_page_preset(self, page_id: str, preset_id: str) -> None:
        self._run(cmd.set_page_preset, page_id, preset_id, config=self.config)

    def update_page(self, page_id: str, **changes: Any) -> None:
        self._run(cmd.update_page, page_id, **changes)

    def set_page_margin_override(self, page_id: str, margin: Optional[Mapping[str, float]] = None) -> None:
        self._run(cmd.set_page_margin_override, page_id, margin)

    def set_page_margin_source(self, page_id: str, source: MarginSource) -> None:
        self._run(cmd.set_page_margin_source, page_id, source)

    def update_page_margin(self, page_id: str, patch: Mapping[str, float]) -> None:
        self._run(cmd.update_page_margin, page_id, patch)

    # ------------------------------------------------------------------
    # Header / footer
    # ------------------------------------------------------------------

    def set_header_footer_heights(self, preset_id: str, header: Optional[float] = None,
                                  footer: Optional[float] = None) -> None:
        self._run(cmd.set_header_footer_heights, preset_id, header, footer, self.config.constraints)

    def set_repeat_area_height(self, preset_id: str, kind: str, height: float) -> None:
        self._run(cmd.set_repeat_area_height, preset_id, kind, height, self.config.constraints)

    def preview_repeat_area_height(self, preset_id: str, kind: str, height: float) -> Optional[int]:
        """Clamped height for a live drag preview; the document is not changed."""
        return cmd.clamp_repeat_area_height_for_preset(self.document, preset_id, kind, height,
                                                       self.config.constraints)

    def set_repeat_area_anchor_to_margins(self, preset_id: str, kind: str, anchor: bool) -> None:
        self._run(cmd.set_repeat_area_anchor_to_margins, preset_id, kind, anchor)

    def set_page_header_footer_hidden(self, page_id: str, header_hidden: Optional[bool] = None,
                                      footer_hidden: Optional[bool] = None) -> None:
        self._run(cmd.set_page_header_footer_hidden, page_id, header_hidden, footer_hidden)

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def add_node(self, page_id: str, node: NodeBase, target: str = "page") -> Optional[str]:
        return self._run(cmd.add_node_to_target, page_id, target, node)

    def update_node(self, node_id: str, patch: Optional[Mapping[str, Any]] = None, **changes: Any) -> None:
        self._run(cmd.update_node, node_id, patch, **changes)

    def delete_node(self, node_id: str) -> None:
        self._run(cmd.delete_node, node_id)
        self.session.heal(self.document)

    # ------------------------------------------------------------------
    # Assets and guides
    # ------------------------------------------------------------------

    def add_image(self, data: bytes, src: Optional[str] = None) -> str:
        """Register image bytes as an asset, reusing an asset with the same content."""
        existing = find_asset_by_hash(self.document.assets, content_hash(data))
        if existing is not None:
            return existing.id
        return self._run(cmd.add_image_asset, probe_image(data, src=src))

    def remove_image(self, asset_id: str) -> bool:
        return self._run(cmd.remove_image_asset, asset_id)

    def add_guide(self, guide: Guide) -> Optional[str]:
        return self._run(cmd.add_guide, guide)

    def update_guide(self, guide_id: str, **changes: Any) -> None:
        self._run(cmd.update_guide, guide_id, changes)

    def remove_guide(self, guide_id: str) -> None:
        self._run(cmd.remove_guide, guide_id)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        done = self.history.undo()
        if done:
            self.session.heal(self.document)
        return done

    def redo(self) -> bool:
        done = self.history.redo()
        if done:
            self.session.heal(self.document)
        return done

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    # ------------------------------------------------------------------
    # Queries and output
    # ------------------------------------------------------------------

    def metrics(self, page_id: str) -> Optional[PageMetrics]:
        return get_effective_page_metrics(self.document, page_id)

    def nodes(self, page_id: str, target: str = "page") -> List[NodeBase]:
        resolved = get_nodes_by_target(self.document, page_id, target)
        return list(resolved.nodes) if resolved is not None else []

    def layout(self) -> DocumentLayout:
        return compute_layout(self.document)

    def validate(self) -> List[ValidationIssue]:
        return validate_document(self.document, self.config.constraints)

    def repair(self) -> bool:
        """Re-run the margin and header/footer repair as one undo step."""
        def repair(draft: DocumentDraft) -> bool:
            margins = cmd.normalize_doc_margins(draft)
            heights = cmd.normalize_header_footer_heights(draft, self.config.constraints)
            return margins or heights

        return self._run(repair)

    def to_json(self, indent: int = 2) -> str:
        return document_to_json(self.document, indent=indent)

    def to_dict(self) -> Dict[str, Any]:
        return JSONExporter(self.document).to_dict()

    def save(self, path: Union[str, Path]) -> bool:
        return JSONExporter(self.document).export(path)


def create_document(name: str = "New Document", paper: str = "A4",
                    orientation: Orientation = Orientation.PORTRAIT,
                    config: EditorConfig = DEFAULT_CONFIG) -> Document:
    """
    Build a document with one catalogue preset and page 1.

    Examples:
        >>> doc = create_document("Letter", paper="LETTER")
        >>> len(doc.page_order)
        1
    """
    draft = DocumentDraft(empty_document(doc_id=create_id("doc"), name=name))
    cmd.create_page_preset(draft, paper, paper, orientation, bootstrap=True, config=config)
    return draft.finish()


def open_document(path: Union[str, Path], config: EditorConfig = DEFAULT_CONFIG) -> Document:
    """Load and repair a JSON document file."""
    return load_document(path, config=config)
