"""
pagedoc - layout and state engine for page based document editors.

Documents are built from shared paper presets (size and margin) carrying a
repeating header/footer, pages that use them and freely placed content nodes.
This package provides:

- Models: immutable document snapshots and a copy-on-write draft
- Commands: the invariant preserving mutation surface
- Engine: page rectangle geometry and absolute node layout
- Selectors: derived read-only queries
- History: undo/redo through structural deltas
- Import/export: camelCase JSON with legacy migration

Main Components:
- PageEditor: document + history + session facade
- HistoryManager: undo/redo stacks over document snapshots
- compute_page_rects: content, body, header and footer rectangles
"""

from .api import PageEditor, create_document, open_document
from .config import DEFAULT_CONFIG, DEFAULT_HF_CONSTRAINTS, EditorConfig, HeaderFooterConstraints
from .engine.geometry import PageRects, Rect, compute_page_rects
from .engine.layout import compute_layout
from .exceptions import (
    DocumentFormatError,
    GeometryError,
    NodeTypeMismatchError,
    PageDocError,
    UnitConversionError,
    UnitMigrationError,
)
from .export.json_exporter import document_to_json, export_document
from .history import Delta, DeltaOp, HistoryManager, apply_delta, diff_documents
from .importers.json_importer import document_from_json, import_document
from .models import (
    BoxNode,
    Document,
    DocumentDraft,
    FieldNode,
    GroupNode,
    ImageNode,
    Margin,
    NodeOwner,
    Page,
    PagePreset,
    Size,
    TextNode,
    empty_document,
)
from .session import EditorSession
from .utils.logger import configure_logging
from .validator import DocumentValidator, ValidationIssue, ValidationLevel, validate_document
from .version import __version__

__all__ = [
    "PageEditor",
    "create_document",
    "open_document",
    "DEFAULT_CONFIG",
    "DEFAULT_HF_CONSTRAINTS",
    "EditorConfig",
    "HeaderFooterConstraints",
    "PageRects",
    "Rect",
    "compute_page_rects",
    "compute_layout",
    "DocumentFormatError",
    "GeometryError",
    "NodeTypeMismatchError",
    "PageDocError",
    "UnitConversionError",
    "UnitMigrationError",
    "document_to_json",
    "export_document",
    "Delta",
    "DeltaOp",
    "HistoryManager",
    "apply_delta",
    "diff_documents",
    "document_from_json",
    "import_document",
    "BoxNode",
    "Document",
    "DocumentDraft",
    "FieldNode",
    "GroupNode",
    "ImageNode",
    "Margin",
    "NodeOwner",
    "Page",
    "PagePreset",
    "Size",
    "TextNode",
    "empty_document",
    "EditorSession",
    "configure_logging",
    "DocumentValidator",
    "ValidationIssue",
    "ValidationLevel",
    "validate_document",
    "__version__",
]
