"""
JSON exporter for pagedoc documents.

Serializes a document snapshot to the plain camelCase structure used by the
editor's persistence layer. The output is acyclic and contains only the
document entities; ``None`` fields are omitted.
"""

import json
import logging
import re
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Union

from ..models.document import Document, ImageAsset
from ..models.nodes import NodeBase

logger = logging.getLogger(__name__)

# wire names that do not follow the plain snake_case -> camelCase rule
_RENAMES: Dict[str, Dict[str, str]] = {
    "Document": {"preset_order": "pagePresetOrder", "presets_by_id": "pagePresetsById"},
    "HeaderFooterZone": {"height": "heightPx", "min_height": "minHeightPx", "max_height": "maxHeightPx"},
    "TextAutosize": {"min_h": "minH", "max_h": "maxH"},
}

_CAMEL_RE = re.compile(r"_([a-z0-9])")


def camel_case(name: str) -> str:
    return _CAMEL_RE.sub(lambda m: m.group(1).upper(), name)


def to_wire(value: Any) -> Any:
    """Convert a model value (dataclass, enum, tuple, dict) to plain JSON data."""
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        renames = _RENAMES.get(type(value).__name__, {})
        data: Dict[str, Any] = {}
        if isinstance(value, NodeBase):
            data["type"] = value.type
        elif isinstance(value, ImageAsset):
            data["type"] = "image"
        for f in fields(value):
            item = getattr(value, f.name)
            if item is None:
                continue
            data[renames.get(f.name, camel_case(f.name))] = to_wire(item)
        return data
    if isinstance(value, (list, tuple)):
        return [to_wire(item) for item in value]
    if isinstance(value, dict):
        return {key: to_wire(item) for key, item in value.items()}
    return value


def export_document(doc: Document) -> Dict[str, Any]:
    """Return ``doc`` as a JSON-compatible dict."""
    return to_wire(doc)


def document_to_json(doc: Document, indent: int = 2, ensure_ascii: bool = False) -> str:
    return json.dumps(export_document(doc), indent=indent, ensure_ascii=ensure_ascii)


class JSONExporter:
    """
    Exports a document as JSON.

    Handles file output with formatting options.
    """

    def __init__(self, document: Document, indent: int = 2, ensure_ascii: bool = False):
        """
        Initialize JSON exporter.

        Args:
            document: Document to export
            indent: JSON indentation level
            ensure_ascii: Whether to ensure ASCII encoding
        """
        self.document = document
        self.indent = indent
        self.ensure_ascii = ensure_ascii

        logger.debug("JSON exporter initialized")

    def to_dict(self) -> Dict[str, Any]:
        return export_document(self.document)

    def to_json(self) -> str:
        return document_to_json(self.document, indent=self.indent, ensure_ascii=self.ensure_ascii)

    def export(self, output_path: Union[str, Path]) -> bool:
        """
        Export document to a JSON file.

        Args:
            output_path: Output file path

        Returns:
            True if export successful, False otherwise
        """
        try:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(self.to_json(), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to export document to JSON: {e}")
            return False

        logger.info(f"Document exported to JSON: {output_path}")
        return True
