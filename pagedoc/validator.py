"""
Document validator.

Checks a document snapshot against the rules every command preserves:
margin source consistency, header/footer height bounds, node to zone
membership and referential integrity. Problems are reported, never raised,
so the validator can run on freshly imported documents before repair.
"""

import json
import logging
from collections import Counter
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .commands.header_footer import clamp_repeat_area_height
from .config import DEFAULT_HF_CONSTRAINTS, HeaderFooterConstraints
from .models.document import Document
from .models.nodes import GroupNode, ImageNode
from .utils.enums import MarginSource, ZoneKind

logger = logging.getLogger(__name__)


class ValidationLevel(Enum):
    """Validation levels."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationIssue:
    """Represents a validation issue."""

    def __init__(self, level: ValidationLevel, message: str,
                 element_id: Optional[str] = None,
                 element_type: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.level = level
        self.message = message
        self.element_id = element_id
        self.element_type = element_type
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'level': self.level.value,
            'message': self.message,
            'element_id': self.element_id,
            'element_type': self.element_type,
            'details': self.details,
        }

    def __repr__(self) -> str:
        return f"ValidationIssue({self.level.value}, {self.message!r})"

    def __str__(self) -> str:
        return f"[{self.level.value.upper()}] {self.message}"


class DocumentValidator:
    """
    Document invariant checker.

    Validates structure, margins, header/footer bounds, node membership and
    references.
    """

    def __init__(self, document: Optional[Document] = None,
                 constraints: Optional[HeaderFooterConstraints] = None):
        """
        Initialize validator.

        Args:
            document: Document to validate
            constraints: Header/footer limits (defaults apply when omitted)
        """
        self.document = document
        self.constraints = constraints or DEFAULT_HF_CONSTRAINTS
        self.issues: List[ValidationIssue] = []

        logger.debug("Document validator initialized")

    def validate(self, document: Optional[Document] = None) -> List[ValidationIssue]:
        """
        Validate document and return issues.

        Args:
            document: Document to validate (optional)

        Returns:
            List of validation issues
        """
        if document is not None:
            self.document = document

        if self.document is None:
            raise ValueError("No document provided for validation")

        self.issues = []

        self._validate_structure()
        self._validate_references()
        self._validate_margins()
        self._validate_header_footer()
        self._validate_membership()

        logger.debug(f"Validation completed: {len(self.issues)} issues found")
        return self.issues

    def _add(self, level: ValidationLevel, message: str, element_id: Optional[str] = None,
             element_type: Optional[str] = None, **details: Any) -> None:
        self.issues.append(ValidationIssue(level, message, element_id, element_type, details))

    def _validate_structure(self):
        doc = self.document

        for name, order, by_id in (
            ("preset", doc.preset_order, doc.presets_by_id),
            ("page", doc.page_order, doc.pages_by_id),
        ):
            duplicates = [item for item, count in Counter(order).items() if count > 1]
            for item in duplicates:
                self._add(ValidationLevel.ERROR, f"{name.capitalize()} {item} listed more than once in order",
                          item, name)
            for item in order:
                if item not in by_id:
                    self._add(ValidationLevel.ERROR, f"{name.capitalize()} order references missing {name} {item}",
                              item, name)
            for item in by_id:
                if item not in order:
                    self._add(ValidationLevel.WARNING, f"{name.capitalize()} {item} is not in the {name} order",
                              item, name)

        for page_id in doc.page_order:
            if page_id not in doc.node_order_by_page_id:
                self._add(ValidationLevel.WARNING, f"Page {page_id} has no node order entry", page_id, "page")

    def _validate_references(self):
        doc = self.document

        for page_id, page in doc.pages_by_id.items():
            if page.preset_id not in doc.presets_by_id:
                self._add(ValidationLevel.ERROR,
                          f"Page {page_id} references non-existent preset: {page.preset_id}",
                          page_id, "page", preset_id=page.preset_id)

        for node_id, node in doc.nodes_by_id.items():
            owner = node.owner
            if owner.kind == ZoneKind.PAGE:
                if owner.page_id not in doc.pages_by_id:
                    self._add(ValidationLevel.ERROR, f"Node {node_id} is owned by missing page {owner.page_id}",
                              node_id, node.type)
            elif owner.preset_id not in doc.presets_by_id:
                self._add(ValidationLevel.ERROR, f"Node {node_id} is owned by missing preset {owner.preset_id}",
                          node_id, node.type)

            if isinstance(node, ImageNode) and node.asset_id:
                images = doc.assets.images_by_id if doc.assets else {}
                if node.asset_id not in images:
                    self._add(ValidationLevel.WARNING, f"Image {node_id} references unknown asset {node.asset_id}",
                              node_id, node.type)
            if isinstance(node, GroupNode):
                for child_id in node.children:
                    if child_id not in doc.nodes_by_id:
                        self._add(ValidationLevel.WARNING, f"Group {node_id} lists missing child {child_id}",
                                  node_id, node.type)

        if doc.guides is not None:
            for guide_id, guide in doc.guides.by_id.items():
                if guide.page_id is not None and guide.page_id not in doc.pages_by_id:
                    self._add(ValidationLevel.WARNING, f"Guide {guide_id} references missing page {guide.page_id}",
                              guide_id, "guide")

    def _validate_margins(self):
        for page_id, page in self.document.pages_by_id.items():
            if page.margin_source == MarginSource.PAGE and page.margin_override is None:
                self._add(ValidationLevel.ERROR, f"Page {page_id} uses its own margin but has no override",
                          page_id, "page")
            elif page.margin_source == MarginSource.PRESET and page.margin_override is not None:
                self._add(ValidationLevel.ERROR, f"Page {page_id} uses the preset margin but keeps an override",
                          page_id, "page")
            elif page.margin_source not in (MarginSource.PAGE, MarginSource.PRESET):
                self._add(ValidationLevel.ERROR, f"Page {page_id} has unknown margin source {page.margin_source!r}",
                          page_id, "page")

    def _validate_header_footer(self):
        doc = self.document

        for preset_id in doc.preset_order:
            preset = doc.presets_by_id.get(preset_id)
            if preset is None:
                continue
            hf = doc.header_footer_by_preset_id.get(preset_id)
            if hf is None:
                self._add(ValidationLevel.WARNING, f"Preset {preset_id} has no header/footer zones",
                          preset_id, "preset")
                continue

            for kind, zone, other in (("header", hf.header, hf.footer), ("footer", hf.footer, hf.header)):
                allowed = clamp_repeat_area_height(
                    kind, zone.height, preset.size.height, other.height,
                    zone.min_height, zone.max_height, self.constraints,
                )
                if allowed != zone.height:
                    self._add(ValidationLevel.ERROR,
                              f"Preset {preset_id} {kind} height {zone.height} is out of bounds",
                              zone.id, kind, allowed=allowed)

    def _validate_membership(self):
        doc = self.document

        listed: Dict[str, List[str]] = {}
        for page_id, order in doc.node_order_by_page_id.items():
            for node_id in order:
                listed.setdefault(node_id, []).append(f"page:{page_id}")
        for preset_id, hf in doc.header_footer_by_preset_id.items():
            for kind in ("header", "footer"):
                for node_id in hf.zone(kind).node_order:
                    listed.setdefault(node_id, []).append(f"{kind}:{preset_id}")

        for node_id, places in listed.items():
            if node_id not in doc.nodes_by_id:
                self._add(ValidationLevel.ERROR, f"Order list {places[0]} references missing node {node_id}",
                          node_id, "node")

        for node_id, node in doc.nodes_by_id.items():
            owner = node.owner
            if owner.kind == ZoneKind.PAGE:
                expected = f"page:{owner.page_id}"
                if node.page_id != owner.page_id:
                    self._add(ValidationLevel.ERROR,
                              f"Node {node_id} page_id {node.page_id} does not match owner page {owner.page_id}",
                              node_id, node.type)
            else:
                expected = f"{owner.kind.value}:{owner.preset_id}"

            places = listed.get(node_id, [])
            if places != [expected]:
                self._add(ValidationLevel.ERROR,
                          f"Node {node_id} must be listed once in {expected}, found in {places or 'no list'}",
                          node_id, node.type, expected=expected, found=places)

    def get_issues_by_level(self, level: ValidationLevel) -> List[ValidationIssue]:
        """Get issues by validation level."""
        return [issue for issue in self.issues if issue.level == level]

    def get_errors(self) -> List[ValidationIssue]:
        return self.get_issues_by_level(ValidationLevel.ERROR)

    def get_warnings(self) -> List[ValidationIssue]:
        return self.get_issues_by_level(ValidationLevel.WARNING)

    def has_errors(self) -> bool:
        return len(self.get_errors()) > 0

    def generate_report(self, format: str = "json") -> Union[str, Dict[str, Any]]:
        """
        Generate validation report.

        Args:
            format: Report format ("json", "text", anything else for a dict)

        Returns:
            Validation report
        """
        report = {
            'summary': {
                'total_issues': len(self.issues),
                'errors': len(self.get_errors()),
                'warnings': len(self.get_warnings()),
            },
            'issues': [issue.to_dict() for issue in self.issues]
        }

        if format == "json":
            return json.dumps(report, indent=2)
        elif format == "text":
            text_parts = [
                "Validation Report",
                f"Total Issues: {report['summary']['total_issues']}",
                f"Errors: {report['summary']['errors']}",
                f"Warnings: {report['summary']['warnings']}",
                "",
            ]
            text_parts.extend(str(issue) for issue in self.issues)
            return "\n".join(text_parts)
        else:
            return report


def validate_document(doc: Document,
                      constraints: Optional[HeaderFooterConstraints] = None) -> List[ValidationIssue]:
    """Validate ``doc`` and return every issue found."""
    return DocumentValidator(constraints=constraints).validate(doc)
