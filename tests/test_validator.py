"""
Tests for DocumentValidator.
"""

import json
from dataclasses import replace

import pytest

from pagedoc.commands import add_node, add_node_to_target
from pagedoc.models import DocumentDraft, Page
from pagedoc.models.nodes import NodeOwner
from pagedoc.utils.enums import MarginSource
from pagedoc.validator import DocumentValidator, ValidationIssue, ValidationLevel, validate_document

from .conftest import run


def messages(issues, level=ValidationLevel.ERROR):
    return [issue.message for issue in issues if issue.level == level]


class TestDocumentValidator:
    """Test cases for DocumentValidator."""

    def test_valid_document(self, one_page_doc, make_text):
        doc, _ = run(one_page_doc, add_node, "page-1", make_text("t1"))
        doc, _ = run(doc, add_node_to_target, "page-1", "header", make_text("h1"))
        validator = DocumentValidator(doc)
        assert validator.validate() == []
        assert not validator.has_errors()

    def test_requires_document(self):
        with pytest.raises(ValueError):
            DocumentValidator().validate()

    def test_margin_consistency(self, one_page_doc):
        draft = DocumentDraft(one_page_doc)
        draft.put_page(replace(draft.get_page("page-1"), margin_source=MarginSource.PAGE))
        errors = messages(validate_document(draft.finish()))
        assert errors == ["Page page-1 uses its own margin but has no override"]

    def test_header_footer_bounds(self, one_page_doc):
        hf = one_page_doc.header_footer_by_preset_id["preset-1"]
        draft = DocumentDraft(one_page_doc)
        draft.put_header_footer("preset-1", replace(hf, footer=replace(hf.footer, height=50000)))
        issues = validate_document(draft.finish())
        assert len(messages(issues)) == 1
        assert issues[0].details["allowed"] == 16840

    def test_dangling_preset_reference(self, one_page_doc):
        draft = DocumentDraft(one_page_doc)
        draft.put_page(Page("page-1", "ghost"))
        errors = messages(validate_document(draft.finish()))
        assert "Page page-1 references non-existent preset: ghost" in errors

    def test_node_listed_in_wrong_zone(self, one_page_doc, make_text):
        doc, _ = run(one_page_doc, add_node, "page-1", make_text("t1"))
        draft = DocumentDraft(doc)
        draft.put_node(replace(doc.nodes_by_id["t1"], owner=NodeOwner.footer("preset-1"), page_id=None))
        errors = messages(validate_document(draft.finish()))
        assert any("must be listed once in footer:preset-1" in e for e in errors)

    def test_node_listed_twice(self, one_page_doc, make_text):
        doc, _ = run(one_page_doc, add_node, "page-1", make_text("t1"))
        draft = DocumentDraft(doc)
        draft.edit("node_order_by_page_id")["page-1"] = ("t1", "t1")
        assert validate_document(draft.finish())[0].details["found"] == ["page:page-1", "page:page-1"]

    def test_page_id_must_match_owner(self, one_page_doc, make_text):
        doc, _ = run(one_page_doc, add_node, "page-1", make_text("t1"))
        draft = DocumentDraft(doc)
        draft.put_node(replace(doc.nodes_by_id["t1"], page_id="elsewhere"))
        errors = messages(validate_document(draft.finish()))
        assert errors == ["Node t1 page_id elsewhere does not match owner page page-1"]

    def test_missing_node_in_order(self, one_page_doc):
        draft = DocumentDraft(one_page_doc)
        draft.edit("node_order_by_page_id")["page-1"] = ("ghost",)
        errors = messages(validate_document(draft.finish()))
        assert errors == ["Order list page:page-1 references missing node ghost"]

    def test_structure_warnings(self, one_page_doc):
        draft = DocumentDraft(one_page_doc)
        draft.put_page(Page("loose", "preset-1"))
        warnings = messages(validate_document(draft.finish()), ValidationLevel.WARNING)
        assert warnings == ["Page loose is not in the page order"]


class TestValidationReport:
    """Test cases for report generation."""

    def test_reports(self, one_page_doc):
        draft = DocumentDraft(one_page_doc)
        draft.put_page(Page("page-1", "ghost"))
        validator = DocumentValidator(draft.finish())
        validator.validate()

        report = json.loads(validator.generate_report("json"))
        assert report["summary"]["errors"] == len(validator.get_errors())
        assert report["issues"][0]["level"] == "error"

        text = validator.generate_report("text")
        assert text.startswith("Validation Report")
        assert "[ERROR]" in text

        assert validator.generate_report("dict")["summary"]["total_issues"] == len(validator.issues)

    def test_issue_repr(self):
        issue = ValidationIssue(ValidationLevel.WARNING, "something")
        assert str(issue) == "[WARNING] something"
        assert repr(issue) == "ValidationIssue(warning, 'something')"
        assert issue.to_dict()["details"] == {}
