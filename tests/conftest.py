"""
Pytest configuration for pagedoc
"""

import logging
import sys

import pytest

from pagedoc.commands import add_page_preset, ensure_first_page, ensure_header_footer
from pagedoc.models import Document, DocumentDraft, Margin, Size, TextNode, empty_document
from pagedoc.models.nodes import NodeOwner
from pagedoc.utils.id_manager import IDManager

A4_PT100 = Size(59500, 84200)


def pytest_configure(config):
    """Configure pytest with custom settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


def pytest_collection_modifyitems(config, items):
    """Add the unit marker to every test not marked otherwise."""
    for item in items:
        if "integration" not in item.keywords and "unit" not in item.keywords:
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid handler leakage between tests."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()
    package_logger = logging.getLogger("pagedoc")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def ids():
    """Deterministic id factory: page-1, page-2, preset-1 ..."""
    return IDManager(sequential=True)


@pytest.fixture
def empty_doc() -> Document:
    return empty_document(doc_id="doc-test", name="Test")


@pytest.fixture
def one_page_doc(empty_doc, ids) -> Document:
    """A4 preset ``preset-1`` (10 pt margins, default header/footer) with page ``page-1``."""
    draft = DocumentDraft(empty_doc)
    add_page_preset(draft, "A4", A4_PT100, Margin.uniform(1000), preset_id="preset-1")
    ensure_header_footer(draft, "preset-1")
    ensure_first_page(draft, "preset-1", id_factory=ids)
    return draft.finish()


@pytest.fixture
def two_preset_doc(one_page_doc, ids) -> Document:
    """``one_page_doc`` plus a landscape preset ``preset-2`` without pages."""
    draft = DocumentDraft(one_page_doc)
    add_page_preset(draft, "A4 landscape", A4_PT100.swapped(), Margin.uniform(500), preset_id="preset-2")
    ensure_header_footer(draft, "preset-2")
    return draft.finish()


@pytest.fixture
def make_text():
    """Factory for text nodes; the owner is rewritten when the node is placed."""
    def make(node_id: str, **kwargs) -> TextNode:
        kwargs.setdefault("owner", NodeOwner.page("unplaced"))
        kwargs.setdefault("w", 1000)
        kwargs.setdefault("h", 500)
        return TextNode(id=node_id, **kwargs)
    return make


def run(doc: Document, command, *args, **kwargs):
    """Run a command on a draft of ``doc``; returns ``(next_doc, result)``."""
    draft = DocumentDraft(doc)
    result = command(draft, *args, **kwargs)
    return draft.finish(), result
