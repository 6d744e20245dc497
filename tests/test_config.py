"""
Tests for configuration objects, id generation and logging setup.
"""

import logging

import pytest
from rich.logging import RichHandler

from pagedoc.config import DEFAULT_CONFIG, EditorConfig, HeaderFooterConstraints
from pagedoc.models import Margin
from pagedoc.utils.enums import DocumentUnit, Orientation
from pagedoc.utils.id_manager import IDManager, create_id
from pagedoc.utils.logger import configure_logging, get_logger, set_log_level
from pagedoc.utils.paper_sizes import PAPER_SIZES, paper_size_pt


class TestEditorConfig:
    """Test cases for EditorConfig."""

    def test_defaults(self):
        assert DEFAULT_CONFIG.default_margin == Margin(10, 10, 10, 10)
        assert DEFAULT_CONFIG.constraints == HeaderFooterConstraints()
        assert DEFAULT_CONFIG.constraints.min_body == 120

    def test_from_dict(self):
        config = EditorConfig.from_dict({
            "default_margin": {"top": 5, "left": 7},
            "constraints": {"header_max_pct": 0.5, "unknown": 1},
            "default_unit": "px",
            "default_header_height": 60,
            "ignored": True,
        })
        assert config.default_margin == Margin(5, 0, 0, 7)
        assert config.constraints.header_max_pct == 0.5
        assert config.constraints.footer_max_pct == 0.20
        assert config.default_unit == DocumentUnit.PX
        assert config.default_header_height == 60
        assert config.default_footer_height == 80

    def test_constraint_lookup(self):
        constraints = HeaderFooterConstraints(header_min=3, footer_min=4)
        assert (constraints.max_pct("header"), constraints.max_pct("footer")) == (0.25, 0.20)
        assert (constraints.kind_min("header"), constraints.kind_min("footer")) == (3, 4)


class TestIds:
    """Test cases for id generation."""

    def test_create_id(self):
        first, second = create_id("page"), create_id("page")
        assert first.startswith("page-") and len(first) == len("page-") + 12
        assert first != second
        with pytest.raises(ValueError):
            create_id("")

    def test_sequential_manager_skips_known_ids(self):
        ids = IDManager(sequential=True, existing={"page-1"})
        assert ids("page") == "page-2"
        assert ids("page") == "page-3"
        assert ids("node") == "node-1"


class TestPaperSizes:
    """Test cases for the paper catalogue."""

    def test_catalogue(self):
        assert PAPER_SIZES["A4"] == (595, 842)
        assert paper_size_pt("letter") == (612, 792)
        assert paper_size_pt("A4", Orientation.LANDSCAPE) == (842, 595)
        assert paper_size_pt("B12") == (595, 842)


class TestLogging:
    """Test cases for logging configuration."""

    def test_rich_handler(self):
        logger = configure_logging("DEBUG")
        assert logger.name == "pagedoc"
        assert logger.level == logging.DEBUG
        assert isinstance(logger.handlers[0], RichHandler)

    def test_plain_handler_and_file(self, tmp_path):
        log_file = tmp_path / "logs" / "pagedoc.log"
        logger = configure_logging("info", use_rich=False, log_file=str(log_file))
        assert len(logger.handlers) == 2
        get_logger("pagedoc.test").info("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text()
        for handler in logger.handlers:
            handler.close()

    def test_set_log_level(self):
        logger = configure_logging("WARNING")
        set_log_level("ERROR")
        assert logger.level == logging.ERROR
        assert all(h.level == logging.ERROR for h in logger.handlers)

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            configure_logging("LOUD")
        with pytest.raises(ValueError):
            get_logger("")
