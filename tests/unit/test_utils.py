"""Unit tests for filename and logging utilities."""

import logging
from unittest.mock import Mock

import pytest

from glyphpack.exceptions import CleanupError
from glyphpack.utils import PipelineLogger, configure_logging, normalize_filename, safe_stem


class TestNormalizeFilename:
    """Tests for normalize_filename."""

    def test_plain_ascii(self):
        assert normalize_filename("icon.svg") == "icon.svg"

    def test_repairs_latin1_mojibake(self):
        garbled = "图标.svg".encode().decode("latin-1")
        assert normalize_filename(garbled) == "图标.svg"

    def test_keeps_proper_text(self):
        """Test names that are already text are not re-decoded."""
        assert normalize_filename("图标.svg") == "图标.svg"
        assert normalize_filename("café.svg") == "café.svg"

    def test_nfc(self):
        decomposed = "cafe\u0301.svg"
        assert normalize_filename(decomposed) == "caf\u00e9.svg"


class TestSafeStem:
    """Tests for safe_stem."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("demo", "demo"),
            ("My Icons", "My Icons"),
            ("../etc/passwd", "etcpasswd"),
            ("a\\b:c", "abc"),
            ("tab\tname", "tabname"),
            ("  .hidden.  ", "hidden"),
        ],
    )
    def test_cleans(self, name, expected):
        assert safe_stem(name, "fallback") == expected

    @pytest.mark.parametrize("name", ["", "   ", "..", "/"])
    def test_fallback(self, name):
        assert safe_stem(name, "custom-font") == "custom-font"


class TestPipelineLogger:
    """Tests for PipelineLogger statistics."""

    def test_counts(self):
        logger = PipelineLogger(Mock())

        logger.log_upload_accepted("id", "icon.svg", 10)
        logger.log_archive_packaged("scope", 5, 1000)
        logger.log_synthesis_error("scope", ValueError("bad"))
        logger.log_cleanup_error(CleanupError("path", "busy"))

        stats = logger.stats
        assert stats.files_uploaded == 1
        assert stats.fonts_generated == 1
        assert stats.synthesis_failures == 1
        assert stats.cleanup_failures == 1
        assert stats.errors == [("scope", "bad")]

    def test_forwards_to_structlog(self):
        backend = Mock()
        PipelineLogger(backend).log_bulk_cleanup(3, 1)
        backend.info.assert_called_once_with("Bulk cleanup", removed=3, failed=1)


class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.fixture(autouse=True)
    def restore_root_handlers(self):
        root = logging.getLogger()
        handlers = list(root.handlers)
        yield
        for handler in root.handlers[:]:
            if handler not in handlers:
                root.removeHandler(handler)
                handler.close()

    def test_writes_log_file(self, tmp_path):
        log_file = tmp_path / "glyphpack.log"

        configure_logging(log_file=log_file, console_level="WARNING")
        logging.getLogger().handlers[-2].flush()

        assert "Logging initialized" in log_file.read_text(encoding="utf-8")

    def test_quiet_console(self):
        configure_logging(console_level="DEBUG", quiet=True)
        assert logging.getLogger().handlers[-1].level == logging.ERROR
