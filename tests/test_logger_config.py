"""
Tests for Logging Configuration
"""

import logging

from logger_config import ColoredFormatter, setup_logging


class TestColoredFormatter:
    """Tests for console formatting"""

    def test_does_not_mutate_record(self):
        formatter = ColoredFormatter(fmt="[%(levelname)s] %(message)s")
        record = logging.LogRecord(
            name="test",
            level=logging.WARNING,
            pathname="test.py",
            lineno=1,
            msg="careful",
            args=(),
            exc_info=None,
        )

        output = formatter.format(record)

        assert "\033[33m" in output
        assert "careful" in output
        assert record.levelname == "WARNING"


class TestSetupLogging:
    """Tests for handler setup"""

    def test_console_only(self):
        logger = setup_logging(name="test_console_only", level="DEBUG", log_to_file=False)

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_file_handlers(self, tmp_path):
        logger = setup_logging(
            name="test_file_handlers",
            log_to_file=True,
            log_to_console=False,
            log_dir=tmp_path / "logs",
        )
        logger.error("disk full")
        for handler in logger.handlers:
            handler.flush()

        assert (tmp_path / "logs" / "test_file_handlers.log").exists()
        errors_log = tmp_path / "logs" / "test_file_handlers_errors.log"
        assert "disk full" in errors_log.read_text(encoding="utf-8")

        for handler in logger.handlers:
            handler.close()
        logger.handlers = []

    def test_unknown_level_falls_back_to_info(self):
        logger = setup_logging(name="test_bad_level", level="LOUD", log_to_file=False)

        assert logger.level == logging.INFO

    def test_repeat_setup_replaces_handlers(self):
        setup_logging(name="test_repeat", log_to_file=False)
        logger = setup_logging(name="test_repeat", log_to_file=False)

        assert len(logger.handlers) == 1
