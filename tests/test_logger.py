"""
Tests for logging configuration helpers.
"""

import logging
from io import StringIO
from logging.handlers import RotatingFileHandler

import pytest
from rich.console import Console
from rich.logging import RichHandler

from xls_interpreter.utils.logger import (
    PACKAGE_LOGGER,
    LogWriter,
    add_file_handler,
    configure_logging,
    get_logger,
    set_log_level,
)


class TestConfigureLogging:
    """Test cases for configure_logging."""

    def test_rich_handler(self):
        console = Console(file=StringIO(), width=120)
        logger = configure_logging("DEBUG", console=console)

        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)

        logging.getLogger("xls_interpreter.engine").info("laid out 3 rows")
        assert "laid out 3 rows" in console.file.getvalue()

    def test_plain_handler(self):
        logger = configure_logging("WARNING", use_rich=False)
        assert type(logger.handlers[0]) is logging.StreamHandler
        assert logger.handlers[0].level == logging.WARNING

    def test_reconfiguring_replaces_handlers(self):
        configure_logging("INFO", use_rich=False)
        logger = configure_logging("ERROR", use_rich=False)
        assert len(logger.handlers) == 1
        assert logger.level == logging.ERROR

    def test_log_file(self, temp_dir):
        log_file = temp_dir / "logs" / "run.log"
        logger = configure_logging("INFO", log_file=str(log_file), use_rich=False)

        assert any(isinstance(handler, RotatingFileHandler) for handler in logger.handlers)
        logging.getLogger("xls_interpreter.api").info("converted book.xls")
        for handler in logger.handlers:
            handler.flush()
        assert "converted book.xls" in log_file.read_text()

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            configure_logging("LOUD")

    def test_set_log_level(self):
        logger = configure_logging("INFO", use_rich=False)
        set_log_level("debug")
        assert logger.level == logging.DEBUG
        assert all(handler.level == logging.DEBUG for handler in logger.handlers)


class TestHelpers:
    """Test cases for get_logger, add_file_handler and LogWriter."""

    def test_get_logger(self):
        assert get_logger("xls_interpreter.parser").name == "xls_interpreter.parser"
        with pytest.raises(ValueError):
            get_logger("")

    def test_add_file_handler_validates(self):
        with pytest.raises(ValueError):
            add_file_handler("not a logger", "x.log")
        with pytest.raises(ValueError):
            add_file_handler(logging.getLogger("x"), "")

    def test_log_writer_forwards_lines(self, caplog):
        writer = LogWriter(logging.getLogger("xls_interpreter.parser.xls_reader"), level=logging.WARNING)
        with caplog.at_level(logging.WARNING):
            written = writer.write("WARNING *** first\n\nsecond  \n")
            writer.flush()

        assert written == len("WARNING *** first\n\nsecond  \n")
        assert [record.getMessage() for record in caplog.records] == ["WARNING *** first", "second"]
