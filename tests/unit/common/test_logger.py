"""Tests for logging setup."""

import logging
import logging.handlers

import pytest

from projectreview.common.logger import LOGGER_NAME, get_logger, setup_logger
from projectreview.settings import Settings


@pytest.fixture
def logger_name(request):
    name = f"{LOGGER_NAME}.test.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        log_level="INFO",
        log_dir=str(tmp_path / "logs"),
        file_logging=True,
        console_logging=True,
    )


class TestSetupLogger:
    """Tests for setup_logger."""

    def test_defaults_from_settings(self, settings, tmp_path, logger_name):
        """Test handlers, level and log directory come from Settings."""
        logger = setup_logger(logger_name, settings)

        handler_types = {type(h) for h in logger.handlers}
        assert logging.handlers.RotatingFileHandler in handler_types
        assert logging.StreamHandler in handler_types
        assert logger.level == logging.INFO

        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in (tmp_path / "logs" / f"{logger_name}.log").read_text()

    def test_arguments_override_settings(self, settings, tmp_path, logger_name):
        """Test explicit arguments win over Settings."""
        logger = setup_logger(logger_name, settings, level="debug", file_logging=False)

        assert [type(h) for h in logger.handlers] == [logging.StreamHandler]
        assert logger.level == logging.DEBUG
        assert not (tmp_path / "logs").exists()

    def test_no_duplicate_handlers(self, settings, logger_name):
        """Test calling setup twice only updates the level."""
        setup_logger(logger_name, settings, file_logging=False)
        logger = setup_logger(logger_name, settings, file_logging=False, level="ERROR")

        assert len(logger.handlers) == 1
        assert logger.level == logging.ERROR

    def test_invalid_level(self, settings, logger_name):
        """Test unknown levels are rejected."""
        with pytest.raises(ValueError, match="Invalid log level"):
            setup_logger(logger_name, settings, level="VERBOSE")

    def test_http_loggers_quieted(self, settings, logger_name):
        """Test httpx request logging is raised to WARNING outside debug."""
        setup_logger(logger_name, settings, file_logging=False)
        assert logging.getLogger("httpx").level == logging.WARNING


class TestGetLogger:
    """Tests for get_logger."""

    def test_prefixes_short_names(self):
        """Test short names are placed under the package logger."""
        assert get_logger("uploads").name == "projectreview.uploads"

    def test_keeps_qualified_names(self, logger_name):
        """Test names already under the package are returned as-is."""
        assert get_logger(logger_name) is logging.getLogger(logger_name)
