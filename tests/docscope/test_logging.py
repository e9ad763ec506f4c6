"""Tests for centralized logging configuration using Loguru."""

import json

import pytest
from loguru import logger

import docscope.logging as logging_module
from docscope.logging import LOG_FORMATS, LOG_LEVELS, configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration around each test."""
    logger.remove()
    logging_module._CURRENT_CONFIG = None
    logging_module._HANDLER_IDS.clear()
    yield
    logger.remove()
    logging_module._CURRENT_CONFIG = None
    logging_module._HANDLER_IDS.clear()


class TestGetLogger:
    """Test get_logger function."""

    def test_get_logger_caches_results(self):
        """Test that get_logger caches logger instances."""
        assert get_logger("test.cache") is get_logger("test.cache")

    def test_get_logger_configures_defaults(self):
        """Getting a logger before configuring installs one handler."""
        get_logger.cache_clear()
        get_logger("test.defaults")
        assert len(logging_module._HANDLER_IDS) == 1


class TestConfigureLogging:
    """Test configure_logging function."""

    @pytest.mark.parametrize("log_format", LOG_FORMATS)
    def test_every_format(self, log_format):
        configure_logging(level="INFO", format=log_format)
        assert len(logger._core.handlers) == 1

    def test_idempotent(self):
        """Test that repeated identical configuration keeps one handler."""
        configure_logging(level="INFO", format="console")
        configure_logging(level="INFO", format="console")
        assert len(logger._core.handlers) == 1

    def test_reconfigure_replaces_handler(self):
        configure_logging(level="INFO", format="console")
        first = list(logging_module._HANDLER_IDS)
        configure_logging(level="DEBUG", format="console")
        assert logging_module._HANDLER_IDS != first
        assert len(logger._core.handlers) == 1

    def test_json_output_goes_to_stderr(self, capsys):
        configure_logging(level="INFO", format="json")
        get_logger("test.json").info("Loaded {count} packages", count=3)

        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip().splitlines()[-1])
        assert record["record"]["message"] == "Loaded 3 packages"

    def test_level_filtering(self, capsys):
        configure_logging(level="ERROR", format="console")
        get_logger("test.level").warning("quiet")
        assert "quiet" not in capsys.readouterr().err

    def test_known_levels(self):
        assert "DEBUG" in LOG_LEVELS
        assert "WARNING" in LOG_LEVELS
