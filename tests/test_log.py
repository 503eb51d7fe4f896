"""Tests for logging configuration."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import pytest

from ticketsheet.log import _normalize_level, configure_logging


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger("ticketsheet")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()


class TestNormalizeLevel:
    def test_name(self) -> None:
        assert _normalize_level("debug") == logging.DEBUG

    def test_number(self) -> None:
        assert _normalize_level(logging.WARNING) == logging.WARNING

    def test_unknown_falls_back_to_info(self) -> None:
        assert _normalize_level("chatty") == logging.INFO


class TestConfigureLogging:
    def test_repeat_calls_do_not_duplicate_handlers(self) -> None:
        configure_logging("INFO")
        logger = configure_logging("DEBUG")
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_log_dir_adds_rotating_file(self, tmp_path) -> None:
        logger = configure_logging("INFO", tmp_path / "logs")
        assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)

        logging.getLogger("ticketsheet.pipeline").info("exported")
        for handler in logger.handlers:
            handler.flush()
        assert "exported" in (tmp_path / "logs" / "ticketsheet.log").read_text()
