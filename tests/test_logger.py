"""
Tests for the logging helpers.
"""

import logging

import pytest

from utils import logger as logger_module


@pytest.fixture(autouse=True)
def isolated_registry(monkeypatch):
    monkeypatch.setattr(logger_module, "_loggers", {})
    monkeypatch.setattr(logger_module, "_configured_level", None)


def test_get_logger_is_cached():
    first = logger_module.get_logger("svc.test.cached")
    assert logger_module.get_logger("svc.test.cached") is first
    assert first.level == logging.INFO


def test_set_log_level_updates_existing_loggers():
    existing = logger_module.get_logger("svc.test.existing")
    logger_module.set_log_level("debug")
    assert existing.level == logging.DEBUG


def test_set_log_level_applies_to_later_loggers():
    logger_module.set_log_level("WARNING")
    later = logger_module.get_logger("svc.test.later")
    assert later.level == logging.WARNING


def test_unknown_level():
    with pytest.raises(ValueError, match="Unknown log level"):
        logger_module.set_log_level("VERBOSE")


def test_file_logging(tmp_path):
    path = tmp_path / "service.log"
    handler = logger_module.setup_file_logging(str(path), "INFO")
    try:
        logger_module.get_logger("svc.test.file").info("written to file")
        handler.flush()
    finally:
        logging.getLogger().removeHandler(handler)
        handler.close()

    text = path.read_text()
    assert "svc.test.file - INFO - written to file" in text
