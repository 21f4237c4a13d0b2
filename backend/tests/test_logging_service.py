"""Tests for root logger setup."""

import logging

import pytest

from verto.services import logging_service
from verto.services.config import ConfigService


def tagged_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, "_verto_handler", False)]


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield
    for handler in tagged_handlers():
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)


def test_repeated_setup_does_not_stack_handlers(restore_root_logger):
    logging_service.setup_logging("INFO")
    logging_service.setup_logging("DEBUG")

    assert len(tagged_handlers()) == 1
    assert logging.getLogger().level == logging.DEBUG


def test_file_handler_written_under_logs_dir(restore_root_logger, tmp_path, monkeypatch):
    monkeypatch.setattr(logging_service, "LOGS_BASE_DIR", tmp_path)

    logging_service.setup_logging("INFO", log_file="verto.log")
    logging.getLogger("verto.test").info("hello")
    for handler in tagged_handlers():
        handler.flush()

    assert "hello" in (tmp_path / "verto.log").read_text()


def test_setup_from_config(restore_root_logger):
    config = ConfigService(config_path="/nonexistent.yaml")
    config._config = {"logging": {"level": "WARNING", "format": "%(message)s"}}

    logging_service.setup_logging_from_config(config)

    assert logging.getLogger().level == logging.WARNING
    assert tagged_handlers()[0].formatter._fmt == "%(message)s"
