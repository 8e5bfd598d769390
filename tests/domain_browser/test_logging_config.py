from __future__ import annotations

import logging

import pytest
from pythonjsonlogger import jsonlogger

from domain_browser.logging_config import configure_logging, resolve_format


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_format_by_default(monkeypatch):
    monkeypatch.delenv("DOMAIN_BROWSER_LOG_FORMAT", raising=False)

    configure_logging()

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, jsonlogger.JsonFormatter)


def test_plain_format_from_env(monkeypatch):
    monkeypatch.setenv("DOMAIN_BROWSER_LOG_FORMAT", "plain")

    configure_logging(level=logging.DEBUG)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert not isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)


def test_force_format_wins_and_replaces_handlers(monkeypatch):
    monkeypatch.setenv("DOMAIN_BROWSER_LOG_FORMAT", "plain")

    configure_logging(force_format="json")
    configure_logging(force_format="json")

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, jsonlogger.JsonFormatter)


def test_resolve_format_treats_unknown_modes_as_json(monkeypatch):
    monkeypatch.delenv("DOMAIN_BROWSER_LOG_FORMAT", raising=False)

    assert resolve_format() == "json"
    assert resolve_format(" Plain ") == "plain"
    assert resolve_format("yaml") == "json"
