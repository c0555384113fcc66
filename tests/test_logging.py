"""Tests for setup_logging."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from npm_uninstall_unused.core.logging import setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("npm_uninstall_unused").setLevel(logging.NOTSET)
    structlog.reset_defaults()


class TestSetupLogging:
    def test_default_level_is_warning(self):
        setup_logging()
        assert logging.getLogger("npm_uninstall_unused").level == logging.WARNING

    def test_verbose(self):
        setup_logging(verbose=True)
        assert logging.getLogger("npm_uninstall_unused").level == logging.DEBUG

    def test_env_level_wins(self, monkeypatch):
        monkeypatch.setenv("NPM_UNINSTALL_UNUSED_LOG_LEVEL", "info")
        setup_logging(verbose=True)
        assert logging.getLogger("npm_uninstall_unused").level == logging.INFO

    def test_json_output(self, monkeypatch, capsys):
        monkeypatch.setenv("NPM_UNINSTALL_UNUSED_LOG_FORMAT", "json")
        setup_logging()
        structlog.get_logger("npm_uninstall_unused.test").warning("locator.skip_unreadable", path="x")
        err = capsys.readouterr().err
        assert '"event": "locator.skip_unreadable"' in err
        assert '"path": "x"' in err

    def test_json_record_keys(self, monkeypatch, capsys):
        monkeypatch.setenv("NPM_UNINSTALL_UNUSED_LOG_FORMAT", "json")
        setup_logging()
        structlog.get_logger("npm_uninstall_unused.test").warning("sweep.done", workspaces=2)
        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert set(record) == {"event", "level", "timestamp", "workspaces"}
