"""Tests for logging_utils.py - log file selection."""

import logging
from pathlib import Path

import pytest

from pinc_provision.logging_utils import FALLBACK_LOG_NAME, configure_logging


@pytest.fixture(autouse=True)
def clean_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in root.handlers[:]:
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    if hasattr(root, "_pinc_log_path"):
        delattr(root, "_pinc_log_path")
    root.setLevel(level)


class TestConfigureLogging:
    def test_uses_requested_path(self, tmp_path):
        log = tmp_path / "logs/pinc.log"
        assert configure_logging(str(log)) == str(log)
        logging.getLogger("pinc_provision.test").info("hello")
        assert "hello" in log.read_text()

    def test_falls_back_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        chosen = configure_logging(str(blocker / "pinc.log"))
        assert Path(chosen).resolve() == (tmp_path / FALLBACK_LOG_NAME).resolve()

    def test_second_call_keeps_handlers(self, tmp_path):
        root = logging.getLogger()
        first = configure_logging(str(tmp_path / "a.log"))
        count = len(root.handlers)
        assert configure_logging(str(tmp_path / "b.log"), level=logging.DEBUG) == first
        assert len(root.handlers) == count
        assert root.level == logging.DEBUG
