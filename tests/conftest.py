"""Shared fixtures: isolated config location and a fresh global logger per test."""

from __future__ import annotations

import pytest

from secexec.core import paths
from secexec.utils import logger as logger_module


class RecordingLogger:
    """Logger facade that keeps every call for assertions."""

    def __init__(self):
        self.calls: list[tuple[str, str, tuple]] = []

    def _record(self, level, msg, meta):
        self.calls.append((level, msg, meta))

    def error(self, msg, *meta):
        self._record("error", msg, meta)

    def warn(self, msg, *meta):
        self._record("warn", msg, meta)

    def info(self, msg, *meta):
        self._record("info", msg, meta)

    def verbose(self, msg, *meta):
        self._record("verbose", msg, meta)

    def debug(self, msg, *meta):
        self._record("debug", msg, meta)

    def messages(self, level: str) -> list[str]:
        return [msg for lvl, msg, _ in self.calls if lvl == level]


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point the user config at a temp dir and reset the global logger."""
    home = tmp_path / "secexec-home"
    monkeypatch.setattr(paths, "SECEXEC_HOME", home)
    monkeypatch.setattr(paths, "USER_CONFIG_FILE", home / "config.toml")
    monkeypatch.delenv("SECEXEC_LOG_LEVEL", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setattr(logger_module, "_active", None)
    return home


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()
