"""Shared pytest fixtures for the hylog test suite."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)


@pytest.fixture()
def fixed_now(monkeypatch) -> datetime:
    """Freeze the instant LogEntry captures at construction."""
    monkeypatch.setattr("hylog.entry._now", lambda: FIXED_NOW)
    return FIXED_NOW


@pytest.fixture()
def clean_env(monkeypatch):
    """Remove every HYLOG_* variable so config tests start from defaults."""
    for key in (
        "HYLOG_CONFIG_PATH",
        "HYLOG_FORMAT",
        "HYLOG_LEVEL",
        "HYLOG_TIMESTAMP_FORMAT",
        "HYLOG_SHORTER_LEVEL",
        "HYLOG_LEVEL_UNDER_BRACKETS",
        "HYLOG_ENV",
        "OUTPUT_DIR",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def sample_props() -> dict:
    return {"user": "alice", "attempts": 3, "ratio": 0.5, "admin": False, "token": None}
