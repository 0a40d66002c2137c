"""Shared pytest fixtures for HIIT Timer tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication  # noqa: E402

from hiittimer.timer.engine import IntervalTimerEngine, IntervalConfig  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test away from the real settings file."""
    monkeypatch.setattr("hiittimer.settings.SETTINGS_PATH", tmp_path / "settings.json")
    monkeypatch.setattr("hiittimer.settings.APP_SUPPORT_DIR", tmp_path)
    yield


@pytest.fixture
def engine(qapp):
    """Fresh engine with the default 30/40 x3 x2 workout."""
    return IntervalTimerEngine(parent=None)


@pytest.fixture
def short_engine(qapp):
    """Shortest legal workout: 10 s work, 5 s rest, 2 rounds, 1 circuit."""
    return IntervalTimerEngine(
        parent=None,
        config=IntervalConfig(work_seconds=10, rest_seconds=5, rounds=2, circuits=1),
    )
