"""Shared pytest fixtures for IntervalBell tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from intervalbell.timer.config import WorkoutConfig
from intervalbell.timer.cues import CueRule
from intervalbell.timer.driver import WorkoutDriver


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test away from the real ~/Library settings file."""
    monkeypatch.setattr("intervalbell.settings.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr("intervalbell.settings.SETTINGS_PATH", tmp_path / "settings.json")
    monkeypatch.setattr("intervalbell.audio.sounds.SOUNDS_DIR", tmp_path / "sounds")
    yield


@pytest.fixture
def config():
    """Small workout: 3s work, 2s rest, 2 rounds, 1 circuit."""
    return WorkoutConfig(
        work_seconds=3, rest_seconds=2, rounds=2, circuits=1,
        between_circuits_rest_seconds=4,
    )


@pytest.fixture
def two_circuits():
    return WorkoutConfig(
        work_seconds=3, rest_seconds=2, rounds=2, circuits=2,
        between_circuits_rest_seconds=4,
    )


@pytest.fixture
def driver(qapp, config):
    """Fresh WorkoutDriver with the small config and default cue rule."""
    d = WorkoutDriver(parent=None, config=config)
    yield d
    d.shutdown()


@pytest.fixture
def quiet_driver(qapp, config):
    """WorkoutDriver with every cue rule switched off."""
    rule = CueRule(before_work=False, before_rest=False, only_start=False, all_transitions=False)
    d = WorkoutDriver(parent=None, config=config, cue_rule=rule)
    yield d
    d.shutdown()
