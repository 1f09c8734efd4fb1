"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/IntervalBell/settings.json

Usage::

    settings = load_settings()
    settings.rounds = 10
    save_settings(settings)
    driver.set_config(settings.to_config())
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, field, fields
from pathlib import Path

from .timer.config import (
    BOUNDS,
    DEFAULT_BETWEEN_CIRCUITS_REST_SECONDS,
    DEFAULT_CIRCUITS,
    DEFAULT_REST_SECONDS,
    DEFAULT_ROUNDS,
    DEFAULT_WORK_SECONDS,
    WorkoutConfig,
    clamp,
)
from .timer.cues import CueRule

logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "IntervalBell"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── workout ───────────────────────────────────────────────────────
    work_seconds: int = DEFAULT_WORK_SECONDS
    rest_seconds: int = DEFAULT_REST_SECONDS
    rounds: int = DEFAULT_ROUNDS
    circuits: int = DEFAULT_CIRCUITS
    between_circuits_rest_seconds: int = DEFAULT_BETWEEN_CIRCUITS_REST_SECONDS
    exercises: list[str] = field(default_factory=list)
    require_exercises: bool = False

    # ── cues ──────────────────────────────────────────────────────────
    cue_before_work: bool = False
    cue_before_rest: bool = False
    cue_only_start: bool = False
    cue_all_transitions: bool = True

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── window ────────────────────────────────────────────────────────
    window_width: int = 900
    window_height: int = 640

    def sanitize(self) -> None:
        """Clamp workout fields into their allowed ranges in place."""
        for name in BOUNDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                value = getattr(Settings, name)
            setattr(self, name, clamp(name, value))
        self.sound_volume = max(0, min(100, int(self.sound_volume)))
        self.exercises = [str(e).strip() for e in self.exercises if str(e).strip()]

    def to_config(self) -> WorkoutConfig:
        """Build a validated ``WorkoutConfig``.  Raises ``ConfigError``."""
        return WorkoutConfig(
            work_seconds=self.work_seconds,
            rest_seconds=self.rest_seconds,
            rounds=self.rounds,
            circuits=self.circuits,
            between_circuits_rest_seconds=self.between_circuits_rest_seconds,
            exercises=tuple(self.exercises),
            require_exercises=self.require_exercises,
        )

    def to_cue_rule(self) -> CueRule:
        return CueRule(
            before_work=self.cue_before_work,
            before_rest=self.cue_before_rest,
            only_start=self.cue_only_start,
            all_transitions=self.cue_all_transitions,
        )


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        settings = Settings(**filtered)
        settings.sanitize()
        return settings
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("ignoring unreadable settings at %s: %s", SETTINGS_PATH, exc)
        return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
