"""Duration arithmetic and time formatting.

Informational only: nothing here feeds back into the running engine.
"""

from __future__ import annotations

from .config import WorkoutConfig
from .engine import Phase, WorkoutState


def total_seconds(config: WorkoutConfig) -> int:
    """Total workout length shown in the summary card."""
    return config.circuits * (
        config.rounds * (config.work_seconds + config.rest_seconds)
        + (config.rounds - 1) * config.between_circuits_rest_seconds
    )


def format_total(seconds: int) -> str:
    """``450`` → ``"7:30"`` (minutes unpadded, seconds zero-padded)."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes}:{secs:02d}"


def format_clock(seconds: int) -> str:
    """``65`` → ``"01:05"`` for the big countdown display."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


def phase_duration(phase: Phase, config: WorkoutConfig) -> int:
    if phase == Phase.WORK:
        return config.work_seconds
    if phase == Phase.REST:
        return config.rest_seconds
    return config.between_circuits_rest_seconds


def phase_progress(state: WorkoutState, config: WorkoutConfig) -> float:
    """0.0 → 1.0 progress through the current phase."""
    if state.complete:
        return 1.0
    total = phase_duration(state.phase, config)
    if total <= 0:
        return 1.0
    elapsed = total - state.remaining
    return max(0.0, min(1.0, elapsed / total))
