"""Timer package."""

from .config import WorkoutConfig, ConfigError, BOUNDS
from .engine import (
    Phase,
    Cue,
    WorkoutState,
    PhaseEvent,
    TickResult,
    advance_one_second,
    reset_state,
    start_state,
)
from .lead_in import LeadInState, LEAD_IN_SECONDS
from .cues import CueRule, CueDispatcher, should_fire
from .duration import total_seconds, format_total, format_clock, phase_progress
from .driver import WorkoutDriver, DriverMode, DisplaySnapshot, TickHandle

__all__ = [
    "WorkoutConfig",
    "ConfigError",
    "BOUNDS",
    "Phase",
    "Cue",
    "WorkoutState",
    "PhaseEvent",
    "TickResult",
    "advance_one_second",
    "reset_state",
    "start_state",
    "LeadInState",
    "LEAD_IN_SECONDS",
    "CueRule",
    "CueDispatcher",
    "should_fire",
    "total_seconds",
    "format_total",
    "format_clock",
    "phase_progress",
    "WorkoutDriver",
    "DriverMode",
    "DisplaySnapshot",
    "TickHandle",
]
