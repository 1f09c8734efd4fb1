"""Workout configuration and its validation boundary.

A ``WorkoutConfig`` is immutable for the lifetime of a run.  Changing any
field produces a new config (``with_changes``) and the driver resets.

Bounds
------
circuits                        1 .. 10
rounds                          1 .. 100
work / rest / between-circuits  1 .. 300 seconds
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace


# ── bounds & defaults ─────────────────────────────────────────────────────

BOUNDS: dict[str, tuple[int, int]] = {
    "work_seconds": (1, 300),
    "rest_seconds": (1, 300),
    "rounds": (1, 100),
    "circuits": (1, 10),
    "between_circuits_rest_seconds": (1, 300),
}

DEFAULT_WORK_SECONDS = 20
DEFAULT_REST_SECONDS = 10
DEFAULT_ROUNDS = 8
DEFAULT_CIRCUITS = 1
DEFAULT_BETWEEN_CIRCUITS_REST_SECONDS = 30


class ConfigError(ValueError):
    """Raised when a configuration field is outside its allowed range."""

    def __init__(self, field_name: str, value: object, message: str) -> None:
        super().__init__(f"{field_name}={value!r}: {message}")
        self.field_name = field_name
        self.value = value


def clamp(field_name: str, value: int) -> int:
    """Pull *value* into the allowed range for *field_name*."""
    low, high = BOUNDS[field_name]
    return max(low, min(high, value))


# ── config ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class WorkoutConfig:
    """Durations and counts for one interval workout.

    ``between_circuits_rest_seconds`` is only used when ``circuits > 1``.
    ``exercises`` optionally names what to do in each round; when
    ``require_exercises`` is set, a run cannot start with an empty list.
    """

    work_seconds: int = DEFAULT_WORK_SECONDS
    rest_seconds: int = DEFAULT_REST_SECONDS
    rounds: int = DEFAULT_ROUNDS
    circuits: int = DEFAULT_CIRCUITS
    between_circuits_rest_seconds: int = DEFAULT_BETWEEN_CIRCUITS_REST_SECONDS
    exercises: tuple[str, ...] = field(default_factory=tuple)
    require_exercises: bool = False

    def __post_init__(self) -> None:
        for name, (low, high) in BOUNDS.items():
            value = getattr(self, name)
            # bool is an int subclass; True is not a duration
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(name, value, "must be an integer")
            if not low <= value <= high:
                raise ConfigError(name, value, f"must be between {low} and {high}")
        if not isinstance(self.exercises, tuple):
            object.__setattr__(self, "exercises", tuple(self.exercises))

    def with_changes(self, **changes: object) -> WorkoutConfig:
        """Return a validated copy with *changes* applied."""
        return replace(self, **changes)

    @property
    def missing_exercises(self) -> bool:
        return self.require_exercises and not self.exercises

    def exercise_for_round(self, round_number: int) -> str | None:
        """Name of the exercise for a 1-based round, cycling the list."""
        if not self.exercises or round_number < 1:
            return None
        return self.exercises[(round_number - 1) % len(self.exercises)]
