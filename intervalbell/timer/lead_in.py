"""Pre-start lead-in countdown (3, 2, 1, go).

Independent of ``WorkoutState``: the driver holds a ``LeadInState`` while in
``DriverMode.LEAD_IN`` and discards it once ``done`` is reached.
"""

from __future__ import annotations

from dataclasses import dataclass

LEAD_IN_SECONDS = 3


@dataclass(frozen=True)
class LeadInState:
    count: int

    @property
    def done(self) -> bool:
        return self.count <= 0


def start_lead_in(seconds: int = LEAD_IN_SECONDS) -> LeadInState:
    if seconds < 1:
        raise ValueError(f"lead-in must be at least 1 second, got {seconds}")
    return LeadInState(seconds)


def tick(state: LeadInState) -> LeadInState:
    """Count down by one.  From 1 (or below) the lead-in is done."""
    if state.count <= 1:
        return LeadInState(0)
    return LeadInState(state.count - 1)
