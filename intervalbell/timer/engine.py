"""Phase engine for IntervalBell.

Phases
------
WORK                    Work interval counting down.
REST                    Rest interval between two work intervals.
BETWEEN_CIRCUITS_REST   Longer rest separating two circuits.

Transitions (resolved on the tick that takes ``remaining`` below zero)
----------------------------------------------------------------------
WORK → REST                       round += 1, round <= rounds     (whistle)
WORK → BETWEEN_CIRCUITS_REST      round > rounds, circuit < circuits (buzzer)
WORK → complete                   round > rounds, circuit >= circuits
REST → WORK                                                        (fight bell)
BETWEEN_CIRCUITS_REST → WORK      round = 1, circuit += 1          (fight bell)

Everything here is pure.  ``advance_one_second`` takes a state and returns a
new one, so the driver can apply it repeatedly without aliasing.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import NamedTuple

from .config import WorkoutConfig


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    WORK = "work"
    REST = "rest"
    BETWEEN_CIRCUITS_REST = "between_circuits_rest"


class Cue(Enum):
    """Symbolic audible cues.  Values double as sound file names."""

    FIGHT_BELL = "fight_bell"
    WHISTLE = "whistle"
    BUZZER = "buzzer"
    COUNTDOWN_BEEP = "countdown"
    CELEBRATION = "celebration"


# ── state ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class WorkoutState:
    """Authoritative workout state.  One instance per tick, never mutated."""

    phase: Phase
    remaining: int
    round: int = 0
    circuit: int = 1
    running: bool = False
    paused: bool = False
    complete: bool = False

    @property
    def is_ticking(self) -> bool:
        """True when the driver should deliver ticks to this state."""
        return self.running and not self.paused and not self.complete


@dataclass(frozen=True)
class PhaseEvent:
    """A phase boundary crossed during one tick."""

    cue: Cue
    phase: Phase | None  # phase entered; None when the run completed
    is_work: bool
    is_start: bool = False
    complete: bool = False


class TickResult(NamedTuple):
    state: WorkoutState
    event: PhaseEvent | None


# ── constructors ──────────────────────────────────────────────────────────


def reset_state(config: WorkoutConfig) -> WorkoutState:
    """Idle state shown before a run and after Reset."""
    return WorkoutState(
        phase=Phase.WORK,
        remaining=config.work_seconds,
        round=0,
        circuit=1,
        running=False,
    )


def start_state(config: WorkoutConfig) -> WorkoutState:
    """State the engine begins in once the lead-in completes."""
    return WorkoutState(
        phase=Phase.WORK,
        remaining=config.work_seconds,
        round=1,
        circuit=1,
        running=True,
    )


def pause(state: WorkoutState) -> WorkoutState:
    if not state.running or state.complete or state.paused:
        return state
    return replace(state, paused=True)


def resume(state: WorkoutState) -> WorkoutState:
    if not state.paused:
        return state
    return replace(state, paused=False)


# ── transition rule ───────────────────────────────────────────────────────


def advance_one_second(state: WorkoutState, config: WorkoutConfig) -> TickResult:
    """Apply one second to *state* and resolve any boundary it crosses."""
    if not state.is_ticking:
        return TickResult(state, None)

    remaining = state.remaining - 1
    if remaining >= 0:
        return TickResult(replace(state, remaining=remaining), None)

    if state.phase == Phase.BETWEEN_CIRCUITS_REST:
        nxt = replace(
            state,
            phase=Phase.WORK,
            remaining=config.work_seconds,
            round=1,
            circuit=state.circuit + 1,
        )
        return TickResult(nxt, PhaseEvent(Cue.FIGHT_BELL, Phase.WORK, is_work=True))

    if state.phase == Phase.WORK:
        round_ = state.round + 1
        if round_ > config.rounds:
            if state.circuit >= config.circuits:
                done = replace(
                    state,
                    remaining=0,
                    round=config.rounds,
                    running=False,
                    complete=True,
                )
                return TickResult(
                    done,
                    PhaseEvent(Cue.CELEBRATION, None, is_work=False, complete=True),
                )
            # round stays at rounds + 1 until the next circuit's first Work
            nxt = replace(
                state,
                phase=Phase.BETWEEN_CIRCUITS_REST,
                remaining=config.between_circuits_rest_seconds,
                round=round_,
            )
            return TickResult(
                nxt,
                PhaseEvent(Cue.BUZZER, Phase.BETWEEN_CIRCUITS_REST, is_work=False),
            )
        nxt = replace(
            state, phase=Phase.REST, remaining=config.rest_seconds, round=round_,
        )
        return TickResult(nxt, PhaseEvent(Cue.WHISTLE, Phase.REST, is_work=False))

    # REST → WORK
    nxt = replace(state, phase=Phase.WORK, remaining=config.work_seconds)
    return TickResult(nxt, PhaseEvent(Cue.FIGHT_BELL, Phase.WORK, is_work=True))
