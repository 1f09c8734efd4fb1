"""Scheduling driver: the one-second clock behind a workout.

Modes
-----
IDLE      Nothing scheduled.  Shows the reset state.
LEAD_IN   3-2-1 countdown before the first Work phase.
ACTIVE    Phase engine running (or paused).

Transitions
-----------
IDLE → LEAD_IN               (start)
LEAD_IN → ACTIVE             (lead-in done)
ACTIVE → IDLE                (workout complete)
Any → IDLE                   (reset / configuration change / shutdown)
ACTIVE ⇄ ACTIVE paused       (pause / resume; no ticks while paused)

The repeating timer is held in a ``TickHandle``.  Exactly one handle exists
while ticks are expected, and it is cancelled on every exit path: pause,
reset, completion, config change and shutdown.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from . import engine as phase_engine
from . import lead_in
from .config import WorkoutConfig
from .cues import CueDispatcher, CueRule
from .duration import format_clock, phase_progress, total_seconds
from .engine import Cue, Phase, WorkoutState

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


# ── enums & snapshots ─────────────────────────────────────────────────────


class DriverMode(Enum):
    IDLE = "idle"
    LEAD_IN = "lead_in"
    ACTIVE = "active"


@dataclass(frozen=True)
class DisplaySnapshot:
    """Everything the display layer needs for one frame."""

    remaining: int
    phase: Phase
    round: int
    rounds: int
    circuit: int
    circuits: int
    progress: float
    exercise: str | None = None
    complete: bool = False

    @property
    def clock(self) -> str:
        return format_clock(self.remaining)


# ── timer handle ──────────────────────────────────────────────────────────


class TickHandle:
    """Owned handle for one repeating one-second ``QTimer``.

    Created by ``WorkoutDriver._schedule`` and consumed by
    ``WorkoutDriver._cancel_schedule``.  A cancelled handle never fires again.
    """

    def __init__(
        self,
        parent: QObject,
        callback: Callable[[], None],
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        self._timer: QTimer | None = QTimer(parent)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(callback)
        self._timer.start()

    @property
    def active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.timeout.disconnect()
        self._timer.deleteLater()
        self._timer = None


# ── driver ────────────────────────────────────────────────────────────────


class WorkoutDriver(QObject):
    """Qt-side owner of the workout: lead-in, engine ticks and cue requests.

    Signals
    -------
    tick(snapshot: DisplaySnapshot)
        Emitted after every engine tick and on every reset/start.
    lead_in_tick(count: int)
        Emitted on lead-in start and on each lead-in decrement.
    cue(cue: Cue)
        A cue the audio sink should play.
    mode_changed(mode: DriverMode)
        Emitted on every mode transition.
    paused_changed(paused: bool)
        Emitted when an active run is paused or resumed.
    workout_completed(data: dict)
        Emitted once per run when the last Work phase ends.  Keys:
        ``total_seconds``, ``rounds``, ``circuits``, ``work_seconds``,
        ``rest_seconds``, ``between_circuits_rest_seconds``,
        ``started_at``, ``finished_at``.
    start_refused(message: str)
        Emitted when ``start`` is rejected; state is left untouched.
    config_changed(config: WorkoutConfig)
        Emitted after ``set_config`` applies a new configuration.
    """

    tick = pyqtSignal(object)
    lead_in_tick = pyqtSignal(int)
    cue = pyqtSignal(object)
    mode_changed = pyqtSignal(object)
    paused_changed = pyqtSignal(bool)
    workout_completed = pyqtSignal(object)
    start_refused = pyqtSignal(str)
    config_changed = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        config: WorkoutConfig | None = None,
        cue_rule: CueRule | None = None,
        lead_in_seconds: int = lead_in.LEAD_IN_SECONDS,
    ) -> None:
        super().__init__(parent)

        # ── configuration ─────────────────────────────────────────────
        self._config: WorkoutConfig = config or WorkoutConfig()
        self._lead_in_seconds: int = lead_in_seconds
        self._dispatcher = CueDispatcher(cue_rule)

        # ── run state ─────────────────────────────────────────────────
        self._mode: DriverMode = DriverMode.IDLE
        self._state: WorkoutState = phase_engine.reset_state(self._config)
        self._lead_in: lead_in.LeadInState | None = None
        self._started_at: datetime | None = None

        # ── scheduling ────────────────────────────────────────────────
        self._handle: TickHandle | None = None

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def mode(self) -> DriverMode:
        return self._mode

    @property
    def state(self) -> WorkoutState:
        return self._state

    @property
    def config(self) -> WorkoutConfig:
        return self._config

    @property
    def cue_rule(self) -> CueRule:
        return self._dispatcher.rule

    @property
    def lead_in_count(self) -> int | None:
        """Current lead-in number, or None outside ``LEAD_IN``."""
        return self._lead_in.count if self._lead_in is not None else None

    @property
    def is_paused(self) -> bool:
        return self._mode == DriverMode.ACTIVE and self._state.paused

    @property
    def is_scheduled(self) -> bool:
        """True while a tick timer is live."""
        return self._handle is not None and self._handle.active

    @property
    def total_seconds(self) -> int:
        return total_seconds(self._config)

    def snapshot(self) -> DisplaySnapshot:
        s = self._state
        exercise = None
        if s.phase != Phase.BETWEEN_CIRCUITS_REST:
            exercise = self._config.exercise_for_round(s.round)
        return DisplaySnapshot(
            remaining=s.remaining,
            phase=s.phase,
            round=s.round,
            rounds=self._config.rounds,
            circuit=s.circuit,
            circuits=self._config.circuits,
            progress=phase_progress(s, self._config),
            exercise=exercise,
            complete=s.complete,
        )

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> bool:
        """Begin the lead-in.  Only valid from IDLE.

        Returns False (and emits ``start_refused``) when the configuration
        requires named exercises but none are set.
        """
        if self._mode != DriverMode.IDLE:
            return False
        if self._config.missing_exercises:
            message = "Add at least one exercise before starting."
            logger.info("start refused: %s", message)
            self.start_refused.emit(message)
            return False

        self._state = phase_engine.reset_state(self._config)
        self._dispatcher.reset()
        self._lead_in = lead_in.start_lead_in(self._lead_in_seconds)
        self._started_at = datetime.now()
        self._set_mode(DriverMode.LEAD_IN)
        self.lead_in_tick.emit(self._lead_in.count)
        self.cue.emit(Cue.COUNTDOWN_BEEP)
        self._schedule()
        return True

    def pause(self) -> None:
        """Freeze an active run.  Ignored during the lead-in."""
        if self._mode != DriverMode.ACTIVE or not self._state.is_ticking:
            return
        self._cancel_schedule()
        self._state = phase_engine.pause(self._state)
        logger.info("paused at %ss (%s)", self._state.remaining, self._state.phase.value)
        self.paused_changed.emit(True)

    def resume(self) -> None:
        if not self.is_paused:
            return
        self._state = phase_engine.resume(self._state)
        logger.info("resumed at %ss (%s)", self._state.remaining, self._state.phase.value)
        self.paused_changed.emit(False)
        self._schedule()

    def toggle_pause(self) -> None:
        if self.is_paused:
            self.resume()
        else:
            self.pause()

    def reset(self) -> None:
        """Return to IDLE from any mode, discarding lead-in and run state."""
        self._cancel_schedule()
        was_paused = self.is_paused
        self._lead_in = None
        self._started_at = None
        self._dispatcher.reset()
        self._state = phase_engine.reset_state(self._config)
        if was_paused:
            self.paused_changed.emit(False)
        self._set_mode(DriverMode.IDLE)
        self.tick.emit(self.snapshot())

    def set_config(self, config: WorkoutConfig) -> None:
        """Apply a new configuration.  Always forces a reset."""
        self._config = config
        logger.info(
            "config: work=%s rest=%s rounds=%s circuits=%s between=%s",
            config.work_seconds, config.rest_seconds, config.rounds,
            config.circuits, config.between_circuits_rest_seconds,
        )
        self.reset()
        self.config_changed.emit(config)

    def set_cue_rule(self, rule: CueRule) -> None:
        self._dispatcher.rule = rule

    def shutdown(self) -> None:
        """Cancel any pending tick.  Call when the owning window closes."""
        self._cancel_schedule()
        self._lead_in = None
        if self._mode != DriverMode.IDLE:
            self._set_mode(DriverMode.IDLE)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: scheduling
    # ══════════════════════════════════════════════════════════════════

    def _schedule(self) -> TickHandle:
        self._cancel_schedule()
        self._handle = TickHandle(self, self._on_tick)
        return self._handle

    def _cancel_schedule(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _on_tick(self) -> None:
        if self._mode == DriverMode.LEAD_IN:
            self._tick_lead_in()
        elif self._mode == DriverMode.ACTIVE:
            self._tick_engine()

    def _tick_lead_in(self) -> None:
        if self._lead_in is None:
            return
        self._lead_in = lead_in.tick(self._lead_in)
        if not self._lead_in.done:
            self.lead_in_tick.emit(self._lead_in.count)
            self.cue.emit(Cue.COUNTDOWN_BEEP)
            return

        # hand off to the phase engine with a fresh handle
        self._lead_in = None
        self._cancel_schedule()
        self._state = phase_engine.start_state(self._config)
        self._set_mode(DriverMode.ACTIVE)
        self._emit_cues(self._dispatcher.on_start())
        self.tick.emit(self.snapshot())
        self._schedule()

    def _tick_engine(self) -> None:
        if not self._state.is_ticking:
            return
        result = phase_engine.advance_one_second(self._state, self._config)
        self._state = result.state
        logger.debug(
            "tick %s %ss round=%s circuit=%s",
            self._state.phase.value, self._state.remaining,
            self._state.round, self._state.circuit,
        )

        if result.event is not None:
            self._emit_cues(self._dispatcher.on_event(result.event))
        else:
            self._emit_cues(self._dispatcher.on_tick(self._state))

        self.tick.emit(self.snapshot())

        if self._state.complete:
            self._finish_workout()

    def _finish_workout(self) -> None:
        self._cancel_schedule()
        finished_at = datetime.now()
        data = {
            "total_seconds": total_seconds(self._config),
            "rounds": self._config.rounds,
            "circuits": self._config.circuits,
            "work_seconds": self._config.work_seconds,
            "rest_seconds": self._config.rest_seconds,
            "between_circuits_rest_seconds": self._config.between_circuits_rest_seconds,
            "started_at": self._started_at,
            "finished_at": finished_at,
        }
        logger.info("workout complete after %s circuit(s)", self._config.circuits)
        self._started_at = None
        self._set_mode(DriverMode.IDLE)
        self.workout_completed.emit(data)

    def _emit_cues(self, cues: list[Cue]) -> None:
        for c in cues:
            self.cue.emit(c)

    def _set_mode(self, new_mode: DriverMode) -> None:
        if new_mode != self._mode:
            logger.info("mode %s → %s", self._mode.value, new_mode.value)
        self._mode = new_mode
        self.mode_changed.emit(new_mode)
