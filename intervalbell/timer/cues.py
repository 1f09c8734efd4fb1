"""Cue rules and the dispatcher that turns phase events into cues.

``should_fire`` decides whether a transition cue rings under the user's
rules.  ``CueDispatcher`` adds the final-stretch beep: during the last three
seconds of a rest phase it requests one ``COUNTDOWN_BEEP`` per phase
instance.  The guard flag is cleared on every boundary crossing, so the beep
never repeats within one rest and never depends on wall-clock timing.

Lead-in beeps and the completion ``CELEBRATION`` are not subject to rules.
"""

from __future__ import annotations

from dataclasses import dataclass

from .engine import Cue, Phase, PhaseEvent, WorkoutState

FINAL_STRETCH_SECONDS = 3


@dataclass(frozen=True)
class CueRule:
    before_work: bool = False
    before_rest: bool = False
    only_start: bool = False
    all_transitions: bool = True


def should_fire(rule: CueRule, *, is_work: bool, is_start: bool) -> bool:
    if rule.all_transitions:
        return True
    if rule.only_start and is_start:
        return True
    if rule.before_work and is_work:
        return True
    if rule.before_rest and not is_work:
        return True
    return False


class CueDispatcher:
    """Maps engine output to the cues the audio sink should play."""

    def __init__(self, rule: CueRule | None = None) -> None:
        self._rule = rule or CueRule()
        self._final_stretch_fired = False

    @property
    def rule(self) -> CueRule:
        return self._rule

    @rule.setter
    def rule(self, value: CueRule) -> None:
        self._rule = value

    def reset(self) -> None:
        self._final_stretch_fired = False

    def on_start(self) -> list[Cue]:
        """First Work phase of a run, entered when the lead-in finishes."""
        self._final_stretch_fired = False
        if should_fire(self._rule, is_work=True, is_start=True):
            return [Cue.FIGHT_BELL]
        return []

    def on_event(self, event: PhaseEvent) -> list[Cue]:
        self._final_stretch_fired = False
        if event.complete:
            return [Cue.CELEBRATION]
        if should_fire(self._rule, is_work=event.is_work, is_start=event.is_start):
            return [event.cue]
        return []

    def on_tick(self, state: WorkoutState) -> list[Cue]:
        """Final-stretch beep for a rest phase about to hand back to Work."""
        if self._final_stretch_fired or state.complete:
            return []
        if state.phase == Phase.WORK:
            return []
        if not 0 < state.remaining <= FINAL_STRETCH_SECONDS:
            return []
        if not should_fire(self._rule, is_work=True, is_start=False):
            return []
        self._final_stretch_fired = True
        return [Cue.COUNTDOWN_BEEP]
