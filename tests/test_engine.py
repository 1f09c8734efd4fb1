"""Tests for the pure phase engine and lead-in.

Covers: boundary crossing rules, round/circuit counters, completion,
pause/resume on the state, reset, copy-on-write semantics and the lead-in
countdown.
"""

import pytest
from dataclasses import replace

from intervalbell.timer.config import WorkoutConfig
from intervalbell.timer.engine import (
    Cue, Phase, WorkoutState,
    advance_one_second, pause, reset_state, resume, start_state,
)
from intervalbell.timer import lead_in


def _run(state: WorkoutState, config: WorkoutConfig, limit: int = 10_000):
    """Tick until complete, returning (states, events)."""
    states, events = [], []
    for _ in range(limit):
        result = advance_one_second(state, config)
        state = result.state
        states.append(state)
        if result.event is not None:
            events.append(result.event)
        if state.complete:
            break
    return states, events


# ═══════════════════════════════════════════════════════════════════════════
#  CONSTRUCTORS
# ═══════════════════════════════════════════════════════════════════════════


class TestInitialStates:

    def test_reset_state(self, config):
        s = reset_state(config)
        assert s.phase == Phase.WORK
        assert s.remaining == config.work_seconds
        assert s.round == 0
        assert s.circuit == 1
        assert s.running is False
        assert s.paused is False
        assert s.complete is False

    def test_start_state(self, config):
        s = start_state(config)
        assert s.phase == Phase.WORK
        assert s.remaining == config.work_seconds
        assert s.round == 1
        assert s.running is True

    def test_reset_from_any_state_matches(self, config):
        weird = WorkoutState(
            phase=Phase.BETWEEN_CIRCUITS_REST, remaining=2, round=3,
            circuit=2, running=True, paused=True,
        )
        assert reset_state(config) == reset_state(config)
        assert reset_state(config) != weird


# ═══════════════════════════════════════════════════════════════════════════
#  SINGLE TICKS
# ═══════════════════════════════════════════════════════════════════════════


class TestSingleTick:

    def test_plain_decrement(self, config):
        s = start_state(config)
        result = advance_one_second(s, config)
        assert result.state.remaining == config.work_seconds - 1
        assert result.state.phase == Phase.WORK
        assert result.event is None

    def test_zero_is_still_in_phase(self, config):
        s = replace(start_state(config), remaining=1)
        result = advance_one_second(s, config)
        assert result.state.remaining == 0
        assert result.state.phase == Phase.WORK
        assert result.event is None

    def test_work_to_rest(self, config):
        s = replace(start_state(config), remaining=0, round=1)
        result = advance_one_second(s, config)
        assert result.state.phase == Phase.REST
        assert result.state.remaining == config.rest_seconds
        assert result.state.round == 2
        assert result.event.cue == Cue.WHISTLE
        assert result.event.is_work is False

    def test_rest_to_work(self, config):
        s = replace(start_state(config), phase=Phase.REST, remaining=0, round=2)
        result = advance_one_second(s, config)
        assert result.state.phase == Phase.WORK
        assert result.state.remaining == config.work_seconds
        assert result.state.round == 2
        assert result.event.cue == Cue.FIGHT_BELL
        assert result.event.is_work is True

    def test_last_round_to_between_circuits(self, two_circuits):
        cfg = two_circuits
        s = replace(start_state(cfg), remaining=0, round=cfg.rounds, circuit=1)
        result = advance_one_second(s, cfg)
        assert result.state.phase == Phase.BETWEEN_CIRCUITS_REST
        assert result.state.remaining == cfg.between_circuits_rest_seconds
        assert result.state.round == cfg.rounds + 1
        assert result.state.running is True
        assert result.event.cue == Cue.BUZZER

    def test_between_circuits_to_work(self, two_circuits):
        cfg = two_circuits
        s = WorkoutState(
            phase=Phase.BETWEEN_CIRCUITS_REST, remaining=0,
            round=cfg.rounds + 1, circuit=1, running=True,
        )
        result = advance_one_second(s, cfg)
        assert result.state.phase == Phase.WORK
        assert result.state.remaining == cfg.work_seconds
        assert result.state.round == 1
        assert result.state.circuit == 2
        assert result.event.cue == Cue.FIGHT_BELL

    def test_last_round_last_circuit_completes(self, two_circuits):
        cfg = two_circuits
        s = replace(start_state(cfg), remaining=0, round=cfg.rounds, circuit=cfg.circuits)
        result = advance_one_second(s, cfg)
        assert result.state.complete is True
        assert result.state.running is False
        assert result.state.remaining == 0
        assert result.state.round == cfg.rounds
        assert result.event.complete is True
        assert result.event.cue == Cue.CELEBRATION

    def test_input_state_not_mutated(self, config):
        s = replace(start_state(config), remaining=0)
        before = replace(s)
        advance_one_second(s, config)
        assert s == before

    def test_state_is_frozen(self, config):
        s = start_state(config)
        with pytest.raises(Exception):
            s.remaining = 5  # type: ignore[misc]


# ═══════════════════════════════════════════════════════════════════════════
#  NON-TICKING STATES
# ═══════════════════════════════════════════════════════════════════════════


class TestNonTicking:

    def test_idle_state_does_not_advance(self, config):
        s = reset_state(config)
        result = advance_one_second(s, config)
        assert result.state == s
        assert result.event is None

    def test_paused_state_does_not_advance(self, config):
        s = pause(start_state(config))
        result = advance_one_second(s, config)
        assert result.state == s

    def test_complete_is_terminal(self, config):
        states, _ = _run(start_state(config), config)
        done = states[-1]
        assert done.complete
        for _ in range(5):
            result = advance_one_second(done, config)
            assert result.state == done
            assert result.event is None

    def test_pause_and_resume(self, config):
        s = start_state(config)
        p = pause(s)
        assert p.paused is True
        assert p.remaining == s.remaining
        assert resume(p) == s

    def test_pause_ignored_when_not_running(self, config):
        s = reset_state(config)
        assert pause(s) == s

    def test_resume_ignored_when_not_paused(self, config):
        s = start_state(config)
        assert resume(s) == s


# ═══════════════════════════════════════════════════════════════════════════
#  FULL RUNS
# ═══════════════════════════════════════════════════════════════════════════


class TestFullRun:

    def test_single_circuit_sequence(self, config):
        states, events = _run(start_state(config), config)
        observed = [(s.phase, s.remaining) for s in states]
        assert observed == [
            (Phase.WORK, 2), (Phase.WORK, 1), (Phase.WORK, 0),
            (Phase.REST, 2), (Phase.REST, 1), (Phase.REST, 0),
            (Phase.WORK, 3), (Phase.WORK, 2), (Phase.WORK, 1), (Phase.WORK, 0),
            (Phase.WORK, 0),
        ]
        assert [e.cue for e in events] == [Cue.WHISTLE, Cue.FIGHT_BELL, Cue.CELEBRATION]

    def test_single_circuit_never_enters_between_rest(self, config):
        states, _ = _run(start_state(config), config)
        assert all(s.phase != Phase.BETWEEN_CIRCUITS_REST for s in states)

    def test_two_circuits_sequence_of_cues(self, two_circuits):
        _, events = _run(start_state(two_circuits), two_circuits)
        assert [e.cue for e in events] == [
            Cue.WHISTLE, Cue.FIGHT_BELL,       # circuit 1
            Cue.BUZZER, Cue.FIGHT_BELL,        # between circuits
            Cue.WHISTLE, Cue.FIGHT_BELL,       # circuit 2
            Cue.CELEBRATION,
        ]

    def test_two_circuits_tick_count(self, two_circuits):
        states, _ = _run(start_state(two_circuits), two_circuits)
        assert len(states) == 27

    def test_completion_reached_once(self, two_circuits):
        _, events = _run(start_state(two_circuits), two_circuits)
        assert sum(1 for e in events if e.complete) == 1

    def test_remaining_never_negative(self, two_circuits):
        states, _ = _run(start_state(two_circuits), two_circuits)
        assert all(s.remaining >= 0 for s in states)

    def test_round_bounds(self, two_circuits):
        cfg = two_circuits
        states, _ = _run(start_state(cfg), cfg)
        for s in states:
            if s.phase == Phase.BETWEEN_CIRCUITS_REST:
                assert s.round == cfg.rounds + 1
            else:
                assert 0 <= s.round <= cfg.rounds

    def test_circuit_increments_only_after_between_rest(self, two_circuits):
        states, _ = _run(start_state(two_circuits), two_circuits)
        prev = None
        for s in states:
            if prev is not None and s.circuit != prev.circuit:
                assert prev.phase == Phase.BETWEEN_CIRCUITS_REST
                assert s.phase == Phase.WORK
                assert s.circuit == prev.circuit + 1
            prev = s

    def test_paused_run_matches_unpaused_run(self, config):
        """Pausing and resuming never loses or skips a second."""
        plain, _ = _run(start_state(config), config)

        state = start_state(config)
        observed = []
        for i in range(len(plain)):
            if i == 4:
                state = pause(state)
                for _ in range(3):
                    state = advance_one_second(state, config).state
                state = resume(state)
            state = advance_one_second(state, config).state
            observed.append(state)
        assert [s.remaining for s in observed] == [s.remaining for s in plain]
        assert [s.phase for s in observed] == [s.phase for s in plain]


# ═══════════════════════════════════════════════════════════════════════════
#  LEAD-IN
# ═══════════════════════════════════════════════════════════════════════════


class TestLeadIn:

    def test_starts_at_three(self):
        assert lead_in.start_lead_in().count == lead_in.LEAD_IN_SECONDS == 3

    def test_counts_down_then_done(self):
        s = lead_in.start_lead_in()
        counts = [s.count]
        while not s.done:
            s = lead_in.tick(s)
            counts.append(s.count)
        assert counts == [3, 2, 1, 0]

    def test_one_second_lead_in(self):
        s = lead_in.start_lead_in(1)
        assert lead_in.tick(s).done

    def test_rejects_zero(self):
        with pytest.raises(ValueError):
            lead_in.start_lead_in(0)
