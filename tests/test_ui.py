"""Tests for the timer card, summary card and main window."""

import pytest
from PyQt6.QtGui import QCloseEvent

from intervalbell.settings import Settings
from intervalbell.audio.sounds import SoundManager
from intervalbell.timer.config import WorkoutConfig
from intervalbell.timer.driver import DisplaySnapshot, DriverMode
from intervalbell.timer.engine import Phase
from intervalbell.ui.summary_card import SummaryCard
from intervalbell.ui.timer_widget import TimerWidget, round_text

from helpers import SignalCollector, finish_lead_in, run_to_completion, tick


def _snap(**overrides):
    values = dict(
        remaining=5, phase=Phase.WORK, round=1, rounds=8, circuit=1,
        circuits=2, progress=0.0, exercise=None, complete=False,
    )
    values.update(overrides)
    return DisplaySnapshot(**values)


class TestRoundText:

    def test_format(self):
        assert round_text(_snap(round=3, circuit=2)) == "Circuit: 2/2 | Round: 3/8"

    def test_between_circuits_round_is_clamped(self):
        snap = _snap(phase=Phase.BETWEEN_CIRCUITS_REST, round=9)
        assert round_text(snap) == "Circuit: 1/2 | Round: 8/8"

    def test_clock(self):
        assert _snap(remaining=65).clock == "01:05"


# ═══════════════════════════════════════════════════════════════════════════
#  TIMER WIDGET
# ═══════════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestTimerWidget:

    def test_idle_display(self, driver):
        w = TimerWidget(driver)
        assert w.ring.time_text == "00:03"
        assert w.ring.state_label == "READY"
        assert w.start_pause_button.text() == "Start"
        assert w.start_pause_button.isEnabled()
        assert w.lead_in_label.isHidden()

    def test_lead_in_shows_count(self, driver):
        w = TimerWidget(driver)
        w.on_start_pause()
        assert driver.mode == DriverMode.LEAD_IN
        assert not w.lead_in_label.isHidden()
        assert w.ring.isHidden()
        assert w.lead_in_label.text() == "3"
        tick(driver)
        assert w.lead_in_label.text() == "2"

    def test_button_disabled_during_lead_in(self, driver):
        w = TimerWidget(driver)
        w.on_start_pause()
        assert not w.start_pause_button.isEnabled()
        w.on_start_pause()
        assert driver.mode == DriverMode.LEAD_IN
        assert not driver.is_paused

    def test_active_shows_phase(self, driver):
        w = TimerWidget(driver)
        finish_lead_in(driver)
        assert w.lead_in_label.isHidden()
        assert not w.ring.isHidden()
        assert w.ring.state_label == "WORK"
        assert w.ring.round_text == "Circuit: 1/1 | Round: 1/2"
        assert w.start_pause_button.text() == "Pause"

    def test_pause_and_resume_button(self, driver):
        w = TimerWidget(driver)
        finish_lead_in(driver)
        w.on_start_pause()
        assert driver.is_paused
        assert w.start_pause_button.text() == "Resume"
        assert w.ring.state_label == "PAUSED"
        w.on_start_pause()
        assert not driver.is_paused
        assert w.start_pause_button.text() == "Pause"
        assert w.ring.state_label == "WORK"

    def test_rest_label(self, driver):
        w = TimerWidget(driver)
        finish_lead_in(driver)
        tick(driver, 3)
        assert driver.state.phase == Phase.REST
        assert w.ring.state_label == "REST"

    def test_completion(self, driver):
        w = TimerWidget(driver)
        finish_lead_in(driver)
        run_to_completion(driver)
        assert w.ring.state_label == "DONE!"
        assert w.ring.time_text == "00:00"
        assert w.start_pause_button.text() == "Start"

    def test_reset_returns_to_ready(self, driver):
        w = TimerWidget(driver)
        finish_lead_in(driver)
        tick(driver, 2)
        driver.reset()
        assert w.ring.state_label == "READY"
        assert w.ring.time_text == "00:03"
        assert w.start_pause_button.text() == "Start"

    def test_exercise_label(self, qapp):
        from intervalbell.timer.driver import WorkoutDriver
        cfg = WorkoutConfig(work_seconds=2, rest_seconds=1, rounds=2,
                            exercises=("burpees", "squats"))
        d = WorkoutDriver(parent=None, config=cfg)
        try:
            w = TimerWidget(d)
            finish_lead_in(d)
            assert not w._exercise_label.isHidden()
            assert w._exercise_label.text() == "burpees"
        finally:
            d.shutdown()


# ═══════════════════════════════════════════════════════════════════════════
#  SUMMARY CARD
# ═══════════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestSummaryCard:

    def test_default_total(self):
        card = SummaryCard(WorkoutConfig())
        assert card.total_text == "Total Workout Time: 7:30"

    def test_updates_on_config(self):
        card = SummaryCard(WorkoutConfig())
        card.set_config(WorkoutConfig(circuits=2))
        assert card.total_text == "Total Workout Time: 15:00"


# ═══════════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def window(qapp, tmp_path):
    from intervalbell.app import IntervalBellApp
    sounds = SoundManager(parent=None, sounds_dir=tmp_path / "sounds")
    w = IntervalBellApp(Settings(), sound_manager=sounds)
    yield w
    w.driver.shutdown()


class TestMainWindow:

    def test_initial_state(self, window):
        assert window.driver.mode == DriverMode.IDLE
        assert window.driver.config == WorkoutConfig()
        assert window.summary_card.total_text == "Total Workout Time: 7:30"

    def test_panel_change_reconfigures_driver(self, window):
        window.driver.start()
        window.settings_panel._rounds_spin.setValue(4)
        assert window.driver.config.rounds == 4
        assert window.driver.mode == DriverMode.IDLE
        assert window.summary_card.total_text == "Total Workout Time: 3:30"

    def test_cue_rule_follows_panel(self, window):
        window.settings_panel._cue_all_cb.setChecked(False)
        assert window.driver.cue_rule.all_transitions is False

    def test_volume_follows_panel(self, window):
        window.settings_panel._vol_slider.setValue(25)
        assert window._sound_manager.volume == 25

    def test_close_stops_timer(self, window):
        c = SignalCollector()
        window.driver.mode_changed.connect(c)
        window.driver.start()
        assert window.driver.is_scheduled
        window.closeEvent(QCloseEvent())
        assert not window.driver.is_scheduled
        assert window.driver.mode == DriverMode.IDLE
        assert c.last == DriverMode.IDLE
