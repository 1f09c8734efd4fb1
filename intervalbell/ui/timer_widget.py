"""Main timer card: the display sink for ``WorkoutDriver``.

Layout (top → bottom):
    - Card header
    - ProgressRing (clock, phase label, circuit/round)
    - Lead-in number (replaces the ring during the 3-2-1)
    - Current exercise name (only when exercises are configured)
    - Start / Pause / Resume + Reset buttons
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame, QSizePolicy,
)

from ..timer.driver import DisplaySnapshot, DriverMode, WorkoutDriver
from .progress_ring import ProgressRing
from .styles import COMPLETE, IDLE, LEAD_IN, PAUSED, PHASE_LABELS


def round_text(snap: DisplaySnapshot) -> str:
    """``Circuit: 1/2 | Round: 3/8``, with the round clamped for display."""
    shown_round = min(snap.round, snap.rounds)
    return (
        f"Circuit: {snap.circuit}/{snap.circuits} | "
        f"Round: {shown_round}/{snap.rounds}"
    )


class TimerWidget(QWidget):
    """The timer card in the centre of the main window."""

    def __init__(self, driver: WorkoutDriver, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._driver = driver
        self._build_ui()
        self._connect_signals()
        self._refresh_display(driver.snapshot())
        self._update_buttons()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(0, 0, 0, 24)
        layout.setSpacing(0)

        header = QLabel("Tabata Timer", card)
        header.setObjectName("cardHeader")
        layout.addWidget(header)

        layout.addSpacing(12)

        # ── ring / lead-in (same slot) ───────────────────────────────
        ring_row = QHBoxLayout()
        ring_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._ring = ProgressRing(card)
        self._ring.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self._ring.setFixedSize(340, 340)
        ring_row.addWidget(self._ring)

        self._lead_in_label = QLabel("3", card)
        self._lead_in_label.setObjectName("leadInLabel")
        self._lead_in_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._lead_in_label.setFixedSize(340, 340)
        self._lead_in_label.setVisible(False)
        ring_row.addWidget(self._lead_in_label)

        layout.addLayout(ring_row)

        self._exercise_label = QLabel("", card)
        self._exercise_label.setObjectName("exerciseLabel")
        self._exercise_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._exercise_label.setVisible(False)
        layout.addWidget(self._exercise_label)

        layout.addSpacing(16)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")

        self._reset_btn = QPushButton("Reset", card)

        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self.on_start_pause)
        self._reset_btn.clicked.connect(self._driver.reset)

        self._driver.tick.connect(self._refresh_display)
        self._driver.lead_in_tick.connect(self._on_lead_in_tick)
        self._driver.mode_changed.connect(self._on_mode_changed)
        self._driver.paused_changed.connect(self._on_paused_changed)
        self._driver.workout_completed.connect(self._on_completed)

    # ── slots ─────────────────────────────────────────────────────────────

    def on_start_pause(self) -> None:
        """Start from idle, otherwise toggle pause.  Lead-in ignores it."""
        mode = self._driver.mode
        if mode == DriverMode.IDLE:
            self._driver.start()
        elif mode == DriverMode.ACTIVE:
            self._driver.toggle_pause()

    def _on_lead_in_tick(self, count: int) -> None:
        self._lead_in_label.setText(str(count))

    def _on_mode_changed(self, mode: DriverMode) -> None:
        in_lead_in = mode == DriverMode.LEAD_IN
        self._lead_in_label.setVisible(in_lead_in)
        self._ring.setVisible(not in_lead_in)
        if in_lead_in:
            self._ring.apply_state(LEAD_IN)
        self._update_buttons()

    def _on_paused_changed(self, paused: bool) -> None:
        snap = self._driver.snapshot()
        self._ring.apply_state(PAUSED if paused else snap.phase)
        self._ring.set_state_label("PAUSED" if paused else PHASE_LABELS[snap.phase])
        self._update_buttons()

    def _on_completed(self, data: dict) -> None:
        self._ring.apply_state(COMPLETE)
        self._ring.set_state_label("DONE!")
        self._ring.trigger_celebration()

    def _update_buttons(self) -> None:
        mode = self._driver.mode
        btn = self._start_pause_btn
        if mode == DriverMode.ACTIVE and self._driver.is_paused:
            btn.setText("Resume")
            btn.setObjectName("resumeButton")
        elif mode == DriverMode.ACTIVE:
            btn.setText("Pause")
            btn.setObjectName("pauseButton")
        else:
            btn.setText("Start")
            btn.setObjectName("primaryButton")
        btn.setEnabled(mode != DriverMode.LEAD_IN)
        # re-polish so the objectName-based style applies
        btn.style().unpolish(btn)
        btn.style().polish(btn)

    def _refresh_display(self, snap: DisplaySnapshot) -> None:
        self._ring.set_time_text(snap.clock)
        self._ring.set_percent(snap.progress)
        self._ring.set_round_text(round_text(snap))

        if snap.complete:
            return
        if self._driver.mode == DriverMode.IDLE:
            self._ring.apply_state(IDLE)
            self._ring.set_state_label("READY")
        elif not self._driver.is_paused:
            self._ring.apply_state(snap.phase)
            self._ring.set_state_label(PHASE_LABELS[snap.phase])

        self._exercise_label.setVisible(snap.exercise is not None)
        self._exercise_label.setText(snap.exercise or "")

    # ── accessors used by the window and tests ───────────────────────────

    @property
    def ring(self) -> ProgressRing:
        return self._ring

    @property
    def start_pause_button(self) -> QPushButton:
        return self._start_pause_btn

    @property
    def lead_in_label(self) -> QLabel:
        return self._lead_in_label
