"""Timer settings side panel.

Spin boxes for the workout configuration, check boxes for the cue rules and
the sound controls.  Every change is saved to disk immediately; workout
changes are pushed out as a validated ``WorkoutConfig`` (the driver resets on
each one).
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSpinBox, QSlider, QCheckBox, QFrame,
)

from ..settings import Settings, save_settings
from ..timer.config import BOUNDS, ConfigError

logger = logging.getLogger(__name__)


class SettingsPanel(QWidget):
    """Left-hand panel holding every user preference."""

    config_changed = pyqtSignal(object)     # WorkoutConfig
    cue_rule_changed = pyqtSignal(object)   # CueRule
    sound_changed = pyqtSignal()

    def __init__(
        self,
        settings: Settings,
        parent: QWidget | None = None,
        *,
        sound_preview_callback: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(parent)
        self.setMinimumWidth(280)

        self._settings = settings
        self._sound_preview = sound_preview_callback
        self._populating = False

        self._build_ui()
        self._populate()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(0, 0, 0, 16)
        layout.setSpacing(12)

        header = QLabel("Timer Settings", card)
        header.setObjectName("cardHeader")
        layout.addWidget(header)

        # ── workout section ──────────────────────────────────────────
        form = QFormLayout()
        form.setContentsMargins(16, 0, 16, 0)
        form.setVerticalSpacing(10)

        self._circuits_spin = self._spin("circuits")
        form.addRow("Circuits:", self._circuits_spin)

        self._rounds_spin = self._spin("rounds")
        form.addRow("Rounds per circuit:", self._rounds_spin)

        self._work_spin = self._spin("work_seconds", " s")
        form.addRow("Workout time:", self._work_spin)

        self._rest_spin = self._spin("rest_seconds", " s")
        form.addRow("Rest time:", self._rest_spin)

        self._between_spin = self._spin("between_circuits_rest_seconds", " s")
        form.addRow("Between circuits:", self._between_spin)

        layout.addLayout(form)
        layout.addWidget(self._separator())

        # ── cues section ─────────────────────────────────────────────
        cue_box = QVBoxLayout()
        cue_box.setContentsMargins(16, 0, 16, 0)
        cue_box.addWidget(self._section_label("Sound cues"))

        self._cue_all_cb = QCheckBox("On every transition")
        self._cue_start_cb = QCheckBox("Only at the start")
        self._cue_work_cb = QCheckBox("Before each work round")
        self._cue_rest_cb = QCheckBox("Before each rest")
        for cb in (self._cue_all_cb, self._cue_start_cb, self._cue_work_cb, self._cue_rest_cb):
            cb.toggled.connect(self._on_cue_changed)
            cue_box.addWidget(cb)

        layout.addLayout(cue_box)
        layout.addWidget(self._separator())

        # ── sound section ────────────────────────────────────────────
        snd_form = QFormLayout()
        snd_form.setContentsMargins(16, 0, 16, 0)

        self._sound_cb = QCheckBox("Sound effects")
        self._sound_cb.toggled.connect(self._on_sound_changed)
        snd_form.addRow("", self._sound_cb)

        vol_row = QHBoxLayout()
        vol_row.setSpacing(10)
        self._vol_slider = QSlider(Qt.Orientation.Horizontal)
        self._vol_slider.setRange(0, 100)
        self._vol_label = QLabel("70%")
        self._vol_label.setMinimumWidth(36)
        self._vol_slider.valueChanged.connect(self._on_volume_changed)
        self._vol_slider.sliderReleased.connect(self._on_volume_released)
        vol_row.addWidget(self._vol_slider)
        vol_row.addWidget(self._vol_label)

        vol_wrapper = QWidget()
        vol_wrapper.setLayout(vol_row)
        snd_form.addRow("Volume:", vol_wrapper)

        layout.addLayout(snd_form)
        layout.addStretch()

    # ── helpers ──────────────────────────────────────────────────────

    def _spin(self, field_name: str, suffix: str = "") -> QSpinBox:
        low, high = BOUNDS[field_name]
        spin = QSpinBox()
        spin.setRange(low, high)
        spin.setSuffix(suffix)
        spin.valueChanged.connect(self._on_workout_changed)
        return spin

    @staticmethod
    def _section_label(text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setStyleSheet("font-size: 15px; font-weight: 700; background: transparent;")
        return lbl

    @staticmethod
    def _separator() -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFixedHeight(1)
        line.setStyleSheet("background-color: #E8E8E8;")
        return line

    # ══════════════════════════════════════════════════════════════════
    #  POPULATE FROM SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _populate(self) -> None:
        self._populating = True
        s = self._settings
        self._circuits_spin.setValue(s.circuits)
        self._rounds_spin.setValue(s.rounds)
        self._work_spin.setValue(s.work_seconds)
        self._rest_spin.setValue(s.rest_seconds)
        self._between_spin.setValue(s.between_circuits_rest_seconds)
        self._cue_all_cb.setChecked(s.cue_all_transitions)
        self._cue_start_cb.setChecked(s.cue_only_start)
        self._cue_work_cb.setChecked(s.cue_before_work)
        self._cue_rest_cb.setChecked(s.cue_before_rest)
        self._sound_cb.setChecked(s.sound_enabled)
        self._vol_slider.setValue(s.sound_volume)
        self._vol_label.setText(f"{s.sound_volume}%")
        self._populating = False

    # ══════════════════════════════════════════════════════════════════
    #  CHANGE HANDLERS (save immediately)
    # ══════════════════════════════════════════════════════════════════

    def _on_workout_changed(self) -> None:
        if self._populating:
            return
        s = self._settings
        s.circuits = self._circuits_spin.value()
        s.rounds = self._rounds_spin.value()
        s.work_seconds = self._work_spin.value()
        s.rest_seconds = self._rest_spin.value()
        s.between_circuits_rest_seconds = self._between_spin.value()
        try:
            config = s.to_config()
        except ConfigError as exc:
            # spin box ranges mirror BOUNDS, so this only trips on bad JSON
            logger.warning("rejected workout settings: %s", exc)
            return
        self._save()
        self.config_changed.emit(config)

    def _on_cue_changed(self) -> None:
        if self._populating:
            return
        s = self._settings
        s.cue_all_transitions = self._cue_all_cb.isChecked()
        s.cue_only_start = self._cue_start_cb.isChecked()
        s.cue_before_work = self._cue_work_cb.isChecked()
        s.cue_before_rest = self._cue_rest_cb.isChecked()
        self._save()
        self.cue_rule_changed.emit(s.to_cue_rule())

    def _on_sound_changed(self) -> None:
        if self._populating:
            return
        self._settings.sound_enabled = self._sound_cb.isChecked()
        self._save()
        self.sound_changed.emit()

    def _on_volume_changed(self, value: int) -> None:
        self._vol_label.setText(f"{value}%")
        if self._populating:
            return
        self._settings.sound_volume = value
        self._save()
        self.sound_changed.emit()

    def _on_volume_released(self) -> None:
        """Play a click sound when the user releases the volume slider."""
        if self._sound_preview:
            self._sound_preview()

    def _save(self) -> None:
        save_settings(self._settings)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def settings(self) -> Settings:
        return self._settings
