"""Main application window for IntervalBell."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QTimer
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QStatusBar, QMessageBox,
)

from .audio.sounds import SoundManager
from .settings import Settings, load_settings, save_settings
from .timer.config import ConfigError, WorkoutConfig
from .timer.driver import DriverMode, WorkoutDriver
from .timer.engine import Cue
from .ui.settings_panel import SettingsPanel
from .ui.styles import build_stylesheet
from .ui.summary_card import SummaryCard
from .ui.timer_widget import TimerWidget

logger = logging.getLogger(__name__)

MODE_MESSAGES: dict[DriverMode, str] = {
    DriverMode.IDLE:    "Ready when you are!",
    DriverMode.LEAD_IN: "Get ready...",
    DriverMode.ACTIVE:  "Go!",
}


class IntervalBellApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        sound_manager: SoundManager | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("IntervalBell")
        self.setMinimumSize(820, 600)

        # ── geometry save timer ───────────────────────────────────────
        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings if settings is not None else load_settings()
        self.resize(self._settings.window_width, self._settings.window_height)

        # ── driver ────────────────────────────────────────────────────
        self._driver = WorkoutDriver(
            self,
            config=self._initial_config(),
            cue_rule=self._settings.to_cue_rule(),
        )

        # ── sound manager ─────────────────────────────────────────────
        self._sound_manager = sound_manager or SoundManager(parent=self)
        self._sound_manager.set_volume(self._settings.sound_volume)
        self._sound_manager.set_enabled(self._settings.sound_enabled)

        self.setStyleSheet(build_stylesheet())

        # ── central widget ────────────────────────────────────────────
        central = QWidget()
        self.setCentralWidget(central)
        root_layout = QHBoxLayout(central)
        root_layout.setContentsMargins(16, 16, 16, 16)
        root_layout.setSpacing(16)

        self._settings_panel = SettingsPanel(
            self._settings,
            central,
            sound_preview_callback=lambda: self._sound_manager.play("click"),
        )
        root_layout.addWidget(self._settings_panel)

        content = QVBoxLayout()
        content.setSpacing(16)
        self._timer_widget = TimerWidget(self._driver, central)
        content.addWidget(self._timer_widget)
        self._summary_card = SummaryCard(self._driver.config, central)
        content.addWidget(self._summary_card)
        root_layout.addLayout(content, stretch=1)

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage(MODE_MESSAGES[DriverMode.IDLE])

        self._build_menu_bar()
        self._connect_signals()

    def _initial_config(self) -> WorkoutConfig:
        try:
            return self._settings.to_config()
        except ConfigError as exc:
            logger.warning("invalid saved workout, using defaults: %s", exc)
            self._settings.sanitize()
            return self._settings.to_config()

    # ══════════════════════════════════════════════════════════════════
    #  MENU BAR
    # ══════════════════════════════════════════════════════════════════

    def _build_menu_bar(self) -> None:
        menu = self.menuBar()
        workout_menu = menu.addMenu("&Workout")

        start_action = QAction("Start / Pause", self)
        start_action.setShortcut(QKeySequence("Space"))
        start_action.triggered.connect(self._timer_widget.on_start_pause)
        workout_menu.addAction(start_action)

        reset_action = QAction("Reset", self)
        reset_action.setShortcut(QKeySequence("Esc"))
        reset_action.triggered.connect(self._driver.reset)
        workout_menu.addAction(reset_action)

        workout_menu.addSeparator()

        quit_action = QAction("Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        workout_menu.addAction(quit_action)

    # ══════════════════════════════════════════════════════════════════
    #  SIGNAL WIRING
    # ══════════════════════════════════════════════════════════════════

    def _connect_signals(self) -> None:
        self._driver.cue.connect(self._on_cue)
        self._driver.mode_changed.connect(self._on_mode_changed)
        self._driver.paused_changed.connect(self._on_paused_changed)
        self._driver.workout_completed.connect(self._on_workout_completed)
        self._driver.start_refused.connect(self._on_start_refused)
        self._driver.config_changed.connect(self._summary_card.set_config)

        self._settings_panel.config_changed.connect(self._driver.set_config)
        self._settings_panel.cue_rule_changed.connect(self._driver.set_cue_rule)
        self._settings_panel.sound_changed.connect(self._apply_sound_settings)

    def _on_cue(self, cue: Cue) -> None:
        self._sound_manager.play_cue(cue)

    def _on_mode_changed(self, mode: DriverMode) -> None:
        self._status_bar.showMessage(MODE_MESSAGES.get(mode, ""))

    def _on_paused_changed(self, paused: bool) -> None:
        self._status_bar.showMessage("Paused" if paused else MODE_MESSAGES[DriverMode.ACTIVE])

    def _on_workout_completed(self, data: dict) -> None:
        # History is not stored; the summary is only logged.
        logger.info(
            "completed %s-second workout (%s rounds x %s circuits)",
            data["total_seconds"], data["rounds"], data["circuits"],
        )
        self._status_bar.showMessage("Workout complete. Great job!")

    def _on_start_refused(self, message: str) -> None:
        QMessageBox.information(self, "Can't start yet", message)

    def _apply_sound_settings(self) -> None:
        self._sound_manager.set_volume(self._settings.sound_volume)
        self._sound_manager.set_enabled(self._settings.sound_enabled)

    # ══════════════════════════════════════════════════════════════════
    #  GEOMETRY
    # ══════════════════════════════════════════════════════════════════

    def _save_geometry(self) -> None:
        self._settings.window_width = self.width()
        self._settings.window_height = self.height()
        save_settings(self._settings)

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """Stop the tick timer before the window goes away."""
        self._driver.shutdown()
        self._geometry_save_timer.stop()
        self._save_geometry()
        event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._geometry_save_timer.start()

    # ── accessors used by tests ──────────────────────────────────────────

    @property
    def driver(self) -> WorkoutDriver:
        return self._driver

    @property
    def summary_card(self) -> SummaryCard:
        return self._summary_card

    @property
    def settings_panel(self) -> SettingsPanel:
        return self._settings_panel
