"""Workout summary card: total duration plus the interval lengths."""

from __future__ import annotations

from PyQt6.QtWidgets import QFrame, QLabel, QVBoxLayout, QWidget

from ..timer.config import WorkoutConfig
from ..timer.duration import format_total, total_seconds


class SummaryCard(QWidget):
    def __init__(self, config: WorkoutConfig, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(0, 0, 0, 16)
        layout.setSpacing(8)

        header = QLabel("Workout Summary", card)
        header.setObjectName("cardHeader")
        layout.addWidget(header)

        self._total_label = QLabel(card)
        self._total_label.setObjectName("summaryLabel")
        self._total_label.setContentsMargins(16, 0, 16, 0)
        layout.addWidget(self._total_label)

        self._detail_label = QLabel(card)
        self._detail_label.setObjectName("summaryLabel")
        self._detail_label.setContentsMargins(16, 0, 16, 0)
        layout.addWidget(self._detail_label)

        self.set_config(config)

    def set_config(self, config: WorkoutConfig) -> None:
        """Recompute the total.  Called on every configuration change."""
        self._total_label.setText(
            f"Total Workout Time: {format_total(total_seconds(config))}"
        )
        self._detail_label.setText(
            f"Time On: <span style='color:#52c41a'>{config.work_seconds} seconds</span>"
            f" | Time Off: <span style='color:#FC5130'>{config.rest_seconds} seconds</span>"
            f" | Between Circuits: <span style='color:#1890ff'>"
            f"{config.between_circuits_rest_seconds} seconds</span>"
        )

    @property
    def total_text(self) -> str:
        return self._total_label.text()
