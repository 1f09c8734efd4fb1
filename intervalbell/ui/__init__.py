"""UI package."""

from .timer_widget import TimerWidget
from .progress_ring import ProgressRing
from .settings_panel import SettingsPanel
from .summary_card import SummaryCard

__all__ = [
    "TimerWidget",
    "ProgressRing",
    "SettingsPanel",
    "SummaryCard",
]
