"""Circular phase-progress ring rendered with QPainter.

- Fills clockwise as the current phase elapses.
- Colour-coded by phase (work blue, rest orange, circuit rest sky).
- Shows MM:SS at the centre, the phase label and the circuit/round line.
- Smooth colour transitions between phases.
- Confetti burst when the workout completes.
"""

from __future__ import annotations

import math
import random

from PyQt6.QtCore import Qt, QRectF, QPointF, QTimer, QVariantAnimation, QEasingCurve
from PyQt6.QtGui import QPainter, QPen, QColor, QConicalGradient, QFont
from PyQt6.QtWidgets import QWidget

from .styles import STATE_COLORS, IDLE, PALETTE


# ── helpers ──────────────────────────────────────────────────────────────────

def _lerp_color(c1: QColor, c2: QColor, t: float) -> QColor:
    """Linearly interpolate between two QColors."""
    t = max(0.0, min(1.0, t))
    return QColor(
        int(c1.red()   + (c2.red()   - c1.red())   * t),
        int(c1.green() + (c2.green() - c1.green()) * t),
        int(c1.blue()  + (c2.blue()  - c1.blue())  * t),
        int(c1.alpha() + (c2.alpha() - c1.alpha()) * t),
    )


# ── confetti particle ───────────────────────────────────────────────────────

class _Particle:
    __slots__ = ("x", "y", "vx", "vy", "life", "color", "size")

    def __init__(self, cx: float, cy: float, color: QColor) -> None:
        angle = random.uniform(0, 2 * math.pi)
        speed = random.uniform(2.0, 6.0)
        self.x = cx
        self.y = cy
        self.vx = math.cos(angle) * speed
        self.vy = math.sin(angle) * speed
        self.life = 1.0
        self.color = QColor(color)
        self.size = random.uniform(3, 7)

    def tick(self, dt: float) -> bool:
        """Advance and return True if still alive."""
        self.x += self.vx * dt * 60
        self.y += self.vy * dt * 60
        self.vy += 0.12 * dt * 60  # gravity
        self.life -= dt * 1.8
        return self.life > 0


# ── main widget ──────────────────────────────────────────────────────────────


class ProgressRing(QWidget):
    """Custom-painted circular phase ring."""

    RING_DIAMETER = 300
    RING_THICKNESS = 16

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(self.RING_DIAMETER + 40, self.RING_DIAMETER + 40)

        # ── state ──────────────────────────────────────────────────────
        self._percent: float = 0.0
        self._time_text: str = "00:20"
        self._state_label: str = "READY"
        self._round_text: str = ""
        self._display_state: object = IDLE

        primary, secondary = STATE_COLORS[IDLE]
        self._primary_color = QColor(primary)
        self._secondary_color = QColor(secondary)
        self._old_primary = QColor(primary)
        self._old_secondary = QColor(secondary)
        self._target_primary = QColor(primary)
        self._target_secondary = QColor(secondary)

        self._text_color = QColor(PALETTE["text"])
        self._muted_color = QColor(PALETTE["text_muted"])

        # ── color transition animation ─────────────────────────────────
        self._color_anim = QVariantAnimation(self)
        self._color_anim.setDuration(400)
        self._color_anim.setStartValue(0.0)
        self._color_anim.setEndValue(1.0)
        self._color_anim.setEasingCurve(QEasingCurve.Type.InOutQuad)
        self._color_anim.valueChanged.connect(self._on_color_anim)

        # ── confetti ───────────────────────────────────────────────────
        self._particles: list[_Particle] = []
        self._particle_timer = QTimer(self)
        self._particle_timer.setInterval(16)  # ~60 fps
        self._particle_timer.timeout.connect(self._on_particle_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC API
    # ══════════════════════════════════════════════════════════════════

    @property
    def percent(self) -> float:
        return self._percent

    @property
    def time_text(self) -> str:
        return self._time_text

    @property
    def state_label(self) -> str:
        return self._state_label

    @property
    def round_text(self) -> str:
        return self._round_text

    def set_percent(self, pct: float) -> None:
        """Arc fill, 0..1.  One-second ticks are coarse enough to paint directly."""
        self._percent = max(0.0, min(1.0, pct))
        self.update()

    def set_time_text(self, text: str) -> None:
        self._time_text = text
        self.update()

    def set_state_label(self, text: str) -> None:
        self._state_label = text
        self.update()

    def set_round_text(self, text: str) -> None:
        self._round_text = text
        self.update()

    def apply_state(self, display_state: object) -> None:
        """Recolour for a ``Phase`` or one of the styles display states."""
        if display_state == self._display_state:
            return
        self._display_state = display_state
        primary_hex, secondary_hex = STATE_COLORS.get(display_state, STATE_COLORS[IDLE])

        self._old_primary = QColor(self._primary_color)
        self._old_secondary = QColor(self._secondary_color)
        self._target_primary = QColor(primary_hex)
        self._target_secondary = QColor(secondary_hex)
        self._color_anim.stop()
        self._color_anim.start()

    def trigger_celebration(self) -> None:
        cx = self.width() / 2
        cy = self.height() / 2
        radius = self.RING_DIAMETER / 2
        colors = [
            QColor("#52C41A"),
            QColor("#1890FF"),
            QColor("#FC5130"),
            QColor("#FFD700"),
        ]
        for _ in range(40):
            angle = random.uniform(0, 2 * math.pi)
            px = cx + math.cos(angle) * radius
            py = cy + math.sin(angle) * radius
            self._particles.append(_Particle(px, py, random.choice(colors)))
        if not self._particle_timer.isActive():
            self._particle_timer.start()

    # ══════════════════════════════════════════════════════════════════
    #  ANIMATION SLOTS
    # ══════════════════════════════════════════════════════════════════

    def _on_color_anim(self, value: object) -> None:
        t = float(value)  # type: ignore[arg-type]
        self._primary_color = _lerp_color(self._old_primary, self._target_primary, t)
        self._secondary_color = _lerp_color(self._old_secondary, self._target_secondary, t)
        self.update()

    def _on_particle_tick(self) -> None:
        dt = 0.016
        self._particles = [p for p in self._particles if p.tick(dt)]
        if not self._particles:
            self._particle_timer.stop()
        self.update()

    # ══════════════════════════════════════════════════════════════════
    #  PAINTING
    # ══════════════════════════════════════════════════════════════════

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        w = self.width()
        h = self.height()
        cx, cy = w / 2, h / 2
        diameter = max(100, min(w, h) - 40)
        radius = diameter / 2
        thickness = self.RING_THICKNESS
        ring_rect = QRectF(cx - radius, cy - radius, diameter, diameter)

        # ── background track ─────────────────────────────────────────
        track_color = QColor(self._primary_color)
        track_color.setAlpha(35)
        track_pen = QPen(track_color, thickness, Qt.PenStyle.SolidLine)
        track_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        painter.setPen(track_pen)
        painter.drawEllipse(ring_rect)

        # ── progress arc ─────────────────────────────────────────────
        if self._percent > 0.001:
            gradient = QConicalGradient(cx, cy, 90)
            gradient.setColorAt(0.0, self._primary_color)
            gradient.setColorAt(0.5, self._secondary_color)
            gradient.setColorAt(1.0, self._primary_color)
            arc_pen = QPen(gradient, thickness, Qt.PenStyle.SolidLine)
            arc_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            painter.setPen(arc_pen)
            # Qt arcs: start at 12 o'clock (90*16), go clockwise (negative)
            painter.drawArc(ring_rect, 90 * 16, -int(self._percent * 360 * 16))

        # ── centre text: time ────────────────────────────────────────
        time_font = QFont()
        time_font.setPixelSize(64)
        time_font.setWeight(QFont.Weight.Bold)
        painter.setFont(time_font)
        painter.setPen(self._primary_color)
        time_rect = QRectF(ring_rect)
        time_rect.moveTop(time_rect.top() - 18)
        painter.drawText(time_rect, Qt.AlignmentFlag.AlignCenter, self._time_text)

        # ── centre text: phase label ─────────────────────────────────
        label_font = QFont()
        label_font.setPixelSize(14)
        label_font.setWeight(QFont.Weight.DemiBold)
        label_font.setLetterSpacing(QFont.SpacingType.AbsoluteSpacing, 3)
        painter.setFont(label_font)
        painter.setPen(self._text_color)
        label_rect = QRectF(ring_rect)
        label_rect.moveTop(label_rect.top() + 36)
        painter.drawText(label_rect, Qt.AlignmentFlag.AlignCenter, self._state_label)

        # ── centre text: circuit / round ─────────────────────────────
        round_font = QFont()
        round_font.setPixelSize(12)
        painter.setFont(round_font)
        painter.setPen(self._muted_color)
        round_rect = QRectF(ring_rect)
        round_rect.moveTop(round_rect.top() + 62)
        painter.drawText(round_rect, Qt.AlignmentFlag.AlignCenter, self._round_text)

        # ── confetti ─────────────────────────────────────────────────
        for p in self._particles:
            c = QColor(p.color)
            c.setAlpha(int(255 * max(0, p.life)))
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(c)
            size = p.size * p.life
            painter.drawEllipse(QPointF(p.x, p.y), size, size)

        painter.end()
