"""QSS stylesheet and phase colours for IntervalBell."""

from __future__ import annotations

from ..timer.engine import Phase

# ── display states ───────────────────────────────────────────────────────
#    The ring colours by phase while a run is ticking, plus three states
#    the engine has no phase for.

IDLE = "idle"
PAUSED = "paused"
LEAD_IN = "lead_in"
COMPLETE = "complete"

# (primary, secondary) pairs for the ring's conical gradient
STATE_COLORS: dict[object, tuple[str, str]] = {
    Phase.WORK:                  ("#275DAD", "#4A7FD0"),   # work blue
    Phase.REST:                  ("#FC5130", "#FF8A6B"),   # rest orange
    Phase.BETWEEN_CIRCUITS_REST: ("#1890FF", "#69B7FF"),   # circuit-rest sky
    LEAD_IN:                     ("#1890FF", "#275DAD"),
    PAUSED:                      ("#6C7086", "#585B70"),   # desaturated gray
    IDLE:                        ("#5B616A", "#4A4F57"),
    COMPLETE:                    ("#52C41A", "#95DE64"),   # success green
}

PHASE_LABELS: dict[Phase, str] = {
    Phase.WORK:                  "WORK",
    Phase.REST:                  "REST",
    Phase.BETWEEN_CIRCUITS_REST: "CIRCUIT REST",
}

PALETTE: dict[str, str] = {
    "bg":           "#F0F2F5",
    "bg_secondary": "#FFFFFF",
    "header":       "#5B616A",
    "accent":       "#1890FF",
    "text":         "#1F1F1F",
    "text_muted":   "#8C8C8C",
    "success":      "#52C41A",
    "warning":      "#FC5130",
    "danger":       "#F5222D",
    "border":       "#D9D9D9",
}


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or PALETTE
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QMainWindow {{
        background-color: {p['bg']};
    }}

    /* ── buttons ─────────────────────────────────── */
    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 10px 24px;
        font-size: 15px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        border-color: {p['accent']};
        color: {p['accent']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: white;
        border: none;
        font-size: 17px;
        padding: 14px 40px;
    }}

    QPushButton#primaryButton:hover {{
        background-color: #40A9FF;
    }}

    QPushButton#pauseButton {{
        background-color: {p['danger']};
        color: white;
        border: none;
        font-size: 17px;
        padding: 14px 40px;
    }}

    QPushButton#resumeButton {{
        background-color: {p['warning']};
        color: white;
        border: none;
        font-size: 17px;
        padding: 14px 40px;
    }}

    /* ── frame / card ────────────────────────────── */
    QFrame#card {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 8px;
    }}

    QLabel#cardHeader {{
        background-color: {p['header']};
        color: white;
        font-size: 15px;
        font-weight: 700;
        padding: 10px 16px;
        border-top-left-radius: 8px;
        border-top-right-radius: 8px;
    }}

    QLabel#leadInLabel {{
        background-color: transparent;
        color: {p['accent']};
        font-size: 96px;
        font-weight: 800;
    }}

    QLabel#progressLabel {{
        background-color: transparent;
        font-size: 20px;
        font-weight: 700;
    }}

    QLabel#exerciseLabel {{
        background-color: transparent;
        color: {p['text_muted']};
        font-size: 16px;
    }}

    QLabel#summaryLabel {{
        background-color: transparent;
        font-weight: 700;
    }}

    /* ── inputs ──────────────────────────────────── */
    QSpinBox {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 6px;
        padding: 4px 8px;
    }}

    QSpinBox:focus {{
        border-color: {p['accent']};
    }}

    QCheckBox {{
        background-color: transparent;
    }}

    /* ── status bar ──────────────────────────────── */
    QStatusBar {{
        background-color: {p['bg']};
        color: {p['text_muted']};
        font-size: 12px;
        border-top: 1px solid {p['border']};
    }}
    """
