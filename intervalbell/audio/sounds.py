"""Cue sound synthesis and playback using numpy + QSoundEffect.

All sounds are generated programmatically as WAV files using sine-wave
synthesis with ADSR envelopes.  Files are cached to disk so subsequent
app launches are instant.

Sound names (one per ``Cue`` plus a UI click)
---------------------------------------------
- ``fight_bell``   boxing-ring bell, inharmonic partials with a long ring
- ``whistle``      coach's whistle, bright warbling tone
- ``buzzer``       square-wave buzzer ending a circuit
- ``countdown``    short beep used by the lead-in and the final stretch
- ``celebration``  rising fanfare when the workout is complete
- ``click``        subtle button click (volume preview)
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..timer.engine import Cue

logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "IntervalBell"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = (
    "fight_bell",
    "whistle",
    "buzzer",
    "countdown",
    "celebration",
    "click",
)

CUE_SOUNDS: dict[Cue, str] = {cue: cue.value for cue in Cue}

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _time_axis(duration_s: float) -> np.ndarray:
    return np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    return np.sin(2 * np.pi * freq * _time_axis(duration_s))


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_fight_bell() -> bytes:
    """Two bell strikes; each strike mixes inharmonic partials over an
    exponential decay so it rings like a brass ring bell."""
    strike_dur = 0.9
    t = _time_axis(strike_dur)
    partials = [(620.0, 0.45), (1240.0 * 1.01, 0.2), (1720.0, 0.12), (2690.0, 0.06)]
    strike = sum(amp * np.sin(2 * np.pi * f * t) for f, amp in partials)
    strike = strike * np.exp(-t * 4.5)
    strike[:60] *= np.linspace(0.0, 1.0, 60)
    return _to_wav_bytes(np.concatenate([strike[: int(SAMPLE_RATE * 0.35)], strike]))


def _generate_whistle() -> bytes:
    """Referee whistle, 2.8 kHz carrier with a fast 28 Hz warble."""
    duration = 0.6
    t = _time_axis(duration)
    warble = 60.0 * np.sin(2 * np.pi * 28.0 * t)
    phase = 2 * np.pi * 2800.0 * t + (warble / 28.0)
    tone = np.sin(phase) * 0.4
    env = _make_envelope(
        len(tone),
        attack=int(SAMPLE_RATE * 0.02),
        decay=int(SAMPLE_RATE * 0.05),
        sustain_level=0.85,
        release=int(SAMPLE_RATE * 0.08),
    )
    return _to_wav_bytes(np.concatenate([tone * env, _silence(0.05)]))


def _generate_buzzer() -> bytes:
    """End-of-circuit buzzer, harsh 160 Hz square wave."""
    duration = 0.8
    square = np.sign(_sine(160.0, duration)) * 0.3
    env = _make_envelope(len(square), attack=80, decay=200, sustain_level=0.9, release=1200)
    return _to_wav_bytes(square * env)


def _generate_countdown() -> bytes:
    """Short 880 Hz beep."""
    tone = _sine(880.0, 0.12) * 0.5
    env = _make_envelope(len(tone), attack=60, decay=300, sustain_level=0.6, release=600)
    return _to_wav_bytes(np.concatenate([tone * env, _silence(0.05)]))


def _generate_celebration() -> bytes:
    """Workout complete, rising fanfare (C5→E5→G5→C6) with a held top."""
    notes = [523.25, 659.25, 783.99, 1046.50]  # C5, E5, G5, C6
    parts: list[np.ndarray] = []
    for i, freq in enumerate(notes):
        if i == len(notes) - 1:
            tone = _sine(freq, 0.6) * 0.5 + _sine(freq * 2, 0.6) * 0.08
            env = _make_envelope(len(tone), attack=100, decay=500, sustain_level=0.5, release=9000)
            parts.append(tone * env)
        else:
            tone = _sine(freq, 0.13) * 0.5
            env = _make_envelope(len(tone), attack=80, decay=200, sustain_level=0.4, release=250)
            parts.append(tone * env)
            parts.append(_silence(0.03))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_click() -> bytes:
    """Button click, very short and subtle."""
    duration = 0.015
    n_samples = int(SAMPLE_RATE * duration)
    tick = _sine(1200.0, duration) * 0.2
    env = _make_envelope(n_samples, attack=20, decay=50, sustain_level=0.0, release=n_samples - 70)
    # Pad with silence so QSoundEffect doesn't clip
    return _to_wav_bytes(np.concatenate([tick * env, _silence(0.03)]))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "fight_bell": _generate_fight_bell,
    "whistle": _generate_whistle,
    "buzzer": _generate_buzzer,
    "countdown": _generate_countdown,
    "celebration": _generate_celebration,
    "click": _generate_click,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Manages sound synthesis, caching, and playback.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        driver.cue.connect(mgr.play_cue)
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> None:
        """Play a sound by name.  No-op if disabled or name unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is None:
            logger.debug("no sound loaded for %r", name)
            return
        # restart from the top so rapid repeats are not swallowed
        effect.stop()
        effect.play()

    def play_cue(self, cue: Cue) -> None:
        self.play(CUE_SOUNDS[cue])

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                logger.debug("generating %s", path)
                path.write_bytes(gen_fn())

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect
