"""Audio package."""

from .sounds import SoundManager, SOUND_NAMES, CUE_SOUNDS

__all__ = ["SoundManager", "SOUND_NAMES", "CUE_SOUNDS"]
