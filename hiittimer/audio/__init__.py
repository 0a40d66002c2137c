"""Audio package."""

from .sounds import SoundManager, SOUND_NAMES, BEEP, WORKOUT_COMPLETE

__all__ = ["SoundManager", "SOUND_NAMES", "BEEP", "WORKOUT_COMPLETE"]
