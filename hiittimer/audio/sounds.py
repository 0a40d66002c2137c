"""Sound synthesis and playback using numpy + QSoundEffect.

Sounds are generated as WAV files with sine-wave synthesis and an ADSR
envelope, then cached to disk.  A file already present in the cache
directory is used as-is, so a bundled ``beep.wav`` overrides the
generated one.

Sound names
-----------
- ``beep``              — short countdown pip (last 4 s of a phase + boundary)
- ``workout_complete``  — rising arpeggio when the last rest ends

Playback problems are logged and never raised: a missing beep must not
stop the workout.
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect


logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "HIITTimer"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

BEEP = "beep"
WORKOUT_COMPLETE = "workout_complete"

SOUND_NAMES = (BEEP, WORKOUT_COMPLETE)

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


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


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


def _generate_beep() -> bytes:
    """Countdown pip — 150 ms at A5 (880 Hz), sharp attack."""
    tone = _sine(880.0, 0.15) * 0.6
    env = _make_envelope(len(tone), attack=60, decay=600, sustain_level=0.6, release=1500)
    # Trailing silence so QSoundEffect doesn't clip the release
    return _to_wav_bytes(np.concatenate([tone * env, np.zeros(int(SAMPLE_RATE * 0.05))]))


def _generate_arpeggio() -> bytes:
    """Workout complete — C5→E5→G5→C6, last note held."""
    notes = [523.25, 659.25, 783.99, 1046.50]
    gap = 0.02
    parts: list[np.ndarray] = []
    for i, freq in enumerate(notes):
        if i == len(notes) - 1:
            tone = _sine(freq, 0.4) * 0.5
            env = _make_envelope(len(tone), attack=80, decay=300, sustain_level=0.5, release=800)
        else:
            tone = _sine(freq, 0.10) * 0.5
            env = _make_envelope(len(tone), attack=60, decay=150, sustain_level=0.3, release=200)
        parts.append(tone * env)
        if i < len(notes) - 1:
            parts.append(np.zeros(int(SAMPLE_RATE * gap)))
    return _to_wav_bytes(np.concatenate(parts))


_GENERATORS = {
    BEEP: _generate_beep,
    WORKOUT_COMPLETE: _generate_arpeggio,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Locates, caches and plays the app's sound assets.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.play("beep")
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
        """Start playing *name* and return immediately.

        No-op if disabled.  A missing asset is logged, not raised.
        """
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is None:
            logger.error("Sound %r not found in %s", name, self._sounds_dir)
            return
        if effect.status() == QSoundEffect.Status.Error:
            logger.error("Sound %r cannot be played", name)
            return
        effect.play()

    def play_beep(self) -> None:
        self.play(BEEP)

    def play_complete(self) -> None:
        self.play(WORKOUT_COMPLETE)

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def available(self) -> tuple[str, ...]:
        """Names of the sounds that were loaded."""
        return tuple(self._effects)

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        try:
            self._sounds_dir.mkdir(parents=True, exist_ok=True)
            for name, gen_fn in _GENERATORS.items():
                path = self._sounds_dir / f"{name}.wav"
                if not path.exists():
                    path.write_bytes(gen_fn())
                    logger.debug("Generated %s", path)
        except OSError as e:
            logger.error("Could not write sounds to %s: %s", self._sounds_dir, e)

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                logger.warning("Sound file missing: %s", path)
                continue
            effect = QSoundEffect(self)
            effect.statusChanged.connect(
                lambda n=name, e=effect: self._on_status_changed(n, e)
            )
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            self._effects[name] = effect

    def _on_status_changed(self, name: str, effect: QSoundEffect) -> None:
        if effect.status() == QSoundEffect.Status.Error:
            logger.error("Error loading sound %r from %s", name, effect.source().toLocalFile())
