"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/HIITTimer/settings.json

Only preferences live here (slider positions, sound, window size).  The
running session itself is never saved.

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.engine import (
    IntervalConfig,
    DEFAULT_WORK_SECONDS,
    DEFAULT_REST_SECONDS,
    DEFAULT_ROUNDS,
    DEFAULT_CIRCUITS,
)


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "HIITTimer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── workout ───────────────────────────────────────────────────────
    work_seconds: int = DEFAULT_WORK_SECONDS
    rest_seconds: int = DEFAULT_REST_SECONDS
    rounds: int = DEFAULT_ROUNDS
    circuits: int = DEFAULT_CIRCUITS

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── window ────────────────────────────────────────────────────────
    window_width: int = 420
    window_height: int = 720

    def to_config(self) -> IntervalConfig:
        return IntervalConfig(
            work_seconds=self.work_seconds,
            rest_seconds=self.rest_seconds,
            rounds=self.rounds,
            circuits=self.circuits,
        ).clamped()

    def update_from_config(self, config: IntervalConfig) -> None:
        self.work_seconds = config.work_seconds
        self.rest_seconds = config.rest_seconds
        self.rounds = config.rounds
        self.circuits = config.circuits


def _matches_type(value: object, default: object) -> bool:
    # bool is a subclass of int; keep the two apart.
    if isinstance(default, bool) or isinstance(value, bool):
        return isinstance(value, bool) and isinstance(default, bool)
    return isinstance(value, type(default))


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass, with the default's type
            defaults = Settings()
            filtered = {}
            for f in fields(Settings):
                if f.name not in data:
                    continue
                value = data[f.name]
                if _matches_type(value, getattr(defaults, f.name)):
                    filtered[f.name] = value
                else:
                    logger.warning(
                        "Ignoring setting %s=%r in %s (expected %s)",
                        f.name, value, SETTINGS_PATH,
                        type(getattr(defaults, f.name)).__name__,
                    )
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", SETTINGS_PATH, e)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
