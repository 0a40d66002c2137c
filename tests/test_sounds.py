"""Tests for settings persistence and the sound manager.

Covers:
- Settings dataclass defaults, JSON round-trip and conversion to config
- Beep synthesis produces valid WAV data
- SoundManager asset caching, playback API and failure logging
"""

from __future__ import annotations

import io
import json
import logging
import wave

import pytest
from PyQt6.QtMultimedia import QSoundEffect

from hiittimer.settings import Settings, load_settings, save_settings
from hiittimer.audio.sounds import (
    SoundManager,
    _generate_beep,
    _generate_arpeggio,
    SOUND_NAMES,
    BEEP,
)
from hiittimer.timer.engine import IntervalTimerEngine, IntervalConfig

from helpers import ticks_until_complete


# ═══════════════════════════════════════════════════════════════════════
#  SETTINGS
# ═══════════════════════════════════════════════════════════════════════


class TestSettingsDefaults:
    def test_workout_defaults(self):
        s = Settings()
        assert (s.work_seconds, s.rest_seconds, s.rounds, s.circuits) == (30, 40, 3, 2)

    def test_sound_defaults(self):
        s = Settings()
        assert s.sound_enabled is True
        assert s.sound_volume == 70

    def test_to_config(self):
        assert Settings().to_config() == IntervalConfig(30, 40, 3, 2)

    def test_to_config_clamps(self):
        s = Settings(work_seconds=500, rest_seconds=1, rounds=0, circuits=9)
        assert s.to_config() == IntervalConfig(60, 5, 1, 5)

    def test_update_from_config(self):
        s = Settings()
        s.update_from_config(IntervalConfig(20, 10, 8, 3))
        assert (s.work_seconds, s.rest_seconds, s.rounds, s.circuits) == (20, 10, 8, 3)


class TestSettingsPersistence:
    def test_round_trip(self):
        save_settings(Settings(work_seconds=45, sound_volume=42))
        loaded = load_settings()
        assert loaded.work_seconds == 45
        assert loaded.sound_volume == 42

    def test_missing_file_returns_defaults(self):
        assert load_settings() == Settings()

    def test_invalid_json_returns_defaults(self, tmp_path, caplog):
        (tmp_path / "settings.json").write_text("NOT VALID JSON", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="hiittimer.settings"):
            s = load_settings()
        assert s == Settings()
        assert "unreadable settings" in caplog.text

    def test_extra_keys_ignored(self, tmp_path):
        data = {"rounds": 6, "unknown_future_key": True}
        (tmp_path / "settings.json").write_text(json.dumps(data), encoding="utf-8")
        s = load_settings()
        assert s.rounds == 6
        assert not hasattr(s, "unknown_future_key")

    @pytest.mark.parametrize("data", [
        {"work_seconds": "abc"},
        {"rounds": None},
        {"sound_volume": "loud"},
        {"window_width": 1.5},
        {"circuits": True},
        {"sound_enabled": 1},
    ])
    def test_wrong_typed_values_fall_back_to_defaults(self, tmp_path, caplog, data):
        (tmp_path / "settings.json").write_text(json.dumps(data), encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="hiittimer.settings"):
            s = load_settings()
        assert s == Settings()
        assert "Ignoring setting" in caplog.text
        # Must still build a usable workout
        assert s.to_config() == IntervalConfig(30, 40, 3, 2)

    def test_bad_value_does_not_discard_good_ones(self, tmp_path):
        data = {"work_seconds": "abc", "rest_seconds": 20, "rounds": None, "circuits": 4}
        (tmp_path / "settings.json").write_text(json.dumps(data), encoding="utf-8")
        s = load_settings()
        assert s.to_config() == IntervalConfig(30, 20, 3, 4)

    def test_non_object_json_returns_defaults(self, tmp_path):
        (tmp_path / "settings.json").write_text("[1, 2, 3]", encoding="utf-8")
        assert load_settings() == Settings()

    def test_saved_file_is_json(self, tmp_path):
        save_settings(Settings(circuits=4))
        data = json.loads((tmp_path / "settings.json").read_text(encoding="utf-8"))
        assert data["circuits"] == 4


# ═══════════════════════════════════════════════════════════════════════
#  SOUND SYNTHESIS
# ═══════════════════════════════════════════════════════════════════════


class TestSoundGeneration:

    @pytest.mark.parametrize("gen_fn", [_generate_beep, _generate_arpeggio])
    def test_generator_produces_wav(self, gen_fn):
        data = gen_fn()
        assert isinstance(data, bytes)
        assert data[:4] == b"RIFF"

        with wave.open(io.BytesIO(data), "rb") as wf:
            assert wf.getnchannels() == 1
            assert wf.getsampwidth() == 2
            assert wf.getframerate() == 44100
            assert wf.getnframes() > 0

    def test_beep_is_short(self):
        with wave.open(io.BytesIO(_generate_beep()), "rb") as wf:
            seconds = wf.getnframes() / wf.getframerate()
        # Must finish well inside the one-second tick
        assert seconds < 0.5


@pytest.mark.usefixtures("qapp")
class TestSoundManager:
    def test_wav_files_generated(self, tmp_path):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        for name in SOUND_NAMES:
            path = tmp_path / f"{name}.wav"
            assert path.exists(), f"Missing WAV: {name}"
            assert path.stat().st_size > 100
        assert set(mgr.available) == set(SOUND_NAMES)

    def test_existing_asset_is_kept(self, tmp_path):
        custom = _generate_arpeggio()
        (tmp_path / "beep.wav").write_bytes(custom)
        SoundManager(parent=None, sounds_dir=tmp_path)
        assert (tmp_path / "beep.wav").read_bytes() == custom

    def test_set_volume_clamps(self, tmp_path):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        mgr.set_volume(30)
        assert mgr.volume == 30
        mgr.set_volume(200)
        assert mgr.volume == 100
        mgr.set_volume(-10)
        assert mgr.volume == 0

    def test_set_enabled(self, tmp_path):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        mgr.set_enabled(False)
        assert mgr.enabled is False
        mgr.play_beep()  # silent no-op

    def test_unknown_sound_is_logged_not_raised(self, tmp_path, caplog):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        with caplog.at_level(logging.ERROR, logger="hiittimer.audio.sounds"):
            mgr.play("nonexistent_sound")
        assert "nonexistent_sound" in caplog.text

    def test_missing_beep_is_logged(self, tmp_path, caplog):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        mgr._effects.pop(BEEP)
        with caplog.at_level(logging.ERROR, logger="hiittimer.audio.sounds"):
            mgr.play_beep()
        assert "beep" in caplog.text

    def test_unwritable_sounds_dir_does_not_raise(self, tmp_path, caplog):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x", encoding="utf-8")
        with caplog.at_level(logging.ERROR, logger="hiittimer.audio.sounds"):
            mgr = SoundManager(parent=None, sounds_dir=blocker / "sounds")
        assert mgr.available == ()
        assert "Could not write sounds" in caplog.text
        mgr.play_beep()  # logged, not raised

    def test_unplayable_asset_is_logged_not_played(self, tmp_path, caplog, monkeypatch):
        (tmp_path / "beep.wav").write_bytes(b"this is not a wav file")
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        effect = mgr._effects[BEEP]
        played = []
        monkeypatch.setattr(effect, "status", lambda: QSoundEffect.Status.Error)
        monkeypatch.setattr(effect, "play", lambda: played.append(True))

        with caplog.at_level(logging.ERROR, logger="hiittimer.audio.sounds"):
            mgr.play_beep()
        assert "cannot be played" in caplog.text
        assert played == []

    def test_load_error_status_is_logged(self, tmp_path, caplog, monkeypatch):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        effect = mgr._effects[BEEP]
        monkeypatch.setattr(effect, "status", lambda: QSoundEffect.Status.Error)
        with caplog.at_level(logging.ERROR, logger="hiittimer.audio.sounds"):
            mgr._on_status_changed(BEEP, effect)
        assert "Error loading sound 'beep'" in caplog.text

    def test_unplayable_beep_does_not_stop_workout(self, tmp_path, caplog, monkeypatch):
        (tmp_path / "beep.wav").write_bytes(b"\x00" * 64)
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        monkeypatch.setattr(mgr._effects[BEEP], "status", lambda: QSoundEffect.Status.Error)

        eng = IntervalTimerEngine(
            parent=None,
            config=IntervalConfig(work_seconds=10, rest_seconds=5, rounds=2, circuits=1),
        )
        eng.beep_cue.connect(mgr.play_beep)
        eng.start()
        with caplog.at_level(logging.ERROR, logger="hiittimer.audio.sounds"):
            n = ticks_until_complete(eng)

        assert eng.is_complete
        assert n == eng.config.total_seconds()
        assert caplog.text.count("cannot be played") == 20
