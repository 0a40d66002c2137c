"""Main application window for HIIT Timer."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QKeySequence, QShortcut
from PyQt6.QtWidgets import QMainWindow, QWidget, QVBoxLayout

from .timer.engine import IntervalTimerEngine, IntervalConfig, TimerState
from .ui.timer_widget import TimerWidget
from .ui.config_panel import ConfigPanel
from .ui.styles import build_stylesheet, background_for
from .settings import Settings, load_settings, save_settings
from .audio.sounds import SoundManager


logger = logging.getLogger(__name__)


class IntervalTimerApp(QMainWindow):
    """Single-screen window: sliders on top, countdown and controls below."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        sound_manager: SoundManager | None = None,
        persist_settings: bool = True,
    ) -> None:
        super().__init__()
        self.setWindowTitle("HIIT Timer")

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()
        self._persist = persist_settings
        self.resize(self._settings.window_width, self._settings.window_height)

        # ── engine ────────────────────────────────────────────────────
        self._timer_engine = IntervalTimerEngine(
            self, config=self._settings.to_config(),
        )

        # ── sound manager ─────────────────────────────────────────────
        self._sound_manager = sound_manager or SoundManager(parent=self)
        self._sound_manager.set_volume(self._settings.sound_volume)
        self._sound_manager.set_enabled(self._settings.sound_enabled)

        # ── central widget ────────────────────────────────────────────
        central = QWidget()
        central.setObjectName("root")
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)
        root_layout.setContentsMargins(16, 24, 16, 24)
        root_layout.setSpacing(20)

        self._config_panel = ConfigPanel(self._timer_engine, central)
        root_layout.addWidget(self._config_panel)

        self._timer_widget = TimerWidget(self._timer_engine, central)
        root_layout.addWidget(self._timer_widget)
        root_layout.addStretch()

        # ── keyboard ──────────────────────────────────────────────────
        toggle_sc = QShortcut(QKeySequence(Qt.Key.Key_Space), self)
        toggle_sc.activated.connect(self._timer_engine.toggle)
        reset_sc = QShortcut(QKeySequence(Qt.Key.Key_Escape), self)
        reset_sc.activated.connect(self._timer_engine.reset)

        self._connect_signals()
        self._apply_background(self._timer_engine.state)

    # ── wiring ────────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        eng = self._timer_engine
        eng.beep_cue.connect(self._sound_manager.play_beep)
        eng.workout_completed.connect(self._on_workout_completed)
        eng.state_changed.connect(self._apply_background)
        eng.config_changed.connect(self._on_config_changed)
        self._timer_widget.completion_shown.connect(self._on_completion_shown)

    def _on_completion_shown(self, done: bool) -> None:
        # The finished screen shows only the banner.
        self._config_panel.setVisible(not done)

    def _on_workout_completed(self, data: dict) -> None:
        logger.info(
            "Finished %d circuit(s) of %d round(s) in %ds",
            data["circuits"], data["rounds"], data["elapsed_ticks"],
        )
        self._sound_manager.play_complete()

    def _on_config_changed(self, config: IntervalConfig) -> None:
        self._settings.update_from_config(config)
        self._save_settings()

    def _apply_background(self, state: TimerState) -> None:
        colour = background_for(state, self._timer_engine.phase)
        self.setStyleSheet(build_stylesheet(colour))

    def _save_settings(self) -> None:
        if not self._persist:
            return
        try:
            save_settings(self._settings)
        except OSError as e:
            logger.warning("Could not save settings: %s", e)

    # ── public ────────────────────────────────────────────────────────────

    @property
    def engine(self) -> IntervalTimerEngine:
        return self._timer_engine

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    @property
    def config_panel(self) -> ConfigPanel:
        return self._config_panel

    # ── Qt overrides ──────────────────────────────────────────────────────

    def closeEvent(self, event) -> None:  # noqa: N802
        self._timer_engine.pause()
        self._settings.window_width = self.width()
        self._settings.window_height = self.height()
        self._save_settings()
        super().closeEvent(event)
