"""Countdown display and controls.

Layout (top → bottom):
    - Phase title ("Work Time" / "Rest Time")
    - Seconds remaining
    - Round and circuit counters
    - Phase progress bar
    - Play/Pause + Stop buttons
    - "Workout Complete!" banner (replaces everything above when done)
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QProgressBar,
)

from ..timer.engine import IntervalTimerEngine, TimerState, Phase


PHASE_TITLES: dict[Phase, str] = {
    Phase.WORK: "Work Time",
    Phase.REST: "Rest Time",
}

COMPLETE_TEXT = "Workout Complete!"


class TimerWidget(QWidget):
    """Phase, countdown, counters and the two control buttons."""

    completion_shown = pyqtSignal(bool)

    def __init__(self, engine: IntervalTimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self._on_state_changed(engine.state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(10)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._display = QWidget(self)
        display_layout = QVBoxLayout(self._display)
        display_layout.setContentsMargins(0, 0, 0, 0)
        display_layout.setSpacing(10)

        self._phase_label = QLabel(self._display)
        self._phase_label.setObjectName("phaseLabel")
        self._time_label = QLabel(self._display)
        self._time_label.setObjectName("timeLabel")
        self._round_label = QLabel(self._display)
        self._circuit_label = QLabel(self._display)
        for lbl in (
            self._phase_label, self._time_label,
            self._round_label, self._circuit_label,
        ):
            lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
            display_layout.addWidget(lbl)

        # ── phase progress (fills as the phase runs down) ───────────
        self._progress = QProgressBar(self._display)
        self._progress.setObjectName("phaseProgress")
        self._progress.setRange(0, 1000)
        self._progress.setTextVisible(False)
        self._progress.setFixedHeight(8)
        display_layout.addWidget(self._progress)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(20)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._play_pause_btn = QPushButton("Play", self._display)
        self._play_pause_btn.setObjectName("playPauseButton")
        self._stop_btn = QPushButton("Stop", self._display)
        self._stop_btn.setObjectName("stopButton")

        btn_row.addWidget(self._play_pause_btn)
        btn_row.addWidget(self._stop_btn)
        display_layout.addSpacing(10)
        display_layout.addLayout(btn_row)

        layout.addWidget(self._display)

        # ── completion banner ────────────────────────────────────────
        self._complete_label = QLabel(COMPLETE_TEXT, self)
        self._complete_label.setObjectName("completeLabel")
        self._complete_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._complete_label.setVisible(False)
        layout.addWidget(self._complete_label)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._play_pause_btn.clicked.connect(self._engine.toggle)
        self._stop_btn.clicked.connect(self._engine.reset)

        self._engine.tick.connect(self._refresh_time)
        self._engine.state_changed.connect(self._on_state_changed)
        self._engine.round_changed.connect(self._refresh_counters)
        self._engine.config_changed.connect(lambda _cfg: self._refresh_counters())

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_state_changed(self, state: TimerState) -> None:
        complete = state == TimerState.COMPLETE
        self._display.setVisible(not complete)
        self._complete_label.setVisible(complete)
        self.completion_shown.emit(complete)

        self._play_pause_btn.setText("Pause" if self._engine.is_running else "Play")
        self._phase_label.setText(PHASE_TITLES[self._engine.phase])
        self._refresh_counters()
        self._refresh_time(self._engine.remaining)

    def _refresh_time(self, remaining: int) -> None:
        self._time_label.setText(f"{remaining} seconds")
        self._progress.setValue(round(self._engine.percent_complete * 1000))

    def _refresh_counters(self, *_args) -> None:
        cfg = self._engine.config
        self._round_label.setText(f"Round {self._engine.current_round} of {cfg.rounds}")
        self._circuit_label.setText(
            f"Circuit {self._engine.current_circuit} of {cfg.circuits}"
        )

    # ── read-back (tests, accessibility) ──────────────────────────────────

    @property
    def phase_text(self) -> str:
        return self._phase_label.text()

    @property
    def time_text(self) -> str:
        return self._time_label.text()

    @property
    def round_text(self) -> str:
        return self._round_label.text()

    @property
    def circuit_text(self) -> str:
        return self._circuit_label.text()

    @property
    def progress(self) -> float:
        return self._progress.value() / 1000

    @property
    def play_pause_text(self) -> str:
        return self._play_pause_btn.text()

    @property
    def showing_complete(self) -> bool:
        return not self._complete_label.isHidden()
