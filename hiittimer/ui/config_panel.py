"""Workout configuration sliders: work, rest, rounds, circuits."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QLabel, QSlider

from ..timer.engine import (
    IntervalTimerEngine, IntervalConfig, TimerState,
    WORK_RANGE, REST_RANGE, ROUNDS_RANGE, CIRCUITS_RANGE,
)


class _LabelledSlider(QWidget):
    """``Title: value`` label above a horizontal integer slider."""

    def __init__(
        self, title: str, bounds: tuple[int, int], parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._title = title

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        self.label = QLabel(self)
        self.label.setObjectName("sliderLabel")
        self.label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.label)

        self.slider = QSlider(Qt.Orientation.Horizontal, self)
        self.slider.setRange(*bounds)
        self.slider.setSingleStep(1)
        self.slider.setPageStep(1)
        self.slider.setFixedHeight(40)
        layout.addWidget(self.slider)

        self.slider.valueChanged.connect(self._update_label)
        self._update_label(self.slider.value())

    def set_value(self, value: int) -> None:
        self.slider.blockSignals(True)
        self.slider.setValue(value)
        self.slider.blockSignals(False)
        self._update_label(value)

    def _update_label(self, value: int) -> None:
        self.label.setText(f"{self._title}: {value}")


class ConfigPanel(QWidget):
    """Sliders bound to the engine's configuration.

    Moving a slider calls the matching engine setter; the engine's
    ``config_changed`` signal pushes the accepted value back so the
    slider always shows what the engine holds.
    """

    def __init__(self, engine: IntervalTimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self._apply_config(engine.config)
        self._on_state_changed(engine.state)

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 0, 20, 0)
        layout.setSpacing(20)

        self.work = _LabelledSlider("Work Time", WORK_RANGE, self)
        self.rest = _LabelledSlider("Rest Time", REST_RANGE, self)
        self.rounds = _LabelledSlider("Rounds", ROUNDS_RANGE, self)
        self.circuits = _LabelledSlider("Circuits", CIRCUITS_RANGE, self)

        for row in (self.work, self.rest, self.rounds, self.circuits):
            layout.addWidget(row)

        self.summary = QLabel(self)
        self.summary.setObjectName("sliderLabel")
        self.summary.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.summary)

    def _connect_signals(self) -> None:
        self.work.slider.valueChanged.connect(
            lambda v: self._push(self._engine.set_work_seconds, v))
        self.rest.slider.valueChanged.connect(
            lambda v: self._push(self._engine.set_rest_seconds, v))
        self.rounds.slider.valueChanged.connect(
            lambda v: self._push(self._engine.set_rounds, v))
        self.circuits.slider.valueChanged.connect(
            lambda v: self._push(self._engine.set_circuits, v))

        self._engine.config_changed.connect(self._apply_config)
        self._engine.state_changed.connect(self._on_state_changed)

    def _push(self, setter, value: int) -> None:
        setter(value)
        # The engine may clamp or refuse the value; show what it kept.
        self._apply_config(self._engine.config)

    def _apply_config(self, config: IntervalConfig) -> None:
        self.work.set_value(config.work_seconds)
        self.rest.set_value(config.rest_seconds)
        self.rounds.set_value(config.rounds)
        self.circuits.set_value(config.circuits)
        minutes, seconds = divmod(config.total_seconds(), 60)
        self.summary.setText(f"Workout length: {minutes}:{seconds:02d}")

    def _on_state_changed(self, state: TimerState) -> None:
        enabled = self._engine.can_configure
        for row in (self.work, self.rest, self.rounds, self.circuits):
            row.slider.setEnabled(enabled)
