"""Interval timer state machine for HIIT Timer.

States
------
IDLE       Fresh session, nothing started yet.
WORKING    Work phase counting down.
RESTING    Rest phase counting down.
PAUSED     Stopped mid-session; counters and remaining time kept.
COMPLETE   Last circuit's last rest elapsed.  Terminal until reset.

Transitions
-----------
IDLE → WORKING                          (start)
WORKING → RESTING                       (work phase elapses)
RESTING → WORKING                       (rounds or circuits remain)
RESTING → COMPLETE                      (nothing remains)
WORKING | RESTING → PAUSED              (pause)
PAUSED → {phase it was in}              (start)
Any → IDLE                              (reset)

Each phase of ``d`` seconds lasts ``d + 1`` ticks: ``d`` ticks count the
clock down to 0 and the following tick beeps and switches phase.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

from PyQt6.QtCore import QObject, QTimer, pyqtSignal


logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    WORK = "work"
    REST = "rest"


class TimerState(Enum):
    IDLE = "idle"
    WORKING = "working"
    RESTING = "resting"
    PAUSED = "paused"
    COMPLETE = "complete"


# ── constants ─────────────────────────────────────────────────────────────

WORK_RANGE = (10, 60)
REST_RANGE = (5, 60)
ROUNDS_RANGE = (1, 10)
CIRCUITS_RANGE = (1, 5)

DEFAULT_WORK_SECONDS = 30
DEFAULT_REST_SECONDS = 40
DEFAULT_ROUNDS = 3
DEFAULT_CIRCUITS = 2

BEEP_SECONDS = frozenset({4, 3, 2, 1})
TICK_INTERVAL_MS = 1000


def _clamp(value: int, bounds: tuple[int, int]) -> int:
    low, high = bounds
    return max(low, min(high, int(value)))


# ── data ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class IntervalConfig:
    """Workout shape chosen on the sliders."""

    work_seconds: int = DEFAULT_WORK_SECONDS
    rest_seconds: int = DEFAULT_REST_SECONDS
    rounds: int = DEFAULT_ROUNDS
    circuits: int = DEFAULT_CIRCUITS

    def clamped(self) -> IntervalConfig:
        """Copy with every field pulled into its allowed range."""
        return IntervalConfig(
            work_seconds=_clamp(self.work_seconds, WORK_RANGE),
            rest_seconds=_clamp(self.rest_seconds, REST_RANGE),
            rounds=_clamp(self.rounds, ROUNDS_RANGE),
            circuits=_clamp(self.circuits, CIRCUITS_RANGE),
        )

    def duration_for(self, phase: Phase) -> int:
        if phase == Phase.WORK:
            return self.work_seconds
        return self.rest_seconds

    def total_seconds(self) -> int:
        """Ticks from start to COMPLETE (each phase holds 0 for one tick)."""
        per_round = (self.work_seconds + 1) + (self.rest_seconds + 1)
        return self.rounds * self.circuits * per_round


@dataclass
class SessionState:
    phase: Phase = Phase.WORK
    remaining: int = 0
    current_round: int = 1
    current_circuit: int = 1
    running: bool = False
    complete: bool = False

    @classmethod
    def initial(cls) -> SessionState:
        return cls()

    @property
    def is_pristine(self) -> bool:
        """True when nothing has happened since launch or the last reset."""
        return self == SessionState.initial()


# ── engine ────────────────────────────────────────────────────────────────


class IntervalTimerEngine(QObject):
    """Qt-based work/rest interval timer.

    Owns one :class:`IntervalConfig` and one :class:`SessionState`.  The
    presentation layer reads the public properties and listens to the
    signals below; it never mutates state directly.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted after every one-second tick.
    state_changed(new_state: TimerState)
        Emitted on start, pause, reset, phase switch and completion.
    phase_changed(phase: Phase)
        Emitted when the countdown switches between work and rest.
    round_changed(round: int, circuit: int)
        Emitted when the round or circuit counter moves.
    config_changed(config: IntervalConfig)
        Emitted after a configuration setter is applied.
    beep_cue()
        Emitted at 4, 3, 2, 1 seconds remaining and at each phase boundary.
    workout_completed(data: dict)
        Emitted once when the final rest phase elapses.  Keys:
        ``rounds``, ``circuits``, ``work_seconds``, ``rest_seconds``,
        ``elapsed_ticks``.
    """

    tick = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    phase_changed = pyqtSignal(object)
    round_changed = pyqtSignal(int, int)
    config_changed = pyqtSignal(object)
    beep_cue = pyqtSignal()
    workout_completed = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        config: IntervalConfig | None = None,
    ) -> None:
        super().__init__(parent)

        self._config: IntervalConfig = (config or IntervalConfig()).clamped()
        self._session: SessionState = SessionState.initial()
        self._elapsed_ticks: int = 0

        # ── tick source ───────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def config(self) -> IntervalConfig:
        return self._config

    @property
    def session(self) -> SessionState:
        """Snapshot of the session state (mutating it has no effect)."""
        return replace(self._session)

    @property
    def phase(self) -> Phase:
        return self._session.phase

    @property
    def remaining(self) -> int:
        """Seconds left on the clock."""
        return self._session.remaining

    @property
    def current_round(self) -> int:
        return self._session.current_round

    @property
    def current_circuit(self) -> int:
        return self._session.current_circuit

    @property
    def is_running(self) -> bool:
        return self._session.running

    @property
    def is_complete(self) -> bool:
        return self._session.complete

    @property
    def elapsed_ticks(self) -> int:
        """Ticks delivered since launch or the last reset."""
        return self._elapsed_ticks

    @property
    def state(self) -> TimerState:
        s = self._session
        if s.complete:
            return TimerState.COMPLETE
        if s.running:
            return TimerState.WORKING if s.phase == Phase.WORK else TimerState.RESTING
        if s.is_pristine and self._elapsed_ticks == 0:
            return TimerState.IDLE
        return TimerState.PAUSED

    @property
    def phase_duration(self) -> int:
        return self._config.duration_for(self._session.phase)

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current phase."""
        if self.state == TimerState.IDLE or self.phase_duration <= 0:
            return 0.0
        if self._session.complete:
            return 1.0
        elapsed = self.phase_duration - self._session.remaining
        return max(0.0, min(1.0, elapsed / self.phase_duration))

    @property
    def can_configure(self) -> bool:
        return not self._session.running and not self._session.complete

    # ══════════════════════════════════════════════════════════════════
    #  CONFIGURATION
    # ══════════════════════════════════════════════════════════════════

    def configure(self, config: IntervalConfig) -> bool:
        """Replace the whole configuration.  Ignored while running or complete."""
        if not self.can_configure:
            logger.debug("Configuration change ignored (state=%s)", self.state.value)
            return False

        config = config.clamped()
        # A paused session must still satisfy round <= rounds, circuit <= circuits.
        config = replace(
            config,
            rounds=max(config.rounds, self._session.current_round),
            circuits=max(config.circuits, self._session.current_circuit),
        )
        if config == self._config:
            return True
        self._config = config
        self.config_changed.emit(config)
        return True

    def set_work_seconds(self, seconds: int) -> bool:
        return self.configure(replace(self._config, work_seconds=seconds))

    def set_rest_seconds(self, seconds: int) -> bool:
        return self.configure(replace(self._config, rest_seconds=seconds))

    def set_rounds(self, rounds: int) -> bool:
        return self.configure(replace(self._config, rounds=rounds))

    def set_circuits(self, circuits: int) -> bool:
        return self.configure(replace(self._config, circuits=circuits))

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start or resume the countdown.  No-op once the workout is complete."""
        s = self._session
        if s.complete or s.running:
            return
        if s.remaining == 0:
            s.remaining = self._config.duration_for(s.phase)
        s.running = True
        logger.info(
            "Timer started: %s, %ds left (round %d/%d, circuit %d/%d)",
            s.phase.value, s.remaining,
            s.current_round, self._config.rounds,
            s.current_circuit, self._config.circuits,
        )
        self._qt_timer.start()
        self._emit_state()
        self.tick.emit(s.remaining)

    def pause(self) -> None:
        """Stop ticking; remaining time and counters are kept."""
        if not self._session.running:
            return
        self._qt_timer.stop()
        self._session.running = False
        logger.info("Timer paused with %ds left", self._session.remaining)
        self._emit_state()

    def toggle(self) -> None:
        """Play/pause button behaviour."""
        if self._session.running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """Cancel the workout and go back to a fresh session."""
        self._qt_timer.stop()
        self._session = SessionState.initial()
        self._elapsed_ticks = 0
        logger.info("Timer reset")
        self.phase_changed.emit(Phase.WORK)
        self.round_changed.emit(1, 1)
        self.tick.emit(0)
        self._emit_state()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        s = self._session
        if not s.running:
            return
        self._elapsed_ticks += 1

        if s.remaining > 0:
            s.remaining -= 1
            logger.debug("Tick: %s %ds", s.phase.value, s.remaining)
            if s.remaining in BEEP_SECONDS:
                self.beep_cue.emit()
            self.tick.emit(s.remaining)
        else:
            self.beep_cue.emit()
            self._advance_phase()

    def _advance_phase(self) -> None:
        s = self._session
        cfg = self._config

        if s.phase == Phase.WORK:
            s.phase = Phase.REST
            s.remaining = cfg.rest_seconds
        elif s.current_round < cfg.rounds:
            s.current_round += 1
            s.phase = Phase.WORK
            s.remaining = cfg.work_seconds
            self.round_changed.emit(s.current_round, s.current_circuit)
        elif s.current_circuit < cfg.circuits:
            s.current_circuit += 1
            s.current_round = 1
            s.phase = Phase.WORK
            s.remaining = cfg.work_seconds
            self.round_changed.emit(s.current_round, s.current_circuit)
        else:
            self._finish_workout()
            return

        logger.info(
            "Phase -> %s (round %d/%d, circuit %d/%d)",
            s.phase.value, s.current_round, cfg.rounds,
            s.current_circuit, cfg.circuits,
        )
        self.phase_changed.emit(s.phase)
        self.tick.emit(s.remaining)
        self._emit_state()

    def _finish_workout(self) -> None:
        self._qt_timer.stop()
        s = self._session
        s.complete = True
        s.running = False
        cfg = self._config
        logger.info("Workout complete after %d ticks", self._elapsed_ticks)

        self._emit_state()
        self.workout_completed.emit({
            "rounds": cfg.rounds,
            "circuits": cfg.circuits,
            "work_seconds": cfg.work_seconds,
            "rest_seconds": cfg.rest_seconds,
            "elapsed_ticks": self._elapsed_ticks,
        })

    def _emit_state(self) -> None:
        self.state_changed.emit(self.state)
