"""Timer package."""

from .engine import (
    IntervalTimerEngine,
    IntervalConfig,
    SessionState,
    TimerState,
    Phase,
    WORK_RANGE,
    REST_RANGE,
    ROUNDS_RANGE,
    CIRCUITS_RANGE,
    BEEP_SECONDS,
)

__all__ = [
    "IntervalTimerEngine",
    "IntervalConfig",
    "SessionState",
    "TimerState",
    "Phase",
    "WORK_RANGE",
    "REST_RANGE",
    "ROUNDS_RANGE",
    "CIRCUITS_RANGE",
    "BEEP_SECONDS",
]
