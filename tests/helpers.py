"""Shared test helpers for HIIT Timer."""

from hiittimer.timer.engine import IntervalTimerEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def run_ticks(engine: IntervalTimerEngine, count: int) -> None:
    """Deliver *count* ticks without waiting on the real clock."""
    for _ in range(count):
        engine._on_tick()


def finish_phase(engine: IntervalTimerEngine) -> None:
    """Tick through the current phase, including its boundary tick."""
    run_ticks(engine, engine.remaining + 1)


def ticks_until_complete(engine: IntervalTimerEngine, limit: int = 10_000) -> int:
    """Tick until the workout completes; returns the number of ticks used."""
    for n in range(1, limit + 1):
        engine._on_tick()
        if engine.is_complete:
            return n
    raise AssertionError(f"workout did not complete within {limit} ticks")
