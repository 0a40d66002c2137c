"""UI package."""

from .timer_widget import TimerWidget
from .config_panel import ConfigPanel

__all__ = [
    "TimerWidget",
    "ConfigPanel",
]
