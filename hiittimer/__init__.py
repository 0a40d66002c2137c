"""HIIT Timer: work/rest interval countdown with rounds and circuits."""

__version__ = "0.1.0"
