"""
wormrot derives the same sequence of magic-wormhole codes on every machine
that shares a secret and a roughly synchronised clock, so transfers need no
code to be read out or pasted.
"""

from .config import VERSION as __version__
from .ui.logging import LogLevel, LogEntry, Logger, LoggerInstance

__all__ = ["__version__", "LogLevel", "LogEntry", "Logger", "LoggerInstance"]
