from .logging import LogEntry, LogLevel, Logger, LoggerInstance

# When importing logging, you can just do `from wormrot.ui import logging`
__all__ = ["LogEntry", "LogLevel", "Logger", "LoggerInstance"]
