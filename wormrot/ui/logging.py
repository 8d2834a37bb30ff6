from typing import List, Dict, Optional, Set
from datetime import datetime
import re
import threading
from .log_data import *

class Logger:
  """
  Process-wide log sink. Stores entries in memory, prints them through the rich
  console, and scrubs registered secrets from every message.
  """
  _instance: Optional['Logger'] = None
  _lock: threading.Lock = threading.Lock() # One way to create a singleton class within a project

  def __new__(cls) -> 'Logger':
    if cls._instance is None:
      with cls._lock:
        if cls._instance is None:
          cls._instance = super(Logger, cls).__new__(cls)

    return cls._instance

  def __init__(self, max_logs: int = MAX_STORED_LOGS) -> None:
    if hasattr(self, '_initialized'):
      return

    self._logs: List[LogEntry] = []
    self._instances: Dict[str, LoggerInstance] = {}
    self._logs_lock = threading.Lock()
    self._instances_lock = threading.Lock()

    self._max_logs = max_logs
    self._redactions: Set[str] = set()
    self._debug_enabled = False

    self._initialized = True

  def set_debug(self, enabled: bool) -> None:
    """Show or hide DEBUG entries on the console. They are always stored."""
    self._debug_enabled = enabled

  def add_redaction(self, secret: str) -> None:
    """Register a string that must never appear in a log line."""
    if secret:
      self._redactions.add(secret)

  def redact(self, text: str) -> str:
    """
    Replace whole tokens equal to a registered string. Tokens are delimited by
    whitespace or quotes, so codes and words that merely contain it are kept.
    """
    for secret in self._redactions:
      text = re.sub(rf"(?<![^\s'\"]){re.escape(secret)}(?![^\s'\"])", REDACTED, text)
    return text

  def _store_log(self, entry: LogEntry) -> None:
    with self._logs_lock:
      self._logs.append(entry)
      if len(self._logs) > self._max_logs:
        del self._logs[:len(self._logs) - self._max_logs]

  def _handle_console_output(self, entry: LogEntry, console_enabled: bool, end: str = "\n") -> None:
    if not console_enabled:
      return
    if entry.level == LogLevel.DEBUG and not self._debug_enabled:
      return
    console.print(str(entry), end=end)

  def get_logger(self, prefix: str, console_enabled: bool = True) -> 'LoggerInstance':
    """
    Get a logger instance with specific configuration.

    Args:
        prefix (str): Prefix to be added to each message.
        console_enabled (bool, optional): Prints to console or not. Defaults to True.
    """
    with self._instances_lock:
      if prefix not in self._instances:
        instance = LoggerInstance(prefix, console_enabled)
        instance._set_parent(self)
        self._instances[prefix] = instance

      return self._instances[prefix]

  def get_logs(self, level: Optional[LogLevel] = None, prefix: Optional[str] = None, start_time: Optional[datetime] = None) -> List[LogEntry]:
    """
    Retrieve stored logs with optional filtering.

    Args:
        level: Filter by log level
        prefix: Filter by prefix
        start_time: Filter logs after this time

    Returns:
        List of LogEntry objects matching the criteria
    """
    with self._logs_lock:
      filtered_logs = self._logs.copy()

    if level is not None:
      filtered_logs = [log for log in filtered_logs if log.level == level]

    if prefix is not None:
      filtered_logs = [log for log in filtered_logs if log.prefix == prefix]

    if start_time is not None:
      filtered_logs = [log for log in filtered_logs if log.timestamp >= start_time]

    return filtered_logs


class LoggerInstance:
  """
  Local logger instance with a specific prefix for one component.
  """
  def __init__(self, prefix: str, console_enabled: bool = True):
    self.prefix = prefix
    self.console_enabled = console_enabled
    self._parent_logger: Logger | None = None

  def _set_parent(self, parent_logger: 'Logger') -> None:
    self._parent_logger = parent_logger

  def _log(self, level: LogLevel, message: str, end: str = "\n") -> None:
    if self._parent_logger is None:
      raise RuntimeError("Logger instance not properly initialized")

    entry = LogEntry(
      timestamp=datetime.now(),
      level=level,
      prefix=self.prefix,
      message=self._parent_logger.redact(message)
    )
    self._parent_logger._store_log(entry)
    self._parent_logger._handle_console_output(entry, self.console_enabled, end)

  def debug(self, message: str, end: str = "\n") -> None:
      self._log(LogLevel.DEBUG, message, end)

  def info(self, message: str, end: str = "\n") -> None:
      self._log(LogLevel.INFO, message, end)

  def warning(self, message: str, end: str = "\n") -> None:
      self._log(LogLevel.WARNING, message, end)

  def error(self, message: str, end: str = "\n") -> None:
      self._log(LogLevel.ERROR, message, end)

