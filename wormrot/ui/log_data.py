from datetime import datetime
from dataclasses import dataclass
from enum import Enum
from rich.console import Console
from rich.markup import escape

REDACTED = "***"

LOG_PRINT_DATETIME = False

# Maximum number of entries kept in memory
MAX_STORED_LOGS = 500

# Codes and progress go to stderr so stdout stays clean for piping
console = Console(stderr=True, highlight=False)

class LogLevel(Enum):
  """
  Enum for different log levels.
  """
  DEBUG =      "[blue][     ][/]"
  INFO =      "[green][  -  ][/]"
  WARNING =  "[yellow][ /!\\ ][/]"
  ERROR =    "[red][ !!! ][/]"

@dataclass
class LogEntry:
  """
  A data class that stores related useful logging data
  """
  timestamp: datetime
  level: LogLevel
  prefix: str
  message: str

  def __str__(self) -> str:
    """Generates a string from data

    Returns:
        str: formatted string, with rich markup
    """
    timeStr = f"[dim][{self.timestamp.strftime('%H:%M:%S.%f')[:-3]}][/] " if LOG_PRINT_DATETIME else ""
    return f"{timeStr}{self.prefix} {self.level.value} {escape(self.message)}"

  def to_dict(self) -> dict:
    return {
      'timestamp': self.timestamp.isoformat(),
      'level': self.level.name,
      'prefix': self.prefix,
      'message': self.message
    }

  @classmethod
  def from_dict(cls, data: dict) -> 'LogEntry':
    """Create LogEntry from dictionary.

    Args:
        data (dict): dictionary containing valid LogEntry Values

    Returns:
        LogEntry: LogEntry class created from the dict
    """
    return cls(
      timestamp=datetime.fromisoformat(data['timestamp']),
      level=LogLevel[data['level']],
      prefix=data['prefix'],
      message=data['message']
    )
