"""
Error types raised by wormrot.
Every error maps to a distinct process exit code so operators and scripts can
tell "wait and retry" apart from "fix the environment".
"""

from typing import List, Optional, Sequence


class WormrotError(Exception):
    """Base class for all fatal run errors."""
    exit_code = 1


class UsageError(WormrotError):
    """Bad command-line input (nothing valid to send, unknown option)."""
    exit_code = 1


class ConfigurationError(WormrotError):
    """Missing secret, modulo below minimum, unusable executables."""
    exit_code = 2


class BoundaryUnsafeError(WormrotError):
    """The run started too close to a rotation window boundary."""
    exit_code = 3

    def __init__(self, remainder: int, seconds_to_wait: int):
        self.remainder = remainder
        self.seconds_to_wait = seconds_to_wait
        super().__init__(
            f"Too close to the next time period boundary (remainder {remainder}s). "
            f"Please wait at least {seconds_to_wait} seconds before starting the transfer."
        )


class CodeGenerationError(WormrotError):
    """The mnemonic encoder or the digest step failed."""
    exit_code = 4


class ProtocolViolationError(WormrotError):
    """A received payload is malformed or out of sequence."""
    exit_code = 5


class TransferToolError(WormrotError):
    """The external transfer tool exited with a non-zero status."""
    exit_code = 6

    def __init__(self, message: str, command: Optional[Sequence[str]] = None,
                 returncode: Optional[int] = None):
        self.command: List[str] = list(command or [])
        self.returncode = returncode
        super().__init__(message)


class TransferTimeoutError(TransferToolError):
    """An invocation of the transfer tool exceeded its timeout."""


class IntegrityError(WormrotError):
    """A received item failed verification."""
    exit_code = 7

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


EXIT_INTERRUPTED = 130
