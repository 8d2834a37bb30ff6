"""
Typed wrapper around external process invocations.
Arguments are always passed as a list, never through a shell.
"""

import subprocess
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from wormrot.errors import TransferTimeoutError, TransferToolError


@dataclass
class CommandResult:
    """Outcome of one finished invocation."""
    argv: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ExternalCommand:
    """A base argv (e.g. `uvx --quiet --from magic-wormhole@latest wormhole`) plus a timeout."""

    def __init__(self, base_argv: Sequence[str], timeout: Optional[float] = None,
                 redact: Optional[Callable[[str], str]] = None):
        if not base_argv:
            raise ValueError("base_argv cannot be empty")
        self.base_argv = list(base_argv)
        self.timeout = timeout
        self._redact = redact or (lambda text: text)

    def describe(self, argv: Sequence[str]) -> str:
        """Printable command line with secrets scrubbed."""
        return self._redact(" ".join(argv))

    def run(self, args: Sequence[str], capture: bool = False, cwd: Optional[str] = None) -> CommandResult:
        """
        Run the command with extra arguments and wait for it to finish.

        Args:
            args: Arguments appended to the base argv
            capture: Capture stdout/stderr as text instead of passing them through
            cwd: Working directory for the child process

        Returns:
            CommandResult with the exit status and any captured output

        Raises:
            TransferTimeoutError: if the child outlives the timeout (it is killed)
            TransferToolError: if the executable cannot be started
        """
        argv = self.base_argv + list(args)
        try:
            completed = subprocess.run(
                argv,
                capture_output=capture,
                text=True,
                timeout=self.timeout,
                cwd=cwd,
            )
        except subprocess.TimeoutExpired as e:
            raise TransferTimeoutError(
                f"Command timed out after {self.timeout} seconds: {self.describe(argv)}",
                command=[self._redact(a) for a in argv],
            ) from e
        except OSError as e:
            raise TransferToolError(
                f"Could not start command '{self.describe(argv)}': {e}",
                command=[self._redact(a) for a in argv],
            ) from e

        return CommandResult(
            argv=argv,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    def check(self, result: CommandResult, what: str) -> CommandResult:
        """Turn a non-zero exit into a TransferToolError naming the failed step."""
        if not result.ok:
            detail = self._redact(result.stderr.strip())
            message = (f"Failed to {what}: command exited with code {result.returncode}. "
                       f"Failed command: {self.describe(result.argv)}")
            if detail:
                message += f"\n{detail}"
            raise TransferToolError(
                message,
                command=[self._redact(a) for a in result.argv],
                returncode=result.returncode,
            )
        return result
