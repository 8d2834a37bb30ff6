"""
Client for the HumanReadableSeed command line tool, which turns a hex digest
into a deterministic sequence of words.
"""

from typing import List, Optional, Sequence

from wormrot.config import ENCODER_TIMEOUT
from wormrot.errors import CodeGenerationError, TransferToolError
from .external_command import ExternalCommand


class HumanReadableSeedEncoder:
    """Runs `<hrs_bin> toread <hex>` and splits its output into words."""

    def __init__(self, hrs_bin: Sequence[str], timeout: Optional[float] = ENCODER_TIMEOUT,
                 command: Optional[ExternalCommand] = None):
        self.command = command or ExternalCommand(hrs_bin, timeout=timeout)

    def encode(self, hex_digest: str) -> List[str]:
        try:
            result = self.command.run(["toread", hex_digest], capture=True)
        except TransferToolError as e:
            raise CodeGenerationError(f"Failed to generate mnemonic words: {e}") from e

        if not result.ok:
            raise CodeGenerationError(
                f"Failed to generate mnemonic words using {self.command.describe(self.command.base_argv)} "
                f"(exit code {result.returncode}): {result.stderr.strip()}"
            )

        words = result.stdout.split()
        if not words:
            raise CodeGenerationError(
                f"Failed to generate mnemonic words using {self.command.describe(self.command.base_argv)}: empty output"
            )
        return words
