"""
Deterministic mapping from (BaseTimestamp, RotationModulo, secret, suffix) to
a transfer code of the form "<prefix>-<word>-<word>-...".
"""

from typing import Optional, Protocol, Sequence

from wormrot.config import PREFIX_DIGITS, PREFIX_MODULUS
from wormrot.errors import CodeGenerationError
from wormrot.ui.logging import LoggerInstance
from .digest import decimal_digits, sha256_hex
from .scheduler import RotationScheduler, time_window

BASE_SUFFIX = ""
META_SUFFIX = "meta"
DATA_SUFFIX = "data"


class MnemonicEncoder(Protocol):
    def encode(self, hex_digest: str) -> Sequence[str]:
        ...


def period_key(base: int, modulo: int, secret: str, suffix: str = BASE_SUFFIX) -> str:
    return f"{time_window(base, modulo)}{secret}{suffix}"


def code_prefix(mnemonic_words: str) -> int:
    """
    Numeric channel prefix derived from the mnemonic.

    The first PREFIX_DIGITS decimal digits of the mnemonic's hex digest are
    read as an integer (fewer when the digest holds fewer; none reads as 0)
    and reduced modulo PREFIX_MODULUS.
    """
    digits = decimal_digits(sha256_hex(mnemonic_words))[:PREFIX_DIGITS]
    return int(digits or "0") % PREFIX_MODULUS


def generate_code(base: int, modulo: int, secret: str, suffix: str,
                  encoder: MnemonicEncoder) -> str:
    """
    Derive the code for one suffix. Pure apart from the encoder call.

    Raises:
        CodeGenerationError: if the encoder fails or returns no words
    """
    key_digest = sha256_hex(period_key(base, modulo, secret, suffix))
    try:
        words = [w for w in encoder.encode(key_digest) if w]
    except CodeGenerationError:
        raise
    except (OSError, ValueError) as e:
        raise CodeGenerationError(f"Failed to generate mnemonic words: {e}") from e
    if not words:
        raise CodeGenerationError("Mnemonic encoder returned no words")

    mnemonic_words = "-".join(words)
    return f"{code_prefix(mnemonic_words)}-{mnemonic_words}"


class CodeGenerator:
    """Generates the codes of one run from its scheduler's base timestamp."""

    def __init__(self, scheduler: RotationScheduler, secret: str, encoder: MnemonicEncoder,
                 log: Optional[LoggerInstance] = None):
        self.scheduler = scheduler
        self.secret = secret
        self.encoder = encoder
        self.logger = log or scheduler.logger

    def generate(self, suffix: str) -> str:
        code = generate_code(self.scheduler.base, self.scheduler.modulo, self.secret, suffix, self.encoder)
        self.logger.debug(f"Derived code for suffix '{suffix or '<base>'}'")
        return code

    def base_code(self) -> str:
        """The first code of a run; the only one that is boundary-checked."""
        self.scheduler.check_boundary()
        return self.generate(BASE_SUFFIX)

    def meta_code(self, index: int) -> str:
        return self.generate(f"{META_SUFFIX}{index}")

    def data_code(self, index: int) -> str:
        return self.generate(f"{DATA_SUFFIX}{index}")
