import os
import shlex
import shutil
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from wormrot.errors import ConfigurationError

VERSION = "1.3.0"

# --- Rotation ---
DEFAULT_MODULO = 60         # seconds
MIN_MODULO = 20             # seconds
BOUNDARY_THRESHOLD = 10     # seconds after a window starts before codes are trusted
PREFIX_MODULUS = 999
PREFIX_DIGITS = 5

# --- External tools ---
UVX_WORMHOLE_BIN = "uvx --quiet --from magic-wormhole@latest wormhole"
UVX_HRS_BIN = "uvx --quiet HumanReadableSeed@latest"
PLAIN_WORMHOLE_BIN = "wormhole"
PLAIN_HRS_BIN = "HumanReadableSeed"
DEFAULT_SEND_ARGS = "--no-qr --hide-progress"
DEFAULT_RECEIVE_ARGS = "--accept-file --hide-progress"
DEFAULT_TIMEOUT = 600       # seconds per transfer tool invocation
ENCODER_TIMEOUT = 120       # seconds per encoder invocation

# --- Wire format ---
DIRECTORY_HASH_SENTINEL = "DIRECTORY_HASH_SKIPPED"
COUNT_FIELD = "number_of_files"

ENV_PREFIX = "WORMROT_"

_TRUTHY = {"1", "true", "yes", "on"}


def _default_bins() -> Tuple[str, str]:
    if shutil.which("uvx"):
        return UVX_WORMHOLE_BIN, UVX_HRS_BIN
    return PLAIN_WORMHOLE_BIN, PLAIN_HRS_BIN


def _split(name: str, value: str) -> Tuple[str, ...]:
    try:
        return tuple(shlex.split(value))
    except ValueError as e:
        raise ConfigurationError(f"{name} could not be parsed: {e}")


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got '{value}'")


@dataclass(frozen=True)
class RotatorConfig:
    """Immutable run configuration, validated on construction."""
    secret: str
    modulo: int = DEFAULT_MODULO
    wormhole_bin: Tuple[str, ...] = tuple(shlex.split(PLAIN_WORMHOLE_BIN))
    hrs_bin: Tuple[str, ...] = tuple(shlex.split(PLAIN_HRS_BIN))
    send_args: Tuple[str, ...] = tuple(shlex.split(DEFAULT_SEND_ARGS))
    receive_args: Tuple[str, ...] = tuple(shlex.split(DEFAULT_RECEIVE_ARGS))
    timeout: int = DEFAULT_TIMEOUT
    debug: bool = False

    def __post_init__(self):
        if not self.secret:
            raise ConfigurationError(f"{ENV_PREFIX}SECRET cannot be empty")
        if isinstance(self.modulo, bool) or not isinstance(self.modulo, int):
            raise ConfigurationError(f"{ENV_PREFIX}MODULO must be an integer")
        if self.modulo < MIN_MODULO:
            raise ConfigurationError(f"{ENV_PREFIX}MODULO must be at least {MIN_MODULO}")
        if self.timeout <= 0:
            raise ConfigurationError(f"{ENV_PREFIX}TIMEOUT must be a positive number of seconds")
        if not self.wormhole_bin:
            raise ConfigurationError(f"{ENV_PREFIX}BIN cannot be empty")
        if not self.hrs_bin:
            raise ConfigurationError(f"{ENV_PREFIX}HRS_BIN cannot be empty")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'RotatorConfig':
        """
        Build the configuration from WORMROT_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            RotatorConfig: validated configuration

        Raises:
            ConfigurationError: if any value is missing or out of range
        """
        env = os.environ if environ is None else environ
        default_bin, default_hrs = _default_bins()

        def get(key: str, default: str) -> str:
            return env.get(ENV_PREFIX + key) or default

        return cls(
            secret=env.get(ENV_PREFIX + "SECRET", ""),
            modulo=_parse_int(ENV_PREFIX + "MODULO", get("MODULO", str(DEFAULT_MODULO))),
            wormhole_bin=_split(ENV_PREFIX + "BIN", get("BIN", default_bin)),
            hrs_bin=_split(ENV_PREFIX + "HRS_BIN", get("HRS_BIN", default_hrs)),
            send_args=_split(ENV_PREFIX + "DEFAULT_SEND_ARGS",
                             get("DEFAULT_SEND_ARGS", DEFAULT_SEND_ARGS)),
            receive_args=_split(ENV_PREFIX + "DEFAULT_RECEIVE_ARGS",
                                get("DEFAULT_RECEIVE_ARGS", DEFAULT_RECEIVE_ARGS)),
            timeout=_parse_int(ENV_PREFIX + "TIMEOUT", get("TIMEOUT", str(DEFAULT_TIMEOUT))),
            debug=env.get(ENV_PREFIX + "DEBUG", "").strip().lower() in _TRUTHY,
        )

    def check_executables(self) -> None:
        """Fail early when the transfer tool or encoder cannot be found on PATH."""
        for name, argv in ((ENV_PREFIX + "BIN", self.wormhole_bin),
                           (ENV_PREFIX + "HRS_BIN", self.hrs_bin)):
            if shutil.which(argv[0]) is None:
                raise ConfigurationError(
                    f"'{argv[0]}' (from {name}) is not installed or not on PATH. Please install it first."
                )
