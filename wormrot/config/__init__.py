from .config import (
    VERSION,
    DEFAULT_MODULO,
    MIN_MODULO,
    BOUNDARY_THRESHOLD,
    PREFIX_MODULUS,
    PREFIX_DIGITS,
    DEFAULT_TIMEOUT,
    ENCODER_TIMEOUT,
    DIRECTORY_HASH_SENTINEL,
    COUNT_FIELD,
    RotatorConfig,
)

__all__ = [
    "VERSION",
    "DEFAULT_MODULO",
    "MIN_MODULO",
    "BOUNDARY_THRESHOLD",
    "PREFIX_MODULUS",
    "PREFIX_DIGITS",
    "DEFAULT_TIMEOUT",
    "ENCODER_TIMEOUT",
    "DIRECTORY_HASH_SENTINEL",
    "COUNT_FIELD",
    "RotatorConfig",
]
