from .digest import sha256_hex, sha256_file
from .scheduler import RotationScheduler, check_boundary, time_window
from .code_generator import CodeGenerator, MnemonicEncoder, generate_code, period_key, code_prefix

__all__ = [
    "sha256_hex",
    "sha256_file",
    "RotationScheduler",
    "check_boundary",
    "time_window",
    "CodeGenerator",
    "MnemonicEncoder",
    "generate_code",
    "period_key",
    "code_prefix",
]
