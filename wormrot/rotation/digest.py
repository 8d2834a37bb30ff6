"""
SHA-256 helpers shared by the code pipeline and item verification.
"""

import hashlib
from typing import Union

HASH_CHUNK_SIZE = 1024 * 1024


def sha256_hex(data: Union[str, bytes]) -> str:
    """
    Hash a string or byte string.

    Args:
        data: Content to hash; strings are UTF-8 encoded first

    Returns:
        Lowercase hex digest
    """
    if isinstance(data, str):
        data = data.encode('utf-8')
    return hashlib.sha256(data).hexdigest()


def sha256_file(path: str) -> str:
    """Hash a file's content without loading it into memory at once."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(HASH_CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


def decimal_digits(hex_digest: str) -> str:
    """Keep only the decimal digit characters of a hex digest, in order."""
    return "".join(ch for ch in hex_digest if ch.isdigit())
