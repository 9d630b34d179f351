"""Content digests for registry artifacts."""

import hashlib
from pathlib import Path

from thynkai.formats import SHA256_PREFIX


def compute_digest(path: Path) -> str:
    """Compute the sha256:<hex> digest of a file.

    The whole file is read into memory; artifacts large enough for that to
    matter are not expected to be digested locally.

    Args:
        path: File to digest.

    Returns:
        "sha256:" followed by 64 lowercase hex characters.

    Raises:
        OSError: If the file cannot be read.
    """
    return SHA256_PREFIX + hashlib.sha256(path.read_bytes()).hexdigest()
