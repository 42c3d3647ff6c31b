"""File fingerprinting: content hash plus tracked metadata.

Submodules:
    models -- Fingerprint value type
    engine -- compute_fingerprint and hash_contents
"""

from fimbl.core.fingerprint.models import HASH_SIZE, Fingerprint
from fimbl.core.fingerprint.engine import CHUNK_SIZE, compute_fingerprint, hash_contents

__all__ = [
    "CHUNK_SIZE",
    "HASH_SIZE",
    "Fingerprint",
    "compute_fingerprint",
    "hash_contents",
]
