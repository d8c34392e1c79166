"""
Deterministic hashing for sweep receipts.

Provides:
- hash64: SHA-256 canonical hash truncated to 64-bit int
- signature_hash: hash64 of a base's neighborhood signature

No use of Python's built-in hash() (salted per process).
"""

import hashlib
import json
from typing import Any, Sequence

from .types import Hash64


def hash64(obj: Any) -> Hash64:
    """
    Deterministic 64-bit hash using SHA-256 on canonical JSON.

    - Canonical JSON (sorted keys, no whitespace)
    - First 8 bytes of the digest, big-endian

    Args:
        obj: Any JSON-serializable Python object

    Returns:
        64-bit integer hash (0 to 2^64-1)

    Examples:
        >>> hash64([1, 2, 0]) == hash64([1, 2, 0])
        True
    """
    canonical_json = json.dumps(obj, sort_keys=True, separators=(",", ":"))
    sha = hashlib.sha256(canonical_json.encode("utf-8"))
    return Hash64(int.from_bytes(sha.digest()[:8], byteorder="big", signed=False))


def signature_hash(base: int, codes: Sequence[int]) -> Hash64:
    """
    Hash a base together with its signature (tri codes per neighborhood).

    The base is part of the payload so equal code sequences from
    different bases never collide by construction.
    """
    return hash64({"base": int(base), "signature": [int(c) for c in codes]})
