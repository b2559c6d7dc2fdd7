"""
Comparison helpers for hash strings.

Distance is the number of differing bits between two 64-bit hashes;
similarity is 64 minus that distance. These are consumer-side helpers:
the pipeline never compares hashes itself.
"""

from __future__ import annotations

import imagehash

from .config import HASH_BITS
from .hashing.bits import is_hash_string
from .models import HashSet


def _parse(hash_string: str) -> imagehash.ImageHash:
    if not is_hash_string(hash_string):
        raise ValueError(f"Not a 16-character hex hash: {hash_string!r}")
    return imagehash.hex_to_hash(hash_string)


def hamming_distance(a: str, b: str) -> int:
    """
    Number of differing bits between two hash strings.

    Raises:
        ValueError: If either value is not a 16-character hex hash
    """
    return int(_parse(a) - _parse(b))


def similarity(a: str, b: str) -> int:
    """64 - hamming_distance(a, b)."""
    return HASH_BITS - hamming_distance(a, b)


def compare_hash_sets(a: HashSet, b: HashSet) -> dict[str, int]:
    """
    Per-algorithm Hamming distances between two hash sets.

    Returns:
        Dict keyed by the external names (aHash, pHash, dHash, wHash)
    """
    left, right = a.to_dict(), b.to_dict()
    return {key: hamming_distance(left[key], right[key]) for key in left}


__all__ = ['hamming_distance', 'similarity', 'compare_hash_sets']
