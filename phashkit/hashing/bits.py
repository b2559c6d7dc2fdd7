"""
Bit packing and hex encoding shared by all hash algorithms.

Bit 0 of a bit vector is the most significant bit of the packed value;
the hex form is always HASH_HEX_LENGTH lowercase characters.
"""

from __future__ import annotations

import re
from typing import Iterable, Union

import numpy as np

from ..config import HASH_BITS, HASH_HEX_LENGTH

_HASH_RE = re.compile(rf'^[0-9a-f]{{{HASH_HEX_LENGTH}}}$')

BitsLike = Union[np.ndarray, Iterable[bool]]


def pack_bits(bits: BitsLike) -> int:
    """
    Pack a 64-entry bit vector into an unsigned integer, MSB first.

    Args:
        bits: Any 64 truthy/falsy values (flattened row-major if 2D)

    Returns:
        Integer in [0, 2**64)

    Raises:
        ValueError: If the vector does not hold exactly 64 bits
    """
    flat = np.asarray(bits, dtype=bool).ravel()
    if flat.size != HASH_BITS:
        raise ValueError(f"Expected {HASH_BITS} bits, got {flat.size}")
    return int.from_bytes(np.packbits(flat).tobytes(), 'big')


def encode(bits: BitsLike) -> str:
    """Render a 64-bit vector as a 16-character lowercase hex string."""
    return format(pack_bits(bits), f'0{HASH_HEX_LENGTH}x')


def is_hash_string(value: object) -> bool:
    """Check that value is a well-formed hash string."""
    return isinstance(value, str) and _HASH_RE.match(value) is not None


def decode(hash_string: str) -> np.ndarray:
    """
    Inverse of encode().

    Returns:
        bool array of length 64, index 0 = most significant bit

    Raises:
        ValueError: If hash_string is not 16 lowercase hex characters
    """
    if not is_hash_string(hash_string):
        raise ValueError(f"Not a {HASH_HEX_LENGTH}-character hex hash: {hash_string!r}")
    packed = np.frombuffer(bytes.fromhex(hash_string), dtype=np.uint8)
    return np.unpackbits(packed).astype(bool)


__all__ = ['pack_bits', 'encode', 'decode', 'is_hash_string']
