"""
Difference hash (dHash).

Encodes the sign of the horizontal gradient: on a 9x8 grid each row
yields 8 bits, one per pair of neighbouring cells. Robust to global
brightness and contrast shifts.
"""

from __future__ import annotations

import numpy as np

from ..config import DHASH_SIZE
from ..decoder import PixelBuffer
from .bits import encode
from .preprocess import to_grayscale


def difference_hash_bits(matrix: np.ndarray) -> np.ndarray:
    """
    Bit (r, c) is set iff matrix[r][c] > matrix[r][c + 1].

    Args:
        matrix: Grayscale grid with one more column than bits per row

    Returns:
        Flattened bool array in row-major order
    """
    grid = np.asarray(matrix, dtype=np.int64)
    return (grid[:, :-1] > grid[:, 1:]).ravel()


def difference_hash(pixels: PixelBuffer | np.ndarray) -> str:
    """dHash of a decoded image as a 16-character hex string."""
    width, height = DHASH_SIZE
    return encode(difference_hash_bits(to_grayscale(pixels, width, height)))


__all__ = ['difference_hash', 'difference_hash_bits']
