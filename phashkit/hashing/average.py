"""
Average hash (aHash).

Each bit says whether a cell of the 8x8 grayscale grid is brighter than
the grid mean. Cheap, but any brightness change that moves pixels across
the mean flips bits.
"""

from __future__ import annotations

import numpy as np

from ..config import AHASH_SIZE, AHASH_FLAT_THRESHOLD
from ..decoder import PixelBuffer
from .bits import encode
from .preprocess import to_grayscale


def average_hash_bits(matrix: np.ndarray) -> np.ndarray:
    """
    Threshold a grayscale grid against its mean.

    Bit i is set iff sample i is strictly greater than the mean, so samples
    equal to the mean give 0. The comparison is done as
    ``sample * n > sum`` in integers. A flat grid is thresholded against
    AHASH_FLAT_THRESHOLD instead, so uniform images still encode their
    brightness.

    Args:
        matrix: Integer grayscale grid

    Returns:
        Flattened bool array in row-major order
    """
    samples = np.asarray(matrix, dtype=np.int64).ravel()
    if samples.min() == samples.max():
        return samples > AHASH_FLAT_THRESHOLD
    return samples * samples.size > samples.sum()


def average_hash(pixels: PixelBuffer | np.ndarray) -> str:
    """aHash of a decoded image as a 16-character hex string."""
    width, height = AHASH_SIZE
    return encode(average_hash_bits(to_grayscale(pixels, width, height)))


__all__ = ['average_hash', 'average_hash_bits']
