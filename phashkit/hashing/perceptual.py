"""
Perceptual hash (pHash).

Implementation follows the classic DCT approach
(https://www.hackerfactor.com/blog/index.php?/archives/432-Looks-Like-It.html):

1. Reduce the image to a 32x32 grayscale grid.
2. Apply a separable 2D DCT-II (rows, then columns).
3. Keep the top-left 8x8 block of low frequencies.
4. Threshold the block against the median of its 63 AC coefficients.

The DC term at [0, 0] only measures overall brightness. It is left out of
the median and its bit is always 0, so the hash carries 63 informative
bits in a 64-bit value.
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np

from ..config import PHASH_SIZE, PHASH_BLOCK, DCT_DECIMALS
from ..decoder import PixelBuffer
from .bits import encode
from .preprocess import to_grayscale


@lru_cache(maxsize=8)
def dct_matrix(n: int) -> np.ndarray:
    """
    Orthonormal DCT-II basis of size n x n in float64.

    Row k holds s_k * cos(pi * (2j + 1) * k / (2n)) for j in [0, n).
    """
    k = np.arange(n, dtype=np.float64)[:, None]
    j = np.arange(n, dtype=np.float64)[None, :]
    basis = np.cos(np.pi * (2 * j + 1) * k / (2 * n))
    basis[0, :] *= np.sqrt(1.0 / n)
    basis[1:, :] *= np.sqrt(2.0 / n)
    basis.setflags(write=False)
    return basis


def dct2(matrix: np.ndarray) -> np.ndarray:
    """2D DCT-II of a square or rectangular matrix."""
    grid = np.asarray(matrix, dtype=np.float64)
    rows = grid @ dct_matrix(grid.shape[1]).T
    return dct_matrix(grid.shape[0]) @ rows


def perceptual_hash_bits(matrix: np.ndarray, block: int = PHASH_BLOCK) -> np.ndarray:
    """
    Median-threshold the low-frequency DCT block of a grayscale grid.

    Args:
        matrix: Grayscale grid, at least block x block
        block: Side of the low-frequency block kept

    Returns:
        Flattened bool array of block * block bits, row-major
    """
    grid = np.asarray(matrix)
    if grid.shape[0] < block or grid.shape[1] < block:
        raise ValueError(f"pHash needs at least a {block}x{block} grid, got {grid.shape}")

    # Snap float residue so analytically-zero coefficients compare equal
    coeffs = np.round(dct2(grid)[:block, :block], DCT_DECIMALS).ravel()
    median = np.median(coeffs[1:])
    bits = coeffs > median
    bits[0] = False
    return bits


def perceptual_hash(pixels: PixelBuffer | np.ndarray) -> str:
    """pHash of a decoded image as a 16-character hex string."""
    width, height = PHASH_SIZE
    return encode(perceptual_hash_bits(to_grayscale(pixels, width, height)))


__all__ = ['perceptual_hash', 'perceptual_hash_bits', 'dct2', 'dct_matrix']
