"""
Wavelet hash (wHash).

A 32x32 grayscale grid goes through a fixed number of 2D Haar levels,
keeping only the approximation (LL) band each time, down to 8x8. The
band is then thresholded against its median, like pHash but with a
transform that needs no trigonometry.
"""

from __future__ import annotations

import numpy as np

from ..config import WHASH_SIZE, WHASH_LEVELS
from ..decoder import PixelBuffer
from .bits import encode
from .preprocess import to_grayscale


def haar_approximation(matrix: np.ndarray) -> np.ndarray:
    """
    One level of the orthonormal 2D Haar transform, LL band only.

    Each 2x2 block (a, b, c, d) becomes (a + b + c + d) / 2.
    """
    grid = np.asarray(matrix, dtype=np.float64)
    h, w = grid.shape
    if h % 2 or w % 2:
        raise ValueError(f"Haar step needs even dimensions, got {w}x{h}")
    return (grid[0::2, 0::2] + grid[0::2, 1::2] + grid[1::2, 0::2] + grid[1::2, 1::2]) / 2.0


def wavelet_hash_bits(matrix: np.ndarray, levels: int = WHASH_LEVELS) -> np.ndarray:
    """
    Median-threshold the Haar approximation band of a grayscale grid.

    Args:
        matrix: Square grid whose side is a power of two
        levels: Number of Haar levels to apply

    Returns:
        Flattened bool array, row-major
    """
    grid = np.asarray(matrix, dtype=np.float64)
    side = grid.shape[0]
    if grid.ndim != 2 or grid.shape[1] != side or side & (side - 1):
        raise ValueError(f"wHash needs a square power-of-two grid, got {grid.shape}")
    if side >> levels < 8:
        raise ValueError(f"{levels} Haar levels on a {side}x{side} grid leave fewer than 8x8 coefficients")

    for _ in range(levels):
        grid = haar_approximation(grid)

    coeffs = grid.ravel()
    return coeffs > np.median(coeffs)


def wavelet_hash(pixels: PixelBuffer | np.ndarray) -> str:
    """wHash of a decoded image as a 16-character hex string."""
    width, height = WHASH_SIZE
    return encode(wavelet_hash_bits(to_grayscale(pixels, width, height)))


__all__ = ['wavelet_hash', 'wavelet_hash_bits', 'haar_approximation']
