"""
Grayscale conversion and resampling for the hashing algorithms.

Luminance is computed with integer BT.601 weights and kept scaled by
LUMA_SCALE, so no rounding happens before resampling. Resampling is an
exact area average: every source pixel and every target cell is laid on a
common integer grid, so overlap weights are integers and identical inputs
always produce identical outputs, on any platform.

Alpha is ignored; every pixel is treated as fully opaque. Decoders have
already box-reduced large images, so these planes stay small.
"""

from __future__ import annotations

import numpy as np

from ..config import LUMA_WEIGHTS, LUMA_SCALE
from ..decoder import PixelBuffer
from ..errors import DecodeError


def _check_samples(samples: np.ndarray) -> None:
    if samples.ndim not in (2, 3) or samples.size == 0:
        raise DecodeError(f"Cannot interpret sample array of shape {samples.shape}")
    height, width = samples.shape[:2]
    if width == 0 or height == 0:
        raise DecodeError(f"Degenerate image dimensions {width}x{height}")


def to_luminance(pixels: PixelBuffer | np.ndarray) -> np.ndarray:
    """
    Convert RGB(A) samples to a luminance plane.

    Args:
        pixels: PixelBuffer, or an array of shape (h, w), (h, w, 3) or (h, w, 4)

    Returns:
        int64 array of shape (h, w) holding luma * LUMA_SCALE

    Raises:
        DecodeError: If the buffer is empty or has zero dimensions
    """
    samples = pixels.samples if isinstance(pixels, PixelBuffer) else np.asarray(pixels)
    _check_samples(samples)

    if samples.ndim == 2:
        return samples.astype(np.int64) * LUMA_SCALE
    if samples.shape[2] == 1:
        return samples[:, :, 0].astype(np.int64) * LUMA_SCALE
    if samples.shape[2] < 3:
        raise DecodeError(f"Unsupported channel count {samples.shape[2]}")

    # Widen one channel at a time; alpha is never copied
    luma = np.zeros(samples.shape[:2], dtype=np.int64)
    for channel, weight in enumerate(LUMA_WEIGHTS):
        luma += weight * samples[:, :, channel].astype(np.int64)
    return luma


def _area_weights(src: int, dst: int) -> np.ndarray:
    """
    Integer overlap matrix of shape (dst, src).

    Source pixel i spans [i*dst, (i+1)*dst) and target cell j spans
    [j*src, (j+1)*src) on a grid of src*dst units; each row sums to src.
    """
    src_edges = np.arange(src + 1, dtype=np.int64) * dst
    dst_edges = np.arange(dst + 1, dtype=np.int64) * src
    lo = np.maximum(dst_edges[:-1, None], src_edges[None, :-1])
    hi = np.minimum(dst_edges[1:, None], src_edges[None, 1:])
    return np.clip(hi - lo, 0, None)


def resize_area(plane: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Resample a luminance plane to width x height by area averaging.

    Args:
        plane: int64 luminance plane from to_luminance()
        width: Target width
        height: Target height

    Returns:
        uint8 array of shape (height, width), rounded half-up
    """
    if width <= 0 or height <= 0:
        raise DecodeError(f"Invalid target size {width}x{height}")
    _check_samples(plane)
    src_h, src_w = plane.shape

    rows = _area_weights(src_h, height)
    cols = _area_weights(src_w, width)
    total = rows @ plane.astype(np.int64) @ cols.T

    denom = src_h * src_w * LUMA_SCALE
    rounded = (2 * total + denom) // (2 * denom)
    return np.clip(rounded, 0, 255).astype(np.uint8)


def to_grayscale(pixels: PixelBuffer | np.ndarray, width: int, height: int) -> np.ndarray:
    """Grayscale matrix of the given size from RGB(A) samples."""
    return resize_area(to_luminance(pixels), width, height)


def to_grayscale_square(pixels: PixelBuffer | np.ndarray, side: int) -> np.ndarray:
    """Grayscale side x side matrix from RGB(A) samples."""
    return to_grayscale(pixels, side, side)


__all__ = [
    'to_luminance',
    'resize_area',
    'to_grayscale',
    'to_grayscale_square',
]
