"""
Hashing package for phashkit.

Provides the four perceptual hash algorithms and the shared
preprocessing and encoding steps.

Public API:
- average_hash / difference_hash / perceptual_hash / wavelet_hash:
  hash a decoded image to a 16-character hex string
- *_bits variants: threshold an already-prepared grayscale grid
- to_grayscale / to_grayscale_square: preprocessing
- encode / decode / pack_bits / is_hash_string: bit vector encoding
- compute_hash_set: all four hashes of one decoded image
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable

import numpy as np

from ..config import AHASH_SIZE, DHASH_SIZE, PHASH_SIZE, WHASH_SIZE
from ..decoder import PixelBuffer
from ..errors import InternalComputationError
from ..models import HashSet
from .average import average_hash, average_hash_bits
from .bits import encode, decode, pack_bits, is_hash_string
from .difference import difference_hash, difference_hash_bits
from .perceptual import perceptual_hash, perceptual_hash_bits
from .preprocess import to_luminance, resize_area, to_grayscale, to_grayscale_square
from .wavelet import wavelet_hash, wavelet_hash_bits

# field name -> (grid size, bit extractor)
ALGORITHMS: dict[str, tuple[tuple[int, int], Callable[[np.ndarray], np.ndarray]]] = {
    'a_hash': (AHASH_SIZE, average_hash_bits),
    'p_hash': (PHASH_SIZE, perceptual_hash_bits),
    'd_hash': (DHASH_SIZE, difference_hash_bits),
    'w_hash': (WHASH_SIZE, wavelet_hash_bits),
}


def _run_algorithm(luma: np.ndarray, name: str) -> str:
    (width, height), extract = ALGORITHMS[name]
    grid = resize_area(luma, width, height)
    try:
        return encode(extract(grid))
    except (ValueError, ArithmeticError) as e:
        raise InternalComputationError(
            f"{name} failed on a {width}x{height} grid: {e}",
            {'algorithm': name, 'exception': type(e).__name__},
        ) from e


def compute_hash_set(pixels: PixelBuffer | np.ndarray, parallel: bool = False) -> HashSet:
    """
    Compute all four hashes of a decoded image.

    The luminance plane is computed once; every algorithm then resamples
    it into its own grid. With parallel=True the algorithms run on a
    small thread pool; the result is identical either way.

    Args:
        pixels: Decoded RGBA buffer or sample array
        parallel: Run the four algorithms concurrently

    Returns:
        HashSet with all four hashes
    """
    luma = to_luminance(pixels)

    if parallel:
        with ThreadPoolExecutor(max_workers=len(ALGORITHMS)) as executor:
            futures = {
                name: executor.submit(_run_algorithm, luma, name)
                for name in ALGORITHMS
            }
            hashes = {name: future.result() for name, future in futures.items()}
    else:
        hashes = {name: _run_algorithm(luma, name) for name in ALGORITHMS}

    return HashSet(**hashes)


__all__ = [
    'ALGORITHMS',
    'compute_hash_set',
    'average_hash',
    'average_hash_bits',
    'difference_hash',
    'difference_hash_bits',
    'perceptual_hash',
    'perceptual_hash_bits',
    'wavelet_hash',
    'wavelet_hash_bits',
    'to_luminance',
    'resize_area',
    'to_grayscale',
    'to_grayscale_square',
    'encode',
    'decode',
    'pack_bits',
    'is_hash_string',
]
