"""
phashkit
========
Perceptual image fingerprints for near-duplicate and tamper detection.

Features:
- Four 64-bit hashes per image: aHash, dHash, pHash (DCT), wHash (Haar)
- Deterministic preprocessing (exact area averaging, integer luma)
- Fixed-width lowercase hex output, comparable across runs
- Uniform success/error envelope with timing metadata
- Parallel batch hashing
- CLI for automation
"""

__version__ = "1.0.0"

from .models import HashSet, ErrorDescriptor, ProcessResult
from .errors import HashingError, DecodeError, UnavailableError, InternalComputationError
from .calculator import HashCalculator
from .compare import hamming_distance, similarity, compare_hash_sets
from .hashing import (
    average_hash,
    difference_hash,
    perceptual_hash,
    wavelet_hash,
    compute_hash_set,
)

__all__ = [
    "HashSet",
    "ErrorDescriptor",
    "ProcessResult",
    "HashingError",
    "DecodeError",
    "UnavailableError",
    "InternalComputationError",
    "HashCalculator",
    "hamming_distance",
    "similarity",
    "compare_hash_sets",
    "average_hash",
    "difference_hash",
    "perceptual_hash",
    "wavelet_hash",
    "compute_hash_set",
]
