"""
Configuration constants for phashkit.

This module contains all fixed settings including:
- Tool identity (name and version)
- Grid sizes used by each hashing algorithm
- Luma weights and numeric precision used by the preprocessor
- Defaults for parallel hashing and decoder limits

Changing any of the hashing constants changes the hashes produced, so
they are fixed per release.
"""

import os

# Tool identity exposed by HashCalculator
TOOL_NAME = "HashCalculator"
TOOL_VERSION = "1.0.0"

# Every hash is 64 bits, rendered as 16 lowercase hex characters
HASH_BITS = 64
HASH_HEX_LENGTH = HASH_BITS // 4

# Grid sizes (width, height) fed to each algorithm
AHASH_SIZE = (8, 8)
DHASH_SIZE = (9, 8)      # One extra column for the horizontal gradient
PHASH_SIZE = (32, 32)    # DCT input
PHASH_BLOCK = 8          # Low-frequency block kept after the DCT
WHASH_SIZE = (32, 32)    # Haar input (power of two)
WHASH_LEVELS = 2         # 32 -> 16 -> 8

# aHash threshold for a flat grid, where the mean carries no information
AHASH_FLAT_THRESHOLD = 128

# ITU-R BT.601 luma weights, scaled to integers (sum = LUMA_SCALE)
LUMA_WEIGHTS = (299, 587, 114)
LUMA_SCALE = 1000

# DCT coefficients are rounded to this many decimals before thresholding
DCT_DECIMALS = 6

# Decoders box-reduce large images by an integer factor, keeping at least
# this many pixels on the short side (exact averaging, before any hashing)
DECODE_MIN_SIDE = 64

# Decoder limits
# Pillow's default decompression bomb limit is ~89MP; raise it for scans
MAX_IMAGE_PIXELS = 500_000_000  # 500 megapixels

# Default number of parallel workers for batch hashing
DEFAULT_WORKERS = 4

# Compute the four algorithms on a thread pool inside a single process() call
DEFAULT_PARALLEL_ALGORITHMS = False

# User configuration location
CONFIG_DIR = os.path.join(os.path.expanduser('~'), '.phashkit')
