"""
Dependency initialization for the decoder package.

Handles PIL, numpy and HEIC/HEIF support imports with proper error
handling and configuration.
"""

from __future__ import annotations

import warnings
import logging

from ..config import MAX_IMAGE_PIXELS

# Module-level logger
_logger = logging.getLogger(__name__)

# Check for required dependencies
try:
    from PIL import Image
    import numpy as np
except ImportError:
    raise ImportError(
        "Required packages not found!\n"
        "Install with: pip install Pillow numpy"
    )

# Register HEIC/HEIF support via pillow-heif
# This must be done before decoding any HEIC buffers
HAS_HEIF_SUPPORT = False
try:
    from pillow_heif import register_heif_opener
    register_heif_opener()
    HAS_HEIF_SUPPORT = True
    _logger.debug("HEIC/HEIF support enabled via pillow-heif")
except ImportError:
    _logger.debug(
        "pillow-heif not installed - HEIC/HEIF buffers will not be decoded. "
        "Install with: pip install pillow-heif"
    )

# Raise PIL's decompression bomb limit; images above it fail to decode
Image.MAX_IMAGE_PIXELS = MAX_IMAGE_PIXELS

# Images between the limit and twice the limit only warn in PIL
warnings.filterwarnings("ignore", category=Image.DecompressionBombWarning)


__all__ = [
    'Image',
    'np',
    'HAS_HEIF_SUPPORT',
    '_logger',
]
