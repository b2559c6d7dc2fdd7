"""
Decoder package for phashkit.

Turns encoded image bytes into RGBA pixel buffers. A single decoder
implementation is selected when a HashCalculator is built; anything
satisfying the Decoder protocol can be passed in its place.

Public API:
- Decoder: Protocol every decoder implements
- PixelBuffer: Decoded RGBA raster
- PillowDecoder: Pillow-backed decoder (default)
- get_default_decoder: Build the default decoder
- has_heif_support: Check if HEIC/HEIF support is available
"""

from __future__ import annotations

from typing import Optional, Protocol

from .pillow_decoder import PixelBuffer, PillowDecoder
from .dependencies import HAS_HEIF_SUPPORT


class Decoder(Protocol):
    """Capability consumed by the hashing pipeline."""

    def decode(self, data: bytes) -> PixelBuffer: ...

    def is_available(self) -> bool: ...


def get_default_decoder(max_image_pixels: Optional[int] = None) -> Decoder:
    """Return the decoder used when none is supplied."""
    return PillowDecoder(max_image_pixels=max_image_pixels)


def has_heif_support() -> bool:
    """Check if HEIC/HEIF support is available."""
    return HAS_HEIF_SUPPORT


__all__ = [
    'Decoder',
    'PixelBuffer',
    'PillowDecoder',
    'get_default_decoder',
    'has_heif_support',
]
