"""
Pillow-backed pixel buffer adapter.

Turns an encoded image (PNG, JPEG, BMP, TIFF, WebP, HEIC with
pillow-heif, ...) into an RGBA PixelBuffer for the preprocessor.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Optional

from ..config import DECODE_MIN_SIDE
from ..errors import DecodeError
from .dependencies import Image, np, _logger


@dataclass(frozen=True)
class PixelBuffer:
    """
    Decoded raster.

    Attributes:
        width: Width in pixels
        height: Height in pixels
        channels: Channels per pixel (always 4, RGBA)
        samples: uint8 array of shape (height, width, channels)
        format: Container format reported by the decoder (PNG, JPEG, ...)
        source_width: Width before box reduction (0 = same as width)
        source_height: Height before box reduction (0 = same as height)
    """
    width: int
    height: int
    channels: int
    samples: 'np.ndarray'
    format: str = ""
    source_width: int = 0
    source_height: int = 0

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


# 1x1 PNG, built once on first availability probe
_probe_png: Optional[bytes] = None


def _probe_buffer() -> bytes:
    global _probe_png
    if _probe_png is None:
        out = io.BytesIO()
        Image.new('RGB', (1, 1), color='white').save(out, 'PNG')
        _probe_png = out.getvalue()
    return _probe_png


class PillowDecoder:
    """Decoder implementation on top of Pillow."""

    name = "pillow"

    def __init__(
        self,
        max_image_pixels: Optional[int] = None,
        reduce_min_side: Optional[int] = DECODE_MIN_SIDE,
    ):
        """
        Args:
            max_image_pixels: Reject images above this many pixels before
                loading them (None keeps only PIL's global limit)
            reduce_min_side: Box-reduce large images by an integer factor,
                keeping at least this many pixels on the short side
                (None decodes at full resolution)
        """
        self.max_image_pixels = max_image_pixels
        self.reduce_min_side = reduce_min_side

    def _reduction_factor(self, width: int, height: int) -> int:
        if not self.reduce_min_side:
            return 1
        return max(1, min(width, height) // self.reduce_min_side)

    def decode(self, data: bytes) -> PixelBuffer:
        """
        Decode an image buffer into RGBA samples.

        Args:
            data: Encoded image bytes

        Returns:
            PixelBuffer with RGBA samples

        Raises:
            DecodeError: If the buffer is empty, not an image, truncated,
                or has zero dimensions
        """
        if not data:
            raise DecodeError("Empty image buffer")

        try:
            with Image.open(io.BytesIO(data)) as img:
                if self.max_image_pixels and img.width * img.height > self.max_image_pixels:
                    raise DecodeError(
                        f"Image too large: {img.width}x{img.height} exceeds {self.max_image_pixels:,} pixels",
                        {'width': img.width, 'height': img.height},
                    )
                # Force load to detect truncated/corrupt images early
                img.load()
                fmt = img.format or ""
                if img.width == 0 or img.height == 0:
                    raise DecodeError(
                        f"Degenerate image dimensions {img.width}x{img.height}",
                        {'width': img.width, 'height': img.height},
                    )
                source_width, source_height = img.width, img.height
                if img.mode != 'RGBA':
                    img = img.convert('RGBA')
                factor = self._reduction_factor(img.width, img.height)
                if factor > 1:
                    # Exact box average over factor x factor blocks
                    img = img.reduce(factor)
                samples = np.asarray(img, dtype=np.uint8)
        except DecodeError:
            raise
        except Image.UnidentifiedImageError as e:
            raise DecodeError(f"Not a valid image: {e}", {'exception': type(e).__name__}) from e
        except Image.DecompressionBombError as e:
            raise DecodeError(f"Image too large: {e}", {'exception': type(e).__name__}) from e
        except (OSError, ValueError, SyntaxError) as e:
            # PIL reports truncated and malformed streams through these
            raise DecodeError(f"Corrupt or truncated image: {e}", {'exception': type(e).__name__}) from e

        height, width = samples.shape[:2]
        _logger.debug(f"Decoded {fmt or 'image'} {source_width}x{source_height} -> {width}x{height}")
        return PixelBuffer(
            width=width,
            height=height,
            channels=samples.shape[2],
            samples=samples,
            format=fmt,
            source_width=source_width,
            source_height=source_height,
        )

    def is_available(self) -> bool:
        """
        Check that Pillow can decode a trivial image.

        Returns:
            True if a 1x1 PNG round-trips, False on any failure
        """
        try:
            buf = self.decode(_probe_buffer())
            return buf.width == 1 and buf.height == 1
        except Exception as e:
            _logger.debug(f"Decoder availability probe failed: {e}")
            return False

    @staticmethod
    def version() -> str:
        """Version string of the underlying Pillow install."""
        import PIL
        return PIL.__version__


__all__ = ['PixelBuffer', 'PillowDecoder']
