"""
HashCalculator: the top-level perceptual hashing tool.

Wraps decoding, preprocessing and the four hash algorithms behind a
single process() call that never raises: every failure comes back as a
ProcessResult with success=False and an ErrorDescriptor.
"""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, Union

from .config import TOOL_NAME, TOOL_VERSION
from .decoder import Decoder, get_default_decoder
from .errors import DecodeError, HashingError, UnavailableError, IO_ERROR_CODE
from .hashing import compute_hash_set
from .models import ErrorDescriptor, HashSet, ProcessResult
from .user_config import get_user_config

logger = logging.getLogger(__name__)

# Optional: tqdm for progress bars
HAS_TQDM = False
_tqdm_class: Optional[Any] = None

try:
    from tqdm import tqdm as _tqdm_import
    HAS_TQDM = True
    _tqdm_class = _tqdm_import
except ImportError:
    pass

ImageInput = Union[bytes, bytearray, memoryview, str, os.PathLike]


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 3)


def _read_input(source: ImageInput) -> bytes:
    """Return the raw bytes of an in-memory buffer or a file path."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    if isinstance(source, (str, os.PathLike)):
        return Path(source).read_bytes()
    raise TypeError(f"Unsupported input type: {type(source).__name__}")


class HashCalculator:
    """
    Computes aHash, pHash, dHash and wHash for one image per call.

    Usage:
        calculator = HashCalculator()
        result = calculator.process(Path("photo.jpg"))
        if result.success:
            print(result.data.p_hash)
        else:
            print(result.error.code, result.error.message)
    """

    name = TOOL_NAME
    version = TOOL_VERSION

    def __init__(
        self,
        decoder: Optional[Decoder] = None,
        parallel_algorithms: Optional[bool] = None,
    ):
        """
        Initialize the calculator.

        Args:
            decoder: Decoder to use. Defaults to the Pillow decoder, limited
                     to the configured max_image_pixels.
            parallel_algorithms: Run the four algorithms on a thread pool.
                                 Defaults to the user configuration.
        """
        config = get_user_config()
        self.decoder = decoder or get_default_decoder(config.max_image_pixels)
        self.parallel_algorithms = (
            config.parallel_algorithms if parallel_algorithms is None else parallel_algorithms
        )
        self._available = False

    def is_available(self) -> bool:
        """
        Check whether the decoder can be loaded and exercised.

        Never raises; any failure is reported as False.
        """
        try:
            return bool(self.decoder.is_available())
        except Exception as e:
            logger.debug(f"{self.name}: availability check failed: {e}")
            return False

    def _ensure_available(self) -> None:
        if self._available:
            return
        if not self.is_available():
            raise UnavailableError(
                f"Image decoder '{getattr(self.decoder, 'name', type(self.decoder).__name__)}' is not available"
            )
        self._available = True

    def process(self, source: ImageInput) -> ProcessResult[HashSet]:
        """
        Compute all four hashes of one image.

        Args:
            source: Encoded image bytes, or a path to an image file

        Returns:
            ProcessResult carrying a HashSet on success, or an
            ErrorDescriptor on failure; metadata.processingTimeMs is
            always set
        """
        start = time.perf_counter()
        label = str(source) if isinstance(source, (str, os.PathLike)) else f"<{type(source).__name__}>"

        try:
            data = _read_input(source)
        except OSError as e:
            logger.debug(f"{self.name}: cannot read {label}: {e}")
            return ProcessResult.fail(
                ErrorDescriptor(
                    code=IO_ERROR_CODE,
                    message=f"Cannot read input: {e}",
                    details={'path': label, 'exception': type(e).__name__},
                ),
                _elapsed_ms(start),
            )
        except TypeError as e:
            return ProcessResult.fail(
                ErrorDescriptor(code=DecodeError.code, message=str(e), details={'input': label}),
                _elapsed_ms(start),
            )

        try:
            self._ensure_available()
            pixels = self.decoder.decode(data)
            hashes = compute_hash_set(pixels, parallel=self.parallel_algorithms)
        except HashingError as e:
            logger.debug(f"{self.name}: {label} failed with {e.code}: {e.message}")
            return ProcessResult.fail(
                ErrorDescriptor(code=e.code, message=e.message, details=dict(e.details)),
                _elapsed_ms(start),
            )
        except Exception as e:
            logger.debug(f"{self.name}: unexpected failure on {label}: {e}", exc_info=True)
            return ProcessResult.fail(
                ErrorDescriptor(
                    code='INTERNAL_ERROR',
                    message=str(e) or type(e).__name__,
                    details={'exception': type(e).__name__},
                ),
                _elapsed_ms(start),
            )

        elapsed = _elapsed_ms(start)
        logger.debug(f"{self.name}: hashed {label} in {elapsed:.1f} ms")
        return ProcessResult.ok(hashes, elapsed)

    def process_batch(
        self,
        sources: Sequence[ImageInput],
        max_workers: Optional[int] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
        show_progress: bool = False,
    ) -> list[ProcessResult[HashSet]]:
        """
        Hash many images in parallel.

        Args:
            sources: Buffers or paths to hash
            max_workers: Number of worker threads (default: configured workers)
            progress_callback: Optional callback(current, total)
            show_progress: Whether to show a tqdm progress bar

        Returns:
            One ProcessResult per source, in input order
        """
        if not sources:
            return []

        workers = max_workers or get_user_config().default_workers
        results: list[Optional[ProcessResult[HashSet]]] = [None] * len(sources)

        pbar: Optional[Any] = None
        if HAS_TQDM and show_progress and _tqdm_class is not None:
            pbar = _tqdm_class(
                total=len(sources),
                desc="Hashing images",
                unit="img",
                ncols=80,
            )

        try:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = {
                    executor.submit(self.process, source): idx
                    for idx, source in enumerate(sources)
                }
                for done, future in enumerate(as_completed(futures), start=1):
                    # process() never raises
                    results[futures[future]] = future.result()
                    if pbar is not None:
                        pbar.update(1)
                    if progress_callback:
                        progress_callback(done, len(sources))
        finally:
            if pbar is not None:
                pbar.close()

        failures = sum(1 for r in results if r is not None and not r.success)
        if failures:
            logger.info(f"{self.name}: {failures:,} of {len(sources):,} images failed to hash")
        return results  # type: ignore[return-value]


__all__ = ['HashCalculator', 'ImageInput', 'HAS_TQDM']
