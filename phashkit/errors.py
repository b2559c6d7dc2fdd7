"""
Exception hierarchy for phashkit.

Every exception raised inside the hashing pipeline derives from
HashingError and carries a stable ``code`` that ends up in the
ErrorDescriptor returned by HashCalculator.process().
"""

from __future__ import annotations

from typing import Optional


class HashingError(Exception):
    """Base class for all pipeline errors."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class DecodeError(HashingError):
    """Raised when a buffer is unreadable, corrupt, empty or degenerate."""

    code = "DECODE_ERROR"


class UnavailableError(HashingError):
    """Raised when the decoding capability is missing."""

    code = "UNAVAILABLE"


class InternalComputationError(HashingError):
    """Raised on unexpected numeric failures inside an algorithm."""

    code = "INTERNAL_ERROR"


# Not a HashingError subclass: path reads fail with OSError, this is only the code
IO_ERROR_CODE = "IO_ERROR"


__all__ = [
    'HashingError',
    'DecodeError',
    'UnavailableError',
    'InternalComputationError',
    'IO_ERROR_CODE',
]
