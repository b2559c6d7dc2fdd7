"""
Data models for phashkit.

Contains dataclasses for the hash set produced per image and the
success/error envelope returned by HashCalculator.
"""

from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar

T = TypeVar('T')


def format_duration(ms: float) -> str:
    """Format a duration in milliseconds in human-readable form."""
    if ms < 1000:
        return f"{ms:.1f} ms"
    return f"{ms / 1000:.2f} s"


@dataclass(frozen=True)
class HashSet:
    """
    The four perceptual hashes of one image.

    Attributes:
        a_hash: Average hash (mean threshold)
        p_hash: Perceptual hash (DCT low frequencies)
        d_hash: Difference hash (horizontal gradient)
        w_hash: Wavelet hash (Haar approximation band)
    """
    a_hash: str
    p_hash: str
    d_hash: str
    w_hash: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'aHash': self.a_hash,
            'pHash': self.p_hash,
            'dHash': self.d_hash,
            'wHash': self.w_hash,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'HashSet':
        """Create HashSet from dictionary."""
        return cls(
            a_hash=data['aHash'],
            p_hash=data['pHash'],
            d_hash=data['dHash'],
            w_hash=data['wHash'],
        )


@dataclass(frozen=True)
class ErrorDescriptor:
    """
    Describes why a call failed.

    Attributes:
        code: Stable error kind (DECODE_ERROR, UNAVAILABLE, INTERNAL_ERROR, IO_ERROR)
        message: Human-readable message
        details: Extra context (exception type, path, ...)
    """
    code: str
    message: str
    details: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'code': self.code,
            'message': self.message,
            'details': dict(self.details),
        }


@dataclass(frozen=True)
class ProcessResult(Generic[T]):
    """
    Uniform success/error envelope.

    A successful result always carries data and never an error; a failed
    result always carries an error and never data. Use ok() and fail()
    rather than the constructor.
    """
    success: bool
    data: Optional[T] = None
    error: Optional[ErrorDescriptor] = None
    metadata: dict = field(default_factory=dict)

    def __post_init__(self):
        if self.success and (self.data is None or self.error is not None):
            raise ValueError("Successful result requires data and no error")
        if not self.success and (self.error is None or self.data is not None):
            raise ValueError("Failed result requires an error and no data")

    @classmethod
    def ok(cls, data: T, processing_time_ms: Optional[float] = None) -> 'ProcessResult[T]':
        """Build a successful result."""
        return cls(success=True, data=data, metadata=_timing(processing_time_ms))

    @classmethod
    def fail(cls, error: ErrorDescriptor, processing_time_ms: Optional[float] = None) -> 'ProcessResult[T]':
        """Build a failed result."""
        return cls(success=False, error=error, metadata=_timing(processing_time_ms))

    @property
    def processing_time_ms(self) -> Optional[float]:
        """Elapsed time of the call, if measured."""
        return self.metadata.get('processingTimeMs')

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result: dict = {'success': self.success}
        if self.data is not None:
            result['data'] = self.data.to_dict() if hasattr(self.data, 'to_dict') else self.data
        if self.error is not None:
            result['error'] = self.error.to_dict()
        if self.metadata:
            result['metadata'] = dict(self.metadata)
        return result


def _timing(processing_time_ms: Optional[float]) -> dict:
    if processing_time_ms is None:
        return {}
    return {'processingTimeMs': processing_time_ms}
