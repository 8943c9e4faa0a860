"""Typed exceptions for alignment, span validation and I/O formats."""


class AnnotationStatsError(Exception):
    """Base class for all package errors."""


class ExtractionError(AnnotationStatsError, ValueError):
    """Raised when a span key or label cannot be extracted from an item."""


class SpanKeyExtractionError(ExtractionError):
    """Raised when an item does not expose the fields used as its span key."""


class LabelExtractionError(ExtractionError):
    """Raised when an item has no label under the requested field."""


class SpanError(ValueError):
    """Base class for span related errors."""


class SpanOutOfBoundsError(SpanError):
    """Raised when span coordinates are invalid or out of bounds."""


class IOFormatError(ValueError):
    """Base class for I/O format related errors."""


class UnsupportedFormatError(IOFormatError):
    """Raised when no reader is registered for a file format."""
