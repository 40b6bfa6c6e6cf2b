"""Typed exceptions for spans, I/O formats, configuration and the detector."""


class SpanError(ValueError):
    """Base class for span related errors."""


class OverlapError(SpanError):
    """Raised when two spans overlap."""


class SpanOutOfBoundsError(SpanError):
    """Raised when span coordinates are invalid or out of bounds."""


class IOFormatError(ValueError):
    """Base class for I/O format related errors."""


class UnsupportedFormatError(IOFormatError):
    """Raised when no reader or writer is registered for a file format."""


class ConfigurationError(ValueError):
    """Raised when a required setting is missing or unusable."""


class DetectorError(RuntimeError):
    """Raised when the external entity detector fails.

    The failure is reported as a whole: no partially detected entity list is
    ever returned alongside this error.
    """


class DetectorResponseError(DetectorError):
    """Raised when the detector answers with malformed output."""
