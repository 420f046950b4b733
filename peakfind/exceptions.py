"""Custom exceptions raised by the peak finder."""


class PeakFinderError(ValueError):
    """Base class for invalid arguments passed to the peak finder."""


class EmptyInputError(PeakFinderError):
    """Raised when the signal has no samples."""


class InvalidSelectivityError(PeakFinderError):
    """Raised when the selectivity is negative or undefined."""


class InvalidThresholdError(PeakFinderError):
    """Raised when the threshold is undefined (NaN)."""


class InvalidExtremaError(PeakFinderError):
    """Raised when the extrema sign is neither ``1`` nor ``-1``."""


class NonFiniteValueError(PeakFinderError):
    """Raised when the signal holds NaN or infinite samples."""
