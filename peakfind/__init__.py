"""
peakfind: noise tolerant peak and valley detection for one-dimensional signals.
"""

__version__ = "0.1.0"

from .core import PeakResult, find_peaks
from .detector import PeakDetector
from .exceptions import (
    EmptyInputError,
    InvalidExtremaError,
    InvalidSelectivityError,
    InvalidThresholdError,
    NonFiniteValueError,
    PeakFinderError,
)

__all__ = [
    "find_peaks",
    "PeakResult",
    "PeakDetector",
    "PeakFinderError",
    "EmptyInputError",
    "InvalidSelectivityError",
    "InvalidThresholdError",
    "InvalidExtremaError",
    "NonFiniteValueError",
]
