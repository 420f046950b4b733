"""Noise tolerant peak finding on one-dimensional signals.

The detector reduces the signal to the positions where its first difference
changes sign, plus both endpoints, and sweeps these candidates once. A local
maximum is only accepted as a peak when it rises at least ``sel`` above the
lowest point since the previous peak and the signal then retreats at least
``sel`` below it (or the signal ends first). Fluctuations smaller than ``sel``
therefore never produce a peak.

Minima are found by negating a working copy of the signal, so the sweep itself
only ever looks for maxima.

Notes
-----
When several consecutive samples share the maximum value, the first of them is
reported as the peak. A single sample has zero range and never yields a
peak.
"""

from __future__ import annotations

import math
import warnings
from typing import Any, NamedTuple

import numpy as np

from .exceptions import (
    EmptyInputError,
    InvalidExtremaError,
    InvalidSelectivityError,
    InvalidThresholdError,
    NonFiniteValueError,
)
from .utils import (
    default_selectivity,
    derivative,
    find_sign_changes,
    max_index,
    sign_array,
)

__all__ = ["PeakResult", "find_peaks"]


class PeakResult(NamedTuple):
    """Accepted peaks, aligned and sorted by ascending index."""

    indices: np.ndarray
    magnitudes: np.ndarray


def _empty_result() -> PeakResult:
    return PeakResult(np.array([], dtype=int), np.array([], dtype=float))


# ---------------------------------------------------------------------------
# Argument checks
# ---------------------------------------------------------------------------


def check_signal(signal: Any) -> np.ndarray:
    """Return an owned float copy of ``signal`` after validating it."""

    if np.asarray(signal).dtype.kind in "USV":
        raise ValueError("signal must contain real numbers, not strings or bytes")
    try:
        values = np.array(signal, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ValueError("signal must contain real numbers") from exc
    if values.ndim != 1:
        raise ValueError(
            f"signal must be one-dimensional, saw {values.ndim} dimensions"
        )
    if values.size == 0:
        raise EmptyInputError("signal must contain at least one sample")
    if not np.isfinite(values).all():
        raise NonFiniteValueError("signal contains NaN or infinite values")
    return values


def check_selectivity(sel: Any) -> float | None:
    """Validate ``sel``; ``None`` means "derive it from the data"."""

    if sel is None:
        return None
    try:
        value = float(sel)
    except (TypeError, ValueError) as exc:
        raise InvalidSelectivityError(f"sel must be a real number, saw {sel!r}") from exc
    if math.isnan(value) or value < 0:
        raise InvalidSelectivityError(f"sel must be non-negative, saw {sel!r}")
    return value


def check_threshold(thresh: Any) -> float | None:
    """Validate ``thresh``; ``None`` disables threshold filtering."""

    if thresh is None:
        return None
    try:
        value = float(thresh)
    except (TypeError, ValueError) as exc:
        raise InvalidThresholdError(
            f"thresh must be a real number, saw {thresh!r}"
        ) from exc
    if math.isnan(value):
        raise InvalidThresholdError("thresh must not be NaN")
    return value


def check_extrema(extrema: Any) -> int:
    """Return ``extrema`` as ``1`` (maxima) or ``-1`` (minima)."""

    if (
        np.ndim(extrema) != 0
        or isinstance(extrema, (bool, np.bool_))
        or extrema not in (1, -1)
    ):
        raise InvalidExtremaError(f"extrema must be 1 or -1, saw {extrema!r}")
    return int(extrema)


# ---------------------------------------------------------------------------
# Detection phases
# ---------------------------------------------------------------------------


def _candidates(x0: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Values and positions of the sign changes, with both endpoints added."""

    inner = find_sign_changes(derivative(x0))
    index = np.concatenate(([0], inner, [x0.size - 1])).astype(int)
    return x0[index], index


def _monotone_peak(
    x: np.ndarray, index: np.ndarray, sel: float
) -> tuple[list[int], list[float]]:
    # Only an endpoint can be a peak.
    value, pos = max_index(x)
    if value > x.min() + sel:
        return [int(index[pos])], [value]
    return [], []


def _align(x: np.ndarray, index: np.ndarray) -> tuple[np.ndarray, np.ndarray, int]:
    """Make the candidates alternate between peaks and valleys.

    The endpoints are tacked on, so the first differences do not necessarily
    alternate like the rest. Returns the candidates and the position the sweep
    starts from: ``0`` when the first point may itself be a peak, ``1`` when it
    lies below the second.
    """

    sign_dx = sign_array(derivative(x[:3]))
    if sign_dx[0] <= 0:
        if sign_dx[0] == sign_dx[1]:
            return x[1:], index[1:], 0
        return x, index, 0
    if sign_dx[0] == sign_dx[1]:
        return x[:-1], index[:-1], 1
    return x, index, 1


def _sweep(
    x: np.ndarray, start: int, sel: float, min_mag: float
) -> tuple[list[int], list[float]]:
    """Track the best candidate and confirm it once the signal retreats."""

    locs: list[int] = []
    mags: list[float] = []
    temp_mag = min_mag
    temp_loc = 0
    left_min = min_mag
    found_peak = False
    last = x.size - 1

    for ii in range(start, last):
        if found_peak:
            temp_mag = min_mag
            found_peak = False

        if x[ii] > temp_mag and x[ii] > left_min + sel:
            temp_loc = ii
            temp_mag = x[ii]

        if temp_mag > x[ii] + sel:
            found_peak = True
            left_min = x[ii]
            locs.append(temp_loc)
            mags.append(float(temp_mag))
        elif x[ii] < left_min:
            left_min = x[ii]

    if found_peak:
        temp_mag = min_mag

    # The right endpoint is judged outside the loop.
    if x[last] > temp_mag and x[last] > left_min + sel:
        locs.append(last)
        mags.append(float(x[last]))
    elif temp_mag > min_mag:
        # The signal ended before retreating from the tracked peak.
        locs.append(temp_loc)
        mags.append(float(temp_mag))
    return locs, mags


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def find_peaks(
    signal: Any,
    sel: float | None = None,
    thresh: float | None = None,
    extrema: int = 1,
) -> PeakResult:
    """Find the significant local maxima (or minima) of ``signal``.

    Parameters
    ----------
    signal : array-like
        Finite real samples, at least one.
    sel : float, optional
        How far a peak must rise above the surrounding data to be accepted.
        Defaults to a quarter of the signal range. Larger values are more
        selective.
    thresh : float, optional
        Peaks must be larger than ``thresh`` (maxima) or smaller than
        ``thresh`` (minima) to be kept. ``None`` disables the filter.
    extrema : {1, -1}, default=1
        ``1`` to find maxima, ``-1`` to find minima.

    Returns
    -------
    PeakResult
        ``(indices, magnitudes)`` of the accepted peaks, ascending by index.
        Magnitudes are the signal values at ``indices``.

    Raises
    ------
    EmptyInputError
        If ``signal`` is empty.
    NonFiniteValueError
        If ``signal`` contains NaN or infinite values.
    InvalidSelectivityError
        If ``sel`` is negative or NaN.
    InvalidThresholdError
        If ``thresh`` is NaN.
    InvalidExtremaError
        If ``extrema`` is not ``1`` or ``-1``.

    Examples
    --------
    >>> find_peaks([0, 1, 0, 1, 0, 1, 0], sel=0.5).indices
    array([1, 3, 5])
    """

    x0 = check_signal(signal)
    sel = check_selectivity(sel)
    thresh = check_threshold(thresh)
    extrema = check_extrema(extrema)

    if x0.max() == x0.min():
        warnings.warn(
            "signal has zero range; no peaks can be found", UserWarning
        )
        return _empty_result()
    quarter_range = default_selectivity(x0)
    if sel is None:
        sel = quarter_range
    elif sel / 4 >= quarter_range:
        warnings.warn(
            f"sel={sel} is not smaller than the signal range; "
            "no peak can be accepted",
            UserWarning,
        )

    # Always search for maxima.
    x0 *= extrema
    if thresh is not None:
        thresh *= extrema

    x, index = _candidates(x0)
    min_mag = float(x.min())

    if x.size > 2:
        x, index, start = _align(x, index)
        locs, mags = _sweep(x, start, sel, min_mag)
        peak_inds = [int(index[loc]) for loc in locs]
    else:
        peak_inds, mags = _monotone_peak(x, index, sel)

    if thresh is not None:
        kept = [(ind, mag) for ind, mag in zip(peak_inds, mags) if mag > thresh]
        peak_inds = [ind for ind, _ in kept]
        mags = [mag for _, mag in kept]

    indices = np.asarray(peak_inds, dtype=int)
    magnitudes = np.asarray(mags, dtype=float) * extrema
    return PeakResult(indices, magnitudes)
