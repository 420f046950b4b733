"""Numeric helpers shared by the peak finder."""

from __future__ import annotations

import numpy as np


def derivative(values: np.ndarray) -> np.ndarray:
    """Return the first difference ``x[i + 1] - x[i]`` of ``values``."""

    return np.diff(np.asarray(values, dtype=float))


def sign(value: float) -> int:
    """Return ``1``, ``-1`` or ``0`` according to the sign of ``value``."""

    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def sign_array(values: np.ndarray) -> np.ndarray:
    """Element-wise :func:`sign` as an integer array."""

    return np.sign(np.asarray(values, dtype=float)).astype(int)


def find_sign_changes(slope: np.ndarray) -> np.ndarray:
    """Return the positions where the derivative changes sign.

    Position ``i + 1`` is reported whenever the signs of ``slope[i]`` and
    ``slope[i + 1]`` differ or one of them is zero, so a run through an exact
    zero counts as a change. Signs are compared rather than the raw product,
    which underflows to zero for tiny slopes. Positions refer to the
    signal the derivative was taken from.

    Parameters
    ----------
    slope : np.ndarray
        First difference of a signal, as returned by :func:`derivative`.

    Returns
    -------
    np.ndarray
        Ascending integer positions into the original signal.
    """

    slope = np.asarray(slope, dtype=float)
    if slope.size < 2:
        return np.array([], dtype=int)
    signs = np.sign(slope)
    return np.flatnonzero(signs[:-1] * signs[1:] <= 0) + 1


def max_index(values: np.ndarray) -> tuple[float, int]:
    """Return ``(value, index)`` of the first maximum of ``values``."""

    values = np.asarray(values, dtype=float)
    if values.size == 0:
        raise ValueError("values must not be empty")
    index = int(np.argmax(values))
    return float(values[index]), index


def default_selectivity(values: np.ndarray) -> float:
    """Quarter of the peak-to-peak range of ``values``.

    Each extreme is scaled before subtracting so that ranges wider than the
    largest float do not overflow.
    """

    values = np.asarray(values, dtype=float)
    return float(np.max(values) / 4 - np.min(values) / 4)
