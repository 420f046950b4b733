"""Estimator interface around :func:`peakfind.core.find_peaks`."""

from __future__ import annotations

from typing import Any

import numpy as np

from .base import BaseSeriesDetector
from .core import check_extrema, check_selectivity, check_threshold, find_peaks
from .utils import default_selectivity

__all__ = ["PeakDetector"]

_EXTREMA_ALIASES = {"max": 1, "maxima": 1, "min": -1, "minima": -1}


def _resolve_extrema(extrema: Any) -> int:
    if isinstance(extrema, str):
        extrema = _EXTREMA_ALIASES.get(extrema.lower(), extrema)
    return check_extrema(extrema)


class PeakDetector(BaseSeriesDetector):
    """Noise tolerant peak detector for univariate series.

    Parameters
    ----------
    sel : float, optional
        Minimum rise of a peak above the surrounding data. Defaults to a
        quarter of the range of each series passed in.
    thresh : float, optional
        Peaks must exceed this value (fall below it when finding minima).
    extrema : {1, -1, "max", "min"}, default=1
        Direction of the search.
    axis : {0, 1}, default=0
        Time axis of two-dimensional input.

    Attributes
    ----------
    selectivity_ : float
        Selectivity used on the fitted series.
    peak_indices_ : np.ndarray
        Indices of the peaks found in the fitted series.
    peak_magnitudes_ : np.ndarray
        Values of the fitted series at ``peak_indices_``.
    n_peaks_ : int
        Number of peaks found in the fitted series.

    Examples
    --------
    >>> import numpy as np
    >>> PeakDetector(sel=0.5).fit_predict(np.array([0, 1, 0, 1, 0, 1, 0]))
    array([1, 3, 5])
    """

    _tags = {
        "capability:univariate": True,
        "capability:multivariate": False,
        "capability:missing_values": False,
        "fit_is_empty": False,
        "returns_dense": False,
        "detector_type": "peak_detection",
    }

    def __init__(
        self,
        *,
        sel: float | None = None,
        thresh: float | None = None,
        extrema: int | str = 1,
        axis: int = 0,
    ) -> None:
        check_selectivity(sel)
        check_threshold(thresh)
        _resolve_extrema(extrema)

        self.sel = sel
        self.thresh = thresh
        self.extrema = extrema
        super().__init__(axis=axis)

    def _find(self, X: np.ndarray):
        return find_peaks(
            X,
            sel=self.sel,
            thresh=self.thresh,
            extrema=_resolve_extrema(self.extrema),
        )

    def _fit(self, X, y=None):
        result = self._find(X)
        if self.sel is None:
            self.selectivity_ = default_selectivity(X)
        else:
            self.selectivity_ = float(self.sel)
        self.peak_indices_ = result.indices
        self.peak_magnitudes_ = result.magnitudes
        self.n_peaks_ = int(result.indices.size)
        return self

    def _predict(self, X):
        return self._find(X).indices

    def predict_mask(self, X: Any) -> np.ndarray:
        """Return a dense 0/1 array marking the peaks of ``X``."""

        indices = self.predict(X)
        n_timepoints = self._convert_X(X).shape[0]
        return self.to_mask(indices, n_timepoints)
