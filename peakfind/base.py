"""Estimator base classes for peakfind detectors.

The classes follow the aeon/scikit-learn estimator conventions: constructor
arguments are the configuration, ``fit`` learns attributes ending in ``_`` and
``predict`` returns results for new data. Class level *tags* describe what an
estimator accepts so that input checks can be shared.

Only numpy and pandas inputs are supported. A series is converted to a
one-dimensional ``float`` array before it reaches the detector hooks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from copy import deepcopy
from typing import Any, Dict, Iterable

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator
from sklearn.exceptions import NotFittedError

from .exceptions import NonFiniteValueError

__all__ = ["BaseTaggedEstimator", "BaseSeriesDetector"]

SERIES_INPUT_TYPES = (pd.Series, pd.DataFrame, np.ndarray)


def _lookup_tag(tags: Dict[str, Any], tag_name: str, raise_error: bool, default: Any) -> Any:
    if tag_name in tags:
        return tags[tag_name]
    if raise_error:
        raise ValueError(f"Tag with name {tag_name} could not be found.")
    return default


class BaseTaggedEstimator(BaseEstimator, ABC):
    """Clone, reset and tag handling shared by all estimators."""

    _tags: Dict[str, Any] = {
        "non_deterministic": False,
        "cant_pickle": False,
        "capability:missing_values": False,
    }

    def __init__(self) -> None:
        self.is_fitted = False
        self._tags_dynamic: Dict[str, Any] = {}

        super().__init__()

    # ------------------------------------------------------------------
    # Tag utilities
    # ------------------------------------------------------------------

    @classmethod
    def get_class_tags(cls) -> Dict[str, Any]:
        """Collect class tags respecting inheritance order."""

        collected: Dict[str, Any] = {}
        for parent in reversed(cls.__mro__):
            collected.update(vars(parent).get("_tags", {}))
        return deepcopy(collected)

    @classmethod
    def get_class_tag(
        cls,
        tag_name: str,
        raise_error: bool = True,
        tag_value_default: Any | None = None,
    ) -> Any:
        return _lookup_tag(cls.get_class_tags(), tag_name, raise_error, tag_value_default)

    def get_tags(self) -> Dict[str, Any]:
        """Return tags with dynamic overrides applied."""

        tags = self.get_class_tags()
        tags.update(self._tags_dynamic)
        return deepcopy(tags)

    def get_tag(
        self,
        tag_name: str,
        raise_error: bool = True,
        tag_value_default: Any | None = None,
    ) -> Any:
        return _lookup_tag(self.get_tags(), tag_name, raise_error, tag_value_default)

    def set_tags(self, **tag_dict: Any) -> "BaseTaggedEstimator":
        """Set dynamic tags and return ``self`` for chaining."""

        self._tags_dynamic.update(deepcopy(tag_dict))
        return self

    # ------------------------------------------------------------------
    # Fitted state
    # ------------------------------------------------------------------

    def get_fitted_params(self) -> Dict[str, Any]:
        """Return the public attributes learned by ``fit``."""

        self._check_is_fitted()
        return {
            attr: getattr(self, attr)
            for attr in dir(self)
            if attr.endswith("_") and not attr.startswith("_") and hasattr(self, attr)
        }

    def reset(self) -> "BaseTaggedEstimator":
        """Forget fitted attributes and re-run ``__init__`` with the same parameters."""

        params = self.get_params(deep=False)
        vars(self).clear()
        self.__init__(**params)
        return self

    def clone(self) -> "BaseTaggedEstimator":
        return type(self)(**self.get_params(deep=False))

    def _check_is_fitted(self) -> None:
        if not getattr(self, "is_fitted", False):
            raise NotFittedError(
                f"This instance of {self.__class__.__name__} has not been fitted yet;"
                " please call `fit` first."
            )


class BaseSeriesDetector(BaseTaggedEstimator):
    """Base class for detectors working on a single series.

    Parameters
    ----------
    axis : {0, 1}
        Time axis of two-dimensional input. With ``axis=0`` an array of shape
        ``(n_timepoints, 1)`` is a single series, with ``axis=1`` the shape is
        ``(1, n_timepoints)``.
    """

    _tags: Dict[str, Any] = {
        "capability:univariate": True,
        "capability:multivariate": False,
        "fit_is_empty": False,
    }

    def __init__(self, axis: int = 0) -> None:
        if axis not in (0, 1):
            raise ValueError("axis should be 0 or 1")
        self.axis = axis
        self.metadata_: Dict[str, Any] = {}
        super().__init__()

    # Public API -------------------------------------------------------

    def fit(self, X: Any, y: Any | None = None) -> "BaseSeriesDetector":
        if self.get_tag("fit_is_empty"):
            self.is_fitted = True
            return self

        self.reset()
        X_inner = self._preprocess_series(X, store_metadata=True)
        self._fit(X_inner, y)
        self.is_fitted = True
        return self

    def predict(self, X: Any) -> np.ndarray:
        if not self.get_tag("fit_is_empty"):
            self._check_is_fitted()
        X_inner = self._preprocess_series(X, store_metadata=False)
        return self._predict(X_inner)

    def fit_predict(self, X: Any, y: Any | None = None) -> np.ndarray:
        self.fit(X, y)
        return self.predict(X)

    # Hooks for subclasses ---------------------------------------------

    def _fit(self, X: np.ndarray, y: Any | None):
        return self

    @abstractmethod
    def _predict(self, X: np.ndarray) -> np.ndarray:
        ...

    # Input handling ---------------------------------------------------

    def _preprocess_series(self, X: Any, store_metadata: bool) -> np.ndarray:
        metadata = self._check_X(X)
        if store_metadata:
            self.metadata_ = metadata
        return self._convert_X(X)

    def _check_X(self, X: Any) -> Dict[str, Any]:
        if isinstance(X, np.ndarray):
            if not (np.issubdtype(X.dtype, np.integer) or np.issubdtype(X.dtype, np.floating)):
                raise ValueError("dtype for np.ndarray must be float or int")
        elif isinstance(X, pd.Series):
            if not pd.api.types.is_numeric_dtype(X):
                raise ValueError("pd.Series dtype must be numeric")
        elif isinstance(X, pd.DataFrame):
            if not all(pd.api.types.is_numeric_dtype(X[col]) for col in X.columns):
                raise ValueError("pd.DataFrame dtype must be numeric")
        else:
            raise ValueError(
                f"Input type of X should be one of {SERIES_INPUT_TYPES}, saw {type(X)}"
            )

        if X.ndim > 2:
            raise ValueError("X must have at most 2 dimensions")

        metadata: Dict[str, Any] = {"n_timepoints": X.shape[0]}
        if X.ndim == 1:
            metadata["n_channels"] = 1
        else:
            channel_idx = 1 - self.axis
            metadata["n_channels"] = X.shape[channel_idx]
            metadata["n_timepoints"] = X.shape[self.axis]
        metadata["multivariate"] = metadata["n_channels"] > 1

        if isinstance(X, np.ndarray):
            metadata["missing_values"] = bool(np.isnan(X).any())
        elif isinstance(X, pd.DataFrame):
            metadata["missing_values"] = bool(X.isna().any().any())
        else:
            metadata["missing_values"] = bool(X.isna().any())

        if metadata["missing_values"] and not self.get_tag("capability:missing_values"):
            raise NonFiniteValueError(
                f"Missing values not supported by {self.__class__.__name__}"
            )
        if metadata["multivariate"] and not self.get_tag("capability:multivariate"):
            raise ValueError(
                f"Multivariate data not supported by {self.__class__.__name__}"
            )
        return metadata

    def _convert_X(self, X: Any) -> np.ndarray:
        if isinstance(X, (pd.Series, pd.DataFrame)):
            X = X.to_numpy()
        X = np.asarray(X, dtype=float)
        if X.ndim == 2:
            X = X[:, 0] if self.axis == 0 else X[0, :]
        return X

    # Convenience converters -------------------------------------------

    @classmethod
    def to_mask(cls, indices: Iterable[int], length: int) -> np.ndarray:
        """Dense 0/1 array of ``length`` with ones at ``indices``."""

        mask = np.zeros(length, dtype=int)
        mask[np.asarray(list(indices), dtype=int)] = 1
        return mask
