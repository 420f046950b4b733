"""Shared fixtures for the peakfind test suite."""

from __future__ import annotations

import numpy as np
import pytest

# Crests of -12 cos(20 pi t) sampled every millisecond: t = 0.05 + 0.1 k.
N_CRESTS = 100


@pytest.fixture(scope="session")
def noisy_oscillation():
    """Fast oscillation on a slow drift with additive Gaussian noise.

    The series starts and ends in a trough so that every accepted peak is one
    of the :data:`N_CRESTS` crests, which sit 100 samples apart.
    """
    rng = np.random.default_rng(42)
    t = np.arange(10_000) * 0.001
    x = -12 * np.cos(10 * 2 * np.pi * t) - 3 * np.sin(0.1 * 2 * np.pi * t)
    x += rng.normal(scale=0.5, size=t.size)
    crests = 50 + 100 * np.arange(N_CRESTS)
    return {"signal": x, "crests": crests}


@pytest.fixture
def alternating():
    return np.array([0.0, 1.0, 0.0, 1.0, 0.0, 1.0, 0.0])


@pytest.fixture
def random_walks():
    """A handful of random walks of various lengths."""
    rng = np.random.default_rng(0)
    return [np.cumsum(rng.standard_normal(n)) for n in (2, 3, 5, 17, 64, 257)]
