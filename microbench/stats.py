"""Summary statistics for timing samples: mean, sdev, standard error, confidence half-width."""

import math
from typing import Sequence

import numpy as np
from scipy import stats as sp_stats

from microbench.schemas import UNITS

_UNIT_SCALE = {"s/op": 1.0, "ms/op": 1e3, "us/op": 1e6, "ns/op": 1e9}


def unit_scale(unit: str) -> float:
    """Multiplier converting seconds to `unit`."""
    if unit not in _UNIT_SCALE:
        raise ValueError(f"unknown unit {unit!r}, expected one of {UNITS}")
    return _UNIT_SCALE[unit]


def mean(xs: Sequence[float]) -> float:
    if len(xs) == 0:
        raise ValueError("mean of empty sample")
    return float(np.mean(xs))


def sdev(xs: Sequence[float]) -> float:
    """Sample standard deviation (ddof=1); 0.0 for a single sample."""
    if len(xs) < 2:
        return 0.0
    return float(np.std(xs, ddof=1))


def stderr(xs: Sequence[float]) -> float:
    if len(xs) < 2:
        return 0.0
    return sdev(xs) / math.sqrt(len(xs))


def mean_error(xs: Sequence[float], confidence: float = 0.999) -> float:
    """Half-width of the two-sided Student-t confidence interval of the mean."""
    n = len(xs)
    if n < 2:
        return 0.0
    q = float(sp_stats.t.ppf((1.0 + confidence) / 2.0, n - 1))
    return q * stderr(xs)


def summarize(xs: Sequence[float], confidence: float = 0.999) -> dict:
    return {
        "mean": mean(xs),
        "error": mean_error(xs, confidence),
        "sdev": sdev(xs),
        "stderr": stderr(xs),
        "n": len(xs),
    }
