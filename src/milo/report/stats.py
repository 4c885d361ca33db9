"""Summary statistics for report rows.

Population statistics (divisor N) over plain float vectors. Degenerate
input is not an error: an empty vector gives NaN and a zero mean gives an
infinite or NaN coefficient of variation. Those values are returned as is
and end up in the report, so numpy's division warnings are silenced here.
"""

from typing import Sequence

import numpy as np

__all__ = ['avg', 'std', 'cv', 'split_stats']


def avg(values: Sequence[float]) -> float:
    """Arithmetic mean, ``sum(v) / len(v)``."""
    data = np.asarray(values, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(data.sum()) / np.float64(data.size))


def std(values: Sequence[float]) -> float:
    """Population standard deviation, ``sqrt(mean((x - avg)^2))``."""
    data = np.asarray(values, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        mean = np.float64(data.sum()) / np.float64(data.size)
        return float(np.sqrt(np.float64(((data - mean) ** 2).sum()) / np.float64(data.size)))


def cv(values: Sequence[float]) -> float:
    """Coefficient of variation, ``std(v) / avg(v)``."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(std(values)) / np.float64(avg(values)))


def split_stats(a_values: Sequence[float], b_values: Sequence[float]) -> tuple[float, float, float, float]:
    """Agreement between the "a" and "b" halves of one sample.

    Parameters
    ----------
    a_values, b_values : sequence of float
        Values measured for each half across all files.

    Returns
    -------
    tuple of float
        ``(split_diff, split_std, split_avg, split_cv)``: the absolute
        difference of the two half means, their population standard
        deviation, their mean, and the ratio of the last two.
    """
    a_avg = avg(a_values)
    b_avg = avg(b_values)
    halves = [a_avg, b_avg]
    split_std = std(halves)
    split_avg = (a_avg + b_avg) / 2.0
    with np.errstate(divide="ignore", invalid="ignore"):
        split_cv = float(np.float64(split_std) / np.float64(split_avg))
    return abs(a_avg - b_avg), split_std, split_avg, split_cv
