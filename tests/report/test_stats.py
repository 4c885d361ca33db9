"""Tests for report statistics."""

import math

import pytest

pytestmark = pytest.mark.unit

from milo.report.stats import avg, cv, split_stats, std


def test_avg():
    assert avg([2, 4, 6]) == 4.0


def test_std_is_population():
    assert std([2, 4, 6]) == pytest.approx(math.sqrt(8 / 3))
    assert std([2, 4, 6]) == pytest.approx(1.633, abs=1e-3)


def test_cv():
    assert cv([2, 4, 6]) == pytest.approx(0.408, abs=1e-3)


def test_single_value():
    assert avg([5.0]) == 5.0
    assert std([5.0]) == 0.0
    assert cv([5.0]) == 0.0


def test_empty_vector_is_nan():
    assert math.isnan(avg([]))
    assert math.isnan(std([]))
    assert math.isnan(cv([]))


def test_zero_mean_cv():
    assert math.isnan(cv([0.0, 0.0]))
    assert math.isinf(cv([-1.0, 1.0]))


def test_returns_builtin_float():
    assert type(avg([1, 2])) is float
    assert type(std([1, 2])) is float
    assert type(cv([1, 2])) is float


def test_split_stats():
    diff, split_std, split_avg, split_cv = split_stats([2.0, 4.0], [6.0, 8.0])
    assert diff == 4.0
    assert split_std == 2.0
    assert split_avg == 5.0
    assert split_cv == pytest.approx(0.4)


def test_split_diff_is_absolute():
    diff, _, _, _ = split_stats([7.0], [3.0])
    assert diff == 4.0


def test_split_stats_empty_half():
    diff, split_std, split_avg, split_cv = split_stats([2.0], [])
    assert math.isnan(diff)
    assert math.isnan(split_avg)
    assert math.isnan(split_cv)
