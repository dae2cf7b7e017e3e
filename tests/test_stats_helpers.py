import numpy as np
import pandas as pd
import pytest

from weatherevents.stats_helpers import (
    critical_value, descriptive_stats, empirical_tail_fraction, normal_tail_probability,
    sample_mean_std, z_score, z_test_mean,
)


def test_sample_mean_std_uses_ddof_one_and_drops_nan():
    mean, std, n = sample_mean_std(pd.Series([1.0, 2.0, 3.0, 4.0, np.nan]))
    assert mean == pytest.approx(2.5)
    assert std == pytest.approx(np.std([1, 2, 3, 4], ddof=1))
    assert n == 4


def test_descriptive_stats_keys():
    ds = descriptive_stats(pd.Series([1, 2, 3, 4, 100]))
    assert ds["median"] == 3
    assert ds["iqr"] == pytest.approx(2)
    assert ds["skewness"] > 0


def test_z_score():
    assert z_score(13.0, 10.0, 1.5) == pytest.approx(2.0)


@pytest.mark.parametrize("tail,expected", [
    ("upper", 0.022750),
    ("lower", 0.977250),
    ("two-sided", 0.045500),
])
def test_normal_tail_probability(tail, expected):
    assert normal_tail_probability(12.0, 10.0, 1.0, tail=tail) == pytest.approx(expected, abs=1e-5)


def test_normal_tail_probability_at_mean_is_half():
    assert normal_tail_probability(5.0, 5.0, 2.0) == pytest.approx(0.5)


def test_normal_tail_probability_rejects_bad_input():
    with pytest.raises(ValueError):
        normal_tail_probability(1.0, 0.0, 0.0)
    with pytest.raises(ValueError):
        normal_tail_probability(1.0, 0.0, 1.0, tail="sideways")


def test_empirical_tail_fraction():
    s = pd.Series([1, 2, 3, 4, 5, 6, 7, 8, 9, 10])
    assert empirical_tail_fraction(s, 8) == pytest.approx(0.2)
    assert empirical_tail_fraction(s, 3, tail="lower") == pytest.approx(0.2)
    assert np.isnan(empirical_tail_fraction(pd.Series([], dtype=float), 1.0))


def test_z_test_mean_greater():
    rng = np.random.RandomState(1)
    sample = pd.Series(rng.normal(5.0, 2.0, size=2000))
    result = z_test_mean(sample, mu0=4.5, alternative="greater")
    assert result["n"] == 2000
    assert result["se"] == pytest.approx(result["std"] / np.sqrt(2000))
    assert result["z"] > 5
    assert result["p_value"] < 1e-6


def test_z_test_mean_alternatives_are_consistent():
    sample = pd.Series([2.0, 3.0, 4.0, 5.0, 6.0])
    greater = z_test_mean(sample, 3.5, "greater")["p_value"]
    less = z_test_mean(sample, 3.5, "less")["p_value"]
    two = z_test_mean(sample, 3.5, "two-sided")["p_value"]
    assert greater + less == pytest.approx(1.0)
    assert two == pytest.approx(2 * min(greater, less))


def test_z_test_mean_needs_two_observations():
    with pytest.raises(ValueError):
        z_test_mean(pd.Series([1.0]), 0.0)
    with pytest.raises(ValueError):
        z_test_mean(pd.Series([1.0, 1.0, 1.0]), 0.0)
    with pytest.raises(ValueError):
        z_test_mean(pd.Series([1.0, 2.0]), 0.0, alternative="bigger")


def test_critical_value():
    assert critical_value(0.05, "greater") == pytest.approx(1.6449, abs=1e-4)
    assert critical_value(0.05, "less") == pytest.approx(-1.6449, abs=1e-4)
    assert critical_value(0.05, "two-sided") == pytest.approx(1.96, abs=1e-3)


def test_empirical_tail_fraction_two_sided():
    s = pd.Series([1, 2, 3, 4, 5, 6, 7, 8, 9, 10])
    # mean 5.5; only 1 and 10 lie further than 3.5 from it
    assert empirical_tail_fraction(s, 9, tail="two-sided") == pytest.approx(0.2)
    assert empirical_tail_fraction(s, 2, tail="two-sided") == pytest.approx(0.2)
