"""Sample statistics and normal-approximation helpers."""
import numpy as np
import pandas as pd
from scipy import stats

TAILS = ("upper", "lower", "two-sided")


def descriptive_stats(series):
    """Compute descriptive statistics for a numeric series, ignoring NaNs."""
    series = pd.Series(series).dropna()
    return {
        "count": len(series),
        "mean": series.mean(),
        "median": series.median(),
        "std": series.std(),
        "min": series.min(),
        "max": series.max(),
        "q25": series.quantile(0.25),
        "q75": series.quantile(0.75),
        "iqr": series.quantile(0.75) - series.quantile(0.25),
        "skewness": series.skew(),
        "kurtosis": series.kurtosis(),
    }


def sample_mean_std(series):
    """Return (mean, sample std, n) of the non-missing values."""
    series = pd.Series(series).dropna()
    return series.mean(), series.std(ddof=1), len(series)


def z_score(x, mean, std):
    """Standardize x against a mean and standard deviation."""
    return (x - mean) / std


def normal_tail_probability(threshold, mean, std, tail="upper"):
    """Probability beyond threshold under a normal distribution with the given moments.

    ``tail`` is ``"upper"`` for P(X > threshold), ``"lower"`` for
    P(X < threshold) and ``"two-sided"`` for P(|Z| > |z|).
    """
    if tail not in TAILS:
        raise ValueError(f"tail must be one of {TAILS}, got {tail!r}")
    if not std > 0:
        raise ValueError("Standard deviation must be positive")
    z = z_score(threshold, mean, std)
    if tail == "upper":
        return float(stats.norm.sf(z))
    if tail == "lower":
        return float(stats.norm.cdf(z))
    return float(2 * stats.norm.sf(abs(z)))


def empirical_tail_fraction(series, threshold, tail="upper"):
    """Observed share of values beyond threshold."""
    if tail not in TAILS:
        raise ValueError(f"tail must be one of {TAILS}, got {tail!r}")
    series = pd.Series(series).dropna()
    if len(series) == 0:
        return np.nan
    if tail == "upper":
        return float((series > threshold).mean())
    if tail == "lower":
        return float((series < threshold).mean())
    mean = series.mean()
    return float((np.abs(series - mean) > abs(threshold - mean)).mean())


def z_test_mean(sample, mu0, alternative="greater"):
    """One-sample z-test of the mean, using the sample standard deviation.

    With thousands of events the t and normal distributions are
    indistinguishable, so the normal reference distribution is used.
    """
    mean, std, n = sample_mean_std(sample)
    if n < 2:
        raise ValueError("Need at least two observations for a z-test")
    if not std > 0:
        raise ValueError("Sample has zero variance")
    se = std / np.sqrt(n)
    z = (mean - mu0) / se
    if alternative == "greater":
        p = stats.norm.sf(z)
    elif alternative == "less":
        p = stats.norm.cdf(z)
    elif alternative == "two-sided":
        p = 2 * stats.norm.sf(abs(z))
    else:
        raise ValueError(f"Unknown alternative: {alternative!r}")
    return {"mean": mean, "std": std, "n": n, "se": se, "z": float(z), "p_value": float(p)}


def critical_value(alpha, alternative="greater"):
    """z value that rejects H0 at the given significance level."""
    if alternative == "two-sided":
        return float(stats.norm.isf(alpha / 2))
    z = float(stats.norm.isf(alpha))
    return z if alternative == "greater" else -z
