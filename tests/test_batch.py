"""
Batch Wrapper Tests.

Each wrapper drives one incremental structure over a whole series; the
outputs are compared with pandas rolling equivalents or brute force.
"""

import math

import numpy as np
import pandas as pd
import pytest

from windowstats.structures import (
    rolling_average,
    rolling_correlation,
    rolling_high_low,
    rolling_max_min,
    rolling_percent_rank,
    rolling_spearman,
    rolling_sum,
)


class TestRollingExtremes:
    """Test rolling_max_min and rolling_high_low."""

    @pytest.mark.parametrize("length", [1, 5, 30])
    def test_max_min_match_pandas(self, rng, length):
        values = rng.normal(100.0, 5.0, size=200)
        series = pd.Series(values).rolling(length, min_periods=1)
        highest, lowest = rolling_max_min(values, length)
        np.testing.assert_array_equal(highest, series.max().to_numpy())
        np.testing.assert_array_equal(lowest, series.min().to_numpy())

    def test_high_low_uses_separate_series(self, rng):
        closes = rng.normal(100.0, 5.0, size=60)
        highs = closes + rng.uniform(0.0, 2.0, size=60)
        lows = closes - rng.uniform(0.0, 2.0, size=60)
        highest, lowest = rolling_high_low(highs, lows, 10)
        np.testing.assert_array_equal(
            highest, pd.Series(highs).rolling(10, min_periods=1).max().to_numpy()
        )
        np.testing.assert_array_equal(
            lowest, pd.Series(lows).rolling(10, min_periods=1).min().to_numpy()
        )

    def test_high_low_length_mismatch_raises(self):
        with pytest.raises(ValueError, match="equal length"):
            rolling_high_low([1.0, 2.0], [1.0], 2)


class TestRollingSums:
    """Test rolling_sum and rolling_average."""

    def test_end_to_end(self, sample_closes):
        np.testing.assert_allclose(
            rolling_sum(sample_closes, 3), [10.0, 21.0, 30.0, 32.0, 29.0, 33.0]
        )

    @pytest.mark.parametrize("length", [1, 4, 25])
    def test_match_pandas(self, rng, length):
        values = rng.normal(0.0, 3.0, size=150)
        rolling = pd.Series(values).rolling(length, min_periods=1)
        np.testing.assert_allclose(rolling_sum(values, length), rolling.sum().to_numpy(), atol=1e-9)
        np.testing.assert_allclose(rolling_average(values, length), rolling.mean().to_numpy(), atol=1e-9)

    @pytest.mark.parametrize("length", [0, -2])
    def test_degenerate_length_is_zeros(self, length):
        np.testing.assert_array_equal(rolling_sum([1.0, 2.0], length), [0.0, 0.0])
        np.testing.assert_array_equal(rolling_average([1.0, 2.0], length), [0.0, 0.0])

    def test_accepts_series(self):
        out = rolling_sum(pd.Series([1.0, 2.0, 3.0]), 2)
        np.testing.assert_allclose(out, [1.0, 3.0, 5.0])


class TestRollingCorrelationBatch:
    """Test rolling_correlation."""

    def test_matches_pandas_once_window_full(self, rng):
        length = 15
        x = rng.normal(size=100)
        y = 0.3 * x + rng.normal(size=100)
        out = rolling_correlation(x, y, length)
        expected = pd.Series(x).rolling(length).corr(pd.Series(y)).to_numpy()
        np.testing.assert_allclose(out[length - 1:], expected[length - 1:], atol=1e-9)
        assert out[0] == 0.0

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError, match="equal length"):
            rolling_correlation([1.0, 2.0, 3.0], [1.0, 2.0], 2)


class TestRankBatches:
    """Test rolling_percent_rank and rolling_spearman."""

    def test_percent_rank_matches_brute_force(self, rng):
        length = 7
        values = rng.integers(0, 5, size=80).astype(float)
        out = rolling_percent_rank(values, length)
        for i in range(len(values)):
            window = values[max(0, i - length + 1):i + 1]
            expected = 100.0 * np.count_nonzero(window <= values[i]) / len(window)
            assert out[i] == pytest.approx(expected)
        assert (out > 0).all()

    def test_percent_rank_of_non_finite_is_zero(self):
        out = rolling_percent_rank([math.nan, 1.0, 2.0, math.inf, 0.5], 2)
        np.testing.assert_allclose(out, [0.0, 100.0, 100.0, 0.0, 100.0])

    def test_spearman_trend_signs(self):
        rising = rolling_spearman(np.arange(20, dtype=float), 5)
        falling = rolling_spearman(np.arange(20, 0, -1, dtype=float), 5)
        assert rising[0] == 0.0
        np.testing.assert_allclose(rising[1:], 1.0)
        np.testing.assert_allclose(falling[1:], -1.0)
