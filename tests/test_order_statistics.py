"""
Order Statistics Tests.

Tests SlidingOrderStatistics (rank counts, percentiles, median, FIFO
eviction of duplicates) and WindowedSpearman (mid-ranks and rho against
time) against brute-force window slices and pandas ranking.
"""

import math

import numpy as np
import pandas as pd
import pytest

from windowstats.config import ENV_VALIDATE_INPUTS
from windowstats.structures import (
    SlidingOrderStatistics,
    WindowedSpearman,
    WindowState,
)


# =============================================================================
# SlidingOrderStatistics
# =============================================================================

class TestSlidingOrderStatistics:
    """Test SlidingOrderStatistics."""

    @pytest.mark.parametrize("length", [1, 3, 10])
    def test_counts_match_brute_force(self, rng, length):
        values = rng.integers(0, 8, size=120).astype(float).tolist()
        window = SlidingOrderStatistics(length)
        for n, value in enumerate(values, start=1):
            window.add(value)
            members = values[max(0, n - length):n]
            for threshold in (-1.0, 0.0, 3.0, 3.5, 7.0, 9.0):
                assert window.count_less_than(threshold) == sum(
                    m < threshold for m in members
                )
                assert window.count_less_than_or_equal(threshold) == sum(
                    m <= threshold for m in members
                )
            assert window.sorted_values() == sorted(members)
            assert window.values() == members

    def test_state_machine(self):
        window = SlidingOrderStatistics(2)
        assert window.state is WindowState.FILLING
        window.add(1.0)
        assert window.state is WindowState.FILLING
        window.add(2.0)
        assert window.state is WindowState.FULL
        window.add(3.0)
        assert window.state is WindowState.FULL
        assert len(window) == 2

    def test_duplicate_eviction_order(self):
        window = SlidingOrderStatistics(3)
        for value in [5.0, 5.0, 3.0]:
            window.add(value)
        assert window.sorted_values() == [3.0, 5.0, 5.0]

        window.add(7.0)
        assert window.sorted_values() == [3.0, 5.0, 7.0]
        window.add(8.0)
        assert window.sorted_values() == [3.0, 7.0, 8.0]
        window.add(9.0)
        assert window.sorted_values() == [7.0, 8.0, 9.0]

    def test_percentile_nearest_rank(self):
        window = SlidingOrderStatistics(5)
        for value in [15.0, 20.0, 35.0, 40.0, 50.0]:
            window.add(value)
        assert window.percentile_nearest_rank(5) == 15.0
        assert window.percentile_nearest_rank(30) == 20.0
        assert window.percentile_nearest_rank(40) == 20.0
        assert window.percentile_nearest_rank(50) == 35.0
        assert window.percentile_nearest_rank(100) == 50.0
        # Rank clamps to 1 at the low end
        assert window.percentile_nearest_rank(0) == 15.0

    def test_select_by_rank(self):
        window = SlidingOrderStatistics(4)
        for value in [4.0, 1.0, 3.0, 2.0]:
            window.add(value)
        assert window.select_by_rank(1) == 1.0
        assert window.select_by_rank(4) == 4.0
        assert window.select_by_rank(99) == 4.0
        assert window.select_by_rank(0) == 0.0

    def test_median_odd_and_even(self):
        window = SlidingOrderStatistics(4)
        for value in [9.0, 1.0, 5.0]:
            window.add(value)
        assert window.median == 5.0
        window.add(3.0)
        assert window.median == pytest.approx(4.0)

    def test_empty_queries_are_zero(self):
        window = SlidingOrderStatistics(3)
        assert window.median == 0.0
        assert window.select_by_rank(1) == 0.0
        assert window.percentile_nearest_rank(50) == 0.0
        assert window.count_less_than(1.0) == 0

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_non_finite_rejected_when_validating(self, configure, bad):
        configure(**{ENV_VALIDATE_INPUTS: "true"})
        window = SlidingOrderStatistics(3)
        with pytest.raises(ValueError, match="non-finite"):
            window.add(bad)
        assert len(window) == 0

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_non_finite_holds_slot_without_rank(self, bad):
        window = SlidingOrderStatistics(3)
        for value in [bad, 1.0, 2.0]:
            window.add(value)
        assert window.is_full()
        assert len(window) == 2
        assert window.sorted_values() == [1.0, 2.0]
        assert window.count_less_than_or_equal(2.0) == 2
        assert window.median == pytest.approx(1.5)

        # The non-finite slot ages out like any other observation
        window.add(3.0)
        assert len(window) == 3
        assert window.sorted_values() == [1.0, 2.0, 3.0]
        assert window.values() == [1.0, 2.0, 3.0]

    def test_non_finite_eviction_leaves_finite_duplicates(self):
        window = SlidingOrderStatistics(2)
        for value in [math.nan, 4.0, 4.0]:
            window.add(value)
        assert window.sorted_values() == [4.0, 4.0]

    def test_nan_query_counts_nothing(self):
        window = SlidingOrderStatistics(3)
        for value in [1.0, 2.0]:
            window.add(value)
        assert window.count_less_than(math.nan) == 0
        assert window.count_less_than_or_equal(math.nan) == 0

    def test_invalid_length_raises(self):
        with pytest.raises(ValueError, match="length"):
            SlidingOrderStatistics(0)

    def test_clear(self):
        window = SlidingOrderStatistics(2)
        window.add(1.0)
        window.add(2.0)
        window.clear()
        assert window.state is WindowState.FILLING
        assert window.values() == []


# =============================================================================
# WindowedSpearman
# =============================================================================

class TestWindowedSpearman:
    """Test WindowedSpearman."""

    def test_mid_ranks_with_ties(self):
        spearman = WindowedSpearman(4)
        for value in [1.0, 2.0, 2.0, 3.0]:
            spearman.add(value)
        assert spearman.ranks() == [1.0, 2.5, 2.5, 4.0]
        assert spearman.mid_rank(2.0) == 2.5
        assert spearman.mid_rank(42.0) == 0.0

    def test_rising_window_is_one(self):
        spearman = WindowedSpearman(5)
        for value in [1.0, 4.0, 9.0, 16.0, 25.0, 36.0]:
            spearman.add(value)
        assert spearman.rho() == pytest.approx(1.0)

    def test_falling_window_is_minus_one(self):
        spearman = WindowedSpearman(5)
        for value in [50.0, 40.0, 30.0, 20.0, 10.0]:
            spearman.add(value)
        assert spearman.rho() == pytest.approx(-1.0)

    def test_flat_window_is_zero(self):
        spearman = WindowedSpearman(4)
        for _ in range(6):
            spearman.add(3.0)
        assert spearman.rho() == 0.0

    def test_single_value_is_zero(self):
        spearman = WindowedSpearman(4)
        assert spearman.rho() == 0.0
        spearman.add(1.0)
        assert spearman.rho() == 0.0

    def test_matches_pandas_rank_correlation(self, rng):
        length = 9
        values = rng.integers(0, 6, size=80).astype(float).tolist()
        spearman = WindowedSpearman(length)
        for n, value in enumerate(values, start=1):
            spearman.add(value)
            window = pd.Series(values[max(0, n - length):n])
            ranks = window.rank(method="average")
            assert spearman.ranks() == pytest.approx(ranks.tolist())

            positions = pd.Series(np.arange(1, len(window) + 1, dtype=float))
            if len(window) > 1 and window.nunique() > 1:
                expected = ranks.corr(positions)
                assert spearman.rho() == pytest.approx(expected, abs=1e-9)
            else:
                assert spearman.rho() == 0.0

    def test_non_finite_values_are_skipped(self):
        spearman = WindowedSpearman(4)
        for value in [1.0, math.nan, 2.0, 3.0]:
            spearman.add(value)
        assert spearman.ranks() == [1.0, 2.0, 3.0]
        assert spearman.rho() == pytest.approx(1.0)

    def test_state_follows_window(self):
        spearman = WindowedSpearman(2)
        spearman.add(1.0)
        assert spearman.state is WindowState.FILLING
        spearman.add(2.0)
        assert spearman.state is WindowState.FULL
        spearman.clear()
        assert len(spearman) == 0
