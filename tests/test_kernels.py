"""
Moving-Average Kernel Tests.

SMA, EMA and Wilder are compared with their pandas equivalents
(rolling mean with min_periods=1, ewm with adjust=False). WMA is checked
against explicit weighted sums.
"""

import numpy as np
import pandas as pd
import pytest

from windowstats.indicators import (
    MovingAverageType,
    exponential_moving_average,
    moving_average,
    simple_moving_average,
    weighted_moving_average,
    wilder_moving_average,
    wma_weights,
)

ALL_KERNELS = [
    simple_moving_average,
    weighted_moving_average,
    exponential_moving_average,
    wilder_moving_average,
]


def _brute_wma(values: np.ndarray, period: int) -> np.ndarray:
    weights = wma_weights(period)
    out = np.zeros(len(values))
    for i in range(len(values)):
        window = values[max(0, i - period + 1):i + 1]
        used = weights[period - len(window):]
        out[i] = np.dot(window, used) / used.sum()
    return out


# =============================================================================
# Individual kernels
# =============================================================================

class TestSimpleMovingAverage:
    """Test simple_moving_average."""

    @pytest.mark.parametrize("period", [1, 3, 20])
    def test_matches_pandas_rolling_mean(self, rng, period):
        values = rng.normal(50.0, 4.0, size=100)
        expected = pd.Series(values).rolling(period, min_periods=1).mean().to_numpy()
        np.testing.assert_allclose(simple_moving_average(values, period), expected, rtol=1e-10)

    def test_warmup_averages_available_samples(self, sample_closes):
        out = simple_moving_average(sample_closes, 3)
        np.testing.assert_allclose(out[:3], [10.0, 10.5, 10.0])


class TestWeightedMovingAverage:
    """Test weighted_moving_average."""

    def test_weights(self):
        np.testing.assert_array_equal(wma_weights(4), [1.0, 2.0, 3.0, 4.0])
        assert wma_weights(4).sum() == 10.0
        assert len(wma_weights(0)) == 0

    def test_full_window_value(self):
        out = weighted_moving_average([1.0, 2.0, 3.0], 3)
        # (1*1 + 2*2 + 3*3) / 6
        assert out[-1] == pytest.approx(14.0 / 6.0)

    def test_warmup_uses_leading_weights(self):
        out = weighted_moving_average([4.0, 7.0], 3)
        assert out[0] == pytest.approx(4.0)
        # (2*4 + 3*7) / (2 + 3)
        assert out[1] == pytest.approx(29.0 / 5.0)

    @pytest.mark.parametrize("period", [1, 2, 5, 14])
    def test_matches_explicit_weighted_sums(self, rng, period):
        values = rng.normal(100.0, 10.0, size=120)
        np.testing.assert_allclose(
            weighted_moving_average(values, period),
            _brute_wma(values, period),
            rtol=1e-9,
        )


class TestExponentialMovingAverage:
    """Test exponential_moving_average."""

    @pytest.mark.parametrize("period", [1, 5, 21])
    def test_matches_pandas_ewm_span(self, rng, period):
        values = rng.normal(0.0, 1.0, size=150)
        expected = pd.Series(values).ewm(span=period, adjust=False).mean().to_numpy()
        np.testing.assert_allclose(exponential_moving_average(values, period), expected, rtol=1e-10)

    def test_seeded_by_first_observation(self, sample_closes):
        out = exponential_moving_average(sample_closes, 3)
        assert out[0] == 10.0
        # alpha = 0.5
        assert out[1] == pytest.approx(10.5)


class TestWilderMovingAverage:
    """Test wilder_moving_average."""

    @pytest.mark.parametrize("period", [1, 7, 14])
    def test_matches_pandas_ewm_alpha(self, rng, period):
        values = rng.normal(10.0, 2.0, size=150)
        expected = pd.Series(values).ewm(alpha=1.0 / period, adjust=False).mean().to_numpy()
        np.testing.assert_allclose(wilder_moving_average(values, period), expected, rtol=1e-10)


# =============================================================================
# Shared behaviour
# =============================================================================

class TestKernelContract:
    """Behaviour every kernel shares."""

    @pytest.mark.parametrize("kernel", ALL_KERNELS)
    def test_constant_series_is_fixed_point(self, kernel):
        out = kernel([42.0] * 30, 9)
        np.testing.assert_allclose(out, 42.0)

    @pytest.mark.parametrize("kernel", ALL_KERNELS)
    @pytest.mark.parametrize("period", [0, -3])
    def test_non_positive_period_is_zeros(self, kernel, period):
        out = kernel([1.0, 2.0, 3.0], period)
        np.testing.assert_array_equal(out, [0.0, 0.0, 0.0])

    @pytest.mark.parametrize("kernel", ALL_KERNELS)
    def test_empty_input_is_empty(self, kernel):
        assert len(kernel([], 5)) == 0

    @pytest.mark.parametrize("kernel", ALL_KERNELS)
    def test_output_length_matches_input(self, kernel, rng):
        values = rng.normal(size=37)
        assert len(kernel(values, 50)) == 37

    @pytest.mark.parametrize("kernel", ALL_KERNELS)
    def test_series_in_series_out(self, kernel):
        index = pd.Index([10, 20, 30, 40, 50])
        series = pd.Series([1.0, 2.0, 3.0, 4.0, 5.0], index=index, name="close")
        out = kernel(series, 3)
        assert isinstance(out, pd.Series)
        assert out.index.equals(index)
        assert out.name == "close"

    def test_degenerate_input_is_logged(self, caplog):
        with caplog.at_level("INFO", logger="windowstats"):
            simple_moving_average([], 5)
        assert "[WINDOW:DEGENERATE]" in caplog.text
        assert "sma" in caplog.text


class TestMovingAverageDispatch:
    """Test moving_average dispatch."""

    @pytest.mark.parametrize("ma_type, kernel", [
        ("sma", simple_moving_average),
        ("wma", weighted_moving_average),
        (MovingAverageType.EXPONENTIAL, exponential_moving_average),
        (MovingAverageType.WILDER, wilder_moving_average),
    ])
    def test_dispatches_to_kernel(self, rng, ma_type, kernel):
        values = rng.normal(size=40)
        np.testing.assert_array_equal(moving_average(values, ma_type, 8), kernel(values, 8))

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError, match="Unknown moving average type"):
            moving_average([1.0, 2.0], "hull", 3)
