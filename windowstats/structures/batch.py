"""
Batch wrappers for incremental window structures.

Each helper runs one incremental structure over a whole series in a
single pass, feeding observation i and immediately querying, exactly as
an indicator's per-bar loop would. Useful for vectorized consumers and
for comparing the incremental path with batch references.
"""

from __future__ import annotations

import math
from typing import Sequence, Union

import numpy as np
import pandas as pd

from ..config import PERCENT_SCALE
from ..utils.helpers import safe_div
from ..utils.logger import get_logger
from .correlation import RollingCorrelation
from .minmax import FixedWindowMinMax
from .order_statistics import SlidingOrderStatistics, WindowedSpearman
from .rolling_sum import RollingSum

ArrayLike = Union[np.ndarray, pd.Series, Sequence[float]]


def _as_array(values: ArrayLike) -> np.ndarray:
    """Coerce input to a 1-D float64 array."""
    if isinstance(values, pd.Series):
        return values.to_numpy(dtype=np.float64)
    return np.asarray(values, dtype=np.float64).reshape(-1)


def _check_pair(left: np.ndarray, right: np.ndarray, names: str) -> None:
    if len(left) != len(right):
        raise ValueError(
            f"{names} must have equal length, got {len(left)} and {len(right)}\n"
            f"\n"
            f"Fix: align both series on the same bars before calling"
        )


def rolling_max_min(values: ArrayLike, length: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Rolling highest and lowest value of one series.

    Args:
        values: Input series
        length: Window length (>= 1)

    Returns:
        (highest, lowest) arrays, same length as values
    """
    data = _as_array(values)
    window = FixedWindowMinMax(length)
    highest = np.empty(len(data), dtype=np.float64)
    lowest = np.empty(len(data), dtype=np.float64)

    for i, value in enumerate(data):
        window.add(float(value))
        highest[i] = window.max
        lowest[i] = window.min

    return highest, lowest


def rolling_high_low(
    highs: ArrayLike,
    lows: ArrayLike,
    length: int,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Rolling highest high and lowest low of a bar series.

    Args:
        highs: High prices
        lows: Low prices
        length: Window length (>= 1)

    Returns:
        (highest_high, lowest_low) arrays

    Raises:
        ValueError: If highs and lows differ in length
    """
    high_data = _as_array(highs)
    low_data = _as_array(lows)
    _check_pair(high_data, low_data, "highs and lows")

    high_window = FixedWindowMinMax(length)
    low_window = FixedWindowMinMax(length)
    highest = np.empty(len(high_data), dtype=np.float64)
    lowest = np.empty(len(low_data), dtype=np.float64)

    for i in range(len(high_data)):
        high_window.add(float(high_data[i]))
        low_window.add(float(low_data[i]))
        highest[i] = high_window.max
        lowest[i] = low_window.min

    return highest, lowest


def rolling_sum(values: ArrayLike, length: int) -> np.ndarray:
    """Trailing sum over min(length, i + 1) observations at every bar."""
    data = _as_array(values)
    window = RollingSum(max_history=max(length, 1))
    out = np.zeros(len(data), dtype=np.float64)
    if length <= 0:
        get_logger().window("DEGENERATE", "rolling_sum", length=length, n=len(data))
        return out

    for i, value in enumerate(data):
        window.add(float(value))
        out[i] = window.sum(length)
    return out


def rolling_average(values: ArrayLike, length: int) -> np.ndarray:
    """Trailing mean over min(length, i + 1) observations at every bar."""
    data = _as_array(values)
    window = RollingSum(max_history=max(length, 1))
    out = np.zeros(len(data), dtype=np.float64)
    if length <= 0:
        get_logger().window("DEGENERATE", "rolling_average", length=length, n=len(data))
        return out

    for i, value in enumerate(data):
        window.add(float(value))
        out[i] = window.average(length)
    return out


def rolling_correlation(x: ArrayLike, y: ArrayLike, length: int) -> np.ndarray:
    """
    Trailing Pearson correlation of two aligned series.

    Bars with fewer than two pairs, or a flat window, are 0.0.

    Raises:
        ValueError: If x and y differ in length
    """
    x_data = _as_array(x)
    y_data = _as_array(y)
    _check_pair(x_data, y_data, "x and y")

    corr = RollingCorrelation(max_history=max(length, 1))
    out = np.zeros(len(x_data), dtype=np.float64)
    for i in range(len(x_data)):
        corr.add(float(x_data[i]), float(y_data[i]))
        out[i] = corr.r(length)
    return out


def rolling_percent_rank(values: ArrayLike, length: int) -> np.ndarray:
    """
    Percentage of window members <= the current value (0..100).

    The current observation is part of its own window, so every finite
    observation scores strictly above 0. A non-finite observation has no
    rank and scores 0.0.
    """
    data = _as_array(values)
    window = SlidingOrderStatistics(length)
    out = np.zeros(len(data), dtype=np.float64)

    for i, value in enumerate(data):
        window.add(float(value))
        if math.isfinite(value):
            out[i] = PERCENT_SCALE * safe_div(
                window.count_less_than_or_equal(float(value)), len(window)
            )
    return out


def rolling_spearman(values: ArrayLike, length: int) -> np.ndarray:
    """Trailing Spearman correlation of values against time (-1..1)."""
    data = _as_array(values)
    spearman = WindowedSpearman(length)
    out = np.zeros(len(data), dtype=np.float64)

    for i, value in enumerate(data):
        spearman.add(float(value))
        out[i] = spearman.rho()
    return out
