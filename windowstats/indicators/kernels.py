"""
Batch moving-average kernels.

Pure single-pass functions mapping a whole input series and a period to
an output series of equal length. numpy arrays (or anything array-like)
come back as numpy arrays; a pandas Series comes back as a Series on the
same index.

Warm-up policy (before `period` observations exist):
    SMA    - mean of the samples seen so far (no zero-fill)
    WMA    - available samples keep their full-window weights
             (period, period-1, ...) normalised by the weights used
    EMA    - seeded by the first observation, alpha = 2 / (period + 1)
    Wilder - seeded by the first observation, alpha = 1 / period

Every kernel returns the input constant for a constant series, and an
all-zero output for period <= 0 or empty input.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Sequence, Union

import numpy as np
import pandas as pd

from ..utils.logger import get_logger

ArrayLike = Union[np.ndarray, pd.Series, Sequence[float]]


class MovingAverageType(str, Enum):
    """Supported moving-average kernels."""

    SIMPLE = "sma"
    WEIGHTED = "wma"
    EXPONENTIAL = "ema"
    WILDER = "wilder"


def _prepare(values: ArrayLike, period: int, name: str) -> tuple[np.ndarray, np.ndarray, bool]:
    """
    Coerce input and allocate output.

    Returns:
        (data, out, degenerate) - degenerate means the caller should
        return the zero-filled out untouched.
    """
    if isinstance(values, pd.Series):
        data = values.to_numpy(dtype=np.float64)
    else:
        data = np.asarray(values, dtype=np.float64).reshape(-1)
    out = np.zeros(len(data), dtype=np.float64)
    degenerate = period <= 0 or len(data) == 0
    if degenerate:
        get_logger().window("DEGENERATE", name, period=period, n=len(data))
    return data, out, degenerate


def _wrap(values: ArrayLike, out: np.ndarray) -> Union[np.ndarray, pd.Series]:
    """Return a Series aligned with the input index when given a Series."""
    if isinstance(values, pd.Series):
        return pd.Series(out, index=values.index, name=values.name)
    return out


def wma_weights(period: int) -> np.ndarray:
    """
    Linear weights for a weighted moving average, oldest first.

    Weights run 1..period so the most recent sample weighs `period` and
    the weights sum to period * (period + 1) / 2.

    Returns:
        Float array of length period (empty for period <= 0).
    """
    if period <= 0:
        return np.array([], dtype=np.float64)
    return np.arange(1, period + 1, dtype=np.float64)


def simple_moving_average(values: ArrayLike, period: int) -> Union[np.ndarray, pd.Series]:
    """
    Trailing arithmetic mean.

    out[i] = mean(values[max(0, i - period + 1) .. i])
    """
    data, out, degenerate = _prepare(values, period, "sma")
    if degenerate:
        return _wrap(values, out)

    running = 0.0
    for i in range(len(data)):
        running += data[i]
        if i >= period:
            running -= data[i - period]
        out[i] = running / min(i + 1, period)

    return _wrap(values, out)


def weighted_moving_average(values: ArrayLike, period: int) -> Union[np.ndarray, pd.Series]:
    """
    Linearly weighted moving average, most recent sample heaviest.

    Uses the running-numerator recurrence:
        numerator += period * x[i] - window_sum
        window_sum += x[i] - x[i - period]
    which shifts every weight down by one per step in O(1).
    """
    data, out, degenerate = _prepare(values, period, "wma")
    if degenerate:
        return _wrap(values, out)

    numerator = 0.0
    window_sum = 0.0
    full_denominator = period * (period + 1) / 2.0

    for i in range(len(data)):
        current = data[i]
        numerator += period * current - window_sum
        window_sum += current
        if i >= period:
            window_sum -= data[i - period]

        available = i + 1
        if available >= period:
            out[i] = numerator / full_denominator
        else:
            # Weights period..period-available+1 are in use
            used = available * (2 * period - available + 1) / 2.0
            out[i] = numerator / used

    return _wrap(values, out)


def exponential_moving_average(values: ArrayLike, period: int) -> Union[np.ndarray, pd.Series]:
    """
    Exponential moving average, alpha = 2 / (period + 1).

    Seeded by the first observation: out[0] = values[0].
    """
    data, out, degenerate = _prepare(values, period, "ema")
    if degenerate:
        return _wrap(values, out)

    alpha = 2.0 / (period + 1)
    _ewma(data, out, alpha)
    return _wrap(values, out)


def wilder_moving_average(values: ArrayLike, period: int) -> Union[np.ndarray, pd.Series]:
    """
    Welles Wilder smoothing, alpha = 1 / period.

    Seeded by the first observation: out[0] = values[0].
    """
    data, out, degenerate = _prepare(values, period, "wilder")
    if degenerate:
        return _wrap(values, out)

    alpha = 1.0 / period
    _ewma(data, out, alpha)
    return _wrap(values, out)


def _ewma(data: np.ndarray, out: np.ndarray, alpha: float) -> None:
    """Exponentially weighted recurrence seeded by data[0], written into out."""
    previous = data[0]
    out[0] = previous
    for i in range(1, len(data)):
        previous = alpha * data[i] + (1 - alpha) * previous
        out[i] = previous


_KERNELS: dict[MovingAverageType, Callable[[ArrayLike, int], Union[np.ndarray, pd.Series]]] = {
    MovingAverageType.SIMPLE: simple_moving_average,
    MovingAverageType.WEIGHTED: weighted_moving_average,
    MovingAverageType.EXPONENTIAL: exponential_moving_average,
    MovingAverageType.WILDER: wilder_moving_average,
}


def moving_average(
    values: ArrayLike,
    ma_type: Union[MovingAverageType, str],
    period: int,
) -> Union[np.ndarray, pd.Series]:
    """
    Dispatch to a moving-average kernel by type.

    Args:
        values: Input series
        ma_type: MovingAverageType or its string value ("sma", "wma", ...)
        period: Smoothing period

    Raises:
        ValueError: If ma_type is unknown
    """
    try:
        kernel = _KERNELS[MovingAverageType(ma_type)]
    except ValueError:
        valid = ", ".join(t.value for t in MovingAverageType)
        raise ValueError(
            f"Unknown moving average type {ma_type!r}. Valid: {valid}\n"
            f"\n"
            f"Fix: moving_average(values, 'ema', 20)"
        ) from None
    return kernel(values, period)
