"""
Statistical indicators built on rank and correlation windows.

Includes Percent Rank, Correlation Trend and the Spearman Indicator.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from ...config import PERCENT_SCALE
from ...structures import (
    RingBuffer,
    RollingSum,
    SlidingOrderStatistics,
    WindowedSpearman,
    WindowState,
)
from ...structures.correlation import pearson_centered
from ...utils.helpers import safe_div
from .base import IncrementalIndicator


@dataclass
class IncrementalPercentRank(IncrementalIndicator):
    """
    Percent Rank: share of the last `length` closes at or below the current close.

    Formula:
        percent_rank = count(window <= close) / len(window) * 100

    A non-finite close has no rank and scores 0.
    """

    length: int = 20
    _window: SlidingOrderStatistics = field(init=False)
    _value: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        self._window = SlidingOrderStatistics(self.length)

    def update(self, close: float, **kwargs: Any) -> None:
        """Update with new close price - O(log n) rank query."""
        self._window.add(close)
        if not math.isfinite(close):
            self._value = 0.0
            return
        self._value = PERCENT_SCALE * safe_div(
            self._window.count_less_than_or_equal(close), len(self._window)
        )

    def reset(self) -> None:
        self._window.clear()
        self._value = 0.0

    @property
    def value(self) -> float:
        if not self.is_ready:
            return 0.0
        return self._value

    @property
    def is_ready(self) -> bool:
        return self._window.is_full()


@dataclass
class IncrementalCorrelationTrend(IncrementalIndicator):
    """
    Correlation Trend: Pearson correlation of close against bar position.

    +1 for a perfectly straight rise, -1 for a straight fall, near 0 for
    a sideways market.

    Positions are window-relative (0..length-1, oldest first) and the
    correlation is computed two-pass over the buffered closes, so the
    result does not drift however long the stream runs. O(length) per bar.
    """

    length: int = 20
    _closes: RingBuffer = field(init=False)
    _positions: np.ndarray = field(init=False)
    _value: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        self._closes = RingBuffer(self.length)
        self._positions = np.arange(self.length, dtype=np.float64)

    def update(self, close: float, **kwargs: Any) -> None:
        """Update with new close price - O(length)."""
        self._closes.push(close)
        if self._closes.is_full():
            self._value = pearson_centered(self._closes.to_array(), self._positions)

    def reset(self) -> None:
        self._closes.clear()
        self._value = 0.0

    @property
    def value(self) -> float:
        if not self.is_ready:
            return 0.0
        return self._value

    @property
    def is_ready(self) -> bool:
        return self._closes.is_full()


@dataclass
class IncrementalSpearman(IncrementalIndicator):
    """
    Spearman Indicator: rank correlation of closes against time, scaled to ±100.

    Formula:
        si = spearman_rho(last `length` closes vs positions 1..length) * 100
        signal = sma(si, signal_length)

    si is only taken from full windows, so the signal is ready once
    signal_length full-window values exist.
    """

    length: int = 10
    signal_length: int = 3
    _spearman: WindowedSpearman = field(init=False)
    _history: RollingSum = field(init=False)
    _si: float = field(default=0.0, init=False)
    _count: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self._spearman = WindowedSpearman(self.length)
        self._history = RollingSum(max_history=max(self.signal_length, 1))

    def update(self, close: float, **kwargs: Any) -> None:
        """Update with new close price - O(n log n) in the window length."""
        self._count += 1
        self._spearman.add(close)
        if self._spearman.state is not WindowState.FULL:
            return

        self._si = self._spearman.rho() * PERCENT_SCALE
        self._history.add(self._si)

    def reset(self) -> None:
        self._spearman.clear()
        self._history.clear()
        self._si = 0.0
        self._count = 0

    @property
    def value(self) -> float:
        """Returns si once the rank window is full."""
        if self._count < self.length:
            return 0.0
        return self._si

    @property
    def signal_value(self) -> float:
        if not self.is_ready:
            return 0.0
        return self._history.average(self.signal_length)

    @property
    def is_ready(self) -> bool:
        return self._count >= self.length + self.signal_length - 1
