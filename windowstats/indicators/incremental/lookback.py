"""
Lookback-based indicators built on FixedWindowMinMax.

Includes Stochastic and AROON -- indicators that track the highest high
and lowest low (or their positions) over a fixed lookback.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ...config import PERCENT_SCALE
from ...structures import FixedWindowMinMax, RollingSum
from ...utils.helpers import safe_div
from .base import IncrementalIndicator


@dataclass
class IncrementalStochastic(IncrementalIndicator):
    """
    Stochastic Oscillator with amortized O(1) updates.

    Formula:
        lowest_low = min(low over k_length)
        highest_high = max(high over k_length)
        %K = (close - lowest_low) / (highest_high - lowest_low) * 100
        %D = sma(%K, d_length)

    A flat range (highest_high == lowest_low) gives %K = 0.
    """

    k_length: int = 14
    d_length: int = 3
    _high_window: FixedWindowMinMax = field(init=False)
    _low_window: FixedWindowMinMax = field(init=False)
    _k_history: RollingSum = field(init=False)
    _k: float = field(default=0.0, init=False)
    _count: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self._high_window = FixedWindowMinMax(self.k_length)
        self._low_window = FixedWindowMinMax(self.k_length)
        self._k_history = RollingSum(max_history=max(self.d_length, 1))

    def update(self, high: float, low: float, close: float, **kwargs: Any) -> None:
        """Update with new high/low/close - amortized O(1)."""
        self._count += 1
        self._high_window.add(high)
        self._low_window.add(low)

        if self._count < self.k_length:
            return

        highest = self._high_window.max
        lowest = self._low_window.min
        self._k = safe_div(close - lowest, highest - lowest) * PERCENT_SCALE
        self._k_history.add(self._k)

    def reset(self) -> None:
        self._high_window.clear()
        self._low_window.clear()
        self._k_history.clear()
        self._k = 0.0
        self._count = 0

    @property
    def value(self) -> float:
        """Returns %K value."""
        return self.k_value

    @property
    def k_value(self) -> float:
        if self._count < self.k_length:
            return 0.0
        return self._k

    @property
    def d_value(self) -> float:
        if not self.is_ready:
            return 0.0
        return self._k_history.average(self.d_length)

    @property
    def is_ready(self) -> bool:
        return self._count >= self.k_length + self.d_length - 1


@dataclass
class IncrementalAROON(IncrementalIndicator):
    """
    Aroon Indicator with amortized O(1) updates.

    Formula:
        aroon_up = ((length - bars_since_high) / length) * 100
        aroon_down = ((length - bars_since_low) / length) * 100
        aroon_osc = aroon_up - aroon_down

    The lookback spans length + 1 bars, so a high exactly `length` bars
    ago still counts (aroon_up = 0).
    """

    length: int = 25
    _high_window: FixedWindowMinMax = field(init=False)
    _low_window: FixedWindowMinMax = field(init=False)
    _count: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self._high_window = FixedWindowMinMax(self.length + 1)
        self._low_window = FixedWindowMinMax(self.length + 1)

    def update(self, high: float, low: float, **kwargs: Any) -> None:
        """Update with new high/low data - amortized O(1)."""
        self._count += 1
        self._high_window.add(high)
        self._low_window.add(low)

    def reset(self) -> None:
        self._high_window.clear()
        self._low_window.clear()
        self._count = 0

    @property
    def value(self) -> float:
        """Returns Aroon Oscillator value."""
        return self.osc_value

    @property
    def up_value(self) -> float:
        if not self.is_ready:
            return 0.0
        return ((self.length - self._high_window.bars_since_max) / self.length) * PERCENT_SCALE

    @property
    def down_value(self) -> float:
        if not self.is_ready:
            return 0.0
        return ((self.length - self._low_window.bars_since_min) / self.length) * PERCENT_SCALE

    @property
    def osc_value(self) -> float:
        return self.up_value - self.down_value

    @property
    def is_ready(self) -> bool:
        return self._count > self.length
