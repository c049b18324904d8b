"""
Rolling sum/average over a trailing window chosen at query time.

Built on CumulativeAccumulator: add() is O(1) and every sum/average
query is O(1) regardless of the requested length.

Usage:
    window = RollingSum()
    for close in closes:
        window.add(close)
        sma_20 = window.average(20)
        sum_5 = window.sum(5)
"""

from __future__ import annotations

from ..config import get_config
from ..utils.helpers import require_finite, safe_div
from ..utils.logger import get_logger
from .primitives import CumulativeAccumulator


class RollingSum:
    """
    Sum and mean of the last `length` observations, length per query.

    Because the full cumulative history is retained, the same instance
    can answer sum(5) and sum(50) at the same step, or a historical
    window via sum_at().

    Degenerate queries (no data, length <= 0) return 0.0 and never raise.

    Example:
        >>> window = RollingSum()
        >>> for x in [10.0, 11.0, 9.0]:
        ...     window.add(x)
        >>> window.sum(2)
        20.0
        >>> window.average(5)
        10.0
    """

    __slots__ = ("_acc", "_validate")

    def __init__(self, max_history: int | None = None) -> None:
        """
        Initialize rolling sum.

        Args:
            max_history: Longest window ever queried. Defaults to the
                configured engine max_history (unbounded when unset).
        """
        engine = get_config().engine
        if max_history is None:
            max_history = engine.max_history
        self._acc = CumulativeAccumulator(max_history)
        self._validate = engine.validate_inputs
        get_logger().window("CREATED", "rolling_sum", max_history=max_history)

    def add(self, value: float) -> None:
        """Append one observation - O(1)."""
        if self._validate:
            value = require_finite(value, "RollingSum")
        self._acc.add(value)

    def sum(self, length: int) -> float:
        """Sum of the last min(length, count) observations."""
        return self._acc.window_total(length)

    def average(self, length: int) -> float:
        """Mean of the last min(length, count) observations, 0.0 if none."""
        return safe_div(self._acc.window_total(length), self._acc.effective_length(length))

    def sum_at(self, length: int, end_index: int) -> float:
        """Sum of the `length` observations ending at stream position end_index."""
        return self._acc.window_total_at(length, end_index)

    def average_at(self, length: int, end_index: int) -> float:
        """Mean of the `length` observations ending at stream position end_index."""
        return safe_div(
            self._acc.window_total_at(length, end_index),
            self._acc.effective_length(length, end_index),
        )

    @property
    def count(self) -> int:
        return self._acc.count

    def __len__(self) -> int:
        return self._acc.count

    def clear(self) -> None:
        self._acc.clear()
