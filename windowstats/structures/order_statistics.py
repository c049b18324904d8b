"""
Fixed-length sliding window with O(log n) rank queries.

SlidingOrderStatistics keeps two views of the same window:
- A RingBuffer of raw observations in arrival order (FIFO), which names
  the value to evict when the window is full
- A sorted list of the same values (a multiset: duplicates are kept),
  searched with bisect for rank queries

Eviction removes one occurrence of the chronologically oldest value.
Non-finite observations have no rank: they occupy their FIFO slot (so
they still age out on time) but never enter the sorted view, and every
rank query counts finite members only.
Equal values are indistinguishable to every rank query, so removing any
one occurrence of that value leaves the window in the same observable
state as removing the exact oldest occurrence.

WindowedSpearman builds tie-aware rank correlation on top of it:
values are mid-ranked inside the window and correlated against their
positions 1..n.

Performance Contract:
- SlidingOrderStatistics.add(): O(log n) search + O(n) list shift (memmove)
- count_less_than[_or_equal](): O(log n)
- select_by_rank(), median: O(1)
- WindowedSpearman.rho(): O(n log n)
"""

from __future__ import annotations

import math
from bisect import bisect_left, bisect_right, insort

from ..config import get_config
from ..utils.helpers import require_finite
from ..utils.logger import get_logger
from .correlation import pearson_from_sums
from .primitives import RingBuffer
from .types import WindowState


class SlidingOrderStatistics:
    """
    Multiset of the last `length` observations with rank queries.

    State machine:
        FILLING (count < length): add() is a pure insert.
        FULL (count == length): add() inserts the new value and evicts
        the oldest in one step. FULL is never left.

    Example:
        >>> window = SlidingOrderStatistics(3)
        >>> for x in [5.0, 5.0, 3.0]:
        ...     window.add(x)
        >>> window.count_less_than_or_equal(5.0)
        3
        >>> window.add(9.0)  # evicts the first 5.0
        >>> window.count_less_than_or_equal(5.0)
        2
        >>> window.median
        5.0

    Attributes:
        length: Fixed window length.
    """

    __slots__ = ("length", "_fifo", "_sorted", "_validate")

    def __init__(self, length: int) -> None:
        """
        Initialize order-statistics window.

        Args:
            length: Window length (must be >= 1).

        Raises:
            ValueError: If length < 1.
        """
        if length < 1:
            raise ValueError(
                f"length must be >= 1, got {length}\n"
                f"\n"
                f"Fix: SlidingOrderStatistics(length=20)"
            )
        self.length = length
        self._fifo = RingBuffer(length)
        self._sorted: list[float] = []
        self._validate = get_config().engine.validate_inputs
        get_logger().window("CREATED", "sliding_order_statistics", length=length)

    def add(self, value: float) -> None:
        """
        Insert one observation, evicting the oldest once full.

        Args:
            value: Observation to insert.

        Raises:
            ValueError: If value is NaN or infinite and input validation
                is enabled.
        """
        if self._validate:
            value = require_finite(value, "SlidingOrderStatistics")
        value = float(value)
        evicted = self._fifo.push(value)
        if evicted is not None and math.isfinite(evicted):
            idx = bisect_left(self._sorted, evicted)
            del self._sorted[idx]
        if math.isfinite(value):
            insort(self._sorted, value)

    @property
    def state(self) -> WindowState:
        return WindowState.FULL if self._fifo.is_full() else WindowState.FILLING

    def is_full(self) -> bool:
        return self._fifo.is_full()

    def count_less_than(self, value: float) -> int:
        """Number of finite members strictly below value - O(log n)."""
        if math.isnan(value):
            return 0
        return bisect_left(self._sorted, value)

    def count_less_than_or_equal(self, value: float) -> int:
        """Number of finite members <= value - O(log n). A NaN query counts 0."""
        if math.isnan(value):
            return 0
        return bisect_right(self._sorted, value)

    def select_by_rank(self, rank: int) -> float:
        """
        Value at 1-based rank in ascending order.

        Args:
            rank: 1 = smallest. Clamped to the window size.

        Returns:
            The rank-th smallest value, or 0.0 if empty or rank <= 0.
        """
        if not self._sorted or rank <= 0:
            return 0.0
        return self._sorted[min(rank, len(self._sorted)) - 1]

    def percentile_nearest_rank(self, percentile: float) -> float:
        """
        Nearest-rank percentile of the window.

        Rank is ceil(percentile / 100 * n), clamped to [1, n].

        Args:
            percentile: Percentile in [0, 100].

        Returns:
            The percentile value, or 0.0 if empty.
        """
        n = len(self._sorted)
        if n == 0:
            return 0.0
        rank = math.ceil(percentile / 100.0 * n)
        return self._sorted[max(1, min(rank, n)) - 1]

    @property
    def median(self) -> float:
        """Middle value (mean of the two middle values for even n), 0.0 if empty."""
        n = len(self._sorted)
        if n == 0:
            return 0.0
        mid = n // 2
        if n % 2 == 1:
            return self._sorted[mid]
        return (self._sorted[mid - 1] + self._sorted[mid]) / 2.0

    def values(self) -> list[float]:
        """Window contents in arrival order (oldest first), non-finite included."""
        return list(self._fifo)

    def sorted_values(self) -> list[float]:
        """Finite window members in ascending order."""
        return list(self._sorted)

    def __len__(self) -> int:
        """Number of finite members (the population every rank query sees)."""
        return len(self._sorted)

    def clear(self) -> None:
        self._fifo.clear()
        self._sorted.clear()

    def __repr__(self) -> str:
        return (
            f"SlidingOrderStatistics(length={self.length}, "
            f"count={len(self._sorted)}, state={self.state.value})"
        )


class WindowedSpearman:
    """
    Spearman rank correlation of a window's values against time.

    Over the last n = min(length, count) observations, each value gets
    its tie-aware mid-rank (a tied group of size k occupying ranks
    r..r+k-1 all receive (2r+k-1)/2) and is correlated against its
    position rank 1..n:

        rho = [n·Σ(rx·ry) − Σrx·Σry]
              / sqrt[(n·Σrx² − (Σrx)²) · (n·Σry² − (Σry)²)]

    A rising window gives +1, a falling one -1. n <= 1 or a degenerate
    denominator (all values equal) gives 0.0. Non-finite observations are
    skipped, so n counts the finite members and positions run over them.

    Example:
        >>> spearman = WindowedSpearman(4)
        >>> for x in [1.0, 2.0, 2.0, 3.0]:
        ...     spearman.add(x)
        >>> spearman.ranks()
        [1.0, 2.5, 2.5, 4.0]
    """

    __slots__ = ("length", "_window")

    def __init__(self, length: int) -> None:
        """
        Initialize windowed Spearman correlation.

        Args:
            length: Window length (must be >= 1).

        Raises:
            ValueError: If length < 1.
        """
        self._window = SlidingOrderStatistics(length)
        self.length = length

    def add(self, value: float) -> None:
        """Append one observation, evicting the oldest once full."""
        self._window.add(value)

    def mid_rank(self, value: float) -> float:
        """Tie-aware rank of value among the current window members."""
        below = self._window.count_less_than(value)
        ties = self._window.count_less_than_or_equal(value) - below
        if ties == 0:
            return 0.0
        # First rank of the tied group is below + 1
        return below + (ties + 1) / 2.0

    def ranks(self) -> list[float]:
        """Mid-ranks of the finite window values in arrival order."""
        return [
            self.mid_rank(value)
            for value in self._window.values()
            if math.isfinite(value)
        ]

    def rho(self) -> float:
        """
        Spearman correlation of the current window.

        Returns:
            Correlation in [-1, 1], or 0.0 for a degenerate window.
        """
        rank_x = self.ranks()
        n = len(rank_x)
        if n <= 1:
            return 0.0

        sum_x = 0.0
        sum_xx = 0.0
        sum_xy = 0.0
        for position, rx in enumerate(rank_x, start=1):
            sum_x += rx
            sum_xx += rx * rx
            sum_xy += rx * position

        # Position ranks 1..n have closed-form sums
        sum_y = n * (n + 1) / 2.0
        sum_yy = n * (n + 1) * (2 * n + 1) / 6.0

        return pearson_from_sums(n, sum_x, sum_y, sum_xx, sum_yy, sum_xy)

    @property
    def state(self) -> WindowState:
        return self._window.state

    def __len__(self) -> int:
        return len(self._window)

    def clear(self) -> None:
        self._window.clear()
