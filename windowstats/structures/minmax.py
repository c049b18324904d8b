"""
Fixed-length rolling max/min using two MonotonicDeques.

The window length is fixed at construction. Both extremes are tracked
by independent deques so max and min can be read at every step.
"""

from __future__ import annotations

from ..config import get_config
from ..utils.helpers import require_finite
from ..utils.logger import get_logger
from .primitives import MonotonicDeque
from .types import ExtremeMode


class FixedWindowMinMax:
    """
    Rolling max and min over the last `length` observations.

    O(1) technique:
        - Monotonic deque for max (decreasing values with position)
        - Monotonic deque for min (increasing values with position)
        - Front of each deque is always the current extreme

    Max/min cover the last min(length, count) observations and are 0.0
    before the first add.

    Example:
        >>> window = FixedWindowMinMax(3)
        >>> for x in [10.0, 11.0, 9.0, 12.0]:
        ...     window.add(x)
        >>> window.max, window.min
        (12.0, 9.0)
        >>> window.bars_since_min
        1
    """

    __slots__ = ("length", "_count", "_max_deque", "_min_deque", "_validate")

    def __init__(self, length: int) -> None:
        """
        Initialize min/max window.

        Args:
            length: Window length (must be >= 1).

        Raises:
            ValueError: If length < 1.
        """
        if length < 1:
            raise ValueError(
                f"length must be >= 1, got {length}\n"
                f"\n"
                f"Fix: FixedWindowMinMax(length=14)"
            )
        self.length = length
        self._count = 0
        self._max_deque = MonotonicDeque(length, ExtremeMode.MAX)
        self._min_deque = MonotonicDeque(length, ExtremeMode.MIN)
        self._validate = get_config().engine.validate_inputs
        get_logger().window("CREATED", "fixed_window_minmax", length=length)

    def add(self, value: float) -> None:
        """Append one observation - amortized O(1)."""
        if self._validate:
            value = require_finite(value, "FixedWindowMinMax")
        position = self._count
        self._count += 1
        self._max_deque.push(position, value)
        self._min_deque.push(position, value)

    @property
    def max(self) -> float:
        """Highest value in the window - O(1) via deque front."""
        value = self._max_deque.get()
        return value if value is not None else 0.0

    @property
    def min(self) -> float:
        """Lowest value in the window - O(1) via deque front."""
        value = self._min_deque.get()
        return value if value is not None else 0.0

    @property
    def max_position(self) -> int:
        """Stream position of the most recent highest value (0 if empty)."""
        position = self._max_deque.get_position()
        return position if position is not None else 0

    @property
    def min_position(self) -> int:
        """Stream position of the most recent lowest value (0 if empty)."""
        position = self._min_deque.get_position()
        return position if position is not None else 0

    @property
    def bars_since_max(self) -> int:
        if self._count == 0:
            return 0
        return self._count - 1 - self.max_position

    @property
    def bars_since_min(self) -> int:
        if self._count == 0:
            return 0
        return self._count - 1 - self.min_position

    @property
    def count(self) -> int:
        return self._count

    def is_full(self) -> bool:
        return self._count >= self.length

    def clear(self) -> None:
        self._max_deque.clear()
        self._min_deque.clear()
        self._count = 0

    def __repr__(self) -> str:
        return f"FixedWindowMinMax(length={self.length}, count={self._count})"
