"""
Incremental state primitives for O(1) hot-loop operations.

Provides the leaf data structures every window structure is built from:
- CumulativeAccumulator: running total with cumulative snapshots so any
  trailing window total can be answered by differencing two snapshots
- MonotonicDeque: O(1) amortized sliding window min/max
- RingBuffer: Fixed-size circular buffer that reports what it evicts

Performance Contract:
- CumulativeAccumulator.add(): O(1) amortized
- CumulativeAccumulator.window_total(): O(1)
- MonotonicDeque.push(): O(1) amortized
- MonotonicDeque.get(): O(1)
- RingBuffer.push(): O(1)
- RingBuffer.to_array(): O(size)
"""

from __future__ import annotations

from collections import deque
from typing import Iterator, Literal

import numpy as np

from .types import ExtremeMode


class CumulativeAccumulator:
    """
    Running total plus cumulative snapshots C[i] = x[0] + ... + x[i].

    The total of the last L observations ending at position e is
    C[e] - C[e - L] (or C[e] when e - L < 0), so queries may ask for a
    different trailing length at every step without re-scanning.

    By default every snapshot is retained. With max_history=m only the
    snapshots needed for windows of up to m observations are kept and
    longer queries are clamped to m. Compaction rebases the kept snapshots
    onto the oldest one, so a bounded accumulator only ever holds
    window-sized totals and its precision does not decay with stream length.

    Example:
        >>> acc = CumulativeAccumulator()
        >>> for x in [10.0, 11.0, 9.0, 12.0]:
        ...     acc.add(x)
        >>> acc.window_total(3)
        32.0
        >>> acc.window_total(10)
        42.0
        >>> acc.window_total_at(2, 1)
        21.0

    Attributes:
        max_history: Longest window that can be answered, or None.
    """

    __slots__ = ("max_history", "_snapshots", "_offset", "_count", "_base")

    def __init__(self, max_history: int | None = None) -> None:
        """
        Initialize accumulator.

        Args:
            max_history: Longest trailing window to support (>= 1),
                or None to keep the full stream.

        Raises:
            ValueError: If max_history < 1.
        """
        if max_history is not None and max_history < 1:
            raise ValueError(
                f"max_history must be >= 1 or None, got {max_history}\n"
                f"\n"
                f"Fix: CumulativeAccumulator(max_history=200)"
            )
        self.max_history = max_history
        self._snapshots: list[float] = []
        # Stream position of _snapshots[0]
        self._offset = 0
        self._count = 0
        # Total rebased out of the kept snapshots
        self._base = 0.0

    def add(self, value: float) -> None:
        """
        Append one observation.

        Args:
            value: Observation to accumulate.
        """
        previous = self._snapshots[-1] if self._snapshots else 0.0
        self._snapshots.append(previous + value)
        self._count += 1

        if self.max_history is not None:
            keep = self.max_history + 1
            # Compact in batches so trimming stays O(1) amortized
            if len(self._snapshots) > 2 * keep:
                drop = len(self._snapshots) - keep
                pivot = self._snapshots[drop]
                self._snapshots = [snapshot - pivot for snapshot in self._snapshots[drop:]]
                self._base += pivot
                self._offset += drop

    @property
    def count(self) -> int:
        """Number of observations seen (including any no longer retained)."""
        return self._count

    @property
    def total(self) -> float:
        """Sum of every observation seen."""
        return self._base + self._snapshots[-1] if self._snapshots else 0.0

    def effective_length(self, length: int, end_index: int | None = None) -> int:
        """
        Number of observations a window query actually covers.

        Args:
            length: Requested trailing length.
            end_index: Last position of the window (default: newest).

        Returns:
            min(length, end_index + 1), further clamped to the retained
            history; 0 for any degenerate query.
        """
        start, end = self._bounds(length, end_index)
        if end < 0:
            return 0
        return end - start

    def window_total(self, length: int) -> float:
        """
        Total of the last min(length, count) observations.

        Args:
            length: Trailing window length.

        Returns:
            Window total, or 0.0 if empty or length <= 0.
        """
        return self.window_total_at(length, self._count - 1)

    def window_total_at(self, length: int, end_index: int) -> float:
        """
        Total of the window of `length` observations ending at end_index.

        Args:
            length: Trailing window length.
            end_index: 0-based stream position of the window's last element.

        Returns:
            Window total, or 0.0 for out-of-range positions, length <= 0,
            or an empty stream.
        """
        start, end = self._bounds(length, end_index)
        if end < 0:
            return 0.0
        end_total = self._snapshots[end - self._offset]
        if start < 0:
            return end_total
        return end_total - self._snapshots[start - self._offset]

    def _bounds(self, length: int, end_index: int | None) -> tuple[int, int]:
        """
        Resolve a query to (start_snapshot_pos, end_snapshot_pos).

        start == -1 means "from the beginning of the stream".
        end == -1 flags a degenerate query.
        """
        if end_index is None:
            end_index = self._count - 1
        if self._count == 0 or length <= 0 or end_index < 0 or end_index >= self._count:
            return -1, -1
        if end_index < self._offset:
            # Window end fell out of the retained history
            return -1, -1

        if self.max_history is not None:
            length = min(length, self.max_history)
        start = end_index - length
        if start < 0 and self._offset == 0:
            return -1, end_index
        if start < self._offset:
            start = self._offset
        return start, end_index

    def __len__(self) -> int:
        """Return the number of observations seen."""
        return self._count

    def clear(self) -> None:
        """Clear all accumulated state."""
        self._snapshots.clear()
        self._offset = 0
        self._count = 0
        self._base = 0.0


class MonotonicDeque:
    """
    O(1) amortized sliding window min or max.

    Maintains a monotonic invariant so the front element is always
    the min (or max) within the current window.

    Algorithm:
    - MIN mode: deque values increase (front = smallest)
    - MAX mode: deque values decrease (front = largest)

    Each element is pushed at most once and popped at most once,
    giving O(1) amortized cost per push. Equal values are dominated by
    the newer one, so the front holds the most recent extreme.

    Example:
        >>> deque = MonotonicDeque(window_size=3, mode="min")
        >>> deque.push(0, 5.0)  # window: [5]
        >>> deque.push(1, 3.0)  # window: [3]
        >>> deque.push(2, 4.0)  # window: [3, 4]
        >>> deque.get()
        3.0
        >>> deque.push(3, 2.0)  # window: [2], 3 evicted by window, rest by monotonic
        >>> deque.get()
        2.0

    Attributes:
        window_size: Number of elements in the sliding window.
        mode: ExtremeMode.MIN or ExtremeMode.MAX.
    """

    __slots__ = ("window_size", "mode", "_deque", "_last_idx")

    def __init__(
        self,
        window_size: int,
        mode: ExtremeMode | Literal["min", "max"],
    ) -> None:
        """
        Initialize monotonic deque.

        Args:
            window_size: Size of the sliding window (must be >= 1).
            mode: "min" to track minimum, "max" to track maximum.

        Raises:
            ValueError: If window_size < 1 or mode is invalid.
        """
        if window_size < 1:
            raise ValueError(
                f"window_size must be >= 1, got {window_size}\n"
                f"\n"
                f"Fix: MonotonicDeque(window_size=20, mode='min')"
            )
        try:
            resolved = ExtremeMode(mode)
        except ValueError:
            raise ValueError(
                f"mode must be 'min' or 'max', got '{mode}'\n"
                f"\n"
                f"Fix: MonotonicDeque(window_size=20, mode='min')"
            ) from None
        self.window_size = window_size
        self.mode = resolved
        self._deque: deque[tuple[int, float]] = deque()
        self._last_idx: int | None = None

    def push(self, idx: int, value: float) -> None:
        """
        Add a value to the window at the given index.

        The index must be strictly increasing across calls.
        Elements outside the window are evicted automatically.

        Args:
            idx: Stream position (must increase with each call).
            value: Value to add to the window.

        Raises:
            ValueError: If idx does not increase.
        """
        if self._last_idx is not None and idx <= self._last_idx:
            raise ValueError(
                f"MonotonicDeque positions must strictly increase: "
                f"got {idx} after {self._last_idx}\n"
                f"\n"
                f"Fix: push observations in stream order, one position per step"
            )
        self._last_idx = idx

        # Maintain monotonic property
        if self.mode is ExtremeMode.MIN:
            # For min: remove all elements >= value from back
            while self._deque and self._deque[-1][1] >= value:
                self._deque.pop()
        else:
            # For max: remove all elements <= value from back
            while self._deque and self._deque[-1][1] <= value:
                self._deque.pop()

        self._deque.append((idx, value))

        # Evict entries outside window (by index)
        while self._deque[0][0] <= idx - self.window_size:
            self._deque.popleft()

    def get(self) -> float | None:
        """
        Get the current min or max value in the window.

        Returns:
            The minimum (or maximum) value in the current window,
            or None if the window is empty.
        """
        if not self._deque:
            return None
        return self._deque[0][1]

    def get_position(self) -> int | None:
        """
        Get the stream position of the current min or max.

        Returns:
            Index passed to push() for the front element, or None if empty.
        """
        if not self._deque:
            return None
        return self._deque[0][0]

    def __len__(self) -> int:
        """Return the number of candidates currently in the deque."""
        return len(self._deque)

    def clear(self) -> None:
        """Clear all elements from the deque."""
        self._deque.clear()
        self._last_idx = None


class RingBuffer:
    """
    Fixed-size circular buffer for O(1) push.

    Holds the raw observations of a fixed-length window in arrival order.
    When full, push() overwrites the oldest element and returns it, which
    tells an ordered structure exactly which value left the window.

    Iteration and to_array() run oldest to newest.

    Example:
        >>> buf = RingBuffer(size=3)
        >>> buf.push(1.0)
        >>> buf.push(2.0)
        >>> buf.push(3.0)
        >>> buf.is_full()
        True
        >>> buf.push(4.0)  # overwrites 1.0
        1.0
        >>> buf.to_array()
        array([2., 3., 4.])

    Attributes:
        size: Maximum number of elements the buffer can hold.
    """

    __slots__ = ("size", "_buffer", "_head", "_count")

    def __init__(self, size: int) -> None:
        """
        Initialize ring buffer with fixed size.

        Args:
            size: Maximum number of elements (must be >= 1).

        Raises:
            ValueError: If size < 1.
        """
        if size < 1:
            raise ValueError(
                f"size must be >= 1, got {size}\n"
                f"\n"
                f"Fix: RingBuffer(size=5)"
            )
        self.size = size
        self._buffer = np.full(size, np.nan, dtype=np.float64)
        self._head = 0  # Next write position
        self._count = 0  # Number of elements stored

    def push(self, value: float) -> float | None:
        """
        Add a value to the buffer, overwriting oldest if full.

        Args:
            value: Value to add.

        Returns:
            The evicted (oldest) value if the buffer was full, else None.
        """
        evicted: float | None = None
        if self._count == self.size:
            evicted = float(self._buffer[self._head])
        self._buffer[self._head] = value
        self._head = (self._head + 1) % self.size
        if self._count < self.size:
            self._count += 1
        return evicted

    def __iter__(self) -> Iterator[float]:
        """Iterate oldest to newest."""
        start = self._head - self._count
        for i in range(self._count):
            yield float(self._buffer[(start + i) % self.size])

    def is_full(self) -> bool:
        """
        Check if buffer has reached capacity.

        Returns:
            True if buffer contains exactly 'size' elements.
        """
        return self._count == self.size

    def __len__(self) -> int:
        """Return the number of elements currently in the buffer."""
        return self._count

    def clear(self) -> None:
        """Clear all elements from the buffer."""
        self._buffer.fill(np.nan)
        self._head = 0
        self._count = 0

    def to_array(self) -> np.ndarray:
        """
        Return a copy of the buffer contents in logical order.

        Returns:
            numpy array with oldest element first, newest last.
            Length equals current count (not size).
        """
        if self._count == 0:
            return np.array([], dtype=np.float64)
        indices = (self._head - self._count + np.arange(self._count)) % self.size
        return self._buffer[indices].copy()
