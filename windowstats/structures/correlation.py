"""
Rolling Pearson correlation over a trailing window chosen at query time.

Five parallel CumulativeAccumulators hold the running sums
Σx, Σy, Σx², Σy², Σxy. Any window's correlation is then:

    r = (n·Σxy − Σx·Σy) / sqrt((n·Σx² − (Σx)²) · (n·Σy² − (Σy)²))

with n = min(length, pairs seen).

Pairs are shifted by the first pair before accumulating. Pearson r is
shift-invariant, and the shift keeps the sums near the scale of the
data's variation instead of its level (prices around 5000 accumulate
deviations, not 5000² per bar). A variance term within FLAT_TOLERANCE of
its own n·Σ² is cancellation noise and the window counts as flat.

Unbounded instances still accumulate from the start of the stream; for
very long streams pass max_history so compaction rebases the sums.
"""

from __future__ import annotations

import math

import numpy as np

from ..config import get_config
from ..utils.helpers import finite_or_zero, require_finite
from ..utils.logger import get_logger
from .primitives import CumulativeAccumulator

# Relative size below which a variance term is treated as rounding noise
FLAT_TOLERANCE = 1e-12
# Same, for deviations formed from the mean (noise is a few ulps squared)
CENTERED_FLAT_TOLERANCE = 1e-24


def pearson_from_sums(
    n: int,
    sum_x: float,
    sum_y: float,
    sum_xx: float,
    sum_yy: float,
    sum_xy: float,
) -> float:
    """
    Pearson correlation from window sums, clamped to [-1, 1].

    Returns:
        r, or 0.0 when n <= 1, either series is flat, or the result is
        not finite.
    """
    if n <= 1:
        return 0.0

    numerator = (n * sum_xy) - (sum_x * sum_y)
    denom_left = (n * sum_xx) - (sum_x * sum_x)
    denom_right = (n * sum_yy) - (sum_y * sum_y)
    if denom_left <= FLAT_TOLERANCE * n * sum_xx or denom_right <= FLAT_TOLERANCE * n * sum_yy:
        return 0.0

    r = finite_or_zero(numerator / math.sqrt(denom_left * denom_right))
    return max(-1.0, min(1.0, r))


def pearson_centered(x: np.ndarray, y: np.ndarray) -> float:
    """
    Two-pass Pearson correlation of two equal-length arrays.

    Deviations from the mean are formed first, so no large sums cancel.
    Flat or non-finite inputs give 0.0; the result is clamped to [-1, 1].
    """
    if len(x) <= 1:
        return 0.0

    dx = x - x.mean()
    dy = y - y.mean()
    ss_x = float(np.dot(dx, dx))
    ss_y = float(np.dot(dy, dy))
    if (
        ss_x <= CENTERED_FLAT_TOLERANCE * float(np.dot(x, x))
        or ss_y <= CENTERED_FLAT_TOLERANCE * float(np.dot(y, y))
    ):
        return 0.0

    r = finite_or_zero(float(np.dot(dx, dy)) / math.sqrt(ss_x * ss_y))
    return max(-1.0, min(1.0, r))


class RollingCorrelation:
    """
    Windowed Pearson correlation of paired observations.

    Degenerate windows (length <= 1, a single pair, a constant series,
    or any non-finite intermediate) yield 0.0.

    Example:
        >>> corr = RollingCorrelation()
        >>> for i in range(1, 6):
        ...     corr.add(float(i), float(-i))
        >>> corr.r(5)
        -1.0
    """

    __slots__ = (
        "_sum_x", "_sum_y", "_sum_xx", "_sum_yy", "_sum_xy",
        "_shift", "_validate",
    )

    def __init__(self, max_history: int | None = None) -> None:
        """
        Initialize rolling correlation.

        Args:
            max_history: Longest window ever queried. Defaults to the
                configured engine max_history (unbounded when unset).
        """
        engine = get_config().engine
        if max_history is None:
            max_history = engine.max_history
        self._sum_x = CumulativeAccumulator(max_history)
        self._sum_y = CumulativeAccumulator(max_history)
        self._sum_xx = CumulativeAccumulator(max_history)
        self._sum_yy = CumulativeAccumulator(max_history)
        self._sum_xy = CumulativeAccumulator(max_history)
        # First (x, y) pair, subtracted from every pair
        self._shift: tuple[float, float] | None = None
        self._validate = engine.validate_inputs
        get_logger().window("CREATED", "rolling_correlation", max_history=max_history)

    def add(self, x: float, y: float) -> None:
        """Append one (x, y) pair - O(1) amortized."""
        if self._validate:
            x = require_finite(x, "RollingCorrelation")
            y = require_finite(y, "RollingCorrelation")
        if self._shift is None:
            self._shift = (x, y)
        x -= self._shift[0]
        y -= self._shift[1]
        self._sum_x.add(x)
        self._sum_y.add(y)
        self._sum_xx.add(x * x)
        self._sum_yy.add(y * y)
        self._sum_xy.add(x * y)

    def r(self, length: int) -> float:
        """
        Pearson correlation of the last min(length, count) pairs.

        Args:
            length: Trailing window length.

        Returns:
            Correlation in [-1, 1], or 0.0 for a degenerate window.
        """
        if length <= 1:
            return 0.0

        return pearson_from_sums(
            self._sum_x.effective_length(length),
            self._sum_x.window_total(length),
            self._sum_y.window_total(length),
            self._sum_xx.window_total(length),
            self._sum_yy.window_total(length),
            self._sum_xy.window_total(length),
        )

    def r_squared(self, length: int) -> float:
        """Coefficient of determination of the last min(length, count) pairs."""
        r = self.r(length)
        return r * r

    @property
    def count(self) -> int:
        return self._sum_x.count

    def __len__(self) -> int:
        return self._sum_x.count

    def clear(self) -> None:
        for acc in (self._sum_x, self._sum_y, self._sum_xx, self._sum_yy, self._sum_xy):
            acc.clear()
        self._shift = None
