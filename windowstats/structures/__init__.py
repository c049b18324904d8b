"""
Streaming sliding-window statistics structures.

Every structure is fed one observation per step and answers a query over
the most recent observations without re-scanning the window. Each
instance is owned by exactly one computation over one series.

Public API:
-----------

Types (from types.py):
    WindowState            - FILLING / FULL state of a fixed-length window
    ExtremeMode            - MIN / MAX mode of a monotonic deque

Primitives (from primitives.py):
    CumulativeAccumulator  - Running total with O(1) trailing-window totals
    MonotonicDeque         - O(1) amortized sliding window min/max
    RingBuffer             - Fixed-size circular buffer reporting evictions

Query-time length (window chosen per query):
    RollingSum             - Sum / average of the last L observations
    RollingCorrelation     - Pearson r / r² of the last L pairs

Construction-time length (window fixed at creation):
    FixedWindowMinMax      - Rolling max / min and their positions
    SlidingOrderStatistics - Rank counts, percentiles, median
    WindowedSpearman       - Tie-aware rank correlation against time

Batch Wrappers (from batch.py):
    rolling_max_min, rolling_high_low, rolling_sum, rolling_average,
    rolling_correlation, rolling_percent_rank, rolling_spearman

Example Usage:
--------------

    from windowstats.structures import FixedWindowMinMax, RollingSum

    highs = FixedWindowMinMax(length=14)
    sums = RollingSum()
    for close in closes:
        highs.add(close)
        sums.add(close)
        upper = highs.max
        mean_20 = sums.average(20)
"""

from .types import ExtremeMode, WindowState
from .primitives import CumulativeAccumulator, MonotonicDeque, RingBuffer
from .rolling_sum import RollingSum
from .minmax import FixedWindowMinMax
from .correlation import RollingCorrelation
from .order_statistics import SlidingOrderStatistics, WindowedSpearman
from .batch import (
    rolling_average,
    rolling_correlation,
    rolling_high_low,
    rolling_max_min,
    rolling_percent_rank,
    rolling_spearman,
    rolling_sum,
)

__all__ = [
    # Types
    "ExtremeMode",
    "WindowState",
    # Primitives
    "CumulativeAccumulator",
    "MonotonicDeque",
    "RingBuffer",
    # Structures
    "RollingSum",
    "FixedWindowMinMax",
    "RollingCorrelation",
    "SlidingOrderStatistics",
    "WindowedSpearman",
    # Batch wrappers
    "rolling_average",
    "rolling_correlation",
    "rolling_high_low",
    "rolling_max_min",
    "rolling_percent_rank",
    "rolling_spearman",
    "rolling_sum",
]
