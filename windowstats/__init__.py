"""
windowstats - streaming sliding-window statistics for technical indicators.

Structures are fed one observation per step and answer sum, average,
min/max, Pearson correlation, rank counts and Spearman correlation over
the most recent observations without re-scanning the window. Batch
kernels compute simple, weighted, exponential and Wilder moving averages
in one pass.
"""

from .structures import (
    CumulativeAccumulator,
    FixedWindowMinMax,
    MonotonicDeque,
    RingBuffer,
    RollingCorrelation,
    RollingSum,
    SlidingOrderStatistics,
    WindowedSpearman,
    WindowState,
)
from .indicators import (
    MovingAverageType,
    exponential_moving_average,
    moving_average,
    simple_moving_average,
    weighted_moving_average,
    wilder_moving_average,
)

__version__ = "0.1.0"

__all__ = [
    "CumulativeAccumulator",
    "FixedWindowMinMax",
    "MonotonicDeque",
    "RingBuffer",
    "RollingCorrelation",
    "RollingSum",
    "SlidingOrderStatistics",
    "WindowedSpearman",
    "WindowState",
    "MovingAverageType",
    "exponential_moving_average",
    "moving_average",
    "simple_moving_average",
    "weighted_moving_average",
    "wilder_moving_average",
]
