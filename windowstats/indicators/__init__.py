"""
Indicator layer: batch moving-average kernels and incremental consumers.
"""

from .kernels import (
    MovingAverageType,
    exponential_moving_average,
    moving_average,
    simple_moving_average,
    weighted_moving_average,
    wilder_moving_average,
    wma_weights,
)
from .incremental import (
    IncrementalAROON,
    IncrementalCorrelationTrend,
    IncrementalIndicator,
    IncrementalPercentRank,
    IncrementalSpearman,
    IncrementalStochastic,
    create_incremental_indicator,
    list_incremental_indicators,
    supports_incremental,
)

__all__ = [
    # Kernels
    "MovingAverageType",
    "exponential_moving_average",
    "moving_average",
    "simple_moving_average",
    "weighted_moving_average",
    "wilder_moving_average",
    "wma_weights",
    # Incremental
    "IncrementalAROON",
    "IncrementalCorrelationTrend",
    "IncrementalIndicator",
    "IncrementalPercentRank",
    "IncrementalSpearman",
    "IncrementalStochastic",
    "create_incremental_indicator",
    "list_incremental_indicators",
    "supports_incremental",
]
