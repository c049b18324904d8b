"""
Incremental indicators built on the window statistics structures.

Each indicator owns its structures and advances them one bar per
update() call, querying right after feeding.

Usage:
    from windowstats.indicators.incremental import IncrementalStochastic

    stoch = IncrementalStochastic(k_length=14, d_length=3)
    for high, low, close in bars:
        stoch.update(high=high, low=low, close=close)
        if stoch.is_ready:
            k, d = stoch.k_value, stoch.d_value
"""

from __future__ import annotations

# Base class
from .base import IncrementalIndicator

# Lookback-based indicators
from .lookback import (
    IncrementalAROON,
    IncrementalStochastic,
)

# Rank and correlation indicators
from .statistical import (
    IncrementalCorrelationTrend,
    IncrementalPercentRank,
    IncrementalSpearman,
)

# Factory and utilities
from .factory import (
    create_incremental_indicator,
    supports_incremental,
    list_incremental_indicators,
    INCREMENTAL_INDICATORS,
)

__all__ = [
    # Base
    "IncrementalIndicator",
    # Lookback-based
    "IncrementalAROON",
    "IncrementalStochastic",
    # Rank and correlation
    "IncrementalCorrelationTrend",
    "IncrementalPercentRank",
    "IncrementalSpearman",
    # Factory and utilities
    "create_incremental_indicator",
    "supports_incremental",
    "list_incremental_indicators",
    "INCREMENTAL_INDICATORS",
]
