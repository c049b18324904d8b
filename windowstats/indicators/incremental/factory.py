"""
Factory function for incremental indicators.

Provides create_incremental_indicator() to instantiate any incremental
indicator from a type string and parameter dict.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .base import IncrementalIndicator
from .lookback import IncrementalAROON, IncrementalStochastic
from .statistical import (
    IncrementalCorrelationTrend,
    IncrementalPercentRank,
    IncrementalSpearman,
)


_VALID_PARAMS: dict[str, frozenset[str]] = {
    "stoch": frozenset({"k", "d"}),
    "aroon": frozenset({"length"}),
    "percent_rank": frozenset({"length"}),
    "correlation_trend": frozenset({"length"}),
    "spearman": frozenset({"length", "signal"}),
}


def _validate_params(indicator_type: str, params: dict[str, Any]) -> None:
    """Raise ValueError if params contains unknown keys for this indicator."""
    valid = _VALID_PARAMS.get(indicator_type)
    if valid is None:
        return
    unknown = set(params.keys()) - valid
    if unknown:
        raise ValueError(
            f"Unknown params for '{indicator_type}': {sorted(unknown)}. "
            f"Valid: {sorted(valid)}"
        )


# Each entry maps indicator type string to a callable(params) -> IncrementalIndicator.
INCREMENTAL_INDICATORS: dict[str, Callable[[dict[str, Any]], IncrementalIndicator]] = {
    "stoch": lambda p: IncrementalStochastic(k_length=p.get("k", 14), d_length=p.get("d", 3)),
    "aroon": lambda p: IncrementalAROON(length=p.get("length", 25)),
    "percent_rank": lambda p: IncrementalPercentRank(length=p.get("length", 20)),
    "correlation_trend": lambda p: IncrementalCorrelationTrend(length=p.get("length", 20)),
    "spearman": lambda p: IncrementalSpearman(length=p.get("length", 10), signal_length=p.get("signal", 3)),
}


def create_incremental_indicator(
    indicator_type: str,
    params: dict[str, Any],
) -> IncrementalIndicator | None:
    """
    Create an incremental indicator from type and params.

    Returns None if the indicator type is not supported incrementally.
    Raises ValueError if params contains unknown keys.
    """
    indicator_type = indicator_type.lower()
    _validate_params(indicator_type, params)

    factory_fn = INCREMENTAL_INDICATORS.get(indicator_type)
    if factory_fn is None:
        return None
    return factory_fn(params)


def supports_incremental(indicator_type: str) -> bool:
    """Check if indicator type supports incremental computation."""
    return indicator_type.lower() in INCREMENTAL_INDICATORS


def list_incremental_indicators() -> list[str]:
    """Get sorted list of all indicators that support incremental computation."""
    return sorted(INCREMENTAL_INDICATORS)
