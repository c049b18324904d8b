"""
Common numeric helpers used across the engine.

These helpers apply the domain convention that degenerate results
(zero denominators, NaN, infinities) collapse to 0 rather than raising.
"""

import math
from typing import Any


def finite_or_zero(value: float) -> float:
    """
    Return value unchanged if finite, else 0.0.

    Examples:
        >>> finite_or_zero(1.5)
        1.5
        >>> finite_or_zero(float("nan"))
        0.0
        >>> finite_or_zero(float("inf"))
        0.0
    """
    return value if math.isfinite(value) else 0.0


def safe_div(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 for a zero denominator or non-finite result."""
    if denominator == 0:
        return 0.0
    return finite_or_zero(numerator / denominator)


def require_finite(value: Any, structure: str) -> float:
    """
    Convert value to float and reject NaN/inf.

    Args:
        value: Observation to check
        structure: Name used in the error message

    Returns:
        The observation as float

    Raises:
        ValueError: If the observation is not finite
    """
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(
            f"{structure} received non-finite observation {number!r}\n"
            f"\n"
            f"Fix: drop or fill missing bars before feeding the window"
        )
    return number


def percent_change(current: float, previous: float) -> float:
    """
    Percent change from previous to current, 0.0 when previous is 0.

    Examples:
        >>> percent_change(110.0, 100.0)
        10.0
        >>> percent_change(5.0, 0.0)
        0.0
    """
    return safe_div(current - previous, previous) * 100.0


def rescale_value(
    value: float,
    old_max: float,
    old_min: float,
    new_max: float,
    new_min: float,
    is_reversed: bool = False,
) -> float:
    """
    Linearly map value from [old_min, old_max] onto [new_min, new_max].

    With is_reversed=True the distance is measured from old_max, so
    old_max maps to new_min. A zero-width source range maps to new_min.

    Examples:
        >>> rescale_value(5.0, 10.0, 0.0, 100.0, 0.0)
        50.0
        >>> rescale_value(10.0, 10.0, 0.0, 100.0, 0.0, is_reversed=True)
        0.0
    """
    distance = (old_max - value) if is_reversed else (value - old_min)
    ratio = safe_div(distance, old_max - old_min)
    return (ratio * (new_max - new_min)) + new_min
