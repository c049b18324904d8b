"""
Utility modules.
"""

from .logger import get_logger, setup_logger, StatsLogger
from .helpers import (
    finite_or_zero,
    safe_div,
    require_finite,
    percent_change,
    rescale_value,
)

__all__ = [
    # Logger
    "get_logger",
    "setup_logger",
    "StatsLogger",
    # Numeric helpers
    "finite_or_zero",
    "safe_div",
    "require_finite",
    "percent_change",
    "rescale_value",
]
