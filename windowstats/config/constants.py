"""
Centralized constants for the window statistics engine.

Environment variable names and their defaults live here so config loading,
logging and tests all read them from one place.
"""

from typing import FrozenSet


# ==================== Environment Variables ====================

ENV_LOG_LEVEL = "WINDOWSTATS_LOG_LEVEL"
ENV_LOG_DIR = "WINDOWSTATS_LOG_DIR"
ENV_MAX_HISTORY = "WINDOWSTATS_MAX_HISTORY"
ENV_VALIDATE_INPUTS = "WINDOWSTATS_VALIDATE_INPUTS"

TRUTHY_VALUES: FrozenSet[str] = frozenset({"1", "true", "yes", "on"})


# ==================== Defaults ====================

DEFAULT_LOG_LEVEL = "INFO"

# Logger name shared by every module in the package
LOGGER_NAME = "windowstats"


# ==================== Indicator Scales ====================

# Oscillators in this domain report on a 0..100 (or -100..100) scale
PERCENT_SCALE = 100.0
