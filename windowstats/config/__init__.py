"""
Configuration management.
"""

from .config import (
    Config,
    EngineConfig,
    LogConfig,
    get_config,
    reload_config,
)

from .constants import (
    ENV_LOG_DIR,
    ENV_LOG_LEVEL,
    ENV_MAX_HISTORY,
    ENV_VALIDATE_INPUTS,
    LOGGER_NAME,
    PERCENT_SCALE,
)

__all__ = [
    # Config classes
    "Config",
    "EngineConfig",
    "LogConfig",
    "get_config",
    "reload_config",
    # Constants
    "ENV_LOG_DIR",
    "ENV_LOG_LEVEL",
    "ENV_MAX_HISTORY",
    "ENV_VALIDATE_INPUTS",
    "LOGGER_NAME",
    "PERCENT_SCALE",
]
