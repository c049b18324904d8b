"""
Configuration management for the window statistics engine.
Loads settings from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .constants import (
    DEFAULT_LOG_LEVEL,
    ENV_LOG_DIR,
    ENV_LOG_LEVEL,
    ENV_MAX_HISTORY,
    ENV_VALIDATE_INPUTS,
    TRUTHY_VALUES,
)


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = DEFAULT_LOG_LEVEL
    # None = console only, no log files
    log_dir: Optional[str] = None


@dataclass
class EngineConfig:
    """
    Engine-wide defaults read once when a structure is constructed.

    max_history:
        Default snapshot retention for cumulative accumulators.
        None keeps the full stream so any trailing length can be queried
        at any position. A positive value bounds memory; longer queries
        are clamped to it.

    validate_inputs:
        When True every add() rejects non-finite observations with
        ValueError instead of letting them propagate into the window.
    """
    max_history: Optional[int] = None
    validate_inputs: bool = False

    def __post_init__(self):
        """Validate configuration."""
        if self.max_history is not None and self.max_history < 1:
            raise ValueError(
                f"{ENV_MAX_HISTORY} must be a positive integer, got {self.max_history}\n"
                f"\n"
                f"Fix: {ENV_MAX_HISTORY}=500  # or leave unset for unbounded history"
            )


class Config:
    """
    Central configuration manager.

    Loads configuration from environment variables (after applying any
    .env file) and provides typed access to all settings.
    """

    _instance: Optional['Config'] = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, env_file: str = ".env"):
        if self._initialized:
            return

        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path, override=False)

        self.log = self._load_log_config()
        self.engine = self._load_engine_config()

        self._initialized = True

    def _load_log_config(self) -> LogConfig:
        """Load logging configuration from environment."""
        return LogConfig(
            level=os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper(),
            log_dir=os.getenv(ENV_LOG_DIR) or None,
        )

    def _load_engine_config(self) -> EngineConfig:
        """Load engine configuration from environment."""
        raw_history = os.getenv(ENV_MAX_HISTORY, "").strip()
        try:
            max_history = int(raw_history) if raw_history else None
        except ValueError:
            raise ValueError(
                f"{ENV_MAX_HISTORY} must be an integer, got '{raw_history}'\n"
                f"\n"
                f"Fix: {ENV_MAX_HISTORY}=500"
            ) from None

        validate = os.getenv(ENV_VALIDATE_INPUTS, "false").strip().lower() in TRUTHY_VALUES
        return EngineConfig(max_history=max_history, validate_inputs=validate)

    def summary_short(self) -> str:
        """Generate a short one-line configuration summary."""
        history = self.engine.max_history if self.engine.max_history is not None else "unbounded"
        return (
            f"windowstats | log={self.log.level} | history={history} | "
            f"validate={self.engine.validate_inputs}"
        )


def get_config(env_file: str = ".env") -> Config:
    """Get or create the global config instance."""
    return Config(env_file)


def reload_config(env_file: str = ".env") -> Config:
    """Discard the cached config and rebuild it from the environment."""
    Config._instance = None
    return Config(env_file)
