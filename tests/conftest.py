"""
Pytest configuration for window statistics tests.
"""

import numpy as np
import pytest

from windowstats.config import (
    ENV_LOG_DIR,
    ENV_LOG_LEVEL,
    ENV_MAX_HISTORY,
    ENV_VALIDATE_INPUTS,
    reload_config,
)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch, tmp_path):
    """Every test starts from default config, ignoring any local .env."""
    for name in (ENV_LOG_DIR, ENV_LOG_LEVEL, ENV_MAX_HISTORY, ENV_VALIDATE_INPUTS):
        monkeypatch.delenv(name, raising=False)
    return reload_config(str(tmp_path / "missing.env"))


@pytest.fixture
def configure(monkeypatch, tmp_path):
    """Apply env overrides and rebuild the config singleton."""
    def _configure(**env: str):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return reload_config(str(tmp_path / "missing.env"))
    return _configure


@pytest.fixture
def rng() -> np.random.Generator:
    """Deterministic random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def sample_closes() -> list[float]:
    """Short price series used by the end-to-end checks."""
    return [10.0, 11.0, 9.0, 12.0, 8.0, 13.0]
