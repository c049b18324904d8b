"""
Base class for incremental indicators.

All incremental indicators inherit from IncrementalIndicator, which defines
the per-bar update interface: update(), reset(), value, is_ready.

Indicators own their window structures exclusively: each instance builds
its own structures and feeds them one bar per update() call.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class IncrementalIndicator(ABC):
    """Base class for incremental indicators."""

    @abstractmethod
    def update(self, **kwargs: Any) -> None:
        """Update with new data."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Reset state to initial."""
        ...

    @property
    @abstractmethod
    def value(self) -> float:
        """Current indicator value (0.0 before warmup)."""
        ...

    @property
    @abstractmethod
    def is_ready(self) -> bool:
        """True when warmup period complete."""
        ...
