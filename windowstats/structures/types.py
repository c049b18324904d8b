"""
Shared window structure type definitions.

This module is the CANONICAL location for window-related enums.
"""

from enum import Enum


class WindowState(str, Enum):
    """
    Fill state of a fixed-length window.

    FILLING -> FILLING on each insert while count < length.
    FILLING -> FULL on the length-th insert.
    FULL stays FULL; every add then inserts and evicts the oldest.
    """

    FILLING = "filling"
    FULL = "full"


class ExtremeMode(str, Enum):
    """Which extreme a monotonic deque tracks."""

    MIN = "min"
    MAX = "max"
