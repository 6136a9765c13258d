"""Utility functions for git-branch-sweeper.

This package provides utility modules:
- dates: epoch-millisecond clock and day-difference helpers
"""

from .dates import now_ms, days_between

__all__ = [
    "now_ms",
    "days_between",
]
