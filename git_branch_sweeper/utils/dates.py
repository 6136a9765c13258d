"""Timestamp helpers shared by the scorer and the classifier."""

import time
from typing import Optional

from git_branch_sweeper.constants import MILLISECONDS_PER_DAY


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def days_between(from_ms: float, to_ms: Optional[float] = None) -> float:
    """Absolute difference between two epoch-millisecond timestamps, in fractional days."""
    if to_ms is None:
        to_ms = now_ms()
    return abs(to_ms - from_ms) / MILLISECONDS_PER_DAY
