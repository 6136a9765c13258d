"""Date and time formatting utilities."""

from datetime import datetime, timezone
from typing import Optional

from git_branch_sweeper.constants import MILLISECONDS_PER_DAY
from git_branch_sweeper.utils.dates import now_ms as current_ms


def format_timestamp(timestamp_ms: int) -> str:
    """
    Format an epoch-millisecond timestamp as a YYYY-MM-DD string (UTC).

    Args:
        timestamp_ms: Epoch milliseconds

    Returns:
        Formatted date string
    """
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d")


def format_relative_age(timestamp_ms: int, now_ms: Optional[int] = None) -> str:
    """
    Describe how long ago a timestamp was, e.g. "3 days ago".

    Args:
        timestamp_ms: Epoch milliseconds
        now_ms: Reference time (defaults to now)

    Returns:
        Human readable relative age
    """
    if now_ms is None:
        now_ms = current_ms()

    days = int(max(0, now_ms - timestamp_ms) // MILLISECONDS_PER_DAY)
    if days == 0:
        return "today"
    if days == 1:
        return "a day ago"
    if days < 30:
        return f"{days} days ago"
    if days < 365:
        months = days // 30
        return "a month ago" if months == 1 else f"{months} months ago"
    years = days // 365
    return "a year ago" if years == 1 else f"{years} years ago"
