"""Formatting utilities for git-branch-sweeper.

- date: timestamp and relative age formatting
- status: category headings and table rows
"""

from .date import format_timestamp, format_relative_age
from .status import (
    format_category_label,
    format_category_rows,
    format_merged,
    format_diverged,
    format_behind,
)

__all__ = [
    # Date
    "format_timestamp",
    "format_relative_age",
    # Status
    "format_category_label",
    "format_category_rows",
    "format_merged",
    "format_diverged",
    "format_behind",
]
