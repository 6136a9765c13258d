"""Shared constants for git-branch-sweeper."""

import re
from typing import List, Tuple


# Default protected branch patterns (regular expressions, matched with re.search)
DEFAULT_PROTECTED_PATTERNS: List[str] = [
    r"^main$",
    r"^master$",
    r"^development$",
    r"^develop$",
    r"^dev",
    r"^release/",
    r"^hotfix/",
]

DEFAULT_STALE_DAYS = 30

# Diverged and local-only branches carry unpushed work, so they wait longer
RISKY_STALE_MULTIPLIER = 3

MILLISECONDS_PER_DAY = 24 * 60 * 60 * 1000


class TargetScore:
    """Weights used to rank potential merge targets."""

    PROTECTED = 10_000
    COMMIT_LOG_SCALE = 100
    RECENCY_MAX = 500

    MAIN = 5000
    DEVELOP = 4000
    STAGING = 3000
    RELEASE = 2000
    FEATURE_PENALTY = -500

    MIN_SCORE = 1000
    MAX_RESULTS = 5


# Ordered naming rules, first match wins
NAME_RULES: List[Tuple["re.Pattern[str]", int]] = [
    (re.compile(r"^(main|master|production|prod)$", re.IGNORECASE), TargetScore.MAIN),
    (re.compile(r"^(development|develop|dev)$", re.IGNORECASE), TargetScore.DEVELOP),
    (re.compile(r"^(staging|stage)$", re.IGNORECASE), TargetScore.STAGING),
    (re.compile(r"^(release|hotfix)/", re.IGNORECASE), TargetScore.RELEASE),
    (re.compile(r"^(feature|feat)/", re.IGNORECASE), TargetScore.FEATURE_PENALTY),
]


# Symbol constants
SYMBOL_MERGED_INTO = "→"
SYMBOL_AHEAD = "↑"
SYMBOL_BEHIND = "↓"
SYMBOL_DELETED = "✗"
SYMBOL_DONE = "✓"


# Rich styles per category
CATEGORY_STYLES = {
    "merged": "yellow",
    "behind_only": "blue",
    "diverged": "bold red",
    "local_only": "magenta",
    "stale": "bright_black",
}
