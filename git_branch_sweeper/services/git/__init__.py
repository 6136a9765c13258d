"""Git-related services for git-branch-sweeper."""

from .backend import GitBackend
from .merge_detector import MergeDetector
from .tracking import parse_upstream_track

__all__ = [
    "GitBackend",
    "MergeDetector",
    "parse_upstream_track",
]
