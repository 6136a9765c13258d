"""Merge detection service for git-branch-sweeper."""

from threading import Lock
from typing import Dict

from git_branch_sweeper.logging_config import get_logger

logger = get_logger(__name__)


class MergeDetector:
    """Answers whether one branch is fully contained in another's history.

    A branch is merged into a target when every commit reachable from it is
    also reachable from the target, i.e. `git rev-list --count target..source`
    is zero. Errors always resolve to "not merged" so a failed check can never
    mark a branch for deletion.
    """

    def __init__(self, backend):
        """Initialize the merge detector.

        Args:
            backend: GitBackend (or compatible) used for the range query
        """
        self.backend = backend
        self._merge_status_cache: Dict[str, bool] = {}
        self._cache_lock = Lock()  # Checks run on worker threads
        self.checks_performed = 0

        logger.debug("Merge detector initialized")

    def _check_cache(self, key: str) -> tuple[bool, bool]:
        """Thread-safe cache check. Returns (found, value)."""
        with self._cache_lock:
            if key in self._merge_status_cache:
                return (True, self._merge_status_cache[key])
            return (False, False)

    def _set_in_cache(self, key: str, value: bool):
        """Thread-safe cache write."""
        with self._cache_lock:
            self._merge_status_cache[key] = value
            self.checks_performed += 1

    def is_merged_into(self, source: str, target: str) -> bool:
        """Check if source is fully merged into target."""
        # A branch cannot be merged into itself
        if source == target:
            return False

        cache_key = f"{source}:{target}"
        found, value = self._check_cache(cache_key)
        if found:
            return value

        try:
            merged = self.backend.count_commits_not_in(source, target) == 0
        except Exception as e:
            logger.debug(f"Error checking if {source} is merged into {target}: {e}")
            merged = False

        if merged:
            logger.debug(f"Branch {source} is merged into {target}")
        self._set_in_cache(cache_key, merged)
        return merged
