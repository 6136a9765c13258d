"""Branch validation service for git-branch-sweeper."""

import re
from fnmatch import fnmatch
from typing import List, Sequence


class BranchValidationService:
    """Service for deciding which branches may be analyzed or deleted."""

    @staticmethod
    def is_protected(branch_name: str, protection_patterns: Sequence["re.Pattern[str]"]) -> bool:
        """
        Check if a branch is protected.

        Args:
            branch_name: Name of the branch (remote prefix already stripped)
            protection_patterns: Compiled regular expressions

        Returns:
            True if any pattern matches the branch name
        """
        return any(pattern.search(branch_name) for pattern in protection_patterns)

    @staticmethod
    def should_ignore(branch_name: str, ignore_patterns: Sequence[str]) -> bool:
        """Check if a branch matches one of the fnmatch-style ignore patterns."""
        return any(fnmatch(branch_name, pattern) for pattern in ignore_patterns)

    @staticmethod
    def filter_candidates(
        branches: Sequence[str],
        protection_patterns: Sequence["re.Pattern[str]"],
        ignore_patterns: Sequence[str] = (),
    ) -> List[str]:
        """
        Select the local branches that are candidates for cleanup.

        Args:
            branches: Local branch names
            protection_patterns: Compiled protected branch patterns
            ignore_patterns: fnmatch patterns of branches to skip entirely

        Returns:
            Branches that are neither protected nor ignored, in input order
        """
        return [
            branch
            for branch in branches
            if not BranchValidationService.is_protected(branch, protection_patterns)
            and not BranchValidationService.should_ignore(branch, ignore_patterns)
        ]
