"""Deletion of classified branches."""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from rich.console import Console

from git_branch_sweeper.constants import SYMBOL_DELETED
from git_branch_sweeper.exceptions import (
    BranchProtectedError,
    CurrentBranchError,
    GitBranchSweeperError,
)
from git_branch_sweeper.services.branch_validation_service import BranchValidationService
from git_branch_sweeper.logging_config import get_logger

console = Console()
logger = get_logger(__name__)


@dataclass
class CleanupReport:
    """Outcome of a cleanup run."""
    deleted: List[str] = field(default_factory=list)
    would_delete: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> int:
        return len(self.deleted) + len(self.would_delete)


class CleanupService:
    """Deletes local branches one by one; a failing branch never stops the batch."""

    def __init__(
        self,
        backend,
        protection_patterns: Sequence["re.Pattern[str]"] = (),
        quiet: bool = False,
    ):
        """Initialize the service.

        Args:
            backend: GitBackend (or compatible) used for deletion
            protection_patterns: Branches matching these are never deleted
            quiet: If True, suppress console output
        """
        self.backend = backend
        self.protection_patterns = list(protection_patterns)
        self.quiet = quiet

    def _console_print(self, *args, **kwargs):
        if not self.quiet:
            console.print(*args, **kwargs)

    def delete_branches(self, branches: Sequence[str], dry_run: bool = False) -> CleanupReport:
        """Delete branches, or report what would be deleted in dry-run mode.

        Args:
            branches: Local branch names
            dry_run: If True, nothing is deleted

        Returns:
            CleanupReport listing deleted and failed branches
        """
        report = CleanupReport()
        current_branch: Optional[str] = self.backend.current_branch()

        for branch in branches:
            try:
                self._check_deletable(branch, current_branch)
                if dry_run:
                    report.would_delete.append(branch)
                    self._console_print(
                        f"[red]{SYMBOL_DELETED}[/red] Would delete branch {branch} (dry run)"
                    )
                    continue

                self.backend.delete_local_branch(branch)
                report.deleted.append(branch)
                logger.debug(f"Deleted branch {branch}")
                self._console_print(f"[red]{SYMBOL_DELETED}[/red] Deleted: {branch}")
            except GitBranchSweeperError as e:
                logger.error(f"Error deleting branch {branch}: {e}")
                report.failed[branch] = str(e)
                self._console_print(f"[yellow]Skipping {branch}: {e}[/yellow]")

        return report

    def _check_deletable(self, branch: str, current_branch: Optional[str]) -> None:
        if current_branch is not None and branch == current_branch:
            raise CurrentBranchError(branch)
        if BranchValidationService.is_protected(branch, self.protection_patterns):
            raise BranchProtectedError(branch)
