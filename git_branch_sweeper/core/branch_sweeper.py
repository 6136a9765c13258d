"""Core functionality for git-branch-sweeper"""

import asyncio
import time
from dataclasses import dataclass
from typing import List, Optional, Union

import git
from rich.console import Console

from git_branch_sweeper.config import SweepConfig
from git_branch_sweeper.exceptions import RepositoryError
from git_branch_sweeper.models.branch import ClassificationResult, TargetCandidate
from git_branch_sweeper.models.cache import BranchMetadataCache
from git_branch_sweeper.services.branch_validation_service import BranchValidationService
from git_branch_sweeper.services.classifier_service import classify
from git_branch_sweeper.services.cleanup_service import CleanupReport, CleanupService
from git_branch_sweeper.services.display_service import DisplayService
from git_branch_sweeper.services.git import GitBackend, MergeDetector
from git_branch_sweeper.services.metadata_service import MetadataService
from git_branch_sweeper.services.target_service import identify_targets
from git_branch_sweeper.constants import SYMBOL_DONE
from git_branch_sweeper.utils.dates import now_ms
from git_branch_sweeper.logging_config import get_logger

console = Console()
logger = get_logger(__name__)


@dataclass
class SweepAnalysis:
    """Outcome of one analysis pass."""
    local_branches: List[str]
    candidates: List[str]
    targets: List[TargetCandidate]
    result: ClassificationResult
    cache: BranchMetadataCache
    analyzed_at: int  # epoch milliseconds

    def all_classified(self) -> List[str]:
        """Every classified branch, in cleanup order."""
        return self.result.branch_names()


class BranchSweeper:
    """Runs an analysis pass over the branches of one repository."""

    def __init__(self, repo_path: str, config: Union[SweepConfig, dict, None] = None, backend=None):
        """Initialize BranchSweeper.

        Args:
            repo_path: Path to git repository
            config: SweepConfig or dict (defaults to SweepConfig())
            backend: Query backend, a GitBackend over repo_path by default

        Raises:
            RepositoryError: If repo_path is not a git repository
        """
        self.repo_path = repo_path
        if config is None:
            self.config = SweepConfig()
        elif isinstance(config, dict):
            self.config = SweepConfig.from_dict(config)
        else:
            self.config = config

        if backend is None:
            try:
                git.Repo(self.repo_path)
            except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
                raise RepositoryError(repo_path, str(e)) from e
            backend = GitBackend(self.repo_path)
        self.backend = backend

        self.protection_patterns = self.config.protection_patterns()
        self.thresholds = self.config.thresholds()
        self.display_service = DisplayService(verbose=self.config.verbose, debug=self.config.debug)

    async def analyze_async(self, now: Optional[int] = None) -> SweepAnalysis:
        """Run one analysis pass.

        Raises:
            MetadataQueryError: If branch metadata cannot be read
        """
        started = time.perf_counter()
        analyzed_at = now if now is not None else now_ms()

        if self.config.fetch:
            await self._fetch()

        local_branches, remote_branches, remote_names = await asyncio.gather(
            asyncio.to_thread(self.backend.list_local_branches),
            asyncio.to_thread(self.backend.list_remote_tracking_branches),
            asyncio.to_thread(self.backend.list_remote_names),
        )
        all_branches = [*local_branches, *remote_branches]
        logger.info(
            f"Found {len(local_branches)} local and {len(remote_branches)} remote-tracking branches"
        )

        candidates = BranchValidationService.filter_candidates(
            local_branches, self.protection_patterns, self.config.ignore_patterns
        )

        cache_started = time.perf_counter()
        # A fresh service and detector per pass, nothing is shared between passes
        cache = await MetadataService(self.backend).build_cache(
            remote_names, count_branches=all_branches
        )
        logger.info(f"Building cache took {time.perf_counter() - cache_started:.2f}s")

        targets = identify_targets(
            all_branches,
            cache,
            self.protection_patterns,
            max_results=self.config.max_targets,
            min_score=self.config.min_target_score,
            now_ms=analyzed_at,
        )

        analysis_started = time.perf_counter()
        result = await classify(
            candidates,
            [target.name for target in targets],
            self.thresholds,
            cache,
            MergeDetector(self.backend),
            now_ms=analyzed_at,
        )
        logger.info(f"Branch analysis took {time.perf_counter() - analysis_started:.2f}s")
        logger.info(f"Analysis pass took {time.perf_counter() - started:.2f}s")

        return SweepAnalysis(
            local_branches=local_branches,
            candidates=candidates,
            targets=targets,
            result=result,
            cache=cache,
            analyzed_at=analyzed_at,
        )

    def analyze(self, now: Optional[int] = None) -> SweepAnalysis:
        """Synchronous wrapper around analyze_async."""
        return asyncio.run(self.analyze_async(now))

    async def _fetch(self) -> None:
        try:
            await asyncio.to_thread(self.backend.fetch_all)
        except git.exc.GitError as e:
            logger.warning(f"Error fetching repository: {e}")

    def cleanup(self, analysis: SweepAnalysis, dry_run: Optional[bool] = None) -> CleanupReport:
        """Delete every classified branch of an analysis."""
        if dry_run is None:
            dry_run = self.config.dry_run

        service = CleanupService(self.backend, self.protection_patterns)
        branches = analysis.all_classified()
        report = service.delete_branches(branches, dry_run=dry_run)

        total = len(analysis.local_branches)
        if dry_run:
            console.print(
                f"[green]{SYMBOL_DONE}[/green] Would have deleted {report.succeeded} of {total} branches (dry run)."
            )
        else:
            console.print(f"[green]{SYMBOL_DONE}[/green] Deleted {report.succeeded} of {total} branches.")
        return report

    def run(self, cleanup: bool = False) -> Optional[CleanupReport]:
        """Analyze, display the result and optionally delete the classified branches."""
        analysis = self.analyze()

        if self.config.verbose or self.config.debug:
            self.display_service.display_targets(analysis.targets)
        self.display_service.display_classification(
            analysis.result, self.thresholds, now_ms=analysis.analyzed_at
        )

        if not cleanup or analysis.result.is_empty():
            return None
        return self.cleanup(analysis)
