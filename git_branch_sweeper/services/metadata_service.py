"""Builds the pass-scoped branch metadata snapshot."""

import asyncio
from typing import Dict, Iterable, List, Optional, Sequence

from git_branch_sweeper.exceptions import GitBranchSweeperError
from git_branch_sweeper.models.branch import BranchMetadata, NoRemote
from git_branch_sweeper.models.cache import BranchMetadataCache, RefRecord
from git_branch_sweeper.services.git.tracking import parse_upstream_track
from git_branch_sweeper.logging_config import get_logger

logger = get_logger(__name__)


def build_branch_metadata(records: Iterable[RefRecord]) -> Dict[str, BranchMetadata]:
    """Turn batched ref rows into per-branch metadata.

    Branches without an upstream are NoRemote and their tracking descriptor is
    ignored. Branches whose descriptor cannot be parsed keep their timestamp
    but get an unknown (None) relationship.
    """
    metadata = {}
    for record in records:
        if record.upstream_name is None:
            relationship = NoRemote()
        else:
            relationship = parse_upstream_track(record.tracking, record.upstream_name)
            if relationship is None:
                logger.debug(
                    f"Could not parse tracking info '{record.tracking}' for {record.name}, "
                    "upstream relationship unknown"
                )

        metadata[record.name] = BranchMetadata(
            name=record.name,
            last_commit_timestamp=record.committer_timestamp * 1000,
            upstream=relationship,
        )
    return metadata


class MetadataService:
    """Service that reads branch metadata from the backend in batched queries."""

    def __init__(self, backend):
        """Initialize the service.

        Args:
            backend: GitBackend (or compatible) providing the read-only queries
        """
        self.backend = backend

    async def build_cache(
        self,
        remote_names: Sequence[str],
        count_branches: Optional[Sequence[str]] = None,
    ) -> BranchMetadataCache:
        """Build the metadata snapshot for one analysis pass.

        Args:
            remote_names: Configured remote names
            count_branches: Refs whose commit counts are needed for target
                scoring (typically every local and remote-tracking branch)

        Returns:
            Immutable BranchMetadataCache

        Raises:
            MetadataQueryError: If a batched ref query fails
        """
        records, remote_timestamps = await asyncio.gather(
            asyncio.to_thread(self.backend.batched_ref_metadata),
            asyncio.to_thread(self.backend.batched_remote_ref_timestamps),
        )

        branches = build_branch_metadata(records)
        logger.debug(f"Read metadata for {len(branches)} local branches")

        last_commit_timestamps = {
            name: timestamp * 1000 for name, timestamp in remote_timestamps.items()
        }
        for name, metadata in branches.items():
            last_commit_timestamps[name] = metadata.last_commit_timestamp

        commit_counts = await self._collect_commit_counts(count_branches or [])

        return BranchMetadataCache(
            branches=branches,
            last_commit_timestamps=last_commit_timestamps,
            commit_counts=commit_counts,
            remote_names=tuple(remote_names),
        )

    async def _collect_commit_counts(self, branches: Sequence[str]) -> Dict[str, int]:
        """Fetch commit counts concurrently; a failing branch is left out."""

        async def count(branch: str) -> Optional[int]:
            try:
                return await asyncio.to_thread(self.backend.commit_count, branch)
            except GitBranchSweeperError as e:
                logger.debug(f"Error getting commit count for {branch}: {e}")
                return None

        unique: List[str] = list(dict.fromkeys(branches))
        counts = await asyncio.gather(*(count(branch) for branch in unique))
        return {branch: value for branch, value in zip(unique, counts) if value is not None}
