"""Pass-scoped metadata snapshot models."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from git_branch_sweeper.models.branch import BranchMetadata, UpstreamRelationship


@dataclass(frozen=True)
class RefRecord:
    """One row of the batched local ref query."""
    name: str
    upstream_name: Optional[str]
    committer_timestamp: int  # unix seconds
    tracking: str


@dataclass(frozen=True)
class BranchMetadataCache:
    """Read-only snapshot of branch metadata, built once per analysis pass.

    Attributes:
        branches: Local branch name -> BranchMetadata
        last_commit_timestamps: Any ref (local or remote-tracking) -> epoch ms
        commit_counts: Any ref -> number of reachable commits
        remote_names: Names of configured remotes
    """
    branches: Mapping[str, BranchMetadata] = field(default_factory=dict)
    last_commit_timestamps: Mapping[str, int] = field(default_factory=dict)
    commit_counts: Mapping[str, int] = field(default_factory=dict)
    remote_names: Tuple[str, ...] = ()

    def __post_init__(self):
        # Freeze the mappings so no component can write into another's snapshot
        object.__setattr__(self, "branches", MappingProxyType(dict(self.branches)))
        object.__setattr__(
            self, "last_commit_timestamps", MappingProxyType(dict(self.last_commit_timestamps))
        )
        object.__setattr__(self, "commit_counts", MappingProxyType(dict(self.commit_counts)))
        object.__setattr__(self, "remote_names", tuple(self.remote_names))

    def relationship(self, branch: str) -> Optional[UpstreamRelationship]:
        """Upstream relationship of a local branch, None if unknown."""
        metadata = self.branches.get(branch)
        return metadata.upstream if metadata else None

    def last_commit_timestamp(self, branch: str) -> Optional[int]:
        metadata = self.branches.get(branch)
        if metadata is not None:
            return metadata.last_commit_timestamp
        return self.last_commit_timestamps.get(branch)
