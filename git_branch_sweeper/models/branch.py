"""Branch model and related enums"""
from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union


class SyncStatus(Enum):
    """Sync status of a local branch with its upstream."""
    NO_REMOTE = "no-remote"
    SYNCED = "synced"
    AHEAD = "ahead"
    BEHIND = "behind"
    DIVERGED = "diverged"


class BranchCategory(Enum):
    """Cleanup category a branch can be classified into."""
    MERGED = "merged"
    LOCAL_ONLY = "local_only"
    DIVERGED = "diverged"
    BEHIND_ONLY = "behind_only"
    STALE = "stale"


@dataclass(frozen=True)
class NoRemote:
    """Branch has no configured upstream."""

    @property
    def status(self) -> SyncStatus:
        return SyncStatus.NO_REMOTE


@dataclass(frozen=True)
class Synced:
    """Upstream configured, nothing ahead or behind."""
    upstream: str = ""

    @property
    def status(self) -> SyncStatus:
        return SyncStatus.SYNCED


@dataclass(frozen=True)
class Ahead:
    upstream: str
    ahead: int

    @property
    def status(self) -> SyncStatus:
        return SyncStatus.AHEAD


@dataclass(frozen=True)
class Behind:
    upstream: str
    behind: int

    @property
    def status(self) -> SyncStatus:
        return SyncStatus.BEHIND


@dataclass(frozen=True)
class Diverged:
    upstream: str
    ahead: int
    behind: int

    @property
    def status(self) -> SyncStatus:
        return SyncStatus.DIVERGED


UpstreamRelationship = Union[NoRemote, Synced, Ahead, Behind, Diverged]


def upstream_of(relationship: Optional[UpstreamRelationship]) -> Optional[str]:
    """Return the upstream branch name carried by a relationship, if any."""
    if relationship is None or isinstance(relationship, NoRemote):
        return None
    return relationship.upstream or None


def normalize_branch_name(branch: str, remote_names: Iterable[str]) -> str:
    """Strip a remote prefix (e.g. "origin/feature/login" -> "feature/login")."""
    for remote in remote_names:
        prefix = f"{remote}/"
        if branch.startswith(prefix):
            return branch[len(prefix):]
    return branch


@dataclass(frozen=True)
class BranchMetadata:
    """Per local branch metadata read in one batched query.

    ``upstream`` is None when the tracking descriptor could not be parsed.
    """
    name: str
    last_commit_timestamp: int  # epoch milliseconds
    upstream: Optional[UpstreamRelationship]


@dataclass(frozen=True)
class TargetCandidate:
    """A branch ranked as a potential merge target."""
    name: str
    normalized_name: str
    score: float


@dataclass(frozen=True)
class MergeInfo:
    last_commit_timestamp: int
    merged_into: str


@dataclass(frozen=True)
class DivergedInfo:
    ahead: int
    behind: int
    last_commit_timestamp: int


@dataclass(frozen=True)
class BehindInfo:
    behind: int
    last_commit_timestamp: int


@dataclass
class ClassificationResult:
    """Classified branches, one map per category. A branch lives in at most one map."""
    merged: Dict[str, MergeInfo] = field(default_factory=dict)
    diverged: Dict[str, DivergedInfo] = field(default_factory=dict)
    behind_only: Dict[str, BehindInfo] = field(default_factory=dict)
    local_only: Dict[str, int] = field(default_factory=dict)
    stale: Dict[str, int] = field(default_factory=dict)

    def category_map(self, category: BranchCategory) -> dict:
        """Return the map backing a category."""
        if category is BranchCategory.MERGED:
            return self.merged
        if category is BranchCategory.DIVERGED:
            return self.diverged
        if category is BranchCategory.BEHIND_ONLY:
            return self.behind_only
        if category is BranchCategory.LOCAL_ONLY:
            return self.local_only
        if category is BranchCategory.STALE:
            return self.stale
        raise ValueError(f"Unknown branch category: {category!r}")

    def category_of(self, branch: str) -> Optional[BranchCategory]:
        for category in BranchCategory:
            if branch in self.category_map(category):
                return category
        return None

    def branch_names(self) -> List[str]:
        """Classified branches in cleanup order: merged, behind, diverged, local-only, stale."""
        return [
            *self.merged,
            *self.behind_only,
            *self.diverged,
            *self.local_only,
            *self.stale,
        ]

    @property
    def total(self) -> int:
        return sum(len(self.category_map(category)) for category in BranchCategory)

    def is_empty(self) -> bool:
        return self.total == 0
