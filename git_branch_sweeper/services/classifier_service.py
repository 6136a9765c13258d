"""Branch classification policy.

Each candidate branch is checked against an ordered rule table; the first rule
that applies decides its category:

1. **Merged** - fully contained in one of the ranked target branches.
2. **Local only** - no upstream, last commit older than ``stale_days_local``.
3. **Diverged** - ahead of and behind its upstream, older than ``stale_days_diverged``.
4. **Behind only** - only behind its upstream, at any age unless ``stale_days_behind`` is set.
5. **Stale** - in sync with its upstream, older than ``stale_days``.

Branches matching no rule are active and left out of the result.
"""

import asyncio
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from git_branch_sweeper.config import StaleThresholds
from git_branch_sweeper.models.branch import (
    Behind,
    BehindInfo,
    BranchCategory,
    ClassificationResult,
    Diverged,
    DivergedInfo,
    MergeInfo,
    NoRemote,
    Synced,
    UpstreamRelationship,
    normalize_branch_name,
    upstream_of,
)
from git_branch_sweeper.models.cache import BranchMetadataCache
from git_branch_sweeper.utils.dates import days_between, now_ms as current_ms
from git_branch_sweeper.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class BranchState:
    """Everything the rules need to know about one branch."""
    name: str
    last_commit_timestamp: int
    days_since_last_commit: float
    upstream: Optional[UpstreamRelationship]
    merged_into: Optional[str] = None


@dataclass(frozen=True)
class ClassificationRule:
    category: BranchCategory
    applies: Callable[[BranchState, StaleThresholds], bool]
    description: str


def _is_merged(state: BranchState, thresholds: StaleThresholds) -> bool:
    return state.merged_into is not None


def _is_abandoned_local(state: BranchState, thresholds: StaleThresholds) -> bool:
    return (
        isinstance(state.upstream, NoRemote)
        and state.days_since_last_commit > thresholds.stale_days_local
    )


def _is_stale_diverged(state: BranchState, thresholds: StaleThresholds) -> bool:
    return (
        isinstance(state.upstream, Diverged)
        and state.upstream.ahead > 0
        and state.upstream.behind > 0
        and state.days_since_last_commit > thresholds.stale_days_diverged
    )


def _is_behind_only(state: BranchState, thresholds: StaleThresholds) -> bool:
    if not isinstance(state.upstream, Behind) or state.upstream.behind <= 0:
        return False
    if thresholds.stale_days_behind is None:
        return True
    return state.days_since_last_commit > thresholds.stale_days_behind


def _is_stale_synced(state: BranchState, thresholds: StaleThresholds) -> bool:
    return (
        isinstance(state.upstream, Synced)
        and state.days_since_last_commit > thresholds.stale_days
    )


CLASSIFICATION_RULES: List[ClassificationRule] = [
    ClassificationRule(BranchCategory.MERGED, _is_merged, "merged into a target branch"),
    ClassificationRule(BranchCategory.LOCAL_ONLY, _is_abandoned_local, "no remote and stale"),
    ClassificationRule(BranchCategory.DIVERGED, _is_stale_diverged, "diverged and stale"),
    ClassificationRule(BranchCategory.BEHIND_ONLY, _is_behind_only, "only behind its upstream"),
    ClassificationRule(BranchCategory.STALE, _is_stale_synced, "synced and stale"),
]


def match_rule(
    state: BranchState,
    thresholds: StaleThresholds,
    rules: Sequence[ClassificationRule] = CLASSIFICATION_RULES,
) -> Optional[BranchCategory]:
    """Return the category of the first rule that applies, None if the branch is active."""
    for rule in rules:
        if rule.applies(state, thresholds):
            logger.debug(f"Branch {state.name}: {rule.description}")
            return rule.category
    return None


def record_classification(
    result: ClassificationResult, category: BranchCategory, state: BranchState
) -> None:
    """Store a classified branch in the map of its category."""
    timestamp = state.last_commit_timestamp
    if category is BranchCategory.MERGED:
        result.merged[state.name] = MergeInfo(timestamp, state.merged_into or "")
    elif category is BranchCategory.DIVERGED:
        upstream = state.upstream
        assert isinstance(upstream, Diverged)
        result.diverged[state.name] = DivergedInfo(upstream.ahead, upstream.behind, timestamp)
    elif category is BranchCategory.BEHIND_ONLY:
        upstream = state.upstream
        assert isinstance(upstream, Behind)
        result.behind_only[state.name] = BehindInfo(upstream.behind, timestamp)
    elif category is BranchCategory.LOCAL_ONLY:
        result.local_only[state.name] = timestamp
    elif category is BranchCategory.STALE:
        result.stale[state.name] = timestamp
    else:
        raise ValueError(f"Unhandled branch category: {category!r}")


async def find_merge_target(
    branch: str,
    upstream: Optional[UpstreamRelationship],
    potential_targets: Sequence[str],
    merge_detector,
    remote_names: Sequence[str] = (),
) -> Optional[str]:
    """Return the first target (in rank order) the branch is fully merged into.

    Targets naming the same logical branch, and the branch's own upstream, are
    skipped since a branch is trivially contained in those.
    """
    normalized = normalize_branch_name(branch, remote_names)
    upstream_name = upstream_of(upstream)

    for target in potential_targets:
        if normalize_branch_name(target, remote_names) == normalized:
            continue
        if upstream_name is not None and target == upstream_name:
            continue
        if await asyncio.to_thread(merge_detector.is_merged_into, branch, target):
            return target
    return None


async def classify(
    candidates: Sequence[str],
    potential_targets: Sequence[str],
    thresholds: StaleThresholds,
    cache: BranchMetadataCache,
    merge_detector,
    now_ms: Optional[int] = None,
) -> ClassificationResult:
    """Classify candidate branches into cleanup categories.

    Branches are evaluated concurrently; within a branch, target checks run in
    rank order and stop at the first match.

    Args:
        candidates: Local branches to classify (protected branches already removed)
        potential_targets: Ranked merge target names, best first
        thresholds: Stale thresholds
        cache: Metadata snapshot for this pass
        merge_detector: Object exposing ``is_merged_into(source, target)``
        now_ms: Reference time in epoch milliseconds (defaults to now)

    Returns:
        ClassificationResult with each branch in at most one category
    """
    if now_ms is None:
        now_ms = current_ms()

    async def evaluate(branch: str) -> Tuple[BranchState, Optional[BranchCategory]]:
        timestamp = cache.last_commit_timestamp(branch)
        if timestamp is None:
            timestamp = now_ms
        upstream = cache.relationship(branch)

        merged_into = await find_merge_target(
            branch, upstream, potential_targets, merge_detector, cache.remote_names
        )
        state = BranchState(
            name=branch,
            last_commit_timestamp=timestamp,
            days_since_last_commit=days_between(timestamp, now_ms),
            upstream=upstream,
            merged_into=merged_into,
        )
        return state, match_rule(state, thresholds)

    evaluations = await asyncio.gather(*(evaluate(branch) for branch in candidates))

    result = ClassificationResult()
    for state, category in evaluations:
        if category is not None:
            record_classification(result, category, state)

    logger.debug(
        f"Classified {result.total} of {len(candidates)} branches: "
        f"merged={len(result.merged)}, local_only={len(result.local_only)}, "
        f"diverged={len(result.diverged)}, behind_only={len(result.behind_only)}, "
        f"stale={len(result.stale)}"
    )
    return result
