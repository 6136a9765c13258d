"""Identification and ranking of potential merge target branches."""

import math
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from git_branch_sweeper.constants import NAME_RULES, TargetScore
from git_branch_sweeper.models.branch import TargetCandidate, normalize_branch_name
from git_branch_sweeper.models.cache import BranchMetadataCache
from git_branch_sweeper.services.branch_validation_service import BranchValidationService
from git_branch_sweeper.utils.dates import days_between, now_ms as current_ms
from git_branch_sweeper.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class BranchSignals:
    """Inputs to the target score of one branch."""
    normalized_name: str
    commit_count: int
    days_since_last_commit: float
    is_protected: bool


def score_branch(signals: BranchSignals) -> float:
    """Score a branch as a merge target.

    The score adds up independent signals:
    - a large bonus for protected branches
    - commit volume, log-scaled so very busy branches don't dominate
    - recency, decaying linearly to zero after RECENCY_MAX days
    - the first matching naming convention (no stacking)
    """
    score = 0.0

    if signals.is_protected:
        score += TargetScore.PROTECTED

    score += math.log(max(signals.commit_count, 0) + 1) * TargetScore.COMMIT_LOG_SCALE
    score += max(0.0, TargetScore.RECENCY_MAX - signals.days_since_last_commit)

    for pattern, value in NAME_RULES:
        if pattern.search(signals.normalized_name):
            score += value
            break

    return score


def identify_targets(
    all_branches: Sequence[str],
    cache: BranchMetadataCache,
    protection_patterns: Sequence["re.Pattern[str]"],
    max_results: int = TargetScore.MAX_RESULTS,
    min_score: float = TargetScore.MIN_SCORE,
    now_ms: Optional[int] = None,
) -> List[TargetCandidate]:
    """Rank branches by how likely they are to be merge targets.

    Remote prefixes are stripped so "origin/main" and "main" compete as one
    logical branch; only the higher-scoring variant is kept. Candidates below
    ``min_score`` are dropped, the rest are sorted by descending score (stable,
    so ties keep discovery order) and cut to ``max_results``.

    Args:
        all_branches: Local and remote-tracking branch names
        cache: Metadata snapshot with timestamps and commit counts
        protection_patterns: Compiled protected branch patterns
        max_results: Maximum number of targets returned
        min_score: Minimum score a target needs
        now_ms: Reference time in epoch milliseconds (defaults to now)

    Returns:
        Ranked list of TargetCandidate, possibly empty
    """
    if now_ms is None:
        now_ms = current_ms()

    best: Dict[str, TargetCandidate] = {}
    for branch in all_branches:
        normalized = normalize_branch_name(branch, cache.remote_names)
        timestamp = cache.last_commit_timestamp(branch)

        signals = BranchSignals(
            normalized_name=normalized,
            commit_count=cache.commit_counts.get(branch, 0),
            # Unknown commit dates get no recency bonus
            days_since_last_commit=(
                days_between(timestamp, now_ms) if timestamp is not None else math.inf
            ),
            is_protected=BranchValidationService.is_protected(normalized, protection_patterns),
        )
        score = score_branch(signals)

        existing = best.get(normalized)
        if existing is None or score > existing.score:
            best[normalized] = TargetCandidate(name=branch, normalized_name=normalized, score=score)

    ranked = sorted(
        (candidate for candidate in best.values() if candidate.score >= min_score),
        key=lambda candidate: candidate.score,
        reverse=True,
    )[:max_results]

    logger.debug(
        "Potential target branches: "
        + (", ".join(f"{c.name} ({c.score:.0f})" for c in ranked) or "none")
    )
    return ranked
