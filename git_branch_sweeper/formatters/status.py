"""Category label and per-branch row formatting utilities."""

from typing import List, Optional

from git_branch_sweeper.config import StaleThresholds
from git_branch_sweeper.constants import SYMBOL_AHEAD, SYMBOL_BEHIND, SYMBOL_MERGED_INTO
from git_branch_sweeper.formatters.date import format_relative_age
from git_branch_sweeper.models.branch import (
    BehindInfo,
    BranchCategory,
    ClassificationResult,
    DivergedInfo,
    MergeInfo,
)


def format_category_label(category: BranchCategory, count: int, thresholds: StaleThresholds) -> str:
    """
    Format the heading shown above a category's branches.

    Args:
        category: Branch category
        count: Number of branches in the category
        thresholds: Thresholds the category was evaluated with

    Returns:
        Heading text including the count
    """
    if category is BranchCategory.MERGED:
        label = "Merged branches"
    elif category is BranchCategory.BEHIND_ONLY:
        label = "Only pending pulls (behind)"
    elif category is BranchCategory.DIVERGED:
        label = (
            f"Stale (>{thresholds.stale_days_diverged} days) & diverged branches "
            "(WARNING: local changes!)"
        )
    elif category is BranchCategory.LOCAL_ONLY:
        label = f"Stale local branches (>{thresholds.stale_days_local} days) without remote counterpart"
    elif category is BranchCategory.STALE:
        label = f"Stale branches (>{thresholds.stale_days} days, synced)"
    else:
        raise ValueError(f"Unknown branch category: {category!r}")
    return f"{label} ({count})"


def format_merged(info: MergeInfo, now_ms: Optional[int] = None) -> List[str]:
    return [
        f"{SYMBOL_MERGED_INTO} [green]{info.merged_into}[/green]",
        format_relative_age(info.last_commit_timestamp, now_ms),
    ]


def format_diverged(info: DivergedInfo, now_ms: Optional[int] = None) -> List[str]:
    ahead_color = "red" if info.ahead > 10 else "yellow"
    behind_color = "red" if info.behind > 50 else "blue"
    return [
        f"[{ahead_color}]{SYMBOL_AHEAD}{info.ahead}[/{ahead_color}] "
        f"[{behind_color}]{SYMBOL_BEHIND}{info.behind}[/{behind_color}]",
        format_relative_age(info.last_commit_timestamp, now_ms),
    ]


def format_behind(info: BehindInfo, now_ms: Optional[int] = None) -> List[str]:
    return [f"{SYMBOL_BEHIND}{info.behind}", format_relative_age(info.last_commit_timestamp, now_ms)]


def format_category_rows(
    result: ClassificationResult, category: BranchCategory, now_ms: Optional[int] = None
) -> List[List[str]]:
    """
    Format the table rows (branch, detail, last activity) of one category.

    Args:
        result: Classification result
        category: Category to format
        now_ms: Reference time for relative ages

    Returns:
        One list of cell strings per branch
    """
    rows = []
    for branch, info in result.category_map(category).items():
        if category is BranchCategory.MERGED:
            cells = format_merged(info, now_ms)
        elif category is BranchCategory.DIVERGED:
            cells = format_diverged(info, now_ms)
        elif category is BranchCategory.BEHIND_ONLY:
            cells = format_behind(info, now_ms)
        elif category is BranchCategory.LOCAL_ONLY:
            cells = ["local only", format_relative_age(info, now_ms)]
        else:
            cells = ["synced", format_relative_age(info, now_ms)]
        rows.append([branch, *cells])
    return rows
