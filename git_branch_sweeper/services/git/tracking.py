"""Parser for the `%(upstream:track)` descriptor emitted by git for-each-ref."""

import re
from typing import Optional

from git_branch_sweeper.models.branch import (
    Ahead,
    Behind,
    Diverged,
    Synced,
    UpstreamRelationship,
)

_BRACKETS = re.compile(r"^\s*\[\s*|\s*\]\s*$")
_AHEAD = re.compile(r"\bahead\s+(\d+)\b", re.IGNORECASE)
_BEHIND = re.compile(r"\bbehind\s+(\d+)\b", re.IGNORECASE)


def parse_upstream_track(track: Optional[str], upstream: str = "") -> Optional[UpstreamRelationship]:
    """Parse a tracking descriptor such as "[ahead 2, behind 5]".

    Supported inputs:
    - "" -> Synced (git prints nothing when the branch matches its upstream)
    - "[ahead N]", "[behind N]"
    - "[ahead N, behind M]" in either order

    Counts are extracted by keyword, not by position.

    Args:
        track: Raw descriptor
        upstream: Upstream branch name to attach to the relationship

    Returns:
        The relationship, or None when a non-empty descriptor carries neither
        keyword (e.g. "[gone]").
    """
    trimmed = (track or "").strip()
    if not trimmed:
        return Synced(upstream)

    inner = _BRACKETS.sub("", trimmed)
    ahead_match = _AHEAD.search(inner)
    behind_match = _BEHIND.search(inner)

    if ahead_match is None and behind_match is None:
        return None

    ahead = int(ahead_match.group(1)) if ahead_match else 0
    behind = int(behind_match.group(1)) if behind_match else 0

    if ahead > 0 and behind > 0:
        return Diverged(upstream, ahead, behind)
    if ahead > 0:
        return Ahead(upstream, ahead)
    if behind > 0:
        return Behind(upstream, behind)
    return Synced(upstream)
