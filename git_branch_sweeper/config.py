"""Configuration handling for git-branch-sweeper"""

import re
from dataclasses import dataclass, field
from typing import Optional, List

from git_branch_sweeper.constants import (
    DEFAULT_PROTECTED_PATTERNS,
    DEFAULT_STALE_DAYS,
    RISKY_STALE_MULTIPLIER,
    TargetScore,
)


@dataclass(frozen=True)
class StaleThresholds:
    """Age thresholds (in days) used by the branch classifier.

    ``stale_days_behind`` is None unless the caller wants an age gate on
    behind-only branches; by default they are reported at any age.
    """

    stale_days: int = DEFAULT_STALE_DAYS
    stale_days_diverged: int = DEFAULT_STALE_DAYS * RISKY_STALE_MULTIPLIER
    stale_days_local: int = DEFAULT_STALE_DAYS * RISKY_STALE_MULTIPLIER
    stale_days_behind: Optional[int] = None

    @classmethod
    def from_base(
        cls,
        stale_days: int = DEFAULT_STALE_DAYS,
        stale_days_behind: Optional[int] = None,
        stale_days_diverged: Optional[int] = None,
        stale_days_local: Optional[int] = None,
    ) -> "StaleThresholds":
        """Build thresholds, deriving unset risky thresholds from the base value."""
        return cls(
            stale_days=stale_days,
            stale_days_diverged=(
                stale_days_diverged
                if stale_days_diverged is not None
                else stale_days * RISKY_STALE_MULTIPLIER
            ),
            stale_days_local=(
                stale_days_local
                if stale_days_local is not None
                else stale_days * RISKY_STALE_MULTIPLIER
            ),
            stale_days_behind=stale_days_behind,
        )


@dataclass
class SweepConfig:
    """Configuration for git-branch-sweeper with validation."""

    # Stale thresholds (None = derived from stale_days)
    stale_days: int = DEFAULT_STALE_DAYS
    stale_days_behind: Optional[int] = None
    stale_days_diverged: Optional[int] = None
    stale_days_local: Optional[int] = None

    # Branch filtering
    protected_branches: List[str] = field(default_factory=lambda: list(DEFAULT_PROTECTED_PATTERNS))
    ignore_patterns: List[str] = field(default_factory=list)

    # Target identification
    max_targets: int = TargetScore.MAX_RESULTS
    min_target_score: float = TargetScore.MIN_SCORE

    # Execution modes
    fetch: bool = True
    dry_run: bool = False
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_stale_days()
        self._validate_protected_branches()
        self._validate_ignore_patterns()
        self._validate_max_targets()

    def _validate_stale_days(self):
        """Validate every threshold is positive."""
        if self.stale_days <= 0:
            raise ValueError(f"stale_days must be positive, got {self.stale_days}")
        for name in ("stale_days_behind", "stale_days_diverged", "stale_days_local"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")

    def _validate_protected_branches(self):
        """Validate protected_branches is a list of valid regular expressions."""
        if not isinstance(self.protected_branches, list):
            raise ValueError("protected_branches must be a list")
        for pattern in self.protected_branches:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid protected branch pattern '{pattern}': {e}")

    def _validate_ignore_patterns(self):
        """Validate ignore_patterns list."""
        if not isinstance(self.ignore_patterns, list):
            raise ValueError("ignore_patterns must be a list")

    def _validate_max_targets(self):
        """Validate max_targets is positive."""
        if self.max_targets <= 0:
            raise ValueError(f"max_targets must be positive, got {self.max_targets}")

    def thresholds(self) -> StaleThresholds:
        """Resolve the classifier thresholds."""
        return StaleThresholds.from_base(
            stale_days=self.stale_days,
            stale_days_behind=self.stale_days_behind,
            stale_days_diverged=self.stale_days_diverged,
            stale_days_local=self.stale_days_local,
        )

    def protection_patterns(self) -> List["re.Pattern[str]"]:
        """Compile the protected branch patterns."""
        return [re.compile(pattern) for pattern in self.protected_branches]

    def to_dict(self) -> dict:
        """Convert config to a plain dictionary."""
        return {
            "stale_days": self.stale_days,
            "stale_days_behind": self.stale_days_behind,
            "stale_days_diverged": self.stale_days_diverged,
            "stale_days_local": self.stale_days_local,
            "protected_branches": self.protected_branches,
            "ignore_patterns": self.ignore_patterns,
            "max_targets": self.max_targets,
            "min_target_score": self.min_target_score,
            "fetch": self.fetch,
            "dry_run": self.dry_run,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "SweepConfig":
        """Create SweepConfig from dictionary, ignoring unknown keys."""
        known_fields = set(cls.__dataclass_fields__)
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
