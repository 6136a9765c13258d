"""Tests for configuration handling"""
import re

import pytest

from git_branch_sweeper.config import StaleThresholds, SweepConfig
from git_branch_sweeper.constants import DEFAULT_PROTECTED_PATTERNS, TargetScore


class TestStaleThresholds:
    """Test threshold derivation."""

    def test_defaults(self):
        thresholds = StaleThresholds()
        assert thresholds.stale_days == 30
        assert thresholds.stale_days_diverged == 90
        assert thresholds.stale_days_local == 90
        assert thresholds.stale_days_behind is None

    def test_risky_thresholds_follow_base(self):
        thresholds = StaleThresholds.from_base(stale_days=10)
        assert thresholds.stale_days_diverged == 30
        assert thresholds.stale_days_local == 30

    def test_explicit_overrides(self):
        thresholds = StaleThresholds.from_base(
            stale_days=10, stale_days_behind=5, stale_days_diverged=0, stale_days_local=7
        )
        assert thresholds == StaleThresholds(10, 0, 7, 5)


class TestSweepConfig:
    """Test SweepConfig defaults and validation."""

    def test_defaults(self):
        config = SweepConfig()
        assert config.stale_days == 30
        assert config.protected_branches == DEFAULT_PROTECTED_PATTERNS
        assert config.protected_branches is not DEFAULT_PROTECTED_PATTERNS
        assert config.max_targets == TargetScore.MAX_RESULTS
        assert config.min_target_score == TargetScore.MIN_SCORE
        assert config.fetch is True
        assert config.dry_run is False

    def test_thresholds(self):
        config = SweepConfig(stale_days=14, stale_days_local=60)
        assert config.thresholds() == StaleThresholds(14, 42, 60, None)

    @pytest.mark.parametrize(
        "kwargs,message",
        [
            ({"stale_days": 0}, "stale_days must be positive"),
            ({"stale_days_behind": -1}, "stale_days_behind must not be negative"),
            ({"protected_branches": "main"}, "protected_branches must be a list"),
            ({"protected_branches": ["(unclosed"]}, "Invalid protected branch pattern"),
            ({"ignore_patterns": "tmp/*"}, "ignore_patterns must be a list"),
            ({"max_targets": 0}, "max_targets must be positive"),
        ],
    )
    def test_validation(self, kwargs, message):
        with pytest.raises(ValueError, match=re.escape(message)):
            SweepConfig(**kwargs)

    def test_protection_patterns_compiled(self):
        config = SweepConfig(protected_branches=[r"^trunk$"])
        patterns = config.protection_patterns()
        assert [p.pattern for p in patterns] == [r"^trunk$"]
        assert patterns[0].search("trunk")

    def test_from_dict_ignores_unknown_keys(self):
        config = SweepConfig.from_dict({"stale_days": 7, "github_token": "secret"})
        assert config.stale_days == 7
        assert config.get("github_token") is None

    def test_to_dict_round_trip(self):
        config = SweepConfig(stale_days=12, ignore_patterns=["tmp/*"], dry_run=True)
        assert SweepConfig.from_dict(config.to_dict()) == config

    def test_get_with_default(self):
        config = SweepConfig()
        assert config.get("verbose") is False
        assert config.get("missing", "fallback") == "fallback"
