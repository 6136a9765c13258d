"""Tests for branch protection and filtering"""
import re

import pytest

from git_branch_sweeper.constants import DEFAULT_PROTECTED_PATTERNS
from git_branch_sweeper.services.branch_validation_service import BranchValidationService

PROTECTED = [re.compile(p) for p in DEFAULT_PROTECTED_PATTERNS]


class TestIsProtected:
    @pytest.mark.parametrize(
        "branch",
        ["main", "master", "develop", "development", "dev", "dev-tools", "release/1.0", "hotfix/crash"],
    )
    def test_default_protected(self, branch):
        assert BranchValidationService.is_protected(branch, PROTECTED)

    @pytest.mark.parametrize("branch", ["feature/main", "mainline", "my-release/1", "bugfix/dev"])
    def test_default_unprotected(self, branch):
        assert not BranchValidationService.is_protected(branch, PROTECTED)

    def test_no_patterns(self):
        assert not BranchValidationService.is_protected("main", [])


class TestFilterCandidates:
    def test_removes_protected_and_ignored(self):
        branches = ["main", "feature/a", "tmp/scratch", "release/2", "feature/b"]

        candidates = BranchValidationService.filter_candidates(branches, PROTECTED, ["tmp/*"])

        assert candidates == ["feature/a", "feature/b"]

    def test_should_ignore_glob(self):
        assert BranchValidationService.should_ignore("wip/x", ["wip/*"])
        assert not BranchValidationService.should_ignore("feature/wip", ["wip/*"])
