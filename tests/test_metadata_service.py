"""Tests for the branch metadata cache builder"""
import asyncio

import git
import pytest

from git_branch_sweeper.exceptions import GitOperationError, MetadataQueryError
from git_branch_sweeper.models.branch import Behind, Diverged, NoRemote, Synced
from git_branch_sweeper.models.cache import RefRecord
from git_branch_sweeper.services.git import GitBackend
from git_branch_sweeper.services.metadata_service import MetadataService, build_branch_metadata
from conftest import commit_file, configure_user


class TestBuildBranchMetadata:
    """Test conversion of batched rows."""

    def test_no_upstream_is_no_remote(self):
        """Test the tracking descriptor is ignored without an upstream."""
        metadata = build_branch_metadata([RefRecord("local", None, 100, "[ahead 3]")])
        assert metadata["local"].upstream == NoRemote()
        assert metadata["local"].last_commit_timestamp == 100_000

    def test_upstream_relationships(self):
        metadata = build_branch_metadata([
            RefRecord("synced", "origin/synced", 1, ""),
            RefRecord("behind", "origin/behind", 1, "[behind 4]"),
            RefRecord("both", "origin/both", 1, "[ahead 1, behind 2]"),
        ])
        assert metadata["synced"].upstream == Synced("origin/synced")
        assert metadata["behind"].upstream == Behind("origin/behind", 4)
        assert metadata["both"].upstream == Diverged("origin/both", 1, 2)

    def test_unparseable_tracking_is_unknown(self):
        """Test a malformed descriptor keeps the timestamp but drops the relationship."""
        metadata = build_branch_metadata([RefRecord("gone", "origin/gone", 5, "[gone]")])
        assert metadata["gone"].upstream is None
        assert metadata["gone"].last_commit_timestamp == 5000


class TestMetadataService:
    """Test cache building against a mock backend."""

    def test_build_cache(self, mock_backend):
        mock_backend.batched_ref_metadata.return_value = [
            RefRecord("main", "origin/main", 10, ""),
            RefRecord("feature", None, 20, ""),
        ]
        mock_backend.batched_remote_ref_timestamps.return_value = {"origin/main": 30}
        mock_backend.commit_count.side_effect = lambda branch: {"main": 5, "origin/main": 6}.get(branch, 1)

        service = MetadataService(mock_backend)
        cache = asyncio.run(
            service.build_cache(["origin"], count_branches=["main", "feature", "origin/main"])
        )

        assert set(cache.branches) == {"main", "feature"}
        assert cache.relationship("main") == Synced("origin/main")
        assert cache.relationship("feature") == NoRemote()
        assert cache.last_commit_timestamps["origin/main"] == 30_000
        assert cache.last_commit_timestamps["feature"] == 20_000
        assert cache.commit_counts == {"main": 5, "feature": 1, "origin/main": 6}
        assert cache.remote_names == ("origin",)
        mock_backend.batched_ref_metadata.assert_called_once()

    def test_batched_query_failure_is_fatal(self, mock_backend):
        mock_backend.batched_ref_metadata.side_effect = MetadataQueryError("refs/heads", "boom")

        service = MetadataService(mock_backend)
        with pytest.raises(MetadataQueryError):
            asyncio.run(service.build_cache(["origin"]))

    def test_commit_count_failure_is_skipped(self, mock_backend):
        def count(branch):
            if branch == "broken":
                raise GitOperationError("rev-list --count", branch)
            return 3

        mock_backend.commit_count.side_effect = count

        service = MetadataService(mock_backend)
        cache = asyncio.run(service.build_cache(["origin"], count_branches=["ok", "broken"]))

        assert cache.commit_counts == {"ok": 3}


class TestMetadataFromRealRepo:
    """Test the batched queries against real repositories."""

    def test_local_branch_without_upstream(self, git_repo):
        backend = GitBackend(git_repo.working_dir)
        records = backend.batched_ref_metadata()

        assert [r.name for r in records] == ["main"]
        assert records[0].upstream_name is None
        assert records[0].committer_timestamp == git_repo.head.commit.committed_date

    def test_synced_and_behind_upstream(self, git_repo_with_origin, temp_dir):

        backend = GitBackend(git_repo_with_origin.working_dir)
        cache = asyncio.run(MetadataService(backend).build_cache(["origin"]))
        assert cache.relationship("main") == Synced("origin/main")

        # Push a commit from another clone, then fetch: main is now behind
        other = git.Repo.clone_from(str(temp_dir / "origin.git"), temp_dir / "other", branch="main")
        configure_user(other)
        commit_file(other, "upstream.txt", "Upstream\n", "Upstream work")
        other.git.push("origin", "main")
        other.close()
        git_repo_with_origin.git.fetch("origin")

        cache = asyncio.run(MetadataService(backend).build_cache(["origin"], ["main", "origin/main"]))
        assert cache.relationship("main") == Behind("origin/main", 1)
        assert cache.commit_counts["origin/main"] == cache.commit_counts["main"] + 1
        assert "origin/main" in cache.last_commit_timestamps
