"""Pytest fixtures for git-branch-sweeper tests"""
import tempfile
import time
from pathlib import Path
from unittest.mock import Mock

import git
import pytest

from git_branch_sweeper.constants import MILLISECONDS_PER_DAY
from git_branch_sweeper.models.branch import BranchMetadata
from git_branch_sweeper.models.cache import BranchMetadataCache

NOW_MS = 1_700_000_000_000


def days_ago(days: float, now_ms: int = NOW_MS) -> int:
    """Epoch milliseconds for a point in time `days` before now_ms."""
    return int(now_ms - days * MILLISECONDS_PER_DAY)


def make_cache(metadata, remote_names=("origin",), timestamps=None, commit_counts=None):
    """Build a BranchMetadataCache from {branch: (timestamp_ms, relationship)}."""
    branches = {
        name: BranchMetadata(name=name, last_commit_timestamp=ts, upstream=relationship)
        for name, (ts, relationship) in metadata.items()
    }
    return BranchMetadataCache(
        branches=branches,
        last_commit_timestamps=timestamps or {},
        commit_counts=commit_counts or {},
        remote_names=remote_names,
    )


def commit_file(repo, filename, content, message, days_old=None):
    """Write a file and commit it, optionally back-dated by `days_old` days."""
    path = Path(repo.working_dir) / filename
    path.write_text(content)
    repo.index.add([filename])
    if days_old is None:
        return repo.index.commit(message)
    stamp = f"{int(time.time() - days_old * 86400)} +0000"
    return repo.index.commit(message, author_date=stamp, commit_date=stamp)


def configure_user(repo):
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on main."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)
    configure_user(repo)

    commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")
    repo.git.branch("-M", "main")

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_origin(git_repo, temp_dir):
    """Repository whose main branch tracks a local bare `origin`."""
    origin_path = temp_dir / "origin.git"
    git.Repo.init(origin_path, bare=True)

    git_repo.create_remote("origin", str(origin_path))
    git_repo.git.push("-u", "origin", "main")

    yield git_repo


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Repository with a merged, an old local-only and a recent local branch."""
    repo = git_repo

    repo.git.checkout("-b", "feature/done")
    commit_file(repo, "done.txt", "Done\n", "Finish feature")
    repo.git.checkout("main")
    repo.git.merge("feature/done", "--no-ff", "-m", "Merge feature/done")

    repo.git.checkout("-b", "feature/old")
    commit_file(repo, "old.txt", "Old\n", "Old work", days_old=200)

    repo.git.checkout("main")
    repo.git.checkout("-b", "feature/recent")
    commit_file(repo, "recent.txt", "Recent\n", "Recent work")

    repo.git.checkout("main")

    yield repo


@pytest.fixture
def mock_backend():
    """Create a mock query backend."""
    backend = Mock()
    backend.list_local_branches = Mock(return_value=[])
    backend.list_remote_tracking_branches = Mock(return_value=[])
    backend.list_remote_names = Mock(return_value=["origin"])
    backend.batched_ref_metadata = Mock(return_value=[])
    backend.batched_remote_ref_timestamps = Mock(return_value={})
    backend.commit_count = Mock(return_value=1)
    backend.count_commits_not_in = Mock(return_value=1)
    backend.current_branch = Mock(return_value="main")
    backend.fetch_all = Mock()
    backend.delete_local_branch = Mock()
    return backend
