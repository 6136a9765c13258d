"""Read-only Git query backend for git-branch-sweeper."""

import git
from typing import Dict, List, Optional

from git_branch_sweeper.exceptions import BranchNotFoundError, GitOperationError, MetadataQueryError
from git_branch_sweeper.models.cache import RefRecord
from git_branch_sweeper.logging_config import get_logger

logger = get_logger(__name__)

LOCAL_REF_PREFIX = "refs/heads/"
REMOTE_REF_PREFIX = "refs/remotes/"

# Fields are tab separated; git forbids control characters in ref names
LOCAL_REF_FORMAT = "%(refname)%09%(upstream:short)%09%(committerdate:unix)%09%(upstream:track)"
REMOTE_REF_FORMAT = "%(refname)%09%(committerdate:unix)"


class GitBackend:
    """Narrow query surface over a Git repository."""

    def __init__(self, repo_path: str):
        """Initialize the backend.

        Args:
            repo_path: Path to the git repository
        """
        self.repo_path = repo_path
        logger.debug("Git backend initialized")

    def _get_repo(self):
        """Get a thread-safe git.Repo instance.

        Creates a new repo instance for each call since queries are offloaded
        to worker threads. GitPython repos are lightweight to open.

        Returns:
            git.Repo: A fresh repository instance
        """
        return git.Repo(self.repo_path)

    def list_local_branches(self) -> List[str]:
        """Names of all local branches."""
        repo = self._get_repo()
        return [head.name for head in repo.heads]

    def list_remote_tracking_branches(self) -> List[str]:
        """Names of all remote-tracking branches ("origin/main"), without symbolic HEADs."""
        repo = self._get_repo()
        branches = []
        for remote in repo.remotes:
            for ref in remote.refs:
                if ref.name.endswith("/HEAD"):
                    continue
                branches.append(ref.name)
        return branches

    def list_remote_names(self) -> List[str]:
        repo = self._get_repo()
        return [remote.name for remote in repo.remotes]

    def current_branch(self) -> Optional[str]:
        """Name of the checked-out branch, None in detached HEAD state."""
        repo = self._get_repo()
        try:
            return repo.active_branch.name
        except TypeError:
            return None

    def batched_ref_metadata(self) -> List[RefRecord]:
        """Read upstream, committer date and tracking state of every local branch in one call.

        Raises:
            MetadataQueryError: If the query fails
        """
        output = self._for_each_ref(LOCAL_REF_FORMAT, "refs/heads")

        records = []
        for line in output.splitlines():
            if not line.strip():
                continue
            fields = line.split("\t")
            fields += [""] * (4 - len(fields))
            refname, upstream, timestamp, tracking = fields[:4]
            records.append(
                RefRecord(
                    name=_strip_prefix(refname, LOCAL_REF_PREFIX),
                    upstream_name=upstream.strip() or None,
                    committer_timestamp=_parse_timestamp(timestamp),
                    tracking=tracking,
                )
            )
        return records

    def batched_remote_ref_timestamps(self) -> Dict[str, int]:
        """Committer timestamps (unix seconds) of every remote-tracking branch in one call.

        Raises:
            MetadataQueryError: If the query fails
        """
        output = self._for_each_ref(REMOTE_REF_FORMAT, "refs/remotes")

        timestamps = {}
        for line in output.splitlines():
            if not line.strip():
                continue
            refname, _, timestamp = line.partition("\t")
            name = _strip_prefix(refname, REMOTE_REF_PREFIX)
            if name.endswith("/HEAD"):
                continue
            timestamps[name] = _parse_timestamp(timestamp)
        return timestamps

    def _for_each_ref(self, fmt: str, namespace: str) -> str:
        try:
            repo = self._get_repo()
            return repo.git.for_each_ref(f"--format={fmt}", namespace)
        except git.exc.GitError as e:
            raise MetadataQueryError(namespace, str(e)) from e

    def commit_count(self, branch: str) -> int:
        """Number of commits reachable from a branch.

        Raises:
            GitOperationError: If the branch cannot be resolved
        """
        try:
            repo = self._get_repo()
            return int(repo.git.rev_list("--count", branch))
        except (git.exc.GitError, ValueError) as e:
            raise GitOperationError("rev-list --count", branch, str(e)) from e

    def count_commits_not_in(self, source: str, target: str) -> int:
        """Number of commits reachable from source but not from target (`target..source`)."""
        repo = self._get_repo()
        return int(repo.git.rev_list("--count", f"{target}..{source}"))

    def fetch_all(self) -> None:
        """Fetch every remote (and prune deleted remote branches)."""
        repo = self._get_repo()
        repo.git.fetch("--all", "--prune")

    def delete_local_branch(self, branch: str) -> None:
        """Force-delete a local branch.

        Raises:
            BranchNotFoundError: If no local branch has that name
            GitOperationError: If git refuses the deletion
        """
        try:
            repo = self._get_repo()
            if branch not in repo.heads:
                raise BranchNotFoundError(branch)
            repo.delete_head(branch, force=True)
        except git.exc.GitCommandError as e:
            stderr = (e.stderr or "").strip()
            raise GitOperationError("delete_branch", branch, stderr or str(e)) from e


def _strip_prefix(refname: str, prefix: str) -> str:
    return refname[len(prefix):] if refname.startswith(prefix) else refname


def _parse_timestamp(raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        return 0
