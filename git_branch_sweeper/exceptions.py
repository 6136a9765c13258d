"""Custom exceptions for git-branch-sweeper"""

from typing import Optional


class GitBranchSweeperError(Exception):
    """Base exception for all git-branch-sweeper errors."""
    pass


class RepositoryError(GitBranchSweeperError):
    """Exception raised when the repository cannot be opened."""

    def __init__(self, repo_path: str, message: Optional[str] = None):
        self.repo_path = repo_path
        self.message = message

        error_msg = f"Error initializing repository at '{repo_path}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class GitOperationError(GitBranchSweeperError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class MetadataQueryError(GitOperationError):
    """Exception raised when a batched ref metadata query fails.

    Nothing downstream can run without branch metadata, so this aborts the pass.
    """

    def __init__(self, ref_namespace: str, message: Optional[str] = None):
        self.ref_namespace = ref_namespace
        super().__init__(f"for-each-ref {ref_namespace}", message=message)


class BranchNotFoundError(GitOperationError):
    """Exception raised when a branch is not found."""

    def __init__(self, branch: str):
        super().__init__("find_branch", branch, "Branch not found")


class BranchProtectedError(GitOperationError):
    """Exception raised when attempting to delete a protected branch."""

    def __init__(self, branch: str):
        super().__init__("delete_branch", branch, "Branch is protected")


class CurrentBranchError(GitOperationError):
    """Exception raised when attempting to delete the checked-out branch."""

    def __init__(self, branch: str):
        super().__init__("delete_branch", branch, "Cannot delete current branch")
