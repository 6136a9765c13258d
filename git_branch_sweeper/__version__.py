"""Version information for git-branch-sweeper."""

__version__ = "0.1.0"
