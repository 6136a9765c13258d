"""Core orchestration for git-branch-sweeper."""

from .branch_sweeper import BranchSweeper, SweepAnalysis

__all__ = ["BranchSweeper", "SweepAnalysis"]
