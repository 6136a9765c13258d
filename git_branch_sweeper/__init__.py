"""
git-branch-sweeper - classify stale, merged and diverged Git branches for cleanup
"""

from .__version__ import __version__
from .core import BranchSweeper, SweepAnalysis
from .config import SweepConfig, StaleThresholds

__all__ = ["BranchSweeper", "SweepAnalysis", "SweepConfig", "StaleThresholds", "__version__"]
