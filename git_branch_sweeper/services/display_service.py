"""Display service for classification results"""
from rich.console import Console
from rich.table import Table
from typing import Optional, Sequence

from git_branch_sweeper.config import StaleThresholds
from git_branch_sweeper.constants import CATEGORY_STYLES, SYMBOL_DONE
from git_branch_sweeper.formatters import format_category_label, format_category_rows
from git_branch_sweeper.models.branch import BranchCategory, ClassificationResult, TargetCandidate
from git_branch_sweeper.logging_config import get_logger

console = Console()
logger = get_logger(__name__)

# Order in which categories are presented
DISPLAY_ORDER = [
    BranchCategory.MERGED,
    BranchCategory.BEHIND_ONLY,
    BranchCategory.DIVERGED,
    BranchCategory.LOCAL_ONLY,
    BranchCategory.STALE,
]


class DisplayService:
    def __init__(self, verbose: bool = False, debug: bool = False):
        self.verbose = verbose
        self.debug_mode = debug

    def display_targets(self, targets: Sequence[TargetCandidate]) -> None:
        """Show the ranked merge targets."""
        if not targets:
            console.print("[dim]No merge targets identified[/dim]")
            return

        table = Table(title="Merge targets")
        table.add_column("#", justify="right")
        table.add_column("Branch")
        table.add_column("Score", justify="right")
        for rank, target in enumerate(targets, start=1):
            table.add_row(str(rank), target.name, f"{target.score:.0f}")
        console.print(table)

    def display_classification(
        self,
        result: ClassificationResult,
        thresholds: StaleThresholds,
        now_ms: Optional[int] = None,
    ) -> None:
        """Display one table per non-empty category."""
        if result.is_empty():
            console.print(f"[green]{SYMBOL_DONE}[/green] No cleanup candidates found.")
            return

        for category in DISPLAY_ORDER:
            rows = format_category_rows(result, category, now_ms)
            if not rows:
                continue

            table = Table(
                title=format_category_label(category, len(rows), thresholds),
                title_justify="left",
            )
            table.add_column("Branch", style=CATEGORY_STYLES.get(category.value))
            table.add_column("Details")
            table.add_column("Last commit")
            for row in rows:
                table.add_row(*row)
            console.print(table)

        console.print(f"\nCleanup candidates: {result.total}")
