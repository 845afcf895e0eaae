"""Sweep output formatting and display."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ttlsweep.models.deletion_record import DeletionRecord, DeletionStatus, TargetKind
from ttlsweep.models.sweep_operation import SweepOperation


class SweepReporter:
    """Print per-item outcomes and the run summary."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize sweep reporter.

        Args:
            console: Rich console instance (creates new one if not provided)
        """
        self.console = console or Console()

    def display_record(self, record: DeletionRecord) -> None:
        """Print one outcome line for a processed resource or resource group."""
        label = "resource group: " if record.target_kind == TargetKind.GROUP else ""
        self.console.print(f"Processing {label}{escape(record.target_id)}")

        if record.status == DeletionStatus.SKIPPED:
            self.console.print(f"  {escape(record.skip_reason or '')}, skip.", style="dim")
        elif record.status == DeletionStatus.SUCCEEDED:
            self.console.print("  Deleted.", style="green")
        elif record.error_kind == "provider":
            self.console.print(
                f"  Failed. HTTP status code: {record.status_code}, error code: {escape(str(record.error_code))}, "
                "error message:",
                style="bold red",
            )
            self.console.print(f"    {escape(record.error_message or '')}", style="red")
        else:
            self.console.print(f"  Failed. {escape(record.error_message or '')}", style="bold red")

    def display_summary(self, operation: SweepOperation) -> None:
        """Display the run statistics table."""
        self.console.print()
        outcome = "aborted after" if operation.aborted else "completed in"
        self.console.print(f"Cleanup {outcome} {operation.duration_seconds or 0:.1f} seconds, summary:")

        table = Table(title="Summary", show_header=True, header_style="bold magenta")
        table.add_column("", style="cyan", width=16)
        table.add_column("Processed", justify="right", style="yellow")
        table.add_column("Can be deleted", justify="right", style="yellow")
        table.add_column("Deleted", justify="right", style="green")
        table.add_column("Failed to delete", justify="right", style="red")

        table.add_row(
            "Resources",
            str(operation.total_resources),
            str(operation.eligible_resources),
            str(operation.deleted_resources),
            str(operation.failed_resources),
        )
        table.add_row(
            "Resource groups",
            str(operation.total_groups),
            str(operation.eligible_groups),
            str(operation.deleted_groups),
            str(operation.failed_groups),
        )

        self.console.print(table)
