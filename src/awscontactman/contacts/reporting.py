"""Reporting components for batch results.

This module renders batch results and outcomes with Rich formatting for
console output.

Classes:
    ReportGenerator: Renders contact tables, summaries and outcome reports
"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .models import BatchMode, BatchResult, Cancelled, Failure, OperationOutcome, PartialSuccess

MODE_PAST_TENSE = {
    BatchMode.LIST: "Retrieved",
    BatchMode.UPDATE: "Updated",
    BatchMode.DELETE: "Deleted",
}


class ReportGenerator:
    """Generates summary and detailed reports for batch runs."""

    def __init__(self, console: Console):
        """Initialize report generator.

        Args:
            console: Rich console for output
        """
        self.console = console

    def print_contact_table(self, result: BatchResult) -> None:
        """Display List results as a table, one row per cell."""
        table = Table(title="Alternate Contacts", show_header=True, header_style="bold magenta")
        table.add_column("Account", style="yellow")
        table.add_column("Type", style="cyan")
        table.add_column("Name")
        table.add_column("Email")
        table.add_column("Phone")
        table.add_column("Title")

        for cell in result.cells:
            if cell.contact is not None:
                table.add_row(
                    cell.account_id,
                    cell.contact_type,
                    cell.contact.name,
                    cell.contact.email_address,
                    cell.contact.phone_number,
                    cell.contact.title,
                )
            elif cell.status != "skipped":
                table.add_row(
                    cell.account_id,
                    cell.contact_type,
                    f"[dim]{cell.to_json_value()}[/dim]",
                    "",
                    "",
                    "",
                )

        self.console.print()
        self.console.print(table)

    def print_summary(self, result: BatchResult) -> None:
        """Display the counters of a finished batch."""
        summary_table = Table(show_header=False, box=None, padding=(0, 1))
        summary_table.add_column("Metric", style="bold cyan")
        summary_table.add_column("Value", style="bold")

        summary_table.add_row("Operation", result.mode.value.title())
        summary_table.add_row(
            MODE_PAST_TENSE[result.mode], f"{result.success_count}/{result.total_cells} contacts"
        )
        summary_table.add_row("Errors", f"[red]{len(result.errors)}[/red]")
        if result.aborted:
            summary_table.add_row(
                "Aborted", f"[red]after {result.visited_cells} of {result.total_cells} cells[/red]"
            )

        self.console.print()
        self.console.print(
            Panel(
                summary_table,
                title=f"[bold]{result.mode.value.title()} Summary[/bold]",
                border_style="blue",
            )
        )

    def print_outcome(self, outcome: OperationOutcome, duration: Optional[float] = None) -> None:
        """Display the final outcome with its error list or fatal error."""
        elapsed = f" in {duration:.4f} seconds" if duration is not None else ""

        if isinstance(outcome, PartialSuccess):
            self.console.print(
                f"\n[yellow]⚠ Completed with {len(outcome.errors)} errors{elapsed}[/yellow]"
            )
            self.console.print("\nErrors encountered:")
            for index, error in enumerate(outcome.errors, start=1):
                self.console.print(f"  {index}. {error}", markup=False)
        elif isinstance(outcome, Failure):
            after = f" after {duration:.4f} seconds" if duration is not None else ""
            self.console.print(f"\n[red]✗ Failed{after}[/red]")
            self.console.print(f"[red bold]Error:[/red bold] {outcome.error}", highlight=False)
            cause = outcome.error.__cause__
            while cause is not None:
                self.console.print(f"  [dim]Caused by: {cause}[/dim]")
                cause = cause.__cause__
        elif isinstance(outcome, Cancelled):
            self.console.print("\n[yellow]Operation cancelled by user[/yellow]")
        else:
            self.console.print(f"\n[green]✓ Completed successfully{elapsed}![/green]")
