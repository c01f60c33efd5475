"""Rich console output shared by the scripts."""
from typing import Iterable, Optional

from rich.console import Console
from rich.table import Table

from photo_portfolio.models.schemas import AuditReport, BatchSummary, FieldError

console = Console()


def print_field_errors(errors: Iterable[FieldError], out: Optional[Console] = None):
    """Table of validation errors, one line per violation."""
    out = out or console
    errors = list(errors)
    table = Table(title=f"\n[bold red]{len(errors)} validation error(s)[/bold red]")
    table.add_column("Row", justify="right", style="yellow")
    table.add_column("Field", style="cyan")
    table.add_column("Problem", style="red")
    for error in errors:
        table.add_row("" if error.row is None else str(error.row), error.field, error.message)
    out.print(table)


def print_batch_summary(summary: BatchSummary, title: str, out: Optional[Console] = None):
    """Batch totals, with a per-category breakdown when the batch created photos."""
    out = out or console
    table = Table(title=f"\n[bold]{title}[/bold]")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right", style="green")
    table.add_row("Rows in file", str(summary.total))
    if not summary.dry_run:
        table.add_row("Rows written", str(summary.written))
        if summary.unchanged:
            table.add_row("Unchanged", str(summary.unchanged), style="dim")
    if summary.store_total is not None:
        table.add_row("Photos in database", str(summary.store_total))
    out.print(table)

    if summary.by_category:
        breakdown = Table()
        breakdown.add_column("Category", style="cyan")
        breakdown.add_column("Photos", justify="right")
        breakdown.add_column("Homepage", justify="right")
        breakdown.add_column("Category featured", justify="right")
        for category, tally in sorted(summary.by_category.items()):
            breakdown.add_row(category, str(tally.total), str(tally.homepage), str(tally.category))
        out.print(breakdown)

    if summary.columns:
        out.print(f"[dim]Columns: {', '.join(summary.columns)}[/dim]")
    if summary.dry_run:
        out.print("\n[yellow]This was a dry run. No data was written.[/yellow]")


def print_audit_report(report: AuditReport, out: Optional[Console] = None):
    """Audit findings grouped by check."""
    out = out or console
    for check in report.checks_run:
        findings = [f for f in report.findings if f.check == check]
        if not findings:
            out.print(f"[green]✓[/green] {check}")
            continue
        for finding in findings:
            style = "red" if finding.severity == "error" else "yellow"
            ids = f" (IDs {', '.join(map(str, finding.photo_ids))})" if finding.photo_ids else ""
            out.print(f"[{style}]✗ {check}: {finding.message}{ids}[/{style}]")

    if report.passed:
        out.print("\n[bold green]Validation passed: all constraints satisfied[/bold green]")
    else:
        out.print(f"\n[bold red]Validation failed: {len(report.errors)} error(s)[/bold red]")
