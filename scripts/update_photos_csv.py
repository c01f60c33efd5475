"""
Apply metadata changes from a CSV file to existing photos.

Each row names a photo by id or filename and carries only the columns to
change. Columns missing from the file are left untouched; empty optional
cells clear the value. The file is applied all or nothing.

Usage:
    python scripts/update_photos_csv.py FILE [--dry-run] [--yes] [--debug]
"""
import sys
from pathlib import Path

import questionary
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from photo_portfolio.core.config import settings
from photo_portfolio.core.database import open_store
from photo_portfolio.core.exceptions import BatchRejectedException, PortfolioException
from photo_portfolio.core.logging_config import configure_logging
from photo_portfolio.models.schemas import BatchSummary
from photo_portfolio.reporting import print_batch_summary, print_field_errors
from photo_portfolio.services import PhotoService, read_csv
from photo_portfolio.services.csv_service import FIRST_DATA_ROW

console = Console()

PREVIEW_ROWS = 20


def show_changes(summary: BatchSummary):
    """First rows of the planned changes."""
    table = Table(title="\n[bold]Planned Changes[/bold]")
    table.add_column("Row", justify="right", style="yellow")
    table.add_column("Photo", style="cyan")
    table.add_column("Changes")
    for op in summary.operations[:PREVIEW_ROWS]:
        changes = ", ".join(f"{k}={v}" for k, v in op.changes.items()) or "[dim]no change[/dim]"
        table.add_row(str(op.row), str(op.identifier), changes)
    console.print(table)
    if len(summary.operations) > PREVIEW_ROWS:
        console.print(f"[dim]... and {len(summary.operations) - PREVIEW_ROWS} more[/dim]")


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Update photo metadata from CSV")
    parser.add_argument("file", type=Path, help="CSV file with id or filename plus columns to change")
    parser.add_argument("--dry-run", action="store_true", help="Validate and preview without updating")
    parser.add_argument("--yes", action="store_true", help="Update without asking for confirmation")
    parser.add_argument("--debug", action="store_true", help="Show debug output")
    args = parser.parse_args()

    configure_logging(settings, "DEBUG" if args.debug else None)

    console.print(Panel.fit(
        "[bold cyan]Photo CSV Update[/bold cyan]\n"
        f"File: {args.file}",
        border_style="cyan"
    ))

    if not args.file.is_file():
        console.print(f"[red]File not found: {args.file}[/red]")
        return 1

    batch = read_csv(args.file)
    if not batch.rows:
        console.print("[yellow]No rows found in CSV[/yellow]")
        return 0

    try:
        rows = batch.update_rows()
        with open_store(settings) as store:
            with store.session() as db:
                service = PhotoService(db, settings=settings)
                preview = service.update_batch(rows, dry_run=True, first_row=FIRST_DATA_ROW)
                show_changes(preview)
                print_batch_summary(preview, "Update Preview", console)

                if args.dry_run:
                    return 0
                if not args.yes and not questionary.confirm(
                    f"Update {preview.total} photo(s)?", default=False
                ).ask():
                    console.print("[yellow]Update cancelled[/yellow]")
                    return 1

                summary = service.update_batch(rows, first_row=FIRST_DATA_ROW)
    except BatchRejectedException as e:
        print_field_errors(e.errors, console)
        console.print("\n[red]Update aborted: no photos were changed[/red]")
        return 1
    except PortfolioException as e:
        console.print(f"[red]✗ {e.message}[/red]")
        return 1

    print_batch_summary(summary, "Update Summary", console)
    return 0


if __name__ == "__main__":
    sys.exit(main())
