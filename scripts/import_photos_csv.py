"""
Import new photos from a CSV file.

The whole file is validated first; if any row is invalid nothing is written
and every error is listed.

Usage:
    python scripts/import_photos_csv.py FILE [--dry-run] [--yes] [--debug]
"""
import sys
from pathlib import Path

import questionary
from rich.console import Console
from rich.panel import Panel

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from photo_portfolio.core.config import settings
from photo_portfolio.core.database import open_store
from photo_portfolio.core.exceptions import BatchRejectedException, PortfolioException
from photo_portfolio.core.logging_config import configure_logging
from photo_portfolio.reporting import print_batch_summary, print_field_errors
from photo_portfolio.services import PhotoService, read_csv
from photo_portfolio.services.csv_service import FIRST_DATA_ROW

console = Console()


class CsvImporter:
    """Validate a CSV of new photos, preview it, then import it."""

    def __init__(self, csv_path: Path, dry_run: bool = False, assume_yes: bool = False):
        self.csv_path = csv_path
        self.dry_run = dry_run
        self.assume_yes = assume_yes

    def run(self) -> int:
        console.print(Panel.fit(
            "[bold cyan]Photo CSV Import[/bold cyan]\n"
            f"File: {self.csv_path}",
            border_style="cyan"
        ))

        if not self.csv_path.is_file():
            console.print(f"[red]File not found: {self.csv_path}[/red]")
            return 1

        batch = read_csv(self.csv_path)
        if not batch.rows:
            console.print("[yellow]No photo rows found in CSV[/yellow]")
            return 0

        try:
            rows = batch.import_rows()
            with open_store(settings) as store:
                with store.session() as db:
                    service = PhotoService(db, settings=settings)
                    preview = service.add_batch(rows, dry_run=True, first_row=FIRST_DATA_ROW)
                    console.print(f"[green]✓ All {preview.total} row(s) valid[/green]")
                    print_batch_summary(preview, "Import Preview", console)

                    if self.dry_run:
                        return 0
                    if not self.assume_yes and not questionary.confirm(
                        f"Import {preview.total} photo(s)?", default=False
                    ).ask():
                        console.print("[yellow]Import cancelled[/yellow]")
                        return 1

                    summary = service.add_batch(rows, first_row=FIRST_DATA_ROW)
        except BatchRejectedException as e:
            print_field_errors(e.errors, console)
            console.print("\n[red]Import aborted: fix the errors above and run again[/red]")
            return 1
        except PortfolioException as e:
            console.print(f"[red]✗ {e.message}[/red]")
            return 1

        print_batch_summary(summary, "Import Summary", console)
        return 0


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Import new photos from CSV")
    parser.add_argument("file", type=Path, help="CSV file of photos to add")
    parser.add_argument("--dry-run", action="store_true", help="Validate and preview without importing")
    parser.add_argument("--yes", action="store_true", help="Import without asking for confirmation")
    parser.add_argument("--debug", action="store_true", help="Show debug output")
    args = parser.parse_args()

    configure_logging(settings, "DEBUG" if args.debug else None)

    importer = CsvImporter(args.file, dry_run=args.dry_run, assume_yes=args.yes)
    return importer.run()


if __name__ == "__main__":
    sys.exit(main())
