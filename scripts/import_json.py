"""
Import photos from portfolio JSON files or a complete backup.

PATH is a directory of ``{category}.json`` portfolio files, one such file,
or a ``complete-backup.json`` written by export_backup.py. Every photo is
validated first; if any is invalid nothing is written.

Usage:
    python scripts/import_json.py PATH [--dry-run] [--yes] [--debug]
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
from photo_portfolio.services import JsonImportService

console = Console()


def run(path: Path, dry_run: bool = False, assume_yes: bool = False) -> int:
    console.print(Panel.fit(
        "[bold cyan]Photo JSON Import[/bold cyan]\n"
        f"Source: {path}",
        border_style="cyan"
    ))

    try:
        with open_store(settings) as store:
            with store.session() as db:
                service = JsonImportService(db, settings=settings)
                source = service.read(path)
                for file in source.files:
                    console.print(f"  Reading {file}")
                for name in source.skipped:
                    console.print(f"  [dim]No {name}, skipped[/dim]")
                if not source.rows:
                    console.print("[yellow]No photos found[/yellow]")
                    return 0

                preview = service.import_source(source, dry_run=True)
                console.print(f"[green]✓ All {preview.total} photo(s) valid[/green]")
                print_batch_summary(preview, "Import Preview", console)

                if dry_run:
                    return 0
                if not assume_yes and not questionary.confirm(
                    f"Import {preview.total} photo(s)?", default=False
                ).ask():
                    console.print("[yellow]Import cancelled[/yellow]")
                    return 1

                summary = service.import_source(source)
    except BatchRejectedException as e:
        console.print("[dim]Rows are numbered from 1 across the files listed above[/dim]")
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

    parser = argparse.ArgumentParser(description="Import photos from JSON")
    parser.add_argument("path", type=Path, help="Portfolio JSON directory or file, or complete backup")
    parser.add_argument("--dry-run", action="store_true", help="Validate and preview without importing")
    parser.add_argument("--yes", action="store_true", help="Import without asking for confirmation")
    parser.add_argument("--debug", action="store_true", help="Show debug output")
    args = parser.parse_args()

    configure_logging(settings, "DEBUG" if args.debug else None)

    return run(args.path, dry_run=args.dry_run, assume_yes=args.yes)


if __name__ == "__main__":
    sys.exit(main())
