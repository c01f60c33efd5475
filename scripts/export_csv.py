"""
Export every photo to CSV for editing in a spreadsheet.

The file can be fed back through update_photos_csv.py.

Usage:
    python scripts/export_csv.py [--output PATH]
"""
import sys
from pathlib import Path

from rich.console import Console

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from photo_portfolio.core.config import settings
from photo_portfolio.core.database import open_store
from photo_portfolio.core.logging_config import configure_logging
from photo_portfolio.services import ExportService

console = Console()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Export photos to CSV")
    parser.add_argument("--output", type=Path, help="Target file (default: backups/photos-export.csv)")
    args = parser.parse_args()

    configure_logging(settings)

    with open_store(settings) as store:
        with store.session() as db:
            output = ExportService(db, settings).export_csv(args.output)

    console.print(f"\n[green]✓ CSV written to {output}[/green]")
    console.print("\n[bold]Next steps:[/bold]")
    console.print("  1. Edit the metadata columns in a spreadsheet and save as CSV")
    console.print(f"  2. Apply with: python scripts/update_photos_csv.py {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
