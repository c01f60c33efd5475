"""
Export the photo table to JSON backup files.

Writes one portfolio document per category plus a complete dump.

Usage:
    python scripts/export_backup.py [--output-dir PATH]
"""
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

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

    parser = argparse.ArgumentParser(description="Export photos to JSON backups")
    parser.add_argument("--output-dir", type=Path, help="Target directory (default: backups/)")
    args = parser.parse_args()

    configure_logging(settings)

    with open_store(settings) as store:
        with store.session() as db:
            written = ExportService(db, settings).export_backup(args.output_dir)

    table = Table(title="\n[bold]Backup Files[/bold]")
    table.add_column("File", style="cyan")
    table.add_column("Size", justify="right", style="green")
    for path in written:
        table.add_row(str(path), f"{path.stat().st_size:,} bytes")
    console.print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
