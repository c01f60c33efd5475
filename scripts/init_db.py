"""
Create the photo database, or bring an existing one up to the current schema.

Usage:
    python scripts/init_db.py [--debug]
"""
import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from photo_portfolio.core.config import settings
from photo_portfolio.core.database import PhotoStore, describe_database
from photo_portfolio.core.exceptions import PortfolioException
from photo_portfolio.core.logging_config import configure_logging
from photo_portfolio.repositories import PhotoRepository

console = Console()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Create or migrate the photo database")
    parser.add_argument("--debug", action="store_true", help="Show debug output")
    args = parser.parse_args()

    configure_logging(settings, "DEBUG" if args.debug else None)

    console.print(Panel.fit(
        "[bold cyan]Photo Database Setup[/bold cyan]\n"
        f"Database: {describe_database(settings.database_url)}",
        border_style="cyan"
    ))

    try:
        with PhotoStore.from_settings(settings) as store:
            applied = store.migrate_schema()
            with store.session() as db:
                total = PhotoRepository(db).count()
    except PortfolioException as e:
        console.print(f"[red]✗ {e.message}[/red]")
        return 1

    if applied:
        for step in applied:
            console.print(f"[green]✓[/green] {step}")
    else:
        console.print("[dim]Schema already up to date[/dim]")
    console.print(f"\n[bold]Photos in database:[/bold] {total}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
