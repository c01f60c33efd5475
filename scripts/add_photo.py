"""
Interactively add one photo to the database.

Usage:
    python scripts/add_photo.py [--debug]
"""
import sys
from pathlib import Path
from types import SimpleNamespace

import questionary
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from photo_portfolio.assets import FilesystemAssetChecker, photo_alt, photo_path
from photo_portfolio.core.config import settings
from photo_portfolio.core.database import open_store
from photo_portfolio.core.exceptions import (
    AssetMissingException,
    BatchRejectedException,
    PortfolioException,
)
from photo_portfolio.core.logging_config import configure_logging
from photo_portfolio.models.database import CATEGORIES
from photo_portfolio.reporting import print_field_errors
from photo_portfolio.services import PhotoService
from photo_portfolio.validation import validate_field

console = Console()


def _field(name, required=False):
    """Questionary validator for one photo field."""
    def check(value):
        if required and not value.strip():
            return f"{name.replace('_', ' ').capitalize()} is required"
        error = validate_field(name, value)
        return True if error is None else error.message
    return check


class PhotoPrompt:
    """Collects one photo's fields from the terminal."""

    def ask(self) -> dict:
        category = questionary.select("Category:", choices=list(CATEGORIES)).ask()
        if category is None:
            return {}

        checker = FilesystemAssetChecker(settings.images_dir)
        available = sorted(
            p.name for p in (settings.images_dir / category).glob("*") if p.is_file()
        ) if (settings.images_dir / category).is_dir() else []
        if available:
            filename = questionary.autocomplete(
                "Filename:", choices=available, validate=_field("filename", required=True)
            ).ask()
        else:
            filename = questionary.text("Filename:", validate=_field("filename", required=True)).ask()
        if filename:
            try:
                checker.require(category, filename.strip())
            except AssetMissingException as e:
                console.print(f"[yellow]⚠ {e.message}[/yellow]")

        return {
            "filename": filename,
            "category": category,
            "caption": questionary.text("Caption:", validate=_field("caption", required=True)).ask(),
            "location": questionary.text("Location:", validate=_field("location", required=True)).ask(),
            "country": questionary.text("Country:", validate=_field("country", required=True)).ask(),
            "sub_category": questionary.text("Sub-category (optional):").ask(),
            "date": questionary.text("Date YYYY-MM-DD (optional):", validate=_field("date")).ask(),
            "homepage_featured": questionary.text(
                "Homepage rank (optional, 1=hero):", validate=_field("homepage_featured")
            ).ask(),
            "category_featured": questionary.text(
                "Category priority 0-4 (optional, 1=navigation):", validate=_field("category_featured")
            ).ask(),
            "country_featured": questionary.text(
                "Country navigation photo 0/1 (optional):", validate=_field("country_featured")
            ).ask(),
        }


def show_preview(data: dict):
    table = Table(title="\n[bold]New Photo[/bold]", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for field, value in data.items():
        table.add_row(field, value or "[dim]-[/dim]")
    preview = SimpleNamespace(**{k: (v or "").strip() for k, v in data.items()})
    table.add_row("path", photo_path(preview, settings.asset_url_prefix), style="dim")
    table.add_row("alt", photo_alt(preview), style="dim")
    console.print(table)


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Add one photo interactively")
    parser.add_argument("--debug", action="store_true", help="Show debug output")
    args = parser.parse_args()

    configure_logging(settings, "DEBUG" if args.debug else "WARNING")

    console.print(Panel.fit(
        "[bold cyan]Add Photo[/bold cyan]\n"
        "Place the image under its category folder first",
        border_style="cyan"
    ))

    data = PhotoPrompt().ask()
    if not data or any(value is None for value in data.values()):
        console.print("[yellow]Cancelled[/yellow]")
        return 1

    show_preview(data)
    if not questionary.confirm("Add this photo?", default=True).ask():
        console.print("[yellow]Cancelled[/yellow]")
        return 1

    try:
        with open_store(settings) as store:
            with store.session() as db:
                photo_id = PhotoService(db, settings=settings).add_one(data)
    except BatchRejectedException as e:
        print_field_errors(e.errors, console)
        return 1
    except PortfolioException as e:
        console.print(f"[red]✗ {e.message}[/red]")
        return 1

    console.print(f"\n[green]✓ Added photo {data['filename'].strip()} (ID {photo_id})[/green]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
