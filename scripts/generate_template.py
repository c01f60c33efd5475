"""
Generate an import CSV template from the photos in the staging directory.

Usage:
    python scripts/generate_template.py [--staging PATH]
"""
import sys
from pathlib import Path

from rich.console import Console

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from photo_portfolio.core.config import settings
from photo_portfolio.core.logging_config import configure_logging
from photo_portfolio.models.database import CATEGORIES, IMAGE_EXTENSIONS
from photo_portfolio.services import staging_images, template_csv
from photo_portfolio.services.csv_service import TEMPLATE_FILENAME

console = Console()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Generate a CSV template for staged photos")
    parser.add_argument("--staging", type=Path, help="Staging directory (default from settings)")
    args = parser.parse_args()

    configure_logging(settings)

    staging = args.staging or settings.staging_dir
    if not staging.exists():
        console.print(f"Creating staging directory: {staging}")
        staging.mkdir(parents=True, exist_ok=True)

    filenames = staging_images(staging)
    if not filenames:
        console.print("[yellow]⚠ No photos found in staging directory[/yellow]")
        console.print(f"\nPlace photos in: {staging}")
        console.print(f"Supported formats: {', '.join(IMAGE_EXTENSIONS)}")
        return 0

    console.print(f"[green]✓[/green] Found {len(filenames)} photo(s) in staging directory")

    output = staging / TEMPLATE_FILENAME
    output.write_text(template_csv(filenames), encoding="utf-8")
    console.print(f"[green]✓[/green] Template generated: {output}\n")

    console.print("[bold]Next steps:[/bold]")
    console.print(f"  1. Fill in category ({', '.join(CATEGORIES)}), caption, location and country")
    console.print(f"  2. Move the photos into {settings.images_dir}/{{category}}/")
    console.print(f"  3. Run: python scripts/import_photos_csv.py {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
