"""
Check the photo table against the curation rules.

Exits with status 1 when any error is found.

Usage:
    python scripts/validate_constraints.py [--check-assets]
"""
import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from photo_portfolio.assets import FilesystemAssetChecker
from photo_portfolio.core.config import settings
from photo_portfolio.core.database import describe_database, open_store
from photo_portfolio.core.logging_config import configure_logging
from photo_portfolio.reporting import print_audit_report
from photo_portfolio.services import ConstraintAuditor

console = Console()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Validate photo curation constraints")
    parser.add_argument("--check-assets", action="store_true", help="Also check every image file exists")
    args = parser.parse_args()

    configure_logging(settings, "WARNING")

    console.print(Panel.fit(
        "[bold cyan]Constraint Validation[/bold cyan]\n"
        f"Database: {describe_database(settings.database_url)}",
        border_style="cyan"
    ))

    checker = FilesystemAssetChecker(settings.images_dir) if args.check_assets else None
    with open_store(settings) as store:
        with store.session() as db:
            report = ConstraintAuditor(db, settings, checker).run()

    print_audit_report(report, console)
    return 0 if report.passed else 1


if __name__ == "__main__":
    sys.exit(main())
