"""CSV export and JSON backups of the photo table."""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from photo_portfolio.assets import photo_path
from photo_portfolio.core.config import Settings, settings as default_settings
from photo_portfolio.models.database import CATEGORIES, Photo
from photo_portfolio.models.schemas.photo import PhotoRead
from photo_portfolio.repositories import PhotoRepository
from photo_portfolio.services.csv_service import write_csv

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "photos-export.csv"
COMPLETE_BACKUP_FILENAME = "complete-backup.json"


def portfolio_image(photo: Photo, asset_root: str) -> dict:
    """
    One photo in the portfolio JSON format.

    ``featured`` is the homepage rank when set, else the category priority.
    """
    image = {
        "src": photo_path(photo, asset_root),
        "caption": photo.caption,
        "location": photo.location,
        "country": photo.country,
    }
    if photo.date:
        image["date"] = photo.date.isoformat()
    if photo.sub_category:
        image["sub_category"] = photo.sub_category
    featured = photo.homepage_featured or photo.category_featured
    if featured:
        image["featured"] = featured
    return image


class ExportService:
    """Writes the photo table out as CSV or JSON."""

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or default_settings
        self.repo = PhotoRepository(db)

    def export_csv_text(self) -> str:
        """Every photo as CSV, ordered by category then ID."""
        return write_csv(self.repo.list_all())

    def export_csv(self, output: Optional[Path] = None) -> Path:
        """
        Write the CSV export to a file.

        Args:
            output: Target file, defaults to ``photos-export.csv`` in the backups directory

        Returns:
            Path written
        """
        output = Path(output) if output else self.settings.backups_dir / EXPORT_FILENAME
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(self.export_csv_text(), encoding="utf-8")
        logger.info(f"Exported {self.repo.count()} photo(s) to {output}")
        return output

    def backup_documents(self) -> Dict[str, dict]:
        """
        Backup documents keyed by file name.

        One document per category in the portfolio JSON format, plus a
        complete dump of every row.
        """
        photos = self.repo.list_all()
        documents = {}
        for order, category in enumerate(CATEGORIES, start=1):
            documents[f"{category}.json"] = {
                "category": category,
                "images": [
                    portfolio_image(photo, self.settings.asset_url_prefix)
                    for photo in photos if photo.category == category
                ],
                "order": order,
            }

        documents[COMPLETE_BACKUP_FILENAME] = {
            "exported_at": datetime.now(timezone.utc).isoformat(),
            "total_photos": len(photos),
            "photos": [PhotoRead.model_validate(photo).model_dump(mode="json") for photo in photos],
        }
        return documents

    def export_backup(self, output_dir: Optional[Path] = None) -> List[Path]:
        """
        Write the backup documents as JSON files.

        Args:
            output_dir: Target directory, defaults to the backups directory

        Returns:
            Paths written
        """
        output_dir = Path(output_dir) if output_dir else self.settings.backups_dir
        output_dir.mkdir(parents=True, exist_ok=True)

        written = []
        for name, document in self.backup_documents().items():
            path = output_dir / name
            path.write_text(json.dumps(document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
            written.append(path)
        logger.info(f"Wrote {len(written)} backup file(s) to {output_dir}")
        return written
