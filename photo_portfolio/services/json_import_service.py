"""Restore photos from portfolio JSON files or a complete backup."""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from photo_portfolio.assets import AssetExistenceChecker
from photo_portfolio.core.config import Settings, settings as default_settings
from photo_portfolio.core.exceptions import InvalidArgumentException
from photo_portfolio.models.database import CATEGORIES
from photo_portfolio.models.database.photo import CATEGORY_FEATURED_MAX
from photo_portfolio.models.schemas import BatchSummary
from photo_portfolio.services.export_service import COMPLETE_BACKUP_FILENAME
from photo_portfolio.services.photo_service import CREATE_COLUMNS, PhotoService

logger = logging.getLogger(__name__)

# Portfolio image keys copied as they are
IMAGE_FIELDS = ("caption", "location", "country", "date", "sub_category")


@dataclass
class JsonSource:
    """Photo inputs read from one or more JSON files."""

    rows: List[Dict[str, object]] = field(default_factory=list)
    files: List[Path] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


def image_row(image: dict, category: str, homepage_slots: int) -> Dict[str, object]:
    """
    Photo input for one portfolio image.

    The filename is the last segment of ``src``. A ``featured`` value within
    the homepage slots becomes the homepage rank; one within the category
    priorities becomes the category priority.
    """
    src = str(image.get("src") or "")
    row: Dict[str, object] = {
        "filename": PurePosixPath(src).name if src else "",
        "category": category,
    }
    for name in IMAGE_FIELDS:
        if image.get(name) is not None:
            row[name] = image[name]

    featured = image.get("featured")
    if isinstance(featured, int) and not isinstance(featured, bool) and featured > 0:
        if featured <= homepage_slots:
            row["homepage_featured"] = featured
        if featured <= CATEGORY_FEATURED_MAX:
            row["category_featured"] = featured
    return row


def portfolio_rows(document: dict, category: str, homepage_slots: int) -> List[Dict[str, object]]:
    """Photo inputs for every image of a category document."""
    category = document.get("category") or category
    return [image_row(image, category, homepage_slots) for image in document.get("images") or []]


def backup_rows(document: dict) -> List[Dict[str, object]]:
    """Photo inputs for every row of a complete backup."""
    return [
        {name: photo[name] for name in CREATE_COLUMNS if name in photo}
        for photo in document.get("photos") or []
    ]


def _load(path: Path) -> dict:
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidArgumentException("JSON file", str(path), f"line {e.lineno}: {e.msg}") from e
    if not isinstance(document, dict):
        raise InvalidArgumentException("JSON file", str(path), "expected an object at the top level")
    return document


def read_json_source(path: Path, homepage_slots: int) -> JsonSource:
    """
    Read photo inputs from a JSON file or a directory of them.

    A directory is read as portfolio files named ``{category}.json``, in
    category display order; missing files are skipped. A single file is a
    portfolio document (``images``) or a complete backup (``photos``).

    Raises:
        InvalidArgumentException: If nothing readable is found or a file is not JSON
    """
    path = Path(path)
    source = JsonSource()

    if path.is_dir():
        for category in CATEGORIES:
            file = path / f"{category}.json"
            if not file.is_file():
                logger.info(f"No {file.name} in {path}, skipping")
                source.skipped.append(file.name)
                continue
            source.rows.extend(portfolio_rows(_load(file), category, homepage_slots))
            source.files.append(file)
        if not source.files:
            raise InvalidArgumentException("JSON directory", str(path), "no portfolio files found")
        return source

    if not path.is_file():
        raise InvalidArgumentException("JSON path", str(path), "not found")

    document = _load(path)
    if "photos" in document or path.name == COMPLETE_BACKUP_FILENAME:
        source.rows = backup_rows(document)
    elif "images" in document:
        source.rows = portfolio_rows(document, path.stem, homepage_slots)
    else:
        raise InvalidArgumentException("JSON file", str(path), "expected an 'images' or 'photos' list")
    source.files.append(path)
    return source


class JsonImportService:
    """Adds photos read from JSON through the validated batch path."""

    def __init__(
        self,
        db: Session,
        checker: Optional[AssetExistenceChecker] = None,
        settings: Optional[Settings] = None
    ):
        self.settings = settings or default_settings
        self.photos = PhotoService(db, checker, self.settings)

    def read(self, path: Path) -> JsonSource:
        return read_json_source(path, self.settings.homepage_slots)

    def import_source(self, source: JsonSource, dry_run: bool = False) -> BatchSummary:
        """
        Add every photo of a source, all or nothing.

        Rows are numbered from 1 in read order across files.

        Raises:
            BatchRejectedException: With every violation across every row
        """
        summary = self.photos.add_batch(source.rows, dry_run=dry_run)
        if not dry_run:
            names = ", ".join(file.name for file in source.files)
            logger.info(f"Imported {summary.written} photo(s) from {names}")
        return summary

    def import_path(self, path: Path, dry_run: bool = False) -> BatchSummary:
        return self.import_source(self.read(path), dry_run=dry_run)
