"""
CSV exchange for batch files.

Import and update files share one format: a header line naming the columns,
then one photo per line. Rows are numbered the way a spreadsheet shows them,
so the header is row 1 and the first photo is row 2.
"""
import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from photo_portfolio.core.exceptions import BatchRejectedException
from photo_portfolio.models.database import IMAGE_EXTENSIONS
from photo_portfolio.models.schemas import FieldError
from photo_portfolio.models.schemas.photo import (
    OPTIONAL_COLUMNS,
    REQUIRED_COLUMNS,
    UPDATABLE_COLUMNS,
)

logger = logging.getLogger(__name__)

HEADER_ROW = 1
FIRST_DATA_ROW = 2

EXPORT_COLUMNS = (
    "id",
    "filename",
    "category",
    "caption",
    "location",
    "country",
    "date",
    "sub_category",
    "homepage_featured",
    "category_featured",
    "country_featured",
)
TEMPLATE_COLUMNS = REQUIRED_COLUMNS + OPTIONAL_COLUMNS
TEMPLATE_FILENAME = "photo-template.csv"

# Files a camera or OS drops next to the photos
IGNORED_FILES = {".DS_Store", "Thumbs.db", "desktop.ini", TEMPLATE_FILENAME}


@dataclass
class CsvLayout:
    """Columns of a batch file, checked before any row is looked at."""

    columns: List[str]
    used: List[str]
    ignored: List[str] = field(default_factory=list)

    @classmethod
    def for_import(cls, columns: Sequence[str]) -> "CsvLayout":
        """
        Layout of a file of new photos.

        Raises:
            BatchRejectedException: One error per missing required column
        """
        missing = [c for c in REQUIRED_COLUMNS if c not in columns]
        if missing:
            raise BatchRejectedException([
                FieldError(field=c, message=f'Missing required column "{c}"', row=HEADER_ROW)
                for c in missing
            ])
        return cls._build(columns, REQUIRED_COLUMNS + OPTIONAL_COLUMNS)

    @classmethod
    def for_update(cls, columns: Sequence[str]) -> "CsvLayout":
        """
        Layout of a file of partial updates.

        Raises:
            BatchRejectedException: If neither ``id`` nor ``filename`` is present
        """
        if "id" not in columns and "filename" not in columns:
            raise BatchRejectedException([FieldError(
                field="id/filename",
                message="CSV must contain an id or filename column",
                row=HEADER_ROW,
            )])
        layout = cls._build(columns, ("id", "filename") + UPDATABLE_COLUMNS)
        if not any(c in UPDATABLE_COLUMNS for c in layout.used):
            logger.warning("Update file has no writable columns; every row will be unchanged")
        return layout

    @classmethod
    def _build(cls, columns: Sequence[str], known: Sequence[str]) -> "CsvLayout":
        used = [c for c in columns if c in known]
        ignored = [c for c in columns if c not in known]
        if ignored:
            logger.info(f"Ignoring CSV columns: {', '.join(ignored)}")
        return cls(columns=list(columns), used=used, ignored=ignored)

    def select(self, record: Dict[str, str]) -> Dict[str, str]:
        """Known columns of one parsed record."""
        return {c: record.get(c) for c in self.used}


@dataclass
class CsvBatch:
    """Parsed batch file."""

    columns: List[str]
    rows: List[Dict[str, str]]

    def import_rows(self) -> List[Dict[str, str]]:
        """Rows restricted to the import layout."""
        layout = CsvLayout.for_import(self.columns)
        return [layout.select(row) for row in self.rows]

    def update_rows(self) -> List[Dict[str, str]]:
        """Rows restricted to the update layout."""
        layout = CsvLayout.for_update(self.columns)
        return [layout.select(row) for row in self.rows]


def read_csv(path: Path) -> CsvBatch:
    """
    Parse a batch file from disk.

    Args:
        path: Path of the file (a UTF-8 byte order mark is dropped)

    Returns:
        Parsed batch
    """
    return parse_csv(Path(path).read_text(encoding="utf-8-sig"))


def parse_csv(text: str) -> CsvBatch:
    """
    Parse batch CSV text.

    Header names and values are trimmed; blank lines are skipped.

    Args:
        text: The CSV text itself

    Returns:
        Parsed batch
    """
    reader = csv.reader(io.StringIO(text))
    header = next(reader, None)
    if header is None:
        return CsvBatch(columns=[], rows=[])

    columns = [name.strip() for name in header]
    rows = []
    for values in reader:
        if not any(value.strip() for value in values):
            continue
        values = [value.strip() for value in values]
        values.extend([""] * (len(columns) - len(values)))
        rows.append(dict(zip(columns, values)))

    logger.debug(f"Parsed {len(rows)} CSV row(s) with columns {columns}")
    return CsvBatch(columns=columns, rows=rows)


def _cell(value) -> str:
    if value is None:
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def write_csv(photos: Iterable) -> str:
    """
    CSV text of photos in export column order.

    The output can be edited and fed back through the update layout.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)
    for photo in photos:
        writer.writerow([_cell(getattr(photo, column)) for column in EXPORT_COLUMNS])
    return buffer.getvalue()


def template_csv(filenames: Iterable[str]) -> str:
    """Blank import template with one row per filename."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(TEMPLATE_COLUMNS)
    for filename in filenames:
        writer.writerow([filename] + [""] * (len(TEMPLATE_COLUMNS) - 1))
    return buffer.getvalue()


def staging_images(directory: Path) -> List[str]:
    """Sorted image filenames in a staging directory."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(
        path.name for path in directory.iterdir()
        if path.is_file()
        and path.name not in IGNORED_FILES
        and path.suffix.lower() in IMAGE_EXTENSIONS
    )
