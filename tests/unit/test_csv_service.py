"""Unit tests for CSV exchange."""
from datetime import date
from types import SimpleNamespace

import pytest

from photo_portfolio.core.exceptions import BatchRejectedException
from photo_portfolio.services import CsvLayout, parse_csv, read_csv, staging_images, template_csv, write_csv
from photo_portfolio.services.csv_service import EXPORT_COLUMNS, TEMPLATE_FILENAME


@pytest.mark.unit
class TestReadCsv:
    """Test batch file parsing."""

    def test_trims_and_skips_blank_lines(self):
        text = (
            " filename , category,caption,location,country\n"
            " a.jpg ,nature, Sunset ,Coast,Chile\n"
            "\n"
            ",,,,\n"
            "b.jpg,street,\"Rain, at night\",Tokyo,Japan\n"
        )

        batch = parse_csv(text)

        assert batch.columns == ["filename", "category", "caption", "location", "country"]
        assert len(batch.rows) == 2
        assert batch.rows[0]["filename"] == "a.jpg"
        assert batch.rows[0]["caption"] == "Sunset"
        assert batch.rows[1]["caption"] == "Rain, at night"

    def test_short_rows_padded(self):
        batch = parse_csv("filename,category,caption\na.jpg,nature\n")

        assert batch.rows[0]["caption"] == ""

    def test_reads_path(self, tmp_path):
        path = tmp_path / "photos.csv"
        path.write_text("filename,caption\nx.jpg,Hello\n", encoding="utf-8")

        assert read_csv(path).rows == [{"filename": "x.jpg", "caption": "Hello"}]

    def test_string_path_is_read_as_file(self, tmp_path):
        """Test a path given as str is opened, not parsed as CSV text."""
        path = tmp_path / "photos.csv"
        path.write_text("\ufefffilename,caption\nx.jpg,Hello\n", encoding="utf-8")

        batch = read_csv(str(path))

        assert batch.columns == ["filename", "caption"]
        assert batch.rows == [{"filename": "x.jpg", "caption": "Hello"}]

    def test_empty_text(self):
        batch = parse_csv("")

        assert batch.columns == []
        assert batch.rows == []


@pytest.mark.unit
class TestCsvLayout:
    """Test column layout checks."""

    def test_missing_required_column_rejected_up_front(self):
        """Test a file without a caption column is rejected before any row is read."""
        with pytest.raises(BatchRejectedException) as exc_info:
            CsvLayout.for_import(["filename", "category", "location", "country"])

        errors = exc_info.value.errors
        assert len(errors) == 1
        assert errors[0].field == "caption"
        assert errors[0].row == 1

    def test_unknown_columns_ignored(self):
        layout = CsvLayout.for_import(
            ["filename", "category", "alt", "caption", "location", "country", "date"]
        )

        assert layout.ignored == ["alt"]
        assert "alt" not in layout.used
        assert "date" in layout.used

    def test_import_rows_keep_known_columns(self):
        batch = parse_csv("filename,category,alt,caption,location,country\na.jpg,nature,x,C,L,K\n")

        assert batch.import_rows() == [{
            "filename": "a.jpg", "category": "nature", "caption": "C", "location": "L", "country": "K"
        }]

    def test_update_needs_identifier_column(self):
        with pytest.raises(BatchRejectedException) as exc_info:
            CsvLayout.for_update(["caption", "location"])

        assert exc_info.value.errors[0].field == "id/filename"

    def test_update_rows_keep_only_present_columns(self):
        batch = parse_csv("filename,caption,created_at\na.jpg,New,2020-01-01\n")

        assert batch.update_rows() == [{"filename": "a.jpg", "caption": "New"}]


@pytest.mark.unit
class TestWriteCsv:
    """Test export and template output."""

    def test_write_csv(self):
        photo = SimpleNamespace(
            id=4,
            filename="a.jpg",
            category="nature",
            caption="Sunset, late",
            location="Coast",
            country="Chile",
            date=date(2022, 1, 2),
            sub_category=None,
            homepage_featured=1,
            category_featured=None,
            country_featured=0,
        )

        lines = write_csv([photo]).splitlines()

        assert lines[0] == ",".join(EXPORT_COLUMNS)
        assert lines[1] == '4,a.jpg,nature,"Sunset, late",Coast,Chile,2022-01-02,,1,,0'

    def test_template(self):
        lines = template_csv(["a.jpg", "b.png"]).splitlines()

        assert lines[0].startswith("filename,category,caption,location,country")
        assert lines[1].startswith("a.jpg,")
        assert lines[1].count(",") == lines[0].count(",")

    def test_staging_images(self, tmp_path):
        for name in ["b.JPG", "a.png", ".DS_Store", "notes.txt", TEMPLATE_FILENAME]:
            (tmp_path / name).write_text("x")
        (tmp_path / "nested.jpg").mkdir()

        assert staging_images(tmp_path) == ["a.png", "b.JPG"]
        assert staging_images(tmp_path / "missing") == []
