"""Unit tests for the photo mutation service."""
from datetime import date, datetime

import pytest

from photo_portfolio.core.exceptions import BatchRejectedException
from photo_portfolio.repositories import PhotoRepository
from photo_portfolio.services import PhotoService
from tests.factories import FakeAssetChecker, PhotoFactory, photo_row

STALE = datetime(2000, 1, 1)


@pytest.fixture
def service(db_session, asset_checker, settings):
    return PhotoService(db_session, asset_checker, settings)


@pytest.mark.unit
class TestAddOne:
    """Test single photo creation."""

    def test_add_one(self, service, db_session, sample_photo_data):
        """Test a valid photo is stored with typed values."""
        photo_id = service.add_one(sample_photo_data)

        photo = PhotoRepository(db_session).get_by_id(photo_id)
        assert photo.filename == "us-georgia-nature-1.jpg"
        assert photo.date == date(2023, 10, 21)
        assert photo.sub_category is None
        assert photo.homepage_featured is None

    def test_add_one_reports_every_violation(self, service, db_session):
        """Test all violations come back together and nothing is written."""
        with pytest.raises(BatchRejectedException) as exc_info:
            service.add_one({"filename": "x.tiff", "category": "nature", "caption": "", "location": "", "country": "C"})

        assert {e.field for e in exc_info.value.errors} == {"filename", "caption", "location"}
        assert PhotoRepository(db_session).count() == 0

    def test_add_one_wrong_value_type(self, service, db_session, sample_photo_data):
        """Test a non-text caption is rejected as a field error."""
        data = dict(sample_photo_data, caption=123)

        with pytest.raises(BatchRejectedException) as exc_info:
            service.add_one(data)

        assert [e.field for e in exc_info.value.errors] == ["caption"]
        assert PhotoRepository(db_session).count() == 0

    def test_add_one_duplicate(self, service, db_session, sample_photo_data):
        """Test a filename already stored is rejected."""
        service.add_one(sample_photo_data)

        with pytest.raises(BatchRejectedException) as exc_info:
            service.add_one(sample_photo_data)

        assert exc_info.value.errors[0].field == "filename"
        assert "already exists" in exc_info.value.errors[0].message
        assert PhotoRepository(db_session).count() == 1

    def test_add_one_missing_asset(self, db_session, settings, sample_photo_data):
        """Test a photo whose file is missing is rejected with its path."""
        service = PhotoService(db_session, FakeAssetChecker(existing=[]), settings)

        with pytest.raises(BatchRejectedException) as exc_info:
            service.add_one(sample_photo_data)

        assert "nature/us-georgia-nature-1.jpg" in exc_info.value.errors[0].message


@pytest.mark.unit
class TestAddBatch:
    """Test batch creation."""

    def test_one_invalid_row_rejects_batch(self, service, db_session):
        """Test nine valid rows and one invalid row write nothing and report only that row."""
        rows = [photo_row() for _ in range(10)]
        rows[6]["category"] = "portrait"

        with pytest.raises(BatchRejectedException) as exc_info:
            service.add_batch(rows, first_row=2)

        errors = exc_info.value.errors
        assert len(errors) == 1
        assert errors[0].row == 8
        assert errors[0].field == "category"
        assert PhotoRepository(db_session).count() == 0

    def test_writes_in_order(self, service, db_session):
        """Test a valid batch is written and summarised."""
        rows = [
            photo_row(category="nature", homepage_featured="1"),
            photo_row(category="nature", category_featured="1"),
            photo_row(category="street", country_featured="1"),
        ]

        summary = service.add_batch(rows)

        assert summary.total == 3
        assert summary.written == 3
        assert summary.store_total == 3
        assert summary.by_category["nature"].total == 2
        assert summary.by_category["nature"].homepage == 1
        assert summary.by_category["nature"].category == 1
        assert summary.by_category["street"].total == 1
        stored = [p.filename for p in PhotoRepository(db_session).get_all()]
        assert stored == [row["filename"] for row in rows]

    def test_dry_run_writes_nothing(self, service, db_session):
        """Test dry run returns the summary without writing."""
        rows = [photo_row(), photo_row(category="concert")]

        summary = service.add_batch(rows, dry_run=True)

        assert summary.dry_run is True
        assert summary.total == 2
        assert summary.written == 0
        assert [op.identifier for op in summary.operations] == [r["filename"] for r in rows]
        assert PhotoRepository(db_session).count() == 0

    def test_duplicate_within_batch(self, service, db_session):
        """Test a filename repeated in the batch is reported on the later row."""
        rows = [photo_row(filename="same.jpg"), photo_row(), photo_row(filename="same.jpg")]

        with pytest.raises(BatchRejectedException) as exc_info:
            service.add_batch(rows, first_row=2)

        errors = exc_info.value.errors
        assert [(e.row, e.field) for e in errors] == [(4, "filename")]
        assert "Duplicate" in errors[0].message
        assert PhotoRepository(db_session).count() == 0

    def test_duplicate_against_store(self, service, db_session):
        """Test a filename already stored is reported."""
        PhotoRepository(db_session).create(PhotoFactory.create(filename="stored.jpg"))

        with pytest.raises(BatchRejectedException) as exc_info:
            service.add_batch([photo_row(), photo_row(filename="stored.jpg")], first_row=2)

        assert [(e.row, e.field) for e in exc_info.value.errors] == [(3, "filename")]
        assert PhotoRepository(db_session).count() == 1

    def test_errors_collected_across_rows(self, service):
        """Test every row's violations are returned together."""
        rows = [photo_row(caption=""), photo_row(date="2023/01/01"), photo_row(country_featured="2")]

        with pytest.raises(BatchRejectedException) as exc_info:
            service.add_batch(rows, first_row=2)

        assert [(e.row, e.field) for e in exc_info.value.errors] == [
            (2, "caption"), (3, "date"), (4, "country_featured")
        ]


@pytest.mark.unit
class TestUpdateBatch:
    """Test batch partial updates."""

    def test_update_only_given_fields(self, service, db_session):
        """Test an update with filename and caption leaves every other field alone."""
        repo = PhotoRepository(db_session)
        photo = repo.create(PhotoFactory.create(
            filename="edit.jpg",
            caption="Before",
            sub_category="Coast",
            date=date(2021, 3, 4),
            homepage_featured=2,
        ))
        photo.updated_at = STALE
        db_session.flush()

        summary = service.update_batch([{"filename": "edit.jpg", "caption": "After"}])

        photo = repo.get_by_id(photo.id)
        assert summary.written == 1
        assert summary.columns == ["caption"]
        assert photo.caption == "After"
        assert photo.sub_category == "Coast"
        assert photo.date == date(2021, 3, 4)
        assert photo.homepage_featured == 2
        assert photo.updated_at > STALE

    def test_update_by_id_and_clear_optional(self, service, db_session):
        """Test blank optional cells clear values."""
        repo = PhotoRepository(db_session)
        photo = repo.create(PhotoFactory.create(sub_category="Coast", homepage_featured=3))

        service.update_batch([{"id": str(photo.id), "sub_category": "", "homepage_featured": ""}])

        photo = repo.get_by_id(photo.id)
        assert photo.sub_category is None
        assert photo.homepage_featured is None

    def test_rows_without_changes_are_unchanged(self, service, db_session):
        """Test identifier-only rows count as unchanged."""
        photo = PhotoRepository(db_session).create(PhotoFactory.create())

        summary = service.update_batch([{"id": str(photo.id)}])

        assert summary.written == 0
        assert summary.unchanged == 1

    def test_unknown_and_duplicate_identifiers(self, service, db_session):
        """Test unknown photos and repeated identifiers are reported."""
        photo = PhotoRepository(db_session).create(PhotoFactory.create(caption="Kept"))
        rows = [
            {"id": str(photo.id), "caption": "One"},
            {"id": str(photo.id), "caption": "Two"},
            {"filename": "ghost.jpg", "caption": "Three"},
        ]

        with pytest.raises(BatchRejectedException) as exc_info:
            service.update_batch(rows, first_row=2)

        assert [(e.row, e.field) for e in exc_info.value.errors] == [(3, "id"), (4, "filename")]
        assert PhotoRepository(db_session).get_by_id(photo.id).caption == "Kept"

    def test_same_photo_by_id_and_filename(self, service, db_session):
        """Test naming one photo by ID in one row and by filename in another is refused."""
        photo = PhotoRepository(db_session).create(PhotoFactory.create(filename="twice.jpg", caption="Kept"))

        with pytest.raises(BatchRejectedException) as exc_info:
            service.update_batch([
                {"id": str(photo.id), "caption": "One"},
                {"filename": "twice.jpg", "caption": "Two"},
            ], first_row=2)

        errors = exc_info.value.errors
        assert [(e.row, e.field) for e in errors] == [(3, "filename")]
        assert "row 2" in errors[0].message
        assert PhotoRepository(db_session).get_by_id(photo.id).caption == "Kept"

    def test_invalid_row_rejects_all(self, service, db_session):
        """Test one invalid row leaves every photo untouched."""
        repo = PhotoRepository(db_session)
        first = repo.create(PhotoFactory.create(caption="First"))
        second = repo.create(PhotoFactory.create(caption="Second"))

        with pytest.raises(BatchRejectedException) as exc_info:
            service.update_batch([
                {"id": str(first.id), "caption": "Changed"},
                {"id": str(second.id), "caption": "   "},
            ], first_row=2)

        assert [(e.row, e.field) for e in exc_info.value.errors] == [(3, "caption")]
        assert repo.get_by_id(first.id).caption == "First"

    def test_filename_cannot_change(self, service, db_session):
        """Test a different filename for a known ID is refused."""
        photo = PhotoRepository(db_session).create(PhotoFactory.create(filename="orig.jpg"))

        with pytest.raises(BatchRejectedException) as exc_info:
            service.update_batch([{"id": str(photo.id), "filename": "new.jpg"}])

        assert exc_info.value.errors[0].field == "filename"
        assert "cannot be changed" in exc_info.value.errors[0].message

    def test_category_change_checks_asset(self, db_session, settings):
        """Test moving a photo to another category needs the file there."""
        photo = PhotoRepository(db_session).create(PhotoFactory.create(filename="moved.jpg", category="nature"))
        service = PhotoService(db_session, FakeAssetChecker(existing=[("nature", "moved.jpg")]), settings)

        with pytest.raises(BatchRejectedException) as exc_info:
            service.update_batch([{"id": str(photo.id), "category": "street"}])

        assert "street/moved.jpg" in exc_info.value.errors[0].message

    def test_dry_run(self, service, db_session):
        """Test dry run plans the change without applying it."""
        photo = PhotoRepository(db_session).create(PhotoFactory.create(caption="Before"))

        summary = service.update_batch([{"id": str(photo.id), "caption": "After"}], dry_run=True)

        assert summary.operations[0].changes == {"caption": "After"}
        assert PhotoRepository(db_session).get_by_id(photo.id).caption == "Before"
