"""Unit tests for the validation rules."""
from datetime import date

import pytest

from photo_portfolio.models.database import CATEGORIES
from photo_portfolio.validation import (
    check_create,
    check_update,
    validate_asset_exists,
    validate_create_fields,
    validate_field,
    validate_update_fields,
)
from tests.factories import FakeAssetChecker


def create_errors(sample, **changes):
    data = dict(sample, **changes)
    return validate_create_fields(data, row=2)


@pytest.mark.unit
class TestFieldRules:
    """Test single field rules declared on the photo schemas."""

    @pytest.mark.parametrize("filename", ["a.jpg", "B.JPEG", "c.png", "d.webp", "e.avif"])
    def test_valid_filenames(self, sample_photo_data, filename):
        assert create_errors(sample_photo_data, filename=filename) == []

    @pytest.mark.parametrize("filename", ["", "   ", None, "notes.txt", "photo.gif", "jpg", 42])
    def test_invalid_filenames(self, sample_photo_data, filename):
        errors = create_errors(sample_photo_data, filename=filename)

        assert [(e.field, e.row) for e in errors] == [("filename", 2)]

    def test_category(self, sample_photo_data):
        assert create_errors(sample_photo_data, category="street") == []
        error = create_errors(sample_photo_data, category="portrait")[0]
        assert error.field == "category"
        assert error.message == f"Must be one of: {', '.join(CATEGORIES)}"
        assert create_errors(sample_photo_data, category="")[0].message == "Category is required"

    def test_required_text(self, sample_photo_data):
        errors = create_errors(sample_photo_data, caption="  ")

        assert [(e.field, e.message) for e in errors] == [("caption", "Caption is required")]

    def test_missing_required_key(self, sample_photo_data):
        data = dict(sample_photo_data)
        del data["country"]

        errors = validate_create_fields(data)

        assert [(e.field, e.message) for e in errors] == [("country", "Country is required")]

    def test_non_string_text_reported_as_field_error(self, sample_photo_data):
        """Test a caption that is not text is a field error, not an exception."""
        errors = create_errors(sample_photo_data, caption=123)

        assert [e.field for e in errors] == ["caption"]
        assert errors[0].row == 2

    @pytest.mark.parametrize("value, valid", [
        ("2024-02-29", True),
        ("", True),
        (None, True),
        (date(2024, 1, 1), True),
        ("2023-02-30", False),
        ("21/10/2023", False),
        ("2023-1-5", False),
    ])
    def test_date(self, sample_photo_data, value, valid):
        assert (create_errors(sample_photo_data, date=value) == []) is valid

    @pytest.mark.parametrize("value, valid", [
        ("", True), ("0", True), ("1", True), ("12", True), (3, True),
        ("-1", False), ("1.5", False), ("top", False),
    ])
    def test_homepage_featured(self, sample_photo_data, value, valid):
        assert (create_errors(sample_photo_data, homepage_featured=value) == []) is valid

    @pytest.mark.parametrize("value, valid", [
        ("", True), ("0", True), ("1", True), ("4", True),
        ("5", False), ("-1", False), ("x", False),
    ])
    def test_category_featured(self, sample_photo_data, value, valid):
        assert (create_errors(sample_photo_data, category_featured=value) == []) is valid

    @pytest.mark.parametrize("value, valid", [
        ("", True), ("0", True), ("1", True), ("2", False), ("yes", False),
    ])
    def test_country_featured(self, sample_photo_data, value, valid):
        assert (create_errors(sample_photo_data, country_featured=value) == []) is valid

    def test_featured_errors_carry_hint(self, sample_photo_data):
        error = create_errors(sample_photo_data, category_featured="9")[0]

        assert error.field == "category_featured"
        assert "1=navigation" in error.message

    def test_parsed_values_are_typed(self, sample_photo_data):
        data = dict(
            sample_photo_data,
            caption="  Sunset ",
            sub_category="",
            homepage_featured="2",
            country_featured="",
        )

        create, errors = check_create(data)

        assert errors == []
        assert create.caption == "Sunset"
        assert create.sub_category is None
        assert create.date == date(2023, 10, 21)
        assert create.homepage_featured == 2
        assert create.country_featured is None


@pytest.mark.unit
class TestAssetRule:
    """Test the asset existence rule."""

    def test_missing_asset_reports_relative_path(self):
        checker = FakeAssetChecker(existing=[])

        error = validate_asset_exists("a.jpg", "nature", checker, row=3)

        assert error.field == "filename"
        assert error.row == 3
        assert "nature/a.jpg" in error.message

    def test_present_asset(self):
        checker = FakeAssetChecker(existing=[("nature", "a.jpg")])

        assert validate_asset_exists("a.jpg", "nature", checker) is None

    def test_create_checks_asset_with_checker(self, sample_photo_data):
        errors = validate_create_fields(sample_photo_data, checker=FakeAssetChecker(existing=[]))

        assert [e.field for e in errors] == ["filename"]
        assert "nature/us-georgia-nature-1.jpg" in errors[0].message

    def test_asset_reported_alongside_other_fields(self, sample_photo_data):
        data = dict(sample_photo_data, caption="", filename=" us-georgia-nature-1.jpg ")

        errors = validate_create_fields(data, checker=FakeAssetChecker(existing=[]))

        assert [e.field for e in errors] == ["caption", "filename"]

    def test_asset_skipped_when_category_invalid(self, sample_photo_data):
        data = dict(sample_photo_data, category="portrait")

        errors = validate_create_fields(data, checker=FakeAssetChecker(existing=[]))

        assert [e.field for e in errors] == ["category"]


@pytest.mark.unit
class TestRuleSets:
    """Test the combined create and update rule sets."""

    def test_create_collects_every_violation(self):
        data = {
            "filename": "a.gif",
            "category": "portrait",
            "caption": "",
            "location": "Here",
            "country": "",
            "date": "yesterday",
            "category_featured": "9",
        }

        errors = validate_create_fields(data, row=2)

        assert {e.field for e in errors} == {
            "filename", "category", "caption", "country", "date", "category_featured"
        }
        assert all(e.row == 2 for e in errors)

    def test_create_valid(self, sample_photo_data):
        assert validate_create_fields(sample_photo_data, checker=FakeAssetChecker()) == []

    def test_update_requires_identifier(self):
        errors = validate_update_fields({"caption": "New"}, row=5)

        assert len(errors) == 1
        assert errors[0].field == "id/filename"

    def test_update_validates_present_fields_only(self):
        assert validate_update_fields({"filename": "a.jpg", "caption": "New"}) == []

    def test_update_blank_required_text(self):
        errors = validate_update_fields({"id": "3", "location": " "})

        assert [e.field for e in errors] == ["location"]
        assert "cannot be empty" in errors[0].message

    def test_update_rejects_bad_identifier(self):
        assert [e.field for e in validate_update_fields({"id": "0"})] == ["id"]
        assert [e.field for e in validate_update_fields({"id": "abc"})] == ["id"]
        assert [e.field for e in validate_update_fields({"filename": "a.txt"})] == ["filename"]

    def test_update_non_string_text(self):
        errors = validate_update_fields({"id": "3", "caption": 123}, row=4)

        assert [(e.field, e.row) for e in errors] == [("caption", 4)]

    def test_update_changes_exclude_identifiers(self):
        data = {"id": "3", "filename": "a.jpg", "sub_category": "", "date": "", "homepage_featured": "2"}

        update, errors = check_update(data)

        assert errors == []
        assert update.identifier() == 3
        assert update.changes() == {"sub_category": None, "date": None, "homepage_featured": 2}


@pytest.mark.unit
class TestValidateField:
    """Test single value checks used by interactive prompts."""

    def test_optional_blank_passes(self):
        assert validate_field("date", "") is None
        assert validate_field("homepage_featured", "") is None

    def test_invalid_values(self):
        assert validate_field("date", "21/10/2023").field == "date"
        assert validate_field("country_featured", "3").field == "country_featured"
        assert validate_field("filename", "a.bmp").field == "filename"
        assert validate_field("caption", " ").field == "caption"
