"""Unit tests for the constraint audit."""
import pytest

from photo_portfolio.repositories import PhotoRepository
from photo_portfolio.services import ConstraintAuditor
from tests.factories import FakeAssetChecker, PhotoFactory


def add(db_session, **kwargs):
    return PhotoRepository(db_session).create(PhotoFactory.create(**kwargs))


def seed_clean(db_session):
    """One navigation photo per category and country plus a homepage hero."""
    add(db_session, category="nature", country="Chile", category_featured=1, country_featured=1, homepage_featured=1)
    add(db_session, category="street", country="Japan", category_featured=1, country_featured=1)
    add(db_session, category="concert", country="Japan", category_featured=1)


@pytest.mark.unit
class TestConstraintAuditor:
    """Test ConstraintAuditor."""

    def test_clean_table_passes(self, db_session, settings):
        seed_clean(db_session)

        report = ConstraintAuditor(db_session, settings).run()

        assert report.passed
        assert report.findings == []
        assert report.checks_run == ["homepage", "category_navigation", "country_navigation"]

    def test_missing_and_duplicate_category_navigation(self, db_session, settings):
        """Test a category without and a category with two navigation photos are errors."""
        add(db_session, category="nature", country="Chile", country_featured=1, homepage_featured=1)
        first = add(db_session, category="street", country="Chile", category_featured=1)
        second = add(db_session, category="street", country="Chile", category_featured=1)
        add(db_session, category="concert", country="Chile", category_featured=1)

        report = ConstraintAuditor(db_session, settings).run()

        messages = [f.message for f in report.errors if f.check == "category_navigation"]
        assert "Category 'nature' has no navigation photo" in messages
        duplicate = [f for f in report.errors if f.photo_ids == [first.id, second.id]]
        assert len(duplicate) == 1
        assert not report.passed

    def test_country_navigation(self, db_session, settings):
        """Test every country needs exactly one navigation photo."""
        seed_clean(db_session)
        add(db_session, country="Peru")
        add(db_session, country="Chile", country_featured=1)

        report = ConstraintAuditor(db_session, settings).run()

        messages = [f.message for f in report.errors if f.check == "country_navigation"]
        assert "Country 'Peru' has no navigation photo" in messages
        assert any(m.startswith("Country 'Chile' has 2") for m in messages)

    def test_homepage_checks(self, db_session, settings):
        """Test no homepage photo is an error and shared ranks are warnings."""
        report = ConstraintAuditor(db_session, settings).run()
        assert any(f.check == "homepage" for f in report.errors)

        seed_clean(db_session)
        add(db_session, country="Chile", homepage_featured=2)
        add(db_session, country="Chile", homepage_featured=2)

        report = ConstraintAuditor(db_session, settings).run()

        homepage = [f for f in report.findings if f.check == "homepage"]
        assert [f.severity for f in homepage] == ["warning"]
        assert report.passed

    def test_asset_check(self, db_session, settings):
        """Test the asset check runs only with a checker and reports missing files."""
        seed_clean(db_session)
        photos = PhotoRepository(db_session).list_all()
        present = [(p.category, p.filename) for p in photos[1:]]

        report = ConstraintAuditor(db_session, settings, FakeAssetChecker(existing=present)).run()

        assets = [f for f in report.findings if f.check == "assets"]
        assert "assets" in report.checks_run
        assert [f.photo_ids for f in assets] == [[photos[0].id]]
