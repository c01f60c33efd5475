"""Pytest configuration and fixtures."""
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from photo_portfolio.core.config import Settings
from photo_portfolio.core.database import PhotoStore
from tests.factories import FakeAssetChecker


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing every path into the test's temporary directory."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'photos.db'}",
        images_dir=tmp_path / "images",
        staging_dir=tmp_path / "staging",
        backups_dir=tmp_path / "backups",
        asset_url_prefix="/images/photography",
        homepage_slots=7,
    )


@pytest.fixture
def store(settings):
    """File-backed SQLite store with the schema created."""
    store = PhotoStore.from_settings(settings)
    store.create_schema()
    yield store
    store.dispose()


@pytest.fixture
def db_session(store):
    """Create a test database session."""
    session = store.SessionLocal()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def asset_checker() -> FakeAssetChecker:
    """Asset checker that finds every file."""
    return FakeAssetChecker()


@pytest.fixture
def sample_photo_data() -> dict:
    """Valid input for a new photo, as read from a CSV row."""
    return {
        "filename": "us-georgia-nature-1.jpg",
        "category": "nature",
        "caption": "Fall colors at sunset",
        "location": "Northern Georgia",
        "country": "United States",
        "sub_category": "",
        "date": "2023-10-21",
        "homepage_featured": "",
        "category_featured": "",
        "country_featured": "",
    }
