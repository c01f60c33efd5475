"""Database session management and connection handling."""
import logging
from contextlib import contextmanager
from typing import Iterator, List

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import Settings

logger = logging.getLogger(__name__)

# Base class for all ORM models
Base = declarative_base()


class PhotoStore:
    """
    Explicit handle on the photo metadata database.

    Owns one engine and its session factory. Create one per CLI invocation
    or build step and pass it (or sessions taken from it) to the components
    that need it.
    """

    def __init__(self, database_url: str, echo: bool = False):
        """
        Initialize store.

        Args:
            database_url: SQLAlchemy database URL
            echo: Echo SQL statements
        """
        self.database_url = database_url
        self.engine: Engine = create_engine(database_url, echo=echo)
        self.SessionLocal = sessionmaker(
            self.engine,
            class_=Session,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PhotoStore":
        """Build a store from application settings."""
        settings.ensure_directories_exist()
        return cls(settings.database_url, echo=settings.database_echo)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Transaction scope: commits on success, rolls back on any exception.

        Usage:
            with store.session() as db:
                # use db session
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_schema(self):
        """Create the photos table, constraints and indexes if absent."""
        # Registers the models on Base.metadata
        from photo_portfolio.models import database  # noqa: F401

        Base.metadata.create_all(self.engine)

    def migrate_schema(self) -> List[str]:
        """Bring an existing database up to the current schema."""
        from .migrations import migrate_schema

        return migrate_schema(self.engine)

    def dispose(self):
        """Close database connections."""
        self.engine.dispose()

    def __enter__(self) -> "PhotoStore":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()


@contextmanager
def open_store(settings: Settings, migrate: bool = True) -> Iterator[PhotoStore]:
    """
    Open a store for the duration of one command.

    Usage:
        with open_store(settings) as store:
            with store.session() as db:
                ...
    """
    store = PhotoStore.from_settings(settings)
    try:
        if migrate:
            applied = store.migrate_schema()
            if applied:
                logger.info(f"Applied {len(applied)} schema migration step(s)")
        yield store
    finally:
        store.dispose()


def describe_database(url: str) -> str:
    """Database URL with any password removed, for display."""
    return url.split("@")[1] if "@" in url else url
