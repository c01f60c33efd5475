"""Photo database model."""
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Index, Integer, String, Text

from photo_portfolio.core.database import Base

# Portfolio categories, in display order
CATEGORIES = ("nature", "street", "concert")

# Recognised image file extensions (lowercase)
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".avif")

# Category priority 1 marks the category navigation photo; 2-4 order the overview
CATEGORY_NAVIGATION_PRIORITY = 1
CATEGORY_FEATURED_MAX = 4


def utcnow() -> datetime:
    """Naive UTC timestamp, as stored in the timestamp columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Photo(Base):
    """Photo model holding the metadata of one portfolio image."""

    __tablename__ = "photos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    filename = Column(String(255), nullable=False, unique=True)
    category = Column(String(20), nullable=False)
    caption = Column(Text, nullable=False)
    location = Column(Text, nullable=False)
    country = Column(Text, nullable=False)
    sub_category = Column(Text, nullable=True)
    date = Column(Date, nullable=True)
    homepage_featured = Column(Integer, nullable=True)
    category_featured = Column(Integer, nullable=True)
    country_featured = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=utcnow,
        onupdate=utcnow,
        nullable=False
    )

    __table_args__ = (
        CheckConstraint(
            "category IN ({})".format(", ".join(f"'{c}'" for c in CATEGORIES)),
            name="ck_photos_category",
        ),
        CheckConstraint("length(trim(caption)) > 0", name="ck_photos_caption"),
        CheckConstraint("length(trim(location)) > 0", name="ck_photos_location"),
        CheckConstraint("length(trim(country)) > 0", name="ck_photos_country"),
        CheckConstraint(
            "homepage_featured IS NULL OR homepage_featured >= 0",
            name="ck_photos_homepage_featured",
        ),
        CheckConstraint(
            f"category_featured IS NULL OR category_featured BETWEEN 0 AND {CATEGORY_FEATURED_MAX}",
            name="ck_photos_category_featured",
        ),
        CheckConstraint(
            "country_featured IS NULL OR country_featured IN (0, 1)",
            name="ck_photos_country_featured",
        ),
        Index("ix_photos_category", "category"),
        Index("ix_photos_country", "country"),
        Index("ix_photos_homepage_featured", "homepage_featured"),
        Index("ix_photos_category_featured", "category", "category_featured"),
        Index("ix_photos_country_featured", "country", "country_featured"),
    )

    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, filename='{self.filename}', category='{self.category}')>"
