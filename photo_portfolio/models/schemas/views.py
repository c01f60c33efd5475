"""Page view model schemas."""
from typing import List, Optional

from pydantic import BaseModel, Field

from .photo import PhotoRead


class PhotoGroup(BaseModel):
    """Named group of photos on a category or country page."""

    name: str
    photos: List[PhotoRead] = Field(default_factory=list)


class PhotoView(BaseModel):
    """Photo enriched with asset metadata, ready for a template."""

    id: int
    src: str
    alt: str
    caption: str
    location: str
    country: str
    category: str
    aspect_ratio: float = Field(..., gt=0)
    lightbox_src: str
    original_src: str


class PhotoGroupView(BaseModel):
    """Group of photo views."""

    name: str
    photos: List[PhotoView] = Field(default_factory=list)


class NavigationItem(BaseModel):
    """Navigation card: a category or country with its representative photo."""

    key: str
    title: str
    url: str
    photo: Optional[PhotoView] = None


class HomepageView(BaseModel):
    """Homepage hero and grid."""

    hero: Optional[PhotoView] = None
    grid: List[PhotoView] = Field(default_factory=list)


class CategoryPageView(BaseModel):
    """Category page: navigation photo, featured photos and every photo grouped."""

    category: str
    title: str
    description: str
    navigation: Optional[PhotoView] = None
    featured: List[PhotoView] = Field(default_factory=list)
    groups: List[PhotoGroupView] = Field(default_factory=list)


class CountryPageView(BaseModel):
    """Country page grouped by location."""

    country: str
    groups: List[PhotoGroupView] = Field(default_factory=list)
