"""Page view assembly: query results enriched with image asset metadata."""
import logging
import re
from typing import Dict, List, Optional

from photo_portfolio.assets import ImageAssetService, photo_alt, photo_path, photo_relative_path
from photo_portfolio.core.config import Settings, settings as default_settings
from photo_portfolio.models.schemas import (
    CategoryPageView,
    CountryPageView,
    HomepageView,
    NavigationItem,
    PhotoGroup,
    PhotoGroupView,
    PhotoRead,
    PhotoView,
)
from photo_portfolio.services.query_service import PhotoQueryService

logger = logging.getLogger(__name__)

# Used when the image cannot be read
FALLBACK_ASPECT_RATIO = 1.5

CATEGORY_INFO: Dict[str, Dict[str, str]] = {
    "nature": {
        "title": "Nature",
        "description": "Landscapes, wildlife, and natural wonders",
        "nav_name": "Nature",
    },
    "street": {
        "title": "Street Photography",
        "description": "Candid moments and urban life",
        "nav_name": "Cities & Streets",
    },
    "concert": {
        "title": "Concert Photography",
        "description": "Live music and performance",
        "nav_name": "Music",
    },
}


def category_url(category: str) -> str:
    return f"/portfolio/{category}"


def country_url(country: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", country.lower()).strip("-")
    return f"/portfolio/country/{slug}"


class ViewAssembler:
    """
    Builds the view models page templates render.

    Args:
        queries: Query service over an open session
        assets: Image asset service for dimensions and resized variants
        settings: Application settings (lightbox size and quality)
    """

    def __init__(
        self,
        queries: PhotoQueryService,
        assets: ImageAssetService,
        settings: Optional[Settings] = None
    ):
        self.queries = queries
        self.assets = assets
        self.settings = settings or default_settings

    def photo_view(self, photo: PhotoRead, include_lightbox: bool = True) -> PhotoView:
        """
        View of one photo.

        Args:
            photo: Stored photo
            include_lightbox: Ask the asset service for a resized lightbox variant

        Returns:
            Photo view; aspect ratio falls back to 1.5 when the image cannot be read
        """
        relative = photo_relative_path(photo.category, photo.filename)
        src = photo_path(photo, self.settings.asset_url_prefix)

        size = self.assets.dimensions(relative)
        if size and size[0] > 0 and size[1] > 0:
            aspect_ratio = size[0] / size[1]
        else:
            logger.warning(f"Could not read image {relative}; using aspect ratio {FALLBACK_ASPECT_RATIO}")
            aspect_ratio = FALLBACK_ASPECT_RATIO
            include_lightbox = False

        lightbox_src = src
        if include_lightbox:
            variant = self.assets.optimized_variant(
                relative, self.settings.lightbox_width, self.settings.lightbox_quality
            )
            lightbox_src = variant or src

        return PhotoView(
            id=photo.id,
            src=src,
            alt=photo_alt(photo),
            caption=photo.caption,
            location=photo.location,
            country=photo.country,
            category=photo.category,
            aspect_ratio=aspect_ratio,
            lightbox_src=lightbox_src,
            original_src=src,
        )

    def photo_views(self, photos: List[PhotoRead], include_lightbox: bool = True) -> List[PhotoView]:
        return [self.photo_view(photo, include_lightbox) for photo in photos]

    def group_views(self, groups: List[PhotoGroup]) -> List[PhotoGroupView]:
        return [
            PhotoGroupView(name=group.name, photos=self.photo_views(group.photos))
            for group in groups
        ]

    def homepage(self) -> HomepageView:
        """Hero (first slot) and grid (remaining slots)."""
        views = self.photo_views(self.queries.homepage_featured())
        if not views:
            return HomepageView()
        return HomepageView(hero=views[0], grid=views[1:])

    def category_page(self, category: str) -> CategoryPageView:
        """Category page with its navigation photo, featured photos and groups."""
        navigation = self.queries.category_navigation_photo(category)
        info = CATEGORY_INFO.get(category, {})
        return CategoryPageView(
            category=category,
            title=info.get("title", category),
            description=info.get("description", ""),
            navigation=self.photo_view(navigation, include_lightbox=False) if navigation else None,
            featured=self.photo_views(self.queries.category_featured(category)),
            groups=self.group_views(self.queries.all_category_photos(category)),
        )

    def country_page(self, country: str) -> CountryPageView:
        """Country page grouped by location."""
        return CountryPageView(
            country=country,
            groups=self.group_views(self.queries.country_photos(country)),
        )

    def category_navigation(self) -> List[NavigationItem]:
        """One navigation card per category, in display order."""
        items = []
        for category in self.queries.all_categories():
            photo = self.queries.category_navigation_photo(category)
            items.append(NavigationItem(
                key=category,
                title=CATEGORY_INFO.get(category, {}).get("nav_name", category),
                url=category_url(category),
                photo=self.photo_view(photo, include_lightbox=False) if photo else None,
            ))
        return items

    def country_navigation(self) -> List[NavigationItem]:
        """One navigation card per country with a navigation photo."""
        return [
            NavigationItem(
                key=photo.country,
                title=photo.country,
                url=country_url(photo.country),
                photo=self.photo_view(photo, include_lightbox=False),
            )
            for photo in self.queries.country_navigation_photos()
        ]
