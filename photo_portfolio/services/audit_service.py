"""Read-only integrity audit of the photo table."""
import logging
from collections import defaultdict
from typing import List, Optional

from sqlalchemy.orm import Session

from photo_portfolio.assets import AssetExistenceChecker, photo_relative_path
from photo_portfolio.core.config import Settings, settings as default_settings
from photo_portfolio.models.database import CATEGORIES
from photo_portfolio.models.schemas import AuditFinding, AuditReport
from photo_portfolio.repositories import PhotoRepository

logger = logging.getLogger(__name__)


class ConstraintAuditor:
    """
    Checks the cross-row rules the table itself cannot enforce.

    Each check adds findings to the report; none of them writes.
    """

    def __init__(
        self,
        db: Session,
        settings: Optional[Settings] = None,
        checker: Optional[AssetExistenceChecker] = None
    ):
        """
        Initialize auditor.

        Args:
            db: Database session
            settings: Application settings (homepage slot count)
            checker: Asset existence capability; the asset check runs only with one
        """
        self.db = db
        self.settings = settings or default_settings
        self.checker = checker
        self.repo = PhotoRepository(db)

    def run(self) -> AuditReport:
        """Run every check and return the combined report."""
        report = AuditReport()
        checks = [
            ("homepage", self._check_homepage),
            ("category_navigation", self._check_category_navigation),
            ("country_navigation", self._check_country_navigation),
        ]
        if self.checker is not None:
            checks.append(("assets", self._check_assets))

        for name, check in checks:
            report.checks_run.append(name)
            report.findings.extend(check())

        logger.info(
            f"Audit ran {len(report.checks_run)} check(s): "
            f"{len(report.errors)} error(s), {len(report.findings) - len(report.errors)} warning(s)"
        )
        return report

    def _check_homepage(self) -> List[AuditFinding]:
        ranked = self.repo.homepage_ranked()
        if not ranked:
            return [AuditFinding(check="homepage", message="No photo is featured on the homepage")]

        findings = []
        by_rank = defaultdict(list)
        for photo in ranked[:self.settings.homepage_slots]:
            by_rank[photo.homepage_featured].append(photo.id)
        for rank, ids in sorted(by_rank.items()):
            if len(ids) > 1:
                findings.append(AuditFinding(
                    check="homepage",
                    severity="warning",
                    message=f"{len(ids)} photos share homepage rank {rank}; lowest ID is shown first",
                    photo_ids=ids,
                ))
        if len(ranked) > self.settings.homepage_slots:
            hidden = [photo.id for photo in ranked[self.settings.homepage_slots:]]
            findings.append(AuditFinding(
                check="homepage",
                severity="warning",
                message=(
                    f"{len(hidden)} featured photo(s) fall outside the "
                    f"{self.settings.homepage_slots} homepage slots"
                ),
                photo_ids=hidden,
            ))
        return findings

    def _check_category_navigation(self) -> List[AuditFinding]:
        findings = []
        navigation = self.repo.navigation_photos_by_category()
        for category in CATEGORIES:
            photos = navigation.get(category, [])
            if not photos:
                findings.append(AuditFinding(
                    check="category_navigation",
                    message=f"Category '{category}' has no navigation photo",
                ))
            elif len(photos) > 1:
                findings.append(AuditFinding(
                    check="category_navigation",
                    message=f"Category '{category}' has {len(photos)} navigation photos (should be exactly 1)",
                    photo_ids=[photo.id for photo in photos],
                ))
        return findings

    def _check_country_navigation(self) -> List[AuditFinding]:
        findings = []
        by_country = defaultdict(list)
        for photo in self.repo.country_featured_photos():
            by_country[photo.country].append(photo.id)

        for country in self.repo.distinct_countries():
            ids = by_country.get(country, [])
            if not ids:
                findings.append(AuditFinding(
                    check="country_navigation",
                    message=f"Country '{country}' has no navigation photo",
                ))
            elif len(ids) > 1:
                findings.append(AuditFinding(
                    check="country_navigation",
                    message=f"Country '{country}' has {len(ids)} navigation photos (should be exactly 1)",
                    photo_ids=ids,
                ))
        return findings

    def _check_assets(self) -> List[AuditFinding]:
        findings = []
        for photo in self.repo.list_all():
            if not self.checker.exists(photo.category, photo.filename):
                findings.append(AuditFinding(
                    check="assets",
                    message=f"Photo file not found at {photo_relative_path(photo.category, photo.filename)}",
                    photo_ids=[photo.id],
                ))
        return findings
