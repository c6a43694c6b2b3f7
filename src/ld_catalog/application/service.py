"""CatalogService — thin composition layer for the public storefront.

Read-only. A failed catalog load is recorded and rendered as an empty
catalog with an error message; it never propagates to the page.
"""

import logging
from dataclasses import dataclass, field

from src.ld_catalog.domain.models import CatalogStats, CategorySummary, Listing, ListingQuery
from src.ld_catalog.domain.query import (
    catalog_stats,
    category_names,
    deal_type_names,
    filter_sort,
    summarize_by_category,
)
from src.ld_catalog.domain.repository import CatalogRepositoryProtocol
from src.ld_common.errors import CatalogLoadError

logger = logging.getLogger(__name__)


@dataclass
class BrowseResult:
    listings: list[Listing] = field(default_factory=list)
    total: int = 0                # size of the whole catalog, not of the filtered view
    error: str | None = None


class CatalogService:
    def __init__(self, repo: CatalogRepositoryProtocol) -> None:
        self._repo = repo
        self._load_error: str | None = None

    @property
    def load_error(self) -> str | None:
        return self._load_error

    async def open(self) -> bool:
        """Load the catalog. Returns False (and keeps an empty catalog) on failure."""
        try:
            await self._repo.load()
        except CatalogLoadError as exc:
            logger.error("Error loading deals: %s", exc.message)
            self._load_error = exc.message
            return False
        self._load_error = None
        return True

    def browse(self, query: ListingQuery | None = None) -> BrowseResult:
        listings = self._repo.snapshot
        return BrowseResult(
            listings=filter_sort(listings, query or ListingQuery()),
            total=len(listings),
            error=self._load_error,
        )

    def category_options(self) -> list[str]:
        """Filter options for the storefront: "All" followed by present categories."""
        return ["All", *category_names(self._repo.snapshot)]

    def deal_type_options(self) -> list[str]:
        return deal_type_names(self._repo.snapshot)

    def summaries(self) -> list[CategorySummary]:
        return summarize_by_category(self._repo.snapshot)

    def stats(self) -> CatalogStats:
        return catalog_stats(self._repo.snapshot)
