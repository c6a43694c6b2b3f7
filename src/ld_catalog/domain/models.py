"""Domain models for ld_catalog — pure dataclasses, no business logic."""

from dataclasses import dataclass

from src.ld_common.enums import SortKey


@dataclass(frozen=True)
class Listing:
    id: int
    title: str
    description: str
    original_price: float
    final_price: float
    discount_percentage: int     # derived from the prices, but only recomputed on admin edits
    category: str
    deal_type: str
    brand: str
    condition: str
    featured: bool
    product_url: str
    image_url: str = ""

    @property
    def savings(self) -> float:
        return self.original_price - self.final_price


@dataclass(frozen=True)
class ListingQuery:
    """Search term plus filters. None, "" and "all" leave a filter unset."""

    search_term: str = ""
    category: str | None = None
    deal_type: str | None = None
    sort_key: SortKey = SortKey.FEATURED


@dataclass
class CategorySummary:
    name: str
    count: int
    total_savings: float
    avg_discount_percentage: float


@dataclass
class CatalogStats:
    count: int
    total_savings: float
    avg_discount_percentage: float
