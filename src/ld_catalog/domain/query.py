"""Query engine — pure functions over a catalog snapshot.

Nothing here mutates its input or touches the store. Results are
deterministic for unchanged input: every sort is stable, so listings with
equal keys keep their catalog order across repeated renders.
"""

from collections.abc import Iterable, Sequence

from src.ld_catalog.domain.models import CatalogStats, CategorySummary, Listing, ListingQuery
from src.ld_common.enums import ALL_SENTINEL, SortKey


def _is_unset(value: str | None) -> bool:
    return not value or value.lower() == ALL_SENTINEL


def matches(listing: Listing, query: ListingQuery) -> bool:
    """True when the listing satisfies every active filter of the query."""
    term = query.search_term.lower()
    if term and not (
        term in listing.title.lower()
        or term in listing.brand.lower()
        or term in listing.description.lower()
    ):
        return False
    if not _is_unset(query.category) and listing.category != query.category:
        return False
    if not _is_unset(query.deal_type) and listing.deal_type != query.deal_type:
        return False
    return True


def sort_listings(listings: Iterable[Listing], sort_key: SortKey | str) -> list[Listing]:
    key = SortKey.parse(sort_key)
    if key is SortKey.PRICE_LOW:
        return sorted(listings, key=lambda lst: lst.final_price)
    if key is SortKey.PRICE_HIGH:
        # reverse=True keeps equal elements in original order
        return sorted(listings, key=lambda lst: lst.final_price, reverse=True)
    if key is SortKey.DISCOUNT:
        return sorted(listings, key=lambda lst: lst.discount_percentage, reverse=True)
    # FEATURED: featured first, then higher discount first
    return sorted(listings, key=lambda lst: (not lst.featured, -lst.discount_percentage))


def filter_sort(listings: Sequence[Listing], query: ListingQuery) -> list[Listing]:
    """Ordered view of the listings matching the query. Never fabricates entries."""
    return sort_listings((lst for lst in listings if matches(lst, query)), query.sort_key)


def summarize_by_category(listings: Iterable[Listing]) -> list[CategorySummary]:
    """Per-category count, savings and mean discount, largest category first.

    Only categories present in the listings are emitted. Equal counts keep
    first-encounter order.
    """
    groups: dict[str, list[Listing]] = {}
    for listing in listings:
        groups.setdefault(listing.category, []).append(listing)

    summaries = [
        CategorySummary(
            name=name,
            count=len(members),
            total_savings=sum(m.savings for m in members),
            avg_discount_percentage=sum(m.discount_percentage for m in members) / len(members),
        )
        for name, members in groups.items()
    ]
    return sorted(summaries, key=lambda s: s.count, reverse=True)


def catalog_stats(listings: Sequence[Listing]) -> CatalogStats:
    if not listings:
        return CatalogStats(count=0, total_savings=0.0, avg_discount_percentage=0.0)
    return CatalogStats(
        count=len(listings),
        total_savings=sum(lst.savings for lst in listings),
        avg_discount_percentage=sum(lst.discount_percentage for lst in listings) / len(listings),
    )


def category_names(listings: Iterable[Listing]) -> list[str]:
    """Distinct categories in first-encounter order."""
    return list(dict.fromkeys(lst.category for lst in listings))


def deal_type_names(listings: Iterable[Listing]) -> list[str]:
    return list(dict.fromkeys(lst.deal_type for lst in listings))
