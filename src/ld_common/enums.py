"""Global enums — values must match the persisted JSON and the catalog document."""

from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"


class Permission(str, Enum):
    VIEW = "view"
    EDIT = "edit"
    DELETE = "delete"
    MANAGE_USERS = "manage_users"
    MANAGE_CATEGORIES = "manage_categories"


class SortKey(str, Enum):
    FEATURED = "featured"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    DISCOUNT = "discount"

    @classmethod
    def parse(cls, value: "str | SortKey | None") -> "SortKey":
        """Unknown or missing keys fall back to FEATURED, the storefront default."""
        if isinstance(value, SortKey):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.FEATURED


# Admin form vocabularies. Listings loaded from the catalog are not validated
# against these; they only drive the select options.
DEAL_TYPES: tuple[str, ...] = (
    "Flash Sale",
    "Daily Deal",
    "Clearance",
    "Limited Time",
    "Luxury Item",
)

CONDITIONS: tuple[str, ...] = (
    "Brand New",
    "Pre-Owned",
    "Excellent",
    "Good",
    "Fair",
)

# Filter value meaning "no filter" (storefront uses "All", admin uses "all")
ALL_SENTINEL = "all"
