"""Pydantic schemas for the catalog document and the admin listing form.

Catalog wire format is the snake_case JSON array served at CATALOG_URL:
  [{"id": 1, "title": "...", "original_price": 1299.99, "final_price": 899.0,
    "discount_percentage": 31, "deal_type": "Flash Sale", ...}, ...]
Export writes the same format back, so an exported file can replace the
served document as-is.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from src.ld_catalog.domain.models import Listing
from src.ld_common.pricing import round_half_up

# ---------------------------------------------------------------------------
# Catalog document
# ---------------------------------------------------------------------------


class ListingRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    title: str
    description: str = ""
    original_price: float
    final_price: float
    discount_percentage: int = 0
    category: str
    deal_type: str = ""
    product_url: str = ""
    brand: str = ""
    condition: str = ""
    featured: bool = False
    image_url: str = ""

    @field_validator("discount_percentage", mode="before")
    @classmethod
    def round_fractional_discount(cls, v: Any) -> Any:
        if isinstance(v, float):
            return round_half_up(v)
        return v

    @field_validator("description", "product_url", "brand", "condition", "image_url", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    def to_domain(self) -> Listing:
        return Listing(**self.model_dump())

    @classmethod
    def from_domain(cls, listing: Listing) -> "ListingRecord":
        return cls(
            id=listing.id,
            title=listing.title,
            description=listing.description,
            original_price=listing.original_price,
            final_price=listing.final_price,
            discount_percentage=listing.discount_percentage,
            category=listing.category,
            deal_type=listing.deal_type,
            product_url=listing.product_url,
            brand=listing.brand,
            condition=listing.condition,
            featured=listing.featured,
            image_url=listing.image_url,
        )


CATALOG_ADAPTER: TypeAdapter[list[ListingRecord]] = TypeAdapter(list[ListingRecord])


# ---------------------------------------------------------------------------
# Admin form
# ---------------------------------------------------------------------------


class ListingDraft(BaseModel):
    """New-listing form. Defaults match the blank admin form."""

    title: str = ""
    description: str = ""
    original_price: float = Field(0, ge=0)
    final_price: float = Field(0, ge=0)
    category: str = "Luxury Watches"
    deal_type: str = "Flash Sale"
    product_url: str = ""
    brand: str = ""
    condition: str = "Pre-Owned"
    featured: bool = False
    image_url: str = ""


class ListingChanges(BaseModel):
    """Partial edit. Only fields explicitly set are applied."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    description: str | None = None
    original_price: float | None = Field(None, ge=0)
    final_price: float | None = Field(None, ge=0)
    discount_percentage: int | None = None
    category: str | None = None
    deal_type: str | None = None
    product_url: str | None = None
    brand: str | None = None
    condition: str | None = None
    featured: bool | None = None
    image_url: str | None = None

    def to_changes(self) -> dict[str, Any]:
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}
