"""Domain models for ld_category — pure dataclasses."""

from dataclasses import dataclass


@dataclass
class CategoryRecord:
    id: int
    name: str
    description: str
    product_count: int = 0       # cache of the live catalog; refreshed, never incremented


INITIAL_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("Luxury Watches", "Premium timepieces from top brands"),
    ("Designer Handbags", "Luxury handbags and accessories"),
    ("Designer Sunglasses", "High-end eyewear"),
    ("Fine Jewelry", "Precious jewelry and accessories"),
    ("Designer Shoes", "Luxury footwear"),
)
