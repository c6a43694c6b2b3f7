"""Listing edits made through the admin console.

The discount is recomputed whenever a price is part of the edit. Listings
that arrive any other way (catalog load, replace_all) keep whatever
discount_percentage they carry, consistent with the prices or not.
"""

from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

from src.ld_catalog.domain.models import Listing
from src.ld_common.id_generator import next_id
from src.ld_common.pricing import compute_discount

PRICE_FIELDS = frozenset({"original_price", "final_price"})


def apply_changes(listing: Listing, changes: Mapping[str, Any]) -> Listing:
    """Return a copy of the listing with the changes merged in. `id` is never changed."""
    fields = {k: v for k, v in changes.items() if k != "id"}
    updated = replace(listing, **fields)
    if PRICE_FIELDS & fields.keys():
        updated = replace(
            updated,
            discount_percentage=compute_discount(updated.original_price, updated.final_price),
        )
    return updated


def new_listing(existing: Sequence[Listing], fields: Mapping[str, Any]) -> Listing:
    """Build a listing with the next free id; both prices count as edited."""
    values = {k: v for k, v in fields.items() if k not in ("id", "discount_percentage")}
    return Listing(
        id=next_id(lst.id for lst in existing),
        discount_percentage=compute_discount(values["original_price"], values["final_price"]),
        **values,
    )
