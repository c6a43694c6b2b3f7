"""CategoryStore — admin-managed category metadata.

Categories here are a registry for the admin console only. The storefront
derives its categories from the listings themselves, so a registry entry
with no listings never shows up there, and a listing may use a category
name that has no registry entry.
"""

import logging
from collections import Counter
from collections.abc import Iterable

from src.ld_catalog.domain.models import Listing
from src.ld_category.application.schemas import CATEGORIES_ADAPTER, CategoryRecordSchema
from src.ld_category.domain.models import INITIAL_CATEGORIES, CategoryRecord
from src.ld_common.errors import StoreDecodeError
from src.ld_common.id_generator import next_id
from src.ld_store.domain.repository import CATEGORIES_KEY, KeyValueStoreProtocol

logger = logging.getLogger(__name__)


class CategoryStore:
    def __init__(self, store: KeyValueStoreProtocol) -> None:
        self._store = store

    def bootstrap(self) -> bool:
        """Seed the initial categories when none are stored. Returns True when seeded."""
        if self._read_or_none() is not None:
            return False
        seeded = [
            CategoryRecord(id=i, name=name, description=description)
            for i, (name, description) in enumerate(INITIAL_CATEGORIES, start=1)
        ]
        self._write(seeded)
        logger.info("Seeded %d initial categories", len(seeded))
        return True

    def list_all(self) -> list[CategoryRecord]:
        return self._read_or_none() or []

    def get(self, category_id: int) -> CategoryRecord | None:
        return next((c for c in self.list_all() if c.id == category_id), None)

    def create(self, name: str, description: str = "") -> CategoryRecord:
        records = self.list_all()
        record = CategoryRecord(
            id=next_id(c.id for c in records), name=name, description=description
        )
        records.append(record)
        self._write(records)
        return record

    def update(
        self,
        category_id: int,
        name: str | None = None,
        description: str | None = None,
    ) -> CategoryRecord | None:
        records = self.list_all()
        for record in records:
            if record.id == category_id:
                if name is not None:
                    record.name = name
                if description is not None:
                    record.description = description
                self._write(records)
                return record
        return None

    def remove(self, category_id: int) -> bool:
        """Remove the category. Unknown ids are a successful no-op."""
        self._write([c for c in self.list_all() if c.id != category_id])
        return True

    def refresh_product_counts(self, listings: Iterable[Listing]) -> list[CategoryRecord]:
        """Recompute every product_count from the live catalog and persist the result."""
        counts = Counter(lst.category for lst in listings)
        records = self.list_all()
        for record in records:
            record.product_count = counts.get(record.name, 0)
        self._write(records)
        return records

    def _read_or_none(self) -> list[CategoryRecord] | None:
        try:
            rows = self._store.get_typed(CATEGORIES_KEY, CATEGORIES_ADAPTER)
        except StoreDecodeError as exc:
            logger.warning("Discarding corrupt category collection: %s", exc.message)
            self._store.remove(CATEGORIES_KEY)
            return None
        if rows is None:
            return None
        return [r.to_domain() for r in rows]

    def _write(self, records: list[CategoryRecord]) -> None:
        self._store.set(
            CATEGORIES_KEY,
            [CategoryRecordSchema.from_domain(r).model_dump(by_alias=True) for r in records],
        )
