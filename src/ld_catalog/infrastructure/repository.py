"""CatalogRepository — owns the in-memory listing collection for one page session.

The catalog is a static JSON document fetched once with httpx; there is no
write-back. Admin edits replace the in-memory snapshot and only reach the
served document through export_snapshot(), which a human places back at
CATALOG_URL by hand.

Cancellation: load() awaits a single GET. Cancelling the awaiting task
(navigation away) propagates CancelledError and leaves the repository
unloaded, so the next load() fetches again.
"""

import json
import logging
from collections.abc import Iterable

import httpx
from pydantic import ValidationError

from config.settings import settings
from src.ld_catalog.application.schemas import CATALOG_ADAPTER, ListingRecord
from src.ld_catalog.domain.models import Listing
from src.ld_common.errors import CatalogLoadError

logger = logging.getLogger(__name__)


class CatalogRepository:
    def __init__(
        self,
        url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self._url = url or settings.CATALOG_URL
        self._client = client
        self._timeout = timeout if timeout is not None else settings.CATALOG_FETCH_TIMEOUT_SECONDS
        self._listings: tuple[Listing, ...] | None = None

    @property
    def is_loaded(self) -> bool:
        return self._listings is not None

    @property
    def snapshot(self) -> tuple[Listing, ...]:
        """Current collection; empty until load() succeeds."""
        return self._listings or ()

    async def load(self) -> list[Listing]:
        """Fetch and parse the catalog once; later calls return the cached snapshot.

        Raises CatalogLoadError on network failure, non-2xx status, malformed
        JSON or records that do not match the listing shape.
        """
        if self._listings is not None:
            return list(self._listings)

        body = await self._fetch()
        try:
            records = CATALOG_ADAPTER.validate_python(body)
        except ValidationError as exc:
            raise CatalogLoadError(f"{exc.error_count()} invalid listing field(s)") from exc

        self._listings = tuple(r.to_domain() for r in records)
        logger.info("Catalog loaded: %d listings from %s", len(self._listings), self._url)
        return list(self._listings)

    async def _fetch(self) -> object:
        try:
            if self._client is not None:
                response = await self._client.get(self._url, timeout=self._timeout)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(self._url)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise CatalogLoadError(f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise CatalogLoadError(f"{type(exc).__name__}: {exc}") from exc
        except ValueError as exc:
            # JSONDecodeError, or UnicodeDecodeError for a body that is not UTF-8
            raise CatalogLoadError(f"malformed JSON ({exc})") from exc

    def replace_all(self, listings: Iterable[Listing]) -> None:
        """Replace the in-memory snapshot. Ids are not deduplicated."""
        self._listings = tuple(listings)

    def export_snapshot(self) -> bytes:
        """Full collection as pretty-printed catalog JSON, ready to replace the served file."""
        records = [ListingRecord.from_domain(lst).model_dump() for lst in self.snapshot]
        return json.dumps(records, indent=2, ensure_ascii=False).encode("utf-8")

    @property
    def export_filename(self) -> str:
        """Name the exported file must carry to replace the served document."""
        return settings.CATALOG_EXPORT_FILENAME
