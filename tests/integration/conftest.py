"""Integration-test fixtures.

Each test gets its own SQLite file under tmp_path, so a second
create_app_context() on the same URL sees what the first one persisted,
the way a page reload sees the same browser storage.
"""

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from src.main import AppContext, close, create_app_context
from tests.factories import catalog_client, listing_json

CATALOG_URL = "http://test/real_ebay_deals.json"


@pytest.fixture
def catalog_payload() -> list[dict]:
    return [
        listing_json(id=1, title="Rolex Submariner Date", brand="Rolex",
                     original_price=14000, final_price=11900, discount_percentage=15,
                     featured=True),
        listing_json(id=2, title="Omega Speedmaster", brand="Omega",
                     original_price=7000, final_price=4900, discount_percentage=30),
        listing_json(id=3, title="Gucci Marmont Bag", brand="Gucci", category="Designer Handbags",
                     deal_type="Clearance", original_price=2500, final_price=1250,
                     discount_percentage=50),
        listing_json(id=4, title="Tiffany T Ring", brand="Tiffany & Co.", category="Fine Jewelry",
                     deal_type="Daily Deal", original_price=1800, final_price=1530,
                     discount_percentage=15),
    ]


@pytest.fixture
def store_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'luxury_deals.db'}"


@pytest.fixture
def open_context(store_url: str, catalog_payload: list[dict]) -> Iterator[Callable[..., AppContext]]:
    """Factory for app contexts sharing one store file. All are closed at teardown."""
    opened: list[AppContext] = []

    def _open(**kwargs) -> AppContext:
        kwargs.setdefault("http_client", catalog_client(catalog_payload))
        ctx = create_app_context(store_url=store_url, catalog_url=CATALOG_URL, **kwargs)
        opened.append(ctx)
        return ctx

    yield _open
    for ctx in opened:
        close(ctx)
