"""Composition root: builds the explicit application context.

Lifecycle: create_app_context() at startup (engine, stores, bootstrap seeding,
session resume), await start() to fetch the catalog, close() at teardown.
The presentation layer holds the AppContext and calls into its services;
there are no module-level singletons for session or catalog state.

Run with: python -m src.main
"""

import asyncio
import logging
from dataclasses import dataclass

import httpx
from sqlalchemy import Engine

from config.settings import settings
from src.ld_admin.application.service import AdminConsole
from src.ld_auth.application.service import AuthService
from src.ld_catalog.application.service import CatalogService
from src.ld_catalog.infrastructure.repository import CatalogRepository
from src.ld_category.application.service import CategoryStore
from src.ld_common.database import create_store_engine
from src.ld_common.pricing import format_price
from src.ld_identity.application.service import IdentityStore
from src.ld_store.infrastructure.persistence import SqlKeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    engine: Engine
    store: SqlKeyValueStore
    identity: IdentityStore
    auth: AuthService
    categories: CategoryStore
    catalog_repo: CatalogRepository
    storefront: CatalogService
    admin: AdminConsole


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app_context(
    store_url: str | None = None,
    catalog_url: str | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> AppContext:
    """Init-on-start: open the store, run the bootstrap steps, resume the session."""
    engine = create_store_engine(store_url)
    store = SqlKeyValueStore(engine)

    identity = IdentityStore(store)
    identity.bootstrap()
    categories = CategoryStore(store)
    categories.bootstrap()

    auth = AuthService(identity, store)
    session = auth.resume_session()
    if session is not None:
        logger.info("Resumed session for %r", session.user.username)

    catalog_repo = CatalogRepository(url=catalog_url, client=http_client)
    return AppContext(
        engine=engine,
        store=store,
        identity=identity,
        auth=auth,
        categories=categories,
        catalog_repo=catalog_repo,
        storefront=CatalogService(catalog_repo),
        admin=AdminConsole(auth, catalog_repo, identity, categories),
    )


async def start(ctx: AppContext) -> bool:
    """Fetch the catalog and sync category counts. False when the catalog failed to load."""
    if not await ctx.storefront.open():
        return False
    ctx.categories.refresh_product_counts(ctx.catalog_repo.snapshot)
    return True


def close(ctx: AppContext) -> None:
    ctx.engine.dispose()


async def _run() -> None:
    ctx = create_app_context()
    try:
        if await start(ctx):
            stats = ctx.storefront.stats()
            logger.info(
                "%s: %d deals, %s total savings, %.0f%% average discount",
                settings.APP_NAME,
                stats.count,
                format_price(stats.total_savings),
                stats.avg_discount_percentage,
            )
            for summary in ctx.storefront.summaries():
                logger.info("  %-24s %3d deals", summary.name, summary.count)
    finally:
        close(ctx)


if __name__ == "__main__":
    configure_logging()
    asyncio.run(_run())
