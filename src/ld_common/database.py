"""Synchronous SQLAlchemy engine for the local durable store.

The store stands in for browser-local storage: one SQLite file per profile,
single writer, same-thread access. In-memory URLs get a StaticPool so every
session sees the same database.
"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from config.settings import settings


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models across modules."""

    pass


def _is_memory_url(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:")


def create_store_engine(url: str | None = None, echo: bool | None = None) -> Engine:
    """Create the store engine; tables are created by the store that owns them."""
    url = url or settings.STORE_URL
    kwargs: dict[str, object] = {"echo": settings.DEBUG if echo is None else echo}
    if _is_memory_url(url):
        kwargs["connect_args"] = {"check_same_thread": False}
        kwargs["poolclass"] = StaticPool

    return create_engine(url, **kwargs)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(engine, expire_on_commit=False)
