"""Shared test fixtures."""

from collections.abc import Iterator

import pytest
from sqlalchemy import Engine

from src.ld_auth.application.service import AuthService
from src.ld_category.application.service import CategoryStore
from src.ld_common.database import create_store_engine
from src.ld_identity.application.service import IdentityStore
from src.ld_store.infrastructure.persistence import SqlKeyValueStore


@pytest.fixture
def engine() -> Iterator[Engine]:
    """Fresh in-memory SQLite store per test."""
    eng = create_store_engine("sqlite://", echo=False)
    yield eng
    eng.dispose()


@pytest.fixture
def store(engine: Engine) -> SqlKeyValueStore:
    return SqlKeyValueStore(engine, namespace="luxury_deals")


@pytest.fixture
def identity(store: SqlKeyValueStore) -> IdentityStore:
    """Identity store with nothing persisted yet (bootstrap not run)."""
    return IdentityStore(store)


@pytest.fixture
def seeded_identity(identity: IdentityStore) -> IdentityStore:
    identity.bootstrap()
    return identity


@pytest.fixture
def auth(seeded_identity: IdentityStore, store: SqlKeyValueStore) -> AuthService:
    return AuthService(seeded_identity, store)


@pytest.fixture
def categories(store: SqlKeyValueStore) -> CategoryStore:
    return CategoryStore(store)
