"""SqlKeyValueStore — concrete implementation of KeyValueStoreProtocol.

Each call opens its own short session and commits immediately; there is no
caching layer, so two stores on the same engine always agree.
"""

import json
import logging
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from sqlalchemy import Engine, delete
from sqlalchemy.orm import Session, sessionmaker

from config.settings import settings
from src.ld_common.database import Base, create_session_factory
from src.ld_common.errors import StoreDecodeError
from src.ld_store.infrastructure.db_models import StoredValueModel

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlKeyValueStore:
    def __init__(self, engine: Engine, namespace: str | None = None) -> None:
        self._namespace = namespace or settings.STORE_NAMESPACE
        self._session_factory: sessionmaker[Session] = create_session_factory(engine)
        Base.metadata.create_all(engine, tables=[StoredValueModel.__table__])

    def full_key(self, key: str) -> str:
        """'users' -> 'luxury_deals_users'."""
        return f"{self._namespace}_{key}"

    def get_raw(self, key: str) -> str | None:
        with self._session_factory() as session:
            row = session.get(StoredValueModel, self.full_key(key))
            return row.value if row is not None else None

    def get(self, key: str) -> Any | None:
        """Decoded JSON value, or None when the key is absent.

        Raises StoreDecodeError when the stored text is not valid JSON.
        """
        raw = self.get_raw(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StoreDecodeError(self.full_key(key), str(exc)) from exc

    def get_typed(self, key: str, adapter: TypeAdapter[T]) -> T | None:
        """Like get(), but also validates the shape into a typed record."""
        value = self.get(key)
        if value is None:
            return None
        try:
            return adapter.validate_python(value)
        except ValidationError as exc:
            raise StoreDecodeError(
                self.full_key(key), f"{exc.error_count()} validation error(s)"
            ) from exc

    def set(self, key: str, value: Any) -> None:
        self.set_raw(key, json.dumps(value))

    def set_raw(self, key: str, raw: str) -> None:
        with self._session_factory.begin() as session:
            row = session.get(StoredValueModel, self.full_key(key))
            if row is None:
                session.add(StoredValueModel(key=self.full_key(key), value=raw))
            else:
                row.value = raw
        logger.debug("Stored %s (%d bytes)", self.full_key(key), len(raw))

    def remove(self, key: str) -> None:
        with self._session_factory.begin() as session:
            session.execute(
                delete(StoredValueModel).where(StoredValueModel.key == self.full_key(key))
            )
