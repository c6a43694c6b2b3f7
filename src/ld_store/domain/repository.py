"""Store Protocol — dependency inversion for the identity, session and category stores.

All methods are synchronous and same-thread. Keys are un-namespaced here;
the implementation owns the namespace prefix.
"""

from typing import Any, Protocol, TypeVar

from pydantic import TypeAdapter

T = TypeVar("T")

# Un-namespaced keys of the three persisted blobs
SESSION_KEY = "auth"
USERS_KEY = "users"
CATEGORIES_KEY = "categories"


class KeyValueStoreProtocol(Protocol):
    def get(self, key: str) -> Any | None: ...

    def get_typed(self, key: str, adapter: TypeAdapter[T]) -> T | None: ...

    def set(self, key: str, value: Any) -> None: ...

    def remove(self, key: str) -> None: ...
