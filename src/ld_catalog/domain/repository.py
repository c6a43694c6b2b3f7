# src/ld_catalog/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from collections.abc import Iterable
from typing import Protocol

from src.ld_catalog.domain.models import Listing


class CatalogRepositoryProtocol(Protocol):
    @property
    def is_loaded(self) -> bool: ...

    @property
    def snapshot(self) -> tuple[Listing, ...]: ...

    async def load(self) -> list[Listing]: ...

    def replace_all(self, listings: Iterable[Listing]) -> None: ...

    def export_snapshot(self) -> bytes: ...

    @property
    def export_filename(self) -> str: ...
