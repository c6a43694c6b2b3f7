# src/ld_admin/application/service.py
"""Admin console application service.

Every action checks the permission table at call time, before reading or
mutating anything, so a stale page that still shows a button cannot act
after a role change or logout. Denials raise PermissionDeniedError with a
user-facing message. Confirmation prompts before destructive actions are
the caller's job.

Listing edits change only the in-memory working copy. They reach the served
catalog document solely through export_catalog(), which the user triggers
explicitly.
"""

import logging
from dataclasses import dataclass

from src.ld_auth.application.service import AuthService
from src.ld_catalog.application.schemas import ListingChanges, ListingDraft
from src.ld_catalog.domain.editing import apply_changes, new_listing
from src.ld_catalog.domain.models import Listing, ListingQuery
from src.ld_catalog.domain.query import filter_sort
from src.ld_catalog.domain.repository import CatalogRepositoryProtocol
from src.ld_category.application.service import CategoryStore
from src.ld_category.domain.models import CategoryRecord
from src.ld_common.enums import Permission, Role
from src.ld_common.errors import (
    AccountNotFoundError,
    CannotDeleteSelfError,
    CatalogLoadError,
    CatalogNotLoadedError,
    CategoryInUseError,
    CategoryNotFoundError,
    ListingNotFoundError,
)
from src.ld_identity.application.service import IdentityStore
from src.ld_identity.domain.models import Account, AccountProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogExport:
    filename: str                # name the served catalog document must carry
    data: bytes


class AdminConsole:
    def __init__(
        self,
        auth: AuthService,
        catalog: CatalogRepositoryProtocol,
        identity: IdentityStore,
        categories: CategoryStore,
    ) -> None:
        self._auth = auth
        self._catalog = catalog
        self._identity = identity
        self._categories = categories
        self._unexported = False

    @property
    def has_unexported_changes(self) -> bool:
        return self._unexported

    async def open(self) -> bool:
        """Load the working copy and refresh category counts. False when the load failed."""
        try:
            await self._catalog.load()
        except CatalogLoadError as exc:
            logger.error("Error loading products: %s", exc.message)
            return False
        self._categories.refresh_product_counts(self._catalog.snapshot)
        return True

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    def listings(self, query: ListingQuery | None = None) -> list[Listing]:
        self._auth.require(Permission.VIEW, "view products")
        return filter_sort(self._catalog.snapshot, query or ListingQuery())

    def create_listing(self, draft: ListingDraft) -> Listing:
        self._auth.require(Permission.EDIT, "edit products")
        self._require_loaded()
        current = self._catalog.snapshot
        listing = new_listing(current, draft.model_dump())
        self._commit_listings([*current, listing])
        logger.info("Listing created: id=%d title=%r", listing.id, listing.title)
        return listing

    def update_listing(self, listing_id: int, changes: ListingChanges) -> Listing:
        self._auth.require(Permission.EDIT, "edit products")
        self._require_loaded()
        current = list(self._catalog.snapshot)
        for i, listing in enumerate(current):
            if listing.id == listing_id:
                current[i] = apply_changes(listing, changes.to_changes())
                self._commit_listings(current)
                logger.info("Listing updated: id=%d", listing_id)
                return current[i]
        raise ListingNotFoundError(listing_id)

    def delete_listing(self, listing_id: int) -> None:
        """Absent ids are a no-op."""
        self._auth.require(Permission.DELETE, "delete products")
        self._require_loaded()
        current = self._catalog.snapshot
        remaining = [lst for lst in current if lst.id != listing_id]
        if len(remaining) == len(current):
            return
        self._commit_listings(remaining)
        logger.info("Listing deleted: id=%d", listing_id)

    def export_catalog(self) -> CatalogExport:
        """Pretty-printed catalog JSON to download and place back at the catalog path."""
        self._auth.require(Permission.EDIT, "export products")
        self._require_loaded()
        export = CatalogExport(
            filename=self._catalog.export_filename, data=self._catalog.export_snapshot()
        )
        self._unexported = False
        logger.info(
            "Catalog exported to %s: %d listings, %d bytes",
            export.filename,
            len(self._catalog.snapshot),
            len(export.data),
        )
        return export

    def _require_loaded(self) -> None:
        # replace_all on an unloaded repository would be cached as the whole catalog
        if not self._catalog.is_loaded:
            raise CatalogNotLoadedError()

    def _commit_listings(self, listings: list[Listing]) -> None:
        self._catalog.replace_all(listings)
        self._categories.refresh_product_counts(listings)
        self._unexported = True

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def categories(self) -> list[CategoryRecord]:
        self._auth.require(Permission.MANAGE_CATEGORIES, "manage categories")
        return self._categories.refresh_product_counts(self._catalog.snapshot)

    def create_category(self, name: str, description: str = "") -> CategoryRecord:
        self._auth.require(Permission.MANAGE_CATEGORIES, "manage categories")
        record = self._categories.create(name, description)
        self._categories.refresh_product_counts(self._catalog.snapshot)
        return self._categories.get(record.id) or record

    def update_category(
        self, category_id: int, name: str | None = None, description: str | None = None
    ) -> CategoryRecord:
        self._auth.require(Permission.MANAGE_CATEGORIES, "manage categories")
        if self._categories.update(category_id, name=name, description=description) is None:
            raise CategoryNotFoundError(category_id)
        refreshed = self._categories.refresh_product_counts(self._catalog.snapshot)
        return next(c for c in refreshed if c.id == category_id)

    def delete_category(self, category_id: int) -> None:
        """Refused while listings still use the category. Absent ids are a no-op."""
        self._auth.require(Permission.MANAGE_CATEGORIES, "manage categories")
        records = self._categories.refresh_product_counts(self._catalog.snapshot)
        record = next((c for c in records if c.id == category_id), None)
        if record is not None and record.product_count > 0:
            raise CategoryInUseError(record.name, record.product_count)
        self._categories.remove(category_id)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def users(self) -> list[AccountProfile]:
        self._auth.require(Permission.MANAGE_USERS, "manage users")
        return self._identity.list_profiles()

    def create_user(
        self, username: str, password: str, email: str, role: Role | str = Role.VIEWER
    ) -> AccountProfile:
        self._auth.require(Permission.MANAGE_USERS, "manage users")
        return self._identity.create(username, password, email, role).profile()

    def update_user(
        self,
        account_id: int,
        username: str | None = None,
        password: str | None = None,
        email: str | None = None,
        role: Role | str | None = None,
    ) -> AccountProfile:
        """Blank fields are left unchanged; a blank password keeps the current one."""
        self._auth.require(Permission.MANAGE_USERS, "manage users")
        fields = {
            k: v
            for k, v in {
                "username": username,
                "password": password,
                "email": email,
                "role": role,
            }.items()
            if v not in (None, "")
        }
        account: Account | None = self._identity.update(account_id, **fields)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account.profile()

    def delete_user(self, account_id: int) -> None:
        session = self._auth.require(Permission.MANAGE_USERS, "manage users")
        if account_id == session.user.id:
            raise CannotDeleteSelfError()
        self._identity.remove(account_id)
        logger.info("Account deleted: id=%d by=%d", account_id, session.user.id)
