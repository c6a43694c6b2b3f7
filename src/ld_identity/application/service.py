"""IdentityStore — CRUD over the persisted account collection.

Every operation reads the whole collection, mutates it in memory and writes
the whole collection back. There is no locking: two writers on the same
store overwrite each other at collection granularity (last write wins).

Usernames are not checked for uniqueness and passwords are stored verbatim.
Both are kept for parity with the existing stored data; see DESIGN.md.
"""

import logging
from dataclasses import dataclass

from config.settings import settings
from src.ld_common.datetime_utils import utc_now_iso
from src.ld_common.enums import Role
from src.ld_common.errors import StoreDecodeError
from src.ld_common.id_generator import next_id
from src.ld_identity.application.schemas import ACCOUNTS_ADAPTER, AccountRecord, AccountUpdate
from src.ld_identity.domain.models import Account, AccountProfile
from src.ld_store.domain.repository import USERS_KEY, KeyValueStoreProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminSeed:
    username: str
    password: str
    email: str

    @classmethod
    def from_settings(cls) -> "AdminSeed":
        return cls(
            username=settings.DEFAULT_ADMIN_USERNAME,
            password=settings.DEFAULT_ADMIN_PASSWORD,
            email=settings.DEFAULT_ADMIN_EMAIL,
        )


class IdentityStore:
    def __init__(self, store: KeyValueStoreProtocol, seed: AdminSeed | None = None) -> None:
        self._store = store
        self._seed = seed or AdminSeed.from_settings()

    # ------------------------------------------------------------------
    # Bootstrap
    # ------------------------------------------------------------------

    def bootstrap(self) -> bool:
        """Seed the default admin when no account collection exists.

        Called once at startup. Returns True when the seed was written.
        An existing but empty collection is left alone.
        """
        if self._read_or_none() is not None:
            return False
        admin = Account(
            id=1,
            username=self._seed.username,
            password=self._seed.password,
            email=self._seed.email,
            role=Role.ADMIN,
            created_at=utc_now_iso(),
        )
        self._write([admin])
        logger.info("Seeded default admin account %r", admin.username)
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_all(self) -> list[Account]:
        """All accounts, passwords included."""
        return self._read_or_none() or []

    def list_profiles(self) -> list[AccountProfile]:
        return [a.profile() for a in self.list_all()]

    def get(self, account_id: int) -> Account | None:
        return next((a for a in self.list_all() if a.id == account_id), None)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, username: str, password: str, email: str, role: Role | str) -> Account:
        accounts = self.list_all()
        account = Account(
            id=next_id(a.id for a in accounts),
            username=username,
            password=password,
            email=email,
            role=Role(role),
            created_at=utc_now_iso(),
        )
        accounts.append(account)
        self._write(accounts)
        logger.info("Created account id=%d username=%r role=%s", account.id, username, account.role.value)
        return account

    def update(self, account_id: int, **fields: object) -> Account | None:
        """Shallow-merge the given fields into the account. None when the id is unknown.

        Fields passed as None are left unchanged.
        """
        changes = AccountUpdate.model_validate(fields).model_dump(exclude_unset=True, exclude_none=True)
        accounts = self.list_all()
        for i, account in enumerate(accounts):
            if account.id == account_id:
                merged = AccountRecord.from_domain(account).model_copy(update=changes)
                accounts[i] = merged.to_domain()
                self._write(accounts)
                return accounts[i]
        return None

    def remove(self, account_id: int) -> bool:
        """Remove the account. Unknown ids are a successful no-op."""
        accounts = self.list_all()
        self._write([a for a in accounts if a.id != account_id])
        return True

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _read_or_none(self) -> list[Account] | None:
        """Stored collection, or None when absent. A corrupt collection is cleared."""
        try:
            records = self._store.get_typed(USERS_KEY, ACCOUNTS_ADAPTER)
        except StoreDecodeError as exc:
            logger.warning("Discarding corrupt account collection: %s", exc.message)
            self._store.remove(USERS_KEY)
            return None
        if records is None:
            return None
        return [r.to_domain() for r in records]

    def _write(self, accounts: list[Account]) -> None:
        self._store.set(
            USERS_KEY,
            [AccountRecord.from_domain(a).model_dump(mode="json", by_alias=True) for a in accounts],
        )
