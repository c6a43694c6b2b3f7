"""AuthService: login, logout, session resume and permission checks.

State machine: Anonymous -> Authenticated -> Anonymous (logout, or a corrupt
persisted session discarded on resume). There is at most one session per
store namespace; the in-memory copy and the persisted record always agree
after each call returns.

Note: "unknown user" and "wrong password" produce the same failure; the
caller renders a single invalid-credentials message.
"""

import logging

from src.ld_auth.application.schemas import SESSION_ADAPTER, SessionRecord
from src.ld_auth.domain.models import Session
from src.ld_auth.permissions import resolve_permission
from src.ld_common.enums import Permission
from src.ld_common.errors import PermissionDeniedError, StoreDecodeError
from src.ld_identity.application.service import IdentityStore
from src.ld_store.domain.repository import SESSION_KEY, KeyValueStoreProtocol

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, identity: IdentityStore, store: KeyValueStoreProtocol) -> None:
        self._identity = identity
        self._store = store
        self._session: Session | None = None

    @property
    def current(self) -> Session | None:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def login(self, username: str, password: str) -> Session | None:
        """Authenticate against the account collection. None on any mismatch.

        Linear scan: when usernames are duplicated the first matching record wins.
        """
        account = next(
            (
                a
                for a in self._identity.list_all()
                if a.username == username and a.password == password
            ),
            None,
        )
        if account is None:
            logger.info("Login failed for username=%r", username)
            return None

        session = Session(user=account.profile())
        self._store.set(SESSION_KEY, SessionRecord.from_domain(session).to_json())
        self._session = session
        logger.info("Login ok: id=%d role=%s", account.id, account.role.value)
        return session

    def logout(self) -> None:
        """Clear the session in memory and in the store. Safe to call when anonymous."""
        if self._session is not None:
            logger.info("Logout: id=%d", self._session.user.id)
        self._session = None
        self._store.remove(SESSION_KEY)

    def resume_session(self) -> Session | None:
        """Rehydrate the persisted session on startup.

        A record that fails to decode is removed and the service stays
        anonymous; this is never fatal.
        """
        try:
            record = self._store.get_typed(SESSION_KEY, SESSION_ADAPTER)
        except StoreDecodeError as exc:
            logger.warning("Error parsing auth data, discarding session: %s", exc.message)
            self._store.remove(SESSION_KEY)
            self._session = None
            return None

        self._session = record.to_domain() if record is not None else None
        return self._session

    def has_permission(self, permission: Permission | str) -> bool:
        return resolve_permission(self._session, permission)

    def require(self, permission: Permission, action: str) -> Session:
        """Return the current session, or raise PermissionDeniedError before any mutation.

        `action` completes the user-facing sentence "You do not have permission to ...".
        """
        if self._session is None or not resolve_permission(self._session, permission):
            logger.info(
                "Permission denied: %s (%s) for %s",
                permission.value,
                action,
                self._session.user.username if self._session else "anonymous",
            )
            raise PermissionDeniedError(action)
        return self._session
