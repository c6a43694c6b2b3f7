"""Domain models for ld_identity — pure dataclasses, no store dependency."""

from dataclasses import dataclass

from src.ld_common.enums import Role


@dataclass
class AccountProfile:
    """An account as shown to the UI and held by a session: no password."""

    id: int
    username: str
    email: str
    role: Role
    created_at: str              # ISO-8601 UTC, set once at creation


@dataclass
class Account:
    id: int
    username: str
    password: str                # plain text, compared verbatim (see DESIGN.md)
    email: str
    role: Role
    created_at: str

    def profile(self) -> AccountProfile:
        return AccountProfile(
            id=self.id,
            username=self.username,
            email=self.email,
            role=self.role,
            created_at=self.created_at,
        )
