"""Pydantic schemas for the persisted account collection.

Stored under `{namespace}_users` as a JSON array:
  [{"id": 1, "username": "admin", "password": "admin123",
    "email": "admin@luxurydeals.com", "role": "admin",
    "createdAt": "2026-01-01T00:00:00.000Z"}]
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from src.ld_common.enums import Role
from src.ld_identity.domain.models import Account, AccountProfile


class AccountProfileRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    username: str
    email: str = ""
    role: Role
    created_at: str = Field(alias="createdAt")

    def to_domain(self) -> AccountProfile:
        return AccountProfile(
            id=self.id,
            username=self.username,
            email=self.email,
            role=self.role,
            created_at=self.created_at,
        )

    @classmethod
    def from_domain(cls, profile: AccountProfile) -> "AccountProfileRecord":
        return cls(
            id=profile.id,
            username=profile.username,
            email=profile.email,
            role=profile.role,
            created_at=profile.created_at,
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class AccountRecord(AccountProfileRecord):
    password: str

    def to_domain(self) -> Account:  # type: ignore[override]
        return Account(
            id=self.id,
            username=self.username,
            password=self.password,
            email=self.email,
            role=self.role,
            created_at=self.created_at,
        )

    @classmethod
    def from_domain(cls, account: Account) -> "AccountRecord":  # type: ignore[override]
        return cls(
            id=account.id,
            username=account.username,
            password=account.password,
            email=account.email,
            role=account.role,
            created_at=account.created_at,
        )


ACCOUNTS_ADAPTER: TypeAdapter[list[AccountRecord]] = TypeAdapter(list[AccountRecord])


class AccountUpdate(BaseModel):
    """Partial account edit. id and createdAt are not editable."""

    model_config = ConfigDict(extra="forbid")

    username: str | None = None
    password: str | None = None
    email: str | None = None
    role: Role | None = None
