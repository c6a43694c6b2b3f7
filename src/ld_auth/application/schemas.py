"""Pydantic schema for the persisted session record.

Stored under `{namespace}_auth`:
  {"user": {"id": 1, "username": "admin", "email": "...", "role": "admin",
            "createdAt": "..."}}
A password key in a stored record is ignored on read and never written.
"""

from typing import Any

from pydantic import BaseModel, TypeAdapter

from src.ld_auth.domain.models import Session
from src.ld_identity.application.schemas import AccountProfileRecord


class SessionRecord(BaseModel):
    user: AccountProfileRecord

    def to_domain(self) -> Session:
        return Session(user=self.user.to_domain())

    @classmethod
    def from_domain(cls, session: Session) -> "SessionRecord":
        return cls(user=AccountProfileRecord.from_domain(session.user))

    def to_json(self) -> dict[str, Any]:
        return {"user": self.user.to_json()}


SESSION_ADAPTER: TypeAdapter[SessionRecord] = TypeAdapter(SessionRecord)
