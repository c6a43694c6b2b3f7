"""Domain models for ld_auth."""

from dataclasses import dataclass

from src.ld_identity.domain.models import AccountProfile


@dataclass
class Session:
    """The signed-in account for this browser profile. Never carries a password."""

    user: AccountProfile
