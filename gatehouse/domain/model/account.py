"""Account aggregate root.

An account is reachable through a local email/password pair, through any
number of linked external identities, or both.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from gatehouse.domain.model.common import DomainModel
from gatehouse.domain.value import AccountId, Email


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Account(DomainModel):
    """Durable identity record.

    Email is unique across all accounts. An account without a password hash
    must have at least one linked external identity.
    """

    id: AccountId
    email: Email
    password_hash: Optional[str] = None  # Absent for OAuth-only accounts
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @property
    def has_password(self) -> bool:
        """Whether the account can sign in with a local password."""
        return self.password_hash is not None
