"""External identity entity.

Links one (provider, provider subject id) pair to an account.
"""

from datetime import datetime, timezone

from pydantic import Field

from gatehouse.domain.model.common import DomainModel
from gatehouse.domain.value import AccountId, AuthProvider, ExternalIdentityId


class ExternalIdentity(DomainModel):
    """External authentication identity linked to an account.

    The (provider, provider_user_id) pair resolves to at most one account.
    Owned by the account; refreshed on every login, never re-created.
    """

    id: ExternalIdentityId
    account_id: AccountId
    provider: AuthProvider
    provider_user_id: str
    last_login_at: datetime
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
