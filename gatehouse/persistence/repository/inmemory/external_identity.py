"""In-memory external identity repository for testing."""

from datetime import datetime
from typing import Optional

from gatehouse.domain.model import ExternalIdentity
from gatehouse.domain.repository import ExternalIdentityRepository
from gatehouse.domain.value import AccountId, AuthProvider


class InMemoryExternalIdentityRepository(ExternalIdentityRepository):
    """In-memory implementation of ExternalIdentityRepository for testing."""

    def __init__(self) -> None:
        self._identities: list[ExternalIdentity] = []

    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[ExternalIdentity]:
        """Find link by provider and provider subject id."""
        for identity in self._identities:
            if (
                identity.provider == provider
                and identity.provider_user_id == provider_user_id
            ):
                return identity
        return None

    async def find_all_by_account_id(
        self, account_id: AccountId
    ) -> list[ExternalIdentity]:
        """Find all links for an account."""
        matches = [i for i in self._identities if i.account_id == account_id]
        matches.sort(key=lambda i: i.created_at)
        return matches

    async def attach(self, identity: ExternalIdentity) -> ExternalIdentity:
        """Attach a link unless its provider pair is taken."""
        existing = await self.find_by_provider(
            identity.provider, identity.provider_user_id
        )
        if existing:
            return existing
        self._identities.append(identity)
        return identity

    async def touch_last_login(
        self, provider: AuthProvider, provider_user_id: str, at: datetime
    ) -> None:
        """Refresh a link's last-login timestamp."""
        for i, identity in enumerate(self._identities):
            if (
                identity.provider == provider
                and identity.provider_user_id == provider_user_id
            ):
                self._identities[i] = identity.model_copy(update={"last_login_at": at})
                return
