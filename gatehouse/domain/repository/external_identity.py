"""External identity repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from gatehouse.domain.model.external_identity import ExternalIdentity
from gatehouse.domain.value import AccountId, AuthProvider


class ExternalIdentityRepository(ABC):
    """Repository for ExternalIdentity links.

    Implementations enforce uniqueness of (provider, provider_user_id).
    """

    @abstractmethod
    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[ExternalIdentity]:
        """Find a link by provider and provider subject id.

        Args:
            provider: The identity provider
            provider_user_id: The subject id on that provider

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_account_id(
        self, account_id: AccountId
    ) -> list[ExternalIdentity]:
        """Get all links of an account, oldest first.

        Not on any request path; tests and operators use it to inspect links.

        Args:
            account_id: The account's unique identifier

        Returns:
            List of links (may be empty)
        """
        pass

    @abstractmethod
    async def attach(self, identity: ExternalIdentity) -> ExternalIdentity:
        """Attach a link unless the (provider, provider_user_id) pair is taken.

        Args:
            identity: The link to attach

        Returns:
            The stored link. Its account_id differs from the argument's when
            another account already owns the pair.
        """
        pass

    @abstractmethod
    async def touch_last_login(
        self, provider: AuthProvider, provider_user_id: str, at: datetime
    ) -> None:
        """Refresh the last-login timestamp of an existing link.

        Args:
            provider: The identity provider
            provider_user_id: The subject id on that provider
            at: Login timestamp
        """
        pass
