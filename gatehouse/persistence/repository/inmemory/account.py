"""In-memory account repository for testing."""

from datetime import datetime
from typing import Optional

from gatehouse.domain.error import DatabaseError
from gatehouse.domain.model import Account
from gatehouse.domain.repository import AccountRepository, ExternalIdentityRepository
from gatehouse.domain.value import AccountId, AuthProvider, Email


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing.

    Provider lookups join through the identity repository it is given.
    """

    def __init__(
        self, identity_repository: ExternalIdentityRepository | None = None
    ) -> None:
        self._accounts: dict[AccountId, Account] = {}
        self._identity_repository = identity_repository

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID."""
        return self._accounts.get(account_id)

    async def find_by_email(self, email: Email) -> Optional[Account]:
        """Find an account by exact email."""
        for account in self._accounts.values():
            if account.email == email:
                return account
        return None

    async def find_by_provider_identity(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[Account]:
        """Find the account an external identity is linked to."""
        if self._identity_repository is None:
            return None
        identity = await self._identity_repository.find_by_provider(
            provider, provider_user_id
        )
        if identity is None:
            return None
        return self._accounts.get(identity.account_id)

    async def insert(self, account: Account) -> Account:
        """Insert an account, enforcing unique id and email."""
        if account.id in self._accounts or await self.find_by_email(account.email):
            raise DatabaseError("Conflicting write, please retry")
        self._accounts[account.id] = account
        return account

    async def insert_or_get_by_email(self, account: Account) -> tuple[Account, bool]:
        """Insert an account unless its email is taken."""
        existing = await self.find_by_email(account.email)
        if existing:
            return existing, False
        self._accounts[account.id] = account
        return account, True

    async def update_profile(
        self, account_id: AccountId, avatar_url: str, updated_at: datetime
    ) -> Optional[Account]:
        """Update an account's avatar."""
        account = self._accounts.get(account_id)
        if account is None:
            return None
        updated = account.model_copy(
            update={"avatar_url": avatar_url, "updated_at": updated_at}
        )
        self._accounts[account_id] = updated
        return updated

    async def delete(self, account_id: AccountId) -> None:
        """Delete an account."""
        self._accounts.pop(account_id, None)

    async def count(self) -> int:
        """Number of stored accounts, for test assertions."""
        return len(self._accounts)
