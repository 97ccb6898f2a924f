"""Account repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from gatehouse.domain.model.account import Account
from gatehouse.domain.value import AccountId, AuthProvider, Email


class AccountRepository(ABC):
    """Repository for the Account aggregate.

    Implementations enforce email uniqueness at the storage layer and raise
    DatabaseError when storage is unavailable or a constraint is violated.
    """

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Optional[Account]:
        """Find an account by exact (case-sensitive) email.

        Args:
            email: The account's email address

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider_identity(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[Account]:
        """Find the account an external identity is linked to.

        Args:
            provider: The identity provider
            provider_user_id: The subject id on that provider

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert(self, account: Account) -> Account:
        """Insert a new account.

        Args:
            account: The account to insert

        Returns:
            The inserted account

        Raises:
            DatabaseError: If the email is already taken
        """
        pass

    @abstractmethod
    async def insert_or_get_by_email(self, account: Account) -> tuple[Account, bool]:
        """Insert an account unless one with the same email already exists.

        Atomic with respect to the email unique index, so concurrent callers
        converge on a single row.

        Args:
            account: The account to insert

        Returns:
            Tuple of (stored account, whether this call created it)
        """
        pass

    @abstractmethod
    async def update_profile(
        self, account_id: AccountId, avatar_url: str, updated_at: datetime
    ) -> Optional[Account]:
        """Update mutable profile fields of an account.

        Args:
            account_id: The account to update
            avatar_url: New avatar URL
            updated_at: Modification timestamp

        Returns:
            The updated account, or None if it does not exist
        """
        pass

    @abstractmethod
    async def delete(self, account_id: AccountId) -> None:
        """Delete an account that has no links.

        Args:
            account_id: The account to delete
        """
        pass
