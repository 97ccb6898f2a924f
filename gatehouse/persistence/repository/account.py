"""PostgreSQL implementation of Account repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from gatehouse.domain.error import DatabaseError
from gatehouse.domain.model import Account
from gatehouse.domain.repository import AccountRepository
from gatehouse.domain.value import AccountId, AuthProvider, Email
from gatehouse.persistence.database import database_errors
from gatehouse.persistence.mappers import account_to_dict, row_to_account
from gatehouse.persistence.tables import accounts_table, external_identities_table


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: Account ID to look up

        Returns:
            Account if found, None otherwise
        """
        stmt = select(accounts_table).where(accounts_table.c.id == account_id)
        with database_errors("account.find_by_id"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def find_by_email(self, email: Email) -> Optional[Account]:
        """Find an account by email.

        Args:
            email: Email to search for (exact match)

        Returns:
            Account if found, None otherwise
        """
        stmt = select(accounts_table).where(accounts_table.c.email == email.root)
        with database_errors("account.find_by_email"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def find_by_provider_identity(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[Account]:
        """Find the account an external identity is linked to.

        Joins external_identities and accounts.

        Args:
            provider: The identity provider
            provider_user_id: The subject id on that provider

        Returns:
            Account if found, None otherwise
        """
        stmt = (
            select(accounts_table)
            .select_from(
                accounts_table.join(
                    external_identities_table,
                    accounts_table.c.id == external_identities_table.c.account_id,
                )
            )
            .where(external_identities_table.c.provider == provider.value)
            .where(external_identities_table.c.provider_user_id == provider_user_id)
        )
        with database_errors("account.find_by_provider_identity"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def insert(self, account: Account) -> Account:
        """Insert a new account.

        Args:
            account: Account to insert

        Returns:
            Inserted account

        Raises:
            DatabaseError: If the email is already taken
        """
        stmt = accounts_table.insert().values(**account_to_dict(account))
        with database_errors("account.insert"):
            await self.session.execute(stmt)
            await self.session.flush()
        return account

    async def insert_or_get_by_email(self, account: Account) -> tuple[Account, bool]:
        """Insert an account, or fetch the one already holding its email.

        Uses ``ON CONFLICT DO NOTHING`` on the email unique index, so a
        concurrent insert for the same email blocks until the other
        transaction finishes and then yields its row.

        Args:
            account: Account to insert

        Returns:
            Tuple of (stored account, whether this call created it)
        """
        stmt = (
            pg_insert(accounts_table)
            .values(**account_to_dict(account))
            .on_conflict_do_nothing(index_elements=[accounts_table.c.email])
            .returning(*accounts_table.c)
        )
        with database_errors("account.insert_or_get_by_email"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            await self.session.flush()

        if row:
            return row_to_account(dict(row)), True

        existing = await self.find_by_email(account.email)
        if existing is None:
            raise DatabaseError("Conflicting write, please retry")
        return existing, False

    async def update_profile(
        self, account_id: AccountId, avatar_url: str, updated_at: datetime
    ) -> Optional[Account]:
        """Update mutable profile fields of an account.

        Args:
            account_id: Account to update
            avatar_url: New avatar URL
            updated_at: Modification timestamp

        Returns:
            Updated account, or None if it does not exist
        """
        stmt = (
            accounts_table.update()
            .where(accounts_table.c.id == account_id)
            .values(avatar_url=avatar_url, updated_at=updated_at)
            .returning(*accounts_table.c)
        )
        with database_errors("account.update_profile"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            await self.session.flush()
        return row_to_account(dict(row)) if row else None

    async def delete(self, account_id: AccountId) -> None:
        """Delete an account row.

        Args:
            account_id: Account to delete
        """
        stmt = accounts_table.delete().where(accounts_table.c.id == account_id)
        with database_errors("account.delete"):
            await self.session.execute(stmt)
            await self.session.flush()
