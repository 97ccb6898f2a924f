"""ExternalIdentity repository implementation using PostgreSQL."""

from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from gatehouse.domain.error import DatabaseError
from gatehouse.domain.model import ExternalIdentity
from gatehouse.domain.repository import ExternalIdentityRepository
from gatehouse.domain.value import AccountId, AuthProvider
from gatehouse.persistence.database import database_errors
from gatehouse.persistence.mappers import (
    external_identity_to_dict,
    row_to_external_identity,
)
from gatehouse.persistence.tables import external_identities_table


class PostgresExternalIdentityRepository(ExternalIdentityRepository):
    """PostgreSQL implementation of ExternalIdentityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[ExternalIdentity]:
        """Get link by provider and provider subject id.

        Args:
            provider: Identity provider
            provider_user_id: Provider-specific subject id

        Returns:
            ExternalIdentity if found, None otherwise
        """
        stmt = select(external_identities_table).where(
            external_identities_table.c.provider == provider.value,
            external_identities_table.c.provider_user_id == provider_user_id,
        )
        with database_errors("external_identity.find_by_provider"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_external_identity(dict(row)) if row else None

    async def find_all_by_account_id(
        self, account_id: AccountId
    ) -> list[ExternalIdentity]:
        """Find all links for an account.

        Args:
            account_id: Account ID to find links for

        Returns:
            List of ExternalIdentity objects (may be empty)
        """
        stmt = (
            select(external_identities_table)
            .where(external_identities_table.c.account_id == account_id)
            .order_by(external_identities_table.c.created_at)
        )
        with database_errors("external_identity.find_all_by_account_id"):
            result = await self.session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_external_identity(dict(row)) for row in rows]

    async def attach(self, identity: ExternalIdentity) -> ExternalIdentity:
        """Insert a link, or fetch the one already holding its provider pair.

        Args:
            identity: Link to attach

        Returns:
            Stored link
        """
        stmt = (
            pg_insert(external_identities_table)
            .values(**external_identity_to_dict(identity))
            .on_conflict_do_nothing(
                index_elements=[
                    external_identities_table.c.provider,
                    external_identities_table.c.provider_user_id,
                ]
            )
            .returning(*external_identities_table.c)
        )
        with database_errors("external_identity.attach"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            await self.session.flush()

        if row:
            return row_to_external_identity(dict(row))

        existing = await self.find_by_provider(
            identity.provider, identity.provider_user_id
        )
        if existing is None:
            raise DatabaseError("Conflicting write, please retry")
        return existing

    async def touch_last_login(
        self, provider: AuthProvider, provider_user_id: str, at: datetime
    ) -> None:
        """Refresh the last-login timestamp of a link.

        Args:
            provider: Identity provider
            provider_user_id: Provider-specific subject id
            at: Login timestamp
        """
        stmt = (
            external_identities_table.update()
            .where(external_identities_table.c.provider == provider.value)
            .where(external_identities_table.c.provider_user_id == provider_user_id)
            .values(last_login_at=at)
        )
        with database_errors("external_identity.touch_last_login"):
            await self.session.execute(stmt)
            await self.session.flush()
