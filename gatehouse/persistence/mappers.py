"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from gatehouse.domain.model import Account, ExternalIdentity
from gatehouse.domain.value import (
    AccountId,
    AuthProvider,
    Email,
    ExternalIdentityId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model.

    Args:
        row: Database row as dict

    Returns:
        Account domain model
    """
    return Account(
        id=AccountId(_uuid(row["id"])),
        email=Email(row["email"]),
        password_hash=row.get("password_hash"),
        display_name=row.get("display_name"),
        avatar_url=row.get("avatar_url"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict.

    Args:
        account: Account domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return account.model_dump()


def row_to_external_identity(row: Dict[str, Any]) -> ExternalIdentity:
    """Convert database row to ExternalIdentity domain model.

    Args:
        row: Database row as dict

    Returns:
        ExternalIdentity domain model
    """
    return ExternalIdentity(
        id=ExternalIdentityId(_uuid(row["id"])),
        account_id=AccountId(_uuid(row["account_id"])),
        provider=AuthProvider(row["provider"]),
        provider_user_id=row["provider_user_id"],
        last_login_at=row["last_login_at"],
        created_at=row["created_at"],
    )


def external_identity_to_dict(identity: ExternalIdentity) -> Dict[str, Any]:
    """Convert ExternalIdentity domain model to database dict.

    Args:
        identity: ExternalIdentity domain model

    Returns:
        Dict suitable for database insertion
    """
    data = identity.model_dump()
    data["provider"] = identity.provider.value
    return data
