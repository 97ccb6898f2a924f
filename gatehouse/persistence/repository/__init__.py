"""PostgreSQL repository implementations."""

from gatehouse.persistence.repository.account import PostgresAccountRepository
from gatehouse.persistence.repository.external_identity import (
    PostgresExternalIdentityRepository,
)

__all__ = [
    "PostgresAccountRepository",
    "PostgresExternalIdentityRepository",
]
