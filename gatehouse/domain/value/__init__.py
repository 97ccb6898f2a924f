"""Domain value objects for Gatehouse."""

from gatehouse.domain.value.identifiers import AccountId, ExternalIdentityId
from gatehouse.domain.value.types import (
    AuthProvider,
    AuthSession,
    Email,
    ExternalProfile,
    PublicAccount,
    TokenClaims,
)

__all__ = [
    # Identifiers
    "AccountId",
    "ExternalIdentityId",
    # Types
    "AuthProvider",
    "AuthSession",
    "Email",
    "ExternalProfile",
    "PublicAccount",
    "TokenClaims",
]
