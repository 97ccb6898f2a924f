"""Domain model entities for Gatehouse."""

from gatehouse.domain.model.account import Account
from gatehouse.domain.model.external_identity import ExternalIdentity

__all__ = [
    "Account",
    "ExternalIdentity",
]
