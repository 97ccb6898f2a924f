"""Repository interfaces for the Gatehouse domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from gatehouse.domain.repository.account import AccountRepository
from gatehouse.domain.repository.external_identity import ExternalIdentityRepository

__all__ = [
    "AccountRepository",
    "ExternalIdentityRepository",
]
