"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository
from .external_identity import InMemoryExternalIdentityRepository

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryExternalIdentityRepository",
]
