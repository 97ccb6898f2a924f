"""Mock providers for testing."""

from .facebook import MockFacebookProvider
from .google import MockGoogleProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockFacebookProvider",
    "MockGoogleProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
