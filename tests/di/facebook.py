"""Mock Facebook providers for testing."""

from dishka import Scope, provide

from gatehouse.adapter.facebook.client import (
    FacebookTokenVerifier,
    MockFacebookTokenVerifier,
)
from gatehouse.util.di.infrastructure.facebook import FacebookProvider


class MockFacebookProvider(FacebookProvider):
    """Mock Facebook provider using mock token verifier."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_facebook_token_verifier(self) -> FacebookTokenVerifier:
        """Provide mock Facebook token verifier."""
        return MockFacebookTokenVerifier()
