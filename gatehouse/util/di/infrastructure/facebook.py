"""Facebook infrastructure providers."""

from dishka import Scope, provide

from gatehouse.adapter.facebook.client import (
    FacebookTokenVerifier,
    RealFacebookTokenVerifier,
)
from gatehouse.config import Settings
from gatehouse.util.di.base import ProviderBase


class FacebookProvider(ProviderBase):
    """Facebook component base."""

    __mock_component__ = "facebook"


class ProdFacebookProvider(FacebookProvider):
    """Production Facebook provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_facebook_token_verifier(self, settings: Settings) -> FacebookTokenVerifier:
        """Provide Facebook access token verifier."""
        return RealFacebookTokenVerifier(
            graph_url=settings.oauth.facebook.graph_url,
            fields=settings.oauth.facebook.fields,
            timeout=settings.oauth.timeout_seconds,
        )
