"""Google infrastructure providers."""

from dishka import Scope, provide

from gatehouse.adapter.google.client import (
    GoogleTokenVerifier,
    RealGoogleTokenVerifier,
)
from gatehouse.config import Settings
from gatehouse.util.di.base import ProviderBase


class GoogleProvider(ProviderBase):
    """Google component base."""

    __mock_component__ = "google"


class ProdGoogleProvider(GoogleProvider):
    """Production Google provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_google_token_verifier(self, settings: Settings) -> GoogleTokenVerifier:
        """Provide Google ID token verifier."""
        return RealGoogleTokenVerifier(
            tokeninfo_url=settings.oauth.google.tokeninfo_url,
            timeout=settings.oauth.timeout_seconds,
        )
