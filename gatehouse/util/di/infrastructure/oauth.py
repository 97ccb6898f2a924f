"""OAuth infrastructure provider for multi-provider authentication."""

from dishka import Scope, provide

from gatehouse.adapter.facebook.client import FacebookTokenVerifier
from gatehouse.adapter.google.client import GoogleTokenVerifier
from gatehouse.domain.service.auth_service import OAuthVerifier
from gatehouse.domain.value import AuthProvider
from gatehouse.util.di.base import ProviderBase


class OAuthAggregatorProvider(ProviderBase):
    """Provider that aggregates all token verifiers into a dictionary."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_oauth_verifiers(
        self,
        google_token_verifier: GoogleTokenVerifier,
        facebook_token_verifier: FacebookTokenVerifier,
    ) -> dict[AuthProvider, OAuthVerifier]:
        """Provide dictionary of all token verifiers by provider.

        Adding a provider means adding a verifier here and a tag to AuthProvider.

        Args:
            google_token_verifier: Google ID token verifier
            facebook_token_verifier: Facebook access token verifier

        Returns:
            Dictionary mapping AuthProvider to OAuthVerifier
        """
        return {
            AuthProvider.GOOGLE: google_token_verifier,
            AuthProvider.FACEBOOK: facebook_token_verifier,
        }
