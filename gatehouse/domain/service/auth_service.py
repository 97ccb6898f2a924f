"""External authentication domain service."""

import logfire

from gatehouse.domain.error import ValidationError
from gatehouse.domain.value import AuthProvider, ExternalProfile

from .base import Service


class OAuthVerifier:
    """Generic token verifier interface for all identity providers.

    Each call makes exactly one outbound request and never retries.
    """

    async def verify(self, token: str) -> ExternalProfile:
        """Exchange a provider token for a normalized profile.

        Args:
            token: ID token or access token issued by the provider

        Returns:
            Normalized external profile

        Raises:
            AuthenticationError: If the provider rejects or cannot vouch for
                the token
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service dispatching external tokens to provider verifiers."""

    def __init__(self, oauth_verifiers: dict[AuthProvider, OAuthVerifier]) -> None:
        """Initialize auth service.

        Args:
            oauth_verifiers: Map of provider to verifier implementation
        """
        self.oauth_verifiers = oauth_verifiers

    def resolve_provider(self, provider_name: str) -> AuthProvider:
        """Map a provider name from a request to a supported provider.

        Args:
            provider_name: Provider tag, e.g. "google"

        Returns:
            The matching provider

        Raises:
            ValidationError: If the provider is not supported
        """
        try:
            provider = AuthProvider(provider_name)
        except ValueError:
            raise ValidationError(f"Unsupported OAuth provider: {provider_name}")
        if provider not in self.oauth_verifiers:
            raise ValidationError(f"Unsupported OAuth provider: {provider_name}")
        return provider

    async def verify_external_token(
        self, provider: AuthProvider, token: str
    ) -> ExternalProfile:
        """Verify a provider token and return the normalized profile.

        Args:
            provider: Provider that issued the token
            token: Provider token

        Returns:
            Normalized external profile

        Raises:
            ValidationError: If provider not supported
            AuthenticationError: If verification fails
        """
        verifier = self.oauth_verifiers.get(provider)
        if not verifier:
            raise ValidationError(f"Unsupported OAuth provider: {provider.value}")

        with logfire.span("auth_service.verify_external_token", provider=provider.value):
            profile = await verifier.verify(token)
            logfire.info(
                "External token verified",
                provider=provider.value,
                provider_user_id=profile.provider_user_id,
            )
            return profile
