"""Unit tests for AuthService."""

from dishka import AsyncContainer
import pytest

from gatehouse.adapter.google.client import MockGoogleTokenVerifier
from gatehouse.domain.error import AuthenticationError, ValidationError
from gatehouse.domain.service import AuthService
from gatehouse.domain.value import AuthProvider
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestAuthService:
    """Tests for AuthService."""

    @pytest.mark.asyncio
    async def test_resolve_known_providers(self, unit_env: AsyncContainer):
        """Both configured providers resolve from their tags."""
        auth_service = await unit_env.get(AuthService)

        assert auth_service.resolve_provider("google") == AuthProvider.GOOGLE
        assert auth_service.resolve_provider("facebook") == AuthProvider.FACEBOOK

    @pytest.mark.asyncio
    async def test_resolve_unknown_provider(self, unit_env: AsyncContainer):
        """Unknown tags are a validation error naming the provider."""
        auth_service = await unit_env.get(AuthService)

        with pytest.raises(ValidationError, match="Unsupported OAuth provider: github"):
            auth_service.resolve_provider("github")

    def test_resolve_unconfigured_provider(self):
        """A known tag without a verifier is unsupported."""
        auth_service = AuthService(
            oauth_verifiers={AuthProvider.GOOGLE: MockGoogleTokenVerifier()}
        )

        with pytest.raises(ValidationError):
            auth_service.resolve_provider("facebook")

    @pytest.mark.asyncio
    async def test_dispatches_to_provider_verifier(self, unit_env: AsyncContainer):
        """Each provider's token goes to that provider's verifier."""
        auth_service = await unit_env.get(AuthService)

        google = await auth_service.verify_external_token(AuthProvider.GOOGLE, "t")
        facebook = await auth_service.verify_external_token(AuthProvider.FACEBOOK, "t")

        assert google.provider == AuthProvider.GOOGLE
        assert google.provider_user_id == "mockgoogle123"
        assert facebook.provider == AuthProvider.FACEBOOK
        assert facebook.provider_user_id == "mockfacebook123"

    @pytest.mark.asyncio
    async def test_rejected_token(self, unit_env: AsyncContainer):
        """Verifier rejections propagate as authentication errors."""
        auth_service = await unit_env.get(AuthService)

        with pytest.raises(AuthenticationError):
            await auth_service.verify_external_token(AuthProvider.GOOGLE, "invalid")
