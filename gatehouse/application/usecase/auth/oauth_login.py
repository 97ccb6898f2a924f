"""OAuth login use case."""

import logfire
from pydantic import BaseModel

from gatehouse.application.usecase.auth.register import AuthResponse
from gatehouse.application.usecase.base import BaseUseCase
from gatehouse.domain.service import AuthService, IdentityService, SessionService


class OAuthLoginRequest(BaseModel):
    """Sign-in with a token issued by an external provider."""

    provider: str  # Provider tag, e.g. "google" or "facebook"
    token: str  # Google ID token or Facebook access token


class OAuthLoginResponse(AuthResponse):
    """OAuth login response."""

    created: bool  # Whether this login created the account


class OAuthLoginUseCase(BaseUseCase):
    """Use case for multi-provider login via provider tokens."""

    def __init__(
        self,
        auth_service: AuthService,
        identity_service: IdentityService,
        session_service: SessionService,
    ) -> None:
        """Initialize OAuth login use case.

        Args:
            auth_service: Provider dispatch domain service
            identity_service: Identity domain service
            session_service: Session issuing domain service
        """
        self.auth_service = auth_service
        self.identity_service = identity_service
        self.session_service = session_service

    async def execute(self, request: OAuthLoginRequest) -> OAuthLoginResponse:
        """Execute OAuth login flow.

        Steps:
        1. Resolve the provider tag
        2. Verify the token with the provider and normalize the profile
        3. Settle the profile on one account (existing, linked or new)
        4. Issue a session

        Args:
            request: Provider tag and provider token

        Returns:
            Session plus whether the account was created

        Raises:
            ValidationError: If the provider is not supported
            AuthenticationError: If the provider cannot vouch for the token
            DatabaseError: If persistence fails; safe to retry
        """
        provider = self.auth_service.resolve_provider(request.provider)
        profile = await self.auth_service.verify_external_token(provider, request.token)

        with logfire.span("oauth_login", provider=provider.value):
            account, created = await self.identity_service.resolve_external(profile)
            session = self.session_service.authenticate_response(account)

        return OAuthLoginResponse(token=session.token, user=session.user, created=created)
