"""Domain layer DI providers."""

from dishka import Scope, provide

from gatehouse.config import AuthSettings
from gatehouse.domain.repository import AccountRepository, ExternalIdentityRepository
from gatehouse.domain.service import (
    AuthService,
    IdentityService,
    JWTService,
    OAuthVerifier,
    PasswordService,
    SessionService,
)
from gatehouse.domain.value import AuthProvider
from gatehouse.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_password_service(self) -> PasswordService:
        """Provide password hashing service.

        Stateless, so one instance serves the whole process.
        """
        return PasswordService()

    @provide
    def get_auth_service(
        self, oauth_verifiers: dict[AuthProvider, OAuthVerifier]
    ) -> AuthService:
        """Provide multi-provider authentication domain service.

        Args:
            oauth_verifiers: Dictionary mapping providers to their token verifiers

        Returns:
            AuthService configured with all available verifiers
        """
        return AuthService(oauth_verifiers=oauth_verifiers)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_session_service(
        self, jwt_service: JWTService, auth_settings: AuthSettings
    ) -> SessionService:
        """Provide session issuing domain service."""
        return SessionService(
            jwt_service=jwt_service,
            default_avatar_url=auth_settings.default_avatar_url,
        )

    @provide
    def get_identity_service(
        self,
        account_repository: AccountRepository,
        external_identity_repository: ExternalIdentityRepository,
        password_service: PasswordService,
        auth_settings: AuthSettings,
    ) -> IdentityService:
        """Provide identity domain service."""
        return IdentityService(
            account_repository=account_repository,
            external_identity_repository=external_identity_repository,
            password_service=password_service,
            min_password_length=auth_settings.min_password_length,
        )
