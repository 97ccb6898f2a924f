"""Application layer DI providers."""

from dishka import Scope, provide

from gatehouse.application.usecase.account import (
    GetProfileUseCase,
    UpdateAvatarUseCase,
)
from gatehouse.application.usecase.auth import (
    LoginUseCase,
    OAuthLoginUseCase,
    RegisterUseCase,
    VerifyBearerUseCase,
)
from gatehouse.domain.service import (
    AuthService,
    IdentityService,
    JWTService,
    SessionService,
)
from gatehouse.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_register_use_case(
        self, identity_service: IdentityService, session_service: SessionService
    ) -> RegisterUseCase:
        """Provide register use case."""
        return RegisterUseCase(
            identity_service=identity_service, session_service=session_service
        )

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self, identity_service: IdentityService, session_service: SessionService
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            identity_service=identity_service, session_service=session_service
        )

    @provide(scope=Scope.REQUEST)
    def get_oauth_login_use_case(
        self,
        auth_service: AuthService,
        identity_service: IdentityService,
        session_service: SessionService,
    ) -> OAuthLoginUseCase:
        """Provide OAuth login use case."""
        return OAuthLoginUseCase(
            auth_service=auth_service,
            identity_service=identity_service,
            session_service=session_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_verify_bearer_use_case(self, jwt_service: JWTService) -> VerifyBearerUseCase:
        """Provide verify bearer use case."""
        return VerifyBearerUseCase(jwt_service=jwt_service)

    # Account use cases
    @provide(scope=Scope.REQUEST)
    def get_get_profile_use_case(
        self, identity_service: IdentityService, session_service: SessionService
    ) -> GetProfileUseCase:
        """Provide get profile use case."""
        return GetProfileUseCase(
            identity_service=identity_service, session_service=session_service
        )

    @provide(scope=Scope.REQUEST)
    def get_update_avatar_use_case(
        self, identity_service: IdentityService, session_service: SessionService
    ) -> UpdateAvatarUseCase:
        """Provide update avatar use case."""
        return UpdateAvatarUseCase(
            identity_service=identity_service, session_service=session_service
        )
