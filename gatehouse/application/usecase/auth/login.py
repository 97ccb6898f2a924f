"""Login use case."""

from pydantic import BaseModel

from gatehouse.application.usecase.auth.register import AuthResponse
from gatehouse.application.usecase.base import BaseUseCase
from gatehouse.domain.service import IdentityService, SessionService


class LoginRequest(BaseModel):
    """Local email/password login request."""

    email: str
    password: str


class LoginUseCase(BaseUseCase):
    """Use case for signing in with a local email/password pair."""

    def __init__(
        self, identity_service: IdentityService, session_service: SessionService
    ) -> None:
        """Initialize login use case.

        Args:
            identity_service: Identity domain service
            session_service: Session issuing domain service
        """
        self.identity_service = identity_service
        self.session_service = session_service

    async def execute(self, request: LoginRequest) -> AuthResponse:
        """Check credentials and issue a session.

        Raises:
            AuthenticationError: With the same message for every failure
        """
        account = await self.identity_service.authenticate(
            request.email, request.password
        )
        session = self.session_service.authenticate_response(account)
        return AuthResponse(token=session.token, user=session.user)
