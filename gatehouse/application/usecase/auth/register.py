"""Register use case."""

from pydantic import BaseModel

from gatehouse.application.usecase.base import BaseUseCase
from gatehouse.domain.service import IdentityService, SessionService
from gatehouse.domain.value import PublicAccount


class RegisterRequest(BaseModel):
    """Local account registration request."""

    email: str
    password: str


class AuthResponse(BaseModel):
    """Token plus public account view returned by every sign-in path."""

    token: str
    user: PublicAccount


class RegisterUseCase(BaseUseCase):
    """Use case for creating a local email/password account."""

    def __init__(
        self, identity_service: IdentityService, session_service: SessionService
    ) -> None:
        """Initialize register use case.

        Args:
            identity_service: Identity domain service
            session_service: Session issuing domain service
        """
        self.identity_service = identity_service
        self.session_service = session_service

    async def execute(self, request: RegisterRequest) -> AuthResponse:
        """Register and sign in.

        Args:
            request: Email and password

        Returns:
            Session for the new account

        Raises:
            ValidationError: If the email is malformed or taken, or the
                password is too short
        """
        account = await self.identity_service.register(request.email, request.password)
        session = self.session_service.authenticate_response(account)
        return AuthResponse(token=session.token, user=session.user)
