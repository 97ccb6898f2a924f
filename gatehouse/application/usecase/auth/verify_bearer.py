"""Verify bearer token use case."""

from pydantic import BaseModel

from gatehouse.application.usecase.base import BaseUseCase
from gatehouse.domain.error import AuthenticationError
from gatehouse.domain.service import JWTService
from gatehouse.domain.value import AccountId


class VerifyBearerRequest(BaseModel):
    """Raw ``Authorization`` header value."""

    authorization: str | None = None


class VerifyBearerUseCase(BaseUseCase):
    """Use case for authorizing a request by its bearer token."""

    def __init__(self, jwt_service: JWTService) -> None:
        self.jwt_service = jwt_service

    async def execute(self, request: VerifyBearerRequest) -> AccountId:
        """Return the account a bearer token was issued for.

        Raises:
            AuthenticationError: If the header is missing or malformed
            TokenExpiredError: If the token has expired
            InvalidTokenError: If the token fails verification
        """
        header = request.authorization or ""
        scheme, _, token = header.partition(" ")
        if scheme != "Bearer" or not token.strip():
            raise AuthenticationError("Missing bearer token")
        return self.jwt_service.get_account_id(token.strip())
