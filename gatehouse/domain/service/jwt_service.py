"""JWT token domain service."""

from uuid import UUID

import logfire

from gatehouse.config import AuthSettings
from gatehouse.domain.error import InvalidTokenError, TokenExpiredError
from gatehouse.domain.value import AccountId, TokenClaims
from gatehouse.util.error import ConfigError
from gatehouse.util.jwt import JWTError, JWTExpiredError, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for session token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings

        Raises:
            ConfigError: If no signing secret is configured
        """
        if not auth_settings.jwt_secret:
            raise ConfigError("AUTH__JWT_SECRET must be set")
        self.auth_settings = auth_settings

    def issue(self, account_id: AccountId) -> str:
        """Issue a session token for an account.

        Args:
            account_id: Account the token asserts

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.issue", account_id=str(account_id)):
            token = create_token(str(account_id), self.auth_settings)
            logfire.info("Session token issued", account_id=str(account_id))
            return token

    def verify(self, token: str) -> TokenClaims:
        """Verify a session token and extract its claims.

        Args:
            token: JWT token string

        Returns:
            Verified claims

        Raises:
            TokenExpiredError: If the token is past its expiry
            InvalidTokenError: For any other verification failure
        """
        with logfire.span("jwt_service.verify"):
            try:
                payload = verify_token(token, self.auth_settings)
                subject = AccountId(UUID(payload.sub))
            except JWTExpiredError:
                logfire.info("Session token expired")
                raise TokenExpiredError()
            except (JWTError, ValueError) as e:
                logfire.warn("Session token rejected", error=str(e))
                raise InvalidTokenError()

            return TokenClaims(
                subject=subject, issued_at=payload.iat, expires_at=payload.exp
            )

    def get_account_id(self, token: str) -> AccountId:
        """Verify a token and return its subject.

        Args:
            token: JWT token string

        Returns:
            Account ID the token was issued for
        """
        return self.verify(token).subject
