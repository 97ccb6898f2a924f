"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from gatehouse.config import AuthSettings
from gatehouse.util.error import ConfigError


class TokenPayload(BaseModel):
    """JWT token payload."""

    sub: str
    iat: int
    exp: int


class JWTError(Exception):
    """JWT-related error."""

    pass


class JWTExpiredError(JWTError):
    """Signature verified but the token is past its expiry."""

    pass


def _secret(settings: AuthSettings) -> str:
    if not settings.jwt_secret:
        raise ConfigError("AUTH__JWT_SECRET must be set")
    return settings.jwt_secret


def create_token(
    subject: str, settings: AuthSettings, now: datetime | None = None
) -> str:
    """Create a signed token for a subject.

    Args:
        subject: Account ID the token asserts
        settings: Authentication settings
        now: Issuance time (defaults to the current UTC time)

    Returns:
        Encoded JWT token
    """
    issued_at = now or datetime.now(timezone.utc)
    expiry = issued_at + timedelta(seconds=settings.jwt_expiry_seconds)

    payload = {
        "sub": subject,
        "iat": int(issued_at.timestamp()),
        "exp": int(expiry.timestamp()),
    }

    return jwt.encode(payload, _secret(settings), algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTExpiredError: If the signature is valid but the token has expired
        JWTError: For any other verification failure
    """
    try:
        payload = jwt.decode(
            token,
            _secret(settings),
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "iat", "exp"]},
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTExpiredError("Token has expired")
    except (jwt.InvalidTokenError, ValueError, TypeError):
        raise JWTError("Invalid token")
