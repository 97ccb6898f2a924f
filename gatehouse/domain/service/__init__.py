"""Domain services."""

from .auth_service import AuthService, OAuthVerifier
from .base import Service
from .identity_service import INVALID_CREDENTIALS, IdentityService
from .jwt_service import JWTService
from .password_service import PasswordService
from .session_service import SessionService

__all__ = [
    "AuthService",
    "IdentityService",
    "INVALID_CREDENTIALS",
    "JWTService",
    "OAuthVerifier",
    "PasswordService",
    "Service",
    "SessionService",
]
