"""Authentication use cases."""

from .login import LoginUseCase
from .oauth_login import OAuthLoginUseCase
from .register import RegisterUseCase
from .verify_bearer import VerifyBearerUseCase

__all__ = [
    "LoginUseCase",
    "OAuthLoginUseCase",
    "RegisterUseCase",
    "VerifyBearerUseCase",
]
