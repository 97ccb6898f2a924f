"""Facebook OAuth adapter."""

from .client import (
    FacebookTokenVerifier,
    MockFacebookTokenVerifier,
    RealFacebookTokenVerifier,
)

__all__ = [
    "FacebookTokenVerifier",
    "RealFacebookTokenVerifier",
    "MockFacebookTokenVerifier",
]
