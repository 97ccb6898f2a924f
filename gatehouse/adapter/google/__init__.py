"""Google OAuth adapter."""

from .client import (
    GoogleTokenVerifier,
    MockGoogleTokenVerifier,
    RealGoogleTokenVerifier,
)

__all__ = ["GoogleTokenVerifier", "RealGoogleTokenVerifier", "MockGoogleTokenVerifier"]
