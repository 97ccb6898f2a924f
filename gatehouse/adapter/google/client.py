"""Google ID token verifier.

Forwards the ID token to Google's tokeninfo endpoint and normalizes the
response. Unverified emails are rejected: they must never drive linking.
"""

import httpx
import logfire

from gatehouse.domain.error import AuthenticationError
from gatehouse.domain.service.auth_service import OAuthVerifier
from gatehouse.domain.value import AuthProvider, ExternalProfile


class GoogleTokenVerifier(OAuthVerifier):
    """Base class for Google verifiers.

    Provides type distinction for dependency injection.
    """

    pass


class RealGoogleTokenVerifier(GoogleTokenVerifier):
    """Verifies Google ID tokens against the tokeninfo endpoint."""

    def __init__(self, tokeninfo_url: str, timeout: float = 10.0) -> None:
        """Initialize Google verifier.

        Args:
            tokeninfo_url: Google token-introspection endpoint
            timeout: Seconds to wait for Google before giving up
        """
        self.tokeninfo_url = tokeninfo_url
        self.timeout = timeout

    async def verify(self, token: str) -> ExternalProfile:
        """Verify a Google ID token.

        Args:
            token: Google ID token

        Returns:
            Normalized profile

        Raises:
            AuthenticationError: If Google rejects the token, is unreachable,
                or reports the email as unverified
        """
        user_info = await self._get_token_info(token)

        sub = user_info.get("sub")
        email = user_info.get("email")
        if not sub or not email:
            logfire.warn("Google tokeninfo missing sub or email")
            raise AuthenticationError("Google token verification failed")

        if not _is_verified(user_info.get("email_verified")):
            logfire.warn("Google email not verified", provider_user_id=sub)
            raise AuthenticationError("Google email is not verified")

        logfire.info("Google token verified", provider_user_id=sub)

        return ExternalProfile(
            provider=AuthProvider.GOOGLE,
            provider_user_id=str(sub),
            email=email,
            display_name=user_info.get("name"),
            avatar_url=user_info.get("picture"),
        )

    async def _get_token_info(self, token: str) -> dict:
        """Call the tokeninfo endpoint.

        Args:
            token: Google ID token

        Returns:
            Decoded JSON body

        Raises:
            AuthenticationError: If the request fails or is rejected
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.tokeninfo_url,
                    params={"id_token": token},
                    timeout=self.timeout,
                )

                if not response.is_success:
                    logfire.warn(
                        "Google token verification rejected",
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise AuthenticationError("Google token verification failed")

                result = response.json()

        except httpx.TimeoutException:
            logfire.error("Google tokeninfo timed out", timeout=self.timeout)
            raise AuthenticationError("Google token verification timed out")
        except httpx.HTTPError as e:
            logfire.error("Google tokeninfo HTTP error", error=str(e))
            raise AuthenticationError("Google token verification failed")
        except ValueError as e:
            logfire.error("Google tokeninfo returned invalid JSON", error=str(e))
            raise AuthenticationError("Google token verification failed")

        if not isinstance(result, dict):
            raise AuthenticationError("Google token verification failed")
        return result


def _is_verified(value: object) -> bool:
    """Interpret ``email_verified``; tokeninfo sends it as a string."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.lower() == "true"
    return bool(value)


class MockGoogleTokenVerifier(GoogleTokenVerifier):
    """Mock Google verifier for testing.

    Returns deterministic test data without making real API calls.
    Tokens listed in ``profiles`` map to their own profile; the token
    ``"invalid"`` is rejected.
    """

    def __init__(self, profiles: dict[str, ExternalProfile] | None = None):
        self.profiles = profiles or {}

    async def verify(self, token: str) -> ExternalProfile:
        """Return mock profile for a token."""
        if token == "invalid":
            raise AuthenticationError("Google token verification failed")
        if token in self.profiles:
            return self.profiles[token]
        return ExternalProfile(
            provider=AuthProvider.GOOGLE,
            provider_user_id="mockgoogle123",
            email="mock@gmail.com",
            display_name="Mock Google User",
            avatar_url="https://example.com/google-avatar.jpg",
        )
