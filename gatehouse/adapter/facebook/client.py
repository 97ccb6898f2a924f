"""Facebook access token verifier.

Reads the profile behind an access token from the Graph API. Accounts that
do not share an email cannot be linked and are rejected.
"""

import httpx
import logfire

from gatehouse.domain.error import AuthenticationError
from gatehouse.domain.service.auth_service import OAuthVerifier
from gatehouse.domain.value import AuthProvider, ExternalProfile


class FacebookTokenVerifier(OAuthVerifier):
    """Base class for Facebook verifiers.

    Provides type distinction for dependency injection.
    """

    pass


class RealFacebookTokenVerifier(FacebookTokenVerifier):
    """Verifies Facebook access tokens against the Graph profile endpoint."""

    def __init__(
        self, graph_url: str, fields: str = "id,name,email,picture", timeout: float = 10.0
    ) -> None:
        """Initialize Facebook verifier.

        Args:
            graph_url: Graph API profile endpoint
            fields: Profile fields to request
            timeout: Seconds to wait for Facebook before giving up
        """
        self.graph_url = graph_url
        self.fields = fields
        self.timeout = timeout

    async def verify(self, token: str) -> ExternalProfile:
        """Verify a Facebook access token.

        Args:
            token: Facebook access token

        Returns:
            Normalized profile

        Raises:
            AuthenticationError: If Facebook rejects the token, is
                unreachable, or returns no email
        """
        user_info = await self._get_user_info(token)

        user_id = user_info.get("id")
        if not user_id:
            logfire.warn("Facebook profile missing id")
            raise AuthenticationError("Facebook token verification failed")

        email = user_info.get("email")
        if not email:
            logfire.warn("Facebook account has no email", provider_user_id=user_id)
            raise AuthenticationError("Facebook account has no associated email")

        logfire.info("Facebook token verified", provider_user_id=user_id)

        return ExternalProfile(
            provider=AuthProvider.FACEBOOK,
            provider_user_id=str(user_id),
            email=email,
            display_name=user_info.get("name"),
            avatar_url=_picture_url(user_info.get("picture")),
        )

    async def _get_user_info(self, token: str) -> dict:
        """Call the Graph profile endpoint.

        Args:
            token: Facebook access token

        Returns:
            Decoded JSON body

        Raises:
            AuthenticationError: If the request fails or is rejected
        """
        params = {"fields": self.fields, "access_token": token}

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.graph_url,
                    params=params,
                    timeout=self.timeout,
                )

                if not response.is_success:
                    logfire.warn(
                        "Facebook token verification rejected",
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise AuthenticationError("Facebook token verification failed")

                result = response.json()

        except httpx.TimeoutException:
            logfire.error("Facebook Graph API timed out", timeout=self.timeout)
            raise AuthenticationError("Facebook token verification timed out")
        except httpx.HTTPError as e:
            logfire.error("Facebook Graph API HTTP error", error=str(e))
            raise AuthenticationError("Facebook token verification failed")
        except ValueError as e:
            logfire.error("Facebook Graph API returned invalid JSON", error=str(e))
            raise AuthenticationError("Facebook token verification failed")

        if not isinstance(result, dict):
            raise AuthenticationError("Facebook token verification failed")
        return result


def _picture_url(picture: object) -> str | None:
    """Dig ``picture.data.url`` out of a Graph response, if present."""
    if not isinstance(picture, dict):
        return None
    data = picture.get("data")
    if not isinstance(data, dict):
        return None
    return data.get("url")


class MockFacebookTokenVerifier(FacebookTokenVerifier):
    """Mock Facebook verifier for testing.

    Tokens listed in ``profiles`` map to their own profile; the token
    ``"invalid"`` is rejected.
    """

    def __init__(self, profiles: dict[str, ExternalProfile] | None = None):
        self.profiles = profiles or {}

    async def verify(self, token: str) -> ExternalProfile:
        """Return mock profile for a token."""
        if token == "invalid":
            raise AuthenticationError("Facebook token verification failed")
        if token in self.profiles:
            return self.profiles[token]
        return ExternalProfile(
            provider=AuthProvider.FACEBOOK,
            provider_user_id="mockfacebook123",
            email="mock@facebook.com",
            display_name="Mock Facebook User",
            avatar_url="https://example.com/facebook-avatar.jpg",
        )
