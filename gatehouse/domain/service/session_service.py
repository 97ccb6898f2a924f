"""Session issuing domain service."""

from gatehouse.domain.model import Account
from gatehouse.domain.value import AuthSession, PublicAccount

from .base import Service
from .jwt_service import JWTService


class SessionService(Service):
    """Turns a settled account into a token and a redacted public view."""

    def __init__(self, jwt_service: JWTService, default_avatar_url: str) -> None:
        self.jwt_service = jwt_service
        self.default_avatar_url = default_avatar_url

    def public_view(self, account: Account) -> PublicAccount:
        """Build the client-facing view of an account (never the hash)."""
        return PublicAccount(
            id=str(account.id),
            email=account.email.root,
            display_name=account.display_name,
            avatar_url=account.avatar_url or self.default_avatar_url,
        )

    def authenticate_response(self, account: Account) -> AuthSession:
        """Issue a session token for an account."""
        return AuthSession(
            token=self.jwt_service.issue(account.id),
            user=self.public_view(account),
        )
