"""Update avatar use case."""

from pydantic import BaseModel

from gatehouse.application.usecase.base import BaseUseCase
from gatehouse.domain.service import IdentityService, SessionService
from gatehouse.domain.value import AccountId, PublicAccount


class UpdateAvatarRequest(BaseModel):
    """Update avatar request."""

    account_id: AccountId  # From verified bearer token
    avatar_url: str


class UpdateAvatarUseCase(BaseUseCase):
    """Use case for replacing the authenticated account's avatar.

    Only the avatar is user-editable; email and display name are not.
    """

    def __init__(
        self, identity_service: IdentityService, session_service: SessionService
    ) -> None:
        """Initialize update avatar use case.

        Args:
            identity_service: Identity domain service
            session_service: Session issuing domain service
        """
        self.identity_service = identity_service
        self.session_service = session_service

    async def execute(self, request: UpdateAvatarRequest) -> PublicAccount:
        """Execute update avatar flow.

        Args:
            request: Account ID and new avatar URL

        Returns:
            Updated public view

        Raises:
            ValidationError: If the URL is blank
            AuthenticationError: If the account no longer exists
        """
        account = await self.identity_service.update_avatar(
            request.account_id, request.avatar_url
        )
        return self.session_service.public_view(account)
