"""Get profile use case."""

from pydantic import BaseModel

from gatehouse.application.usecase.base import BaseUseCase
from gatehouse.domain.service import IdentityService, SessionService
from gatehouse.domain.value import AccountId, PublicAccount


class GetProfileRequest(BaseModel):
    """Get profile request."""

    account_id: AccountId  # From verified bearer token


class GetProfileUseCase(BaseUseCase):
    """Use case for reading the authenticated account's public view."""

    def __init__(
        self, identity_service: IdentityService, session_service: SessionService
    ) -> None:
        self.identity_service = identity_service
        self.session_service = session_service

    async def execute(self, request: GetProfileRequest) -> PublicAccount:
        account = await self.identity_service.get_account(request.account_id)
        return self.session_service.public_view(account)
