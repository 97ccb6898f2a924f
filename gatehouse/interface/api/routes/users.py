"""Account profile routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header
from pydantic import BaseModel

from gatehouse.application.usecase.account import (
    GetProfileUseCase,
    UpdateAvatarUseCase,
)
from gatehouse.application.usecase.account.get_profile import GetProfileRequest
from gatehouse.application.usecase.account.update_avatar import UpdateAvatarRequest
from gatehouse.application.usecase.auth import VerifyBearerUseCase
from gatehouse.application.usecase.auth.verify_bearer import VerifyBearerRequest
from gatehouse.domain.value import PublicAccount

router = APIRouter(prefix="/user", tags=["user"], route_class=DishkaRoute)


class UpdateAvatarAPIRequest(BaseModel):
    """API request for updating the avatar."""

    avatar_url: str


@router.get("/profile", response_model=PublicAccount)
async def get_profile(
    verify_bearer_use_case: FromDishka[VerifyBearerUseCase],
    get_profile_use_case: FromDishka[GetProfileUseCase],
    authorization: str | None = Header(default=None),
) -> PublicAccount:
    """Get the authenticated account's public view.

    Args:
        verify_bearer_use_case: Bearer verification use case from DI
        get_profile_use_case: Get profile use case from DI
        authorization: ``Bearer <token>`` header

    Returns:
        Public account view
    """
    account_id = await verify_bearer_use_case.execute(
        VerifyBearerRequest(authorization=authorization)
    )
    return await get_profile_use_case.execute(GetProfileRequest(account_id=account_id))


@router.put("/update_avatar", response_model=PublicAccount)
async def update_avatar(
    request: UpdateAvatarAPIRequest,
    verify_bearer_use_case: FromDishka[VerifyBearerUseCase],
    update_avatar_use_case: FromDishka[UpdateAvatarUseCase],
    authorization: str | None = Header(default=None),
) -> PublicAccount:
    """Replace the authenticated account's avatar.

    Example:
        PUT /user/update_avatar
        Authorization: Bearer eyJ...
        {"avatar_url": "https://cdn.example.com/alice.png"}
    """
    account_id = await verify_bearer_use_case.execute(
        VerifyBearerRequest(authorization=authorization)
    )
    return await update_avatar_use_case.execute(
        UpdateAvatarRequest(account_id=account_id, avatar_url=request.avatar_url)
    )
