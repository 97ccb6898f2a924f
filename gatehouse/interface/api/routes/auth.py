"""Authentication routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response, status

from gatehouse.application.usecase.auth import (
    LoginUseCase,
    OAuthLoginUseCase,
    RegisterUseCase,
)
from gatehouse.application.usecase.auth.login import LoginRequest
from gatehouse.application.usecase.auth.oauth_login import OAuthLoginRequest
from gatehouse.application.usecase.auth.register import AuthResponse, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.post(
    "/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    request: RegisterRequest,
    register_use_case: FromDishka[RegisterUseCase],
) -> AuthResponse:
    """Create a local account and sign it in.

    Args:
        request: Email and password
        register_use_case: Register use case from DI

    Returns:
        Session token and public account view

    Example:
        POST /auth/register
        {"email": "alice@example.com", "password": "correct horse"}

        Response (201):
        {
            "token": "eyJ...",
            "user": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "email": "alice@example.com",
                "display_name": null,
                "avatar_url": "/default-avatar.png"
            }
        }
    """
    response = await register_use_case.execute(request)
    logger.info(f"Registered account {response.user.id}")
    return response


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    login_use_case: FromDishka[LoginUseCase],
) -> AuthResponse:
    """Sign in with email and password.

    Every credential failure answers 401 with the same message.
    """
    return await login_use_case.execute(request)


@router.post("/oauth", response_model=AuthResponse)
async def oauth_login(
    request: OAuthLoginRequest,
    response: Response,
    oauth_login_use_case: FromDishka[OAuthLoginUseCase],
) -> AuthResponse:
    """Sign in with a Google ID token or a Facebook access token.

    Answers 201 when the login created the account, 200 otherwise.

    Example:
        POST /auth/oauth
        {"provider": "google", "token": "<id token>"}
    """
    result = await oauth_login_use_case.execute(request)
    if result.created:
        response.status_code = status.HTTP_201_CREATED
    logger.info(
        f"OAuth login via {request.provider}: account={result.user.id}, created={result.created}"
    )
    return AuthResponse(token=result.token, user=result.user)
