"""Unit tests for RegisterUseCase and LoginUseCase."""

from dishka import AsyncContainer
import pytest

from gatehouse.application.usecase.auth import LoginUseCase, RegisterUseCase
from gatehouse.application.usecase.auth.login import LoginRequest
from gatehouse.application.usecase.auth.register import RegisterRequest
from gatehouse.domain.error import AuthenticationError, ValidationError
from gatehouse.domain.service import JWTService
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestRegisterUseCase:
    """Tests for RegisterUseCase."""

    @pytest.mark.asyncio
    async def test_register_returns_session(self, unit_env: AsyncContainer):
        """Registration signs the new account in."""
        register_use_case = await unit_env.get(RegisterUseCase)
        jwt_service = await unit_env.get(JWTService)

        response = await register_use_case.execute(
            RegisterRequest(email="alice@example.com", password="password123")
        )

        assert response.user.email == "alice@example.com"
        assert response.user.avatar_url == "/default-avatar.png"
        assert str(jwt_service.get_account_id(response.token)) == response.user.id

    @pytest.mark.asyncio
    async def test_register_short_password(self, unit_env: AsyncContainer):
        register_use_case = await unit_env.get(RegisterUseCase)

        with pytest.raises(ValidationError):
            await register_use_case.execute(
                RegisterRequest(email="alice@example.com", password="short")
            )


class TestLoginUseCase:
    """Tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_login_after_register(self, unit_env: AsyncContainer):
        """Login returns a session for the registered account."""
        register_use_case = await unit_env.get(RegisterUseCase)
        login_use_case = await unit_env.get(LoginUseCase)
        registered = await register_use_case.execute(
            RegisterRequest(email="alice@example.com", password="password123")
        )

        response = await login_use_case.execute(
            LoginRequest(email="alice@example.com", password="password123")
        )

        assert response.user == registered.user
        assert response.token

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, unit_env: AsyncContainer):
        register_use_case = await unit_env.get(RegisterUseCase)
        login_use_case = await unit_env.get(LoginUseCase)
        await register_use_case.execute(
            RegisterRequest(email="alice@example.com", password="password123")
        )

        with pytest.raises(AuthenticationError):
            await login_use_case.execute(
                LoginRequest(email="alice@example.com", password="nope12345")
            )
