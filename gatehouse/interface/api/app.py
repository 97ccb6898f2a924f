"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gatehouse.config import Settings
from gatehouse.interface.api.errors import register_error_handlers
from gatehouse.interface.api.routes import auth, health, users
from gatehouse.util.di.container import create_container, setup_di
from gatehouse.util.observability import instrument_fastapi, instrument_httpx


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to serve from; the production container
            is built when omitted

    Returns:
        Configured application

    Raises:
        ConfigError: If the token signing secret is missing
    """
    settings = Settings()
    settings.check_required()

    # Instrument httpx for outbound token verification calls
    instrument_httpx()

    app_instance = FastAPI(
        title="Gatehouse API",
        description="Account identity and session service: local credentials, Google and Facebook sign-in",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    # Bearer tokens only, so no credentialed CORS
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    if container is None:
        container = create_container()
    setup_di(app_instance, container)

    register_error_handlers(app_instance)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(users.router)

    return app_instance
