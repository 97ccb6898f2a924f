"""Observability configuration using Logfire.

Logfire provides structured logging and tracing on top of OpenTelemetry,
with integrations for FastAPI, SQLAlchemy and httpx.

Usage:
    import logfire

    # Structured logging
    logfire.info("Account created", account_id=str(account.id))

    # Manual spans for critical operations
    with logfire.span("resolve_external", provider=profile.provider.value):
        ...

Never pass passwords, password hashes or tokens as log attributes.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from gatehouse.config import Settings

# Span attributes holding URL paths, never credentials
READABLE_ATTRIBUTES = {("path",), ("http.route",), ("http.target",), ("url.path",)}


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Cloud sending is enabled when a token is present, unless
    OBSERVABILITY__SEND_TO_LOGFIRE says otherwise.

    Args:
        settings: Application settings
    """
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    else:
        send_to_logfire = bool(settings.observability.logfire_token)

    config_kwargs: dict[str, Any] = {
        "service_name": "gatehouse",
        "service_version": "0.1.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
        "scrubbing": scrubbing_options(),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(settings.observability.logfire_token),
    )


def scrubbing_options() -> logfire.ScrubbingOptions:
    """Scrubbing rules for exported telemetry.

    Values under token-like keys are redacted on top of logfire's defaults.
    Request paths stay readable even though every /auth/* path matches the
    default "auth" pattern.
    """
    return logfire.ScrubbingOptions(
        extra_patterns=["token"],
        callback=_keep_request_path,
    )


def _keep_request_path(match: logfire.ScrubMatch) -> Any:
    pattern = match.pattern_match.group(0).lower()
    if match.path[-1:] in READABLE_ATTRIBUTES and pattern == "auth":
        return match.value
    return None


def instrument_fastapi(app: FastAPI) -> None:
    """Instrument FastAPI application with Logfire.

    Request headers are not captured since they carry bearer tokens.

    Args:
        app: FastAPI application instance
    """

    def _map_request_attributes(request, attributes):
        # Parsed arguments and validation errors echo request bodies, which
        # carry passwords and tokens
        result = {
            key: value
            for key, value in attributes.items()
            if key not in ("values", "errors")
        }
        if hasattr(request, "method"):
            result["method"] = request.method
        if hasattr(request, "url"):
            result["path"] = request.url.path
        if hasattr(request, "client") and request.client:
            result["client_host"] = request.client.host
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_map_request_attributes,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Instrument httpx client with Logfire.

    Traces the outbound token verification calls to Google and Facebook.
    """
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
