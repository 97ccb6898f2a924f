#!/usr/bin/env python3
"""Start the FastAPI application with Logfire error tracking for startup errors."""

import sys
import logfire
import uvicorn

from gatehouse.config import Settings
from gatehouse.util.logging import setup_logging
from gatehouse.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)
    setup_logging(settings)

    try:
        # Refuse to serve without a signing secret
        settings.check_required()

        logfire.info("Starting FastAPI application", host=settings.host, port=settings.port)

        uvicorn.run(
            "gatehouse.interface.api.app:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            log_level="info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
