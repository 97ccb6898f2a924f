#!/usr/bin/env python3
"""Apply the identity schema with Logfire error tracking."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from gatehouse.config import Settings
from gatehouse.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Upgrade the database to ``revision``.

    Raises:
        ConfigError: If DATABASE__URL is not set
    """
    settings = Settings()
    configure_logfire(settings)

    # Fail before alembic loads env.py so the error names the variable
    database_url = settings.database_url

    with logfire.span("run_migrations", revision=revision):
        try:
            alembic_cfg = Config("alembic.ini")
            alembic_cfg.set_main_option("sqlalchemy.url", database_url)
            command.upgrade(alembic_cfg, revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Re-raise so the deploy halts instead of serving a stale schema
            raise

    logfire.info("Database migrations completed", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
