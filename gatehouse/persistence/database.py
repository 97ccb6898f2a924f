"""Database connection and session management.

Provides async database engine and session factory for PostgreSQL.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import logfire
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from gatehouse.config import Settings
from gatehouse.domain.error import DatabaseError


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine

    Raises:
        ConfigError: If no database URL is configured
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


@contextmanager
def database_errors(operation: str) -> Iterator[None]:
    """Translate driver failures into DatabaseError.

    The driver message is logged; only a generic message leaves this layer.

    Args:
        operation: Repository operation name for the log record
    """
    try:
        yield
    except IntegrityError as e:
        logfire.warn("Database constraint violated", operation=operation, error=str(e))
        raise DatabaseError("Conflicting write, please retry") from e
    except SQLAlchemyError as e:
        logfire.error("Database operation failed", operation=operation, error=str(e))
        raise DatabaseError("Database unavailable") from e
