"""
Database initialization and connection management.

This module provides functions for:
1. Creating the async engine and session factory
2. Creating the schema for development and tests
3. Disposing of the connection pool on shutdown
"""

from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from jaagrmind.common.logger import app_logger
from jaagrmind.database.base import Base

# Setup module logger
logger = app_logger.getChild("database.init_db")

# Global engine instance
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def get_engine() -> AsyncEngine:
    """Get the global async engine instance."""
    if _engine is None:
        raise RuntimeError("Database engine not initialized. Call initialize_database() first.")
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory bound to the global engine."""
    if _session_factory is None:
        raise RuntimeError("Database engine not initialized. Call initialize_database() first.")
    return _session_factory


async def initialize_database(database_url: str, engine_kwargs: Optional[Dict[str, Any]] = None) -> AsyncEngine:
    """
    Initialize the async database engine.

    Args:
        database_url: Database connection URL
        engine_kwargs: Extra ``create_async_engine`` arguments (echo, pool sizing)

    Returns:
        AsyncEngine instance
    """
    global _engine, _session_factory

    if _engine is not None:
        logger.warning("Database engine already initialized, disposing the previous one")
        await close_database()

    # Keep the scheme only; the rest may carry credentials
    logger.info(f"Initializing database with URL: {database_url.split(':', 1)[0]}://...")

    engine = create_async_engine(database_url, **(engine_kwargs or {}))
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Failed to initialize async database: {str(e)}")
        await engine.dispose()
        raise

    _engine = engine
    _session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    logger.info("Database engine initialized successfully")
    return engine


async def create_schema(engine: Optional[AsyncEngine] = None) -> None:
    """
    Create all mapped tables that do not exist yet.

    Production schemas are managed by alembic; this is for local
    development and tests.
    """
    # Register every mapping on the metadata before create_all
    import jaagrmind.database.models  # noqa: F401
    import jaagrmind.submissions.database_models  # noqa: F401

    async with (engine or get_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema created")


async def close_database() -> None:
    """Close the database engine and all connections."""
    global _engine, _session_factory

    if _engine:
        await _engine.dispose()
        _engine = None
        _session_factory = None
        logger.info("Database engine closed successfully")
