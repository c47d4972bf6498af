"""
Database Configuration Loading

This module provides functions to load database connection settings
from the application settings or individual environment variables.
"""

import os
import urllib.parse
from typing import Dict, Any, Optional

from jaagrmind.common.logger import app_logger
from jaagrmind.config import Settings, settings as default_settings

# Module logger
logger = app_logger.getChild("db.config")

# Environment variable names
DB_TYPE_ENV = "DB_TYPE"  # postgresql or sqlite
DB_HOST_ENV = "DB_HOST"
DB_PORT_ENV = "DB_PORT"
DB_NAME_ENV = "DB_NAME"
DB_USER_ENV = "DB_USER"
DB_PASSWORD_ENV = "DB_PASSWORD"
DB_PATH_ENV = "DB_PATH"  # For SQLite

# Default values
DEFAULT_DB_TYPE = "postgresql"
DEFAULT_DB_HOST = "localhost"
DEFAULT_DB_PORT = 5432
DEFAULT_DB_NAME = "jaagrmind"
DEFAULT_DB_USER = "jaagrmind"
DEFAULT_DB_PASSWORD = "password"
DEFAULT_DB_PATH = "./jaagrmind.db"


def build_database_url() -> str:
    """
    Construct an async SQLAlchemy URL from the DB_* environment variables.

    Returns:
        Database URL using the asyncpg or aiosqlite driver

    Raises:
        ValueError: If DB_TYPE is not supported
    """
    db_type = os.environ.get(DB_TYPE_ENV, DEFAULT_DB_TYPE).lower()

    if db_type == "postgresql":
        user = os.environ.get(DB_USER_ENV, DEFAULT_DB_USER)
        password = urllib.parse.quote_plus(os.environ.get(DB_PASSWORD_ENV, DEFAULT_DB_PASSWORD))
        host = os.environ.get(DB_HOST_ENV, DEFAULT_DB_HOST)
        port = int(os.environ.get(DB_PORT_ENV, DEFAULT_DB_PORT))
        database = os.environ.get(DB_NAME_ENV, DEFAULT_DB_NAME)
        return f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{database}"
    if db_type == "sqlite":
        return f"sqlite+aiosqlite:///{os.environ.get(DB_PATH_ENV, DEFAULT_DB_PATH)}"

    logger.error(f"Unsupported DB_TYPE: {db_type}")
    raise ValueError(f"Unsupported database type: {db_type}")


def get_database_settings(app_settings: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Loads database connection settings.

    DATABASE_URL wins when set; otherwise the URL is built from the DB_*
    components. Pool options are only returned for servers that pool
    connections (SQLite uses the driver defaults).

    Args:
        app_settings: Settings to read, defaults to the global settings

    Returns:
        A dictionary with ``database_url``, ``db_type`` and ``engine_kwargs``.
    """
    app_settings = app_settings or default_settings

    database_url = app_settings.DATABASE_URL
    if database_url:
        logger.info("Using direct DATABASE_URL from settings.")
    else:
        database_url = build_database_url()
        logger.info("Constructed database URL from DB_* environment variables")

    if database_url.startswith("postgresql"):
        db_type = "postgresql"
    elif database_url.startswith("sqlite"):
        db_type = "sqlite"
    else:
        db_type = "unknown"

    engine_kwargs: Dict[str, Any] = {"echo": app_settings.SQL_ECHO}
    if db_type == "postgresql":
        engine_kwargs.update({
            "pool_size": app_settings.DB_POOL_SIZE,
            "max_overflow": app_settings.DB_MAX_OVERFLOW,
            "pool_timeout": app_settings.DB_POOL_TIMEOUT,
            "pool_pre_ping": True,
            "pool_recycle": 300,
        })

    return {
        "database_url": database_url,
        "db_type": db_type,
        "engine_kwargs": engine_kwargs,
    }
