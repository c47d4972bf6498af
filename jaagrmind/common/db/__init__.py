"""
Database Module

This package provides database connection settings for the application.
"""

from jaagrmind.common.db.connection import (
    build_database_url,
    get_database_settings
)

__all__ = [
    'build_database_url',
    'get_database_settings',
]
