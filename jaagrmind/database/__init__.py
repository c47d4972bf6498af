"""
Database Module

This module provides the declarative base and the master-data table
mappings for the JaagrMind backend.
"""

from jaagrmind.database.base import Base, ModelBase, metadata

__all__ = ['Base', 'ModelBase', 'metadata']
