"""
Question catalog module for JaagrMind.

This module contains the read-only catalog model and the repositories that
load an assessment's questions and mark weights.
"""

from .model import Catalog, Question, QuestionOption, Section
from .repository import CatalogRepository, SqlCatalogRepository
from .memory_repository import MemoryCatalogRepository

__all__ = [
    'Catalog',
    'Question',
    'QuestionOption',
    'Section',
    'CatalogRepository',
    'SqlCatalogRepository',
    'MemoryCatalogRepository',
]
