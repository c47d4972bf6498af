"""
Memory Catalog Repository Module

This module provides an in-memory implementation of the CatalogRepository
interface for development and testing purposes.
"""

import logging
from typing import Dict, Iterable, Optional

from .model import Catalog
from .repository import CatalogRepository

# Setup logging
logger = logging.getLogger(__name__)


class MemoryCatalogRepository(CatalogRepository):
    """
    In-memory implementation of the CatalogRepository.

    This implementation stores catalogs in memory and is intended for
    development and testing purposes only.
    """

    def __init__(self, initial_data: Optional[Iterable[Catalog]] = None):
        """
        Initialize the repository with optional initial data.

        Args:
            initial_data: Optional catalogs to initialize with
        """
        self._catalogs: Dict[str, Catalog] = {}

        if initial_data:
            for catalog in initial_data:
                self.add(catalog)

    async def get_catalog(self, assessment_id: str) -> Optional[Catalog]:
        return self._catalogs.get(assessment_id)

    def add(self, catalog: Catalog) -> None:
        """
        Register a catalog.

        This method is specific to the memory implementation and not part of
        the CatalogRepository interface.
        """
        self._catalogs[catalog.assessment_id] = catalog
