"""
Catalog Repository Module

This module defines the repository interface for reading question catalogs
and its SQLAlchemy implementation.
"""

import abc
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jaagrmind.catalog.model import Catalog
from jaagrmind.common.exceptions import ConfigurationError, PersistenceError
from jaagrmind.database.models import AssessmentRecord

# Setup logging
logger = logging.getLogger(__name__)


class CatalogRepository(abc.ABC):
    """
    Abstract base class for catalog repositories.

    The catalog is read-only to the scoring core; implementations must
    return questions in a stable order with the weights that were in force
    when the assessment was published.
    """

    @abc.abstractmethod
    async def get_catalog(self, assessment_id: str) -> Optional[Catalog]:
        """
        Get the question catalog of an assessment.

        Args:
            assessment_id: The ID of the assessment

        Returns:
            The Catalog if the assessment exists, None otherwise

        Raises:
            PersistenceError: If the store cannot be read
        """
        pass


class SqlCatalogRepository(CatalogRepository):
    """Reads catalogs from the ``assessments`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """
        Initialize the repository with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory

    async def get_catalog(self, assessment_id: str) -> Optional[Catalog]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(AssessmentRecord).where(AssessmentRecord.id == assessment_id)
                )
                record = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database error loading catalog for assessment {assessment_id}: {e}", exc_info=True)
            raise PersistenceError(f"could not load assessment {assessment_id}", original_exception=e)

        if record is None:
            return None

        try:
            return Catalog.from_records(record.id, record.questions or [], title=record.title)
        except (ValueError, TypeError, AttributeError) as e:
            logger.error(f"Assessment {assessment_id} has an invalid question catalog: {e}")
            raise ConfigurationError(
                f"assessment {assessment_id} has an invalid question catalog", config_key="questions"
            )
