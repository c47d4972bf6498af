"""
Submission Repository Interface

This module defines the storage contract the submission pipeline and the
analytics engine depend on.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from jaagrmind.submissions.filters import SubmissionFilters
from jaagrmind.submissions.models import Submission, SubmissionView


class SubmissionRepository(ABC):
    """
    Abstract repository for persisted submissions.

    Implementations enforce that at most one submission exists per
    (student_id, assessment_id) with a single atomic insert-if-absent,
    never with a read followed by a write.
    """

    @abstractmethod
    async def insert_if_absent(self, submission: Submission) -> Submission:
        """
        Store a new submission unless one exists for the same pair.

        Args:
            submission: The fully built submission record

        Returns:
            The stored submission

        Raises:
            DuplicateSubmissionError: If the student already submitted the assessment
            PersistenceError: If the store is unavailable or the write fails
        """
        pass

    @abstractmethod
    async def get_by_student_and_assessment(self, student_id: str, assessment_id: str) -> Optional[Submission]:
        """
        Retrieve the submission for a (student, assessment) pair.

        Returns:
            The submission if found, None otherwise

        Raises:
            PersistenceError: If the store cannot be read
        """
        pass

    @abstractmethod
    async def list_for_student(self, student_id: str) -> List[Submission]:
        """
        List a student's submissions, newest first.

        Raises:
            PersistenceError: If the store cannot be read
        """
        pass

    @abstractmethod
    async def find(self, filters: SubmissionFilters, limit: Optional[int] = None) -> List[SubmissionView]:
        """
        Find submissions matching all given filters in one query.

        Args:
            filters: Filters to apply, combined with AND
            limit: Maximum number of results, None for all

        Returns:
            Matching submissions joined with student and school data,
            ordered by submission time descending

        Raises:
            PersistenceError: If the store cannot be read
        """
        pass
