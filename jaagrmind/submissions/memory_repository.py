"""
Memory Submission Repository Module

This module provides an in-memory implementation of the SubmissionRepository
interface for development and testing purposes.
"""

import logging
import threading
from typing import Dict, List, Optional, Tuple

from jaagrmind.common.exceptions import DuplicateSubmissionError
from jaagrmind.submissions.filters import SubmissionFilters
from jaagrmind.submissions.models import StudentProfile, Submission, SubmissionView
from jaagrmind.submissions.repository import SubmissionRepository

# Setup logging
logger = logging.getLogger(__name__)


class MemorySubmissionRepository(SubmissionRepository):
    """
    In-memory implementation of the SubmissionRepository.

    Student profiles, school names and assessment titles stand in for the
    master-data tables the SQL implementation joins against.
    """

    def __init__(self):
        self._submissions: Dict[Tuple[str, str], Submission] = {}
        self._students: Dict[str, StudentProfile] = {}
        self._school_names: Dict[str, str] = {}
        self._assessment_titles: Dict[str, str] = {}
        # The uniqueness check and the insert happen under one lock
        self._lock = threading.Lock()

    def add_student(self, profile: StudentProfile) -> None:
        self._students[profile.student_id] = profile

    def add_school(self, school_id: str, name: str) -> None:
        self._school_names[school_id] = name

    def add_assessment(self, assessment_id: str, title: str) -> None:
        self._assessment_titles[assessment_id] = title

    async def insert_if_absent(self, submission: Submission) -> Submission:
        key = (submission.student_id, submission.assessment_id)
        with self._lock:
            existing = self._submissions.get(key)
            if existing is not None:
                raise DuplicateSubmissionError(
                    submission.student_id, submission.assessment_id, existing_id=existing.id
                )
            self._submissions[key] = submission
        logger.debug(f"Stored submission {submission.id}")
        return submission

    async def get_by_student_and_assessment(self, student_id: str, assessment_id: str) -> Optional[Submission]:
        return self._submissions.get((student_id, assessment_id))

    async def list_for_student(self, student_id: str) -> List[Submission]:
        with self._lock:
            submissions = [s for s in self._submissions.values() if s.student_id == student_id]
        return sorted(submissions, key=lambda s: s.submitted_at, reverse=True)

    async def find(self, filters: SubmissionFilters, limit: Optional[int] = None) -> List[SubmissionView]:
        with self._lock:
            snapshot = list(self._submissions.values())

        views = [self._view(s) for s in snapshot]
        matched = [view for view in views if filters.matches(view)]
        matched.sort(key=lambda v: v.submission.submitted_at, reverse=True)
        return matched if limit is None else matched[:limit]

    def _view(self, submission: Submission) -> SubmissionView:
        return SubmissionView(
            submission=submission,
            student=self._students.get(submission.student_id),
            school_name=self._school_names.get(submission.school_id),
            assessment_title=self._assessment_titles.get(submission.assessment_id),
        )

    def clear(self) -> None:
        with self._lock:
            self._submissions.clear()
