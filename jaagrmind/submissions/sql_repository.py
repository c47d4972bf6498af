"""
SQL Submission Repository

This module provides the SQLAlchemy implementation of the SubmissionRepository.
Uniqueness of (student_id, assessment_id) is enforced by the
``uq_submissions_student_assessment`` constraint, so two concurrent inserts
for the same pair can never both commit.
"""

from typing import List, Optional

from sqlalchemy import Select, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jaagrmind.common.exceptions import DuplicateSubmissionError, PersistenceError
from jaagrmind.common.logger import get_logger
from jaagrmind.database.models import AssessmentRecord, SchoolRecord, StudentRecord
from jaagrmind.submissions.database_models import SubmissionRecord
from jaagrmind.submissions.filters import SubmissionFilters
from jaagrmind.submissions.models import StudentProfile, Submission, SubmissionView
from jaagrmind.submissions.repository import SubmissionRepository

logger = get_logger(__name__)


class SqlSubmissionRepository(SubmissionRepository):
    """Repository for submissions stored in the ``submissions`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """
        Initialize the repository with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory

    async def insert_if_absent(self, submission: Submission) -> Submission:
        try:
            async with self._session_factory() as session:
                session.add(SubmissionRecord.from_domain(submission))
                await session.commit()
        except IntegrityError as e:
            existing = await self._existing_id(submission.student_id, submission.assessment_id)
            if existing is None:
                # Constraint violated by something other than the pair, e.g. id collision
                logger.error(f"Integrity error storing submission {submission.id}: {e}")
                raise PersistenceError("submission could not be stored", original_exception=e)
            logger.info(
                f"Rejected duplicate submission for student {submission.student_id} "
                f"and assessment {submission.assessment_id}"
            )
            raise DuplicateSubmissionError(
                submission.student_id, submission.assessment_id, existing_id=existing
            )
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database error storing submission {submission.id}: {e}", exc_info=True)
            raise PersistenceError("submission could not be stored", original_exception=e)

        logger.debug(f"Stored submission {submission.id}")
        return submission

    async def _existing_id(self, student_id: str, assessment_id: str) -> Optional[str]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(SubmissionRecord.id).where(
                        SubmissionRecord.student_id == student_id,
                        SubmissionRecord.assessment_id == assessment_id,
                    )
                )
                return result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError("could not look up existing submission", original_exception=e)

    async def get_by_student_and_assessment(self, student_id: str, assessment_id: str) -> Optional[Submission]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(SubmissionRecord).where(
                        SubmissionRecord.student_id == student_id,
                        SubmissionRecord.assessment_id == assessment_id,
                    )
                )
                record = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database error reading submission for student {student_id}: {e}", exc_info=True)
            raise PersistenceError("could not read submission", original_exception=e)

        return record.to_domain() if record else None

    async def list_for_student(self, student_id: str) -> List[Submission]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(SubmissionRecord)
                    .where(SubmissionRecord.student_id == student_id)
                    .order_by(SubmissionRecord.submitted_at.desc())
                )
                records = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database error listing submissions for student {student_id}: {e}", exc_info=True)
            raise PersistenceError("could not list submissions", original_exception=e)

        return [record.to_domain() for record in records]

    async def find(self, filters: SubmissionFilters, limit: Optional[int] = None) -> List[SubmissionView]:
        stmt = self._build_query(filters)
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                rows = result.all()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database error querying submissions: {e}", exc_info=True)
            raise PersistenceError("could not query submissions", original_exception=e)

        return [
            SubmissionView(
                submission=record.to_domain(),
                student=_profile(student),
                school_name=school_name,
                assessment_title=assessment_title,
            )
            for record, student, school_name, assessment_title in rows
        ]

    @staticmethod
    def _build_query(filters: SubmissionFilters) -> Select:
        """One statement: every present filter becomes a WHERE clause."""
        stmt = (
            select(SubmissionRecord, StudentRecord, SchoolRecord.name, AssessmentRecord.title)
            .outerjoin(StudentRecord, StudentRecord.id == SubmissionRecord.student_id)
            .outerjoin(SchoolRecord, SchoolRecord.id == SubmissionRecord.school_id)
            .outerjoin(AssessmentRecord, AssessmentRecord.id == SubmissionRecord.assessment_id)
        )

        if filters.school_id is not None:
            stmt = stmt.where(SubmissionRecord.school_id == filters.school_id)
        if filters.assessment_id is not None:
            stmt = stmt.where(SubmissionRecord.assessment_id == filters.assessment_id)
        if filters.bucket is not None:
            stmt = stmt.where(SubmissionRecord.assigned_bucket == filters.bucket.value)

        lower = filters.lower_bound()
        if lower is not None:
            stmt = stmt.where(SubmissionRecord.submitted_at >= lower)
        upper = filters.upper_bound()
        if upper is not None:
            bound, inclusive = upper
            if inclusive:
                stmt = stmt.where(SubmissionRecord.submitted_at <= bound)
            else:
                stmt = stmt.where(SubmissionRecord.submitted_at < bound)

        if filters.class_name is not None:
            stmt = stmt.where(StudentRecord.class_name == filters.class_name)
        if filters.section is not None:
            stmt = stmt.where(StudentRecord.section == filters.section)
        if filters.search is not None:
            stmt = stmt.where(or_(
                StudentRecord.name.icontains(filters.search, autoescape=True),
                StudentRecord.access_id.icontains(filters.search, autoescape=True),
            ))

        return stmt.order_by(SubmissionRecord.submitted_at.desc(), SubmissionRecord.id)


def _profile(record: Optional[StudentRecord]) -> Optional[StudentProfile]:
    if record is None:
        return None
    return StudentProfile(
        student_id=record.id,
        name=record.name,
        access_id=record.access_id,
        class_name=record.class_name,
        section=record.section,
        school_id=record.school_id,
        roll_no=record.roll_no,
    )
