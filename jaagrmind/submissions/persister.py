"""
Submission Persister

Turns a scored and classified answer set into the immutable submission
record and stores it through the repository's atomic insert-if-absent.
"""

import uuid
from typing import Optional, Sequence

from jaagrmind.common.logger import get_logger
from jaagrmind.submissions.models import Answer, Classification, ScoredAnswers, Submission, utcnow
from jaagrmind.submissions.repository import SubmissionRepository
from jaagrmind.submissions.validation import normalize_time

logger = get_logger(__name__)


class SubmissionPersister:
    """Builds submission records and writes them exactly once."""

    def __init__(self, repository: SubmissionRepository):
        self._repository = repository

    async def persist(
        self,
        student_id: str,
        assessment_id: str,
        school_id: str,
        scored: ScoredAnswers,
        classification: Classification,
        answers: Optional[Sequence[Answer]] = None,
        total_time=None,
        mobile_number: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Submission:
        """
        Store the submission for a (student, assessment) pair.

        Args:
            student_id: The submitting student
            assessment_id: The assessment answered
            school_id: The student's school
            scored: Output of the scoring engine
            classification: Output of the classification engine
            answers: Scored answers to record; must equal ``scored.answers`` when given
            total_time: Total seconds reported by the client; invalid values become 0
            mobile_number: Optional contact number given at submit time
            email: Optional contact email given at submit time

        Returns:
            The stored submission

        Raises:
            ValueError: If ``answers`` differs from the scored answers
            DuplicateSubmissionError: If the pair already has a submission
            PersistenceError: If the store cannot be written; not retried here
        """
        if answers is not None and tuple(answers) != tuple(scored.answers):
            raise ValueError("Answers to record do not match the scored answers")

        submission = Submission(
            id=str(uuid.uuid4()),
            student_id=student_id,
            school_id=school_id,
            assessment_id=assessment_id,
            total_score=scored.total_score,
            section_scores=dict(scored.section_scores),
            section_buckets=dict(classification.section_buckets),
            primary_skill_area=classification.primary_skill_area,
            secondary_skill_area=classification.secondary_skill_area,
            assigned_bucket=classification.assigned_bucket,
            answers=tuple(scored.answers),
            time_taken=normalize_time(total_time),
            submitted_at=utcnow(),
            mobile_number=mobile_number or None,
            email=email or None,
        )

        stored = await self._repository.insert_if_absent(submission)
        logger.info(
            f"Persisted submission {stored.id} for student {student_id} "
            f"(assessment {assessment_id}, bucket {stored.assigned_bucket.value})"
        )
        return stored
