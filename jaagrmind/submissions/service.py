"""
Submission Service

Runs one submit request end to end: catalog lookup, validation, scoring,
classification and the atomic write. The middle three stages are pure and
synchronous; only the catalog lookup and the write touch storage.
"""

from typing import Any, List, Optional, Sequence

from jaagrmind.catalog.repository import CatalogRepository
from jaagrmind.common.exceptions import DuplicateSubmissionError, NotFoundError, ValidationError
from jaagrmind.common.logger import LoggerAdapter, get_logger
from jaagrmind.submissions.classification import BucketThresholds, classify
from jaagrmind.submissions.models import Submission
from jaagrmind.submissions.persister import SubmissionPersister
from jaagrmind.submissions.repository import SubmissionRepository
from jaagrmind.submissions.scoring import score
from jaagrmind.submissions.validation import validate

logger = get_logger(__name__)


class SubmissionService:
    """
    Service for scoring and recording assessment submissions.

    Attributes:
        catalog_repository: Source of question catalogs
        submission_repository: Store of persisted submissions
        thresholds: Bucket cut-points used by classification
    """

    def __init__(
        self,
        catalog_repository: CatalogRepository,
        submission_repository: SubmissionRepository,
        thresholds: Optional[BucketThresholds] = None,
    ):
        self.catalog_repository = catalog_repository
        self.submission_repository = submission_repository
        self.thresholds = thresholds or BucketThresholds()
        self._persister = SubmissionPersister(submission_repository)

    async def submit(
        self,
        student_id: str,
        assessment_id: str,
        school_id: str,
        answers: Sequence[Any],
        total_time: Any = None,
        mobile_number: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Submission:
        """
        Score and store a student's answers to an assessment.

        Args:
            student_id: The submitting student
            assessment_id: The assessment answered
            school_id: The student's school
            answers: Raw answers, as RawAnswer objects or dictionaries
            total_time: Total seconds reported by the client
            mobile_number: Optional contact number
            email: Optional contact email

        Returns:
            The stored submission

        Raises:
            NotFoundError: If the assessment does not exist
            ValidationError: If the answers do not match the catalog
            ClassificationError: If the threshold table cannot place a score
            DuplicateSubmissionError: If the student already submitted this assessment
            PersistenceError: If the catalog or the submission store is unavailable
        """
        log = LoggerAdapter(logger, {"student_id": student_id, "assessment_id": assessment_id})

        catalog = await self.catalog_repository.get_catalog(assessment_id)
        if catalog is None:
            log.warning("Submission for unknown assessment")
            raise NotFoundError("Assessment", assessment_id)

        try:
            validated = validate(catalog, list(answers or []))
        except ValidationError as e:
            log.info(f"Rejected submission: {e.message}")
            raise

        scored = score(catalog, validated)
        classification = classify(
            scored.total_score,
            scored.section_scores,
            catalog.section_maxima,
            thresholds=self.thresholds,
        )

        try:
            submission = await self._persister.persist(
                student_id=student_id,
                assessment_id=assessment_id,
                school_id=school_id,
                scored=scored,
                classification=classification,
                total_time=total_time,
                mobile_number=mobile_number,
                email=email,
            )
        except DuplicateSubmissionError as e:
            log.info(f"Duplicate submission rejected, existing submission {e.existing_id}")
            raise

        log.with_context(submission_id=submission.id).info(
            f"Scored {scored.total_score}/{catalog.max_score} -> {classification.assigned_bucket.value}"
        )
        return submission

    async def get_submission(self, student_id: str, assessment_id: str) -> Submission:
        """
        Get the submission a student made for an assessment.

        Raises:
            NotFoundError: If the student has not submitted the assessment
        """
        submission = await self.submission_repository.get_by_student_and_assessment(student_id, assessment_id)
        if submission is None:
            raise NotFoundError("Submission", f"{student_id}/{assessment_id}")
        return submission

    async def completed_assessment_ids(self, student_id: str) -> List[str]:
        """IDs of the assessments the student has already completed, newest first."""
        submissions = await self.submission_repository.list_for_student(student_id)
        return [submission.assessment_id for submission in submissions]
