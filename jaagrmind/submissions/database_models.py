"""
SQLAlchemy ORM model for persisted submissions.
"""

from typing import Any, Dict

from sqlalchemy import (
    Column, DateTime, Float, Index, Integer, JSON, String, UniqueConstraint
)
from sqlalchemy.dialects.postgresql import JSONB

from jaagrmind.catalog.model import Section
from jaagrmind.database.base import ModelBase
from jaagrmind.submissions.models import Answer, Bucket, Submission

JsonColumn = JSON().with_variant(JSONB(), "postgresql")


class SubmissionRecord(ModelBase):
    """
    One row per completed (student, assessment) pair.

    The unique constraint is what makes a concurrent second submit fail:
    the insert itself is the uniqueness check.
    """
    __tablename__ = "submissions"

    id = Column(String(36), primary_key=True)
    student_id = Column(String(64), nullable=False)
    school_id = Column(String(64), nullable=False)
    assessment_id = Column(String(64), nullable=False)
    total_score = Column(Integer, nullable=False)
    section_scores = Column(JsonColumn, nullable=False)
    section_buckets = Column(JsonColumn, nullable=False)
    primary_skill_area = Column(String(1), nullable=True)
    secondary_skill_area = Column(String(1), nullable=True)
    assigned_bucket = Column(String(32), nullable=False)
    answers = Column(JsonColumn, nullable=False)
    time_taken = Column(Float, nullable=False, default=0.0)
    mobile_number = Column(String(32), nullable=True)
    email = Column(String(255), nullable=True)
    submitted_at = Column(DateTime, nullable=False)

    __table_args__ = (
        UniqueConstraint(student_id, assessment_id, name="uq_submissions_student_assessment"),
        Index("idx_submissions_school_submitted", school_id, submitted_at.desc()),
        Index("idx_submissions_assessment", assessment_id),
        Index("idx_submissions_bucket", assigned_bucket),
    )

    def __repr__(self):
        return (f"<SubmissionRecord(id='{self.id}', student_id='{self.student_id}', "
                f"assessment_id='{self.assessment_id}', total_score={self.total_score})>")

    @classmethod
    def from_domain(cls, submission: Submission) -> 'SubmissionRecord':
        """Build the row for a domain submission."""
        return cls(
            id=submission.id,
            student_id=submission.student_id,
            school_id=submission.school_id,
            assessment_id=submission.assessment_id,
            total_score=submission.total_score,
            section_scores={s.value: submission.section_scores.get(s, 0) for s in Section},
            section_buckets={
                s.value: submission.section_buckets[s].value if submission.section_buckets.get(s) else None
                for s in Section
            },
            primary_skill_area=submission.primary_skill_area.value if submission.primary_skill_area else None,
            secondary_skill_area=submission.secondary_skill_area.value if submission.secondary_skill_area else None,
            assigned_bucket=submission.assigned_bucket.value,
            answers=[answer.to_dict() for answer in submission.answers],
            time_taken=submission.time_taken,
            mobile_number=submission.mobile_number,
            email=submission.email,
            submitted_at=submission.submitted_at,
        )

    def to_domain(self) -> Submission:
        """Convert the row back into an immutable domain submission."""
        scores: Dict[str, Any] = self.section_scores or {}
        buckets: Dict[str, Any] = self.section_buckets or {}
        return Submission(
            id=self.id,
            student_id=self.student_id,
            school_id=self.school_id,
            assessment_id=self.assessment_id,
            total_score=self.total_score,
            section_scores={s: int(scores.get(s.value, 0)) for s in Section},
            section_buckets={s: Bucket.parse(buckets[s.value]) if buckets.get(s.value) else None for s in Section},
            primary_skill_area=Section(self.primary_skill_area) if self.primary_skill_area else None,
            secondary_skill_area=Section(self.secondary_skill_area) if self.secondary_skill_area else None,
            assigned_bucket=Bucket.parse(self.assigned_bucket),
            answers=tuple(Answer.from_dict(a) for a in (self.answers or [])),
            time_taken=self.time_taken or 0.0,
            submitted_at=self.submitted_at,
            mobile_number=self.mobile_number,
            email=self.email,
        )
