"""
Submission Models

This module defines the data flowing through the submission pipeline, from
the raw answers a student sends to the immutable submission record, plus
the read models used by analytics.
"""

import enum
import datetime
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from jaagrmind.catalog.model import Section


def utcnow() -> datetime.datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


class Bucket(enum.Enum):
    """
    Ordinal wellness classification.

    ``severity_rank`` orders buckets from most to least severe:
    SUPPORT_NEEDED (0) < EMERGING (1) < STABLE (2).
    """
    STABLE = "Stable"
    EMERGING = "Emerging"
    SUPPORT_NEEDED = "SupportNeeded"

    @property
    def severity_rank(self) -> int:
        return _SEVERITY_RANK[self]

    @property
    def display_label(self) -> str:
        """Label shown on dashboards and exports."""
        return _DISPLAY_LABELS[self]

    @classmethod
    def parse(cls, value: Any) -> 'Bucket':
        """
        Convert a wire value or a display label to a bucket.

        Raises:
            ValueError: If the value names no bucket
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for bucket in cls:
            if text in (bucket.value, bucket.name, bucket.display_label):
                return bucket
        raise ValueError(f"Unknown bucket: {value!r}")


_SEVERITY_RANK = {
    Bucket.SUPPORT_NEEDED: 0,
    Bucket.EMERGING: 1,
    Bucket.STABLE: 2,
}

_DISPLAY_LABELS = {
    Bucket.STABLE: "Skill Stable",
    Bucket.EMERGING: "Skill Emerging",
    Bucket.SUPPORT_NEEDED: "Skill Support Needed",
}


@dataclass(frozen=True)
class RawAnswer:
    """
    An answer as submitted by the client, before any checking.

    ``marks`` is whatever score the client claims for the answer. It is
    kept only so tampering can be observed in tests; scoring never reads it.
    """
    question_index: Optional[int]
    selected_option: Any
    time_taken: Any = None
    marks: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'RawAnswer':
        """Build a raw answer from camelCase or snake_case keys."""
        def pick(*keys):
            for key in keys:
                if key in data:
                    return data[key]
            return None

        return cls(
            question_index=pick("questionIndex", "question_index"),
            selected_option=pick("selectedOption", "selected_option"),
            time_taken=pick("timeTaken", "timeTakenForQuestion", "time_taken"),
            marks=pick("marks", "mark"),
        )


@dataclass(frozen=True)
class ValidatedAnswer:
    """An answer checked against the catalog; time is normalized to seconds."""
    question_index: int
    selected_option: int
    time_taken: float


@dataclass(frozen=True)
class Answer:
    """A scored answer as stored in a submission."""
    question_index: int
    section: Section
    selected_option: int
    mark: int
    time_taken: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "questionIndex": self.question_index,
            "section": self.section.value,
            "selectedOption": self.selected_option,
            "marks": self.mark,
            "timeTakenForQuestion": self.time_taken,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Answer':
        return cls(
            question_index=int(data["questionIndex"]),
            section=Section(data["section"]),
            selected_option=int(data["selectedOption"]),
            mark=int(data["marks"]),
            time_taken=float(data.get("timeTakenForQuestion", 0) or 0),
        )


@dataclass(frozen=True)
class ScoredAnswers:
    """
    Output of the scoring engine.

    ``section_scores`` and ``section_counts`` always hold all four sections.
    """
    answers: Tuple[Answer, ...]
    total_score: int
    section_scores: Dict[Section, int]
    section_counts: Dict[Section, int]


@dataclass(frozen=True)
class Classification:
    """Buckets and intervention targets derived from the scores."""
    assigned_bucket: Bucket
    section_buckets: Dict[Section, Optional[Bucket]]
    primary_skill_area: Optional[Section]
    secondary_skill_area: Optional[Section]


@dataclass(frozen=True)
class Submission:
    """
    The immutable record of one student's completed assessment.

    At most one submission exists per (student_id, assessment_id).
    """
    id: str
    student_id: str
    school_id: str
    assessment_id: str
    total_score: int
    section_scores: Dict[Section, int]
    section_buckets: Dict[Section, Optional[Bucket]]
    primary_skill_area: Optional[Section]
    secondary_skill_area: Optional[Section]
    assigned_bucket: Bucket
    answers: Tuple[Answer, ...]
    time_taken: float
    submitted_at: datetime.datetime = field(default_factory=utcnow)
    mobile_number: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the submission to its wire format.

        Returns:
            Dictionary with camelCase keys as consumed by dashboards
        """
        return {
            "id": self.id,
            "studentId": self.student_id,
            "schoolId": self.school_id,
            "assessmentId": self.assessment_id,
            "totalScore": self.total_score,
            "sectionScores": {s.value: self.section_scores.get(s, 0) for s in Section},
            "sectionBuckets": {
                s.value: self.section_buckets[s].value if self.section_buckets.get(s) else None
                for s in Section
            },
            "primarySkillArea": self.primary_skill_area.value if self.primary_skill_area else None,
            "secondarySkillArea": self.secondary_skill_area.value if self.secondary_skill_area else None,
            "assignedBucket": self.assigned_bucket.value,
            "answers": [answer.to_dict() for answer in self.answers],
            "timeTaken": self.time_taken,
            "submittedAt": self.submitted_at.isoformat(),
            "mobileNumber": self.mobile_number,
            "email": self.email,
        }


@dataclass(frozen=True)
class StudentProfile:
    """The student master-data fields analytics filter and label on."""
    student_id: str
    name: str = ""
    access_id: str = ""
    class_name: Optional[str] = None
    section: Optional[str] = None
    school_id: Optional[str] = None
    roll_no: Optional[str] = None


@dataclass(frozen=True)
class SubmissionView:
    """A submission joined with the master data needed to report on it."""
    submission: Submission
    student: Optional[StudentProfile] = None
    school_name: Optional[str] = None
    assessment_title: Optional[str] = None

    def to_summary_dict(self) -> Dict[str, Any]:
        """Row shape used by recent-submission tables."""
        student = self.student
        return {
            "id": self.submission.id,
            "studentId": self.submission.student_id,
            "studentName": student.name if student else None,
            "accessId": student.access_id if student else None,
            "className": student.class_name if student else None,
            "section": student.section if student else None,
            "schoolId": self.submission.school_id,
            "schoolName": self.school_name,
            "assessmentId": self.submission.assessment_id,
            "assessmentTitle": self.assessment_title,
            "totalScore": self.submission.total_score,
            "assignedBucket": self.submission.assigned_bucket.value,
            "timeTaken": self.submission.time_taken,
            "submittedAt": self.submission.submitted_at.isoformat(),
        }
