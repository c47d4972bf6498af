"""
Analytics Models

Result shapes produced by the aggregation engine. Field names follow Python
conventions; ``to_dict`` produces the camelCase form the dashboards read.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from jaagrmind.submissions.models import Bucket


@dataclass(frozen=True)
class GroupStats:
    """Submission count and mean score of one school or class."""
    total: int
    avg_score: float

    def to_dict(self) -> Dict[str, Any]:
        return {"total": self.total, "avgScore": self.avg_score}


@dataclass(frozen=True)
class AnalyticsSummary:
    """
    Aggregate view of the submissions matching a filter set.

    ``bucket_distribution`` always contains every bucket, with 0 for
    buckets nobody landed in.
    """
    total_submissions: int
    avg_score: float
    avg_time_taken: float
    bucket_distribution: Dict[Bucket, int]
    school_breakdown: Dict[str, GroupStats] = field(default_factory=dict)
    class_breakdown: Dict[str, GroupStats] = field(default_factory=dict)
    recent_submissions: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalSubmissions": self.total_submissions,
            "avgScore": self.avg_score,
            "avgTimeTaken": self.avg_time_taken,
            "bucketDistribution": {bucket.value: count for bucket, count in self.bucket_distribution.items()},
            "schoolBreakdown": {key: stats.to_dict() for key, stats in self.school_breakdown.items()},
            "classBreakdown": {key: stats.to_dict() for key, stats in self.class_breakdown.items()},
            "recentSubmissions": list(self.recent_submissions),
        }


@dataclass(frozen=True)
class StudentResult:
    """One assessment outcome inside a student report."""
    submission_id: str
    assessment_id: str
    assessment_title: Optional[str]
    total_score: int
    assigned_bucket: Bucket
    primary_skill_area: Optional[str]
    secondary_skill_area: Optional[str]
    submitted_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "submissionId": self.submission_id,
            "assessmentId": self.assessment_id,
            "assessmentTitle": self.assessment_title,
            "totalScore": self.total_score,
            "assignedBucket": self.assigned_bucket.value,
            "primarySkillArea": self.primary_skill_area,
            "secondarySkillArea": self.secondary_skill_area,
            "submittedAt": self.submitted_at,
        }


@dataclass
class StudentReport:
    """All matched submissions of one student."""
    student_id: str
    name: Optional[str] = None
    access_id: Optional[str] = None
    class_name: Optional[str] = None
    section: Optional[str] = None
    roll_no: Optional[str] = None
    school_name: Optional[str] = None
    results: List[StudentResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "studentId": self.student_id,
            "name": self.name,
            "accessId": self.access_id,
            "className": self.class_name,
            "section": self.section,
            "rollNo": self.roll_no,
            "schoolName": self.school_name,
            "totalTests": len(self.results),
            "results": [result.to_dict() for result in self.results],
        }
