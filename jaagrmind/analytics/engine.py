"""
Aggregation Engine

Read-only summaries over persisted submissions for dashboards and exports.

The repository applies every filter in a single query; the engine only
groups and averages the matched set. Nothing here writes, so the engine can
run next to any number of submits without coordination.
"""

from typing import Any, Dict, Iterable, List, Optional

from jaagrmind.analytics.models import AnalyticsSummary, GroupStats, StudentReport, StudentResult
from jaagrmind.common.logger import get_logger, log_execution_time
from jaagrmind.submissions.filters import SubmissionFilters
from jaagrmind.submissions.models import Bucket, SubmissionView
from jaagrmind.submissions.repository import SubmissionRepository

logger = get_logger(__name__)

DEFAULT_RECENT_LIMIT = 10
UNASSIGNED_CLASS = "Unassigned"


def _mean(values: List[float]) -> float:
    """Arithmetic mean rounded to 2 places; 0 for no values."""
    if not values:
        return 0
    return round(sum(values) / len(values), 2)


def _group(views: Iterable[SubmissionView], key_of) -> Dict[str, GroupStats]:
    scores: Dict[str, List[float]] = {}
    for view in views:
        scores.setdefault(key_of(view), []).append(view.submission.total_score)
    return {key: GroupStats(total=len(values), avg_score=_mean(values)) for key, values in scores.items()}


def _school_key(view: SubmissionView) -> str:
    return view.school_name or view.submission.school_id


def _class_key(view: SubmissionView) -> str:
    if view.student is not None and view.student.class_name:
        return view.student.class_name
    return UNASSIGNED_CLASS


class AggregationEngine:
    """
    Builds analytics summaries from a submission repository.

    Attributes:
        repository: Source of persisted submissions
        recent_limit: Number of rows kept in ``recent_submissions``
    """

    def __init__(self, repository: SubmissionRepository, recent_limit: int = DEFAULT_RECENT_LIMIT):
        if recent_limit < 1:
            raise ValueError("recent_limit must be at least 1")
        self.repository = repository
        self.recent_limit = recent_limit

    @log_execution_time(logger)
    async def aggregate(self, filters: Optional[SubmissionFilters] = None) -> AnalyticsSummary:
        """
        Summarize the submissions matching ``filters``.

        Args:
            filters: Conjunctive filters; None or empty filters match everything

        Returns:
            Counts, averages, bucket distribution, breakdowns and the most
            recent submissions

        Raises:
            PersistenceError: If the submission store cannot be read
        """
        filters = filters or SubmissionFilters()
        views = await self.repository.find(filters)

        distribution = {bucket: 0 for bucket in Bucket}
        for view in views:
            distribution[view.submission.assigned_bucket] += 1

        summary = AnalyticsSummary(
            total_submissions=len(views),
            avg_score=_mean([v.submission.total_score for v in views]),
            avg_time_taken=_mean([v.submission.time_taken for v in views]),
            bucket_distribution=distribution,
            school_breakdown=_group(views, _school_key),
            class_breakdown=_group(views, _class_key),
            # find() returns newest first
            recent_submissions=[v.to_summary_dict() for v in views[:self.recent_limit]],
        )
        logger.debug(f"Aggregated {summary.total_submissions} submissions")
        return summary

    @log_execution_time(logger)
    async def student_report(self, filters: Optional[SubmissionFilters] = None) -> List[StudentReport]:
        """
        Group the matched submissions per student.

        Students are ordered by name, then id; each student's results keep
        the newest-first order of the query.
        """
        views = await self.repository.find(filters or SubmissionFilters())

        reports: Dict[str, StudentReport] = {}
        for view in views:
            submission = view.submission
            report = reports.get(submission.student_id)
            if report is None:
                student = view.student
                report = StudentReport(
                    student_id=submission.student_id,
                    name=student.name if student else None,
                    access_id=student.access_id if student else None,
                    class_name=student.class_name if student else None,
                    section=student.section if student else None,
                    roll_no=student.roll_no if student else None,
                    school_name=_school_key(view),
                )
                reports[submission.student_id] = report
            report.results.append(StudentResult(
                submission_id=submission.id,
                assessment_id=submission.assessment_id,
                assessment_title=view.assessment_title,
                total_score=submission.total_score,
                assigned_bucket=submission.assigned_bucket,
                primary_skill_area=submission.primary_skill_area.value if submission.primary_skill_area else None,
                secondary_skill_area=(
                    submission.secondary_skill_area.value if submission.secondary_skill_area else None
                ),
                submitted_at=submission.submitted_at.isoformat(),
            ))

        return sorted(reports.values(), key=lambda r: ((r.name or "").lower(), r.student_id))

    @log_execution_time(logger)
    async def export_rows(self, filters: Optional[SubmissionFilters] = None) -> List[Dict[str, Any]]:
        """
        Flatten the matched submissions for the export collaborator.

        Buckets carry their display label; section scores get one column
        per section.
        """
        views = await self.repository.find(filters or SubmissionFilters())

        rows = []
        for view in views:
            submission = view.submission
            student = view.student
            row = {
                "submissionId": submission.id,
                "studentName": student.name if student else None,
                "accessId": student.access_id if student else None,
                "className": student.class_name if student else None,
                "section": student.section if student else None,
                "rollNo": student.roll_no if student else None,
                "schoolName": _school_key(view),
                "assessmentTitle": view.assessment_title or submission.assessment_id,
                "totalScore": submission.total_score,
                "bucket": submission.assigned_bucket.display_label,
                "primarySkillArea": submission.primary_skill_area.value if submission.primary_skill_area else None,
                "secondarySkillArea": (
                    submission.secondary_skill_area.value if submission.secondary_skill_area else None
                ),
                "timeTaken": submission.time_taken,
                "submittedAt": submission.submitted_at.isoformat(),
            }
            for section, value in submission.section_scores.items():
                row[f"section{section.value}Score"] = value
            rows.append(row)
        return rows
