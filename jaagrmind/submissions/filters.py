"""
Submission Filters

The filter configuration accepted by analytics queries. Every option is
optional; the options present combine as a conjunction of independent
predicates.
"""

import datetime
from typing import Any, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from jaagrmind.submissions.models import Bucket, SubmissionView


def _to_naive_utc(value: datetime.datetime) -> datetime.datetime:
    if value.tzinfo is not None:
        return value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return value


class SubmissionFilters(BaseModel):
    """
    Filters over persisted submissions.

    ``start_date``/``end_date`` are inclusive. A date without a time covers
    the whole day, so ``endDate=2024-05-31`` includes submissions made
    during May 31st.
    """
    model_config = ConfigDict(frozen=True)

    school_id: Optional[str] = Field(None, validation_alias=AliasChoices("schoolId", "school_id"))
    start_date: Optional[Union[datetime.datetime, datetime.date]] = Field(
        None, validation_alias=AliasChoices("startDate", "start_date")
    )
    end_date: Optional[Union[datetime.datetime, datetime.date]] = Field(
        None, validation_alias=AliasChoices("endDate", "end_date")
    )
    bucket: Optional[Bucket] = None
    class_name: Optional[str] = Field(None, validation_alias=AliasChoices("className", "class", "class_name"))
    section: Optional[str] = None
    assessment_id: Optional[str] = Field(None, validation_alias=AliasChoices("assessmentId", "assessment_id"))
    search: Optional[str] = None

    @field_validator("school_id", "class_name", "section", "assessment_id", "search", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Query strings send unused filters as empty values."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
            if len(v) == 10:
                return datetime.date.fromisoformat(v)
            return datetime.datetime.fromisoformat(v.replace("Z", "+00:00"))
        return v

    @field_validator("bucket", mode="before")
    @classmethod
    def parse_bucket(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return Bucket.parse(v)

    def lower_bound(self) -> Optional[datetime.datetime]:
        """Earliest submission time included, inclusive."""
        if self.start_date is None:
            return None
        if isinstance(self.start_date, datetime.datetime):
            return _to_naive_utc(self.start_date)
        return datetime.datetime.combine(self.start_date, datetime.time.min)

    def upper_bound(self) -> Optional[Tuple[datetime.datetime, bool]]:
        """
        Latest submission time included.

        Returns:
            Tuple of (bound, inclusive); a date-only end date becomes the
            following midnight, exclusive.
        """
        if self.end_date is None:
            return None
        if isinstance(self.end_date, datetime.datetime):
            return _to_naive_utc(self.end_date), True
        next_day = self.end_date + datetime.timedelta(days=1)
        return datetime.datetime.combine(next_day, datetime.time.min), False

    @property
    def needs_student(self) -> bool:
        """Whether any predicate reads student master data."""
        return bool(self.class_name or self.section or self.search)

    def matches(self, view: SubmissionView) -> bool:
        """Evaluate every present filter against one submission."""
        submission = view.submission

        if self.school_id is not None and submission.school_id != self.school_id:
            return False
        if self.assessment_id is not None and submission.assessment_id != self.assessment_id:
            return False
        if self.bucket is not None and submission.assigned_bucket != self.bucket:
            return False

        lower = self.lower_bound()
        if lower is not None and submission.submitted_at < lower:
            return False
        upper = self.upper_bound()
        if upper is not None:
            bound, inclusive = upper
            if submission.submitted_at > bound or (not inclusive and submission.submitted_at == bound):
                return False

        if self.needs_student:
            student = view.student
            if student is None:
                return False
            if self.class_name is not None and student.class_name != self.class_name:
                return False
            if self.section is not None and student.section != self.section:
                return False
            if self.search is not None:
                needle = self.search.lower()
                if needle not in (student.name or "").lower() and needle not in (student.access_id or "").lower():
                    return False

        return True
