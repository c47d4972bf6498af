"""
Builders for catalogs, raw answers and stored submissions used across tests.

The standard catalog has 4 sections with 2 questions each; every question
has four options weighted 0, 1, 2 and 3, so each section is worth 6 marks
and the assessment 24.
"""

import datetime
from typing import Any, Dict, List, Optional, Sequence

from jaagrmind.catalog.model import Catalog, Question, QuestionOption, Section
from jaagrmind.submissions.models import Answer, Bucket, Submission

ASSESSMENT_ID = "AX1"
TOP_OPTION = 3


def build_catalog(assessment_id: str = ASSESSMENT_ID,
                  sections: Sequence[Section] = (Section.A, Section.A, Section.B, Section.B,
                                                 Section.C, Section.C, Section.D, Section.D),
                  weights: Sequence[int] = (0, 1, 2, 3)) -> Catalog:
    questions = tuple(
        Question(
            index=i,
            section=section,
            options=tuple(QuestionOption(text=f"Option {w}", mark_weight=w) for w in weights),
            text=f"Question {i + 1}",
        )
        for i, section in enumerate(sections)
    )
    return Catalog(assessment_id=assessment_id, questions=questions, title=f"Assessment {assessment_id}")


def answers_for(options: Sequence[Optional[int]], time_taken: Any = 5) -> List[Dict[str, Any]]:
    """Raw answer dictionaries, one per option, in catalog order."""
    return [
        {"questionIndex": i, "selectedOption": option, "timeTaken": time_taken}
        for i, option in enumerate(options)
    ]


def make_submission(submission_id: str,
                    student_id: str = "S1",
                    school_id: str = "SCH1",
                    assessment_id: str = ASSESSMENT_ID,
                    total_score: int = 12,
                    bucket: Bucket = Bucket.EMERGING,
                    time_taken: float = 60.0,
                    submitted_at: Optional[datetime.datetime] = None) -> Submission:
    """A stored submission built directly, for repository and analytics tests."""
    section_score = total_score // 4
    return Submission(
        id=submission_id,
        student_id=student_id,
        school_id=school_id,
        assessment_id=assessment_id,
        total_score=total_score,
        section_scores={s: section_score for s in Section},
        section_buckets={s: bucket for s in Section},
        primary_skill_area=Section.A,
        secondary_skill_area=Section.B,
        assigned_bucket=bucket,
        answers=(Answer(question_index=0, section=Section.A, selected_option=1, mark=1, time_taken=2.5),),
        time_taken=time_taken,
        submitted_at=submitted_at or datetime.datetime(2024, 5, 1, 10, 0, 0),
    )


