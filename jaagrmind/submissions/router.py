"""
Submission API Router

Endpoints for submitting an assessment and reading back what a student has
completed. Domain errors propagate to the handlers registered in
``jaagrmind.common.error_handling``.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Path, status
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from jaagrmind.common.logger import app_logger
from jaagrmind.dependencies import get_submission_service
from jaagrmind.submissions.service import SubmissionService

# Set up module logger
logger = app_logger.getChild("submissions.router")

router = APIRouter(tags=["Submissions"])


class AnswerRequest(BaseModel):
    """
    One answer as posted by the assessment client.

    Types are left loose on purpose so the validator can report the
    offending question index instead of a schema error.
    """
    model_config = ConfigDict(populate_by_name=True)

    question_index: Optional[Any] = Field(None, alias="questionIndex")
    selected_option: Optional[Any] = Field(None, alias="selectedOption")
    time_taken: Optional[Any] = Field(
        None, validation_alias=AliasChoices("timeTaken", "timeTakenForQuestion", "time_taken")
    )
    marks: Optional[Any] = Field(None, description="Ignored; marks are always recomputed")

    def to_raw(self) -> Dict[str, Any]:
        return {
            "questionIndex": self.question_index,
            "selectedOption": self.selected_option,
            "timeTaken": self.time_taken,
            "marks": self.marks,
        }


class SubmissionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    assessment_id: str = Field(..., alias="assessmentId", min_length=1)
    student_id: str = Field(..., alias="studentId", min_length=1)
    school_id: str = Field(..., alias="schoolId", min_length=1)
    answers: List[Optional[AnswerRequest]] = Field(..., description="One entry per question")
    total_time_taken: Optional[Any] = Field(
        None, validation_alias=AliasChoices("totalTimeTaken", "timeTaken", "total_time_taken")
    )
    mobile_number: Optional[str] = Field(None, alias="mobileNumber")
    email: Optional[str] = None


class CompletedAssessmentsResponse(BaseModel):
    student_id: str = Field(..., serialization_alias="studentId")
    assessment_ids: List[str] = Field(..., serialization_alias="assessmentIds")


@router.post("/submissions", status_code=status.HTTP_201_CREATED)
async def create_submission(
    request: SubmissionRequest,
    service: SubmissionService = Depends(get_submission_service),
) -> Dict[str, Any]:
    """
    Score and record a completed assessment.

    Returns:
        The stored submission with server-computed scores and buckets
    """
    submission = await service.submit(
        student_id=request.student_id,
        assessment_id=request.assessment_id,
        school_id=request.school_id,
        answers=[answer.to_raw() if answer is not None else None for answer in request.answers],
        total_time=request.total_time_taken,
        mobile_number=request.mobile_number,
        email=request.email,
    )
    return submission.to_dict()


@router.get("/submissions/{student_id}/{assessment_id}")
async def get_submission(
    student_id: str = Path(..., description="The student ID"),
    assessment_id: str = Path(..., description="The assessment ID"),
    service: SubmissionService = Depends(get_submission_service),
) -> Dict[str, Any]:
    submission = await service.get_submission(student_id, assessment_id)
    return submission.to_dict()


@router.get("/students/{student_id}/completed-assessments")
async def get_completed_assessments(
    student_id: str = Path(..., description="The student ID"),
    service: SubmissionService = Depends(get_submission_service),
) -> Dict[str, Any]:
    """List the assessments a student has already completed, so the test picker can hide them."""
    assessment_ids = await service.completed_assessment_ids(student_id)
    return CompletedAssessmentsResponse(
        student_id=student_id, assessment_ids=assessment_ids
    ).model_dump(by_alias=True)
