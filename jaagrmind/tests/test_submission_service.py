"""
Tests for the submission service and persister.

This module covers the submit pipeline end to end on the in-memory
repositories, including duplicate and concurrent submissions and storage
failures.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from jaagrmind.catalog.model import Section
from jaagrmind.common.exceptions import (
    DuplicateSubmissionError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from jaagrmind.submissions.classification import BucketThresholds, classify
from jaagrmind.submissions.models import Bucket
from jaagrmind.submissions.persister import SubmissionPersister
from jaagrmind.submissions.scoring import score
from jaagrmind.submissions.service import SubmissionService
from jaagrmind.submissions.validation import validate

from factories import ASSESSMENT_ID, TOP_OPTION, answers_for


@pytest.fixture
def service(catalog_repository, submission_repository) -> SubmissionService:
    return SubmissionService(catalog_repository, submission_repository)


@pytest.mark.asyncio
async def test_submit_top_answers(service):
    submission = await service.submit("S1", ASSESSMENT_ID, "SCH1", answers_for([TOP_OPTION] * 8), 120)

    assert submission.total_score == 24
    assert submission.assigned_bucket == Bucket.STABLE
    assert submission.section_scores == {s: 6 for s in Section}
    assert submission.time_taken == 120.0
    assert len(submission.answers) == 8
    assert submission.id


@pytest.mark.asyncio
async def test_submit_zero_answers(service):
    submission = await service.submit("S1", ASSESSMENT_ID, "SCH1", answers_for([0] * 8))

    assert submission.assigned_bucket == Bucket.SUPPORT_NEEDED
    assert submission.primary_skill_area == Section.A
    assert submission.secondary_skill_area == Section.B
    assert submission.time_taken == 0.0


@pytest.mark.asyncio
async def test_submit_ignores_client_marks(service, submission_repository):
    tampered = [dict(answer, marks=3) for answer in answers_for([0] * 8)]

    submission = await service.submit("S1", ASSESSMENT_ID, "SCH1", tampered)

    assert submission.total_score == 0
    assert all(answer.mark == 0 for answer in submission.answers)


@pytest.mark.asyncio
async def test_submit_records_contact_details(service):
    submission = await service.submit(
        "S1", ASSESSMENT_ID, "SCH1", answers_for([1] * 8),
        mobile_number="9876543210", email="asha@example.com",
    )

    assert submission.mobile_number == "9876543210"
    assert submission.email == "asha@example.com"


@pytest.mark.asyncio
async def test_duplicate_submission_keeps_original(service):
    first = await service.submit("S1", ASSESSMENT_ID, "SCH1", answers_for([1] * 8))

    with pytest.raises(DuplicateSubmissionError) as exc_info:
        await service.submit("S1", ASSESSMENT_ID, "SCH1", answers_for([TOP_OPTION] * 8))

    assert exc_info.value.existing_id == first.id
    stored = await service.get_submission("S1", ASSESSMENT_ID)
    assert stored == first
    assert stored.total_score == 8


@pytest.mark.asyncio
async def test_concurrent_duplicate_submissions(service, submission_repository):
    results = await asyncio.gather(
        service.submit("S2", ASSESSMENT_ID, "SCH1", answers_for([1] * 8)),
        service.submit("S2", ASSESSMENT_ID, "SCH1", answers_for([2] * 8)),
        return_exceptions=True,
    )

    duplicates = [r for r in results if isinstance(r, DuplicateSubmissionError)]
    stored = [r for r in results if not isinstance(r, Exception)]
    assert len(duplicates) == 1
    assert len(stored) == 1
    assert await submission_repository.list_for_student("S2") == stored


@pytest.mark.asyncio
async def test_different_students_do_not_conflict(service):
    await service.submit("S1", ASSESSMENT_ID, "SCH1", answers_for([1] * 8))
    await service.submit("S2", ASSESSMENT_ID, "SCH1", answers_for([1] * 8))

    assert await service.completed_assessment_ids("S1") == [ASSESSMENT_ID]
    assert await service.completed_assessment_ids("S2") == [ASSESSMENT_ID]
    assert await service.completed_assessment_ids("S3") == []


@pytest.mark.asyncio
async def test_invalid_answers_persist_nothing(service, submission_repository):
    answers = answers_for([1] * 8)
    answers[4]["selectedOption"] = 9

    with pytest.raises(ValidationError) as exc_info:
        await service.submit("S1", ASSESSMENT_ID, "SCH1", answers)

    assert exc_info.value.question_index == 4
    assert await submission_repository.list_for_student("S1") == []


@pytest.mark.asyncio
async def test_unknown_assessment(service):
    with pytest.raises(NotFoundError):
        await service.submit("S1", "MISSING", "SCH1", answers_for([1] * 8))


@pytest.mark.asyncio
async def test_get_submission_not_found(service):
    with pytest.raises(NotFoundError):
        await service.get_submission("S1", ASSESSMENT_ID)


@pytest.mark.asyncio
async def test_thresholds_are_applied(catalog_repository, submission_repository):
    strict = SubmissionService(
        catalog_repository, submission_repository,
        thresholds=BucketThresholds(stable_min=0.95, emerging_min=0.8),
    )

    submission = await strict.submit("S1", ASSESSMENT_ID, "SCH1", answers_for([2] * 8))

    assert submission.total_score == 16
    assert submission.assigned_bucket == Bucket.SUPPORT_NEEDED


@pytest.mark.asyncio
async def test_persister_propagates_storage_failure(catalog):
    repository = AsyncMock()
    repository.insert_if_absent.side_effect = PersistenceError("store offline")
    persister = SubmissionPersister(repository)

    scored = score(catalog, validate(catalog, answers_for([1] * 8)))
    classification = classify(scored.total_score, scored.section_scores, catalog.section_maxima)

    with pytest.raises(PersistenceError):
        await persister.persist("S1", ASSESSMENT_ID, "SCH1", scored, classification, total_time=30)

    repository.insert_if_absent.assert_awaited_once()


@pytest.mark.asyncio
async def test_persister_builds_record(catalog, submission_repository):
    persister = SubmissionPersister(submission_repository)
    scored = score(catalog, validate(catalog, answers_for([3, 3, 0, 0, 1, 1, 2, 2])))
    classification = classify(scored.total_score, scored.section_scores, catalog.section_maxima)

    submission = await persister.persist(
        "S3", ASSESSMENT_ID, "SCH2", scored, classification, scored.answers, total_time=-5
    )

    assert submission.total_score == scored.total_score == 12
    assert submission.section_buckets == classification.section_buckets
    assert submission.primary_skill_area == Section.B
    assert submission.secondary_skill_area == Section.C
    assert submission.time_taken == 0.0


@pytest.mark.asyncio
async def test_persister_rejects_answers_that_differ_from_scored(catalog, submission_repository):
    persister = SubmissionPersister(submission_repository)
    scored = score(catalog, validate(catalog, answers_for([2] * 8)))
    classification = classify(scored.total_score, scored.section_scores, catalog.section_maxima)
    other = score(catalog, validate(catalog, answers_for([0] * 8)))

    with pytest.raises(ValueError):
        await persister.persist("S1", ASSESSMENT_ID, "SCH1", scored, classification, other.answers)

    assert await submission_repository.list_for_student("S1") == []
