"""
Tests for the HTTP surface.

The application runs on the in-memory repositories; these tests check
status codes, the error envelope and the messages students see.
"""

import logging
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from jaagrmind.common.error_handling import GENERIC_RETRY_MESSAGE
from jaagrmind.common.exceptions import PersistenceError
from jaagrmind.common.logger import JsonFormatter, configure_logger
from jaagrmind.config import Settings
from jaagrmind.main import create_app

from factories import ASSESSMENT_ID, TOP_OPTION, answers_for


def submission_body(options, student_id="S1", **extra):
    body = {
        "assessmentId": ASSESSMENT_ID,
        "studentId": student_id,
        "schoolId": "SCH1",
        "answers": answers_for(options),
        "totalTimeTaken": 95,
    }
    body.update(extra)
    return body


@pytest.fixture
def client(catalog_repository, submission_repository):
    app = create_app(
        catalog_repository=catalog_repository,
        submission_repository=submission_repository,
        app_settings=Settings(RECENT_SUBMISSIONS_LIMIT=5),
    )
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_submit_returns_created_record(client):
    response = client.post("/api/v1/submissions", json=submission_body([TOP_OPTION] * 8))

    assert response.status_code == 201
    data = response.json()
    assert data["totalScore"] == 24
    assert data["assignedBucket"] == "Stable"
    assert data["sectionScores"] == {"A": 6, "B": 6, "C": 6, "D": 6}
    assert data["timeTaken"] == 95.0
    assert len(data["answers"]) == 8


def test_submit_ignores_client_marks(client):
    body = submission_body([0] * 8)
    for answer in body["answers"]:
        answer["marks"] = 3

    response = client.post("/api/v1/submissions", json=body)

    assert response.status_code == 201
    assert response.json()["totalScore"] == 0
    assert response.json()["primarySkillArea"] == "A"
    assert response.json()["secondarySkillArea"] == "B"


def test_validation_error_names_question(client):
    body = submission_body([1] * 8)
    body["answers"][2]["selectedOption"] = 12

    response = client.post("/api/v1/submissions", json=body)

    assert response.status_code == 400
    data = response.json()
    assert data["status"] == "error"
    assert data["code"] == "validation_error"
    assert data["details"] == {"question_index": 2}
    assert "question index 2" in data["message"]


def test_duplicate_submission_conflict(client):
    first = client.post("/api/v1/submissions", json=submission_body([1] * 8))
    second = client.post("/api/v1/submissions", json=submission_body([2] * 8))

    assert second.status_code == 409
    assert second.json()["code"] == "duplicate_submission"
    assert second.json()["message"] == "You have already completed this assessment."
    assert second.json()["details"]["submission_id"] == first.json()["id"]


def test_unknown_assessment_is_not_found(client):
    response = client.post("/api/v1/submissions", json=submission_body([1] * 8, assessmentId="NOPE"))

    assert response.status_code == 404
    assert response.json()["code"] == "not_found_error"


def test_malformed_request_is_422(client):
    response = client.post("/api/v1/submissions", json={"studentId": "S1"})

    assert response.status_code == 422
    assert response.json()["code"] == "request_validation_error"


def test_storage_failure_is_generic(catalog_repository):
    failing = AsyncMock()
    failing.insert_if_absent.side_effect = PersistenceError("connection refused on 10.0.0.5")
    app = create_app(catalog_repository=catalog_repository, submission_repository=failing,
                     app_settings=Settings())

    with TestClient(app) as client:
        response = client.post("/api/v1/submissions", json=submission_body([1] * 8))

    assert response.status_code == 503
    assert response.json()["message"] == GENERIC_RETRY_MESSAGE
    assert "10.0.0.5" not in response.text


def test_get_submission_and_completed_assessments(client):
    client.post("/api/v1/submissions", json=submission_body([2] * 8))

    found = client.get(f"/api/v1/submissions/S1/{ASSESSMENT_ID}")
    missing = client.get(f"/api/v1/submissions/S2/{ASSESSMENT_ID}")
    completed = client.get("/api/v1/students/S1/completed-assessments")

    assert found.status_code == 200
    assert found.json()["totalScore"] == 16
    assert missing.status_code == 404
    assert completed.json() == {"studentId": "S1", "assessmentIds": [ASSESSMENT_ID]}


def test_analytics_summary_with_filters(client):
    client.post("/api/v1/submissions", json=submission_body([TOP_OPTION] * 8, student_id="S1"))
    client.post("/api/v1/submissions", json=submission_body([0] * 8, student_id="S2"))
    client.post("/api/v1/submissions", json=submission_body([0] * 8, student_id="S3", schoolId="SCH2"))

    everything = client.get("/api/v1/analytics").json()
    filtered = client.get("/api/v1/analytics", params={"schoolId": "SCH1", "bucket": "SupportNeeded"}).json()

    assert everything["totalSubmissions"] == 3
    assert everything["bucketDistribution"] == {"Stable": 1, "Emerging": 0, "SupportNeeded": 2}
    assert filtered["totalSubmissions"] == 1
    assert filtered["recentSubmissions"][0]["studentName"] == "Ravi Kumar"
    assert filtered["classBreakdown"] == {"8": {"total": 1, "avgScore": 0}}


def test_analytics_rejects_bad_filter(client):
    response = client.get("/api/v1/analytics", params={"bucket": "Thriving"})

    assert response.status_code == 422


def test_student_analytics_and_export_rows(client):
    client.post("/api/v1/submissions", json=submission_body([1] * 8, student_id="S1"))
    client.post("/api/v1/submissions", json=submission_body([2] * 8, student_id="S2"))

    students = client.get("/api/v1/analytics/students", params={"search": "asha"}).json()
    export = client.get("/api/v1/analytics/export-rows", params={"className": "8"}).json()

    assert students["totalStudents"] == 1
    assert students["students"][0]["accessId"] == "JM-001"
    assert export["count"] == 2
    assert {row["bucket"] for row in export["rows"]} == {"Skill Support Needed", "Skill Emerging"}


def test_logging_follows_settings(catalog_repository, submission_repository):
    app_logger = logging.getLogger("jaagrmind")
    try:
        create_app(
            catalog_repository=catalog_repository,
            submission_repository=submission_repository,
            app_settings=Settings(LOG_LEVEL="WARNING", LOG_JSON=True),
        )

        assert app_logger.level == logging.WARNING
        assert app_logger.handlers
        assert all(isinstance(h.formatter, JsonFormatter) for h in app_logger.handlers)
    finally:
        configure_logger(name="jaagrmind")
