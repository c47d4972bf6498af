"""Shared fixtures for the JaagrMind tests."""

import pytest

from jaagrmind.catalog.memory_repository import MemoryCatalogRepository
from jaagrmind.catalog.model import Catalog
from jaagrmind.submissions.memory_repository import MemorySubmissionRepository
from jaagrmind.submissions.models import StudentProfile

from factories import ASSESSMENT_ID, build_catalog


@pytest.fixture
def catalog() -> Catalog:
    return build_catalog()


@pytest.fixture
def catalog_repository(catalog) -> MemoryCatalogRepository:
    return MemoryCatalogRepository([catalog])


@pytest.fixture
def submission_repository() -> MemorySubmissionRepository:
    repository = MemorySubmissionRepository()
    repository.add_school("SCH1", "Green Valley School")
    repository.add_school("SCH2", "Hill Top School")
    repository.add_assessment(ASSESSMENT_ID, "Assessment AX1")
    repository.add_student(StudentProfile("S1", name="Asha Rao", access_id="JM-001", class_name="8",
                                          section="A", school_id="SCH1", roll_no="1"))
    repository.add_student(StudentProfile("S2", name="Ravi Kumar", access_id="JM-002", class_name="8",
                                          section="B", school_id="SCH1", roll_no="2"))
    repository.add_student(StudentProfile("S3", name="Meera Iyer", access_id="JM-003", class_name="9",
                                          section="A", school_id="SCH2", roll_no="1"))
    return repository
