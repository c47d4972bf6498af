"""
Submissions module for JaagrMind.

This module contains the submit pipeline (validation, scoring,
classification, persistence) and the submission repositories.
"""

from .models import (
    Answer,
    Bucket,
    Classification,
    RawAnswer,
    ScoredAnswers,
    StudentProfile,
    Submission,
    SubmissionView,
    ValidatedAnswer,
)
from .filters import SubmissionFilters
from .validation import validate
from .scoring import score
from .classification import BucketThresholds, bucket_of, classify, rank_skill_areas
from .repository import SubmissionRepository
from .memory_repository import MemorySubmissionRepository
from .persister import SubmissionPersister
from .service import SubmissionService

__all__ = [
    'Answer',
    'Bucket',
    'Classification',
    'RawAnswer',
    'ScoredAnswers',
    'StudentProfile',
    'Submission',
    'SubmissionView',
    'ValidatedAnswer',
    'SubmissionFilters',
    'validate',
    'score',
    'BucketThresholds',
    'bucket_of',
    'classify',
    'rank_skill_areas',
    'SubmissionRepository',
    'MemorySubmissionRepository',
    'SubmissionPersister',
    'SubmissionService',
]
