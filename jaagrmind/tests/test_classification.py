"""
Tests for the classification engine.

This module covers:
1. Band boundaries of bucket_of
2. Overall and per-section buckets
3. Skill-area ranking and tie-breaks
4. Threshold table errors
"""

import logging

import pytest

from jaagrmind.catalog.model import Section
from jaagrmind.common.exceptions import ClassificationError
from jaagrmind.submissions.classification import (
    BucketThresholds,
    bucket_of,
    classify,
    rank_skill_areas,
)
from jaagrmind.submissions.models import Bucket

SECTION_MAXIMA = {Section.A: 6, Section.B: 6, Section.C: 6, Section.D: 6}


@pytest.mark.parametrize("score,expected", [
    (10, Bucket.STABLE),
    (7, Bucket.STABLE),
    (6, Bucket.EMERGING),
    (4, Bucket.EMERGING),
    (3, Bucket.SUPPORT_NEEDED),
    (0, Bucket.SUPPORT_NEEDED),
])
def test_bucket_of_default_bands(score, expected):
    assert bucket_of(score, 10) == expected


def test_bucket_of_zero_maximum_is_stable():
    assert bucket_of(0, 0) == Bucket.STABLE


def test_bucket_of_custom_thresholds():
    thresholds = BucketThresholds(stable_min=0.9, emerging_min=0.5)

    assert bucket_of(8, 10, thresholds) == Bucket.EMERGING
    assert bucket_of(9, 10, thresholds) == Bucket.STABLE
    assert bucket_of(4, 10, thresholds) == Bucket.SUPPORT_NEEDED


@pytest.mark.parametrize("score,max_score", [(11, 10), (-1, 10), (0, -1)])
def test_bucket_of_rejects_impossible_scores(score, max_score):
    with pytest.raises(ClassificationError):
        bucket_of(score, max_score)


def test_bucket_of_rejects_incomplete_band_table():
    bands = [(Bucket.STABLE, 0.7), (Bucket.EMERGING, 0.4)]

    with pytest.raises(ClassificationError):
        bucket_of(1, 10, bands=bands)


@pytest.mark.parametrize("stable,emerging", [(0.4, 0.7), (0.5, 0.5), (1.2, 0.4), (0.7, 0.0)])
def test_invalid_thresholds_are_rejected(stable, emerging):
    with pytest.raises(ClassificationError):
        BucketThresholds(stable_min=stable, emerging_min=emerging)


def test_all_top_answers_are_stable():
    result = classify(24, {s: 6 for s in Section}, SECTION_MAXIMA)

    assert result.assigned_bucket == Bucket.STABLE
    assert all(bucket == Bucket.STABLE for bucket in result.section_buckets.values())


def test_all_zero_answers_pick_a_and_b():
    result = classify(0, {s: 0 for s in Section}, SECTION_MAXIMA)

    assert result.assigned_bucket == Bucket.SUPPORT_NEEDED
    assert result.primary_skill_area == Section.A
    assert result.secondary_skill_area == Section.B


def test_skill_areas_follow_severity_then_score():
    section_scores = {Section.A: 6, Section.B: 3, Section.C: 1, Section.D: 2}

    result = classify(12, section_scores, SECTION_MAXIMA)

    assert result.section_buckets == {
        Section.A: Bucket.STABLE,
        Section.B: Bucket.EMERGING,
        Section.C: Bucket.SUPPORT_NEEDED,
        Section.D: Bucket.SUPPORT_NEEDED,
    }
    assert result.assigned_bucket == Bucket.EMERGING
    assert result.primary_skill_area == Section.C
    assert result.secondary_skill_area == Section.D


def test_skill_areas_are_distinct():
    result = classify(12, {s: 3 for s in Section}, SECTION_MAXIMA)

    assert result.primary_skill_area != result.secondary_skill_area
    assert (result.primary_skill_area, result.secondary_skill_area) == (Section.A, Section.B)


def test_identical_scores_give_identical_buckets():
    scores = {Section.A: 5, Section.B: 2, Section.C: 4, Section.D: 0}

    first = classify(11, scores, SECTION_MAXIMA)
    second = classify(11, dict(scores), SECTION_MAXIMA)

    assert first == second


def test_sections_without_questions_have_no_bucket():
    maxima = {Section.B: 6}

    result = classify(2, {Section.A: 0, Section.B: 2, Section.C: 0, Section.D: 0}, maxima)

    assert result.section_buckets[Section.A] is None
    assert result.section_buckets[Section.B] == Bucket.SUPPORT_NEEDED
    assert result.primary_skill_area == Section.B
    assert result.secondary_skill_area is None


def test_rank_skill_areas_skips_unbucketed_sections():
    ranked = rank_skill_areas(
        {Section.A: 1, Section.B: 0, Section.C: 5, Section.D: 0},
        {Section.A: Bucket.SUPPORT_NEEDED, Section.B: None, Section.C: Bucket.STABLE, Section.D: Bucket.SUPPORT_NEEDED},
    )

    assert ranked == [Section.D, Section.A, Section.C]


def test_classification_error_is_logged_as_critical(caplog):
    with caplog.at_level(logging.CRITICAL, logger="jaagrmind.submissions.classification"):
        with pytest.raises(ClassificationError):
            classify(30, {s: 6 for s in Section}, SECTION_MAXIMA)

    assert any(record.levelno == logging.CRITICAL for record in caplog.records)


def test_thresholds_from_settings():
    class FakeSettings:
        STABLE_MIN_FRACTION = 0.8
        EMERGING_MIN_FRACTION = 0.5

    thresholds = BucketThresholds.from_settings(FakeSettings())

    assert thresholds.bands == [
        (Bucket.STABLE, 0.8),
        (Bucket.EMERGING, 0.5),
        (Bucket.SUPPORT_NEEDED, 0.0),
    ]
