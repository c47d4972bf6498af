"""
Tests for the response validator.

This module checks that:
1. Complete answer sets are aligned with catalog order
2. Missing, duplicate and unknown question indices are rejected
3. Invalid options are rejected and invalid timing is tolerated
"""

import math

import pytest

from jaagrmind.catalog.model import Catalog
from jaagrmind.common.exceptions import ValidationError
from jaagrmind.submissions.models import RawAnswer
from jaagrmind.submissions.validation import normalize_time, validate

from factories import answers_for


def test_validate_aligns_with_catalog_order(catalog):
    raw = answers_for([3, 2, 1, 0, 0, 1, 2, 3])
    raw.reverse()

    validated = validate(catalog, raw)

    assert [a.question_index for a in validated] == list(range(8))
    assert [a.selected_option for a in validated] == [3, 2, 1, 0, 0, 1, 2, 3]
    assert all(a.time_taken == 5.0 for a in validated)


def test_validate_uses_position_when_index_missing(catalog):
    raw = [{"selectedOption": 1, "timeTaken": 2} for _ in range(8)]

    validated = validate(catalog, raw)

    assert [a.question_index for a in validated] == list(range(8))


def test_validate_accepts_raw_answer_objects(catalog):
    raw = [RawAnswer(question_index=i, selected_option=0) for i in range(8)]

    validated = validate(catalog, raw)

    assert len(validated) == 8
    assert all(a.time_taken == 0.0 for a in validated)


def test_missing_question_is_rejected(catalog):
    raw = answers_for([1] * 8)
    del raw[5]

    with pytest.raises(ValidationError) as exc_info:
        validate(catalog, raw)

    assert exc_info.value.question_index == 5
    assert "has not been answered" in exc_info.value.message


def test_duplicate_question_is_rejected(catalog):
    raw = answers_for([1] * 8)
    raw.append({"questionIndex": 2, "selectedOption": 0})

    with pytest.raises(ValidationError) as exc_info:
        validate(catalog, raw)

    assert exc_info.value.question_index == 2
    assert "more than once" in exc_info.value.message


def test_unknown_question_index_is_rejected(catalog):
    raw = answers_for([1] * 7)
    raw.append({"questionIndex": 8, "selectedOption": 0})

    with pytest.raises(ValidationError) as exc_info:
        validate(catalog, raw)

    assert exc_info.value.question_index == 8


@pytest.mark.parametrize("option", [4, -1, None, "two", True, 1.5])
def test_invalid_option_is_rejected(catalog, option):
    raw = answers_for([1] * 8)
    raw[3]["selectedOption"] = option

    with pytest.raises(ValidationError) as exc_info:
        validate(catalog, raw)

    assert exc_info.value.question_index == 3


@pytest.mark.parametrize("option, message", [
    (None, "No option selected for question index 3"),
    ("2", "Invalid option '2' for question index 3"),
    (1.5, "Invalid option 1.5 for question index 3"),
])
def test_option_error_messages(catalog, option, message):
    raw = answers_for([1] * 8)
    raw[3]["selectedOption"] = option

    with pytest.raises(ValidationError) as exc_info:
        validate(catalog, raw)

    assert exc_info.value.message == message


def test_none_entry_is_rejected(catalog):
    raw = answers_for([1] * 8)
    raw[0] = None

    with pytest.raises(ValidationError) as exc_info:
        validate(catalog, raw)

    assert exc_info.value.question_index == 0


def test_out_of_range_message_names_valid_range(catalog):
    raw = answers_for([1] * 8)
    raw[6]["selectedOption"] = 7

    with pytest.raises(ValidationError) as exc_info:
        validate(catalog, raw)

    assert exc_info.value.message == "Option 7 is not valid for question index 6 (expected 0 to 3)"


def test_invalid_timing_becomes_zero(catalog):
    raw = answers_for([1] * 8)
    raw[0]["timeTaken"] = -4
    raw[1]["timeTaken"] = "slow"
    raw[2]["timeTaken"] = float("nan")
    raw[3]["timeTaken"] = None

    validated = validate(catalog, raw)

    assert [a.time_taken for a in validated[:4]] == [0.0, 0.0, 0.0, 0.0]
    assert validated[4].time_taken == 5.0


def test_empty_catalog_is_rejected():
    empty = Catalog(assessment_id="EMPTY", questions=())

    with pytest.raises(ValidationError):
        validate(empty, [])


def test_normalize_time():
    assert normalize_time(12) == 12.0
    assert normalize_time(0.5) == 0.5
    assert normalize_time(math.inf) == 0.0
    assert normalize_time(False) == 0.0
