"""
Response Validator

Checks a submitted answer list against the catalog before anything is
scored. A missing or invalid choice rejects the whole submission; missing
or invalid timing does not, it is recorded as 0 seconds.
"""

import math
import numbers
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from jaagrmind.catalog.model import Catalog
from jaagrmind.common.exceptions import ValidationError
from jaagrmind.submissions.models import RawAnswer, ValidatedAnswer

RawAnswerInput = Union[RawAnswer, Mapping[str, Any], None]


def _as_int(value: Any) -> Optional[int]:
    """Return value as an int when it is an integral number, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def normalize_time(value: Any) -> float:
    """Seconds spent on a question; anything unusable counts as 0."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return 0.0
    seconds = float(value)
    if not math.isfinite(seconds) or seconds < 0:
        return 0.0
    return seconds


def validate(catalog: Catalog, raw_answers: Sequence[RawAnswerInput]) -> List[ValidatedAnswer]:
    """
    Validate raw answers and align them 1:1 with catalog order.

    Entries without a question index are matched by their position in the
    list. Client supplied marks are dropped here.

    Args:
        catalog: The assessment's question catalog
        raw_answers: One entry per question, as submitted

    Returns:
        Validated answers ordered by question index

    Raises:
        ValidationError: On a missing, duplicate or unknown question index,
            or a missing or out-of-range option
    """
    question_count = len(catalog)
    if question_count == 0:
        raise ValidationError(f"Assessment {catalog.assessment_id} has no questions to answer")

    by_index: Dict[int, ValidatedAnswer] = {}

    for position, raw in enumerate(raw_answers):
        if raw is None:
            raise ValidationError(
                f"Question index {position} has not been answered", question_index=position
            )
        if not isinstance(raw, RawAnswer):
            raw = RawAnswer.from_dict(raw)

        if raw.question_index is None:
            index = position
        else:
            index = _as_int(raw.question_index)
            if index is None:
                raise ValidationError(
                    f"Answer at position {position} has an invalid question index {raw.question_index!r}",
                    question_index=position,
                )

        if not 0 <= index < question_count:
            raise ValidationError(
                f"Question index {index} does not exist in this assessment", question_index=index
            )
        if index in by_index:
            raise ValidationError(
                f"Question index {index} was answered more than once", question_index=index
            )

        if raw.selected_option is None:
            raise ValidationError(
                f"No option selected for question index {index}", question_index=index
            )
        option = _as_int(raw.selected_option)
        if option is None:
            raise ValidationError(
                f"Invalid option {raw.selected_option!r} for question index {index}", question_index=index
            )
        option_count = catalog.question(index).option_count
        if not 0 <= option < option_count:
            raise ValidationError(
                f"Option {option} is not valid for question index {index} "
                f"(expected 0 to {option_count - 1})",
                question_index=index,
            )

        by_index[index] = ValidatedAnswer(
            question_index=index,
            selected_option=option,
            time_taken=normalize_time(raw.time_taken),
        )

    for index in range(question_count):
        if index not in by_index:
            raise ValidationError(
                f"Question index {index} has not been answered", question_index=index
            )

    return [by_index[index] for index in range(question_count)]
