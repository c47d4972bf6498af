"""
FastAPI dependencies for JaagrMind.

Services are created once in the application lifespan and kept on
``app.state``; routes receive them through these providers so tests can
swap the repositories behind them.
"""

from typing import Any, Dict

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from jaagrmind.analytics.engine import AggregationEngine
from jaagrmind.submissions.filters import SubmissionFilters
from jaagrmind.submissions.service import SubmissionService


def get_submission_service(request: Request) -> SubmissionService:
    return request.app.state.submission_service


def get_aggregation_engine(request: Request) -> AggregationEngine:
    return request.app.state.aggregation_engine


def get_filters(request: Request) -> SubmissionFilters:
    """
    Read analytics filters from the flat query string.

    Unknown parameters are ignored; malformed dates or bucket names are
    reported like any other request validation error.
    """
    params: Dict[str, Any] = dict(request.query_params)
    try:
        return SubmissionFilters.model_validate(params)
    except PydanticValidationError as e:
        errors = [
            {**error, "loc": ("query",) + tuple(error.get("loc", ()))}
            for error in e.errors(include_url=False, include_context=False)
        ]
        raise RequestValidationError(errors)
