"""
Error Handling for JaagrMind

This module turns the domain error taxonomy into API responses:
1. Standard error codes and severities
2. Structured error information
3. Error response generation and logging
4. FastAPI exception handler registration

Validation and duplicate errors keep their specific message so the student
sees what went wrong. Persistence and classification failures are reduced to
a generic message; their details only go to the log.
"""

import logging
from enum import Enum
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from jaagrmind.common.exceptions import (
    BaseError,
    ClassificationError,
    ConfigurationError,
    DuplicateSubmissionError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

logger = logging.getLogger("jaagrmind.errors")


class ErrorSeverity(Enum):
    """Severity levels for errors"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCode(Enum):
    """Standard error codes for JaagrMind"""
    UNKNOWN_ERROR = "unknown_error"
    REQUEST_VALIDATION_ERROR = "request_validation_error"
    VALIDATION_ERROR = "validation_error"
    NOT_FOUND_ERROR = "not_found_error"
    DUPLICATE_SUBMISSION = "duplicate_submission"
    PERSISTENCE_ERROR = "persistence_error"
    CLASSIFICATION_ERROR = "classification_error"
    CONFIGURATION_ERROR = "configuration_error"


GENERIC_RETRY_MESSAGE = "We could not save your submission right now. Please try again."
GENERIC_INTERNAL_MESSAGE = "Something went wrong while processing the request."


class ErrorInfo(BaseModel):
    """Structured information about an error"""
    model_config = ConfigDict(use_enum_values=True)

    code: ErrorCode
    message: str
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    timestamp: datetime = Field(default_factory=datetime.now)
    severity: ErrorSeverity = ErrorSeverity.ERROR
    details: Optional[Dict[str, Any]] = None


def describe_error(error: Exception) -> ErrorInfo:
    """
    Map an exception onto the error code, HTTP status and public message.

    Args:
        error: The exception raised by the service layer

    Returns:
        ErrorInfo safe to expose to API clients
    """
    if isinstance(error, ValidationError):
        details = {"question_index": error.question_index} if error.question_index is not None else None
        return ErrorInfo(
            code=ErrorCode.VALIDATION_ERROR,
            message=error.message,
            status_code=status.HTTP_400_BAD_REQUEST,
            severity=ErrorSeverity.WARNING,
            details=details,
        )
    if isinstance(error, NotFoundError):
        return ErrorInfo(
            code=ErrorCode.NOT_FOUND_ERROR,
            message=error.message,
            status_code=status.HTTP_404_NOT_FOUND,
            severity=ErrorSeverity.WARNING,
            details={"resource_type": error.resource_type, "resource_id": str(error.resource_id)},
        )
    if isinstance(error, DuplicateSubmissionError):
        details = {"student_id": error.student_id, "assessment_id": error.assessment_id}
        if error.existing_id:
            details["submission_id"] = error.existing_id
        return ErrorInfo(
            code=ErrorCode.DUPLICATE_SUBMISSION,
            message="You have already completed this assessment.",
            status_code=status.HTTP_409_CONFLICT,
            severity=ErrorSeverity.INFO,
            details=details,
        )
    if isinstance(error, PersistenceError):
        return ErrorInfo(
            code=ErrorCode.PERSISTENCE_ERROR,
            message=GENERIC_RETRY_MESSAGE,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            severity=ErrorSeverity.ERROR,
        )
    if isinstance(error, ClassificationError):
        return ErrorInfo(
            code=ErrorCode.CLASSIFICATION_ERROR,
            message=GENERIC_INTERNAL_MESSAGE,
            severity=ErrorSeverity.CRITICAL,
        )
    if isinstance(error, ConfigurationError):
        return ErrorInfo(
            code=ErrorCode.CONFIGURATION_ERROR,
            message=GENERIC_INTERNAL_MESSAGE,
            severity=ErrorSeverity.CRITICAL,
        )
    return ErrorInfo(code=ErrorCode.UNKNOWN_ERROR, message=GENERIC_INTERNAL_MESSAGE)


def error_response(error: Exception, include_details: bool = True) -> Tuple[int, Dict[str, Any]]:
    """
    Generate a standardized API error response.

    Args:
        error: The error to generate a response for
        include_details: Whether to include error details

    Returns:
        Tuple of HTTP status code and response body
    """
    error_info = describe_error(error)

    response = {
        "status": "error",
        "code": error_info.code,
        "message": error_info.message
    }
    if include_details and error_info.details:
        response["details"] = error_info.details

    return error_info.status_code, response


_LOG_LEVELS = {
    ErrorSeverity.INFO.value: logging.INFO,
    ErrorSeverity.WARNING.value: logging.WARNING,
    ErrorSeverity.ERROR.value: logging.ERROR,
    ErrorSeverity.CRITICAL.value: logging.CRITICAL,
}


def log_error(error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """
    Log an error at the level matching its severity.

    Internal failures are logged with their traceback and cause; expected
    rejections (validation, duplicates) are logged as one line.

    Args:
        error: The error to log
        context: Additional context to include
    """
    error_info = describe_error(error)
    level = _LOG_LEVELS[error_info.severity]
    message = f"[{error_info.code}] {error}"
    if context:
        message += " (context: " + ", ".join(f"{k}={v}" for k, v in context.items()) + ")"
    cause = error.original_exception if isinstance(error, BaseError) else None
    if cause is not None:
        message += f" caused by {type(cause).__name__}: {cause}"

    exc_info = (type(error), error, error.__traceback__) if level >= logging.ERROR else None
    logger.log(level, message, exc_info=exc_info)


async def domain_exception_handler(request: Request, exc: BaseError) -> JSONResponse:
    """Render a domain error raised anywhere below a route."""
    log_error(exc, context={"path": request.url.path})
    status_code, body = error_response(exc)
    return JSONResponse(status_code=status_code, content=body)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle request schema errors and return a standardized response.

    Args:
        request: The incoming request
        exc: The validation exception

    Returns:
        A JSON response with error details
    """
    error_details = []
    for error in exc.errors():
        error_details.append({
            "location": list(error.get("loc", [])),
            "message": error.get("msg", "Unknown validation error"),
            "type": error.get("type", "")
        })

    return JSONResponse(
        status_code=422,
        content={
            "status": "error",
            "code": ErrorCode.REQUEST_VALIDATION_ERROR.value,
            "message": "Validation error",
            "details": error_details
        }
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain and request validation handlers to the application."""
    app.add_exception_handler(BaseError, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
