"""
Common Exception Classes

This module defines the error taxonomy of the submission pipeline and the
analytics read path.
"""

from typing import Optional, Any


class BaseError(Exception):
    """Base class for all custom exceptions."""

    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            original_exception: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.original_exception = original_exception


class ValidationError(BaseError):
    """
    Raised when a submitted answer set is malformed, incomplete or refers to
    options that do not exist. Nothing is persisted when it is raised.
    """

    def __init__(self, message: str, question_index: Optional[int] = None):
        """
        Initialize the validation error.

        Args:
            message: Error message, suitable for showing to the student
            question_index: Index of the offending question, when known
        """
        super().__init__(message)
        self.question_index = question_index


class DuplicateSubmissionError(BaseError):
    """Raised when a student submits an assessment they already completed."""

    def __init__(self, student_id: str, assessment_id: str, existing_id: Optional[str] = None):
        """
        Initialize the duplicate submission error.

        Args:
            student_id: The submitting student
            assessment_id: The assessment already submitted
            existing_id: ID of the submission already on record, if known
        """
        super().__init__(
            f"Student {student_id} has already submitted assessment {assessment_id}"
        )
        self.student_id = student_id
        self.assessment_id = assessment_id
        self.existing_id = existing_id


class PersistenceError(BaseError):
    """Raised when the submission store cannot be reached or the write fails."""

    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(f"Persistence error: {message}", original_exception)


class ClassificationError(BaseError):
    """
    Raised when a score cannot be mapped to a bucket.

    Only a broken threshold table or an inconsistent score/maximum pair can
    cause this; it is never resolved by falling back to a default bucket.
    """

    def __init__(self, message: str):
        super().__init__(f"Classification error: {message}")


class ConfigurationError(BaseError):
    """Exception raised for configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        """
        Initialize the configuration error.

        Args:
            message: Error message
            config_key: The configuration key that caused the error
        """
        super().__init__(f"Configuration error: {message}")
        self.config_key = config_key


class NotFoundError(BaseError):
    """Exception raised when a resource is not found."""

    def __init__(self, resource_type: str, resource_id: Any):
        """
        Initialize the not found error.

        Args:
            resource_type: Type of resource that wasn't found
            resource_id: ID of the resource that wasn't found
        """
        super().__init__(f"{resource_type} with ID {resource_id} not found")
        self.resource_type = resource_type
        self.resource_id = resource_id
