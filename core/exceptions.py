"""Custom exception classes for the application.

Defines domain-specific exceptions that can be raised throughout the
application and handled consistently by exception handlers.
"""

from typing import Optional, Any, Dict


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: Any):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'NutritionProfile').
            identifier: ID or identifier that was not found.
        """
        message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class ValidationError(AppException):
    """Exception raised when caller input fails validation.

    The offending field is always named so the caller can fix exactly that
    value and resubmit.
    """

    def __init__(self, message: str, field: Optional[str] = None, reason: Optional[str] = None):
        """Initialize validation error.

        Args:
            message: Validation error message.
            field: Name of the field that failed validation.
            reason: Short machine-friendly reason (e.g. 'missing', 'out_of_range').
        """
        details = {}
        if field:
            details["field"] = field
        if reason:
            details["reason"] = reason
        self.field = field
        self.reason = reason
        super().__init__(message, status_code=400, details=details)


class DatabaseError(AppException):
    """Exception raised when database operations fail."""

    def __init__(self, message: str, operation: Optional[str] = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=500, details=details)


class ConfigurationError(AppException):
    """Exception raised when application configuration is invalid."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        """Initialize configuration error.

        Args:
            message: Configuration error message.
            config_key: Optional configuration key that is invalid.
        """
        details = {"config_key": config_key} if config_key else {}
        self.config_key = config_key
        super().__init__(message, status_code=500, details=details)


class InternalError(AppException):
    """Unexpected failure while computing a result.

    The caller only ever sees a generic message; the input context goes to
    the log.
    """

    def __init__(self, message: str = "An internal error occurred while computing the assessment"):
        super().__init__(message, status_code=500)
