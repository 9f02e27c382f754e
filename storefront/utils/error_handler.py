"""
Custom error handling for the storefront.

Every failure leaving the Squarespace client is one normalized exception
shape. Callers branch on ``error_code`` or ``status_code``; the exception
class hierarchy exists for handler registration, not for control flow.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """
    Standardized error codes for the application.
    """

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Squarespace Commerce API
    SQUARESPACE_API_ERROR = "SQUARESPACE_API_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"


class ErrorSeverity(Enum):
    """
    Severity levels for errors.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AppException(Exception):
    """
    Base exception for all custom application exceptions.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Any = None,
        status_code: int = 500,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
    ):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_code: Standardized error code
            details: Additional error information
            status_code: Associated HTTP status code
            severity: Error severity
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details if details is not None else {}
        self.status_code = status_code
        self.severity = severity
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the exception to a dictionary.

        Returns:
            Dict: Representation of the exception
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
            "status_code": self.status_code,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


class ConfigurationException(AppException):
    """
    Raised when the application is missing required configuration.
    """

    def __init__(self, message: str, setting: Optional[str] = None, **kwargs):
        """
        Initialize the configuration exception.

        Args:
            message: Error message
            setting: Name of the missing or invalid setting
            **kwargs: Additional arguments for AppException
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.CONFIGURATION_ERROR,
            status_code=500,
            severity=ErrorSeverity.CRITICAL,
            **kwargs,
        )
        self.setting = setting
        if isinstance(self.details, dict):
            self.details.update({"setting": setting})


class ValidationException(AppException):
    """
    Raised when incoming data fails validation before reaching the vendor.
    """

    def __init__(
        self,
        message: str,
        field: str,
        invalid_value: Any = None,
        **kwargs,
    ):
        """
        Initialize the validation exception.

        Args:
            message: Error message
            field: Field that failed validation
            invalid_value: Value that caused the error
            **kwargs: Additional arguments for AppException
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            status_code=400,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.field = field
        self.invalid_value = invalid_value

        if isinstance(self.details, dict):
            self.details.update(
                {
                    "field": field,
                    "invalid_value": str(invalid_value) if invalid_value is not None else None,
                }
            )


class SquarespaceAPIException(AppException):
    """
    Normalized error for everything that goes wrong talking to Squarespace.

    ``status_code`` is the vendor's HTTP status, or 0 when no response was
    received. ``details`` carries the vendor error body untouched.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        details: Any = None,
        endpoint: Optional[str] = None,
    ):
        """
        Initialize the Squarespace API exception.

        Args:
            message: Error message (vendor-supplied when available)
            status_code: HTTP status returned by Squarespace, 0 for transport failures
            details: Raw vendor error payload
            endpoint: Endpoint that failed
        """
        if status_code == 0:
            error_code = ErrorCode.NETWORK_ERROR
            severity = ErrorSeverity.HIGH
        else:
            error_code = ErrorCode.SQUARESPACE_API_ERROR
            severity = ErrorSeverity.HIGH if status_code >= 500 else ErrorSeverity.MEDIUM

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            status_code=status_code,
            severity=severity,
        )
        self.endpoint = endpoint

    @property
    def is_network_error(self) -> bool:
        """True when the request never produced an HTTP response."""
        return self.error_code is ErrorCode.NETWORK_ERROR

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["endpoint"] = self.endpoint
        return data


def log_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Log an error consistently.

    Args:
        exception: Exception to log
        context: Additional context
        level: Logging level
    """
    context = context or {}

    log_data = {
        "exception_type": type(exception).__name__,
        "exception_message": str(exception),
        **context,
    }

    if isinstance(exception, AppException):
        message = f"{exception.error_code.value}: {exception.message}"
        log_data.update(
            {
                "error_code": exception.error_code.value,
                "severity": exception.severity.value,
                "status_code": exception.status_code,
            }
        )
    else:
        message = f"Unhandled exception: {type(exception).__name__}: {str(exception)}"

    logger.log(level, message, extra=log_data)
