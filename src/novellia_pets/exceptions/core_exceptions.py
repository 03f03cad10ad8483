"""
Core exceptions for the novellia-pets package.

This module defines the exception hierarchy used throughout the pets
service. Every exception maps onto exactly one HTTP outcome so that request
handlers can convert domain outcomes without inspecting messages.
"""

import logging
import time
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse, urlunparse


class NovelliaException(Exception):
    """
    Base exception class for all novellia-pets exceptions.

    Provides a consistent interface for error handling across the package.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary format.

        Returns:
            Dictionary representation of the exception
        """
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "timestamp": time.time(),
        }

    def __str__(self) -> str:
        """String representation of the exception."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ValidationException(NovelliaException):
    """Exception raised when a request payload fails validation."""

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        """
        Initialize validation exception.

        Args:
            message: Error message
            errors: Itemized field errors, each ``{"path": [...], "message": str}``
        """
        self.errors = list(errors or [])
        details = {"validation_errors": self.errors} if self.errors else {}

        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class ConflictException(ValidationException):
    """Exception raised when a write would duplicate an existing entity."""

    def __init__(
        self,
        message: str = "Pet already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize conflict exception.

        Args:
            message: Error message
            context: Identifying values of the conflicting entity
        """
        super().__init__(message=message, errors=None)
        self.error_code = "CONFLICT_ERROR"
        if context:
            self.details["context"] = context


class NotFoundException(NovelliaException):
    """Exception raised when the targeted pet or record does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: Optional[Any] = None):
        """
        Initialize not-found exception.

        Args:
            entity: Human-readable entity name, e.g. ``"Pet"``
            entity_id: Identifier that was looked up
        """
        details = {"entity": entity}
        if entity_id is not None:
            details["id"] = entity_id

        super().__init__(
            message=f"{entity} not found",
            error_code="NOT_FOUND",
            details=details,
        )
        self.entity = entity
        self.entity_id = entity_id


class DatabaseException(NovelliaException):
    """Base exception for database-related errors."""

    status_code = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
        retry_count: int = 0,
        max_retries: int = 3,
    ):
        """
        Initialize database exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Additional error details
            original_error: Original exception that caused this error
            retry_count: Current retry attempt count
            max_retries: Maximum number of retry attempts
        """
        super().__init__(message, error_code, details)
        self.original_error = original_error
        self.retry_count = retry_count
        self.max_retries = max_retries

        if original_error and "original_error" not in self.details:
            self.details["original_error"] = str(original_error)

        self.details.update(
            {
                "retry_count": retry_count,
                "max_retries": max_retries,
                "retryable": self.is_retryable(),
            }
        )

    def is_retryable(self) -> bool:
        """
        Determine if this exception represents a retryable error.

        Returns:
            True if the operation can be retried, False otherwise
        """
        return self.retry_count < self.max_retries


class ConnectionException(DatabaseException):
    """Exception raised when database connection fails."""

    def __init__(
        self,
        message: str = "Database connection failed",
        database_url: Optional[str] = None,
        original_error: Optional[Exception] = None,
        retry_count: int = 0,
        max_retries: int = 3,
    ):
        """
        Initialize connection exception.

        Args:
            message: Error message
            database_url: Database URL (will be sanitized)
            original_error: Original exception
            retry_count: Current retry attempt count
            max_retries: Maximum number of retry attempts
        """
        details = {}
        if database_url:
            details["database_url"] = self._sanitize_url(database_url)

        super().__init__(
            message=message,
            error_code="DATABASE_CONNECTION_ERROR",
            details=details,
            original_error=original_error,
            retry_count=retry_count,
            max_retries=max_retries,
        )

    @staticmethod
    def _sanitize_url(url: str) -> str:
        """Remove credentials from database URL for logging."""
        try:
            parsed = urlparse(url)
            netloc = parsed.hostname or ""
            if parsed.port:
                netloc = f"{netloc}:{parsed.port}"
            sanitized = parsed._replace(netloc=netloc)
            return urlunparse(sanitized)
        except (ValueError, AttributeError) as e:
            return f"[URL_PARSE_ERROR: {e}]"

    def is_retryable(self) -> bool:
        """
        Determine if this connection error is retryable.

        Connection errors are generally retryable unless they indicate
        authentication or configuration issues.
        """
        if not super().is_retryable():
            return False

        if self.original_error:
            error_str = str(self.original_error).lower()
            non_retryable_patterns = [
                "authentication failed",
                "invalid credentials",
                "access denied",
                "permission denied",
                "database does not exist",
                "role does not exist",
            ]
            if any(pattern in error_str for pattern in non_retryable_patterns):
                return False

        return True


class DatabaseTimeoutException(DatabaseException):
    """Exception raised when a store call exceeds its timeout."""

    status_code = 503

    def __init__(
        self,
        message: str = "Database operation timed out",
        operation: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize timeout exception.

        Args:
            message: Error message
            operation: Description of the operation that timed out
            timeout: Limit in seconds that was exceeded
        """
        details: Dict[str, Any] = {}
        if operation:
            details["operation"] = operation
        if timeout is not None:
            details["timeout"] = timeout

        super().__init__(
            message=message,
            error_code="DATABASE_TIMEOUT_ERROR",
            details=details,
        )


class ConfigurationException(NovelliaException):
    """Exception raised for invalid configuration."""

    def __init__(
        self,
        message: str = "Configuration error",
        config_key: Optional[str] = None,
        config_value: Optional[str] = None,
    ):
        """
        Initialize configuration exception.

        Args:
            message: Error message
            config_key: Configuration key that caused the error
            config_value: Configuration value (will be sanitized)
        """
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_value:
            details["config_value"] = self._sanitize_config_value(
                config_key, config_value
            )

        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details=details,
        )

    @staticmethod
    def _sanitize_config_value(key: Optional[str], value: str) -> str:
        """Sanitize configuration values to avoid exposing secrets."""
        if not key:
            return "[REDACTED]"

        sensitive_keys = ["password", "secret", "key", "token", "credential", "url"]
        if any(sensitive in key.lower() for sensitive in sensitive_keys):
            return "[REDACTED]"

        return value


# Utility functions for error formatting

GENERIC_SERVER_ERROR = "Internal server error"
GENERIC_UNAVAILABLE_ERROR = "Service temporarily unavailable"

REQUEST_LOCATIONS = ("body", "path", "query")


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Format Pydantic validation errors into ``{"path", "message"}`` items.

    Validators in this package raise ``ValueError`` with the exact message a
    client should see; those are unwrapped from the ``ctx`` Pydantic attaches
    so the "Value error, " prefix does not leak into responses.

    Args:
        errors: List of Pydantic validation errors (``exc.errors()``)

    Returns:
        List of field errors in the order Pydantic reported them
    """
    formatted_errors = []

    for error in errors:
        path = list(error.get("loc", ()))
        # FastAPI prefixes the request part the value came from
        if path and path[0] in REQUEST_LOCATIONS:
            path = path[1:]
        error_type = error.get("type", "unknown")
        ctx = error.get("ctx") or {}

        if error_type == "value_error" and "error" in ctx:
            message = str(ctx["error"])
        elif error_type == "missing":
            message = "Required"
        else:
            message = error.get("msg", "Validation error")

        formatted_errors.append({"path": path, "message": message})

    return formatted_errors


def create_error_response(exception: NovelliaException) -> Dict[str, Any]:
    """
    Create the JSON error body for an exception.

    Validation failures carry an itemized ``details`` list; database failures
    never expose their internal message.

    Args:
        exception: The exception to format

    Returns:
        Error response dictionary
    """
    if isinstance(exception, DatabaseTimeoutException):
        return {"error": GENERIC_UNAVAILABLE_ERROR}

    if isinstance(exception, DatabaseException):
        return {"error": GENERIC_SERVER_ERROR}

    response: Dict[str, Any] = {"error": exception.message}

    if isinstance(exception, ValidationException) and exception.errors:
        response["details"] = exception.errors

    return response


def log_exception_context(
    exception: Exception,
    context: Dict[str, Any],
    logger: Optional[logging.Logger] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Log an exception with additional context information.

    Args:
        exception: The exception to log
        context: Additional context information
        logger: Logger instance to use
        level: Logging level
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    if isinstance(exception, NovelliaException):
        log_data = exception.to_dict()
        log_data["context"] = context
        logger.log(
            level,
            f"Exception with context: {exception.message}",
            extra={"exception_data": log_data},
        )
    else:
        logger.log(
            level,
            f"Unhandled exception: {str(exception)}",
            exc_info=exception,
            extra={
                "exception_type": exception.__class__.__name__,
                "context": context,
            },
        )
