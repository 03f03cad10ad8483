"""
Custom exceptions for the novellia-pets package.

This module defines the exception hierarchy and error formatting helpers
used by the domain operations and the HTTP layer.
"""

from .core_exceptions import (
    GENERIC_SERVER_ERROR,
    GENERIC_UNAVAILABLE_ERROR,
    ConfigurationException,
    ConflictException,
    ConnectionException,
    DatabaseException,
    DatabaseTimeoutException,
    NotFoundException,
    NovelliaException,
    ValidationException,
    create_error_response,
    format_validation_errors,
    log_exception_context,
)

__all__ = [
    # Exception classes
    "NovelliaException",
    "ValidationException",
    "ConflictException",
    "NotFoundException",
    "DatabaseException",
    "ConnectionException",
    "DatabaseTimeoutException",
    "ConfigurationException",
    # Utility functions
    "format_validation_errors",
    "create_error_response",
    "log_exception_context",
    "GENERIC_SERVER_ERROR",
    "GENERIC_UNAVAILABLE_ERROR",
]
