"""
Utility functions and helper modules.

This module provides common utility functions for datetime handling,
payload validation, and configuration management.
"""

from .config import (
    AppConfig,
    ConfigError,
    DatabaseURLValidator,
    EnvironmentConfig,
    LoggingConfigurator,
    LogLevel,
)
from .datetime_utils import (
    UPCOMING_WINDOW_DAYS,
    get_current_date,
    get_current_utc,
    get_date_window,
)
from .validation import (
    DATE_PATTERN,
    INVALID_DATE_MESSAGE,
    FieldError,
    ValidationResult,
    blank_to_none,
    parse_date_string,
    require_text,
    validate_payload,
)

__all__ = [
    # DateTime utilities
    "UPCOMING_WINDOW_DAYS",
    "get_current_utc",
    "get_current_date",
    "get_date_window",
    # Validation helpers
    "DATE_PATTERN",
    "INVALID_DATE_MESSAGE",
    "FieldError",
    "ValidationResult",
    "blank_to_none",
    "parse_date_string",
    "require_text",
    "validate_payload",
    # Configuration utilities
    "AppConfig",
    "ConfigError",
    "LogLevel",
    "EnvironmentConfig",
    "DatabaseURLValidator",
    "LoggingConfigurator",
]
