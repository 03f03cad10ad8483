"""
Database connection and session management.

This module provides async SQLAlchemy engine configuration and the session
manager that serves as the store handle of the pets service.
"""

from .connection import (
    DatabaseConfig,
    check_connection,
    create_engine,
    get_database_url,
    wait_for_database,
)
from .session import DEFAULT_STATEMENT_TIMEOUT, SessionManager

__all__ = [
    # Connection utilities
    "DatabaseConfig",
    "create_engine",
    "get_database_url",
    "check_connection",
    "wait_for_database",
    # Session management
    "SessionManager",
    "DEFAULT_STATEMENT_TIMEOUT",
]
