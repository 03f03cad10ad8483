"""
Configuration management utilities.

This module provides environment variable handling with type conversion,
database URL validation, logging configuration, and the application
configuration object that is built once at process start.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union
from urllib.parse import parse_qs, urlparse

from ..database.connection import get_database_url
from ..exceptions import ConfigurationException


class ConfigError(ConfigurationException):
    """Exception raised for configuration-related errors."""

    pass


class LogLevel(Enum):
    """Enumeration for log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EnvironmentConfig:
    """Utility class for handling environment variables with type conversion."""

    @staticmethod
    def get_str(
        key: str, default: Optional[str] = None, required: bool = False
    ) -> Optional[str]:
        """
        Get a string environment variable.

        Args:
            key: Environment variable key
            default: Default value if not found
            required: Whether the variable is required

        Returns:
            String value or default

        Raises:
            ConfigError: If required variable is missing
        """
        value = os.getenv(key, default)

        if required and value is None:
            raise ConfigError(
                f"Required environment variable '{key}' is not set", config_key=key
            )

        return value

    @staticmethod
    def get_int(
        key: str, default: Optional[int] = None, required: bool = False
    ) -> Optional[int]:
        """
        Get an integer environment variable.

        Args:
            key: Environment variable key
            default: Default value if not found
            required: Whether the variable is required

        Returns:
            Integer value or default

        Raises:
            ConfigError: If required variable is missing or invalid
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ConfigError(
                    f"Required environment variable '{key}' is not set",
                    config_key=key,
                )
            return default

        try:
            return int(value)
        except ValueError:
            raise ConfigError(
                f"Environment variable '{key}' must be an integer, got: {value}",
                config_key=key,
                config_value=value,
            )

    @staticmethod
    def get_float(
        key: str, default: Optional[float] = None, required: bool = False
    ) -> Optional[float]:
        """
        Get a float environment variable.

        Args:
            key: Environment variable key
            default: Default value if not found
            required: Whether the variable is required

        Returns:
            Float value or default

        Raises:
            ConfigError: If required variable is missing or invalid
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ConfigError(
                    f"Required environment variable '{key}' is not set",
                    config_key=key,
                )
            return default

        try:
            return float(value)
        except ValueError:
            raise ConfigError(
                f"Environment variable '{key}' must be a float, got: {value}",
                config_key=key,
                config_value=value,
            )

    @staticmethod
    def get_bool(
        key: str, default: Optional[bool] = None, required: bool = False
    ) -> Optional[bool]:
        """
        Get a boolean environment variable.

        Args:
            key: Environment variable key
            default: Default value if not found
            required: Whether the variable is required

        Returns:
            Boolean value or default

        Raises:
            ConfigError: If required variable is missing
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ConfigError(
                    f"Required environment variable '{key}' is not set",
                    config_key=key,
                )
            return default

        return value.lower() in ("true", "1", "yes", "on", "enabled")

    @staticmethod
    def get_list(
        key: str,
        separator: str = ",",
        default: Optional[List[str]] = None,
        required: bool = False,
    ) -> Optional[List[str]]:
        """
        Get a list environment variable.

        Args:
            key: Environment variable key
            separator: Separator character for list items
            default: Default value if not found
            required: Whether the variable is required

        Returns:
            List of strings or default

        Raises:
            ConfigError: If required variable is missing
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ConfigError(
                    f"Required environment variable '{key}' is not set",
                    config_key=key,
                )
            return default or []

        return [item.strip() for item in value.split(separator) if item.strip()]


class DatabaseURLValidator:
    """Utility class for validating database URLs."""

    SUPPORTED_DRIVERS = {
        "postgresql": ["postgresql", "postgresql+asyncpg"],
        "sqlite": ["sqlite", "sqlite+aiosqlite"],
    }

    @classmethod
    def validate_url(cls, url: str) -> Dict[str, Any]:
        """
        Validate a database URL and return parsed components.

        Args:
            url: Database URL to validate

        Returns:
            Dictionary with validation results and parsed components

        Raises:
            ConfigError: If URL is invalid
        """
        if not url:
            raise ConfigError("Database URL cannot be empty", config_key="database_url")

        try:
            parsed = urlparse(url)
        except Exception as e:
            raise ConfigError(f"Invalid URL format: {e}", config_key="database_url")

        if not parsed.scheme:
            raise ConfigError(
                "Database URL must include a scheme (e.g., postgresql://)",
                config_key="database_url",
            )

        supported = [d for drivers in cls.SUPPORTED_DRIVERS.values() for d in drivers]
        if parsed.scheme not in supported:
            raise ConfigError(
                f"Unsupported database driver '{parsed.scheme}'. Supported: {', '.join(supported)}",
                config_key="database_url",
            )

        is_sqlite = parsed.scheme.startswith("sqlite")

        if not is_sqlite and not parsed.hostname:
            raise ConfigError(
                "Database URL must include a hostname", config_key="database_url"
            )

        if not is_sqlite and not parsed.path.lstrip("/"):
            raise ConfigError(
                "Database URL must include a database name", config_key="database_url"
            )

        return {
            "valid": True,
            "scheme": parsed.scheme,
            "hostname": parsed.hostname,
            "port": parsed.port,
            "database": parsed.path.lstrip("/") if parsed.path else "",
            "username": parsed.username,
            "password": parsed.password,
            "query": dict(parse_qs(parsed.query)),
        }


class LoggingConfigurator:
    """Utility class for configuring logging."""

    DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Third-party loggers that are noisy at INFO
    QUIET_LOGGERS = ("sqlalchemy.engine", "asyncio", "httpx")

    @staticmethod
    def configure_basic_logging(
        level: Union[str, LogLevel] = LogLevel.INFO,
        format_string: Optional[str] = None,
        log_file: Optional[str] = None,
    ) -> None:
        """
        Configure basic logging for the application.

        Args:
            level: Logging level
            format_string: Custom format string
            log_file: Optional log file path
        """
        if isinstance(level, LogLevel):
            level = level.value

        basic_config_args: Dict[str, Any] = {
            "level": level.upper(),
            "format": format_string or LoggingConfigurator.DEFAULT_FORMAT,
            "datefmt": "%Y-%m-%d %H:%M:%S",
        }

        if log_file:
            basic_config_args["filename"] = log_file
            basic_config_args["filemode"] = "a"

        logging.basicConfig(**basic_config_args)

        for name in LoggingConfigurator.QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def _database_url_from_environment() -> str:
    """Resolve the database URL from DATABASE_URL or its component variables."""
    database_url = EnvironmentConfig.get_str("DATABASE_URL")
    if database_url:
        return database_url

    return get_database_url(
        host=EnvironmentConfig.get_str("DB_HOST", "localhost"),
        port=EnvironmentConfig.get_int("DB_PORT", 5432),
        database=EnvironmentConfig.get_str("DB_NAME", "novellia_pets"),
        username=EnvironmentConfig.get_str("DB_USER", "postgres"),
        password=EnvironmentConfig.get_str("DB_PASSWORD", ""),
    )


@dataclass
class AppConfig:
    """Runtime configuration for the pets service."""

    database_url: str
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30
    statement_timeout: float = 10.0
    echo: bool = False
    create_schema: bool = True
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = LogLevel.INFO.value
    host: str = "0.0.0.0"
    port: int = 3000

    def __post_init__(self) -> None:
        DatabaseURLValidator.validate_url(self.database_url)

        if self.statement_timeout <= 0:
            raise ConfigError(
                "Statement timeout must be positive",
                config_key="statement_timeout",
                config_value=str(self.statement_timeout),
            )

        if self.log_level.upper() not in LogLevel.__members__:
            raise ConfigError(
                f"Unknown log level '{self.log_level}'",
                config_key="log_level",
                config_value=self.log_level,
            )

    @classmethod
    def from_environment(cls) -> "AppConfig":
        """
        Build the configuration from environment variables.

        Returns:
            Validated application configuration

        Raises:
            ConfigError: If a variable is malformed or the database URL is invalid
        """
        return cls(
            database_url=_database_url_from_environment(),
            pool_size=EnvironmentConfig.get_int("NOVELLIA_DB_POOL_SIZE", 10),
            max_overflow=EnvironmentConfig.get_int("NOVELLIA_DB_MAX_OVERFLOW", 20),
            pool_timeout=EnvironmentConfig.get_int("NOVELLIA_DB_POOL_TIMEOUT", 30),
            statement_timeout=EnvironmentConfig.get_float(
                "NOVELLIA_STATEMENT_TIMEOUT", 10.0
            ),
            echo=EnvironmentConfig.get_bool("NOVELLIA_DB_ECHO", False),
            create_schema=EnvironmentConfig.get_bool("NOVELLIA_CREATE_SCHEMA", True),
            cors_origins=EnvironmentConfig.get_list("NOVELLIA_CORS_ORIGINS", default=["*"]),
            log_level=EnvironmentConfig.get_str("NOVELLIA_LOG_LEVEL", LogLevel.INFO.value),
            host=EnvironmentConfig.get_str("NOVELLIA_HOST", "0.0.0.0"),
            port=EnvironmentConfig.get_int("NOVELLIA_PORT", 3000),
        )
