"""
Database session management utilities for the novellia-pets package.

This module provides the session manager that owns the engine and its
connection pool. One instance is built when the application starts, handed
to request handlers through dependency injection, and disposed at shutdown.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy import MetaData, text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)

DEFAULT_STATEMENT_TIMEOUT = 10.0


class SessionManager:
    """Manages database sessions and provides transaction utilities."""

    def __init__(
        self,
        engine: AsyncEngine,
        statement_timeout: float = DEFAULT_STATEMENT_TIMEOUT,
        session_config: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize session manager with database engine.

        Args:
            engine: SQLAlchemy async engine
            statement_timeout: Upper bound in seconds for a single store call
            session_config: Optional session configuration overrides
        """
        self.engine = engine
        self.statement_timeout = statement_timeout
        self._is_initialized = False
        self._health_check_interval = 30.0  # seconds
        self._last_health_check = 0.0

        default_config = {
            "expire_on_commit": False,
            "autoflush": True,
        }

        if session_config:
            default_config.update(session_config)

        self.session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            autoflush=default_config.get("autoflush", False),
            expire_on_commit=default_config.get("expire_on_commit", False),
        )

    async def create_session(self) -> AsyncSession:
        """
        Create a new database session.

        Returns:
            New async database session
        """
        return self.session_factory()

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database sessions with automatic cleanup.

        Yields:
            Database session

        Example:
            async with session_manager.get_session() as session:
                result = await session.execute(select(Pet))
        """
        session = await self.create_session()
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.debug(f"Session error, rolling back: {e}")
            raise
        finally:
            await session.close()

    @asynccontextmanager
    async def get_transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database transactions with automatic commit/rollback.

        The transaction commits when the block exits normally and rolls back
        when it raises; the connection goes back to the pool either way.

        Yields:
            Database session within a transaction

        Example:
            async with session_manager.get_transaction() as session:
                pet = await PetQueries(session).create(fields)
        """
        async with self.get_session() as session:
            async with session.begin():
                yield session

    async def health_check(self, force: bool = False) -> Dict[str, Any]:
        """
        Health check for database sessions and connections.

        Args:
            force: Force health check even if recently performed

        Returns:
            Dictionary with health check results
        """
        current_time = time.time()

        if (
            not force
            and (current_time - self._last_health_check) < self._health_check_interval
        ):
            return {"status": "skipped", "reason": "recently_checked"}

        health_status: Dict[str, Any] = {
            "status": "healthy",
            "timestamp": current_time,
            "checks": {},
            "pool_info": {},
        }

        try:
            start_time = time.time()
            async with self.get_transaction() as session:
                await session.execute(text("SELECT 1"))
            query_time = time.time() - start_time

            health_status["checks"]["basic_query"] = {
                "status": "pass",
                "response_time": round(query_time * 1000, 2),  # ms
            }

            pool = self.engine.pool
            if hasattr(pool, "size"):
                health_status["pool_info"] = {
                    "size": pool.size(),
                    "checked_in": getattr(pool, "checkedin", lambda: 0)(),
                    "checked_out": getattr(pool, "checkedout", lambda: 0)(),
                    "overflow": getattr(pool, "overflow", lambda: 0)(),
                }

            self._last_health_check = current_time

        except OperationalError as e:
            health_status["status"] = "unhealthy"
            health_status["checks"]["connection"] = {
                "status": "fail",
                "error_type": "OperationalError",
            }
            logger.error(f"Database operational error during health check: {e}")

        except SQLAlchemyError as e:
            health_status["status"] = "unhealthy"
            health_status["checks"]["database"] = {
                "status": "fail",
                "error_type": "SQLAlchemyError",
            }
            logger.error(f"Database error during health check: {e}")

        except OSError as e:
            health_status["status"] = "unhealthy"
            health_status["checks"]["general"] = {
                "status": "fail",
                "error_type": type(e).__name__,
            }
            logger.error(f"Unexpected error during health check: {e}")

        return health_status

    async def initialize_database(self, metadata: Optional[MetaData] = None) -> bool:
        """
        Verify the connection and create missing tables.

        Existing tables are left untouched, so this is safe on every start.

        Args:
            metadata: SQLAlchemy metadata object containing table definitions

        Returns:
            True if initialization successful, False otherwise
        """
        logger.info("Starting database initialization...")

        health = await self.health_check(force=True)
        if health["status"] != "healthy":
            logger.error("Database health check failed during initialization")
            return False

        try:
            if metadata is not None:
                async with self.engine.begin() as conn:
                    await conn.run_sync(metadata.create_all)
                logger.info("Database tables created successfully")
        except SQLAlchemyError as e:
            logger.error(f"Database initialization failed: {e}")
            return False

        self._is_initialized = True
        logger.info("Database initialization completed successfully")
        return True

    async def close_all_sessions(self) -> None:
        """Close all active sessions and dispose of the engine."""
        try:
            await self.engine.dispose()
            logger.info("All database sessions and connections closed")
        except Exception as e:
            logger.error(f"Error closing database sessions: {e}")

    @property
    def is_initialized(self) -> bool:
        """Check if the database has been initialized."""
        return self._is_initialized
