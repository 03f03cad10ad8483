"""
Shared plumbing for the per-entity query classes.

Every store call made by a query class goes through ``_run``, which bounds it
by the configured timeout, converts driver errors into package exceptions,
and logs how long the call took.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, List, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from ..database.session import DEFAULT_STATEMENT_TIMEOUT
from ..exceptions import DatabaseException, DatabaseTimeoutException

logger = logging.getLogger(__name__)

R = TypeVar("R")


class BaseQueries:
    """Base class binding a set of domain operations to one session."""

    def __init__(
        self, session: AsyncSession, timeout: Optional[float] = DEFAULT_STATEMENT_TIMEOUT
    ):
        """
        Args:
            session: Session whose transaction the operations run in
            timeout: Upper bound in seconds for each store call, None for no bound
        """
        self.session = session
        self.timeout = timeout

    async def _run(self, awaitable: Awaitable[R], operation: str) -> R:
        """
        Await a store call under the timeout.

        Args:
            awaitable: Pending session call
            operation: Short name used in logs and error details

        Returns:
            Whatever the store call returns

        Raises:
            DatabaseTimeoutException: If the call exceeds the timeout
            DatabaseException: If the driver reports an error
        """
        start_time = time.perf_counter()
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"Database operation '{operation}' timed out after {self.timeout}s")
            raise DatabaseTimeoutException(operation=operation, timeout=self.timeout)
        except SQLAlchemyError as e:
            logger.error(f"Database operation '{operation}' failed: {e}")
            raise DatabaseException(
                "Database operation failed",
                error_code="DATABASE_QUERY_ERROR",
                details={"operation": operation},
                original_error=e,
            )
        finally:
            duration = (time.perf_counter() - start_time) * 1000
            logger.debug(f"Executed {operation} in {duration:.1f}ms")

    async def _scalars(self, stmt: Executable, operation: str) -> List[Any]:
        """Execute a select and return every first-column value."""
        result = await self._run(self.session.execute(stmt), operation)
        items = list(result.scalars().all())
        logger.debug(f"{operation} returned {len(items)} rows")
        return items

    async def _scalar_one_or_none(self, stmt: Executable, operation: str) -> Any:
        """Execute a select expected to match at most one row."""
        result = await self._run(self.session.execute(stmt), operation)
        return result.scalar_one_or_none()

    async def _scalar(self, stmt: Executable, operation: str) -> Any:
        """Execute a select returning a single value."""
        result = await self._run(self.session.execute(stmt), operation)
        return result.scalar_one()

    async def _rows(self, stmt: Executable, operation: str) -> List[Any]:
        """Execute a select and return its rows."""
        result = await self._run(self.session.execute(stmt), operation)
        rows = list(result.all())
        logger.debug(f"{operation} returned {len(rows)} rows")
        return rows

    async def _flush_and_refresh(self, instance: Any, operation: str) -> None:
        """Write pending changes and reload server-generated columns."""
        await self._run(self.session.flush(), operation)
        await self._run(self.session.refresh(instance), operation)

    async def _delete(self, instance: Any, operation: str) -> None:
        """Delete an instance and flush the change."""
        await self._run(self.session.delete(instance), operation)
        await self._run(self.session.flush(), operation)
