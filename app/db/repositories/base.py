"""
Base repository for order database operations.

Provides the shared pieces every repository needs: access to the
connection, session handling (own session or the caller's transaction),
table access verification and operation logging.
"""

import asyncio
import functools
import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.connection import ConnDB, get_db_connection
from app.utils.error_handler import DatabaseConnectionException

logger = logging.getLogger(__name__)


def with_retry(
    max_attempts: Optional[int] = None,
    delay: Optional[float] = None,
    backoff: Optional[float] = None,
    exceptions: tuple = (DatabaseConnectionException,),
) -> Callable:
    """
    Decorator that retries an async operation with exponential backoff.

    Only used for connection setup; business operations are never retried.

    Args:
        max_attempts: Maximum attempts (defaults to MAX_RETRIES)
        delay: Initial delay in seconds (defaults to RETRY_DELAY_SECONDS)
        backoff: Delay multiplier (defaults to RETRY_BACKOFF_FACTOR)
        exceptions: Exceptions that trigger a retry

    Returns:
        Decorated function with retry logic
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            settings = get_settings()
            attempts = max_attempts or settings.MAX_RETRIES
            current_delay = settings.RETRY_DELAY_SECONDS if delay is None else delay
            factor = settings.RETRY_BACKOFF_FACTOR if backoff is None else backoff

            for attempt in range(attempts):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    if attempt == attempts - 1:
                        logger.error(f"All {attempts} attempts failed for {func.__name__}")
                        raise
                    logger.warning(
                        f"Attempt {attempt + 1}/{attempts} failed for {func.__name__}: {e}. "
                        f"Retrying in {current_delay:.1f}s..."
                    )
                    await asyncio.sleep(current_delay)
                    current_delay *= factor

        return wrapper

    return decorator


def log_operation(operation_name: Optional[str] = None) -> Callable:
    """
    Decorator that logs the start and outcome of a repository operation.

    Args:
        operation_name: Optional custom name for the operation

    Returns:
        Decorated function with logging
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            op_name = operation_name or f"{self.__class__.__name__}.{func.__name__}"
            logger.debug(f"Starting operation: {op_name}")

            try:
                result = await func(self, *args, **kwargs)
                logger.debug(f"Operation successful: {op_name}")
                return result
            except Exception as e:
                logger.error(f"Operation failed: {op_name} - {e}")
                raise

        return wrapper

    return decorator


class BaseRepository(ABC):
    """
    Abstract base repository.

    Every public method accepts an optional ``session``. When given, the
    method runs inside the caller's transaction and never commits; when
    omitted, the repository opens its own session and commits on success.
    """

    table_names: tuple = ()

    def __init__(self, conn_db: Optional[ConnDB] = None):
        """
        Args:
            conn_db: Database connection. Defaults to the shared connection.
        """
        self.conn_db: ConnDB = conn_db or get_db_connection()
        self._initialized: bool = False
        self._repository_name: str = self.__class__.__name__
        logger.debug(f"{self._repository_name} instantiated")

    @log_operation("repository_initialization")
    @with_retry()
    async def initialize(self) -> None:
        """
        Ensure the connection is up and the required tables are reachable.

        Raises:
            DatabaseConnectionException: If initialization fails
        """
        try:
            if not self.conn_db.is_initialized():
                await self.conn_db.initialize()

            await self._verify_table_access()

            self._initialized = True
            logger.info(f"{self._repository_name} initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize {self._repository_name}: {e}")
            raise DatabaseConnectionException(
                message=f"Failed to initialize {self._repository_name}: {str(e)}",
                db_host=self.conn_db.db_host,
                connection_type="repository_initialization",
            ) from e

    async def _verify_table_access(self) -> None:
        """
        Check that every table in ``table_names`` can be queried.

        Raises:
            DatabaseConnectionException: If a table is not accessible
        """
        try:
            async with self.conn_db.get_session() as session:
                for table_name in self.table_names:
                    await session.execute(text(f"SELECT COUNT(*) FROM {table_name}"))
        except SQLAlchemyError as e:
            raise DatabaseConnectionException(
                message=f"Cannot access tables {self.table_names}: {str(e)}",
                db_host=self.conn_db.db_host,
                connection_type="table_access",
            ) from e

    def is_initialized(self) -> bool:
        """
        Check if the repository is ready for operations.

        Returns:
            bool: True if initialized
        """
        return self._initialized and self.conn_db.is_initialized()

    @asynccontextmanager
    async def session_scope(self, session: Optional[AsyncSession] = None) -> AsyncIterator[AsyncSession]:
        """
        Yield the caller's session, or a new one committed on success.

        Args:
            session: Optional shared session for atomic transactions
        """
        if session is not None:
            yield session
            return

        async with self.conn_db.get_session() as new_session:
            async with new_session.begin():
                yield new_session

    def _wrap_error(self, operation: str, error: Exception) -> DatabaseConnectionException:
        logger.error(f"{self._repository_name}.{operation} failed: {error}")
        return DatabaseConnectionException(
            message=f"{self._repository_name}.{operation} failed: {str(error)}",
            db_host=self.conn_db.db_host,
            connection_type=operation,
        )

    @abstractmethod
    async def find_by_id(self, key: int, session: Optional[AsyncSession] = None) -> Any:
        """Load one entity by key, or None."""

    async def health_check(self) -> Dict[str, Any]:
        """
        Report repository health.

        Returns:
            Dict: Health status information
        """
        if not self.is_initialized():
            return {
                "status": "unhealthy",
                "repository": self._repository_name,
                "initialized": False,
                "error": "Repository not initialized",
            }

        try:
            await self._verify_table_access()
        except DatabaseConnectionException as e:
            return {
                "status": "unhealthy",
                "repository": self._repository_name,
                "initialized": True,
                "error": e.message,
            }

        return {"status": "healthy", "repository": self._repository_name, "initialized": True}

    def __repr__(self) -> str:
        return f"<{self._repository_name}(initialized={self._initialized})>"
