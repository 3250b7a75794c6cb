"""
ConnDB: database connection management.

This class only handles the engine, the session factory and the
lifecycle of connections to the order database.
"""

import logging
import time
from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings
from app.db.schema import metadata
from app.utils.error_handler import DatabaseConnectionException

logger = logging.getLogger(__name__)


class ConnDB:
    """
    Database connection manager.

    Owns the async engine and the session factory. ``get_db_connection()``
    returns the process-wide instance; tests build their own.
    """

    def __init__(self, connection_string: Optional[str] = None):
        """
        Args:
            connection_string: SQLAlchemy async URL. Defaults to ``DATABASE_URL``.
        """
        self.settings = get_settings()
        self.connection_string = connection_string or self.settings.DATABASE_URL
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None
        self._connection_tested = False
        logger.info("ConnDB instance created")

    @property
    def db_host(self) -> str:
        """Host of the configured database, safe for logs."""
        url = make_url(self.connection_string)
        return url.host or url.get_backend_name()

    def _engine_options(self) -> dict:
        options = self.settings.get_engine_options(self.connection_string)
        url = make_url(self.connection_string)

        # In-memory SQLite lives in a single connection
        if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool

        return options

    async def initialize(self):
        """
        Create the engine and session factory and test the connection.

        Raises:
            DatabaseConnectionException: If initialization fails
        """
        try:
            if self.engine is not None:
                logger.info("Database connection already initialized")
                return

            logger.info("Initializing database connection...")

            self.engine = create_async_engine(self.connection_string, **self._engine_options())

            self.session_factory = async_sessionmaker(
                self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=True
            )

            await self._test_connection()

            logger.info("Database connection initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize database connection: {e}")
            await self._cleanup_failed_initialization()
            raise DatabaseConnectionException(
                message=f"Failed to initialize database connection: {str(e)}",
                db_host=self.db_host,
                connection_type="initialization",
            ) from e

    async def _test_connection(self):
        """
        Run a trivial query against the database.

        Raises:
            DatabaseConnectionException: If the test fails
        """
        try:
            async with self.session_factory() as session:
                result = await session.execute(text("SELECT 1"))
                if result.scalar() != 1:
                    raise DatabaseConnectionException(
                        message="Connection test returned unexpected value",
                        db_host=self.db_host,
                        connection_type="test",
                    )

            self._connection_tested = True

        except DatabaseConnectionException:
            raise
        except Exception as e:
            logger.error(f"Database connection test failed: {e}")
            raise DatabaseConnectionException(
                message=f"Database connection test failed: {str(e)}",
                db_host=self.db_host,
                connection_type="test",
            ) from e

    async def _cleanup_failed_initialization(self):
        """Release resources after a failed initialization."""
        if self.engine:
            await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        self._connection_tested = False

    async def create_schema(self):
        """
        Create the orders, products and order_lines tables if missing.

        Raises:
            DatabaseConnectionException: If the connection is not initialized or DDL fails
        """
        if not self.is_initialized():
            raise DatabaseConnectionException(
                message="Database connection not initialized. Call initialize() first.",
                db_host=self.db_host,
                connection_type="schema_creation",
            )

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(metadata.create_all)
            logger.info("Database schema ready")
        except Exception as e:
            logger.error(f"Failed to create database schema: {e}")
            raise DatabaseConnectionException(
                message=f"Failed to create database schema: {str(e)}",
                db_host=self.db_host,
                connection_type="schema_creation",
            ) from e

    def get_session(self) -> AsyncSession:
        """
        Open a new database session.

        Returns:
            AsyncSession: SQLAlchemy async session

        Raises:
            DatabaseConnectionException: If the connection is not initialized
        """
        if not self.is_initialized():
            raise DatabaseConnectionException(
                message="Database connection not initialized. Call initialize() first.",
                db_host=self.db_host,
                connection_type="session_creation",
            )

        return self.session_factory()

    def is_initialized(self) -> bool:
        """
        Check if the connection is initialized and tested.

        Returns:
            bool: True when sessions can be opened
        """
        return self.engine is not None and self.session_factory is not None and self._connection_tested

    async def test_connection(self) -> bool:
        """
        Non-destructive connectivity check.

        Returns:
            bool: True if the database answers
        """
        try:
            if not self.is_initialized():
                return False

            async with self.get_session() as session:
                result = await session.execute(text("SELECT 1"))
                return result.scalar() == 1

        except Exception as e:
            logger.error(f"Connection test failed: {e}")
            return False

    async def close(self):
        """
        Dispose the engine and release all resources.
        """
        try:
            logger.info("Closing database connection...")

            if self.engine:
                await self.engine.dispose()

            self.engine = None
            self.session_factory = None
            self._connection_tested = False

            logger.info("Database connection closed successfully")

        except Exception as e:
            logger.error(f"Error closing database connection: {e}")
            raise DatabaseConnectionException(
                message=f"Error closing database connection: {str(e)}",
                db_host=self.db_host,
                connection_type="close",
            ) from e

    async def health_check(self) -> dict:
        """
        Full health check of the connection.

        Returns:
            dict: Connection health status
        """
        health_info = {
            "connection_initialized": self.is_initialized(),
            "db_host": self.db_host,
            "test_passed": False,
            "response_time_ms": None,
        }

        start_time = time.time()
        health_info["test_passed"] = await self.test_connection()
        health_info["response_time_ms"] = round((time.time() - start_time) * 1000, 2)

        return health_info

    def __repr__(self) -> str:
        return (
            f"ConnDB(initialized={self.is_initialized()}, "
            f"engine={self.engine is not None}, "
            f"session_factory={self.session_factory is not None})"
        )


# Process-wide instance
_conn_db_instance = None


def get_db_connection() -> ConnDB:
    """
    Return the shared ConnDB instance.

    Returns:
        ConnDB: Database connection
    """
    global _conn_db_instance

    if _conn_db_instance is None:
        _conn_db_instance = ConnDB()

    return _conn_db_instance


async def initialize_database(create_schema: bool = False):
    """
    Initialize the shared connection, optionally creating the tables.
    """
    conn_db = get_db_connection()
    await conn_db.initialize()
    if create_schema:
        await conn_db.create_schema()


async def close_database():
    """
    Close the shared connection.
    """
    conn_db = get_db_connection()
    await conn_db.close()
