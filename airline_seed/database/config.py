"""
Database configuration and connection management for the airline seeder.

This module provides RDBMS-agnostic async database configuration with support for:
- SQLite via aiosqlite (default for local development)
- PostgreSQL via asyncpg

Configuration is loaded from environment variables with sensible defaults.
Includes connection pooling, session management, and error handling.
"""

import os
import logging
from pathlib import Path
from typing import Optional, Dict, Any, AsyncIterator
from contextlib import asynccontextmanager
from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .models import create_all_tables, drop_all_tables

# Configure logging
logger = logging.getLogger(__name__)


class DatabaseConfig:
    """
    Async database configuration manager supporting multiple RDBMS backends.

    Supports SQLite (default) and PostgreSQL with connection pooling and
    session management. Every session is independent, so callers may run
    several sessions concurrently on one event loop.
    """

    def __init__(self, database_url: Optional[str] = None, echo: bool = False):
        """
        Initialize database configuration.

        Args:
            database_url: Optional database URL override
            echo: Enable SQL query logging for debugging
        """
        self.database_url = database_url or self._build_database_url()
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self.SessionLocal: Optional[async_sessionmaker] = None
        self._is_initialized = False

        self.db_type = self._detect_database_type()
        self.engine_kwargs = self._get_engine_kwargs()

        logger.info(f"Database configuration initialized for {self.db_type}")

    @staticmethod
    def _build_database_url() -> str:
        """
        Build database URL from environment variables.

        Environment variables:
        - DATABASE_URL: Complete database URL (takes precedence)
        - DB_TYPE: Database type (sqlite, postgresql)
        - DB_HOST: Database host (default: localhost)
        - DB_PORT: Database port (default: 5432)
        - DB_NAME: Database name (default: airline_seed)
        - DB_USER: Database username
        - DB_PASSWORD: Database password

        Returns:
            Complete database URL string
        """
        database_url = os.getenv('DATABASE_URL')
        if database_url:
            return database_url

        db_type = os.getenv('DB_TYPE', 'sqlite').lower()

        if db_type == 'sqlite':
            db_name = os.getenv('DB_NAME', 'airline_seed.db')
            db_path = Path(db_name).resolve()
            return f"sqlite+aiosqlite:///{db_path}"

        elif db_type == 'postgresql':
            host = os.getenv('DB_HOST', 'localhost')
            port = os.getenv('DB_PORT', '5432')
            database = os.getenv('DB_NAME', 'airline_seed')
            username = os.getenv('DB_USER', 'postgres')
            password = os.getenv('DB_PASSWORD', '')

            return f"postgresql+asyncpg://{username}:{password}@{host}:{port}/{database}"

        else:
            raise ValueError(f"Unsupported database type: {db_type}")

    def _detect_database_type(self) -> str:
        """Detect database type from URL."""
        if self.database_url.startswith('sqlite'):
            return 'sqlite'
        elif self.database_url.startswith('postgresql'):
            return 'postgresql'
        else:
            return 'unknown'

    def _get_engine_kwargs(self) -> Dict[str, Any]:
        """
        Get database-specific engine configuration.

        Returns:
            Dictionary of engine configuration parameters
        """
        kwargs: Dict[str, Any] = {
            'echo': self.echo,
        }

        if self.db_type == 'sqlite':
            # Concurrent flight inserts wait on the write lock instead of failing
            kwargs['connect_args'] = {'timeout': 30}

        elif self.db_type == 'postgresql':
            kwargs.update({
                'pool_size': int(os.getenv('DB_POOL_SIZE', '10')),
                'max_overflow': int(os.getenv('DB_MAX_OVERFLOW', '50')),
                'pool_timeout': int(os.getenv('DB_POOL_TIMEOUT', '30')),
                'pool_recycle': int(os.getenv('DB_POOL_RECYCLE', '3600')),
                'pool_pre_ping': True,
            })

        return kwargs

    async def initialize(self) -> None:
        """
        Initialize database engine and session factory.

        Raises:
            SQLAlchemyError: If database connection fails
        """
        if self._is_initialized:
            return

        try:
            self.engine = create_async_engine(self.database_url, **self.engine_kwargs)
            self._setup_event_listeners()

            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

            self.SessionLocal = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                autoflush=False,
                expire_on_commit=False  # Keep objects accessible after commit
            )

            self._is_initialized = True
            logger.info(f"Database engine initialized successfully ({self.db_type})")

        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise SQLAlchemyError(f"Database initialization failed: {e}")

    def _setup_event_listeners(self) -> None:
        """Set up SQLAlchemy event listeners for connection management."""

        @event.listens_for(self.engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            """Configure SQLite-specific settings."""
            if self.db_type == 'sqlite':
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.close()

    async def create_tables(self) -> None:
        """
        Create all database tables if they don't exist.

        Raises:
            SQLAlchemyError: If table creation fails
        """
        if not self._is_initialized:
            await self.initialize()

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(create_all_tables)
            logger.info("Database tables created successfully")
        except Exception as e:
            logger.error(f"Failed to create tables: {e}")
            raise SQLAlchemyError(f"Table creation failed: {e}")

    async def drop_tables(self) -> None:
        """Drop all database tables."""
        if not self._is_initialized:
            await self.initialize()

        async with self.engine.begin() as conn:
            await conn.run_sync(drop_all_tables)
        logger.info("Database tables dropped")

    def get_session(self) -> AsyncSession:
        """
        Get a new database session.

        Raises:
            SQLAlchemyError: If the configuration was never initialized
        """
        if not self._is_initialized:
            raise SQLAlchemyError("Database is not initialized; await initialize() first")

        return self.SessionLocal()

    @asynccontextmanager
    async def get_session_context(self) -> AsyncIterator[AsyncSession]:
        """
        Get a database session with automatic cleanup.

        Usage:
            async with db_config.get_session_context() as session:
                # Use session here
                pass

        Yields:
            AsyncSession with automatic commit/rollback
        """
        if not self._is_initialized:
            await self.initialize()

        session = self.get_session()
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error(f"Database session error: {e}")
            raise
        finally:
            await session.close()

    def get_connection_info(self) -> Dict[str, Any]:
        """
        Get database connection information for display.

        Returns:
            Dictionary with connection details (credentials stripped)
        """
        return {
            'database_type': self.db_type,
            'database_url': self.database_url.split('@')[-1] if '@' in self.database_url else self.database_url,
            'is_initialized': self._is_initialized,
            'echo_enabled': self.echo,
        }

    async def close(self) -> None:
        """Close database connections and clean up resources."""
        if self.engine:
            await self.engine.dispose()
            logger.info("Database connections closed")
        self._is_initialized = False


__all__ = [
    'DatabaseConfig',
]
