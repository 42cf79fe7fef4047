"""Database abstraction layer using SQLAlchemy 2.0 async.

This module provides engine and session management. It supports SQLite
(aiosqlite) and PostgreSQL (asyncpg). The ORM ``Base`` only covers the
fixed system tables; collection tables are created at runtime by the
collection engine and have no ORM mapping.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from contentbase.core.config import Settings, get_settings
from contentbase.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for the system table models."""

    pass


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database URL."""
    if settings.is_sqlite:
        connect_args = {
            "check_same_thread": False,
            "timeout": settings.db_sqlite_busy_timeout / 1000,
        }
        if ":memory:" in settings.database_url:
            return create_async_engine(
                settings.database_url, echo=settings.db_echo, connect_args=connect_args
            )
    else:
        connect_args = {}

    return create_async_engine(
        settings.database_url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        connect_args=connect_args,
    )


class DatabaseManager:
    """Database connection and session manager.

    Lazily creates the async engine and session factory and hands out
    sessions for the system tables.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        """Get or create the database engine."""
        if self._engine is None:
            self._engine = build_engine(self.settings)
            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
                dialect=self._engine.dialect.name,
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.debug("Database session factory created")
        return self._session_factory

    async def create_tables(self) -> None:
        """Create the system tables if they don't exist.

        Collection tables are untouched; they are created by the engine.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("System tables created", tables=sorted(Base.metadata.tables))

    async def disconnect(self) -> None:
        """Dispose the engine and all pooled connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session scope that rolls back on error.

        Yields:
            AsyncSession: SQLAlchemy async session.
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        """Check if the database connection is working."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                logger.debug("Database connection check successful")
                return True
        except Exception as e:
            logger.error("Database connection check failed", error=str(e))
            return False


# Global database manager instance
_db_manager: DatabaseManager | None = None


def get_db_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


def get_engine() -> AsyncEngine:
    """Dependency for FastAPI returning the shared async engine."""
    return get_db_manager().engine


async def init_database() -> None:
    """Initialize the database on startup.

    Creates the SQLite directory, checks connectivity, and in development
    creates the system tables and seeds default roles.

    Raises:
        RuntimeError: If the database is unreachable.
    """
    # Register models with Base.metadata
    from contentbase.infrastructure.persistence.models import RoleModel

    db = get_db_manager()
    settings = db.settings

    if settings.is_sqlite and ":memory:" not in settings.database_url:
        db_dir = Path(settings.database_url.split(":///")[-1]).parent
        db_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Database directory created", path=str(db_dir))

    if not await db.check_connection():
        logger.error("Database connection failed")
        raise RuntimeError("Failed to connect to database")

    if settings.is_development or settings.is_testing:
        logger.info("Creating system tables", environment=settings.environment)
        await db.create_tables()
        await _seed_default_roles(db, RoleModel)
    else:
        logger.info("Production mode: system tables are expected to exist")


DEFAULT_ROLES = [
    {"name": "admin", "description": "Defines content types and manages all records"},
    {"name": "editor", "description": "Creates and edits records in existing content types"},
]


async def _seed_default_roles(db: DatabaseManager, RoleModel: type) -> None:
    """Seed default roles if they don't exist."""
    async with db.session() as session:
        for role_data in DEFAULT_ROLES:
            result = await session.execute(
                select(RoleModel).where(RoleModel.name == role_data["name"])
            )
            if result.scalar_one_or_none() is None:
                session.add(RoleModel(**role_data))
                logger.info("Seeded default role", role_name=role_data["name"])

        await session.commit()


async def close_database() -> None:
    """Close the database connection on shutdown."""
    await get_db_manager().disconnect()
