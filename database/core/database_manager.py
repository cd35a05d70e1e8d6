# database/core/database_manager.py
"""
Core database management and connection handling
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from database.base import Base
from exceptions import (
    DatabaseConfigurationError,
    DatabaseConnectionError,
    PersistenceConflict,
    PersistenceFailed,
    StorageBusy,
)

if TYPE_CHECKING:
    from configurations import DatabaseConfig

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("sqlite", "postgresql")


class DatabaseManager:
    """
    Core database connection and session management
    Handles: connections, sessions, table operations
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        busy_timeout: int = 15,
    ):
        """
        Initialize database manager with connection parameters

        Args:
            database_url: Database connection URL
            echo: Whether to echo SQL queries (for debugging)
            pool_size, max_overflow, pool_timeout, pool_recycle: PostgreSQL pool
            busy_timeout: Seconds SQLite waits on a locked file before failing

        Raises:
            DatabaseConfigurationError: If database URL is invalid
            DatabaseConnectionError: If connection cannot be established
        """
        if not database_url or not isinstance(database_url, str):
            raise DatabaseConfigurationError("Database URL must be a non-empty string")

        if not database_url.startswith(SUPPORTED_SCHEMES):
            raise DatabaseConfigurationError(
                f"Unsupported database type in URL: {database_url}"
            )

        self.database_url = database_url
        self.echo = echo
        self.pool_options = {
            "pool_size": pool_size,
            "max_overflow": max_overflow,
            "pool_timeout": pool_timeout,
            "pool_recycle": pool_recycle,
        }
        self.busy_timeout = busy_timeout
        self.db_type = "sqlite" if database_url.startswith("sqlite") else "postgresql"
        self.engine: Engine = None
        self.SessionLocal = None

        self._initialize_database()

    @classmethod
    def from_config(cls, config: "DatabaseConfig") -> "DatabaseManager":
        return cls(
            config.database_url,
            echo=config.echo,
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
            pool_recycle=config.pool_recycle,
            busy_timeout=config.busy_timeout,
        )

    @property
    def is_memory(self) -> bool:
        return self.db_type == "sqlite" and (
            self.database_url.endswith(":memory:") or self.database_url == "sqlite://"
        )

    def _initialize_database(self) -> None:
        """
        Initialize database engine and verify connectivity

        Raises:
            DatabaseConnectionError: If database connection fails
        """
        try:
            if self.db_type == "sqlite":
                if not self.is_memory:
                    self._ensure_sqlite_directory()
                self.engine = self._create_sqlite_engine()
            else:
                self.engine = self._create_postgresql_engine()

            # ***> Test connection <***
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))

            self.SessionLocal = sessionmaker(
                autocommit=False,
                autoflush=False,
                expire_on_commit=False,
                bind=self.engine,
            )
        except OperationalError as error:
            raise DatabaseConnectionError(
                f"Failed to connect to database: {error}"
            ) from error
        except SQLAlchemyError as error:
            raise DatabaseConnectionError(
                f"Database configuration error: {error}"
            ) from error

    def _create_sqlite_engine(self) -> Engine:
        """
        Create SQLite engine. In-memory databases share one connection so
        every session sees the same tables.
        """
        if self.is_memory:
            engine = create_engine(
                self.database_url,
                echo=self.echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            engine = create_engine(
                self.database_url,
                echo=self.echo,
                connect_args={
                    "check_same_thread": False,
                    "timeout": self.busy_timeout,
                },
                pool_pre_ping=True,
                pool_recycle=300,
            )

        is_memory = self.is_memory

        # ***> Enable foreign key constraints for SQLite <***
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            if not is_memory:
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.close()

        return engine

    def _create_postgresql_engine(self) -> Engine:
        return create_engine(
            self.database_url,
            echo=self.echo,
            pool_pre_ping=True,
            **self.pool_options,
        )

    def _ensure_sqlite_directory(self) -> None:
        """
        Ensure directory exists for SQLite database file
        """
        db_path = self.database_url.replace("sqlite:///", "")
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def get_session(self) -> Iterator[Session]:
        """
        Context manager for one transaction: commits on success, rolls back
        on any error.

        Yields:
            Session: SQLAlchemy session object

        Raises:
            PersistenceConflict: If a unique constraint rejected the write
            StorageBusy: If SQLite reported the database as locked
            DatabaseConnectionError: If the connection was lost
            PersistenceFailed: For any other storage error
        """
        if not self.SessionLocal:
            raise DatabaseConnectionError(
                "Database not initialized - SessionLocal is None"
            )

        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except IntegrityError as error:
            session.rollback()
            raise PersistenceConflict(f"Data integrity violation: {error}") from error
        except DisconnectionError as error:
            session.rollback()
            raise DatabaseConnectionError(
                f"Database connection lost: {error}"
            ) from error
        except OperationalError as error:
            session.rollback()
            if "locked" in str(error).lower():
                raise StorageBusy(f"Database is locked: {error}") from error
            raise PersistenceFailed(f"Database operation failed: {error}") from error
        except SQLAlchemyError as error:
            session.rollback()
            raise PersistenceFailed(f"Database session error: {error}") from error
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_tables(self) -> None:
        """
        Create all tables defined in the models

        Raises:
            PersistenceFailed: If table creation fails
        """
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as error:
            raise PersistenceFailed(f"Failed to create tables: {error}") from error

    def dispose(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
