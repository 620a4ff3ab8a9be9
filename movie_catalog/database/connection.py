"""Database connection pool management with SQLAlchemy 2.0.

Provides transactional sync sessions with connection pooling
and lifecycle management.
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from movie_catalog.database.models import Base
from movie_catalog.settings import settings


class DatabaseConnection:
    """Manages the relational store connection pool.

    Attributes:
        _url: SQLAlchemy connection URL.
        _engine: SQLAlchemy engine.
        _session_factory: Session factory bound to the engine.

    Example:
        ```python
        db = DatabaseConnection()
        with db.session() as session:
            result = session.execute(text("SELECT 1"))
        ```
    """

    def __init__(self, url: str | None = None) -> None:
        """Initialize the engine and session factory.

        Args:
            url: Connection URL. Defaults to the configured database URL.
        """
        self._url = url or settings.database.sync_url
        self._engine = self._create_engine(self._url)
        self._session_factory = sessionmaker(
            bind=self._engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @staticmethod
    def _create_engine(url: str) -> Engine:
        """Create SQLAlchemy engine with connection pooling.

        SQLite URLs (used for tests and local runs) get a single
        shared connection instead of a QueuePool.

        Args:
            url: Connection URL.

        Returns:
            Configured Engine.
        """
        if url.startswith("sqlite"):
            return create_engine(
                url,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
                echo=settings.debug,
            )
        return create_engine(
            url,
            poolclass=QueuePool,
            pool_size=settings.database.pool_size,
            max_overflow=settings.database.pool_overflow,
            pool_timeout=settings.database.pool_timeout,
            pool_pre_ping=True,
            echo=settings.debug,
        )

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Provide a transactional session scope.

        Automatically commits on success, rolls back on exception,
        and closes the session when done.

        Yields:
            SQLAlchemy Session instance.

        Raises:
            Exception: Re-raises any exception after rollback.
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_tables(self) -> None:
        """Create catalog tables that do not exist yet."""
        Base.metadata.create_all(self._engine)

    def drop_tables(self) -> None:
        """Drop all catalog tables."""
        Base.metadata.drop_all(self._engine)

    def check_connection(self) -> bool:
        """Test database connectivity with a simple query.

        Returns:
            True if connection successful, False otherwise.
        """
        try:
            with self.session() as session:
                session.execute(text("SELECT 1"))
            return True
        except Exception:  # noqa: BLE001
            return False

    def dispose(self) -> None:
        """Dispose the connection pool and release resources."""
        self._engine.dispose()

    @property
    def engine(self) -> Engine:
        """Get the underlying engine."""
        return self._engine

    @property
    def url(self) -> str:
        """Get the connection URL."""
        return self._url


# =============================================================================
# MODULE-LEVEL CONVENIENCE FUNCTIONS
# =============================================================================

_db: DatabaseConnection | None = None


def get_database() -> DatabaseConnection:
    """Get the shared DatabaseConnection instance.

    Creates the instance on first call (lazy initialization).

    Returns:
        DatabaseConnection instance.
    """
    global _db  # noqa: PLW0603
    if _db is None:
        _db = DatabaseConnection()
    return _db


def set_database(db: DatabaseConnection | None) -> None:
    """Replace the shared DatabaseConnection (tests, CLI overrides).

    Args:
        db: Connection to use, or None to reset lazy initialization.
    """
    global _db  # noqa: PLW0603
    _db = db


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency for database sessions.

    Yields:
        SQLAlchemy Session with automatic transaction management.
    """
    db = get_database()
    with db.session() as session:
        yield session


def init_database() -> None:
    """Create tables and verify connectivity."""
    db = get_database()
    db.create_tables()
    if not db.check_connection():
        raise ConnectionError(f"Database connection failed: {db.engine.url!r}")


def close_database() -> None:
    """Close database connection pool.

    Call during application shutdown to release resources.
    """
    global _db  # noqa: PLW0603
    if _db is not None:
        _db.dispose()
        _db = None
