"""Database connection manager for the local key-value store."""

from contextlib import contextmanager
from typing import Any, Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from src.shared.config.logging import get_logger
from src.shared.config.settings import get_settings
from src.shared.db.models import Base

logger = get_logger(__name__)


class DatabaseManager:
    """Manages database connections and sessions.

    Supports context manager protocol for automatic session cleanup.
    SQLite URLs share a single connection so in-memory stores persist
    for the lifetime of the manager.
    """

    def __init__(self, database_url: str | None = None) -> None:
        """Initialize database manager.

        Args:
            database_url: Database connection string. If None, loads from settings.
        """
        self._database_url = database_url or get_settings().storage_url

        engine_kwargs: dict[str, Any] = {"echo": False}
        if self._database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True

        self._engine: Engine = create_engine(self._database_url, **engine_kwargs)

        self._session_factory = sessionmaker(
            bind=self._engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

        logger.info("database_manager_initialized", url=self._engine.url.render_as_string())

    @property
    def engine(self) -> Engine:
        """Get SQLAlchemy engine."""
        return self._engine

    def create_tables(self) -> None:
        """Create the key-value table if it does not exist."""
        Base.metadata.create_all(self._engine)
        logger.debug("database_tables_created")

    def health_check(self) -> bool:
        """Check if database is reachable.

        Returns:
            True if database connection successful, False otherwise
        """
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.debug("database_health_check_passed")
            return True
        except Exception as e:
            logger.error("database_health_check_failed", error=str(e))
            return False

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Provide a transactional scope for database operations.

        Yields:
            SQLAlchemy session

        Example:
            with db_manager.session() as session:
                session.add(model)
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

    def close(self) -> None:
        """Dispose of the engine and its connections."""
        logger.info("closing_database_connections")
        self._engine.dispose()
