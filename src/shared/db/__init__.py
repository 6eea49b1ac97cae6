"""Database connection, models, and repository implementation."""

from src.shared.db.connection import DatabaseManager
from src.shared.db.models import Base, KeyValueEntry
from src.shared.db.repositories import KeyValueRepository


def create_key_value_store(
    database_url: str | None = None,
    prefix: str | None = None,
) -> KeyValueRepository:
    """Create a ready-to-use key-value repository.

    Args:
        database_url: SQLAlchemy URL (from settings if None)
        prefix: Key namespace (from settings if None)

    Returns:
        KeyValueRepository backed by a freshly created table
    """
    from src.shared.config.settings import get_settings

    settings = get_settings()
    db_manager = DatabaseManager(database_url or settings.storage_url)
    db_manager.create_tables()
    return KeyValueRepository(db_manager, prefix if prefix is not None else settings.storage_prefix)


__all__ = [
    "Base",
    "KeyValueEntry",
    "DatabaseManager",
    "KeyValueRepository",
    "create_key_value_store",
]
