"""Key-value repository for JSON-serializable values."""

import json
from typing import Any

from sqlalchemy import delete, select

from src.shared.config.logging import get_logger
from src.shared.constants import STORAGE_PREFIX
from src.shared.db.connection import DatabaseManager
from src.shared.db.models import KeyValueEntry

logger = get_logger(__name__)


class KeyValueRepository:
    """String-keyed get/set/remove of JSON values under an application prefix.

    Reads and writes are synchronous; each call runs in its own transaction.
    """

    def __init__(self, db_manager: DatabaseManager, prefix: str = STORAGE_PREFIX) -> None:
        """Initialize repository.

        Args:
            db_manager: Database manager instance
            prefix: Namespace prepended to every key
        """
        self._db = db_manager
        self._prefix = prefix
        logger.debug("repository_initialized", table=KeyValueEntry.__tablename__, prefix=prefix)

    @property
    def prefix(self) -> str:
        """Namespace prefix for stored keys."""
        return self._prefix

    def _full_key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str, default: Any = None) -> Any:
        """Get a stored value.

        Args:
            key: Key without prefix
            default: Value returned when the key is absent

        Returns:
            Stored value or default
        """
        with self._db.session() as session:
            entry = session.get(KeyValueEntry, self._full_key(key))
            if entry is None or entry.value is None:
                return default
            return entry.value

    def set(self, key: str, value: Any) -> None:
        """Store a value, replacing any previous one.

        Args:
            key: Key without prefix
            value: JSON-serializable value

        Raises:
            TypeError: If the value is not JSON-serializable
        """
        # Validate eagerly so a bad value never reaches the table
        json.dumps(value)

        with self._db.session() as session:
            entry = session.get(KeyValueEntry, self._full_key(key))
            if entry is None:
                session.add(KeyValueEntry(key=self._full_key(key), value=value))
            else:
                entry.value = value

        logger.debug("kv_entry_saved", key=key)

    def remove(self, key: str) -> bool:
        """Remove a stored value.

        Returns:
            True if an entry was removed
        """
        with self._db.session() as session:
            result = session.execute(
                delete(KeyValueEntry).where(KeyValueEntry.key == self._full_key(key))
            )
            removed = result.rowcount > 0

        logger.debug("kv_entry_removed", key=key, removed=removed)
        return removed

    def keys(self) -> list[str]:
        """List stored keys in this namespace, without prefix."""
        with self._db.session() as session:
            stmt = select(KeyValueEntry.key).where(KeyValueEntry.key.startswith(self._prefix))
            return sorted(k[len(self._prefix):] for k in session.execute(stmt).scalars())
