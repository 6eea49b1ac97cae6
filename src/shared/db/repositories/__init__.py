"""Repository pattern implementation for local persistence."""

from src.shared.db.repositories.key_value import KeyValueRepository

__all__ = [
    "KeyValueRepository",
]
