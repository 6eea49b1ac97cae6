"""Unit tests for KeyValueRepository."""

import pytest

from src.shared.db import DatabaseManager, KeyValueRepository, create_key_value_store


class TestKeyValueRepository:
    """Test suite for KeyValueRepository."""

    def test_get_missing_returns_default(self, kv_repository: KeyValueRepository) -> None:
        """Test absent keys return the default."""
        assert kv_repository.get("missing") is None
        assert kv_repository.get("missing", []) == []

    def test_set_then_get(self, kv_repository: KeyValueRepository) -> None:
        """Test values are stored and read back."""
        kv_repository.set("location", {"display_name": "London", "latitude": 51.5})

        assert kv_repository.get("location") == {"display_name": "London", "latitude": 51.5}

    def test_set_replaces_value(self, kv_repository: KeyValueRepository) -> None:
        """Test setting an existing key overwrites it."""
        kv_repository.set("theme", "light")
        kv_repository.set("theme", "dark")

        assert kv_repository.get("theme") == "dark"

    def test_set_rejects_unserializable(self, kv_repository: KeyValueRepository) -> None:
        """Test non-JSON values are rejected before storage."""
        with pytest.raises(TypeError):
            kv_repository.set("bad", object())

        assert kv_repository.get("bad") is None

    def test_remove(self, kv_repository: KeyValueRepository) -> None:
        """Test removing keys."""
        kv_repository.set("theme", "dark")

        assert kv_repository.remove("theme") is True
        assert kv_repository.get("theme") is None
        assert kv_repository.remove("theme") is False

    def test_keys_are_prefixed(self, db_manager: DatabaseManager) -> None:
        """Test keys are namespaced by prefix."""
        app = KeyValueRepository(db_manager, prefix="weather_app_")
        other = KeyValueRepository(db_manager, prefix="other_")

        app.set("theme", "dark")
        other.set("theme", "light")

        assert app.get("theme") == "dark"
        assert other.get("theme") == "light"
        assert app.keys() == ["theme"]
        assert app.prefix == "weather_app_"

    def test_create_key_value_store(self) -> None:
        """Test the factory creates a working store."""
        store = create_key_value_store("sqlite://", prefix="test_")

        store.set("key", [1, 2, 3])

        assert store.get("key") == [1, 2, 3]
        assert store.prefix == "test_"
