"""Pytest configuration and shared fixtures."""

import os
from collections.abc import Iterator

import pytest

from src.shared.config.settings import Settings
from src.shared.db import DatabaseManager, KeyValueRepository
from src.shared.models.location import Location


@pytest.fixture(autouse=True)
def reset_settings_env() -> Iterator[None]:
    """Reset environment variables before each test."""
    # Store original env vars
    original_env = os.environ.copy()

    # Clear settings-related env vars
    for key in list(os.environ.keys()):
        if key.startswith("DASHBOARD_"):
            del os.environ[key]

    yield

    # Restore original env
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def reset_settings_singleton() -> Iterator[None]:
    """Reset the settings singleton between tests."""
    from src.shared.config import settings as settings_module

    settings_module._settings = None

    yield

    settings_module._settings = None


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        openweather_api_key="test-key",
        storage_url="sqlite://",
    )


@pytest.fixture
def db_manager() -> Iterator[DatabaseManager]:
    """In-memory database with tables created."""
    manager = DatabaseManager("sqlite://")
    manager.create_tables()
    yield manager
    manager.close()


@pytest.fixture
def kv_repository(db_manager: DatabaseManager) -> KeyValueRepository:
    """Key-value repository backed by the in-memory database."""
    return KeyValueRepository(db_manager)


@pytest.fixture
def london() -> Location:
    """Sample resolved location."""
    return Location(latitude=51.5073, longitude=-0.1276, display_name="London", country_code="GB")


@pytest.fixture
def paris() -> Location:
    """Second sample location."""
    return Location(latitude=48.8566, longitude=2.3522, display_name="Paris", country_code="FR")
