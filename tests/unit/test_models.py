"""Unit tests for domain models."""

import dataclasses

import pytest
from pydantic import ValidationError

from src.shared.api.response_models import Alert, CurrentConditions
from src.shared.models import Location, SavedLocation, Theme, UserAccount, WeatherSnapshot
from tests.fixtures.payloads import alert_payload, current_payload


class TestLocation:
    """Test suite for Location model."""

    def test_str_includes_country(self, london: Location) -> None:
        """Test display form with country code."""
        assert str(london) == "London, GB"

    def test_str_without_country(self) -> None:
        """Test display form without country code."""
        location = Location(latitude=0.0, longitude=0.0, display_name="Null Island")

        assert str(location) == "Null Island"

    def test_dict_roundtrip(self, london: Location) -> None:
        """Test stored dictionary rebuilds an equal Location."""
        assert Location.from_dict(london.to_dict()) == london

    def test_location_is_frozen(self, london: Location) -> None:
        """Test Location cannot be mutated."""
        with pytest.raises(ValidationError):
            london.display_name = "Elsewhere"  # type: ignore[misc]

    def test_invalid_longitude_rejected(self) -> None:
        """Test coordinates are range checked."""
        with pytest.raises(ValidationError):
            Location(latitude=0.0, longitude=181.0, display_name="Bad")


class TestWeatherSnapshot:
    """Test suite for WeatherSnapshot."""

    def test_with_alerts_replaces_alerts_only(self, london: Location) -> None:
        """Test with_alerts returns a new snapshot with other fields intact."""
        current = CurrentConditions.model_validate(current_payload())
        snapshot = WeatherSnapshot(location=london, current=current)
        alert = Alert.model_validate(alert_payload())

        updated = snapshot.with_alerts([alert])

        assert updated is not snapshot
        assert updated.alerts == (alert,)
        assert updated.current is current
        assert updated.fetched_at == snapshot.fetched_at
        assert updated.has_alerts is True
        assert snapshot.has_alerts is False

    def test_snapshot_is_frozen(self, london: Location) -> None:
        """Test snapshot cannot be mutated."""
        snapshot = WeatherSnapshot(
            location=london,
            current=CurrentConditions.model_validate(current_payload()),
        )

        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.alerts = ()  # type: ignore[misc]

    def test_age_seconds_non_negative(self, london: Location) -> None:
        """Test snapshot age."""
        snapshot = WeatherSnapshot(
            location=london,
            current=CurrentConditions.model_validate(current_payload()),
        )

        assert snapshot.age_seconds() >= 0


class TestAccountModels:
    """Test suite for account models."""

    def test_theme_toggled(self) -> None:
        """Test theme toggling."""
        assert Theme.LIGHT.toggled() is Theme.DARK
        assert Theme.DARK.toggled() is Theme.LIGHT

    def test_saved_location_matches_coordinates(self, london: Location) -> None:
        """Test saved locations compare by coordinates."""
        saved = SavedLocation(
            id="abc",
            name="London",
            country_code="GB",
            latitude=london.latitude,
            longitude=london.longitude,
        )

        assert saved.matches(london)
        assert saved.to_location() == london

    def test_user_account_requires_name(self) -> None:
        """Test empty names are rejected."""
        with pytest.raises(ValidationError):
            UserAccount(id="1", name="", email="a@b.c", credential_secret="s$d")
