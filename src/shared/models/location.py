"""Canonical location model.

A Location is resolved once from a search or device fix and then replaced
wholesale; it is never mutated.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Location(BaseModel):
    """Resolved geographic location.

    Attributes:
        latitude: Latitude in degrees
        longitude: Longitude in degrees
        display_name: Place name shown to the user
        country_code: ISO 3166 country code
    """

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, description="Latitude")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude")
    display_name: str = Field(..., description="Place name")
    country_code: str = Field(default="", description="ISO 3166 country code")

    def __str__(self) -> str:
        if self.country_code:
            return f"{self.display_name}, {self.country_code}"
        return self.display_name

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Location":
        """Rebuild a Location from its stored dictionary."""
        return cls.model_validate(data)
