"""Local account and preference models.

Accounts are a local convenience for keeping saved locations per person.
They are not a security boundary.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.shared.models.location import Location


class Theme(Enum):
    """Dashboard colour theme."""

    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        """Return the opposite theme."""
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


class SavedLocation(BaseModel):
    """Location bookmarked by a user."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Saved location identifier")
    name: str = Field(..., description="Place name")
    country_code: str = Field(default="")
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    def to_location(self) -> Location:
        """Convert to a Location for activation."""
        return Location(
            latitude=self.latitude,
            longitude=self.longitude,
            display_name=self.name,
            country_code=self.country_code,
        )

    def matches(self, location: Location) -> bool:
        """Whether this bookmark points at the same coordinates."""
        return self.latitude == location.latitude and self.longitude == location.longitude


class UserAccount(BaseModel):
    """Registered local user.

    credential_secret holds a salted PBKDF2 digest, never the password.
    """

    id: str = Field(..., description="User identifier")
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    credential_secret: str = Field(..., description="salt$digest hex pair")
    saved_locations: list[SavedLocation] = Field(default_factory=list)
