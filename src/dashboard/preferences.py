"""Local preference store and local accounts.

Persists the last-viewed location, the theme, the notified-alert log and a
registry of local users in the key-value store. Local accounts are a
convenience for keeping saved locations per person, not a security
boundary; credentials are kept as salted PBKDF2 digests.
"""

import hashlib
import hmac
import secrets
import time
import uuid
from collections.abc import Callable, Iterable

from pydantic import ValidationError as PydanticValidationError

from src.shared.api.errors import AuthenticationError, ValidationError
from src.shared.api.response_models import AlertIdentity
from src.shared.config.logging import get_logger
from src.shared.constants import DEFAULT_USERNAME, SAVED_LOCATIONS_LIMIT
from src.shared.db.repositories import KeyValueRepository
from src.shared.models.account import SavedLocation, Theme, UserAccount
from src.shared.models.location import Location

logger = get_logger(__name__)

# Storage keys (namespaced by the repository prefix)
LOCATION_KEY = "location"
THEME_KEY = "theme"
NOTIFIED_ALERTS_KEY = "notified_alerts"
USERS_KEY = "users"
ACTIVE_USER_KEY = "active_user"

PBKDF2_ITERATIONS = 120_000


class PreferenceStore:
    """Last-viewed location, theme and notified-alert log."""

    def __init__(
        self,
        repository: KeyValueRepository,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize preference store.

        Args:
            repository: Key-value repository to persist into
            clock: Returns the current unix time (used to prune expired alerts)
        """
        self._repo = repository
        self._clock = clock

    def save_location(self, location: Location) -> None:
        """Persist the last-viewed location."""
        self._repo.set(LOCATION_KEY, location.to_dict())
        logger.debug("location_saved", location=str(location))

    def load_location(self) -> Location | None:
        """Load the last-viewed location.

        Returns:
            Stored location, or None if absent or unreadable
        """
        data = self._repo.get(LOCATION_KEY)
        if data is None:
            return None

        try:
            return Location.from_dict(data)
        except PydanticValidationError as e:
            logger.warning("saved_location_invalid", error=str(e))
            self._repo.remove(LOCATION_KEY)
            return None

    def clear_location(self) -> None:
        """Forget the last-viewed location."""
        self._repo.remove(LOCATION_KEY)

    def get_theme(self) -> Theme:
        """Get the stored theme (light by default)."""
        value = self._repo.get(THEME_KEY, Theme.LIGHT.value)
        try:
            return Theme(value)
        except ValueError:
            return Theme.LIGHT

    def set_theme(self, theme: Theme) -> None:
        """Persist the theme choice."""
        self._repo.set(THEME_KEY, theme.value)
        logger.info("theme_changed", theme=theme.value)

    def toggle_theme(self) -> Theme:
        """Switch between light and dark and persist the result."""
        theme = self.get_theme().toggled()
        self.set_theme(theme)
        return theme

    def load_notified_alerts(self) -> set[AlertIdentity]:
        """Load identities of alerts already notified."""
        entries = self._repo.get(NOTIFIED_ALERTS_KEY, [])
        return {AlertIdentity(str(event), int(start), int(end)) for event, start, end in entries}

    def save_notified_alerts(
        self,
        identities: Iterable[AlertIdentity],
        current: Iterable[AlertIdentity] = (),
    ) -> None:
        """Persist the notified-alert log.

        Ended alerts are dropped unless they are still in the current poll,
        so an alert the provider keeps returning is never notified twice.

        Args:
            identities: Identities notified so far
            current: Identities returned by the latest poll
        """
        now = self._clock()
        live = set(current)
        kept = sorted(
            identity for identity in identities if identity.ends_at >= now or identity in live
        )
        self._repo.set(NOTIFIED_ALERTS_KEY, [list(identity) for identity in kept])
        logger.debug("notified_alerts_saved", entries=len(kept))


def hash_credential(password: str, salt: str | None = None) -> str:
    """Derive a salted PBKDF2 digest for a password.

    Returns:
        "salt$digest" hex pair
    """
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt), PBKDF2_ITERATIONS
    )
    return f"{salt}${digest.hex()}"


def verify_credential(password: str, credential_secret: str) -> bool:
    """Check a password against a stored digest."""
    salt, _, _ = credential_secret.partition("$")
    return hmac.compare_digest(hash_credential(password, salt), credential_secret)


class UserRegistry:
    """Local user registry with per-user saved locations.

    Emails are unique and compared case-sensitively.
    """

    def __init__(
        self,
        repository: KeyValueRepository,
        saved_locations_limit: int = SAVED_LOCATIONS_LIMIT,
        default_username: str = DEFAULT_USERNAME,
    ) -> None:
        self._repo = repository
        self.saved_locations_limit = saved_locations_limit
        self.default_username = default_username

    def _load_users(self) -> list[UserAccount]:
        return [UserAccount.model_validate(item) for item in self._repo.get(USERS_KEY, [])]

    def _store_users(self, users: list[UserAccount]) -> None:
        self._repo.set(USERS_KEY, [user.model_dump() for user in users])

    def register(self, name: str, email: str, password: str, confirm_password: str) -> UserAccount:
        """Register a new user and log them in.

        Raises:
            ValidationError: If passwords differ or the email is taken
        """
        if password != confirm_password:
            raise ValidationError("Passwords do not match")

        users = self._load_users()
        if any(user.email == email for user in users):
            raise ValidationError("User with this email already exists")

        try:
            user = UserAccount(
                id=uuid.uuid4().hex,
                name=name,
                email=email,
                credential_secret=hash_credential(password),
            )
        except PydanticValidationError as e:
            raise ValidationError(
                "Name and email are required",
                details={"errors": e.error_count()},
            ) from e

        users.append(user)
        self._store_users(users)
        logger.info("user_registered", user_id=user.id)

        return self.login(email, password)

    def login(self, email: str, password: str) -> UserAccount:
        """Log in with email and password.

        Raises:
            AuthenticationError: If no user matches
        """
        for user in self._load_users():
            if user.email == email and verify_credential(password, user.credential_secret):
                self._repo.set(ACTIVE_USER_KEY, user.id)
                logger.info("user_logged_in", user_id=user.id)
                return user

        raise AuthenticationError()

    def logout(self) -> None:
        """Log out the active user."""
        self._repo.remove(ACTIVE_USER_KEY)
        logger.info("user_logged_out")

    def current_user(self) -> UserAccount | None:
        """Get the active user, if any."""
        user_id = self._repo.get(ACTIVE_USER_KEY)
        if user_id is None:
            return None
        return next((user for user in self._load_users() if user.id == user_id), None)

    def display_name(self) -> str:
        """Active user's name, or the guest name."""
        user = self.current_user()
        return user.name if user else self.default_username

    def saved_locations(self) -> list[SavedLocation]:
        """Saved locations of the active user (empty when logged out)."""
        user = self.current_user()
        return list(user.saved_locations) if user else []

    def save_location(self, location: Location) -> SavedLocation:
        """Bookmark a location for the active user.

        Raises:
            ValidationError: If no user is logged in, the location is already
                saved, or the limit is reached
        """
        users = self._load_users()
        user = self._active(users)

        if any(saved.matches(location) for saved in user.saved_locations):
            raise ValidationError("This location is already saved")

        if len(user.saved_locations) >= self.saved_locations_limit:
            raise ValidationError(
                f"You can only save up to {self.saved_locations_limit} locations. "
                "Please remove one first."
            )

        saved = SavedLocation(
            id=uuid.uuid4().hex,
            name=location.display_name,
            country_code=location.country_code,
            latitude=location.latitude,
            longitude=location.longitude,
        )
        user.saved_locations.append(saved)
        self._store_users(users)
        logger.info("location_bookmarked", user_id=user.id, location=str(location))

        return saved

    def remove_location(self, location_id: str) -> bool:
        """Remove a saved location of the active user.

        Returns:
            True if a location was removed
        """
        users = self._load_users()
        user = self._active(users)

        remaining = [saved for saved in user.saved_locations if saved.id != location_id]
        removed = len(remaining) != len(user.saved_locations)
        if removed:
            user.saved_locations = remaining
            self._store_users(users)

        return removed

    def _active(self, users: list[UserAccount]) -> UserAccount:
        user_id = self._repo.get(ACTIVE_USER_KEY)
        for user in users:
            if user.id == user_id:
                return user
        raise ValidationError("Log in to manage saved locations")
