"""Unit tests for alert notification deduplication."""

from unittest.mock import patch

import pytest

from src.dashboard.notifications import AlertNotifier, build_notification
from src.dashboard.preferences import PreferenceStore
from src.dashboard.view import LoggingNotificationService, NotificationPermission
from src.shared.api.response_models import Alert
from src.shared.db import KeyValueRepository
from src.shared.models.snapshot import AlertSeverity
from tests.fixtures.payloads import ALERT_END, ALERT_START, alert_payload


def make_alert(
    event: str = "Flood Warning",
    description: str = "River levels rising",
    start: int = ALERT_START,
) -> Alert:
    """Build an alert from a provider payload."""
    return Alert.model_validate(alert_payload(event=event, description=description, start=start))


@pytest.fixture
def store(kv_repository: KeyValueRepository) -> PreferenceStore:
    """Preference store whose clock is inside the alert window."""
    return PreferenceStore(kv_repository, clock=lambda: ALERT_START)


@pytest.fixture
def service() -> LoggingNotificationService:
    """Notification service with permission granted."""
    return LoggingNotificationService(NotificationPermission.GRANTED)


class TestBuildNotification:
    """Tests for build_notification."""

    def test_severe_is_sticky(self) -> None:
        """Test severe notifications require interaction."""
        notification = build_notification(make_alert(), AlertSeverity.SEVERE, 10)

        assert notification.title == "SEVERE Weather Alert: Flood Warning"
        assert notification.body == "River levels rising"
        assert notification.tag == f"weather-alert-{ALERT_START}"
        assert notification.require_interaction is True
        assert notification.dismiss_after is None

    def test_moderate_auto_dismisses(self) -> None:
        """Test non-severe notifications auto-dismiss."""
        notification = build_notification(make_alert("Fog Advisory"), AlertSeverity.MODERATE, 10)

        assert notification.title == "MODERATE Weather Alert: Fog Advisory"
        assert notification.require_interaction is False
        assert notification.dismiss_after == 10


class TestAlertNotifier:
    """Tests for AlertNotifier.process."""

    def test_new_alert_notified(
        self, service: LoggingNotificationService, store: PreferenceStore
    ) -> None:
        """Test an unseen alert raises one notification."""
        notifier = AlertNotifier(service, store)

        raised = notifier.process([make_alert()])

        assert len(raised) == 1
        assert service.shown == raised
        assert make_alert().identity in store.load_notified_alerts()

    def test_repeat_poll_not_notified(
        self, service: LoggingNotificationService, store: PreferenceStore
    ) -> None:
        """Test the same alert is not notified twice."""
        notifier = AlertNotifier(service, store)

        notifier.process([make_alert()])
        raised = notifier.process([make_alert()])

        assert raised == []
        assert len(service.shown) == 1

    def test_description_change_not_renotified(
        self, service: LoggingNotificationService, store: PreferenceStore
    ) -> None:
        """Test description edits do not count as a new alert."""
        notifier = AlertNotifier(service, store)

        notifier.process([make_alert(description="Initial statement")])
        raised = notifier.process([make_alert(description="Updated statement")])

        assert raised == []

    def test_new_occurrence_notified(
        self, service: LoggingNotificationService, store: PreferenceStore
    ) -> None:
        """Test the same event with a new start time is notified."""
        notifier = AlertNotifier(service, store)

        notifier.process([make_alert()])
        raised = notifier.process([make_alert(start=ALERT_START + 600)])

        assert len(raised) == 1

    def test_duplicates_within_poll(
        self, service: LoggingNotificationService, store: PreferenceStore
    ) -> None:
        """Test duplicate alerts in one poll notify once."""
        notifier = AlertNotifier(service, store)

        raised = notifier.process([make_alert(), make_alert(description="copy")])

        assert len(raised) == 1

    def test_log_survives_new_notifier(
        self, service: LoggingNotificationService, store: PreferenceStore
    ) -> None:
        """Test the notified log persists across sessions."""
        AlertNotifier(service, store).process([make_alert()])

        raised = AlertNotifier(service, store).process([make_alert()])

        assert raised == []

    @pytest.mark.parametrize(
        "permission", [NotificationPermission.DEFAULT, NotificationPermission.DENIED]
    )
    def test_no_permission_no_notification(
        self, store: PreferenceStore, permission: NotificationPermission
    ) -> None:
        """Test nothing is shown or recorded without permission."""
        service = LoggingNotificationService(permission)
        notifier = AlertNotifier(service, store)

        raised = notifier.process([make_alert()])

        assert raised == []
        assert service.shown == []
        assert store.load_notified_alerts() == set()

    def test_empty_alerts(
        self, service: LoggingNotificationService, store: PreferenceStore
    ) -> None:
        """Test no alerts means no notifications."""
        assert AlertNotifier(service, store).process([]) == []

    def test_severity_from_table(
        self, service: LoggingNotificationService, store: PreferenceStore
    ) -> None:
        """Test severity drives stickiness and duration."""
        notifier = AlertNotifier(service, store, notification_duration_sec=7)

        tornado, drizzle = notifier.process(
            [make_alert("Tornado Warning"), make_alert("Drizzle Advisory", description="")]
        )

        assert tornado.require_interaction is True
        assert drizzle.title == "MINOR Weather Alert: Drizzle Advisory"
        assert drizzle.dismiss_after == 7

    def test_ended_alert_still_returned_notified_once(
        self, service: LoggingNotificationService, kv_repository: KeyValueRepository
    ) -> None:
        """Test an alert past its end time is not renotified on repeated polls."""
        notifier = AlertNotifier(service, PreferenceStore(kv_repository))
        alert = Alert(event="Tornado Warning", description="Take shelter", start=1000, end=2000)

        first = notifier.process([alert])
        second = notifier.process([alert])
        third = notifier.process([alert])

        assert len(first) == 1
        assert second == []
        assert third == []
        assert len(service.shown) == 1

    def test_ended_alerts_pruned_once_gone(
        self, service: LoggingNotificationService, kv_repository: KeyValueRepository
    ) -> None:
        """Test ended alerts leave the log once a later poll no longer returns them."""
        store = PreferenceStore(kv_repository, clock=lambda: ALERT_END + 1)
        notifier = AlertNotifier(service, store)
        old = make_alert()
        fog = Alert.model_validate(alert_payload("Fog Advisory", start=ALERT_END, end=ALERT_END + 3600))
        notifier.process([old])

        notifier.process([fog])

        assert store.load_notified_alerts() == {fog.identity}

    def test_notification_logged_with_alert_event(
        self, service: LoggingNotificationService, store: PreferenceStore
    ) -> None:
        """Test the notified alert's event name is logged without clashing with the log event."""
        with patch("src.dashboard.notifications.logger") as mock_logger:
            AlertNotifier(service, store).process([make_alert()])

        mock_logger.info.assert_called_once_with(
            "alert_notified",
            alert_event="Flood Warning",
            severity="severe",
            starts_at=ALERT_START,
            ends_at=ALERT_END,
        )
