"""Alert notification deduplication.

Raises one user notification per alert occurrence. An occurrence is
identified by (event, starts_at, ends_at); description changes between polls
do not cause a repeat notification.
"""

from collections.abc import Sequence

from src.dashboard.preferences import PreferenceStore
from src.dashboard.severity import SeverityTable, classify_severity
from src.dashboard.view import (
    AlertNotification,
    NotificationPermission,
    NotificationService,
)
from src.shared.api.response_models import Alert
from src.shared.config.logging import get_logger
from src.shared.constants import NOTIFICATION_DURATION_SEC
from src.shared.models.snapshot import AlertSeverity

logger = get_logger(__name__)


def build_notification(
    alert: Alert, severity: AlertSeverity, duration_seconds: float
) -> AlertNotification:
    """Build the notification for an alert.

    Severe alerts stay until dismissed; others auto-dismiss.
    """
    sticky = severity is AlertSeverity.SEVERE
    return AlertNotification(
        title=f"{severity.value.upper()} Weather Alert: {alert.event}",
        body=alert.description,
        tag=f"weather-alert-{alert.starts_at}",
        require_interaction=sticky,
        dismiss_after=None if sticky else duration_seconds,
    )


class AlertNotifier:
    """Notify new alerts once and remember them across sessions."""

    def __init__(
        self,
        notification_service: NotificationService,
        store: PreferenceStore,
        severity_table: SeverityTable | None = None,
        notification_duration_sec: float = NOTIFICATION_DURATION_SEC,
    ) -> None:
        """Initialize notifier.

        Args:
            notification_service: Platform notification service
            store: Preference store holding the notified-alert log
            severity_table: Ordered severity keyword table
            notification_duration_sec: Auto-dismiss delay for non-severe alerts
        """
        self._service = notification_service
        self._store = store
        self._severity_table = severity_table
        self._duration = notification_duration_sec

    def process(self, alerts: Sequence[Alert]) -> list[AlertNotification]:
        """Notify alerts that have not been notified before.

        Does nothing unless notification permission is already granted.

        Args:
            alerts: Alerts from the latest poll

        Returns:
            Notifications raised by this call
        """
        if not alerts:
            return []

        permission = self._service.permission()
        if permission is not NotificationPermission.GRANTED:
            logger.debug("alert_notifications_skipped", permission=permission.value)
            return []

        notified = self._store.load_notified_alerts()
        raised: list[AlertNotification] = []

        for alert in alerts:
            if alert.identity in notified:
                continue

            severity = classify_severity(alert, self._severity_table)
            notification = build_notification(alert, severity, self._duration)
            self._service.show(notification)
            notified.add(alert.identity)
            raised.append(notification)

            logger.info(
                "alert_notified",
                alert_event=alert.event,
                severity=severity.value,
                starts_at=alert.starts_at,
                ends_at=alert.ends_at,
            )

        if raised:
            current = {alert.identity for alert in alerts}
            self._store.save_notified_alerts(notified, current=current)

        return raised
