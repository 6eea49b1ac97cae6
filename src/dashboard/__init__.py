"""Headless weather dashboard core."""

from src.dashboard.locations import LocationResolver, fallback_location
from src.dashboard.notifications import AlertNotifier, build_notification
from src.dashboard.preferences import PreferenceStore, UserRegistry
from src.dashboard.scheduler import RefreshScheduler, SchedulerState
from src.dashboard.severity import classify_severity
from src.dashboard.timers import PeriodicTask
from src.dashboard.view import (
    AlertNotification,
    DashboardView,
    GeolocationProvider,
    NotificationPermission,
    NotificationService,
)

__all__ = [
    # Scheduling
    "RefreshScheduler",
    "SchedulerState",
    "PeriodicTask",
    # Locations
    "LocationResolver",
    "fallback_location",
    # Alerts
    "AlertNotifier",
    "build_notification",
    "classify_severity",
    # Preferences
    "PreferenceStore",
    "UserRegistry",
    # Collaborators
    "DashboardView",
    "NotificationService",
    "GeolocationProvider",
    "NotificationPermission",
    "AlertNotification",
]
