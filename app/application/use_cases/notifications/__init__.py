"""Use cases driving the notification lifecycle."""

from .create_notification import create_notification
from .delete_notification import delete_notification
from .get_notification import get_notification
from .get_notification_stats import get_notification_stats
from .handle_domain_event import EVENT_HANDLERS, handle_domain_event
from .list_notifications import list_notifications
from .mark_notifications_as_read import (
    mark_all_notifications_as_read,
    mark_notification_as_read,
)
from .process_notification import process_notification
from .process_scheduled_notifications import SweepResult, process_scheduled_notifications
from .update_notification_status import cancel_notification, confirm_notification_delivery

__all__ = [
    "EVENT_HANDLERS",
    "SweepResult",
    "cancel_notification",
    "confirm_notification_delivery",
    "create_notification",
    "delete_notification",
    "get_notification",
    "get_notification_stats",
    "handle_domain_event",
    "list_notifications",
    "mark_all_notifications_as_read",
    "mark_notification_as_read",
    "process_notification",
    "process_scheduled_notifications",
]
