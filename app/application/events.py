"""Best-effort publication of lifecycle events to observers."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .ports import EventPublisher

logger = logging.getLogger(__name__)

NOTIFICATION_CREATED = "notification:created"
NOTIFICATION_SENT = "notification:sent"
NOTIFICATION_FAILED = "notification:failed"
NOTIFICATION_READ = "notification:read"
NOTIFICATIONS_BULK_READ = "notifications:bulk_read"
NOTIFICATION_DELETED = "notification:deleted"
NOTIFICATION_CANCELLED = "notification:cancelled"
NOTIFICATION_DELIVERED = "notification:delivered"
PREFERENCE_UPDATED = "preference:updated"
PREFERENCES_BULK_UPDATED = "preferences:bulk_updated"
PREFERENCE_DELETED = "preference:deleted"


def publish_event(
    publisher: EventPublisher | None, name: str, payload: Mapping[str, Any]
) -> None:
    """Hand ``payload`` to ``publisher`` and log instead of raising on failure.

    Events are emitted after the owning transaction committed, so a failing
    observer must never undo or mask the result of the operation.
    """

    if publisher is None:
        return
    try:
        publisher.publish(name, payload)
    except Exception:
        logger.exception("Failed to publish %s event", name)


__all__ = [
    "publish_event",
    "NOTIFICATION_CREATED",
    "NOTIFICATION_SENT",
    "NOTIFICATION_FAILED",
    "NOTIFICATION_READ",
    "NOTIFICATIONS_BULK_READ",
    "NOTIFICATION_DELETED",
    "NOTIFICATION_CANCELLED",
    "NOTIFICATION_DELIVERED",
    "PREFERENCE_UPDATED",
    "PREFERENCES_BULK_UPDATED",
    "PREFERENCE_DELETED",
]
