"""Use cases for marking notifications as read."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from app.application.events import NOTIFICATION_READ, NOTIFICATIONS_BULK_READ, publish_event
from app.application.ports import EventPublisher
from app.domain.entities import Notification
from app.domain.exceptions import ValidationError
from app.infrastructure.notifications import realtime_event_publisher, serialize_notification
from app.infrastructure.repositories import NotificationRepository
from app.utils import ensure_app_timezone, now_in_app_timezone

from .access import ensure_owner, load_notification

logger = logging.getLogger(__name__)


def mark_notification_as_read(
    session: Session,
    notification_id: str,
    requesting_user_id: str,
    *,
    publisher: EventPublisher | None = realtime_event_publisher,
    now: datetime | None = None,
) -> Notification:
    """Stamp ``read_at`` on a notification owned by the requester.

    Reading an already read notification stamps it again with the current
    time.
    """

    notification = load_notification(session, notification_id)
    ensure_owner(notification, requesting_user_id, "modify")
    if notification.sent_at is None:
        raise ValidationError("Only sent notifications can be marked as read")

    read_at = ensure_app_timezone(now) or now_in_app_timezone()
    updated = NotificationRepository(session).mark_as_read(notification_id, read_at=read_at)
    logger.info("Notification %s marked as read by %s", notification_id, requesting_user_id)
    publish_event(
        publisher,
        NOTIFICATION_READ,
        serialize_notification(updated),
    )
    return updated


def mark_all_notifications_as_read(
    session: Session,
    user_id: str,
    *,
    publisher: EventPublisher | None = realtime_event_publisher,
    now: datetime | None = None,
) -> int:
    """Mark every sent, unread notification of ``user_id`` as read."""

    read_at = ensure_app_timezone(now) or now_in_app_timezone()
    count = NotificationRepository(session).mark_all_as_read(user_id, read_at=read_at)
    logger.info("Marked %s notifications as read for user %s", count, user_id)
    publish_event(publisher, NOTIFICATIONS_BULK_READ, {"user_id": user_id, "count": count})
    return count


__all__ = ["mark_notification_as_read", "mark_all_notifications_as_read"]
