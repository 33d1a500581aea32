"""Use case for deleting a notification."""

import logging

from sqlalchemy.orm import Session

from app.application.events import NOTIFICATION_DELETED, publish_event
from app.application.ports import EventPublisher
from app.domain.entities import STATUS_CANCELLED
from app.domain.exceptions import ValidationError
from app.infrastructure.notifications import realtime_event_publisher, serialize_notification
from app.infrastructure.repositories import NotificationRepository

from .access import ensure_owner, load_notification

logger = logging.getLogger(__name__)


def delete_notification(
    session: Session,
    notification_id: str,
    requesting_user_id: str,
    *,
    publisher: EventPublisher | None = realtime_event_publisher,
) -> None:
    """Delete a notification owned by the requester unless it was cancelled."""

    notification = load_notification(session, notification_id)
    ensure_owner(notification, requesting_user_id, "delete")
    if notification.status == STATUS_CANCELLED:
        raise ValidationError("Cancelled notifications cannot be deleted")

    NotificationRepository(session).delete(notification_id)
    logger.info("Notification %s deleted by %s", notification_id, requesting_user_id)
    publish_event(
        publisher,
        NOTIFICATION_DELETED,
        {
            "notification_id": notification_id,
            "user_id": requesting_user_id,
            "notification": serialize_notification(notification),
        },
    )


__all__ = ["delete_notification"]
