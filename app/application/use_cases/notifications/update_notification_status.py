"""Use cases moving a notification along its status machine."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.application.events import NOTIFICATION_CANCELLED, NOTIFICATION_DELIVERED, publish_event
from app.application.ports import EventPublisher, RoleOracle
from app.domain.entities import STATUS_CANCELLED, STATUS_DELIVERED, Notification, can_transition
from app.domain.exceptions import InvalidStatusTransitionError
from app.infrastructure.notifications import (
    default_role_oracle,
    realtime_event_publisher,
    serialize_notification,
)
from app.infrastructure.repositories import NotificationRepository

from .access import ensure_owner_or_admin, load_notification

logger = logging.getLogger(__name__)


def _transition(session: Session, notification: Notification, target: str) -> Notification:
    if not can_transition(notification.status, target):
        raise InvalidStatusTransitionError(notification.status, target)
    updated = NotificationRepository(session).update_status(notification.id, target)
    logger.info("Notification %s moved from %s to %s", notification.id, notification.status, target)
    return updated


def cancel_notification(
    session: Session,
    notification_id: str,
    requesting_user_id: str,
    *,
    role_oracle: RoleOracle = default_role_oracle,
    publisher: EventPublisher | None = realtime_event_publisher,
) -> Notification:
    """Withdraw a pending or scheduled notification before it is sent."""

    notification = load_notification(session, notification_id)
    ensure_owner_or_admin(notification, requesting_user_id, role_oracle, "cancel")
    updated = _transition(session, notification, STATUS_CANCELLED)
    publish_event(publisher, NOTIFICATION_CANCELLED, serialize_notification(updated))
    return updated


def confirm_notification_delivery(
    session: Session,
    notification_id: str,
    *,
    publisher: EventPublisher | None = realtime_event_publisher,
) -> Notification:
    """Record a transport confirmation for a sent notification."""

    notification = load_notification(session, notification_id)
    updated = _transition(session, notification, STATUS_DELIVERED)
    publish_event(publisher, NOTIFICATION_DELIVERED, serialize_notification(updated))
    return updated


__all__ = ["cancel_notification", "confirm_notification_delivery"]
