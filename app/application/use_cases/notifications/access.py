"""Ownership checks shared by the notification use cases."""

from sqlalchemy.orm import Session

from app.application.ports import RoleOracle
from app.domain.entities import Notification
from app.domain.exceptions import ForbiddenError, NotFoundError
from app.infrastructure.repositories import NotificationRepository


def load_notification(session: Session, notification_id: str) -> Notification:
    notification = NotificationRepository(session).get(notification_id)
    if notification is None:
        raise NotFoundError("Notification not found")
    return notification


def ensure_owner(notification: Notification, requesting_user_id: str, action: str) -> None:
    if notification.user_id != requesting_user_id:
        raise ForbiddenError(f"Insufficient permission to {action} this notification")


def ensure_owner_or_admin(
    notification: Notification,
    requesting_user_id: str,
    role_oracle: RoleOracle,
    action: str,
) -> None:
    if notification.user_id == requesting_user_id:
        return
    if role_oracle.is_admin(requesting_user_id, notification.organization_id):
        return
    raise ForbiddenError(f"Insufficient permission to {action} this notification")
