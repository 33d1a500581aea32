"""Use case for retrieving a single notification."""

from sqlalchemy.orm import Session

from app.application.ports import RoleOracle
from app.domain.entities import Notification
from app.infrastructure.notifications import default_role_oracle

from .access import ensure_owner_or_admin, load_notification


def get_notification(
    session: Session,
    notification_id: str,
    requesting_user_id: str,
    *,
    role_oracle: RoleOracle = default_role_oracle,
) -> Notification:
    """Return the notification if the requester owns it or administers its organization."""

    notification = load_notification(session, notification_id)
    ensure_owner_or_admin(notification, requesting_user_id, role_oracle, "view")
    return notification


__all__ = ["get_notification"]
