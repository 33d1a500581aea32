"""Use case for notification counters."""

from datetime import datetime

from sqlalchemy.orm import Session

from app.application.ports import RoleOracle
from app.domain.entities import NotificationStats
from app.infrastructure.notifications import default_role_oracle
from app.infrastructure.repositories import NotificationRepository


def get_notification_stats(
    session: Session,
    organization_id: str,
    requesting_user_id: str,
    *,
    role_oracle: RoleOracle = default_role_oracle,
    now: datetime | None = None,
) -> NotificationStats:
    """Return organization-wide stats for admins and personal stats otherwise."""

    repository = NotificationRepository(session)
    if role_oracle.is_admin(requesting_user_id, organization_id):
        return repository.get_stats(organization_id=organization_id, now=now)
    return repository.get_stats(
        organization_id=organization_id, user_id=requesting_user_id, now=now
    )


__all__ = ["get_notification_stats"]
