"""Use case for paginated notification listings."""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy.orm import Session

from app.application.ports import RoleOracle
from app.config import get_settings
from app.domain.entities import NotificationFilters, NotificationPage
from app.domain.exceptions import ValidationError
from app.infrastructure.notifications import default_role_oracle
from app.infrastructure.repositories import NotificationRepository


def list_notifications(
    session: Session,
    organization_id: str,
    filters: NotificationFilters | None,
    requesting_user_id: str,
    page: int = 1,
    limit: int | None = None,
    *,
    role_oracle: RoleOracle = default_role_oracle,
) -> NotificationPage:
    """Return one page of notifications visible to ``requesting_user_id``.

    Non-admin callers only ever see their own notifications, whatever
    ``filters.user_id`` says.
    """

    settings = get_settings()
    limit = settings.default_page_limit if limit is None else limit
    if page < 1:
        raise ValidationError("Page must be greater than or equal to 1")
    if limit < 1 or limit > settings.max_page_limit:
        raise ValidationError(f"Limit must be between 1 and {settings.max_page_limit}")

    effective = filters or NotificationFilters()
    if not role_oracle.is_admin(requesting_user_id, organization_id):
        effective = replace(effective, user_id=requesting_user_id)

    repository = NotificationRepository(session)
    notifications, total = repository.list_with_filters(
        organization_id, effective, page=page, limit=limit
    )
    return NotificationPage(
        notifications=notifications,
        total=total,
        page=page,
        limit=limit,
        has_next=page * limit < total,
        has_prev=page > 1,
        unread_count=repository.count_unread(
            requesting_user_id, organization_id=organization_id
        ),
    )


__all__ = ["list_notifications"]
