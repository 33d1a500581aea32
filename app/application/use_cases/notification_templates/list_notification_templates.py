"""Use case for listing the templates of an organization."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import NotificationTemplate
from app.infrastructure.repositories import NotificationTemplateRepository


def list_notification_templates(
    session: Session,
    organization_id: str,
    *,
    type: str | None = None,
    channel: str | None = None,
    active_only: bool = False,
) -> Sequence[NotificationTemplate]:
    """Return templates of ``organization_id``, newest first."""

    repository = NotificationTemplateRepository(session)
    return repository.list_by_organization(
        organization_id, type=type, channel=channel, active_only=active_only
    )


__all__ = ["list_notification_templates"]
