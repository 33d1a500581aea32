"""Use case for resolving the default template of a type and channel."""

from sqlalchemy.orm import Session

from app.domain.entities import NotificationTemplate
from app.infrastructure.repositories import NotificationTemplateRepository


def get_default_notification_template(
    session: Session, organization_id: str, type: str, channel: str
) -> NotificationTemplate | None:
    """Return the active default template or ``None`` when there is none."""

    repository = NotificationTemplateRepository(session)
    return repository.get_default(organization_id, type, channel)


__all__ = ["get_default_notification_template"]
