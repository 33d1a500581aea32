"""Use cases for activating and deactivating notification templates."""

from sqlalchemy.orm import Session

from app.domain.entities import NotificationTemplate
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import NotificationTemplateRepository

from .get_notification_template import get_notification_template


def _set_active(
    session: Session, template_id: str, is_active: bool, organization_id: str | None
) -> NotificationTemplate:
    get_notification_template(session, template_id, organization_id=organization_id)
    updated = NotificationTemplateRepository(session).set_active(template_id, is_active)
    if updated is None:
        raise NotFoundError("Notification template not found")
    return updated


def activate_notification_template(
    session: Session, template_id: str, *, organization_id: str | None = None
) -> NotificationTemplate:
    """Make the template available for rendering again."""

    return _set_active(session, template_id, True, organization_id)


def deactivate_notification_template(
    session: Session, template_id: str, *, organization_id: str | None = None
) -> NotificationTemplate:
    """Hide the template from default resolution without deleting it."""

    return _set_active(session, template_id, False, organization_id)


__all__ = ["activate_notification_template", "deactivate_notification_template"]
