"""Use case for deleting notification templates."""

import logging

from sqlalchemy.orm import Session

from app.domain.exceptions import ValidationError
from app.infrastructure.repositories import NotificationTemplateRepository

from .get_notification_template import get_notification_template

logger = logging.getLogger(__name__)


def delete_notification_template(
    session: Session, template_id: str, *, organization_id: str | None = None
) -> None:
    """Delete the template unless it is the default of its type and channel."""

    template = get_notification_template(
        session, template_id, organization_id=organization_id
    )
    if template.is_default:
        raise ValidationError("Default templates cannot be deleted")

    NotificationTemplateRepository(session).delete(template.id)
    logger.info("Deleted notification template %s", template.id)


__all__ = ["delete_notification_template"]
