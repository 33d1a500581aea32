"""Use case for retrieving a single notification template."""

from sqlalchemy.orm import Session

from app.domain.entities import NotificationTemplate
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import NotificationTemplateRepository


def get_notification_template(
    session: Session, template_id: str, *, organization_id: str | None = None
) -> NotificationTemplate:
    """Return the template identified by ``template_id`` or raise an error.

    When ``organization_id`` is given, templates owned by another organization
    are reported as missing.
    """

    repository = NotificationTemplateRepository(session)
    template = repository.get(template_id)
    if template is None or (
        organization_id is not None and template.organization_id != organization_id
    ):
        raise NotFoundError("Notification template not found")
    return template


__all__ = ["get_notification_template"]
