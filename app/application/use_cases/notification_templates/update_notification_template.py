"""Use case for updating notification templates."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy.orm import Session

from app.domain.entities import NotificationTemplate
from app.infrastructure.repositories import NotificationTemplateRepository
from app.utils import now_in_app_timezone

from .create_notification_template import _unique
from .get_notification_template import get_notification_template
from .validators import ensure_template_name, ensure_template_text, validate_template_variables


def update_notification_template(
    session: Session,
    *,
    template_id: str,
    updated_by: str,
    organization_id: str | None = None,
    name: str | None = None,
    description: str | None = None,
    subject: str | None = None,
    title: str | None = None,
    content: str | None = None,
    variables: Sequence[str] | None = None,
    is_active: bool | None = None,
    is_default: bool | None = None,
) -> NotificationTemplate:
    """Apply the provided fields to an existing template.

    Variable declarations are checked against the merged template whenever
    the title, content, subject or variables change.
    """

    current = get_notification_template(
        session, template_id, organization_id=organization_id
    )

    updated = replace(
        current,
        name=ensure_template_name(name) if name is not None else current.name,
        description=description if description is not None else current.description,
        subject=subject if subject is not None else current.subject,
        title=ensure_template_text(title, "title") if title is not None else current.title,
        content=(
            ensure_template_text(content, "content")
            if content is not None
            else current.content
        ),
        variables=_unique(variables) if variables is not None else current.variables,
        is_active=is_active if is_active is not None else current.is_active,
        is_default=is_default if is_default is not None else current.is_default,
        updated_by=updated_by,
        updated_at=now_in_app_timezone(),
    )

    if any(value is not None for value in (subject, title, content, variables)):
        validate_template_variables(
            (updated.title, updated.content, updated.subject), updated.variables
        )

    repository = NotificationTemplateRepository(session)
    if updated.is_default and not current.is_default:
        repository.clear_default(
            updated.organization_id, updated.type, updated.channel, exclude_id=updated.id
        )
    return repository.update(updated)


__all__ = ["update_notification_template"]
