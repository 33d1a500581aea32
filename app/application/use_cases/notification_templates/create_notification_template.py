"""Use case for creating notification templates."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from uuid import uuid4

from sqlalchemy.orm import Session

from app.domain.entities import NotificationTemplate
from app.infrastructure.repositories import NotificationTemplateRepository
from app.utils import now_in_app_timezone

from .validators import (
    ensure_known_type_and_channel,
    ensure_template_name,
    ensure_template_text,
    validate_template_variables,
)

logger = logging.getLogger(__name__)


def create_notification_template(
    session: Session,
    *,
    organization_id: str,
    name: str,
    type: str,
    channel: str,
    title: str,
    content: str,
    created_by: str,
    variables: Sequence[str] | None = None,
    subject: str | None = None,
    description: str | None = None,
    is_active: bool = True,
    is_default: bool = False,
) -> NotificationTemplate:
    """Validate and persist a new template for ``organization_id``.

    Marking the template as default demotes any previous default for the same
    ``(type, channel)`` pair inside the same transaction.
    """

    normalized_name = ensure_template_name(name)
    ensure_known_type_and_channel(type, channel)
    ensure_template_text(title, "title")
    ensure_template_text(content, "content")
    declared = _unique(variables or [])
    validate_template_variables((title, content, subject), declared)

    repository = NotificationTemplateRepository(session)
    if is_default:
        repository.clear_default(organization_id, type, channel)

    template = NotificationTemplate(
        id=str(uuid4()),
        name=normalized_name,
        description=description,
        organization_id=organization_id,
        type=type,
        channel=channel,
        subject=subject,
        title=title,
        content=content,
        variables=declared,
        is_active=is_active,
        is_default=is_default,
        created_by=created_by,
        created_at=now_in_app_timezone(),
    )
    created = repository.create(template)
    logger.info(
        "Created notification template %s (%s/%s) for organization %s",
        created.id,
        type,
        channel,
        organization_id,
    )
    return created


def _unique(names: Sequence[str]) -> list[str]:
    result: list[str] = []
    for name in names:
        stripped = name.strip()
        if stripped and stripped not in result:
            result.append(stripped)
    return result


__all__ = ["create_notification_template"]
