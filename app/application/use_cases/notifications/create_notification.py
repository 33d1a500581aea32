"""Use case for creating and dispatching a notification."""

from __future__ import annotations

import logging
from datetime import datetime
from uuid import uuid4

from sqlalchemy.orm import Session

from app.application.events import NOTIFICATION_CREATED, publish_event
from app.application.ports import EventPublisher, TransportLookup
from app.application.use_cases.notification_preferences import resolve_delivery
from app.application.use_cases.notification_templates import render_template
from app.domain.entities import (
    NOTIFICATION_CHANNELS,
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_TYPES,
    STATUS_PENDING,
    STATUS_SCHEDULED,
    Notification,
    NotificationRequest,
)
from app.domain.exceptions import NotificationSuppressedError, TransportError, ValidationError
from app.infrastructure.notifications import (
    default_transports,
    realtime_event_publisher,
    serialize_notification,
)
from app.infrastructure.repositories import (
    NotificationRepository,
    NotificationTemplateRepository,
)
from app.utils import ensure_app_timezone, now_in_app_timezone

from .process_notification import deliver_notification, publish_delivery_outcome

logger = logging.getLogger(__name__)


def _validate_request(request: NotificationRequest) -> None:
    if not (request.user_id or "").strip():
        raise ValidationError("Notification recipient is required")
    if request.type not in NOTIFICATION_TYPES:
        raise ValidationError(f"Unknown notification type '{request.type}'")
    if request.channel not in NOTIFICATION_CHANNELS:
        raise ValidationError(f"Unknown notification channel '{request.channel}'")
    if request.priority not in NOTIFICATION_PRIORITIES:
        raise ValidationError(f"Unknown notification priority '{request.priority}'")


def _resolve_content(
    session: Session, organization_id: str, request: NotificationRequest
) -> tuple[str, str, str | None, str | None]:
    """Return ``(title, content, subject, template_id)`` for ``request``."""

    if request.template_id:
        template = NotificationTemplateRepository(session).get(request.template_id)
        if template is not None and template.organization_id == organization_id:
            data = request.data or {}
            subject = template.subject if template.subject is not None else request.subject
            return (
                render_template(template.title, data),
                render_template(template.content, data),
                render_template(subject, data) if subject else None,
                template.id,
            )
        logger.info(
            "Template %s not found for organization %s; using literal content",
            request.template_id,
            organization_id,
        )

    if not request.title or not request.content:
        raise ValidationError("Title and content are required when no template is used")
    return request.title, request.content, request.subject, None


def create_notification(
    session: Session,
    organization_id: str,
    request: NotificationRequest,
    actor_id: str | None = None,
    *,
    transports: TransportLookup = default_transports,
    publisher: EventPublisher | None = realtime_event_publisher,
    now: datetime | None = None,
) -> Notification:
    """Gate, render, persist and (unless deferred) send a notification.

    Suppressed requests raise :class:`NotificationSuppressedError` and leave
    no row behind. A notification whose sink fails is committed as
    ``failed`` and the :class:`TransportError` is re-raised after the
    ``notification:created`` event went out.
    """

    _validate_request(request)
    current = ensure_app_timezone(now) or now_in_app_timezone()

    decision = resolve_delivery(
        session, request.user_id, organization_id, request.type, request.channel, current
    )
    if not decision.enabled:
        logger.info(
            "Suppressed %s notification over %s for user %s (%s)",
            request.type,
            request.channel,
            request.user_id,
            decision.reason,
        )
        raise NotificationSuppressedError(
            user_id=request.user_id,
            type=request.type,
            channel=request.channel,
            reason=decision.reason,
        )

    title, content, subject, template_id = _resolve_content(
        session, organization_id, request
    )

    scheduled_for = ensure_app_timezone(request.scheduled_for)
    if decision.deliver_at is not None and (
        scheduled_for is None or decision.deliver_at > scheduled_for
    ):
        scheduled_for = decision.deliver_at
    is_scheduled = scheduled_for is not None and scheduled_for > current

    notification = Notification(
        id=str(uuid4()),
        user_id=request.user_id,
        organization_id=organization_id,
        type=request.type,
        channel=request.channel,
        title=title,
        content=content,
        subject=subject,
        data=dict(request.data or {}),
        status=STATUS_SCHEDULED if is_scheduled else STATUS_PENDING,
        priority=request.priority,
        scheduled_for=scheduled_for,
        template_id=template_id,
        related_entity_type=request.related_entity_type,
        related_entity_id=request.related_entity_id,
        created_at=current,
    )

    repository = NotificationRepository(session)
    error: TransportError | None = None
    try:
        saved = repository.create(notification, commit=False)
        if not is_scheduled:
            saved, error = deliver_notification(
                session, saved, transports=transports, now=current, commit=False
            )
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(
        "Created notification %s (%s) for user %s by %s",
        saved.id,
        saved.status,
        saved.user_id,
        actor_id or "system",
    )
    publish_event(publisher, NOTIFICATION_CREATED, serialize_notification(saved))
    if not is_scheduled:
        publish_delivery_outcome(publisher, saved, error)
    if error is not None:
        raise error
    return saved


__all__ = ["create_notification"]
