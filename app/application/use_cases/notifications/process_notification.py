"""Send path shared by immediate creation and the scheduled sweep."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from app.application.events import NOTIFICATION_FAILED, NOTIFICATION_SENT, publish_event
from app.application.ports import EventPublisher, TransportLookup
from app.domain.entities import STATUS_FAILED, STATUS_SENT, Notification, can_transition
from app.domain.exceptions import InvalidStatusTransitionError, TransportError
from app.infrastructure.notifications import (
    default_transports,
    realtime_event_publisher,
    serialize_notification,
)
from app.infrastructure.repositories import NotificationRepository
from app.utils import ensure_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)


def deliver_notification(
    session: Session,
    notification: Notification,
    *,
    transports: TransportLookup,
    now: datetime | None = None,
    commit: bool = True,
) -> tuple[Notification, TransportError | None]:
    """Hand ``notification`` to its channel sink and record the outcome.

    Returns the stored notification together with the transport error, if
    any, so callers decide when to publish and whether to raise.
    """

    if notification.id is None:
        raise ValueError("Only persisted notifications can be delivered")
    if not can_transition(notification.status, STATUS_SENT):
        raise InvalidStatusTransitionError(notification.status, STATUS_SENT)

    repository = NotificationRepository(session)
    error: TransportError | None = None
    sink = transports.get(notification.channel)
    if sink is None:
        error = TransportError(
            f"No transport registered for channel '{notification.channel}'",
            channel=notification.channel,
        )
    else:
        try:
            sink.send(notification)
        except TransportError as exc:
            error = exc
        except Exception as exc:
            logger.exception("Transport for %s raised unexpectedly", notification.channel)
            error = TransportError(str(exc) or exc.__class__.__name__, channel=notification.channel)
            error.__cause__ = exc

    current = ensure_app_timezone(now) or now_in_app_timezone()
    if error is not None:
        logger.warning(
            "Delivery of notification %s over %s failed: %s",
            notification.id,
            notification.channel,
            error,
        )
        saved = repository.update_status(
            notification.id, STATUS_FAILED, updated_at=current, commit=commit
        )
        return saved, error

    saved = repository.update_status(
        notification.id, STATUS_SENT, sent_at=current, updated_at=current, commit=commit
    )
    logger.info(
        "Notification %s sent over %s (%s)", saved.id, saved.channel, saved.type
    )
    return saved, None


def publish_delivery_outcome(
    publisher: EventPublisher | None,
    notification: Notification,
    error: TransportError | None,
) -> None:
    payload = serialize_notification(notification)
    if error is None:
        publish_event(publisher, NOTIFICATION_SENT, payload)
    else:
        publish_event(publisher, NOTIFICATION_FAILED, {**payload, "error": str(error)})


def process_notification(
    session: Session,
    notification: Notification,
    *,
    transports: TransportLookup = default_transports,
    publisher: EventPublisher | None = realtime_event_publisher,
    now: datetime | None = None,
) -> Notification:
    """Send ``notification`` and commit its new status.

    A sink failure is committed as ``failed`` and then raised as
    :class:`TransportError`.
    """

    saved, error = deliver_notification(
        session, notification, transports=transports, now=now, commit=True
    )
    publish_delivery_outcome(publisher, saved, error)
    if error is not None:
        raise error
    return saved


__all__ = ["deliver_notification", "process_notification", "publish_delivery_outcome"]
