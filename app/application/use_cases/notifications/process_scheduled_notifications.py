"""Batch job releasing scheduled notifications whose time has come."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from app.application.ports import EventPublisher, TransportLookup
from app.config import get_settings
from app.domain.exceptions import TransportError
from app.infrastructure.notifications import default_transports, realtime_event_publisher
from app.infrastructure.repositories import NotificationRepository
from app.utils import ensure_app_timezone, now_in_app_timezone

from .process_notification import process_notification

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    processed: int = 0
    sent: int = 0
    failed: int = 0


def process_scheduled_notifications(
    session: Session,
    now: datetime | None = None,
    *,
    transports: TransportLookup = default_transports,
    publisher: EventPublisher | None = realtime_event_publisher,
    limit: int | None = None,
) -> SweepResult:
    """Send every scheduled notification due at ``now``.

    Items are processed one by one in ``scheduled_for`` order. A failing item
    is logged and counted; it never stops the rest of the sweep. Transport
    failures leave the item ``failed``, any other error leaves it scheduled
    for the next sweep.
    """

    current = ensure_app_timezone(now) or now_in_app_timezone()
    batch_size = limit if limit is not None else get_settings().sweep_batch_size
    due = NotificationRepository(session).list_scheduled_before(current, limit=batch_size)
    logger.info("Processing %s scheduled notifications due by %s", len(due), current.isoformat())

    result = SweepResult()
    for notification in due:
        result.processed += 1
        try:
            process_notification(
                session,
                notification,
                transports=transports,
                publisher=publisher,
                now=current,
            )
        except TransportError:
            result.failed += 1
            logger.error("Scheduled notification %s failed to send", notification.id)
        except Exception:
            session.rollback()
            result.failed += 1
            logger.exception("Error processing scheduled notification %s", notification.id)
        else:
            result.sent += 1

    logger.info(
        "Scheduled sweep finished: %s processed, %s sent, %s failed",
        result.processed,
        result.sent,
        result.failed,
    )
    return result


__all__ = ["SweepResult", "process_scheduled_notifications"]
