"""Use cases for changing notification preferences."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.application.events import PREFERENCE_UPDATED, PREFERENCES_BULK_UPDATED, publish_event
from app.application.ports import EventPublisher
from app.domain.entities import (
    FREQUENCY_IMMEDIATE,
    NOTIFICATION_CHANNELS,
    NOTIFICATION_FREQUENCIES,
    NOTIFICATION_TYPES,
    NotificationPreference,
    PreferenceUpdate,
)
from app.domain.exceptions import ValidationError
from app.infrastructure.notifications import realtime_event_publisher, serialize_preference
from app.infrastructure.repositories import NotificationPreferenceRepository

from .scheduling import validate_quiet_hours

logger = logging.getLogger(__name__)


def _validate_update(update: PreferenceUpdate) -> None:
    if update.type not in NOTIFICATION_TYPES:
        raise ValidationError(f"Unknown notification type '{update.type}'")
    if update.channel not in NOTIFICATION_CHANNELS:
        raise ValidationError(f"Unknown notification channel '{update.channel}'")
    if update.frequency is not None and update.frequency not in NOTIFICATION_FREQUENCIES:
        raise ValidationError(f"Unknown notification frequency '{update.frequency}'")
    if update.quiet_hours is not None:
        validate_quiet_hours(update.quiet_hours)


def _upsert(
    repository: NotificationPreferenceRepository,
    user_id: str,
    organization_id: str,
    update: PreferenceUpdate,
) -> NotificationPreference:
    # Unset fields keep their stored value.
    existing = repository.get_by_key(user_id, update.type, update.channel)
    preference = NotificationPreference(
        id=existing.id if existing else None,
        user_id=user_id,
        organization_id=existing.organization_id if existing else organization_id,
        type=update.type,
        channel=update.channel,
        enabled=update.enabled,
        frequency=update.frequency
        or (existing.frequency if existing else FREQUENCY_IMMEDIATE),
        quiet_hours=update.quiet_hours
        if update.quiet_hours is not None
        else (existing.quiet_hours if existing else None),
    )
    return repository.upsert(preference)


def update_preference(
    session: Session,
    *,
    user_id: str,
    organization_id: str,
    update: PreferenceUpdate,
    publisher: EventPublisher | None = realtime_event_publisher,
) -> NotificationPreference:
    """Create or replace the preference keyed on ``(user_id, type, channel)``."""

    _validate_update(update)
    repository = NotificationPreferenceRepository(session)
    try:
        saved = _upsert(repository, user_id, organization_id, update)
    except IntegrityError:
        # A concurrent insert won; retry against the stored row.
        session.rollback()
        saved = _upsert(repository, user_id, organization_id, update)

    logger.info(
        "Preference %s/%s for user %s set to enabled=%s",
        update.type,
        update.channel,
        user_id,
        update.enabled,
    )
    publish_event(
        publisher,
        PREFERENCE_UPDATED,
        {
            "user_id": user_id,
            "organization_id": organization_id,
            "preference": serialize_preference(saved),
        },
    )
    return saved


def update_bulk_preferences(
    session: Session,
    *,
    user_id: str,
    organization_id: str,
    updates: Sequence[PreferenceUpdate],
    publisher: EventPublisher | None = realtime_event_publisher,
) -> list[NotificationPreference]:
    """Apply ``updates`` one at a time.

    Each item commits on its own, so a failing item leaves the earlier ones
    in place and propagates its error.
    """

    saved = [
        update_preference(
            session,
            user_id=user_id,
            organization_id=organization_id,
            update=update,
            publisher=None,
        )
        for update in updates
    ]
    logger.info("Updated %s preferences for user %s", len(saved), user_id)
    publish_event(
        publisher,
        PREFERENCES_BULK_UPDATED,
        {
            "user_id": user_id,
            "organization_id": organization_id,
            "preferences": [serialize_preference(item) for item in saved],
        },
    )
    return saved


__all__ = ["update_preference", "update_bulk_preferences"]
