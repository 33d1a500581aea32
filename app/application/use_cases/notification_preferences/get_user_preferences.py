"""Use cases for reading a user's notification preferences."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.entities import FREQUENCY_NEVER, NotificationPreference
from app.infrastructure.repositories import NotificationPreferenceRepository

from .defaults import build_default_preferences

logger = logging.getLogger(__name__)


def get_user_preferences(
    session: Session, user_id: str, organization_id: str
) -> list[NotificationPreference]:
    """Return every preference of ``user_id``, seeding defaults on first access.

    The defaults are inserted in one transaction. When a concurrent request
    seeded them first the unique ``(user_id, type, channel)`` constraint
    rejects the insert and the winner's rows are returned instead.
    """

    repository = NotificationPreferenceRepository(session)
    preferences = list(repository.list_for_user(user_id))
    if preferences:
        return preferences

    try:
        created = repository.create_many(build_default_preferences(user_id, organization_id))
    except IntegrityError:
        session.rollback()
        logger.info("Default preferences for user %s were seeded concurrently", user_id)
        return list(repository.list_for_user(user_id))

    logger.info("Created %s default preferences for user %s", len(created), user_id)
    return list(repository.list_for_user(user_id))


def is_notification_enabled(
    session: Session, user_id: str, type: str, channel: str
) -> bool:
    """Return whether ``user_id`` accepts ``type`` notifications on ``channel``.

    A missing preference row counts as enabled.
    """

    preference = NotificationPreferenceRepository(session).get_by_key(user_id, type, channel)
    if preference is None:
        return True
    return preference.enabled and preference.frequency != FREQUENCY_NEVER


__all__ = ["get_user_preferences", "is_notification_enabled"]
