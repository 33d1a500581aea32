"""Use case for removing a notification preference."""

import logging

from sqlalchemy.orm import Session

from app.application.events import PREFERENCE_DELETED, publish_event
from app.application.ports import EventPublisher
from app.domain.exceptions import NotFoundError
from app.infrastructure.notifications import realtime_event_publisher
from app.infrastructure.repositories import NotificationPreferenceRepository

logger = logging.getLogger(__name__)


def delete_preference(
    session: Session,
    preference_id: str,
    requesting_user_id: str,
    *,
    publisher: EventPublisher | None = realtime_event_publisher,
) -> None:
    """Delete one of the requester's own preferences.

    Rows owned by other users are reported as missing.
    """

    repository = NotificationPreferenceRepository(session)
    preference = repository.get(preference_id)
    if preference is None or preference.user_id != requesting_user_id:
        raise NotFoundError("Preference not found")

    repository.delete(preference_id)
    logger.info("Deleted preference %s of user %s", preference_id, requesting_user_id)
    publish_event(
        publisher,
        PREFERENCE_DELETED,
        {"user_id": requesting_user_id, "preference_id": preference_id},
    )


__all__ = ["delete_preference"]
