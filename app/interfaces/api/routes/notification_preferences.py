"""Routes for reading and changing notification preferences."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.application.ports import EventPublisher
from app.application.use_cases.notification_preferences import (
    delete_preference as delete_preference_uc,
    get_user_preferences as get_user_preferences_uc,
    get_user_settings as get_user_settings_uc,
    update_bulk_preferences as update_bulk_preferences_uc,
    update_preference as update_preference_uc,
)
from app.domain.entities import NotificationPreference, PreferenceUpdate, QuietHours
from app.domain.exceptions import NotificationError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import Actor, get_current_actor, get_event_publisher
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import (
    BulkPreferenceUpdateRequest,
    NotificationSettingsRead,
    PreferenceRead,
    PreferenceUpdateRequest,
)

router = APIRouter(prefix="/notifications", tags=["notification preferences"])


def _preference_to_read_model(preference: NotificationPreference) -> PreferenceRead:
    return PreferenceRead.model_validate(asdict(preference))


def _to_update(payload: PreferenceUpdateRequest) -> PreferenceUpdate:
    quiet_hours = (
        QuietHours(**payload.quiet_hours.model_dump()) if payload.quiet_hours else None
    )
    return PreferenceUpdate(
        type=payload.type,
        channel=payload.channel,
        enabled=payload.enabled,
        frequency=payload.frequency,
        quiet_hours=quiet_hours,
    )


@router.get("/preferences", response_model=list[PreferenceRead])
def list_preferences(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> list[PreferenceRead]:
    """Return the caller's preferences, creating the defaults on first use."""

    preferences = get_user_preferences_uc(db, actor.user_id, actor.organization_id)
    return [_preference_to_read_model(preference) for preference in preferences]


@router.put("/preferences", response_model=PreferenceRead)
def update_preference(
    payload: PreferenceUpdateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> PreferenceRead:
    try:
        preference = update_preference_uc(
            db,
            user_id=actor.user_id,
            organization_id=actor.organization_id,
            update=_to_update(payload),
            publisher=publisher,
        )
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return _preference_to_read_model(preference)


@router.put("/preferences/bulk", response_model=list[PreferenceRead])
def update_bulk_preferences(
    payload: BulkPreferenceUpdateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> list[PreferenceRead]:
    try:
        preferences = update_bulk_preferences_uc(
            db,
            user_id=actor.user_id,
            organization_id=actor.organization_id,
            updates=[_to_update(item) for item in payload.preferences],
            publisher=publisher,
        )
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return [_preference_to_read_model(preference) for preference in preferences]


@router.delete("/preferences/{preference_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_preference(
    preference_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> Response:
    try:
        delete_preference_uc(db, preference_id, actor.user_id, publisher=publisher)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/settings", response_model=NotificationSettingsRead)
def read_settings(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> NotificationSettingsRead:
    """Return the channel-level summary of the caller's preferences."""

    settings = get_user_settings_uc(db, actor.user_id, actor.organization_id)
    return NotificationSettingsRead.model_validate(asdict(settings))


__all__ = ["router"]
