"""Use case deciding whether and when a notification may be delivered."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import FREQUENCY_IMMEDIATE, FREQUENCY_NEVER, DeliveryDecision
from app.utils import ensure_app_timezone, now_in_app_timezone

from .get_user_preferences import get_user_preferences
from .scheduling import next_digest_slot, quiet_hours_end

REASON_DISABLED = "disabled"
REASON_FREQUENCY_NEVER = "frequency_never"
REASON_QUIET_HOURS = "quiet_hours"
REASON_DIGEST = "digest"


def resolve_delivery(
    session: Session,
    user_id: str,
    organization_id: str,
    type: str,
    channel: str,
    now: datetime | None = None,
) -> DeliveryDecision:
    """Apply the user's preference for ``(type, channel)`` at ``now``."""

    current = ensure_app_timezone(now) or now_in_app_timezone()
    preferences = get_user_preferences(session, user_id, organization_id)
    preference = next(
        (item for item in preferences if item.type == type and item.channel == channel),
        None,
    )
    if preference is None:
        return DeliveryDecision(enabled=True, frequency=FREQUENCY_IMMEDIATE)

    if not preference.enabled:
        return DeliveryDecision(
            enabled=False, frequency=preference.frequency, reason=REASON_DISABLED
        )
    if preference.frequency == FREQUENCY_NEVER:
        return DeliveryDecision(
            enabled=False, frequency=preference.frequency, reason=REASON_FREQUENCY_NEVER
        )

    deferrals = []
    quiet_end = quiet_hours_end(preference.quiet_hours, current)
    if quiet_end is not None:
        deferrals.append((quiet_end, REASON_QUIET_HOURS))
    digest_slot = next_digest_slot(
        preference.frequency, current, get_settings().digest_hour
    )
    if digest_slot is not None:
        deferrals.append((digest_slot, REASON_DIGEST))

    if not deferrals:
        return DeliveryDecision(enabled=True, frequency=preference.frequency)

    deliver_at, reason = max(deferrals, key=lambda item: item[0])
    return DeliveryDecision(
        enabled=True,
        frequency=preference.frequency,
        deliver_at=ensure_app_timezone(deliver_at),
        reason=reason,
    )


__all__ = [
    "resolve_delivery",
    "REASON_DISABLED",
    "REASON_FREQUENCY_NEVER",
    "REASON_QUIET_HOURS",
    "REASON_DIGEST",
]
