"""Use case summarizing preferences into channel-level settings."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import (
    CHANNEL_EMAIL,
    CHANNEL_IN_APP,
    CHANNEL_SMS,
    FREQUENCY_DAILY,
    FREQUENCY_IMMEDIATE,
    FREQUENCY_NEVER,
    FREQUENCY_WEEKLY,
    ChannelSettings,
    InAppSettings,
    NotificationPreference,
    NotificationSettings,
    QuietHours,
)

from .get_user_preferences import get_user_preferences

# Most restrictive first.
FREQUENCY_PRECEDENCE = (FREQUENCY_NEVER, FREQUENCY_WEEKLY, FREQUENCY_DAILY, FREQUENCY_IMMEDIATE)


def most_restrictive_frequency(preferences: Sequence[NotificationPreference]) -> str:
    """Return the most restrictive frequency among ``preferences``.

    A channel without any preference reports ``never``.
    """

    if not preferences:
        return FREQUENCY_NEVER
    frequencies = {preference.frequency for preference in preferences if preference.frequency}
    for frequency in FREQUENCY_PRECEDENCE:
        if frequency in frequencies:
            return frequency
    return FREQUENCY_IMMEDIATE


def _first_quiet_hours(preferences: Sequence[NotificationPreference]) -> QuietHours | None:
    return next(
        (preference.quiet_hours for preference in preferences if preference.quiet_hours),
        None,
    )


def _channel_settings(preferences: Sequence[NotificationPreference]) -> ChannelSettings:
    return ChannelSettings(
        enabled=any(preference.enabled for preference in preferences),
        frequency=most_restrictive_frequency(preferences),
        quiet_hours=_first_quiet_hours(preferences),
    )


def get_user_settings(
    session: Session, user_id: str, organization_id: str
) -> NotificationSettings:
    """Return the email, in-app and SMS view of the user's preferences."""

    preferences = get_user_preferences(session, user_id, organization_id)
    by_channel: dict[str, list[NotificationPreference]] = {}
    for preference in preferences:
        by_channel.setdefault(preference.channel, []).append(preference)

    in_app = by_channel.get(CHANNEL_IN_APP, [])
    return NotificationSettings(
        email=_channel_settings(by_channel.get(CHANNEL_EMAIL, [])),
        in_app=InAppSettings(enabled=any(preference.enabled for preference in in_app)),
        sms=_channel_settings(by_channel.get(CHANNEL_SMS, [])),
    )


__all__ = ["get_user_settings", "most_restrictive_frequency", "FREQUENCY_PRECEDENCE"]
