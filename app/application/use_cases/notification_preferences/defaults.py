"""Preferences materialized the first time a user is resolved."""

from __future__ import annotations

from typing import NamedTuple

from app.domain.entities import (
    CHANNEL_EMAIL,
    CHANNEL_IN_APP,
    CHANNEL_SMS,
    FREQUENCY_DAILY,
    FREQUENCY_IMMEDIATE,
    NOTIFICATION_TYPE_CYCLE_ACTIVATED,
    NOTIFICATION_TYPE_CYCLE_CREATED,
    NOTIFICATION_TYPE_CYCLE_DEADLINE,
    NOTIFICATION_TYPE_CYCLE_REMINDER,
    NOTIFICATION_TYPE_FEEDBACK_OVERDUE,
    NOTIFICATION_TYPE_FEEDBACK_RECEIVED,
    NOTIFICATION_TYPE_FEEDBACK_REQUESTED,
    NotificationPreference,
)


class DefaultPreference(NamedTuple):
    type: str
    channel: str
    enabled: bool
    frequency: str


DEFAULT_PREFERENCES: tuple[DefaultPreference, ...] = (
    DefaultPreference(NOTIFICATION_TYPE_CYCLE_CREATED, CHANNEL_EMAIL, True, FREQUENCY_IMMEDIATE),
    DefaultPreference(NOTIFICATION_TYPE_CYCLE_ACTIVATED, CHANNEL_EMAIL, True, FREQUENCY_IMMEDIATE),
    DefaultPreference(NOTIFICATION_TYPE_CYCLE_REMINDER, CHANNEL_EMAIL, True, FREQUENCY_DAILY),
    DefaultPreference(NOTIFICATION_TYPE_FEEDBACK_REQUESTED, CHANNEL_EMAIL, True, FREQUENCY_IMMEDIATE),
    DefaultPreference(NOTIFICATION_TYPE_FEEDBACK_RECEIVED, CHANNEL_EMAIL, True, FREQUENCY_IMMEDIATE),
    DefaultPreference(NOTIFICATION_TYPE_CYCLE_CREATED, CHANNEL_IN_APP, True, FREQUENCY_IMMEDIATE),
    DefaultPreference(NOTIFICATION_TYPE_CYCLE_ACTIVATED, CHANNEL_IN_APP, True, FREQUENCY_IMMEDIATE),
    DefaultPreference(NOTIFICATION_TYPE_FEEDBACK_REQUESTED, CHANNEL_IN_APP, True, FREQUENCY_IMMEDIATE),
    DefaultPreference(NOTIFICATION_TYPE_FEEDBACK_RECEIVED, CHANNEL_IN_APP, True, FREQUENCY_IMMEDIATE),
    # SMS is opt-in.
    DefaultPreference(NOTIFICATION_TYPE_CYCLE_DEADLINE, CHANNEL_SMS, False, FREQUENCY_IMMEDIATE),
    DefaultPreference(NOTIFICATION_TYPE_FEEDBACK_OVERDUE, CHANNEL_SMS, False, FREQUENCY_IMMEDIATE),
)


def build_default_preferences(
    user_id: str, organization_id: str
) -> list[NotificationPreference]:
    return [
        NotificationPreference(
            id=None,
            user_id=user_id,
            organization_id=organization_id,
            type=default.type,
            channel=default.channel,
            enabled=default.enabled,
            frequency=default.frequency,
        )
        for default in DEFAULT_PREFERENCES
    ]


__all__ = ["DEFAULT_PREFERENCES", "DefaultPreference", "build_default_preferences"]
