"""Domain entities describing per-user delivery preferences."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

FREQUENCY_IMMEDIATE = "immediate"
FREQUENCY_DAILY = "daily"
FREQUENCY_WEEKLY = "weekly"
FREQUENCY_NEVER = "never"

NOTIFICATION_FREQUENCIES = (
    FREQUENCY_IMMEDIATE,
    FREQUENCY_DAILY,
    FREQUENCY_WEEKLY,
    FREQUENCY_NEVER,
)

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


@dataclass
class QuietHours:
    """Time-of-day window during which immediate delivery is deferred."""

    enabled: bool
    start_time: str
    end_time: str
    timezone: str = "UTC"
    days: list[str] = field(default_factory=lambda: list(WEEKDAYS))

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "timezone": self.timezone,
            "days": list(self.days),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any] | None) -> "QuietHours | None":
        if not payload:
            return None
        return cls(
            enabled=bool(payload.get("enabled", False)),
            start_time=str(payload.get("start_time", "00:00")),
            end_time=str(payload.get("end_time", "00:00")),
            timezone=str(payload.get("timezone") or "UTC"),
            days=[str(day).lower() for day in payload.get("days") or WEEKDAYS],
        )


@dataclass
class NotificationPreference:
    """Delivery rule for one ``(user, type, channel)`` tuple."""

    id: str | None
    user_id: str
    organization_id: str
    type: str
    channel: str
    enabled: bool
    frequency: str = FREQUENCY_IMMEDIATE
    quiet_hours: QuietHours | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class PreferenceUpdate:
    """Upsert payload keyed on ``(type, channel)`` for the owning user."""

    type: str
    channel: str
    enabled: bool
    frequency: str | None = None
    quiet_hours: QuietHours | None = None


@dataclass
class ChannelSettings:
    """Channel-level view aggregated from type-specific preferences."""

    enabled: bool
    frequency: str
    quiet_hours: QuietHours | None = None


@dataclass
class InAppSettings:
    enabled: bool
    show_banner: bool = True
    show_badge: bool = True


@dataclass
class NotificationSettings:
    """Summary of a user's preferences grouped by channel."""

    email: ChannelSettings
    in_app: InAppSettings
    sms: ChannelSettings


@dataclass
class DeliveryDecision:
    """Outcome of resolving a preference for a single delivery request."""

    enabled: bool
    frequency: str = FREQUENCY_IMMEDIATE
    deliver_at: datetime | None = None
    reason: str | None = None


__all__ = [
    "ChannelSettings",
    "DeliveryDecision",
    "InAppSettings",
    "NotificationPreference",
    "NotificationSettings",
    "PreferenceUpdate",
    "QuietHours",
    "FREQUENCY_IMMEDIATE",
    "FREQUENCY_DAILY",
    "FREQUENCY_WEEKLY",
    "FREQUENCY_NEVER",
    "NOTIFICATION_FREQUENCIES",
    "WEEKDAYS",
]
