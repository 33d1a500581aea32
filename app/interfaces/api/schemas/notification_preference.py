"""Schemas for preference and settings endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

FrequencyName = Literal["immediate", "daily", "weekly", "never"]


class QuietHoursSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    enabled: bool = True
    start_time: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    end_time: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    timezone: str = "UTC"
    days: list[str] = Field(
        default_factory=lambda: [
            "monday",
            "tuesday",
            "wednesday",
            "thursday",
            "friday",
            "saturday",
            "sunday",
        ]
    )


class PreferenceUpdateRequest(BaseModel):
    type: str
    channel: str
    enabled: bool
    frequency: FrequencyName | None = None
    quiet_hours: QuietHoursSchema | None = None


class BulkPreferenceUpdateRequest(BaseModel):
    preferences: list[PreferenceUpdateRequest] = Field(..., min_length=1)


class PreferenceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    organization_id: str
    type: str
    channel: str
    enabled: bool
    frequency: str
    quiet_hours: QuietHoursSchema | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ChannelSettingsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    enabled: bool
    frequency: str
    quiet_hours: QuietHoursSchema | None = None


class InAppSettingsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    enabled: bool
    show_banner: bool
    show_badge: bool


class NotificationSettingsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    email: ChannelSettingsRead
    in_app: InAppSettingsRead
    sms: ChannelSettingsRead


__all__ = [
    "BulkPreferenceUpdateRequest",
    "ChannelSettingsRead",
    "InAppSettingsRead",
    "NotificationSettingsRead",
    "PreferenceRead",
    "PreferenceUpdateRequest",
    "QuietHoursSchema",
]
