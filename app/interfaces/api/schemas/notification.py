"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ChannelName = Literal["email", "in_app", "sms", "push"]
PriorityName = Literal["low", "normal", "high", "urgent"]


class NotificationCreate(BaseModel):
    """Payload required to create a notification."""

    user_id: str = Field(..., min_length=1)
    type: str
    channel: ChannelName
    title: str = ""
    content: str = ""
    subject: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    priority: PriorityName = "normal"
    scheduled_for: datetime | None = None
    template_id: str | None = None
    related_entity_type: str | None = None
    related_entity_id: str | None = None


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    organization_id: str
    type: str
    channel: str
    title: str
    content: str
    subject: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    status: str
    priority: str
    scheduled_for: datetime | None = None
    sent_at: datetime | None = None
    read_at: datetime | None = None
    is_read: bool = False
    template_id: str | None = None
    related_entity_type: str | None = None
    related_entity_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NotificationPageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    notifications: list[NotificationRead]
    total: int
    page: int
    limit: int
    has_next: bool
    has_prev: bool
    unread_count: int


class NotificationStatsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_notifications: int
    unread_count: int
    sent_today: int
    failed_today: int
    by_type: dict[str, int] = Field(default_factory=dict)
    by_channel: dict[str, int] = Field(default_factory=dict)


class MarkAllReadResponse(BaseModel):
    count: int


class SweepResultRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    processed: int
    sent: int
    failed: int


class DomainEventRequest(BaseModel):
    """Event forwarded by the cycle and feedback services."""

    event_type: str = Field(..., min_length=1)
    payload: dict[str, Any] = Field(default_factory=dict)


class DomainEventResponse(BaseModel):
    created: int
    notification_ids: list[str] = Field(default_factory=list)


__all__ = [
    "DomainEventRequest",
    "DomainEventResponse",
    "MarkAllReadResponse",
    "NotificationCreate",
    "NotificationPageRead",
    "NotificationRead",
    "NotificationStatsRead",
    "SweepResultRead",
]
