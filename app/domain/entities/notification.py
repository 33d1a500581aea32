"""Domain entity representing a notification addressed to one user."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

NOTIFICATION_TYPE_CYCLE_CREATED = "cycle_created"
NOTIFICATION_TYPE_CYCLE_ACTIVATED = "cycle_activated"
NOTIFICATION_TYPE_CYCLE_REMINDER = "cycle_reminder"
NOTIFICATION_TYPE_CYCLE_DEADLINE = "cycle_deadline"
NOTIFICATION_TYPE_FEEDBACK_REQUESTED = "feedback_requested"
NOTIFICATION_TYPE_FEEDBACK_RECEIVED = "feedback_received"
NOTIFICATION_TYPE_FEEDBACK_ACKNOWLEDGED = "feedback_acknowledged"
NOTIFICATION_TYPE_FEEDBACK_OVERDUE = "feedback_overdue"
NOTIFICATION_TYPE_GOAL_CREATED = "goal_created"
NOTIFICATION_TYPE_GOAL_UPDATED = "goal_updated"
NOTIFICATION_TYPE_SYSTEM_ALERT = "system_alert"
NOTIFICATION_TYPE_USER_WELCOME = "user_welcome"

NOTIFICATION_TYPES = (
    NOTIFICATION_TYPE_CYCLE_CREATED,
    NOTIFICATION_TYPE_CYCLE_ACTIVATED,
    NOTIFICATION_TYPE_CYCLE_REMINDER,
    NOTIFICATION_TYPE_CYCLE_DEADLINE,
    NOTIFICATION_TYPE_FEEDBACK_REQUESTED,
    NOTIFICATION_TYPE_FEEDBACK_RECEIVED,
    NOTIFICATION_TYPE_FEEDBACK_ACKNOWLEDGED,
    NOTIFICATION_TYPE_FEEDBACK_OVERDUE,
    NOTIFICATION_TYPE_GOAL_CREATED,
    NOTIFICATION_TYPE_GOAL_UPDATED,
    NOTIFICATION_TYPE_SYSTEM_ALERT,
    NOTIFICATION_TYPE_USER_WELCOME,
)

CHANNEL_EMAIL = "email"
CHANNEL_IN_APP = "in_app"
CHANNEL_SMS = "sms"
CHANNEL_PUSH = "push"

NOTIFICATION_CHANNELS = (CHANNEL_EMAIL, CHANNEL_IN_APP, CHANNEL_SMS, CHANNEL_PUSH)

STATUS_PENDING = "pending"
STATUS_SCHEDULED = "scheduled"
STATUS_SENT = "sent"
STATUS_DELIVERED = "delivered"
STATUS_FAILED = "failed"
STATUS_CANCELLED = "cancelled"

NOTIFICATION_STATUSES = (
    STATUS_PENDING,
    STATUS_SCHEDULED,
    STATUS_SENT,
    STATUS_DELIVERED,
    STATUS_FAILED,
    STATUS_CANCELLED,
)

# Forward-only; statuses missing from the keys are terminal.
STATUS_TRANSITIONS: dict[str, frozenset[str]] = {
    STATUS_PENDING: frozenset({STATUS_SENT, STATUS_FAILED, STATUS_CANCELLED}),
    STATUS_SCHEDULED: frozenset({STATUS_SENT, STATUS_FAILED, STATUS_CANCELLED}),
    STATUS_SENT: frozenset({STATUS_DELIVERED}),
}

PRIORITY_LOW = "low"
PRIORITY_NORMAL = "normal"
PRIORITY_HIGH = "high"
PRIORITY_URGENT = "urgent"

NOTIFICATION_PRIORITIES = (PRIORITY_LOW, PRIORITY_NORMAL, PRIORITY_HIGH, PRIORITY_URGENT)


def can_transition(current: str, target: str) -> bool:
    """Return ``True`` when ``current`` may move forward to ``target``."""

    return target in STATUS_TRANSITIONS.get(current, frozenset())


@dataclass
class Notification:
    """One message instance addressed to one user on one channel."""

    id: str | None
    user_id: str
    organization_id: str
    type: str
    channel: str
    title: str
    content: str
    status: str
    priority: str = PRIORITY_NORMAL
    subject: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    scheduled_for: datetime | None = None
    sent_at: datetime | None = None
    read_at: datetime | None = None
    template_id: str | None = None
    related_entity_type: str | None = None
    related_entity_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_read(self) -> bool:
        return self.read_at is not None


@dataclass
class NotificationRequest:
    """Input accepted when creating a notification.

    ``title`` and ``content`` are used verbatim unless ``template_id`` resolves
    to a template of the same organization.
    """

    user_id: str
    type: str
    channel: str
    title: str = ""
    content: str = ""
    subject: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    priority: str = PRIORITY_NORMAL
    scheduled_for: datetime | None = None
    template_id: str | None = None
    related_entity_type: str | None = None
    related_entity_id: str | None = None


@dataclass
class NotificationFilters:
    """Criteria accepted when listing notifications."""

    user_id: str | None = None
    type: str | None = None
    channel: str | None = None
    status: str | None = None
    priority: str | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None
    unread_only: bool = False


@dataclass
class NotificationPage:
    """A 1-indexed page of notifications plus the requester's unread count."""

    notifications: list[Notification]
    total: int
    page: int
    limit: int
    has_next: bool
    has_prev: bool
    unread_count: int


@dataclass
class NotificationStats:
    """Aggregated counters for a user or an organization."""

    total_notifications: int = 0
    unread_count: int = 0
    sent_today: int = 0
    failed_today: int = 0
    by_type: dict[str, int] = field(default_factory=dict)
    by_channel: dict[str, int] = field(default_factory=dict)


__all__ = [
    "Notification",
    "NotificationFilters",
    "NotificationPage",
    "NotificationRequest",
    "NotificationStats",
    "can_transition",
    "STATUS_TRANSITIONS",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_CHANNELS",
    "NOTIFICATION_STATUSES",
    "NOTIFICATION_PRIORITIES",
    "NOTIFICATION_TYPE_CYCLE_CREATED",
    "NOTIFICATION_TYPE_CYCLE_ACTIVATED",
    "NOTIFICATION_TYPE_CYCLE_REMINDER",
    "NOTIFICATION_TYPE_CYCLE_DEADLINE",
    "NOTIFICATION_TYPE_FEEDBACK_REQUESTED",
    "NOTIFICATION_TYPE_FEEDBACK_RECEIVED",
    "NOTIFICATION_TYPE_FEEDBACK_ACKNOWLEDGED",
    "NOTIFICATION_TYPE_FEEDBACK_OVERDUE",
    "NOTIFICATION_TYPE_GOAL_CREATED",
    "NOTIFICATION_TYPE_GOAL_UPDATED",
    "NOTIFICATION_TYPE_SYSTEM_ALERT",
    "NOTIFICATION_TYPE_USER_WELCOME",
    "CHANNEL_EMAIL",
    "CHANNEL_IN_APP",
    "CHANNEL_SMS",
    "CHANNEL_PUSH",
    "STATUS_PENDING",
    "STATUS_SCHEDULED",
    "STATUS_SENT",
    "STATUS_DELIVERED",
    "STATUS_FAILED",
    "STATUS_CANCELLED",
    "PRIORITY_LOW",
    "PRIORITY_NORMAL",
    "PRIORITY_HIGH",
    "PRIORITY_URGENT",
]
