"""Domain entities exposed by the application."""

from .notification import (
    CHANNEL_EMAIL,
    CHANNEL_IN_APP,
    CHANNEL_PUSH,
    CHANNEL_SMS,
    NOTIFICATION_CHANNELS,
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_STATUSES,
    NOTIFICATION_TYPE_CYCLE_ACTIVATED,
    NOTIFICATION_TYPE_CYCLE_CREATED,
    NOTIFICATION_TYPE_CYCLE_DEADLINE,
    NOTIFICATION_TYPE_CYCLE_REMINDER,
    NOTIFICATION_TYPE_FEEDBACK_ACKNOWLEDGED,
    NOTIFICATION_TYPE_FEEDBACK_OVERDUE,
    NOTIFICATION_TYPE_FEEDBACK_RECEIVED,
    NOTIFICATION_TYPE_FEEDBACK_REQUESTED,
    NOTIFICATION_TYPE_GOAL_CREATED,
    NOTIFICATION_TYPE_GOAL_UPDATED,
    NOTIFICATION_TYPE_SYSTEM_ALERT,
    NOTIFICATION_TYPE_USER_WELCOME,
    NOTIFICATION_TYPES,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_NORMAL,
    PRIORITY_URGENT,
    STATUS_CANCELLED,
    STATUS_DELIVERED,
    STATUS_FAILED,
    STATUS_PENDING,
    STATUS_SCHEDULED,
    STATUS_SENT,
    STATUS_TRANSITIONS,
    Notification,
    NotificationFilters,
    NotificationPage,
    NotificationRequest,
    NotificationStats,
    can_transition,
)
from .notification_preference import (
    FREQUENCY_DAILY,
    FREQUENCY_IMMEDIATE,
    FREQUENCY_NEVER,
    FREQUENCY_WEEKLY,
    NOTIFICATION_FREQUENCIES,
    WEEKDAYS,
    ChannelSettings,
    DeliveryDecision,
    InAppSettings,
    NotificationPreference,
    NotificationSettings,
    PreferenceUpdate,
    QuietHours,
)
from .notification_template import NotificationTemplate

__all__ = [
    "Notification",
    "NotificationFilters",
    "NotificationPage",
    "NotificationRequest",
    "NotificationStats",
    "NotificationTemplate",
    "NotificationPreference",
    "NotificationSettings",
    "ChannelSettings",
    "InAppSettings",
    "DeliveryDecision",
    "PreferenceUpdate",
    "QuietHours",
    "can_transition",
    "STATUS_TRANSITIONS",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_CHANNELS",
    "NOTIFICATION_STATUSES",
    "NOTIFICATION_PRIORITIES",
    "NOTIFICATION_FREQUENCIES",
    "WEEKDAYS",
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
    "FREQUENCY_IMMEDIATE",
    "FREQUENCY_DAILY",
    "FREQUENCY_WEEKLY",
    "FREQUENCY_NEVER",
]
