"""Pydantic schemas exposed by the HTTP API."""

from .notification import (
    DomainEventRequest,
    DomainEventResponse,
    MarkAllReadResponse,
    NotificationCreate,
    NotificationPageRead,
    NotificationRead,
    NotificationStatsRead,
    SweepResultRead,
)
from .notification_preference import (
    BulkPreferenceUpdateRequest,
    NotificationSettingsRead,
    PreferenceRead,
    PreferenceUpdateRequest,
    QuietHoursSchema,
)
from .notification_template import (
    NotificationTemplateCreate,
    NotificationTemplateRead,
    NotificationTemplateUpdate,
)

__all__ = [
    "BulkPreferenceUpdateRequest",
    "DomainEventRequest",
    "DomainEventResponse",
    "MarkAllReadResponse",
    "NotificationCreate",
    "NotificationPageRead",
    "NotificationRead",
    "NotificationSettingsRead",
    "NotificationStatsRead",
    "NotificationTemplateCreate",
    "NotificationTemplateRead",
    "NotificationTemplateUpdate",
    "PreferenceRead",
    "PreferenceUpdateRequest",
    "QuietHoursSchema",
    "SweepResultRead",
]
