"""Repository implementations for infrastructure layer."""

from .notification_preference_repository import NotificationPreferenceRepository
from .notification_repository import NotificationRepository
from .notification_template_repository import NotificationTemplateRepository

__all__ = [
    "NotificationRepository",
    "NotificationTemplateRepository",
    "NotificationPreferenceRepository",
]
