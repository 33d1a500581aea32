"""ORM models used by the application infrastructure."""

from .notification import NotificationModel
from .notification_preference import NotificationPreferenceModel
from .notification_template import NotificationTemplateModel

__all__ = [
    "NotificationModel",
    "NotificationPreferenceModel",
    "NotificationTemplateModel",
]
