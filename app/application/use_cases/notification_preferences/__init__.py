"""Use cases resolving and managing notification preferences."""

from .defaults import DEFAULT_PREFERENCES, build_default_preferences
from .delete_preference import delete_preference
from .get_user_preferences import get_user_preferences, is_notification_enabled
from .get_user_settings import get_user_settings, most_restrictive_frequency
from .resolve_delivery import resolve_delivery
from .scheduling import next_digest_slot, quiet_hours_end
from .update_preference import update_bulk_preferences, update_preference

__all__ = [
    "DEFAULT_PREFERENCES",
    "build_default_preferences",
    "delete_preference",
    "get_user_preferences",
    "get_user_settings",
    "is_notification_enabled",
    "most_restrictive_frequency",
    "next_digest_slot",
    "quiet_hours_end",
    "resolve_delivery",
    "update_bulk_preferences",
    "update_preference",
]
