"""Utility helpers to push lifecycle events to websocket subscribers."""

from __future__ import annotations

import copy
from dataclasses import asdict
from datetime import datetime
from typing import Any, Mapping

from app.domain.entities import Notification, NotificationPreference

from .manager import NotificationConnectionManager, notification_manager


class RealtimeEventPublisher:
    """Forward named events to the websocket connections of their user.

    The recipient is read from the ``user_id`` key of the payload; events
    without one are not routable and are dropped.
    """

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    def publish(self, name: str, payload: Mapping[str, Any]) -> None:
        user_id = payload.get("user_id")
        if not user_id:
            return
        message = {"type": name, "data": copy.deepcopy(dict(payload))}
        self._manager.dispatch(str(user_id), message)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return a JSON-serializable representation of ``notification``."""

    payload = asdict(notification)
    payload["is_read"] = notification.is_read
    _normalize_datetime_values(payload)
    return payload


def serialize_preference(preference: NotificationPreference) -> dict[str, Any]:
    """Return a JSON-serializable representation of ``preference``."""

    payload = asdict(preference)
    _normalize_datetime_values(payload)
    return payload


def _normalize_datetime_values(data: dict[str, Any] | list[Any]) -> None:
    """Convert ``datetime`` instances nested inside ``data`` into ISO strings."""

    items = data.items() if isinstance(data, dict) else enumerate(data)
    for key, value in list(items):
        if isinstance(value, datetime):
            data[key] = value.isoformat()
        elif isinstance(value, (dict, list)):
            _normalize_datetime_values(value)


realtime_event_publisher = RealtimeEventPublisher(notification_manager)


__all__ = [
    "RealtimeEventPublisher",
    "realtime_event_publisher",
    "serialize_notification",
    "serialize_preference",
]
