"""Realtime and transport adapters for the notification engine."""

from .manager import NotificationConnectionManager, notification_manager
from .publisher import (
    RealtimeEventPublisher,
    realtime_event_publisher,
    serialize_notification,
    serialize_preference,
)
from .roles import ConfiguredRoleOracle, default_role_oracle
from .transports import (
    EmailTransport,
    InAppTransport,
    LoggingTransport,
    TransportRegistry,
    build_default_transports,
    default_transports,
)

__all__ = [
    "NotificationConnectionManager",
    "notification_manager",
    "RealtimeEventPublisher",
    "realtime_event_publisher",
    "serialize_notification",
    "serialize_preference",
    "ConfiguredRoleOracle",
    "default_role_oracle",
    "EmailTransport",
    "InAppTransport",
    "LoggingTransport",
    "TransportRegistry",
    "build_default_transports",
    "default_transports",
]
