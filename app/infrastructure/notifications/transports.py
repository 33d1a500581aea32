"""Channel sinks used to hand notifications to their transport."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from app.application.ports import TransportSink
from app.domain.entities import (
    CHANNEL_EMAIL,
    CHANNEL_IN_APP,
    CHANNEL_PUSH,
    CHANNEL_SMS,
    Notification,
)
from app.domain.exceptions import TransportError
from app.infrastructure import email

from .manager import NotificationConnectionManager, notification_manager
from .publisher import serialize_notification

logger = logging.getLogger(__name__)


class InAppTransport:
    """Push the notification to the recipient's open websocket connections.

    Users that are offline read the notification later through the listing
    endpoints, so an absent connection is not a failure.
    """

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    def send(self, notification: Notification) -> None:
        message = {"type": "notification", "data": serialize_notification(notification)}
        self._manager.dispatch(notification.user_id, message)


class EmailTransport:
    """Deliver notifications through SendGrid.

    The recipient address travels in ``notification.data["recipient_email"]``
    because user profiles live outside this service.
    """

    def send(self, notification: Notification) -> None:
        if not email.is_email_configured():
            logger.info(
                "SendGrid is not configured; skipping email for notification %s",
                notification.id,
            )
            return

        recipient = (notification.data or {}).get("recipient_email")
        if not recipient:
            raise TransportError(
                f"Notification {notification.id} has no recipient email address",
                channel=CHANNEL_EMAIL,
            )

        subject, html_content = email.build_notification_email(
            notification.subject, notification.title, notification.content
        )
        if not email.send_email(subject, html_content, str(recipient)):
            raise TransportError(
                f"SendGrid rejected notification {notification.id}", channel=CHANNEL_EMAIL
            )


class LoggingTransport:
    """Stand-in sink for channels without a gateway integration."""

    def __init__(self, channel: str) -> None:
        self.channel = channel

    def send(self, notification: Notification) -> None:
        logger.info(
            "No %s gateway configured; notification %s for user %s logged only",
            self.channel,
            notification.id,
            notification.user_id,
        )


class TransportRegistry:
    """Map channel names to the sink that delivers them."""

    def __init__(self, sinks: Mapping[str, TransportSink] | None = None) -> None:
        self._sinks: dict[str, TransportSink] = dict(sinks or {})

    def register(self, channel: str, sink: TransportSink) -> None:
        self._sinks[channel] = sink

    def get(self, channel: str) -> TransportSink | None:
        return self._sinks.get(channel)

    def __contains__(self, channel: object) -> bool:
        return channel in self._sinks


def build_default_transports(
    manager: NotificationConnectionManager | None = None,
) -> TransportRegistry:
    """Return the registry wired with the built-in channel sinks."""

    return TransportRegistry(
        {
            CHANNEL_IN_APP: InAppTransport(manager or notification_manager),
            CHANNEL_EMAIL: EmailTransport(),
            CHANNEL_SMS: LoggingTransport(CHANNEL_SMS),
            CHANNEL_PUSH: LoggingTransport(CHANNEL_PUSH),
        }
    )


default_transports = build_default_transports()


__all__ = [
    "EmailTransport",
    "InAppTransport",
    "LoggingTransport",
    "TransportRegistry",
    "build_default_transports",
    "default_transports",
]
