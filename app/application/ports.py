"""Collaborator interfaces the notification use cases depend on."""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from app.domain.entities import Notification


class EventPublisher(Protocol):
    """Broadcast lifecycle events to observers such as websocket clients."""

    def publish(self, name: str, payload: Mapping[str, Any]) -> None: ...


class TransportSink(Protocol):
    """Deliver a notification over one channel.

    Implementations raise an exception when the message could not be handed
    over to the underlying transport.
    """

    def send(self, notification: Notification) -> None: ...


class TransportLookup(Protocol):
    def get(self, channel: str) -> TransportSink | None: ...


class RoleOracle(Protocol):
    """Answer whether a user may act across an organization."""

    def is_admin(self, user_id: str, organization_id: str) -> bool: ...


__all__ = ["EventPublisher", "TransportSink", "TransportLookup", "RoleOracle"]
