"""Tests for the websocket event publisher and connection manager."""

from datetime import datetime, timezone

from app.domain.entities import CHANNEL_IN_APP, STATUS_SENT, Notification
from app.infrastructure.notifications import (
    InAppTransport,
    NotificationConnectionManager,
    RealtimeEventPublisher,
    serialize_notification,
)


class RecordingManager:
    def __init__(self):
        self.dispatched = []

    def dispatch(self, user_id, message):
        self.dispatched.append((user_id, message))
        return True


def _notification():
    return Notification(
        id="n1",
        user_id="u1",
        organization_id="org-1",
        type="cycle_created",
        channel=CHANNEL_IN_APP,
        title="Cycle Q1",
        content="Open",
        status=STATUS_SENT,
        sent_at=datetime(2025, 1, 6, 12, 0, tzinfo=timezone.utc),
    )


def test_publisher_routes_events_to_their_user():
    manager = RecordingManager()
    publisher = RealtimeEventPublisher(manager)

    publisher.publish("notification:sent", {"user_id": "u1", "id": "n1"})
    publisher.publish("preference:deleted", {"preference_id": "p1"})

    assert manager.dispatched == [
        ("u1", {"type": "notification:sent", "data": {"user_id": "u1", "id": "n1"}})
    ]


def test_serialized_notification_is_json_friendly():
    payload = serialize_notification(_notification())

    assert payload["sent_at"] == "2025-01-06T12:00:00+00:00"
    assert payload["read_at"] is None
    assert payload["is_read"] is False


def test_in_app_transport_pushes_notification_message():
    manager = RecordingManager()

    InAppTransport(manager).send(_notification())

    user_id, message = manager.dispatched[0]
    assert user_id == "u1"
    assert message["type"] == "notification"
    assert message["data"]["id"] == "n1"


def test_dispatch_without_listeners_is_a_no_op():
    manager = NotificationConnectionManager()

    assert manager.has_connections("u1") is False
    assert manager.dispatch("u1", {"type": "ping"}) is False
