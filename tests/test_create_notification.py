"""Tests for gating, rendering and sending new notifications."""

from datetime import datetime, timedelta, timezone

import pytest

from app.application.use_cases.notification_preferences import update_preference
from app.application.use_cases.notification_templates import create_notification_template
from app.application.use_cases.notifications import create_notification
from app.domain.entities import (
    CHANNEL_EMAIL,
    CHANNEL_IN_APP,
    CHANNEL_SMS,
    NOTIFICATION_TYPE_CYCLE_CREATED,
    NOTIFICATION_TYPE_CYCLE_REMINDER,
    NOTIFICATION_TYPE_FEEDBACK_REQUESTED,
    STATUS_FAILED,
    STATUS_SCHEDULED,
    STATUS_SENT,
    NotificationRequest,
    PreferenceUpdate,
    QuietHours,
)
from app.domain.exceptions import NotificationSuppressedError, TransportError, ValidationError
from app.infrastructure.models import NotificationModel
from app.infrastructure.repositories import NotificationRepository


def _request(**overrides):
    fields = {
        "user_id": "u1",
        "type": NOTIFICATION_TYPE_CYCLE_CREATED,
        "channel": CHANNEL_IN_APP,
        "title": "Hello",
        "content": "World",
    }
    fields.update(overrides)
    return NotificationRequest(**fields)


def test_template_is_rendered_and_sent(session, notify, sink, publisher, now):
    template = create_notification_template(
        session,
        organization_id="org-1",
        name="Cycle created",
        type=NOTIFICATION_TYPE_CYCLE_CREATED,
        channel=CHANNEL_IN_APP,
        title="Cycle {{name}}",
        content="{{name}} starts {{start}}",
        variables=["name", "start"],
        created_by="admin-1",
    )

    notification = notify(
        title="",
        content="",
        template_id=template.id,
        data={"name": "Q1", "start": "2025-01-01"},
    )

    assert notification.title == "Cycle Q1"
    assert notification.content == "Q1 starts 2025-01-01"
    assert notification.template_id == template.id
    assert notification.status == STATUS_SENT
    assert notification.sent_at == now
    assert [item.id for item in sink.sent] == [notification.id]
    assert publisher.names == ["notification:created", "notification:sent"]


def test_template_from_another_organization_falls_back_to_literal_content(
    session, notify
):
    template = create_notification_template(
        session,
        organization_id="org-2",
        name="Other",
        type=NOTIFICATION_TYPE_CYCLE_CREATED,
        channel=CHANNEL_IN_APP,
        title="Other {{name}}",
        content="Other content",
        variables=["name"],
        created_by="admin-2",
    )

    notification = notify(title="Literal", content="Body", template_id=template.id)

    assert notification.title == "Literal"
    assert notification.template_id is None


def test_missing_content_without_template_is_rejected(session, notify):
    with pytest.raises(ValidationError):
        notify(title="", content="")

    assert session.query(NotificationModel).count() == 0


@pytest.mark.parametrize(
    "fields",
    [
        {"type": "unknown"},
        {"channel": "fax"},
        {"priority": "critical"},
        {"user_id": " "},
    ],
)
def test_invalid_request_is_rejected(notify, fields):
    fields = dict(fields)
    user_id = fields.pop("user_id", "u1")

    with pytest.raises(ValidationError):
        notify(user_id, **fields)


def test_disabled_channel_suppresses_without_persisting(session, notify, sink, publisher):
    update_preference(
        session,
        user_id="u1",
        organization_id="org-1",
        update=PreferenceUpdate(
            type=NOTIFICATION_TYPE_FEEDBACK_REQUESTED, channel=CHANNEL_SMS, enabled=False
        ),
        publisher=None,
    )

    with pytest.raises(NotificationSuppressedError) as excinfo:
        notify(type=NOTIFICATION_TYPE_FEEDBACK_REQUESTED, channel=CHANNEL_SMS)

    assert excinfo.value.code == "NOTIFICATION_SUPPRESSED"
    assert excinfo.value.reason == "disabled"
    assert session.query(NotificationModel).count() == 0
    assert sink.sent == []
    assert publisher.events == []


def test_future_schedule_defers_delivery(notify, sink, publisher, now):
    notification = notify(scheduled_for=now + timedelta(hours=1))

    assert notification.status == STATUS_SCHEDULED
    assert notification.scheduled_for == now + timedelta(hours=1)
    assert notification.sent_at is None
    assert sink.sent == []
    assert publisher.names == ["notification:created"]


def test_past_schedule_sends_immediately(notify, now):
    notification = notify(scheduled_for=now - timedelta(minutes=5))

    assert notification.status == STATUS_SENT


def test_quiet_hours_defer_delivery(session, notify, sink):
    update_preference(
        session,
        user_id="u1",
        organization_id="org-1",
        update=PreferenceUpdate(
            type=NOTIFICATION_TYPE_CYCLE_CREATED,
            channel=CHANNEL_IN_APP,
            enabled=True,
            quiet_hours=QuietHours(enabled=True, start_time="22:00", end_time="07:00"),
        ),
        publisher=None,
    )
    late_evening = datetime(2025, 1, 6, 23, 0, tzinfo=timezone.utc)

    notification = notify(at=late_evening)

    assert notification.status == STATUS_SCHEDULED
    assert notification.scheduled_for == datetime(2025, 1, 7, 7, 0, tzinfo=timezone.utc)
    assert sink.sent == []


def test_digest_frequency_defers_to_next_slot(notify):
    notification = notify(
        type=NOTIFICATION_TYPE_CYCLE_REMINDER,
        channel=CHANNEL_EMAIL,
        data={"recipient_email": "u1@example.com"},
    )

    assert notification.status == STATUS_SCHEDULED
    assert notification.scheduled_for == datetime(2025, 1, 7, 9, 0, tzinfo=timezone.utc)


def test_transport_failure_is_committed_as_failed(session, notify, sink, publisher):
    sink.failing_users.add("u1")

    with pytest.raises(TransportError):
        notify()

    stored = session.query(NotificationModel).one()
    assert stored.status == STATUS_FAILED
    assert stored.sent_at is None
    assert publisher.names == ["notification:created", "notification:failed"]
    assert "gateway unavailable" in publisher.events[1][1]["error"]


def test_missing_transport_fails_notification(session, publisher, now):
    with pytest.raises(TransportError):
        create_notification(
            session,
            "org-1",
            _request(),
            transports={},
            publisher=publisher,
            now=now,
        )

    notification = NotificationRepository(session).list_for_user("u1")[0]
    assert notification.status == STATUS_FAILED


def test_failing_publisher_does_not_break_creation(session, transports, now):
    class BrokenPublisher:
        def publish(self, name, payload):
            raise RuntimeError("socket closed")

    notification = create_notification(
        session,
        "org-1",
        _request(),
        transports=transports,
        publisher=BrokenPublisher(),
        now=now,
    )

    assert notification.status == STATUS_SENT
