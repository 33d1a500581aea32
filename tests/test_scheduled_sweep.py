"""Tests for the scheduled notification sweep."""

import logging
from datetime import timedelta

from app.application.use_cases.notifications import (
    cancel_notification,
    process_scheduled_notifications,
)
from app.domain.entities import STATUS_CANCELLED, STATUS_FAILED, STATUS_SCHEDULED, STATUS_SENT
from app.infrastructure.repositories import NotificationRepository


def test_sweep_sends_due_notifications_and_isolates_failures(
    session, notify, sink, transports, publisher, now, caplog
):
    due_ok = notify("u1", scheduled_for=now + timedelta(hours=1))
    due_failing = notify("u2", scheduled_for=now + timedelta(hours=1))
    later = notify("u1", scheduled_for=now + timedelta(hours=5))
    sink.failing_users.add("u2")
    caplog.set_level(logging.ERROR)

    sweep_time = now + timedelta(hours=2)
    result = process_scheduled_notifications(
        session, sweep_time, transports=transports, publisher=publisher
    )

    repository = NotificationRepository(session)
    assert (result.processed, result.sent, result.failed) == (2, 1, 1)
    assert repository.get(due_ok.id).status == STATUS_SENT
    assert repository.get(due_ok.id).sent_at == sweep_time
    assert repository.get(due_failing.id).status == STATUS_FAILED
    assert repository.get(later.id).status == STATUS_SCHEDULED
    assert [item.id for item in sink.sent] == [due_ok.id]
    assert "notification:failed" in publisher.names
    assert due_failing.id in caplog.text


def test_sweep_skips_cancelled_notifications(session, notify, transports, role_oracle, now):
    notification = notify(scheduled_for=now + timedelta(hours=1))
    cancel_notification(session, notification.id, "u1", role_oracle=role_oracle, publisher=None)

    result = process_scheduled_notifications(
        session, now + timedelta(hours=2), transports=transports, publisher=None
    )

    assert result.processed == 0
    assert NotificationRepository(session).get(notification.id).status == STATUS_CANCELLED


def test_sweep_honours_batch_limit(session, notify, transports, now):
    first = notify("u1", scheduled_for=now + timedelta(minutes=10))
    second = notify("u2", scheduled_for=now + timedelta(minutes=20))

    result = process_scheduled_notifications(
        session, now + timedelta(hours=1), transports=transports, publisher=None, limit=1
    )

    repository = NotificationRepository(session)
    assert result.processed == 1
    assert repository.get(first.id).status == STATUS_SENT
    assert repository.get(second.id).status == STATUS_SCHEDULED


def test_unexpected_error_leaves_notification_scheduled(session, notify, now):
    notification = notify(scheduled_for=now + timedelta(hours=1))

    class ExplodingLookup:
        def get(self, channel):
            raise RuntimeError("registry unavailable")

    result = process_scheduled_notifications(
        session, now + timedelta(hours=2), transports=ExplodingLookup(), publisher=None
    )

    assert (result.processed, result.sent, result.failed) == (1, 0, 1)
    assert NotificationRepository(session).get(notification.id).status == STATUS_SCHEDULED


def test_sweep_with_nothing_due(session, transports, now):
    result = process_scheduled_notifications(session, now, transports=transports, publisher=None)

    assert (result.processed, result.sent, result.failed) == (0, 0, 0)
