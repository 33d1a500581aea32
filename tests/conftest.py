"""Shared fixtures for the notification engine tests."""

from __future__ import annotations

import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["ADMIN_USER_IDS"] = "admin-1"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from app.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from app.application.use_cases.notifications import create_notification  # noqa: E402
from app.domain.entities import (  # noqa: E402
    CHANNEL_EMAIL,
    CHANNEL_IN_APP,
    CHANNEL_PUSH,
    CHANNEL_SMS,
    NOTIFICATION_TYPE_CYCLE_CREATED,
    NotificationRequest,
)
from app.infrastructure import database  # noqa: E402
from app.infrastructure.notifications import (  # noqa: E402
    ConfiguredRoleOracle,
    TransportRegistry,
)

ORGANIZATION_ID = "org-1"


class RecordingPublisher:
    """Keep every published event in memory."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict]] = []

    def publish(self, name, payload) -> None:
        self.events.append((name, dict(payload)))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]


class RecordingSink:
    """Channel sink that records deliveries and fails for selected users."""

    def __init__(self, failing_users=()) -> None:
        self.sent = []
        self.failing_users = set(failing_users)

    def send(self, notification) -> None:
        if notification.user_id in self.failing_users:
            raise RuntimeError("gateway unavailable")
        self.sent.append(notification)


@pytest.fixture()
def session():
    database.Base.metadata.drop_all(bind=database.engine)
    database.initialize_database()
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def now() -> datetime:
    # A Monday at noon.
    return datetime(2025, 1, 6, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def transports(sink) -> TransportRegistry:
    return TransportRegistry(
        {
            CHANNEL_IN_APP: sink,
            CHANNEL_EMAIL: sink,
            CHANNEL_SMS: sink,
            CHANNEL_PUSH: sink,
        }
    )


@pytest.fixture()
def role_oracle() -> ConfiguredRoleOracle:
    return ConfiguredRoleOracle(["admin-1"])


@pytest.fixture()
def notify(session, transports, publisher, now):
    """Create a notification through the real use case."""

    def _notify(
        user_id: str = "u1",
        *,
        type: str = NOTIFICATION_TYPE_CYCLE_CREATED,
        channel: str = CHANNEL_IN_APP,
        organization_id: str = ORGANIZATION_ID,
        at: datetime | None = None,
        **fields,
    ):
        fields.setdefault("title", "Cycle Q1")
        fields.setdefault("content", "The Q1 cycle is open")
        request = NotificationRequest(user_id=user_id, type=type, channel=channel, **fields)
        return create_notification(
            session,
            organization_id,
            request,
            transports=transports,
            publisher=publisher,
            now=at or now,
        )

    return _notify
