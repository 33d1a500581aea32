"""SQLAlchemy model for persisted notifications."""

from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime, Index, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


def _new_id() -> str:
    return str(uuid4())


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(64), nullable=False, index=True)
    organization_id = Column(String(64), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    channel = Column(String(20), nullable=False)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    subject = Column(String(255), nullable=True)
    data = Column(JSON, nullable=False, default=dict)
    status = Column(String(20), nullable=False, default="pending")
    priority = Column(String(20), nullable=False, default="normal")
    scheduled_for = Column(DateTime(), nullable=True)
    sent_at = Column(DateTime(), nullable=True)
    read_at = Column(DateTime(), nullable=True)
    template_id = Column(String(36), nullable=True)
    related_entity_type = Column(String(50), nullable=True)
    related_entity_id = Column(String(64), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    __table_args__ = (
        Index("ix_notification_status_scheduled_for", "status", "scheduled_for"),
        Index("ix_notification_user_read_at", "user_id", "read_at"),
    )


__all__ = ["NotificationModel"]
