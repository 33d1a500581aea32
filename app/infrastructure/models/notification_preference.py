"""SQLAlchemy model for per-user notification preferences."""

from uuid import uuid4

from sqlalchemy import JSON, Boolean, Column, DateTime, String, UniqueConstraint

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationPreferenceModel(Base):
    """Database representation of a ``(user, type, channel)`` delivery rule."""

    __tablename__ = "notification_preference"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(64), nullable=False, index=True)
    organization_id = Column(String(64), nullable=False)
    type = Column(String(50), nullable=False)
    channel = Column(String(20), nullable=False)
    enabled = Column(Boolean, nullable=False, default=True)
    frequency = Column(String(20), nullable=False, default="immediate")
    quiet_hours = Column(JSON, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    __table_args__ = (
        UniqueConstraint(
            "user_id", "type", "channel", name="uq_notification_preference_user_type_channel"
        ),
    )


__all__ = ["NotificationPreferenceModel"]
