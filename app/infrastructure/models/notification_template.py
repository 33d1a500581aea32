"""SQLAlchemy model for notification templates."""

from uuid import uuid4

from sqlalchemy import JSON, Boolean, Column, DateTime, String, Text
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationTemplateModel(Base):
    """Database representation of a reusable notification template."""

    __tablename__ = "notification_template"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(120), nullable=False)
    description = Column(String(255), nullable=True)
    organization_id = Column(String(64), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    channel = Column(String(20), nullable=False)
    subject = Column(String(255), nullable=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    variables = Column(JSON, nullable=False, default=list)
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    is_default = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_by = Column(String(64), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_by = Column(String(64), nullable=True)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["NotificationTemplateModel"]
