"""Schemas for notification template endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NotificationTemplateCreate(BaseModel):
    """Payload required to create a template."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    type: str
    channel: str
    subject: str | None = None
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    variables: list[str] = Field(default_factory=list)
    is_active: bool = True
    is_default: bool = False


class NotificationTemplateUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    description: str | None = None
    subject: str | None = None
    title: str | None = None
    content: str | None = None
    variables: list[str] | None = None
    is_active: bool | None = None
    is_default: bool | None = None


class NotificationTemplateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    organization_id: str
    type: str
    channel: str
    subject: str | None = None
    title: str
    content: str
    variables: list[str] = Field(default_factory=list)
    is_active: bool
    is_default: bool
    created_by: str | None = None
    created_at: datetime | None = None
    updated_by: str | None = None
    updated_at: datetime | None = None


__all__ = [
    "NotificationTemplateCreate",
    "NotificationTemplateRead",
    "NotificationTemplateUpdate",
]
