"""Domain entity representing a reusable notification template."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class NotificationTemplate:
    """Message blueprint rendered with ``{{variable}}`` substitution."""

    id: str | None
    name: str
    organization_id: str
    type: str
    channel: str
    title: str
    content: str
    created_by: str | None
    subject: str | None = None
    description: str | None = None
    variables: list[str] = field(default_factory=list)
    is_active: bool = True
    is_default: bool = False
    created_at: datetime | None = None
    updated_by: str | None = None
    updated_at: datetime | None = None


__all__ = ["NotificationTemplate"]
