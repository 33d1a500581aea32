"""FastAPI dependency utilities."""

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException, status

from app.application.ports import EventPublisher, RoleOracle, TransportLookup
from app.infrastructure.notifications import (
    default_role_oracle,
    default_transports,
    realtime_event_publisher,
)


@dataclass(frozen=True)
class Actor:
    """Caller identity forwarded by the gateway in request headers."""

    user_id: str
    organization_id: str


def get_current_actor(
    x_user_id: str | None = Header(default=None),
    x_organization_id: str | None = Header(default=None),
) -> Actor:
    """Return the actor described by ``X-User-Id`` and ``X-Organization-Id``."""

    user_id = (x_user_id or "").strip()
    organization_id = (x_organization_id or "").strip()
    if not user_id or not organization_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-Id and X-Organization-Id headers are required",
        )
    return Actor(user_id=user_id, organization_id=organization_id)


def get_role_oracle() -> RoleOracle:
    return default_role_oracle


def get_transports() -> TransportLookup:
    return default_transports


def get_event_publisher() -> EventPublisher:
    return realtime_event_publisher


def require_admin(
    actor: Actor = Depends(get_current_actor),
    role_oracle: RoleOracle = Depends(get_role_oracle),
) -> Actor:
    """Ensure the actor administers its organization."""

    if not role_oracle.is_admin(actor.user_id, actor.organization_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator privileges required",
        )
    return actor


__all__ = [
    "Actor",
    "get_current_actor",
    "get_event_publisher",
    "get_role_oracle",
    "get_transports",
    "require_admin",
]
