"""Endpoints and websocket handler for notifications."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session

from app.application.ports import EventPublisher, RoleOracle, TransportLookup
from app.application.use_cases.notifications import (
    cancel_notification as cancel_notification_uc,
    confirm_notification_delivery as confirm_notification_delivery_uc,
    create_notification as create_notification_uc,
    delete_notification as delete_notification_uc,
    get_notification as get_notification_uc,
    get_notification_stats as get_notification_stats_uc,
    handle_domain_event as handle_domain_event_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_as_read as mark_all_notifications_as_read_uc,
    mark_notification_as_read as mark_notification_as_read_uc,
    process_scheduled_notifications as process_scheduled_notifications_uc,
)
from app.domain.entities import NotificationFilters, NotificationRequest
from app.domain.exceptions import NotificationError
from app.infrastructure.database import SessionLocal, get_db
from app.infrastructure.notifications import notification_manager, serialize_notification
from app.infrastructure.repositories import NotificationRepository
from app.interfaces.api.dependencies import (
    Actor,
    get_current_actor,
    get_event_publisher,
    get_role_oracle,
    get_transports,
    require_admin,
)
from app.interfaces.api.routes_helpers import (
    notification_to_read_model,
    page_to_read_model,
    to_http_exception,
)
from app.interfaces.api.schemas import (
    DomainEventRequest,
    DomainEventResponse,
    MarkAllReadResponse,
    NotificationCreate,
    NotificationPageRead,
    NotificationRead,
    NotificationStatsRead,
    SweepResultRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.post("/", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    transports: TransportLookup = Depends(get_transports),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> NotificationRead:
    """Create a notification and send it unless it is deferred."""

    request = NotificationRequest(**payload.model_dump())
    try:
        notification = create_notification_uc(
            db,
            actor.organization_id,
            request,
            actor.user_id,
            transports=transports,
            publisher=publisher,
        )
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return notification_to_read_model(notification)


@router.get("/", response_model=NotificationPageRead)
def list_notifications(
    type: str | None = None,
    channel: str | None = None,
    status_filter: str | None = Query(default=None, alias="status"),
    priority: str | None = None,
    user_id: str | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    unread_only: bool = False,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    role_oracle: RoleOracle = Depends(get_role_oracle),
) -> NotificationPageRead:
    """Return one page of notifications visible to the caller."""

    filters = NotificationFilters(
        user_id=user_id,
        type=type,
        channel=channel,
        status=status_filter,
        priority=priority,
        date_from=date_from,
        date_to=date_to,
        unread_only=unread_only,
    )
    try:
        result = list_notifications_uc(
            db,
            actor.organization_id,
            filters,
            actor.user_id,
            page,
            limit,
            role_oracle=role_oracle,
        )
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return page_to_read_model(result)


@router.get("/stats", response_model=NotificationStatsRead)
def read_notification_stats(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    role_oracle: RoleOracle = Depends(get_role_oracle),
) -> NotificationStatsRead:
    stats = get_notification_stats_uc(
        db, actor.organization_id, actor.user_id, role_oracle=role_oracle
    )
    return NotificationStatsRead.model_validate(stats)


@router.put("/read-all", response_model=MarkAllReadResponse)
def mark_all_notifications_as_read(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> MarkAllReadResponse:
    count = mark_all_notifications_as_read_uc(db, actor.user_id, publisher=publisher)
    return MarkAllReadResponse(count=count)


@router.post("/scheduled/sweep", response_model=SweepResultRead)
def sweep_scheduled_notifications(
    db: Session = Depends(get_db),
    _: Actor = Depends(require_admin),
    transports: TransportLookup = Depends(get_transports),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> SweepResultRead:
    """Send every scheduled notification that is due."""

    result = process_scheduled_notifications_uc(
        db, transports=transports, publisher=publisher
    )
    return SweepResultRead.model_validate(result)


@router.post("/events", response_model=DomainEventResponse, status_code=status.HTTP_202_ACCEPTED)
def ingest_domain_event(
    payload: DomainEventRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
    transports: TransportLookup = Depends(get_transports),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> DomainEventResponse:
    """Turn a cycle or feedback event into notifications."""

    event_payload = dict(payload.payload)
    event_payload.setdefault("organizationId", actor.organization_id)
    created = handle_domain_event_uc(
        db,
        payload.event_type,
        event_payload,
        transports=transports,
        publisher=publisher,
    )
    return DomainEventResponse(
        created=len(created),
        notification_ids=[notification.id for notification in created if notification.id],
    )


@router.get("/{notification_id}", response_model=NotificationRead)
def read_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    role_oracle: RoleOracle = Depends(get_role_oracle),
) -> NotificationRead:
    try:
        notification = get_notification_uc(
            db, notification_id, actor.user_id, role_oracle=role_oracle
        )
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return notification_to_read_model(notification)


@router.put("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_as_read(
    notification_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> NotificationRead:
    try:
        notification = mark_notification_as_read_uc(
            db, notification_id, actor.user_id, publisher=publisher
        )
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return notification_to_read_model(notification)


@router.post("/{notification_id}/cancel", response_model=NotificationRead)
def cancel_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    role_oracle: RoleOracle = Depends(get_role_oracle),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> NotificationRead:
    try:
        notification = cancel_notification_uc(
            db,
            notification_id,
            actor.user_id,
            role_oracle=role_oracle,
            publisher=publisher,
        )
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return notification_to_read_model(notification)


@router.post("/{notification_id}/delivered", response_model=NotificationRead)
def confirm_notification_delivery(
    notification_id: str,
    db: Session = Depends(get_db),
    _: Actor = Depends(require_admin),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> NotificationRead:
    """Record a delivery confirmation reported by a transport."""

    try:
        notification = confirm_notification_delivery_uc(
            db, notification_id, publisher=publisher
        )
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return notification_to_read_model(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> Response:
    try:
        delete_notification_uc(db, notification_id, actor.user_id, publisher=publisher)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notification events to one user.

    The user comes from the gateway-forwarded ``X-User-Id`` header, the same
    identity the REST routes trust.
    """

    user_id = (websocket.headers.get("x-user-id") or "").strip()
    if not user_id:
        await websocket.close(code=1008)
        return

    session = SessionLocal()
    try:
        pending_notifications = NotificationRepository(session).list_for_user(
            user_id, unread_only=True
        )
    except Exception:  # pragma: no cover - defensive path
        logger.exception("Could not load unread notifications for %s", user_id)
        await websocket.close(code=1011)
        return
    finally:
        session.close()

    await notification_manager.connect(user_id, websocket)
    try:
        if pending_notifications:
            await websocket.send_json(
                {
                    "type": "init",
                    "data": [serialize_notification(n) for n in pending_notifications],
                }
            )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    _acknowledge(user_id, [str(item) for item in ids])
                continue
    except WebSocketDisconnect:
        notification_manager.disconnect(user_id, websocket)
    except Exception:  # pragma: no cover - defensive path
        notification_manager.disconnect(user_id, websocket)
        raise


def _acknowledge(user_id: str, notification_ids: list[str]) -> None:
    ack_session = SessionLocal()
    try:
        for notification_id in notification_ids:
            try:
                mark_notification_as_read_uc(
                    ack_session, notification_id, user_id, publisher=None
                )
            except NotificationError as exc:
                logger.info("Ignoring ack for %s from %s: %s", notification_id, user_id, exc)
    finally:
        ack_session.close()


__all__ = ["router"]
