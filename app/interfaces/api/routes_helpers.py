"""Helper utilities shared across API route handlers."""

from dataclasses import asdict

from fastapi import HTTPException, status

from app.domain.entities import Notification, NotificationPage
from app.domain.exceptions import (
    ForbiddenError,
    NotFoundError,
    NotificationError,
    NotificationSuppressedError,
    TransportError,
)
from app.interfaces.api.schemas import NotificationPageRead, NotificationRead

_STATUS_BY_ERROR: tuple[tuple[type[NotificationError], int], ...] = (
    (NotificationSuppressedError, status.HTTP_409_CONFLICT),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (TransportError, status.HTTP_502_BAD_GATEWAY),
)


def to_http_exception(exc: NotificationError) -> HTTPException:
    """Translate a domain error into the matching HTTP error."""

    status_code = status.HTTP_400_BAD_REQUEST
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code = code
            break
    return HTTPException(
        status_code=status_code, detail={"code": exc.code, "message": str(exc)}
    )


def notification_to_read_model(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


def page_to_read_model(page: NotificationPage) -> NotificationPageRead:
    payload = asdict(page)
    payload["notifications"] = [
        notification_to_read_model(notification) for notification in page.notifications
    ]
    return NotificationPageRead.model_validate(payload)


__all__ = ["notification_to_read_model", "page_to_read_model", "to_http_exception"]
