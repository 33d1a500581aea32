"""Errors raised by the notification use cases."""

from __future__ import annotations

from collections.abc import Sequence


class NotificationError(Exception):
    """Base class for notification engine errors."""

    code = "NOTIFICATION_ERROR"


class ValidationError(NotificationError, ValueError):
    """Raised when input is malformed or contradicts current state."""

    code = "VALIDATION_ERROR"


class TemplateVariableError(ValidationError):
    """Raised when a template references placeholders it does not declare."""

    code = "TEMPLATE_VARIABLE_MISMATCH"

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            "Template content references undefined variables: "
            + ", ".join(self.missing)
        )


class NotificationSuppressedError(ValidationError):
    """Raised when the recipient disabled the requested type and channel."""

    code = "NOTIFICATION_SUPPRESSED"

    def __init__(self, *, user_id: str, type: str, channel: str, reason: str | None = None) -> None:
        self.user_id = user_id
        self.type = type
        self.channel = channel
        self.reason = reason
        super().__init__("Notification disabled by user preference")


class InvalidStatusTransitionError(ValidationError):
    """Raised when a notification status would move backwards."""

    code = "INVALID_STATUS_TRANSITION"

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot change notification status from '{current}' to '{target}'")


class NotFoundError(NotificationError):
    """Raised when an identifier does not resolve to a record."""

    code = "NOT_FOUND"


class ForbiddenError(NotificationError):
    """Raised when the actor does not own the target record."""

    code = "FORBIDDEN"


class TransportError(NotificationError):
    """Raised when a channel sink fails to send a notification."""

    code = "TRANSPORT_FAILED"

    def __init__(self, message: str, *, channel: str | None = None) -> None:
        self.channel = channel
        super().__init__(message)


__all__ = [
    "NotificationError",
    "ValidationError",
    "TemplateVariableError",
    "NotificationSuppressedError",
    "InvalidStatusTransitionError",
    "NotFoundError",
    "ForbiddenError",
    "TransportError",
]
