"""Fan-out of cycle and feedback events into per-user notifications."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from app.application.ports import EventPublisher, TransportLookup
from app.application.use_cases.notification_templates import render_template
from app.config import get_settings
from app.domain.entities import (
    NOTIFICATION_TYPE_CYCLE_ACTIVATED,
    NOTIFICATION_TYPE_CYCLE_CREATED,
    NOTIFICATION_TYPE_CYCLE_DEADLINE,
    NOTIFICATION_TYPE_CYCLE_REMINDER,
    NOTIFICATION_TYPE_FEEDBACK_ACKNOWLEDGED,
    NOTIFICATION_TYPE_FEEDBACK_OVERDUE,
    NOTIFICATION_TYPE_FEEDBACK_RECEIVED,
    NOTIFICATION_TYPE_FEEDBACK_REQUESTED,
    Notification,
    NotificationRequest,
)
from app.domain.exceptions import NotificationSuppressedError, TransportError, ValidationError
from app.infrastructure.notifications import default_transports, realtime_event_publisher
from app.infrastructure.repositories import NotificationTemplateRepository

from .create_notification import create_notification

logger = logging.getLogger(__name__)

# Used when the organization has no active default template.
FALLBACK_MESSAGES: dict[str, tuple[str, str]] = {
    NOTIFICATION_TYPE_CYCLE_CREATED: (
        "New feedback cycle: {{cycle_name}}",
        "The feedback cycle {{cycle_name}} has been created.",
    ),
    NOTIFICATION_TYPE_CYCLE_ACTIVATED: (
        "Feedback cycle started: {{cycle_name}}",
        "The feedback cycle {{cycle_name}} is now active. You can start giving feedback.",
    ),
    NOTIFICATION_TYPE_CYCLE_REMINDER: (
        "Reminder: {{cycle_name}}",
        "The feedback cycle {{cycle_name}} is still open. Remember to complete your feedback.",
    ),
    NOTIFICATION_TYPE_CYCLE_DEADLINE: (
        "Deadline approaching: {{cycle_name}}",
        "The feedback cycle {{cycle_name}} closes on {{end_date}}.",
    ),
    NOTIFICATION_TYPE_FEEDBACK_REQUESTED: (
        "Feedback requested",
        "You have a new feedback request in {{cycle_name}}.",
    ),
    NOTIFICATION_TYPE_FEEDBACK_RECEIVED: (
        "Feedback received",
        "You have received new feedback in {{cycle_name}}.",
    ),
    NOTIFICATION_TYPE_FEEDBACK_ACKNOWLEDGED: (
        "Feedback acknowledged",
        "Your feedback in {{cycle_name}} has been acknowledged.",
    ),
    NOTIFICATION_TYPE_FEEDBACK_OVERDUE: (
        "Feedback overdue",
        "Your feedback in {{cycle_name}} is overdue. Please submit it as soon as possible.",
    ),
}


@dataclass
class EventPlan:
    """Who to notify about an event, and with which rendering data."""

    type: str
    recipients: list[str]
    data: dict[str, Any] = field(default_factory=dict)
    emails: dict[str, str] = field(default_factory=dict)
    related_entity_type: str | None = None
    related_entity_id: str | None = None


def _nested(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = payload.get(key)
    return value if isinstance(value, Mapping) else {}


def _unique_ids(values: Sequence[Any]) -> list[str]:
    result: list[str] = []
    for value in values:
        if value and str(value) not in result:
            result.append(str(value))
    return result


def _cycle_data(cycle: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "cycle_id": cycle.get("id"),
        "cycle_name": cycle.get("name") or "your feedback cycle",
        "start_date": cycle.get("startDate"),
        "end_date": cycle.get("endDate"),
    }


def _cycle_plan(notification_type: str) -> Callable[[Mapping[str, Any]], EventPlan]:
    def build(payload: Mapping[str, Any]) -> EventPlan:
        cycle = _nested(payload, "cycle")
        participants = [
            item for item in cycle.get("participants") or [] if isinstance(item, Mapping)
        ]
        recipients = _unique_ids(
            list(cycle.get("participantIds") or [])
            + [item.get("userId") for item in participants]
            + list(payload.get("participantIds") or [])
        )
        emails = {
            str(item["userId"]): str(item["email"])
            for item in participants
            if item.get("userId") and item.get("email")
        }
        return EventPlan(
            type=notification_type,
            recipients=recipients,
            data=_cycle_data(cycle),
            emails=emails,
            related_entity_type="cycle",
            related_entity_id=cycle.get("id"),
        )

    return build


def _feedback_plan(
    notification_type: str, recipient_key: str
) -> Callable[[Mapping[str, Any]], EventPlan]:
    def build(payload: Mapping[str, Any]) -> EventPlan:
        feedback = _nested(payload, "feedback")
        recipient = payload.get(recipient_key) or feedback.get(recipient_key)
        cycle = _nested(feedback, "cycle") or _nested(payload, "cycle")
        data = _cycle_data(cycle)
        data.update(
            {
                "feedback_id": feedback.get("id"),
                "cycle_id": feedback.get("cycleId") or payload.get("cycleId") or data["cycle_id"],
                "from_user_id": payload.get("fromUserId") or feedback.get("fromUserId"),
                "to_user_id": payload.get("toUserId") or feedback.get("toUserId"),
            }
        )
        return EventPlan(
            type=notification_type,
            recipients=_unique_ids([recipient]),
            data=data,
            related_entity_type="feedback",
            related_entity_id=feedback.get("id"),
        )

    return build


EVENT_HANDLERS: dict[str, Callable[[Mapping[str, Any]], EventPlan]] = {
    "cycle:created": _cycle_plan(NOTIFICATION_TYPE_CYCLE_CREATED),
    "cycle:activated": _cycle_plan(NOTIFICATION_TYPE_CYCLE_ACTIVATED),
    "cycle:reminder": _cycle_plan(NOTIFICATION_TYPE_CYCLE_REMINDER),
    "cycle:deadline": _cycle_plan(NOTIFICATION_TYPE_CYCLE_DEADLINE),
    "feedback:created": _feedback_plan(NOTIFICATION_TYPE_FEEDBACK_REQUESTED, "toUserId"),
    "feedback:submitted": _feedback_plan(NOTIFICATION_TYPE_FEEDBACK_RECEIVED, "toUserId"),
    "feedback:acknowledged": _feedback_plan(
        NOTIFICATION_TYPE_FEEDBACK_ACKNOWLEDGED, "fromUserId"
    ),
    "feedback:overdue": _feedback_plan(NOTIFICATION_TYPE_FEEDBACK_OVERDUE, "fromUserId"),
}


def _organization_id(payload: Mapping[str, Any]) -> str | None:
    organization_id = (
        payload.get("organizationId")
        or _nested(payload, "cycle").get("organizationId")
        or _nested(payload, "feedback").get("organizationId")
    )
    return str(organization_id) if organization_id else None


def handle_domain_event(
    session: Session,
    event_type: str,
    payload: Mapping[str, Any],
    *,
    transports: TransportLookup = default_transports,
    publisher: EventPublisher | None = realtime_event_publisher,
    channels: Sequence[str] | None = None,
    now: datetime | None = None,
) -> list[Notification]:
    """Create the notifications an incoming domain event calls for.

    Unknown events are ignored. Failures for one recipient are logged and do
    not prevent the others from being notified.
    """

    handler = EVENT_HANDLERS.get(event_type)
    if handler is None:
        logger.debug("Ignoring unhandled event %s", event_type)
        return []

    organization_id = _organization_id(payload)
    if not organization_id:
        logger.warning("No organization id in %s event; skipping", event_type)
        return []

    plan = handler(payload)
    if not plan.recipients:
        logger.info("Event %s has no recipients", event_type)
        return []

    target_channels = list(channels) if channels is not None else get_settings().event_channel_list
    template_repository = NotificationTemplateRepository(session)
    title, content = FALLBACK_MESSAGES[plan.type]
    created: list[Notification] = []

    for channel in target_channels:
        template = template_repository.get_default(organization_id, plan.type, channel)
        for recipient in plan.recipients:
            data = dict(plan.data)
            if recipient in plan.emails:
                data["recipient_email"] = plan.emails[recipient]
            request = NotificationRequest(
                user_id=recipient,
                type=plan.type,
                channel=channel,
                title=render_template(title, data),
                content=render_template(content, data),
                data=data,
                template_id=template.id if template else None,
                related_entity_type=plan.related_entity_type,
                related_entity_id=plan.related_entity_id,
            )
            try:
                created.append(
                    create_notification(
                        session,
                        organization_id,
                        request,
                        transports=transports,
                        publisher=publisher,
                        now=now,
                    )
                )
            except NotificationSuppressedError:
                logger.info(
                    "User %s opted out of %s over %s", recipient, plan.type, channel
                )
            except (TransportError, ValidationError) as exc:
                logger.warning(
                    "Could not notify user %s about %s over %s: %s",
                    recipient,
                    event_type,
                    channel,
                    exc,
                )
            except Exception:
                logger.exception(
                    "Unexpected error notifying user %s about %s", recipient, event_type
                )

    logger.info(
        "Event %s produced %s notifications for organization %s",
        event_type,
        len(created),
        organization_id,
    )
    return created


__all__ = ["EVENT_HANDLERS", "handle_domain_event"]
