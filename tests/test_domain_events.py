"""Tests for turning cycle and feedback events into notifications."""

import logging

from app.application.use_cases.notification_preferences import update_preference
from app.application.use_cases.notification_templates import create_notification_template
from app.application.use_cases.notifications import handle_domain_event
from app.domain.entities import (
    CHANNEL_EMAIL,
    CHANNEL_IN_APP,
    NOTIFICATION_TYPE_CYCLE_ACTIVATED,
    PreferenceUpdate,
)


def _cycle_event(**cycle):
    payload = {"id": "c1", "name": "Q1 Review", "participantIds": ["u1", "u2"]}
    payload.update(cycle)
    return {"organizationId": "org-1", "cycle": payload}


def test_cycle_activation_notifies_every_participant(session, transports, publisher, now):
    created = handle_domain_event(
        session,
        "cycle:activated",
        _cycle_event(),
        transports=transports,
        publisher=publisher,
        channels=[CHANNEL_IN_APP],
        now=now,
    )

    assert sorted(item.user_id for item in created) == ["u1", "u2"]
    assert {item.title for item in created} == {"Feedback cycle started: Q1 Review"}
    assert {item.type for item in created} == {NOTIFICATION_TYPE_CYCLE_ACTIVATED}
    assert {item.related_entity_id for item in created} == {"c1"}


def test_default_template_is_used_for_events(session, transports, publisher, now):
    template = create_notification_template(
        session,
        organization_id="org-1",
        name="Activation",
        type=NOTIFICATION_TYPE_CYCLE_ACTIVATED,
        channel=CHANNEL_IN_APP,
        title="{{cycle_name}} is live",
        content="Open {{cycle_name}} now",
        variables=["cycle_name"],
        created_by="admin-1",
        is_default=True,
    )

    created = handle_domain_event(
        session,
        "cycle:activated",
        _cycle_event(participantIds=["u1"]),
        transports=transports,
        publisher=publisher,
        channels=[CHANNEL_IN_APP],
        now=now,
    )

    assert [item.title for item in created] == ["Q1 Review is live"]
    assert created[0].template_id == template.id


def test_participant_emails_travel_with_the_notification(session, transports, publisher, now):
    created = handle_domain_event(
        session,
        "cycle:activated",
        _cycle_event(
            participantIds=[],
            participants=[{"userId": "u3", "email": "u3@example.com"}],
        ),
        transports=transports,
        publisher=publisher,
        channels=[CHANNEL_EMAIL],
        now=now,
    )

    assert [item.user_id for item in created] == ["u3"]
    assert created[0].data["recipient_email"] == "u3@example.com"


def test_feedback_submitted_notifies_the_recipient(session, transports, publisher, now):
    created = handle_domain_event(
        session,
        "feedback:submitted",
        {
            "feedback": {
                "id": "f1",
                "organizationId": "org-1",
                "fromUserId": "u4",
                "toUserId": "u3",
            }
        },
        transports=transports,
        publisher=publisher,
        channels=[CHANNEL_IN_APP],
        now=now,
    )

    assert [(item.user_id, item.type) for item in created] == [("u3", "feedback_received")]
    assert created[0].related_entity_type == "feedback"


def test_feedback_acknowledged_notifies_the_author(session, transports, publisher, now):
    created = handle_domain_event(
        session,
        "feedback:acknowledged",
        {"organizationId": "org-1", "feedback": {"id": "f1", "fromUserId": "u4", "toUserId": "u3"}},
        transports=transports,
        publisher=publisher,
        channels=[CHANNEL_IN_APP],
        now=now,
    )

    assert [item.user_id for item in created] == ["u4"]


def test_unknown_event_is_ignored(session, transports, publisher):
    created = handle_domain_event(
        session, "goal:archived", {"organizationId": "org-1"}, transports=transports, publisher=publisher
    )

    assert created == []
    assert publisher.events == []


def test_event_without_organization_is_skipped(session, transports, publisher, caplog):
    caplog.set_level(logging.WARNING)

    created = handle_domain_event(
        session,
        "cycle:activated",
        {"cycle": {"id": "c1", "participantIds": ["u1"]}},
        transports=transports,
        publisher=publisher,
    )

    assert created == []
    assert "No organization id" in caplog.text


def test_recipient_failures_do_not_stop_fan_out(session, sink, transports, publisher, now):
    sink.failing_users.add("u1")
    update_preference(
        session,
        user_id="u2",
        organization_id="org-1",
        update=PreferenceUpdate(
            type=NOTIFICATION_TYPE_CYCLE_ACTIVATED, channel=CHANNEL_IN_APP, enabled=False
        ),
        publisher=None,
    )

    created = handle_domain_event(
        session,
        "cycle:activated",
        _cycle_event(participantIds=["u1", "u2", "u3"]),
        transports=transports,
        publisher=publisher,
        channels=[CHANNEL_IN_APP],
        now=now,
    )

    assert [item.user_id for item in created] == ["u3"]
    assert "notification:failed" in publisher.names
