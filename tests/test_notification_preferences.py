"""Tests for preference bootstrap, updates and delivery resolution."""

from datetime import datetime, timezone
from itertools import permutations

import pytest

from app.application.use_cases.notification_preferences import (
    DEFAULT_PREFERENCES,
    delete_preference,
    get_user_preferences,
    get_user_settings,
    is_notification_enabled,
    most_restrictive_frequency,
    next_digest_slot,
    quiet_hours_end,
    resolve_delivery,
    update_bulk_preferences,
    update_preference,
)
from app.domain.entities import (
    CHANNEL_EMAIL,
    CHANNEL_IN_APP,
    CHANNEL_SMS,
    FREQUENCY_DAILY,
    FREQUENCY_IMMEDIATE,
    FREQUENCY_NEVER,
    FREQUENCY_WEEKLY,
    NOTIFICATION_TYPE_CYCLE_CREATED,
    NOTIFICATION_TYPE_CYCLE_REMINDER,
    NOTIFICATION_TYPE_FEEDBACK_REQUESTED,
    NOTIFICATION_TYPE_SYSTEM_ALERT,
    NotificationPreference,
    PreferenceUpdate,
    QuietHours,
)
from app.domain.exceptions import NotFoundError, ValidationError
from app.infrastructure.models import NotificationPreferenceModel
from app.infrastructure.repositories import NotificationPreferenceRepository


def _preference(channel, frequency, enabled=True):
    return NotificationPreference(
        id=None,
        user_id="u1",
        organization_id="org-1",
        type=NOTIFICATION_TYPE_CYCLE_CREATED,
        channel=channel,
        enabled=enabled,
        frequency=frequency,
    )


def test_first_read_seeds_default_preferences(session):
    preferences = get_user_preferences(session, "u1", "org-1")

    assert len(preferences) == len(DEFAULT_PREFERENCES)
    sms = [item for item in preferences if item.channel == CHANNEL_SMS]
    assert sms and all(not item.enabled for item in sms)


def test_seeding_is_idempotent(session):
    get_user_preferences(session, "u1", "org-1")
    get_user_preferences(session, "u1", "org-1")

    assert session.query(NotificationPreferenceModel).count() == len(DEFAULT_PREFERENCES)


def test_concurrent_seed_returns_existing_rows(session, monkeypatch):
    get_user_preferences(session, "u1", "org-1")

    original = NotificationPreferenceRepository.list_for_user
    calls = []

    def stale_first_read(self, user_id):
        calls.append(user_id)
        if len(calls) == 1:
            return []
        return original(self, user_id)

    monkeypatch.setattr(NotificationPreferenceRepository, "list_for_user", stale_first_read)

    preferences = get_user_preferences(session, "u1", "org-1")

    assert len(preferences) == len(DEFAULT_PREFERENCES)
    assert session.query(NotificationPreferenceModel).count() == len(DEFAULT_PREFERENCES)


def test_missing_preference_counts_as_enabled(session):
    assert is_notification_enabled(session, "u1", NOTIFICATION_TYPE_SYSTEM_ALERT, CHANNEL_EMAIL)


def test_frequency_never_counts_as_disabled(session, publisher):
    update_preference(
        session,
        user_id="u1",
        organization_id="org-1",
        update=PreferenceUpdate(
            type=NOTIFICATION_TYPE_CYCLE_CREATED,
            channel=CHANNEL_EMAIL,
            enabled=True,
            frequency=FREQUENCY_NEVER,
        ),
        publisher=publisher,
    )

    assert not is_notification_enabled(
        session, "u1", NOTIFICATION_TYPE_CYCLE_CREATED, CHANNEL_EMAIL
    )


def test_update_preference_upserts_by_natural_key(session, publisher):
    update = PreferenceUpdate(
        type=NOTIFICATION_TYPE_FEEDBACK_REQUESTED, channel=CHANNEL_SMS, enabled=True
    )
    created = update_preference(
        session, user_id="u1", organization_id="org-1", update=update, publisher=publisher
    )
    updated = update_preference(
        session,
        user_id="u1",
        organization_id="org-1",
        update=PreferenceUpdate(
            type=NOTIFICATION_TYPE_FEEDBACK_REQUESTED, channel=CHANNEL_SMS, enabled=False
        ),
        publisher=publisher,
    )

    assert updated.id == created.id
    assert updated.enabled is False
    assert updated.frequency == FREQUENCY_IMMEDIATE
    assert session.query(NotificationPreferenceModel).count() == 1
    assert publisher.names == ["preference:updated", "preference:updated"]
    assert publisher.events[0][1]["user_id"] == "u1"


def test_update_preference_keeps_stored_quiet_hours(session):
    quiet_hours = QuietHours(enabled=True, start_time="22:00", end_time="07:00")
    update_preference(
        session,
        user_id="u1",
        organization_id="org-1",
        update=PreferenceUpdate(
            type=NOTIFICATION_TYPE_CYCLE_CREATED,
            channel=CHANNEL_IN_APP,
            enabled=True,
            quiet_hours=quiet_hours,
        ),
        publisher=None,
    )

    updated = update_preference(
        session,
        user_id="u1",
        organization_id="org-1",
        update=PreferenceUpdate(
            type=NOTIFICATION_TYPE_CYCLE_CREATED,
            channel=CHANNEL_IN_APP,
            enabled=True,
            frequency=FREQUENCY_DAILY,
        ),
        publisher=None,
    )

    assert updated.frequency == FREQUENCY_DAILY
    assert updated.quiet_hours == quiet_hours


@pytest.mark.parametrize(
    "update",
    [
        PreferenceUpdate(type="unknown", channel=CHANNEL_EMAIL, enabled=True),
        PreferenceUpdate(type=NOTIFICATION_TYPE_CYCLE_CREATED, channel="fax", enabled=True),
        PreferenceUpdate(
            type=NOTIFICATION_TYPE_CYCLE_CREATED,
            channel=CHANNEL_EMAIL,
            enabled=True,
            frequency="hourly",
        ),
        PreferenceUpdate(
            type=NOTIFICATION_TYPE_CYCLE_CREATED,
            channel=CHANNEL_EMAIL,
            enabled=True,
            quiet_hours=QuietHours(enabled=True, start_time="25h", end_time="07:00"),
        ),
    ],
)
def test_update_preference_rejects_invalid_input(session, update):
    with pytest.raises(ValidationError):
        update_preference(
            session, user_id="u1", organization_id="org-1", update=update, publisher=None
        )


def test_bulk_update_keeps_items_before_a_failure(session, publisher):
    updates = [
        PreferenceUpdate(type=NOTIFICATION_TYPE_CYCLE_CREATED, channel=CHANNEL_EMAIL, enabled=False),
        PreferenceUpdate(type="unknown", channel=CHANNEL_EMAIL, enabled=False),
    ]

    with pytest.raises(ValidationError):
        update_bulk_preferences(
            session, user_id="u1", organization_id="org-1", updates=updates, publisher=publisher
        )

    stored = NotificationPreferenceRepository(session).get_by_key(
        "u1", NOTIFICATION_TYPE_CYCLE_CREATED, CHANNEL_EMAIL
    )
    assert stored is not None and stored.enabled is False
    assert publisher.events == []


def test_bulk_update_publishes_single_event(session, publisher):
    updates = [
        PreferenceUpdate(type=NOTIFICATION_TYPE_CYCLE_CREATED, channel=CHANNEL_EMAIL, enabled=False),
        PreferenceUpdate(type=NOTIFICATION_TYPE_CYCLE_CREATED, channel=CHANNEL_SMS, enabled=True),
    ]

    saved = update_bulk_preferences(
        session, user_id="u1", organization_id="org-1", updates=updates, publisher=publisher
    )

    assert len(saved) == 2
    assert publisher.names == ["preferences:bulk_updated"]
    assert len(publisher.events[0][1]["preferences"]) == 2


def test_delete_preference_only_for_owner(session, publisher):
    preference = update_preference(
        session,
        user_id="u1",
        organization_id="org-1",
        update=PreferenceUpdate(
            type=NOTIFICATION_TYPE_CYCLE_CREATED, channel=CHANNEL_EMAIL, enabled=True
        ),
        publisher=None,
    )

    with pytest.raises(NotFoundError):
        delete_preference(session, preference.id, "u2", publisher=publisher)

    delete_preference(session, preference.id, "u1", publisher=publisher)

    assert NotificationPreferenceRepository(session).get(preference.id) is None
    assert publisher.names == ["preference:deleted"]


def test_most_restrictive_frequency():
    assert most_restrictive_frequency([]) == FREQUENCY_NEVER
    assert (
        most_restrictive_frequency(
            [
                _preference(CHANNEL_EMAIL, FREQUENCY_IMMEDIATE),
                _preference(CHANNEL_EMAIL, FREQUENCY_WEEKLY),
                _preference(CHANNEL_EMAIL, FREQUENCY_DAILY),
            ]
        )
        == FREQUENCY_WEEKLY
    )


@pytest.mark.parametrize(
    "frequencies", list(permutations([FREQUENCY_IMMEDIATE, FREQUENCY_WEEKLY, FREQUENCY_NEVER]))
)
def test_never_wins_in_any_order(frequencies):
    preferences = [_preference(CHANNEL_EMAIL, frequency) for frequency in frequencies]

    assert most_restrictive_frequency(preferences) == FREQUENCY_NEVER


@pytest.mark.parametrize(
    "frequencies", list(permutations([FREQUENCY_IMMEDIATE, FREQUENCY_WEEKLY, FREQUENCY_NEVER]))
)
def test_user_settings_report_never_for_mixed_channel(session, frequencies):
    types = [
        NOTIFICATION_TYPE_CYCLE_CREATED,
        NOTIFICATION_TYPE_CYCLE_REMINDER,
        NOTIFICATION_TYPE_FEEDBACK_REQUESTED,
    ]
    for type_, frequency in zip(types, frequencies):
        update_preference(
            session,
            user_id="u1",
            organization_id="org-1",
            update=PreferenceUpdate(
                type=type_, channel=CHANNEL_EMAIL, enabled=True, frequency=frequency
            ),
            publisher=None,
        )

    settings = get_user_settings(session, "u1", "org-1")

    assert settings.email.frequency == FREQUENCY_NEVER


def test_user_settings_summarize_channels(session):
    settings = get_user_settings(session, "u1", "org-1")

    assert settings.email.enabled is True
    assert settings.email.frequency == FREQUENCY_DAILY
    assert settings.in_app.enabled is True
    assert settings.in_app.show_banner is True
    assert settings.in_app.show_badge is True
    assert settings.sms.enabled is False
    assert settings.sms.frequency == FREQUENCY_IMMEDIATE


def test_quiet_hours_wrapping_midnight():
    quiet_hours = QuietHours(enabled=True, start_time="22:00", end_time="07:00")
    late = datetime(2025, 1, 6, 23, 0, tzinfo=timezone.utc)
    early = datetime(2025, 1, 7, 3, 0, tzinfo=timezone.utc)
    daytime = datetime(2025, 1, 7, 12, 0, tzinfo=timezone.utc)

    assert quiet_hours_end(quiet_hours, late) == datetime(2025, 1, 7, 7, 0, tzinfo=timezone.utc)
    assert quiet_hours_end(quiet_hours, early) == datetime(2025, 1, 7, 7, 0, tzinfo=timezone.utc)
    assert quiet_hours_end(quiet_hours, daytime) is None


def test_quiet_hours_belong_to_the_day_they_start():
    quiet_hours = QuietHours(
        enabled=True, start_time="22:00", end_time="07:00", days=["monday"]
    )

    # Tuesday early morning still belongs to Monday's window.
    tuesday_early = datetime(2025, 1, 7, 3, 0, tzinfo=timezone.utc)
    tuesday_late = datetime(2025, 1, 7, 23, 0, tzinfo=timezone.utc)

    assert quiet_hours_end(quiet_hours, tuesday_early) is not None
    assert quiet_hours_end(quiet_hours, tuesday_late) is None


def test_quiet_hours_use_their_own_timezone():
    quiet_hours = QuietHours(
        enabled=True, start_time="09:00", end_time="17:00", timezone="UTC+02:00"
    )
    # 08:00 UTC is 10:00 at UTC+2.
    current = datetime(2025, 1, 6, 8, 0, tzinfo=timezone.utc)

    end = quiet_hours_end(quiet_hours, current)

    assert end == datetime(2025, 1, 6, 15, 0, tzinfo=timezone.utc)


def test_disabled_quiet_hours_are_ignored():
    quiet_hours = QuietHours(enabled=False, start_time="00:00", end_time="23:59")

    assert quiet_hours_end(quiet_hours, datetime(2025, 1, 6, 12, 0, tzinfo=timezone.utc)) is None


def test_next_digest_slot():
    monday_noon = datetime(2025, 1, 6, 12, 0, tzinfo=timezone.utc)
    monday_early = datetime(2025, 1, 6, 6, 0, tzinfo=timezone.utc)

    assert next_digest_slot(FREQUENCY_DAILY, monday_noon, 9) == datetime(
        2025, 1, 7, 9, 0, tzinfo=timezone.utc
    )
    assert next_digest_slot(FREQUENCY_DAILY, monday_early, 9) == datetime(
        2025, 1, 6, 9, 0, tzinfo=timezone.utc
    )
    assert next_digest_slot(FREQUENCY_WEEKLY, monday_noon, 9) == datetime(
        2025, 1, 13, 9, 0, tzinfo=timezone.utc
    )
    assert next_digest_slot(FREQUENCY_IMMEDIATE, monday_noon, 9) is None


def test_resolve_delivery_for_unknown_pair_is_immediate(session, now):
    decision = resolve_delivery(
        session, "u1", "org-1", NOTIFICATION_TYPE_SYSTEM_ALERT, CHANNEL_IN_APP, now
    )

    assert decision.enabled is True
    assert decision.deliver_at is None


def test_resolve_delivery_defers_daily_digest(session, now):
    decision = resolve_delivery(
        session, "u1", "org-1", NOTIFICATION_TYPE_CYCLE_REMINDER, CHANNEL_EMAIL, now
    )

    assert decision.enabled is True
    assert decision.reason == "digest"
    assert decision.deliver_at == datetime(2025, 1, 7, 9, 0, tzinfo=timezone.utc)


def test_resolve_delivery_reports_disabled_preference(session, now):
    decision = resolve_delivery(
        session, "u1", "org-1", NOTIFICATION_TYPE_FEEDBACK_REQUESTED, CHANNEL_SMS, now
    )

    assert decision.enabled is True

    update_preference(
        session,
        user_id="u1",
        organization_id="org-1",
        update=PreferenceUpdate(
            type=NOTIFICATION_TYPE_FEEDBACK_REQUESTED, channel=CHANNEL_SMS, enabled=False
        ),
        publisher=None,
    )
    decision = resolve_delivery(
        session, "u1", "org-1", NOTIFICATION_TYPE_FEEDBACK_REQUESTED, CHANNEL_SMS, now
    )

    assert decision.enabled is False
    assert decision.reason == "disabled"
