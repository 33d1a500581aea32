"""Time arithmetic for quiet hours and digest frequencies."""

from __future__ import annotations

from datetime import datetime, time, timedelta

from app.domain.entities import FREQUENCY_DAILY, FREQUENCY_WEEKLY, WEEKDAYS, QuietHours
from app.domain.exceptions import ValidationError
from app.utils import ensure_app_timezone, resolve_timezone


def parse_time_of_day(value: str) -> time:
    """Parse an ``HH:MM`` string."""

    try:
        hours, minutes = value.split(":")
        return time(hour=int(hours), minute=int(minutes))
    except (AttributeError, TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid time of day '{value}', expected HH:MM") from exc


def validate_quiet_hours(quiet_hours: QuietHours) -> QuietHours:
    parse_time_of_day(quiet_hours.start_time)
    parse_time_of_day(quiet_hours.end_time)
    unknown = [day for day in quiet_hours.days if day not in WEEKDAYS]
    if unknown:
        raise ValidationError(f"Unknown weekdays in quiet hours: {', '.join(unknown)}")
    return quiet_hours


def quiet_hours_end(quiet_hours: QuietHours | None, now: datetime) -> datetime | None:
    """Return when the quiet window covering ``now`` ends, or ``None``.

    The window is evaluated in the preference's own timezone and may wrap
    past midnight, in which case it belongs to the weekday it started on.
    """

    if quiet_hours is None or not quiet_hours.enabled:
        return None

    start = parse_time_of_day(quiet_hours.start_time)
    end = parse_time_of_day(quiet_hours.end_time)
    if start == end:
        return None

    tz = resolve_timezone(quiet_hours.timezone)
    local = ensure_app_timezone(now).astimezone(tz)
    current = local.time().replace(tzinfo=None)
    today = local.date()
    days = set(quiet_hours.days)

    if start < end:
        if start <= current < end and WEEKDAYS[today.weekday()] in days:
            return datetime.combine(today, end, tzinfo=tz)
        return None

    if current >= start and WEEKDAYS[today.weekday()] in days:
        return datetime.combine(today + timedelta(days=1), end, tzinfo=tz)
    yesterday = today - timedelta(days=1)
    if current < end and WEEKDAYS[yesterday.weekday()] in days:
        return datetime.combine(today, end, tzinfo=tz)
    return None


def next_digest_slot(frequency: str, now: datetime, digest_hour: int) -> datetime | None:
    """Return the next release time for digest ``frequency`` after ``now``.

    Daily digests go out every day at ``digest_hour`` and weekly digests on
    Mondays at the same hour, both in the application timezone.
    """

    if frequency not in (FREQUENCY_DAILY, FREQUENCY_WEEKLY):
        return None

    local = ensure_app_timezone(now)
    slot = local.replace(hour=digest_hour, minute=0, second=0, microsecond=0)
    if frequency == FREQUENCY_DAILY:
        if slot <= local:
            slot += timedelta(days=1)
        return slot

    slot += timedelta(days=(7 - slot.weekday()) % 7)
    if slot <= local:
        slot += timedelta(days=7)
    return slot


__all__ = [
    "next_digest_slot",
    "parse_time_of_day",
    "quiet_hours_end",
    "validate_quiet_hours",
]
