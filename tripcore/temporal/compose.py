"""Instant composition: day anchor + time of day -> sortable instant.

A day anchor is a datetime at 00:00 in its own calendar basis. Aware UTC
datetimes are the ``utc`` basis; naive datetimes are host-local wall clock
(the ``local`` basis). Composition never changes basis: the clock reading is
written into the anchor as-is, so composing and then decomposing in the same
basis reproduces the inputs.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from enum import Enum

from tripcore.errors import MalformedTimeOfDay, UnrecognizedTimeFormat
from tripcore.temporal.timeofday import normalize_time_24
from tripcore.utils.metrics import malformed_times_of_day_total, unrecognized_time_formats_total

logger = logging.getLogger(__name__)

EPOCH_UTC = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MILLISECOND = timedelta(milliseconds=1)


class CalendarBasis(str, Enum):
    """How an epoch-millisecond value is read as a wall-clock datetime."""

    utc = "utc"
    local = "local"


def from_epoch_ms(ms: int, basis: CalendarBasis = CalendarBasis.utc) -> datetime:
    """Convert epoch milliseconds to a datetime in the given basis."""
    if basis == CalendarBasis.utc:
        return EPOCH_UTC + timedelta(milliseconds=ms)

    seconds, millis = divmod(ms, 1000)
    return datetime.fromtimestamp(seconds).replace(microsecond=millis * 1000)


def to_epoch_ms(instant: datetime) -> int:
    """Convert a datetime to epoch milliseconds.

    Naive datetimes are interpreted as host-local wall clock.
    """
    if instant.tzinfo is None:
        instant = instant.astimezone(timezone.utc)
    return (instant - EPOCH_UTC) // ONE_MILLISECOND


def anchor_for_date(day: date, basis: CalendarBasis = CalendarBasis.utc) -> datetime:
    """Day anchor for a calendar date in the given basis."""
    tzinfo = timezone.utc if basis == CalendarBasis.utc else None
    return datetime(day.year, day.month, day.day, tzinfo=tzinfo)


def truncate_to_day(instant: datetime) -> datetime:
    """Return the day anchor (midnight, same basis) of an instant."""
    return instant.replace(hour=0, minute=0, second=0, microsecond=0)


def is_day_anchor(instant: datetime) -> bool:
    """True if the instant carries no time-of-day in its basis."""
    return instant == truncate_to_day(instant)


def parse_clock(time_of_day: str) -> tuple[int, int]:
    """Split a canonical HH:MM string into validated hour and minute.

    Raises:
        MalformedTimeOfDay: If either part is not an integer in range
    """
    parts = time_of_day.split(":")
    if len(parts) != 2:
        raise MalformedTimeOfDay(time_of_day, "expected exactly one ':'")

    hour_text, minute_text = (part.strip() for part in parts)
    if not (hour_text.isdecimal() and minute_text.isdecimal()):
        raise MalformedTimeOfDay(time_of_day, "hour and minute must be integers")

    hour, minute = int(hour_text), int(minute_text)
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise MalformedTimeOfDay(time_of_day, "hour or minute out of range")

    return hour, minute


def compose_instant(
    anchor: datetime, time_of_day: str | None, *, strict: bool = False
) -> datetime:
    """Combine a day anchor with a time of day into a sortable instant.

    No time means midnight: the anchor is returned unchanged. Otherwise the
    time is normalized to HH:MM and written into the anchor's hour and minute,
    keeping its date and basis.

    Args:
        anchor: Day anchor datetime
        time_of_day: "HH:MM", a 12-hour string, or None
        strict: Raise on malformed times instead of falling back to the anchor

    Returns:
        Composed instant

    Raises:
        MalformedTimeOfDay: In strict mode, if the time cannot be read
        UnrecognizedTimeFormat: In strict mode, if the format is unknown
    """
    if not time_of_day:
        return anchor

    canonical = normalize_time_24(time_of_day)
    if canonical is None and strict:
        unrecognized_time_formats_total.labels(policy="strict").inc()
        raise UnrecognizedTimeFormat(time_of_day)

    try:
        hour, minute = parse_clock(canonical or time_of_day)
    except MalformedTimeOfDay:
        if strict:
            malformed_times_of_day_total.labels(policy="strict").inc()
            raise
        malformed_times_of_day_total.labels(policy="permissive").inc()
        logger.warning(f"Malformed time of day {time_of_day!r}, using day anchor")
        return anchor

    return anchor.replace(hour=hour, minute=minute, second=0, microsecond=0)


def extract_time_of_day(instant: datetime) -> str:
    """Read an instant's wall-clock hour and minute as HH:MM."""
    return f"{instant.hour:02d}:{instant.minute:02d}"


def decompose_instant(instant: datetime) -> tuple[datetime, str]:
    """Split a composed instant back into (day anchor, HH:MM)."""
    return truncate_to_day(instant), extract_time_of_day(instant)
