"""Timeline assembly: activity rows -> sorted, day-grouped, colored events."""

import logging
from collections.abc import Callable
from datetime import date, datetime

from tripcore.db.activity_store import ACTIVITY_SLOTS, ActivityRow, ActivityStore, TripRecord
from tripcore.errors import TemporalError
from tripcore.models.common import ActivityKind, EventType
from tripcore.models.timeline import TimelineDay, TimelineEvent, TimelineV1
from tripcore.temporal.buckets import ModuloPolicy, day_bucket, day_color, group_by_day
from tripcore.temporal.compose import (
    CalendarBasis,
    anchor_for_date,
    compose_instant,
    from_epoch_ms,
    truncate_to_day,
)
from tripcore.temporal.timeofday import MISSING_TIME_PLACEHOLDER, format_time_24

logger = logging.getLogger(__name__)

TitleFn = Callable[[ActivityRow], str]
SubtitleFn = Callable[[ActivityRow], str | None]

# (kind, slot name) -> event type, title, subtitle
EVENT_TEMPLATES: dict[tuple[ActivityKind, str], tuple[EventType, TitleFn, SubtitleFn]] = {
    (ActivityKind.transportation, "departure"): (
        EventType.transport_departure,
        lambda r: f"{r['type'].capitalize()}: {r['origin']} → {r['destination']}",
        lambda r: f"#{r['confirmation_number']}" if r.get("confirmation_number") else None,
    ),
    (ActivityKind.transportation, "arrival"): (
        EventType.transport_arrival,
        lambda r: f"Arrival: {r['destination']}",
        lambda r: r.get("flight_number"),
    ),
    (ActivityKind.hotel, "check_in"): (
        EventType.hotel_checkin,
        lambda r: f"Check-in: {r['name']}",
        lambda r: r.get("address"),
    ),
    (ActivityKind.hotel, "check_out"): (
        EventType.hotel_checkout,
        lambda r: f"Check-out: {r['name']}",
        lambda r: r.get("address"),
    ),
    (ActivityKind.tourist_site, "visit"): (
        EventType.site,
        lambda r: r["name"],
        lambda r: r.get("address"),
    ),
    (ActivityKind.restaurant, "reservation"): (
        EventType.restaurant,
        lambda r: r["name"],
        lambda r: r.get("cuisine_type"),
    ),
    (ActivityKind.route, "route"): (
        EventType.route,
        lambda r: r["name"],
        lambda r: r.get("description") or "Driving route",
    ),
    (ActivityKind.car_rental, "pickup"): (
        EventType.car_pickup,
        lambda r: f"Car Pickup: {r['company']}",
        lambda r: r.get("pickup_location"),
    ),
    (ActivityKind.car_rental, "return"): (
        EventType.car_return,
        lambda r: f"Car Return: {r['company']}",
        lambda r: r.get("return_location"),
    ),
}


async def load_trip_records(
    store: ActivityStore, trip_id: int
) -> dict[ActivityKind, list[ActivityRow]]:
    """Fetch every activity record of a trip, grouped by kind."""
    return {kind: await store.list_records(kind, trip_id) for kind in ActivityKind}


def build_events(
    records: dict[ActivityKind, list[ActivityRow]],
    *,
    basis: CalendarBasis = CalendarBasis.utc,
    strict: bool = False,
) -> list[TimelineEvent]:
    """Turn activity rows into timeline events sorted by composed instant.

    A slot without a date is left out. A slot without a time keeps its stored
    instant (midnight for split rows). Events at the same instant keep the
    order of ``ActivityKind`` then record ID.
    """
    events: list[TimelineEvent] = []

    for kind in ActivityKind:
        for row in records.get(kind, []):
            for slot in ACTIVITY_SLOTS[kind]:
                stored_ms = row.get(slot.date_field)
                if stored_ms is None:
                    continue

                event_type, title, subtitle = EVENT_TEMPLATES[(kind, slot.name)]
                stored = from_epoch_ms(stored_ms, basis)
                raw_time = row.get(slot.time_field) if slot.time_field else None

                try:
                    time_of_day = format_time_24(raw_time, strict=strict) or None
                    instant = compose_instant(stored, time_of_day, strict=strict)
                except TemporalError as e:
                    logger.warning(f"{event_type.value} {row['id']}: {e}, sorting at day start")
                    instant, time_of_day = stored, None

                events.append(
                    TimelineEvent(
                        id=f"{event_type.value}-{row['id']}",
                        type=event_type,
                        kind=kind,
                        record_id=row["id"],
                        title=title(row),
                        subtitle=subtitle(row),
                        location=row.get(slot.location_field) if slot.location_field else None,
                        day=stored.date(),
                        time=time_of_day,
                        display_time=time_of_day or MISSING_TIME_PLACEHOLDER,
                        instant=instant,
                    )
                )

    events.sort(key=lambda e: e.instant)
    return events


def _timeline_day(
    trip_start: datetime,
    day: date,
    events: list[TimelineEvent],
    *,
    basis: CalendarBasis,
    modulo: ModuloPolicy,
) -> TimelineDay:
    anchor = anchor_for_date(day, basis)
    return TimelineDay(
        day=day,
        day_index=day_bucket(trip_start, anchor),
        color=day_color(trip_start, anchor, modulo=modulo),
        events=events,
    )


def build_timeline(
    trip: TripRecord,
    records: dict[ActivityKind, list[ActivityRow]],
    *,
    basis: CalendarBasis = CalendarBasis.utc,
    modulo: ModuloPolicy = ModuloPolicy.floor,
    strict: bool = False,
) -> TimelineV1:
    """Build a trip's full timeline, one entry per calendar day with events.

    Args:
        trip: Trip whose start day anchors the day buckets
        records: Activity rows grouped by kind
        basis: Calendar basis of the stored day anchors
        modulo: Color policy for days before the trip start
        strict: Log unreadable times (they still sort at day start)

    Returns:
        Timeline with days in ascending order
    """
    trip_start = truncate_to_day(from_epoch_ms(trip.start_date, basis))
    events = build_events(records, basis=basis, strict=strict)

    days = [
        _timeline_day(trip_start, day, day_events, basis=basis, modulo=modulo)
        for day, day_events in group_by_day(events, key=lambda e: e.instant)
    ]

    return TimelineV1(
        trip_id=trip.id,
        trip_name=trip.name,
        start_day=trip_start.date(),
        days=days,
    )


def build_daily_view(
    trip: TripRecord,
    records: dict[ActivityKind, list[ActivityRow]],
    day: date,
    *,
    basis: CalendarBasis = CalendarBasis.utc,
    modulo: ModuloPolicy = ModuloPolicy.floor,
    strict: bool = False,
) -> TimelineDay:
    """Build the sorted event list of a single day (empty if nothing is planned)."""
    trip_start = truncate_to_day(from_epoch_ms(trip.start_date, basis))
    events = [
        event
        for event in build_events(records, basis=basis, strict=strict)
        if event.instant.date() == day
    ]
    return _timeline_day(trip_start, day, events, basis=basis, modulo=modulo)
