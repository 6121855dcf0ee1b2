"""Timeline models - sorted, day-grouped activity events for display."""

from datetime import date, datetime

from pydantic import BaseModel

from tripcore.models.common import ActivityKind, EventType
from tripcore.temporal.buckets import DayColor


class TimelineEvent(BaseModel):
    """One dated moment of an activity record."""

    id: str
    type: EventType
    kind: ActivityKind
    record_id: int
    title: str
    subtitle: str | None = None
    location: str | None = None
    day: date
    time: str | None
    display_time: str
    instant: datetime


class TimelineDay(BaseModel):
    """Events of one calendar day, with the day's bucket and color."""

    day: date
    day_index: int
    color: DayColor | None
    events: list[TimelineEvent]


class TimelineV1(BaseModel):
    """Complete timeline of a trip."""

    trip_id: int
    trip_name: str
    start_day: date
    days: list[TimelineDay]
