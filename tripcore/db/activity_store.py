"""Activity store protocol and the temporal shape of each record kind."""

from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Any, Protocol

from tripcore.models.common import ActivityKind

# A persisted activity row: column name -> value, always including "id"
# and "trip_id".
ActivityRow = dict[str, Any]


@dataclass(frozen=True)
class TemporalSlot:
    """One dated moment of a record: a day column plus optional time/location."""

    name: str
    date_field: str
    time_field: str | None = None
    location_field: str | None = None


ACTIVITY_SLOTS: dict[ActivityKind, tuple[TemporalSlot, ...]] = {
    ActivityKind.transportation: (
        TemporalSlot("departure", "departure_date", "departure_time", "departure_location"),
        TemporalSlot("arrival", "arrival_date", "arrival_time", "arrival_location"),
    ),
    ActivityKind.hotel: (
        TemporalSlot("check_in", "check_in_date", "check_in_time", "location"),
        TemporalSlot("check_out", "check_out_date", "check_out_time", "location"),
    ),
    ActivityKind.tourist_site: (
        TemporalSlot("visit", "planned_visit_date", "planned_visit_time", "location"),
    ),
    ActivityKind.restaurant: (
        TemporalSlot("reservation", "reservation_date", "reservation_time", "location"),
    ),
    ActivityKind.route: (TemporalSlot("route", "date", "time", "location"),),
    ActivityKind.car_rental: (
        TemporalSlot("pickup", "pickup_date", "pickup_time"),
        TemporalSlot("return", "return_date", "return_time"),
    ),
}


@dataclass
class TripRecord:
    """Trip data record."""

    id: int
    name: str
    destination: str
    start_date: int
    end_date: int


class ActivityStore(Protocol):
    """Persistence collaborator for trips and their activity records."""

    async def get_trip(self, trip_id: int) -> TripRecord | None:
        """Get trip by ID.

        Args:
            trip_id: Trip ID

        Returns:
            Trip record or None if not found
        """
        ...

    async def list_records(self, kind: ActivityKind, trip_id: int) -> list[ActivityRow]:
        """List all records of one kind for a trip, ordered by ID.

        Args:
            kind: Record kind
            trip_id: Owning trip ID

        Returns:
            Rows as column dicts
        """
        ...

    async def get_record(self, kind: ActivityKind, record_id: int) -> ActivityRow | None:
        """Get one record by ID.

        Args:
            kind: Record kind
            record_id: Record ID

        Returns:
            Row or None if not found
        """
        ...

    async def update_record(
        self, kind: ActivityKind, record_id: int, values: dict[str, Any]
    ) -> None:
        """Update columns of one record.

        Args:
            kind: Record kind
            record_id: Record ID
            values: Column name -> new value

        Raises:
            UnknownRecord: If no record has this ID
        """
        ...

    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic unit of work.

        Changes made inside are committed together on normal exit and
        discarded if the block raises.
        """
        ...
