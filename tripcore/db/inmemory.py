"""In-memory implementation of the ActivityStore protocol."""

import copy
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from tripcore.db.activity_store import ActivityRow, TripRecord
from tripcore.errors import UnknownRecord
from tripcore.models.common import ActivityKind


class InMemoryActivityStore:
    """In-memory implementation of ActivityStore."""

    def __init__(self) -> None:
        self._trips: dict[int, TripRecord] = {}
        self._records: dict[ActivityKind, dict[int, ActivityRow]] = {
            kind: {} for kind in ActivityKind
        }
        self._next_id = 1

    def add_trip(self, trip: TripRecord) -> None:
        """Register a trip."""
        self._trips[trip.id] = trip

    def add_record(self, kind: ActivityKind, row: ActivityRow) -> int:
        """Insert a record, assigning an ID when the row has none."""
        stored = dict(row)
        if stored.get("id") is None:
            stored["id"] = self._next_id
        self._next_id = max(self._next_id, stored["id"]) + 1
        self._records[kind][stored["id"]] = stored
        return stored["id"]

    async def get_trip(self, trip_id: int) -> TripRecord | None:
        """Get trip by ID."""
        return self._trips.get(trip_id)

    async def list_records(self, kind: ActivityKind, trip_id: int) -> list[ActivityRow]:
        """List all records of one kind for a trip, ordered by ID."""
        rows = [row for row in self._records[kind].values() if row["trip_id"] == trip_id]
        return [dict(row) for row in sorted(rows, key=lambda r: r["id"])]

    async def get_record(self, kind: ActivityKind, record_id: int) -> ActivityRow | None:
        """Get one record by ID."""
        row = self._records[kind].get(record_id)
        return dict(row) if row is not None else None

    async def update_record(
        self, kind: ActivityKind, record_id: int, values: dict[str, Any]
    ) -> None:
        """Update columns of one record."""
        if record_id not in self._records[kind]:
            raise UnknownRecord(kind.value, record_id)
        self._records[kind][record_id].update(values)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Restore all records if the block raises."""
        snapshot = copy.deepcopy(self._records)
        try:
            yield
        except BaseException:
            self._records = snapshot
            raise
