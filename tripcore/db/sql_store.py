"""SQL implementation of the ActivityStore protocol."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tripcore.db.activity_store import ActivityRow, TripRecord
from tripcore.db.models import (
    Base,
    CarRental,
    Hotel,
    Restaurant,
    TouristSite,
    Transportation,
    Trip,
    TripRoute,
)
from tripcore.errors import UnknownRecord
from tripcore.models.common import ActivityKind

ACTIVITY_TABLES: dict[ActivityKind, type[Base]] = {
    ActivityKind.transportation: Transportation,
    ActivityKind.hotel: Hotel,
    ActivityKind.tourist_site: TouristSite,
    ActivityKind.restaurant: Restaurant,
    ActivityKind.route: TripRoute,
    ActivityKind.car_rental: CarRental,
}


def _row_to_dict(row: Base) -> ActivityRow:
    return {column.key: getattr(row, column.key) for column in row.__mapper__.column_attrs}


class SqlActivityStore:
    """SQL implementation of ActivityStore over an async session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_trip(self, trip_id: int) -> TripRecord | None:
        """Get trip by ID."""
        result = await self._session.execute(select(Trip).where(Trip.id == trip_id))
        trip = result.scalar_one_or_none()

        if not trip:
            return None

        return TripRecord(
            id=trip.id,
            name=trip.name,
            destination=trip.destination,
            start_date=trip.start_date,
            end_date=trip.end_date,
        )

    async def list_records(self, kind: ActivityKind, trip_id: int) -> list[ActivityRow]:
        """List all records of one kind for a trip, ordered by ID."""
        model: Any = ACTIVITY_TABLES[kind]
        result = await self._session.execute(
            select(model)
            .where(model.trip_id == trip_id)
            .order_by(model.id)
            .execution_options(populate_existing=True)
        )
        return [_row_to_dict(row) for row in result.scalars().all()]

    async def get_record(self, kind: ActivityKind, record_id: int) -> ActivityRow | None:
        """Get one record by ID."""
        model: Any = ACTIVITY_TABLES[kind]
        result = await self._session.execute(
            select(model)
            .where(model.id == record_id)
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        return _row_to_dict(row) if row is not None else None

    async def update_record(
        self, kind: ActivityKind, record_id: int, values: dict[str, Any]
    ) -> None:
        """Update columns of one record."""
        model: Any = ACTIVITY_TABLES[kind]
        result = await self._session.execute(
            update(model)
            .where(model.id == record_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise UnknownRecord(kind.value, record_id)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Run the block in one database transaction."""
        if self._session.in_transaction():
            # Reads outside a unit of work autobegin; close that first
            await self._session.commit()

        async with self._session.begin():
            yield
