"""Timeline endpoints - full trip timeline and single-day view."""

import logging
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from tripcore.config import Settings, get_settings
from tripcore.db.activity_store import TripRecord
from tripcore.db.engine import get_session
from tripcore.db.sql_store import SqlActivityStore
from tripcore.models.timeline import TimelineDay, TimelineV1
from tripcore.temporal.buckets import ModuloPolicy
from tripcore.temporal.compose import CalendarBasis
from tripcore.timeline.builder import build_daily_view, build_timeline, load_trip_records

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["timeline"])


async def _require_trip(store: SqlActivityStore, trip_id: int) -> TripRecord:
    trip = await store.get_trip(trip_id)
    if trip is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")
    return trip


@router.get("/{trip_id}/timeline", response_model=TimelineV1)
async def get_timeline(
    trip_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TimelineV1:
    """Get every dated activity of a trip, sorted and grouped by day."""
    store = SqlActivityStore(session)
    trip = await _require_trip(store, trip_id)
    records = await load_trip_records(store, trip_id)

    logger.info(f"[GET /trips/{trip_id}/timeline] basis={settings.calendar_basis}")

    return build_timeline(
        trip,
        records,
        basis=CalendarBasis(settings.calendar_basis),
        modulo=ModuloPolicy(settings.day_color_modulo),
        strict=settings.strict_times,
    )


@router.get("/{trip_id}/days/{day}", response_model=TimelineDay)
async def get_daily_view(
    trip_id: int,
    day: date,
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TimelineDay:
    """Get the activities of one day of a trip, sorted by time."""
    store = SqlActivityStore(session)
    trip = await _require_trip(store, trip_id)
    records = await load_trip_records(store, trip_id)

    return build_daily_view(
        trip,
        records,
        day,
        basis=CalendarBasis(settings.calendar_basis),
        modulo=ModuloPolicy(settings.day_color_modulo),
        strict=settings.strict_times,
    )
