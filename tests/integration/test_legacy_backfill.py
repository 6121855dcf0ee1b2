"""Integration tests for the legacy backfill migrator over the in-memory store."""

import logging
from datetime import datetime, timezone
from typing import Any

import pytest

from tripcore.db.activity_store import TripRecord
from tripcore.db.inmemory import InMemoryActivityStore
from tripcore.errors import MigrationWriteFailure
from tripcore.migrations.legacy_backfill import LegacyBackfillMigrator, LocationRule
from tripcore.models.common import ActivityKind

TRIP_ID = 30001
RULE = LocationRule(destination_country="Slovakia", origin_country="Israel")


def utc_ms(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> int:
    return int(datetime(year, month, day, hour, minute, tzinfo=timezone.utc).timestamp() * 1000)


@pytest.fixture
def store() -> InMemoryActivityStore:
    """Store holding one legacy trip plus an unrelated trip."""
    store = InMemoryActivityStore()
    store.add_trip(
        TripRecord(
            id=TRIP_ID,
            name="Slovakia 2026",
            destination="Slovakia",
            start_date=utc_ms(2026, 9, 2),
            end_date=utc_ms(2026, 9, 9),
        )
    )

    store.add_record(
        ActivityKind.transportation,
        {
            "id": 1,
            "trip_id": TRIP_ID,
            "type": "flight",
            "origin": "Tel Aviv, Israel",
            "destination": "Bratislava",
            "departure_date": utc_ms(2026, 9, 2, 6, 15),
            "departure_time": None,
            "departure_location": None,
            "arrival_date": utc_ms(2026, 9, 2, 9, 40),
            "arrival_time": None,
            "arrival_location": None,
        },
    )
    store.add_record(
        ActivityKind.hotel,
        {
            "id": 2,
            "trip_id": TRIP_ID,
            "name": "Villa",
            "check_in_date": utc_ms(2026, 9, 2, 17, 0),
            "check_in_time": "17:00",
            "check_out_date": utc_ms(2026, 9, 5, 11, 0),
            "check_out_time": None,
            "location": None,
        },
    )
    store.add_record(
        ActivityKind.tourist_site,
        {
            "id": 3,
            "trip_id": TRIP_ID,
            "name": "Štrbské Pleso",
            "planned_visit_date": utc_ms(2026, 9, 3, 9, 0),
            "planned_visit_time": None,
            "location": None,
        },
    )
    store.add_record(
        ActivityKind.tourist_site,
        {
            "id": 4,
            "trip_id": TRIP_ID,
            "name": "Someday castle",
            "planned_visit_date": None,
            "planned_visit_time": None,
            "location": None,
        },
    )
    store.add_record(
        ActivityKind.restaurant,
        {
            "id": 5,
            "trip_id": TRIP_ID,
            "name": "Koliba",
            "reservation_date": utc_ms(2026, 9, 3, 19, 30),
            "reservation_time": None,
            "location": None,
        },
    )
    store.add_record(
        ActivityKind.route,
        {
            "id": 6,
            "trip_id": TRIP_ID,
            "name": "Route 2: Liptovský Mikuláš → Košice",
            "date": utc_ms(2026, 9, 5, 10, 0),
            "time": "10:00",
            "location": None,
        },
    )
    store.add_record(
        ActivityKind.route,
        {
            "id": 7,
            "trip_id": 99,
            "name": "Other trip route",
            "date": utc_ms(2026, 5, 1, 8, 0),
            "time": None,
            "location": None,
        },
    )
    return store


async def snapshot(store: InMemoryActivityStore) -> dict[ActivityKind, list[dict[str, Any]]]:
    return {kind: await store.list_records(kind, TRIP_ID) for kind in ActivityKind}


@pytest.mark.asyncio
async def test_backfill_splits_every_kind(store: InMemoryActivityStore) -> None:
    report = await LegacyBackfillMigrator(store, RULE).run(TRIP_ID)

    flight = await store.get_record(ActivityKind.transportation, 1)
    assert flight is not None
    assert flight["departure_date"] == utc_ms(2026, 9, 2)
    assert flight["departure_time"] == "06:15"
    assert flight["departure_location"] == "Israel"
    assert flight["arrival_time"] == "09:40"
    assert flight["arrival_location"] == "Slovakia"

    hotel = await store.get_record(ActivityKind.hotel, 2)
    assert hotel is not None
    assert hotel["check_in_date"] == utc_ms(2026, 9, 2)
    assert hotel["check_in_time"] == "17:00"
    assert hotel["check_out_time"] == "11:00"
    assert hotel["location"] == "Slovakia"

    site = await store.get_record(ActivityKind.tourist_site, 3)
    assert site is not None
    assert (site["planned_visit_date"], site["planned_visit_time"]) == (utc_ms(2026, 9, 3), "09:00")

    restaurant = await store.get_record(ActivityKind.restaurant, 5)
    assert restaurant is not None
    assert restaurant["reservation_time"] == "19:30"

    assert report.updated == {
        "transportation": 1,
        "hotel": 1,
        "tourist_site": 1,
        "restaurant": 1,
        "route": 1,
    }
    assert report.skipped == {"tourist_site": 1}


@pytest.mark.asyncio
async def test_backfill_only_touches_requested_trip(store: InMemoryActivityStore) -> None:
    await LegacyBackfillMigrator(store, RULE).run(TRIP_ID)

    other = await store.get_record(ActivityKind.route, 7)
    assert other is not None
    assert other["date"] == utc_ms(2026, 5, 1, 8, 0)
    assert other["location"] is None


@pytest.mark.asyncio
async def test_backfill_twice_is_idempotent(store: InMemoryActivityStore) -> None:
    migrator = LegacyBackfillMigrator(store, RULE)

    await migrator.run(TRIP_ID)
    after_first = await snapshot(store)
    await migrator.run(TRIP_ID)
    after_second = await snapshot(store)

    assert after_second == after_first


@pytest.mark.asyncio
async def test_backfill_can_be_limited_to_kinds(store: InMemoryActivityStore) -> None:
    report = await LegacyBackfillMigrator(store, RULE).run(
        TRIP_ID, kinds=(ActivityKind.route,)
    )

    assert report.updated == {"route": 1}
    hotel = await store.get_record(ActivityKind.hotel, 2)
    assert hotel is not None
    assert hotel["check_in_date"] == utc_ms(2026, 9, 2, 17, 0)


@pytest.mark.asyncio
async def test_backfill_logs_one_line_per_record(
    store: InMemoryActivityStore, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.INFO, logger="tripcore.migrations"):
        await LegacyBackfillMigrator(store, RULE).run(TRIP_ID)

    lines = [r.getMessage() for r in caplog.records if r.name == "tripcore.migrations"]
    assert "Updated transportation 1: departure 2026-09-02 06:15 Israel; arrival 2026-09-02 09:40 Slovakia" in lines
    assert any(line.startswith("Skipped tourist_site 4") for line in lines)
    assert len(lines) == 6


class FailingStore(InMemoryActivityStore):
    """In-memory store whose update fails for one record."""

    def __init__(self, fail_kind: ActivityKind, fail_id: int) -> None:
        super().__init__()
        self._fail = (fail_kind, fail_id)

    async def update_record(
        self, kind: ActivityKind, record_id: int, values: dict[str, Any]
    ) -> None:
        if (kind, record_id) == self._fail:
            raise RuntimeError("connection lost")
        await super().update_record(kind, record_id, values)


@pytest.mark.asyncio
async def test_write_failure_aborts_and_rolls_back_kind() -> None:
    store = FailingStore(ActivityKind.route, 11)
    store.add_record(
        ActivityKind.hotel,
        {
            "id": 1,
            "trip_id": TRIP_ID,
            "name": "Villa",
            "check_in_date": utc_ms(2026, 9, 2, 15, 0),
            "check_in_time": None,
            "check_out_date": utc_ms(2026, 9, 5, 11, 0),
            "check_out_time": None,
            "location": None,
        },
    )
    for route_id, hour in ((10, 9), (11, 10), (12, 8)):
        store.add_record(
            ActivityKind.route,
            {
                "id": route_id,
                "trip_id": TRIP_ID,
                "name": f"Route {route_id}",
                "date": utc_ms(2026, 9, 3, hour, 0),
                "time": None,
                "location": None,
            },
        )

    with pytest.raises(MigrationWriteFailure) as exc_info:
        await LegacyBackfillMigrator(store, RULE).run(TRIP_ID)

    assert exc_info.value.kind == "route"
    assert exc_info.value.record_id == 11
    assert isinstance(exc_info.value.__cause__, RuntimeError)

    # Earlier kind committed, failing kind fully rolled back
    hotel = await store.get_record(ActivityKind.hotel, 1)
    assert hotel is not None
    assert hotel["check_in_time"] == "15:00"
    first_route = await store.get_record(ActivityKind.route, 10)
    assert first_route is not None
    assert first_route["time"] is None
    assert first_route["date"] == utc_ms(2026, 9, 3, 9, 0)
