"""Unit tests for the legacy UTC basis correction and update planning."""

from datetime import datetime, timezone

from tripcore.db.activity_store import ACTIVITY_SLOTS
from tripcore.migrations.legacy_backfill import (
    LegacySplit,
    LocationRule,
    correct_legacy_instant,
    plan_record_update,
)
from tripcore.models.common import ActivityKind


def utc_ms(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> int:
    return int(datetime(year, month, day, hour, minute, tzinfo=timezone.utc).timestamp() * 1000)


RULE = LocationRule(destination_country="Slovakia", origin_country="Israel")


class TestCorrectLegacyInstant:
    def test_reads_wall_clock_in_utc(self) -> None:
        split = correct_legacy_instant(utc_ms(2026, 9, 2, 14, 30))

        assert split == LegacySplit(anchor_ms=utc_ms(2026, 9, 2), time_of_day="14:30")

    def test_midnight_yields_same_anchor_and_no_time(self) -> None:
        anchor = utc_ms(2026, 9, 2)

        assert correct_legacy_instant(anchor) == LegacySplit(anchor_ms=anchor, time_of_day=None)

    def test_second_pass_is_a_no_op(self) -> None:
        first = correct_legacy_instant(utc_ms(2026, 9, 5, 10, 0))
        second = correct_legacy_instant(first.anchor_ms)

        assert second.anchor_ms == first.anchor_ms
        assert second.time_of_day is None

    def test_seconds_are_dropped_from_time(self) -> None:
        legacy = utc_ms(2026, 9, 3, 9, 0) + 42_000

        split = correct_legacy_instant(legacy)

        assert split.time_of_day == "09:00"
        assert split.anchor_ms == utc_ms(2026, 9, 3)


class TestLocationRule:
    departure, arrival = ACTIVITY_SLOTS[ActivityKind.transportation]

    def test_flight_from_origin_country(self) -> None:
        row = {"id": 1, "type": "flight", "origin": "Tel Aviv, Israel"}
        assert RULE.classify(ActivityKind.transportation, self.departure, row) == "Israel"

    def test_flight_elsewhere_is_destination(self) -> None:
        row = {"id": 1, "type": "flight", "origin": "Vienna, Austria"}
        assert RULE.classify(ActivityKind.transportation, self.departure, row) == "Slovakia"

    def test_train_from_origin_country_is_destination(self) -> None:
        row = {"id": 1, "type": "train", "origin": "Haifa, Israel"}
        assert RULE.classify(ActivityKind.transportation, self.departure, row) == "Slovakia"

    def test_arrival_is_always_destination(self) -> None:
        row = {"id": 1, "type": "flight", "origin": "Tel Aviv, Israel"}
        assert RULE.classify(ActivityKind.transportation, self.arrival, row) == "Slovakia"

    def test_no_origin_country_configured(self) -> None:
        rule = LocationRule(destination_country="Slovakia")
        row = {"id": 1, "type": "flight", "origin": "Tel Aviv, Israel"}
        assert rule.classify(ActivityKind.transportation, self.departure, row) == "Slovakia"


class TestPlanRecordUpdate:
    def test_transportation_with_arrival(self) -> None:
        row = {
            "id": 7,
            "trip_id": 30001,
            "type": "flight",
            "origin": "Tel Aviv, Israel",
            "destination": "Bratislava",
            "departure_date": utc_ms(2026, 9, 2, 6, 15),
            "departure_time": None,
            "arrival_date": utc_ms(2026, 9, 2, 9, 40),
            "arrival_time": None,
        }

        values = plan_record_update(ActivityKind.transportation, row, RULE)

        assert values == {
            "departure_date": utc_ms(2026, 9, 2),
            "departure_time": "06:15",
            "departure_location": "Israel",
            "arrival_date": utc_ms(2026, 9, 2),
            "arrival_time": "09:40",
            "arrival_location": "Slovakia",
        }

    def test_transportation_without_arrival_leaves_arrival_alone(self) -> None:
        row = {
            "id": 8,
            "type": "bus",
            "origin": "Košice",
            "departure_date": utc_ms(2026, 9, 7, 10, 0),
            "arrival_date": None,
        }

        values = plan_record_update(ActivityKind.transportation, row, RULE)

        assert values is not None
        assert "arrival_date" not in values
        assert "arrival_time" not in values
        assert values["departure_location"] == "Slovakia"

    def test_existing_time_column_wins_and_is_normalized(self) -> None:
        row = {
            "id": 3,
            "name": "Villa",
            "check_in_date": utc_ms(2026, 9, 2, 13, 0),
            "check_in_time": "3:00 PM",
            "check_out_date": utc_ms(2026, 9, 5, 11, 0),
            "check_out_time": None,
        }

        values = plan_record_update(ActivityKind.hotel, row, RULE)

        assert values == {
            "check_in_date": utc_ms(2026, 9, 2),
            "check_in_time": "15:00",
            "check_out_date": utc_ms(2026, 9, 5),
            "check_out_time": "11:00",
            "location": "Slovakia",
        }

    def test_undated_row_is_skipped(self) -> None:
        row = {"id": 4, "name": "Castle", "planned_visit_date": None}

        assert plan_record_update(ActivityKind.tourist_site, row, RULE) is None

    def test_replanning_migrated_row_changes_nothing(self) -> None:
        row = {
            "id": 5,
            "name": "Route 2",
            "date": utc_ms(2026, 9, 5, 10, 0),
            "time": None,
            "location": None,
        }

        first = plan_record_update(ActivityKind.route, row, RULE)
        assert first is not None
        migrated = {**row, **first}

        second = plan_record_update(ActivityKind.route, migrated, RULE)

        assert second == first
        assert second["time"] == "10:00"
        assert second["date"] == utc_ms(2026, 9, 5)
