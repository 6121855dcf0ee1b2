"""Legacy backfill: split combined instants into day anchor, time and location.

Legacy rows stored local wall-clock readings inside UTC-labelled epoch
instants (14:30 in Bratislava was written as 14:30Z). The correction below
reads those instants in UTC on purpose. It is a one-time fix for that
historical mistake, not the steady-state composition rule (see
tripcore.temporal.compose).
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from tripcore.db.activity_store import ACTIVITY_SLOTS, ActivityRow, ActivityStore, TemporalSlot
from tripcore.errors import MigrationWriteFailure
from tripcore.models.common import ActivityKind, TransportType
from tripcore.temporal.compose import (
    CalendarBasis,
    extract_time_of_day,
    from_epoch_ms,
    to_epoch_ms,
    truncate_to_day,
)
from tripcore.temporal.timeofday import display_time_24, format_time_24
from tripcore.utils.logging import StructuredMigrationLogger
from tripcore.utils.metrics import PrometheusMigrationMetrics

logger = logging.getLogger(__name__)

MIGRATION_NAME = "legacy_backfill"

# Record kinds covered by the legacy batch; car rentals were always split
LEGACY_BACKFILL_KINDS: tuple[ActivityKind, ...] = (
    ActivityKind.transportation,
    ActivityKind.hotel,
    ActivityKind.tourist_site,
    ActivityKind.restaurant,
    ActivityKind.route,
)


@dataclass(frozen=True)
class LegacySplit:
    """Day anchor (UTC midnight, epoch ms) and time recovered from a legacy instant."""

    anchor_ms: int
    time_of_day: str | None


def correct_legacy_instant(legacy_ms: int) -> LegacySplit:
    """Apply the UTC basis correction to one legacy instant.

    An instant already at UTC midnight is returned as the same anchor with no
    time, so running the correction over migrated data changes nothing.
    """
    instant = from_epoch_ms(legacy_ms, CalendarBasis.utc)
    anchor = truncate_to_day(instant)
    time_of_day = None if instant == anchor else extract_time_of_day(instant)
    return LegacySplit(anchor_ms=to_epoch_ms(anchor), time_of_day=time_of_day)


@dataclass(frozen=True)
class LocationRule:
    """Location labels for migrated records.

    A flight departure whose origin names ``origin_country`` is tagged with
    it; every other slot is tagged with ``destination_country``.
    """

    destination_country: str
    origin_country: str | None = None

    def classify(self, kind: ActivityKind, slot: TemporalSlot, row: ActivityRow) -> str:
        if (
            self.origin_country
            and kind == ActivityKind.transportation
            and slot.name == "departure"
            and row.get("type") == TransportType.flight.value
            and self.origin_country in (row.get("origin") or "")
        ):
            return self.origin_country
        return self.destination_country


@dataclass
class BackfillReport:
    """Per-kind counts for one migration run."""

    trip_id: int
    updated: Counter[str] = field(default_factory=Counter)
    skipped: Counter[str] = field(default_factory=Counter)

    @property
    def total_updated(self) -> int:
        return sum(self.updated.values())


def plan_record_update(
    kind: ActivityKind, row: ActivityRow, rule: LocationRule
) -> dict[str, Any] | None:
    """Compute the column values that split a legacy row.

    A time already stored in the row's time column wins over the time
    recovered from the legacy instant; it is normalized to HH:MM when
    recognizable.

    Returns:
        Column -> value mapping, or None when the row has no dated slot
    """
    values: dict[str, Any] = {}

    for slot in ACTIVITY_SLOTS[kind]:
        legacy_ms = row.get(slot.date_field)
        if legacy_ms is None:
            continue

        split = correct_legacy_instant(legacy_ms)
        values[slot.date_field] = split.anchor_ms

        if slot.time_field:
            existing = format_time_24(row.get(slot.time_field))
            values[slot.time_field] = existing or split.time_of_day

        if slot.location_field:
            values[slot.location_field] = rule.classify(kind, slot, row)

    return values or None


def _describe(kind: ActivityKind, values: dict[str, Any]) -> str:
    parts = []
    for slot in ACTIVITY_SLOTS[kind]:
        if slot.date_field not in values:
            continue
        day = from_epoch_ms(values[slot.date_field], CalendarBasis.utc).date()
        time_text = display_time_24(values.get(slot.time_field)) if slot.time_field else ""
        location = values.get(slot.location_field, "") if slot.location_field else ""
        parts.append(" ".join(p for p in (slot.name, day.isoformat(), time_text, location) if p))
    return "; ".join(parts)


class LegacyBackfillMigrator:
    """Backfill split day/time/location columns for one legacy trip.

    Each record kind is migrated in its own store transaction; records are
    updated one at a time in ID order. Any failed write aborts the run and
    rolls back the kind being migrated. Kinds finished earlier stay
    committed, and re-running the migration leaves them unchanged.
    """

    def __init__(
        self,
        store: ActivityStore,
        rule: LocationRule,
        *,
        metrics: PrometheusMigrationMetrics | None = None,
    ) -> None:
        self._store = store
        self._rule = rule
        self._metrics = metrics or PrometheusMigrationMetrics(MIGRATION_NAME)
        self._log = StructuredMigrationLogger(MIGRATION_NAME)

    async def run(
        self, trip_id: int, kinds: tuple[ActivityKind, ...] = LEGACY_BACKFILL_KINDS
    ) -> BackfillReport:
        """Migrate every record of the given kinds belonging to a trip.

        Raises:
            MigrationWriteFailure: If any record update fails
        """
        report = BackfillReport(trip_id=trip_id)
        logger.info(f"[legacy_backfill] trip_id={trip_id} kinds={[k.value for k in kinds]}")

        for kind in kinds:
            async with self._store.transaction():
                rows = await self._store.list_records(kind, trip_id)
                for row in rows:
                    await self._migrate_row(kind, row, report)

        logger.info(
            f"[legacy_backfill] trip_id={trip_id} complete: "
            f"{report.total_updated} updated, {sum(report.skipped.values())} skipped"
        )
        return report

    async def _migrate_row(
        self, kind: ActivityKind, row: ActivityRow, report: BackfillReport
    ) -> None:
        record_id = row["id"]
        values = plan_record_update(kind, row, self._rule)

        if values is None:
            report.skipped[kind.value] += 1
            self._metrics.record_skipped(kind.value)
            self._log.log_record(kind.value, record_id, "skipped", "no dated slot")
            return

        try:
            await self._store.update_record(kind, record_id, values)
        except Exception as e:
            self._metrics.record_failed(kind.value)
            self._log.log_record(
                kind.value, record_id, "failed", "update aborted", error_reason=str(e)
            )
            raise MigrationWriteFailure(kind.value, record_id, str(e)) from e

        report.updated[kind.value] += 1
        self._metrics.record_updated(kind.value)
        self._log.log_record(
            kind.value, record_id, "updated", _describe(kind, values), changes=values
        )
