"""One-shot correction of route days and times for explicitly listed routes."""

import logging
from dataclasses import dataclass
from datetime import date

from tripcore.db.activity_store import ActivityStore
from tripcore.errors import MigrationWriteFailure, UnknownRecord
from tripcore.models.common import ActivityKind
from tripcore.temporal.compose import CalendarBasis, anchor_for_date, parse_clock, to_epoch_ms
from tripcore.temporal.timeofday import format_time_24
from tripcore.utils.logging import StructuredMigrationLogger
from tripcore.utils.metrics import PrometheusMigrationMetrics

logger = logging.getLogger(__name__)

MIGRATION_NAME = "route_times"


@dataclass(frozen=True)
class RouteTimeCorrection:
    """Intended local day and wall-clock time of one route."""

    route_id: int
    day: date
    time_of_day: str

    @classmethod
    def parse(cls, text: str) -> "RouteTimeCorrection":
        """Parse ``ID=YYYY-MM-DDTHH:MM`` (12-hour times are accepted too).

        Raises:
            ValueError: If the text is not a valid correction
        """
        route_id, sep, when = text.partition("=")
        day_text, t_sep, time_text = when.partition("T")
        if not sep or not t_sep:
            raise ValueError(f"expected ID=YYYY-MM-DDTHH:MM, got {text!r}")

        time_of_day = format_time_24(time_text.strip(), strict=True)
        parse_clock(time_of_day)

        return cls(
            route_id=int(route_id),
            day=date.fromisoformat(day_text.strip()),
            time_of_day=time_of_day,
        )

    @property
    def anchor_ms(self) -> int:
        """Day anchor for the route's day, as epoch ms at UTC midnight."""
        return to_epoch_ms(anchor_for_date(self.day, CalendarBasis.utc))


class RouteTimeFixer:
    """Rewrite listed routes to their intended day anchor and time, atomically."""

    def __init__(
        self,
        store: ActivityStore,
        *,
        metrics: PrometheusMigrationMetrics | None = None,
    ) -> None:
        self._store = store
        self._metrics = metrics or PrometheusMigrationMetrics(MIGRATION_NAME)
        self._log = StructuredMigrationLogger(MIGRATION_NAME)

    async def run(self, corrections: list[RouteTimeCorrection]) -> int:
        """Apply all corrections in one transaction.

        Returns:
            Number of routes fixed

        Raises:
            UnknownRecord: If a listed route does not exist
            MigrationWriteFailure: If an update fails
        """
        kind = ActivityKind.route
        logger.info(f"[route_times] fixing {len(corrections)} routes")

        async with self._store.transaction():
            for correction in corrections:
                route = await self._store.get_record(kind, correction.route_id)
                if route is None:
                    self._metrics.record_failed(kind.value)
                    raise UnknownRecord(kind.value, correction.route_id)

                values = {"date": correction.anchor_ms, "time": correction.time_of_day}
                try:
                    await self._store.update_record(kind, correction.route_id, values)
                except Exception as e:
                    self._metrics.record_failed(kind.value)
                    self._log.log_record(
                        kind.value, correction.route_id, "failed", route["name"], error_reason=str(e)
                    )
                    raise MigrationWriteFailure(kind.value, correction.route_id, str(e)) from e

                self._metrics.record_updated(kind.value)
                self._log.log_record(
                    kind.value,
                    correction.route_id,
                    "updated",
                    f"{route['name']} on {correction.day.isoformat()} at {correction.time_of_day} (local)",
                    changes=values,
                )

        logger.info(f"[route_times] all {len(corrections)} route times fixed")
        return len(corrections)
