"""Prometheus metrics for time parsing and legacy migrations."""

from prometheus_client import Counter

# Time-of-day parsing
unrecognized_time_formats_total = Counter(
    "unrecognized_time_formats_total",
    "Time strings that matched neither HH:MM nor the 12-hour form",
    ["policy"],
)

malformed_times_of_day_total = Counter(
    "malformed_times_of_day_total",
    "Time strings that could not be composed into an instant",
    ["policy"],
)

# Migrations
migration_records_total = Counter(
    "migration_records_total",
    "Records processed by one-shot data migrations",
    ["migration", "kind", "outcome"],
)


class PrometheusMigrationMetrics:
    """Prometheus-based migration metrics implementation."""

    def __init__(self, migration: str) -> None:
        self._migration = migration

    def record_updated(self, kind: str) -> None:
        """Count a successfully rewritten record."""
        migration_records_total.labels(
            migration=self._migration, kind=kind, outcome="updated"
        ).inc()

    def record_skipped(self, kind: str) -> None:
        """Count a record left untouched."""
        migration_records_total.labels(
            migration=self._migration, kind=kind, outcome="skipped"
        ).inc()

    def record_failed(self, kind: str) -> None:
        """Count a record whose write failed."""
        migration_records_total.labels(
            migration=self._migration, kind=kind, outcome="failed"
        ).inc()
