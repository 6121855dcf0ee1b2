"""Structured logging for one-shot data migrations."""

import logging
from typing import Any

logger = logging.getLogger("tripcore.migrations")


class StructuredMigrationLogger:
    """Structured logger for per-record migration outcomes."""

    def __init__(self, migration: str) -> None:
        self.migration = migration

    def log_record(
        self,
        kind: str,
        record_id: int,
        outcome: str,
        summary: str,
        changes: dict[str, Any] | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log one human-readable confirmation line with structured data."""
        log_data: dict[str, Any] = {
            "migration": self.migration,
            "kind": kind,
            "record_id": record_id,
            "outcome": outcome,
        }

        if changes:
            log_data["changes"] = changes
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"{outcome.capitalize()} {kind} {record_id}: {summary}"

        if outcome in ("updated", "skipped"):
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.error(log_msg, extra={"structured": log_data})


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for command-line entry points."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
