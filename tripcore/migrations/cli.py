"""Command-line entry points for the one-shot data migrations.

Usage:
    python -m tripcore.migrations.cli backfill --trip-id 30001 \\
        --destination-country Slovakia --origin-country Israel
    python -m tripcore.migrations.cli fix-route-times \\
        --route 1=2026-09-02T19:00 --route 2=2026-09-03T09:00

Both commands exit with status 1 after logging a diagnostic when
configuration is missing, the database cannot be used, or any record
fails to update.
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tripcore.config import Settings, get_settings
from tripcore.db.engine import create_async_engine_from_settings
from tripcore.db.sql_store import SqlActivityStore
from tripcore.errors import MissingRequiredConfiguration, TripCoreError
from tripcore.migrations.legacy_backfill import (
    LEGACY_BACKFILL_KINDS,
    BackfillReport,
    LegacyBackfillMigrator,
    LocationRule,
)
from tripcore.migrations.route_times import RouteTimeCorrection, RouteTimeFixer
from tripcore.models.common import ActivityKind
from tripcore.utils.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tripcore-migrate", description=__doc__.splitlines()[0])
    commands = parser.add_subparsers(dest="command", required=True)

    backfill = commands.add_parser(
        "backfill", help="Split legacy combined instants into day, time and location"
    )
    backfill.add_argument(
        "--trip-id", dest="trip_ids", type=int, action="append", default=[],
        help="Legacy trip to migrate (repeatable)",
    )
    backfill.add_argument(
        "--destination-country", default=None,
        help="Location label for every slot except flights leaving the origin country",
    )
    backfill.add_argument(
        "--origin-country", default=None,
        help="Location label for flight departures whose origin names this country",
    )
    backfill.add_argument(
        "--kind", dest="kinds", action="append", default=[],
        choices=[kind.value for kind in LEGACY_BACKFILL_KINDS],
        help="Restrict to these record kinds (repeatable, default: all)",
    )

    fix_routes = commands.add_parser(
        "fix-route-times", help="Rewrite listed routes to their intended local day and time"
    )
    fix_routes.add_argument(
        "--route", dest="routes", action="append", default=[], metavar="ID=YYYY-MM-DDTHH:MM",
        help="Route correction (repeatable)",
    )
    return parser


async def run_backfill(args: argparse.Namespace, settings: Settings) -> list[BackfillReport]:
    """Run the legacy backfill for every requested trip, one trip at a time."""
    if not args.trip_ids:
        raise MissingRequiredConfiguration("at least one --trip-id is required")
    if not args.destination_country:
        raise MissingRequiredConfiguration("--destination-country is required")

    rule = LocationRule(
        destination_country=args.destination_country,
        origin_country=args.origin_country,
    )
    kinds = tuple(ActivityKind(k) for k in args.kinds) or LEGACY_BACKFILL_KINDS

    engine = create_async_engine_from_settings(settings)
    try:
        async with AsyncSession(engine) as session:
            store = SqlActivityStore(session)
            migrator = LegacyBackfillMigrator(store, rule)

            reports = []
            for trip_id in args.trip_ids:
                if await store.get_trip(trip_id) is None:
                    raise MissingRequiredConfiguration(f"trip {trip_id} does not exist")
                reports.append(await migrator.run(trip_id, kinds))
            return reports
    finally:
        await engine.dispose()


async def run_fix_route_times(args: argparse.Namespace, settings: Settings) -> int:
    """Apply the listed route corrections in one transaction."""
    if not args.routes:
        raise MissingRequiredConfiguration("at least one --route is required")

    try:
        corrections = [RouteTimeCorrection.parse(text) for text in args.routes]
    except ValueError as e:
        raise MissingRequiredConfiguration(f"invalid --route value: {e}") from e

    engine = create_async_engine_from_settings(settings)
    try:
        async with AsyncSession(engine) as session:
            return await RouteTimeFixer(SqlActivityStore(session)).run(corrections)
    finally:
        await engine.dispose()


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run the requested migration and return an exit status."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        if args.command == "backfill":
            reports = asyncio.run(run_backfill(args, settings))
            for report in reports:
                logger.info(
                    f"Trip {report.trip_id}: {report.total_updated} records updated "
                    f"({dict(report.updated)})"
                )
        else:
            fixed = asyncio.run(run_fix_route_times(args, settings))
            logger.info(f"{fixed} route times fixed")
    except TripCoreError as e:
        logger.error(f"Migration failed: {e}")
        return 1
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Migration failed: {type(e).__name__}: {e}")
        return 1

    logger.info("Migration complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
