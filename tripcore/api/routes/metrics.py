"""Prometheus metrics endpoint."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint.

    Exposes all registered Prometheus metrics including:
    - unrecognized_time_formats_total{policy}
    - malformed_times_of_day_total{policy}
    - migration_records_total{migration, kind, outcome}
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
