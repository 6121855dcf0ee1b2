"""FastAPI application."""

from fastapi import FastAPI

from tripcore.api.routes.health import router as health_router
from tripcore.api.routes.metrics import router as metrics_router
from tripcore.api.routes.timeline import router as timeline_router

app = FastAPI(title="Trip Itinerary API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(timeline_router, tags=["timeline"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Trip Itinerary API", "version": "0.1.0"}
