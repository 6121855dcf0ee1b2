"""Models package - re-exports for convenience."""

from tripcore.models.common import ActivityKind, EventType, TransportType
from tripcore.models.timeline import TimelineDay, TimelineEvent, TimelineV1

__all__ = [
    "ActivityKind",
    "EventType",
    "TransportType",
    "TimelineDay",
    "TimelineEvent",
    "TimelineV1",
]
