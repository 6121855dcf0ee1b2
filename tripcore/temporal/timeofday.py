"""Time-of-day parsing: heterogeneous time strings to canonical 24-hour HH:MM."""

import logging
import re

from tripcore.errors import UnrecognizedTimeFormat
from tripcore.utils.metrics import unrecognized_time_formats_total

logger = logging.getLogger(__name__)

MISSING_TIME_PLACEHOLDER = "--:--"

_CANONICAL_RE = re.compile(r"\d{2}:\d{2}")
_TWELVE_HOUR_RE = re.compile(r"(\d{1,2}):(\d{2})\s*(AM|PM)?", re.IGNORECASE)


def normalize_time_24(value: str) -> str | None:
    """Convert a recognized time string to HH:MM, or return None.

    Unlike ``format_time_24`` this neither counts nor raises.
    """
    if _CANONICAL_RE.fullmatch(value):
        return value

    match = _TWELVE_HOUR_RE.fullmatch(value)
    if not match:
        return None

    hours = int(match.group(1))
    minutes = match.group(2)
    period = (match.group(3) or "").upper()

    if period == "PM" and hours != 12:
        hours += 12
    elif period == "AM" and hours == 12:
        hours = 0

    return f"{hours:02d}:{minutes}"


def format_time_24(value: str | None, *, strict: bool = False) -> str:
    """Normalize a time string to 24-hour HH:MM.

    Canonical input is returned unchanged. "H:MM" and "H:MM AM/PM" forms are
    converted. Any other string is passed through verbatim unless ``strict``
    is set.

    Args:
        value: Raw time string, or None
        strict: Raise instead of passing unrecognized formats through

    Returns:
        Canonical "HH:MM", the unrecognized input, or "" when value is absent

    Raises:
        UnrecognizedTimeFormat: In strict mode, for unrecognized input
    """
    if not value:
        return ""

    canonical = normalize_time_24(value)
    if canonical is not None:
        return canonical

    if strict:
        unrecognized_time_formats_total.labels(policy="strict").inc()
        raise UnrecognizedTimeFormat(value)

    unrecognized_time_formats_total.labels(policy="permissive").inc()
    return value


def display_time_24(value: str | None, *, strict: bool = False) -> str:
    """Format a time for display, never returning an empty string.

    Missing times render as ``MISSING_TIME_PLACEHOLDER``. In strict mode an
    unrecognized format is logged and also rendered as the placeholder.
    """
    try:
        formatted = format_time_24(value, strict=strict)
    except UnrecognizedTimeFormat as e:
        logger.warning(f"Displaying placeholder for {e}")
        return MISSING_TIME_PLACEHOLDER

    return formatted or MISSING_TIME_PLACEHOLDER
