"""Day bucketing and deterministic per-day color assignment."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import TypeVar

T = TypeVar("T")

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class DayColor:
    """Pastel color entry for one day of a trip (Tailwind class names + hex)."""

    name: str
    bg: str
    hover: str
    active: str
    text: str
    border: str
    light: str


def _pastel(name: str, light: str) -> DayColor:
    return DayColor(
        name=name,
        bg=f"bg-{name}-100",
        hover=f"hover:bg-{name}-200",
        active=f"bg-{name}-300",
        text=f"text-{name}-900",
        border=f"border-{name}-200",
        light=light,
    )


DAY_PALETTE: tuple[DayColor, ...] = (
    _pastel("pink", "#fce7f3"),
    _pastel("blue", "#dbeafe"),
    _pastel("green", "#dcfce7"),
    _pastel("yellow", "#fef9c3"),
    _pastel("purple", "#f3e8ff"),
    _pastel("orange", "#ffedd5"),
    _pastel("teal", "#ccfbf1"),
    _pastel("indigo", "#e0e7ff"),
)

PALETTE_SIZE = len(DAY_PALETTE)


class ModuloPolicy(str, Enum):
    """How a negative day bucket maps onto the palette."""

    floor = "floor"  # always in [0, PALETTE_SIZE)
    truncate = "truncate"  # legacy remainder, negative for pre-trip days


def day_bucket(trip_start: datetime, event_day: datetime) -> int:
    """Whole days from the trip start to an event, floored.

    Both values must share a calendar basis (both aware or both naive).
    Events before the trip start give negative buckets.
    """
    return (event_day - trip_start) // ONE_DAY


def day_color_index(
    trip_start: datetime,
    event_day: datetime,
    *,
    modulo: ModuloPolicy = ModuloPolicy.floor,
) -> int:
    """Palette index for an event's day."""
    bucket = day_bucket(trip_start, event_day)
    if modulo == ModuloPolicy.truncate:
        remainder = abs(bucket) % PALETTE_SIZE
        return -remainder if bucket < 0 else remainder
    return bucket % PALETTE_SIZE


def day_color(
    trip_start: datetime,
    event_day: datetime,
    *,
    modulo: ModuloPolicy = ModuloPolicy.floor,
) -> DayColor | None:
    """Palette color for an event's day.

    Returns None only under the truncate policy, for a negative index.
    """
    index = day_color_index(trip_start, event_day, modulo=modulo)
    if index < 0:
        return None
    return DAY_PALETTE[index]


def group_by_day(items: Iterable[T], key: Callable[[T], datetime]) -> list[tuple[date, list[T]]]:
    """Group items by the calendar date of ``key(item)``, keeping input order.

    Items are expected to be sorted already; a date that reappears later
    joins its existing group.
    """
    groups: dict[date, list[T]] = {}
    for item in items:
        groups.setdefault(key(item).date(), []).append(item)
    return list(groups.items())
