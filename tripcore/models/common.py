"""Common types and enums shared across all models."""

from enum import Enum


class ActivityKind(str, Enum):
    """Persisted activity record type."""

    transportation = "transportation"
    hotel = "hotel"
    tourist_site = "tourist_site"
    restaurant = "restaurant"
    route = "route"
    car_rental = "car_rental"


class TransportType(str, Enum):
    """Transportation mode."""

    flight = "flight"
    train = "train"
    bus = "bus"
    ferry = "ferry"
    other = "other"


class EventType(str, Enum):
    """Timeline event type; one record can produce several events."""

    transport_departure = "transport_departure"
    transport_arrival = "transport_arrival"
    hotel_checkin = "hotel_checkin"
    hotel_checkout = "hotel_checkout"
    site = "site"
    restaurant = "restaurant"
    route = "route"
    car_pickup = "car_pickup"
    car_return = "car_return"
