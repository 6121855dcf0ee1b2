"""SQLAlchemy ORM models for trips and their dated activity records.

Dates are epoch milliseconds. After the split-time migration every *_date
column holds a day anchor (UTC midnight) and the matching *_time column holds
the local wall-clock time as HH:MM.
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class Trip(Base):
    """Trip table - owner of every activity record."""

    __tablename__ = "trips"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    destination: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[int] = mapped_column(BigInteger, nullable=False)
    end_date: Mapped[int] = mapped_column(BigInteger, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    transportation: Mapped[list["Transportation"]] = relationship(
        "Transportation", back_populates="trip", cascade="all, delete-orphan"
    )
    hotels: Mapped[list["Hotel"]] = relationship(
        "Hotel", back_populates="trip", cascade="all, delete-orphan"
    )
    tourist_sites: Mapped[list["TouristSite"]] = relationship(
        "TouristSite", back_populates="trip", cascade="all, delete-orphan"
    )
    restaurants: Mapped[list["Restaurant"]] = relationship(
        "Restaurant", back_populates="trip", cascade="all, delete-orphan"
    )
    car_rentals: Mapped[list["CarRental"]] = relationship(
        "CarRental", back_populates="trip", cascade="all, delete-orphan"
    )
    routes: Mapped[list["TripRoute"]] = relationship(
        "TripRoute", back_populates="trip", cascade="all, delete-orphan"
    )


class Transportation(Base):
    """Transportation table - flights, trains, buses, ferries."""

    __tablename__ = "transportation"
    __table_args__ = (Index("idx_transportation_trip", "trip_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    trip_id: Mapped[int] = mapped_column(Integer, ForeignKey("trips.id"), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    flight_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    origin: Mapped[str] = mapped_column(String(255), nullable=False)
    destination: Mapped[str] = mapped_column(String(255), nullable=False)
    departure_date: Mapped[int] = mapped_column(BigInteger, nullable=False)
    departure_time: Mapped[str | None] = mapped_column(String(10), nullable=True)
    departure_location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    arrival_date: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    arrival_time: Mapped[str | None] = mapped_column(String(10), nullable=True)
    arrival_location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    confirmation_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    trip: Mapped["Trip"] = relationship("Trip", back_populates="transportation")


class Hotel(Base):
    """Hotel table - one stay with check-in and check-out days."""

    __tablename__ = "hotels"
    __table_args__ = (Index("idx_hotels_trip", "trip_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    trip_id: Mapped[int] = mapped_column(Integer, ForeignKey("trips.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    check_in_date: Mapped[int] = mapped_column(BigInteger, nullable=False)
    check_in_time: Mapped[str | None] = mapped_column(String(10), nullable=True)
    check_out_date: Mapped[int] = mapped_column(BigInteger, nullable=False)
    check_out_time: Mapped[str | None] = mapped_column(String(10), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    trip: Mapped["Trip"] = relationship("Trip", back_populates="hotels")


class TouristSite(Base):
    """Tourist site table - optional planned visit."""

    __tablename__ = "tourist_sites"
    __table_args__ = (Index("idx_tourist_sites_trip", "trip_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    trip_id: Mapped[int] = mapped_column(Integer, ForeignKey("trips.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    opening_hours: Mapped[str | None] = mapped_column(String(255), nullable=True)
    planned_visit_date: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    planned_visit_time: Mapped[str | None] = mapped_column(String(10), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    trip: Mapped["Trip"] = relationship("Trip", back_populates="tourist_sites")


class Restaurant(Base):
    """Restaurant table - optional reservation."""

    __tablename__ = "restaurants"
    __table_args__ = (Index("idx_restaurants_trip", "trip_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    trip_id: Mapped[int] = mapped_column(Integer, ForeignKey("trips.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    cuisine_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    reservation_date: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    reservation_time: Mapped[str | None] = mapped_column(String(10), nullable=True)
    number_of_diners: Mapped[int | None] = mapped_column(Integer, nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    trip: Mapped["Trip"] = relationship("Trip", back_populates="restaurants")


class CarRental(Base):
    """Car rental table - pickup and return days."""

    __tablename__ = "car_rentals"
    __table_args__ = (Index("idx_car_rentals_trip", "trip_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    trip_id: Mapped[int] = mapped_column(Integer, ForeignKey("trips.id"), nullable=False)
    company: Mapped[str] = mapped_column(String(255), nullable=False)
    car_model: Mapped[str | None] = mapped_column(String(255), nullable=True)
    pickup_date: Mapped[int] = mapped_column(BigInteger, nullable=False)
    pickup_time: Mapped[str | None] = mapped_column(String(10), nullable=True)
    pickup_location: Mapped[str | None] = mapped_column(String(500), nullable=True)
    return_date: Mapped[int] = mapped_column(BigInteger, nullable=False)
    return_time: Mapped[str | None] = mapped_column(String(10), nullable=True)
    return_location: Mapped[str | None] = mapped_column(String(500), nullable=True)

    trip: Mapped["Trip"] = relationship("Trip", back_populates="car_rentals")


class TripRoute(Base):
    """Trip route table - driving routes between stops."""

    __tablename__ = "trip_routes"
    __table_args__ = (Index("idx_trip_routes_trip", "trip_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    trip_id: Mapped[int] = mapped_column(Integer, ForeignKey("trips.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[int] = mapped_column(BigInteger, nullable=False)
    time: Mapped[str | None] = mapped_column(String(10), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    trip: Mapped["Trip"] = relationship("Trip", back_populates="routes")
