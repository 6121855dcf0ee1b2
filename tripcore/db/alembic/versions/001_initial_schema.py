"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-06-01

Creates trips and their dated activity tables. Dates are epoch milliseconds
holding combined instants; transportation has no separate time columns yet.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create all tables."""
    # trips table
    op.create_table(
        "trips",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("destination", sa.String(255), nullable=False),
        sa.Column("start_date", sa.BigInteger(), nullable=False),
        sa.Column("end_date", sa.BigInteger(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # transportation table
    op.create_table(
        "transportation",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("trip_id", sa.Integer(), sa.ForeignKey("trips.id"), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("flight_number", sa.String(50), nullable=True),
        sa.Column("origin", sa.String(255), nullable=False),
        sa.Column("destination", sa.String(255), nullable=False),
        sa.Column("departure_date", sa.BigInteger(), nullable=False),
        sa.Column("arrival_date", sa.BigInteger(), nullable=True),
        sa.Column("confirmation_number", sa.String(100), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
    )
    op.create_index("idx_transportation_trip", "transportation", ["trip_id"])

    # hotels table
    op.create_table(
        "hotels",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("trip_id", sa.Integer(), sa.ForeignKey("trips.id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("check_in_date", sa.BigInteger(), nullable=False),
        sa.Column("check_in_time", sa.String(10), nullable=True),
        sa.Column("check_out_date", sa.BigInteger(), nullable=False),
        sa.Column("check_out_time", sa.String(10), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
    )
    op.create_index("idx_hotels_trip", "hotels", ["trip_id"])

    # tourist_sites table
    op.create_table(
        "tourist_sites",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("trip_id", sa.Integer(), sa.ForeignKey("trips.id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("opening_hours", sa.String(255), nullable=True),
        sa.Column("planned_visit_date", sa.BigInteger(), nullable=True),
        sa.Column("planned_visit_time", sa.String(10), nullable=True),
    )
    op.create_index("idx_tourist_sites_trip", "tourist_sites", ["trip_id"])

    # restaurants table
    op.create_table(
        "restaurants",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("trip_id", sa.Integer(), sa.ForeignKey("trips.id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("cuisine_type", sa.String(100), nullable=True),
        sa.Column("reservation_date", sa.BigInteger(), nullable=True),
        sa.Column("reservation_time", sa.String(10), nullable=True),
        sa.Column("number_of_diners", sa.Integer(), nullable=True),
    )
    op.create_index("idx_restaurants_trip", "restaurants", ["trip_id"])

    # car_rentals table
    op.create_table(
        "car_rentals",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("trip_id", sa.Integer(), sa.ForeignKey("trips.id"), nullable=False),
        sa.Column("company", sa.String(255), nullable=False),
        sa.Column("car_model", sa.String(255), nullable=True),
        sa.Column("pickup_date", sa.BigInteger(), nullable=False),
        sa.Column("pickup_time", sa.String(10), nullable=True),
        sa.Column("pickup_location", sa.String(500), nullable=True),
        sa.Column("return_date", sa.BigInteger(), nullable=False),
        sa.Column("return_time", sa.String(10), nullable=True),
        sa.Column("return_location", sa.String(500), nullable=True),
    )
    op.create_index("idx_car_rentals_trip", "car_rentals", ["trip_id"])

    # trip_routes table
    op.create_table(
        "trip_routes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("trip_id", sa.Integer(), sa.ForeignKey("trips.id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("date", sa.BigInteger(), nullable=False),
        sa.Column("time", sa.String(10), nullable=True),
    )
    op.create_index("idx_trip_routes_trip", "trip_routes", ["trip_id"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index("idx_trip_routes_trip", table_name="trip_routes")
    op.drop_table("trip_routes")
    op.drop_index("idx_car_rentals_trip", table_name="car_rentals")
    op.drop_table("car_rentals")
    op.drop_index("idx_restaurants_trip", table_name="restaurants")
    op.drop_table("restaurants")
    op.drop_index("idx_tourist_sites_trip", table_name="tourist_sites")
    op.drop_table("tourist_sites")
    op.drop_index("idx_hotels_trip", table_name="hotels")
    op.drop_table("hotels")
    op.drop_index("idx_transportation_trip", table_name="transportation")
    op.drop_table("transportation")
    op.drop_table("trips")
