"""split time and location columns

Revision ID: 002
Revises: 001
Create Date: 2026-07-15

Adds per-slot time and location columns. Existing rows keep their combined
instants; run `tripcore-migrate backfill` per legacy trip afterwards to
split them into day anchors and HH:MM times.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Add time and location columns."""
    op.add_column("transportation", sa.Column("departure_time", sa.String(10), nullable=True))
    op.add_column("transportation", sa.Column("departure_location", sa.String(255), nullable=True))
    op.add_column("transportation", sa.Column("arrival_time", sa.String(10), nullable=True))
    op.add_column("transportation", sa.Column("arrival_location", sa.String(255), nullable=True))

    for table in ("hotels", "tourist_sites", "restaurants", "trip_routes"):
        op.add_column(table, sa.Column("location", sa.String(255), nullable=True))


def downgrade() -> None:
    """Remove time and location columns."""
    for table in ("trip_routes", "restaurants", "tourist_sites", "hotels"):
        op.drop_column(table, "location")

    op.drop_column("transportation", "arrival_location")
    op.drop_column("transportation", "arrival_time")
    op.drop_column("transportation", "departure_location")
    op.drop_column("transportation", "departure_time")
