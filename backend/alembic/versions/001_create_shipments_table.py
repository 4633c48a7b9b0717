"""Create shipments table

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the `shipments` table backing the shipment store.
How:   Mirrors app/models/shipment.py, including the created_at DESC index
       used by the list query and a NON-unique tracking_number index.

Rollback: downgrade() drops the table (all shipment data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "shipments",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("tracking_number", sa.Text(), nullable=False),
        sa.Column("destination", sa.Text(), nullable=False),
        sa.Column("status", sa.Text(), nullable=False),
        sa.Column("estimated_delivery", sa.Date(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index(
        "idx_shipments_created_at",
        "shipments",
        [sa.text("created_at DESC")],
    )
    # Deliberately not unique: several records may share a tracking number
    op.create_index(
        "idx_shipments_tracking_number",
        "shipments",
        ["tracking_number"],
    )


def downgrade() -> None:
    op.drop_index("idx_shipments_tracking_number", table_name="shipments")
    op.drop_index("idx_shipments_created_at", table_name="shipments")
    op.drop_table("shipments")
