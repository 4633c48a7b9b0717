"""
Elite Logistic Backend — Shipment SQLAlchemy Model
====================================================

What:  ORM model representing the `shipments` table.
Why:   Maps Python objects to rows for type-safe store operations.
How:   Inherits from DeclarativeBase; Alembic reads this for migrations.
Who:   Used by ShipmentStore for CRUD and by Alembic for schema management.

Table Design Rationale:
    - UUID primary key generated in Python: works the same on PostgreSQL and SQLite
    - tracking_number: indexed but NOT unique; several records may share one
    - Text columns: no length limit on caller-supplied strings
    - status: free-form string, recognized values live in ShipmentStatus
    - estimated_delivery: DATE (no time component)
    - created_at: UTC with timezone, drives the list ordering
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Shipment(Base):
    """
    A tracked shipment.

    Lifecycle:
        1. Created by POST /api/shipments (id and created_at assigned here)
        2. Mutated in place by PUT /api/shipments/{trackingNumber}
        3. Removed permanently by DELETE /api/shipments/{trackingNumber}
    """

    __tablename__ = "shipments"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    tracking_number: Mapped[str] = mapped_column(Text, nullable=False)
    destination: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False)
    estimated_delivery: Mapped[date] = mapped_column(Date, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_shipments_created_at", created_at.desc()),
        Index("idx_shipments_tracking_number", tracking_number),
    )

    def __repr__(self) -> str:
        return (
            f"<Shipment(id={self.id}, tracking_number='{self.tracking_number}', "
            f"status='{self.status}')>"
        )
