"""
Elite Logistic Backend — Pydantic Request/Response Schemas
============================================================

What:  Pydantic models defining the JSON contract of the shipment API.
Why:   Input validation, camelCase serialization, and OpenAPI generation.
How:   The Python side uses snake_case attributes; an alias generator maps
       them to the camelCase keys the web client sends and expects
       (tracking_number ↔ trackingNumber).
Who:   ShipmentStore validates caller fields with ShipmentCreate/ShipmentUpdate;
       routes serialize records with ShipmentResponse.
"""

import uuid
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ShipmentStatus(str, Enum):
    """
    Status values the web client offers.

    Not enforced: `status` accepts any non-empty string.
    """
    PENDING = "Pending"
    IN_TRANSIT = "In Transit"
    DELAYED = "Delayed"
    DELIVERED = "Delivered"


class CamelModel(BaseModel):
    """Base for models exchanged as camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Request Models: What the client sends
# ══════════════════════════════════════════════════════════════════════════


class ShipmentCreate(CamelModel):
    """
    Body of POST /api/shipments.

    All four fields are required and strings must be non-empty.
    Unknown keys (including id and createdAt) are ignored.
    """
    tracking_number: str = Field(min_length=1, description="Carrier tracking number")
    destination: str = Field(min_length=1, description="Delivery destination")
    status: str = Field(
        min_length=1,
        description="Free-form status",
        examples=[s.value for s in ShipmentStatus],
    )
    estimated_delivery: date = Field(description="Estimated delivery date (ISO 8601)")


class ShipmentUpdate(CamelModel):
    """
    Body of PUT /api/shipments/{trackingNumber}.

    Any subset of the creation fields. Only keys present in the body are
    applied (see model_dump(exclude_unset=True) in the store); an explicit
    null is rejected since every stored field is required.
    """
    tracking_number: Optional[str] = Field(default=None, min_length=1)
    destination: Optional[str] = Field(default=None, min_length=1)
    status: Optional[str] = Field(default=None, min_length=1)
    estimated_delivery: Optional[date] = Field(default=None)

    @field_validator("*")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field may not be null")
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models: What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class ShipmentResponse(CamelModel):
    """Full representation of a stored shipment."""
    id: uuid.UUID = Field(description="Store-generated identifier")
    tracking_number: str
    destination: str
    status: str
    estimated_delivery: date
    created_at: datetime = Field(description="When the record was created (UTC ISO 8601)")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    """Plain confirmation body, e.g. after a delete."""
    message: str


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    `message` is always present; the rest helps with log correlation.
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(CamelModel):
    """Liveness payload of GET /api/health. No store access."""
    status: str
    server: str
    version: str
    python_version: str
    timestamp: datetime


class DiagnosticResponse(CamelModel):
    """Payload of GET /api/test."""
    message: str
    version: str
    python_version: str
    timestamp: datetime
