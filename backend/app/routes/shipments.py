"""
Elite Logistic Backend — Shipment Route Handlers
==================================================

What:  REST resource for shipments under /api/shipments.
Why:   The web client's form and list views are built entirely on these calls.
How:   Each handler resolves the injected ShipmentStore, delegates, and lets
       the global exception handlers turn store errors into 400/404/500.
Who:   Called by the web client (create form, shipments table).

Routes:
    GET    /api/shipments                  list, newest first
    POST   /api/shipments                  create (201)
    GET    /api/shipments/{trackingNumber} fetch one
    PUT    /api/shipments/{trackingNumber} partial update
    DELETE /api/shipments/{trackingNumber} delete
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, status

from app.schemas.shipment import (
    ErrorResponse,
    MessageResponse,
    ShipmentCreate,
    ShipmentResponse,
    ShipmentUpdate,
)
from app.services.shipment_store import ShipmentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/shipments", tags=["Shipments"])


def get_store(request: Request) -> ShipmentStore:
    """
    FastAPI dependency returning the store attached at startup.

    create_app() (or the lifespan handler) puts the store on app.state;
    tests swap it by passing their own store to create_app().
    """
    return request.app.state.store


@router.get(
    "",
    response_model=List[ShipmentResponse],
    responses={500: {"description": "Store failure", "model": ErrorResponse}},
    summary="List all shipments (newest first)",
)
async def list_shipments(store: ShipmentStore = Depends(get_store)):
    return await store.list_shipments()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ShipmentResponse,
    responses={400: {"description": "Missing or malformed fields", "model": ErrorResponse}},
    summary="Register a shipment",
)
async def create_shipment(
    payload: ShipmentCreate,
    store: ShipmentStore = Depends(get_store),
):
    """
    Create a shipment from trackingNumber, destination, status and
    estimatedDelivery. id and createdAt are assigned by the store.
    """
    return await store.create_shipment(payload)


@router.get(
    "/{tracking_number}",
    response_model=ShipmentResponse,
    responses={404: {"description": "Shipment not found", "model": ErrorResponse}},
    summary="Get a shipment by tracking number",
)
async def get_shipment(tracking_number: str, store: ShipmentStore = Depends(get_store)):
    return await store.get_shipment_by_tracking_number(tracking_number)


@router.put(
    "/{tracking_number}",
    response_model=ShipmentResponse,
    responses={
        400: {"description": "Malformed field values", "model": ErrorResponse},
        404: {"description": "Shipment not found", "model": ErrorResponse},
    },
    summary="Update a shipment by tracking number",
)
async def update_shipment(
    tracking_number: str,
    payload: ShipmentUpdate,
    store: ShipmentStore = Depends(get_store),
):
    """Apply any subset of the four shipment fields; typically a status change."""
    return await store.update_shipment_by_tracking_number(tracking_number, payload)


@router.delete(
    "/{tracking_number}",
    response_model=MessageResponse,
    responses={404: {"description": "Shipment not found", "model": ErrorResponse}},
    summary="Delete a shipment by tracking number",
)
async def delete_shipment(tracking_number: str, store: ShipmentStore = Depends(get_store)):
    await store.delete_shipment_by_tracking_number(tracking_number)
    return MessageResponse(message="Shipment deleted successfully")
