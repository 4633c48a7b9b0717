"""
Elite Logistic Backend — Test Configuration (conftest.py)
===========================================================

What:  Shared pytest fixtures for the test suite.
How:   Each test gets a fresh SQLite database (aiosqlite) in pytest's tmp_path,
       wrapped in a real ShipmentStore, plus an HTTPX client talking to an app
       built around that store.

Fixtures:
    store:              ShipmentStore with tables created
    test_client:        httpx.AsyncClient bound to create_app(store=store)
    sample_shipment:    camelCase body for POST /api/shipments
"""

import os

# Set before any app import so Settings() never sees production values.
# Fixtures inject their own tmp_path stores; nothing connects to this URL.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("FRONTEND_DIST", None)

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.main import create_app
from app.services.shipment_store import ShipmentStore


@pytest_asyncio.fixture
async def store(tmp_path):
    """A ShipmentStore backed by a throwaway SQLite file."""
    shipment_store = ShipmentStore.from_url(f"sqlite+aiosqlite:///{tmp_path / 'shipments.db'}")
    await shipment_store.create_schema()
    yield shipment_store
    await shipment_store.dispose()


@pytest_asyncio.fixture
async def test_client(store):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    ASGITransport does not run the lifespan, which is why the store is
    injected through create_app() instead of built from settings.
    """
    app = create_app(store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_shipment():
    return {
        "trackingNumber": "TRK1",
        "destination": "Paris",
        "status": "Pending",
        "estimatedDelivery": "2024-01-01",
    }
