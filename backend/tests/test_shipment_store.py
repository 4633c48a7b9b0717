"""
Elite Logistic Backend — Shipment Store Tests
===============================================

What:  Tests for ShipmentStore against a real SQLite database.
Why:   Validation, ordering and first-match lookups are the store's contract.

What we test:
    ✅ Create assigns id/createdAt and echoes the caller's fields
    ✅ Missing or empty fields raise ValidationError and persist nothing
    ✅ List is newest first
    ✅ Get/update/delete by tracking number, including NotFoundError
    ✅ Duplicate tracking numbers resolve to the oldest record (id breaks ties)
    ✅ Long strings are stored untruncated
    ✅ SQL failures surface as DatabaseError
"""

import asyncio
from datetime import date, datetime, timezone
from uuid import UUID

import pytest
from sqlalchemy import Text

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.shipment import Shipment
from app.schemas.shipment import ShipmentCreate, ShipmentStatus
from app.services.shipment_store import ShipmentStore


def _fields(tracking_number="TRK1", **overrides):
    data = {
        "trackingNumber": tracking_number,
        "destination": "Paris",
        "status": "Pending",
        "estimatedDelivery": "2024-01-01",
    }
    data.update(overrides)
    return data


class TestCreateShipment:

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_created_at(self, store):
        shipment = await store.create_shipment(_fields())

        assert isinstance(shipment.id, UUID)
        assert isinstance(shipment.created_at, datetime)
        assert shipment.tracking_number == "TRK1"
        assert shipment.destination == "Paris"
        assert shipment.status == "Pending"
        assert shipment.estimated_delivery == date(2024, 1, 1)

    @pytest.mark.asyncio
    async def test_create_accepts_schema_instance(self, store):
        payload = ShipmentCreate(
            tracking_number="TRK2",
            destination="Lyon",
            status="In Transit",
            estimated_delivery=date(2024, 2, 1),
        )
        shipment = await store.create_shipment(payload)

        assert shipment.tracking_number == "TRK2"
        assert shipment.status == "In Transit"

    @pytest.mark.asyncio
    async def test_caller_cannot_set_id_or_created_at(self, store):
        fields = _fields(id="00000000-0000-0000-0000-000000000000", createdAt="2000-01-01T00:00:00Z")
        shipment = await store.create_shipment(fields)

        assert str(shipment.id) != "00000000-0000-0000-0000-000000000000"
        assert shipment.created_at.year != 2000

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "missing", ["trackingNumber", "destination", "status", "estimatedDelivery"]
    )
    async def test_missing_field_raises_and_persists_nothing(self, store, missing):
        fields = _fields()
        del fields[missing]

        with pytest.raises(ValidationError) as exc_info:
            await store.create_shipment(fields)

        assert missing in exc_info.value.message
        assert missing in exc_info.value.fields
        assert await store.list_shipments() == []

    @pytest.mark.asyncio
    async def test_empty_string_rejected(self, store):
        with pytest.raises(ValidationError):
            await store.create_shipment(_fields(destination=""))

    @pytest.mark.asyncio
    async def test_malformed_date_rejected(self, store):
        with pytest.raises(ValidationError) as exc_info:
            await store.create_shipment(_fields(estimatedDelivery="next tuesday"))

        assert "estimatedDelivery" in exc_info.value.message

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [s.value for s in ShipmentStatus])
    async def test_recognized_statuses_accepted(self, store, status):
        shipment = await store.create_shipment(_fields(status=status))

        assert shipment.status == status

    @pytest.mark.asyncio
    async def test_status_is_free_form(self, store):
        shipment = await store.create_shipment(_fields(status="Held at customs"))

        assert shipment.status == "Held at customs"

    @pytest.mark.asyncio
    async def test_long_strings_stored_without_truncation(self, store):
        long_status = "Held at customs pending documents from the consignee " * 4
        long_destination = "Warehouse 7, " * 40

        shipment = await store.create_shipment(
            _fields(status=long_status, destination=long_destination)
        )

        reloaded = await store.get_shipment_by_tracking_number(shipment.tracking_number)
        assert reloaded.status == long_status
        assert reloaded.destination == long_destination

    def test_string_columns_are_unbounded(self):
        for column in ("tracking_number", "destination", "status"):
            assert isinstance(Shipment.__table__.c[column].type, Text)
            assert Shipment.__table__.c[column].type.length is None


class TestListShipments:

    @pytest.mark.asyncio
    async def test_empty_store_lists_nothing(self, store):
        assert await store.list_shipments() == []

    @pytest.mark.asyncio
    async def test_newest_first(self, store):
        await store.create_shipment(_fields("A"))
        await asyncio.sleep(0.01)
        await store.create_shipment(_fields("B"))

        shipments = await store.list_shipments()

        assert [s.tracking_number for s in shipments] == ["B", "A"]


class TestLookupByTrackingNumber:

    @pytest.mark.asyncio
    async def test_get_existing(self, store):
        created = await store.create_shipment(_fields())

        found = await store.get_shipment_by_tracking_number("TRK1")

        assert found.id == created.id

    @pytest.mark.asyncio
    async def test_get_unknown_raises_not_found(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            await store.get_shipment_by_tracking_number("NOPE")

        assert exc_info.value.message == "Shipment not found"

    @pytest.mark.asyncio
    async def test_duplicate_tracking_numbers_resolve_to_oldest(self, store):
        first = await store.create_shipment(_fields(destination="Paris"))
        await asyncio.sleep(0.01)
        await store.create_shipment(_fields(destination="Berlin"))

        found = await store.get_shipment_by_tracking_number("TRK1")

        assert found.id == first.id
        assert len(await store.list_shipments()) == 2

    @pytest.mark.asyncio
    async def test_equal_created_at_resolves_by_id(self, store):
        created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
        low_id, high_id = UUID(int=1), UUID(int=2)
        async with store.session() as db:
            db.add(Shipment(
                id=high_id, tracking_number="TRK1", destination="Berlin",
                status="Pending", estimated_delivery=date(2024, 2, 1), created_at=created_at,
            ))
            db.add(Shipment(
                id=low_id, tracking_number="TRK1", destination="Paris",
                status="Pending", estimated_delivery=date(2024, 2, 1), created_at=created_at,
            ))

        found = await store.get_shipment_by_tracking_number("TRK1")

        assert found.id == low_id
        assert found.destination == "Paris"


class TestUpdateShipment:

    @pytest.mark.asyncio
    async def test_update_status(self, store):
        created = await store.create_shipment(_fields())

        updated = await store.update_shipment_by_tracking_number("TRK1", {"status": "Delivered"})

        assert updated.status == "Delivered"
        assert updated.id == created.id
        assert updated.tracking_number == "TRK1"
        assert updated.destination == "Paris"

        reloaded = await store.get_shipment_by_tracking_number("TRK1")
        assert reloaded.status == "Delivered"

    @pytest.mark.asyncio
    async def test_update_several_fields(self, store):
        await store.create_shipment(_fields())

        updated = await store.update_shipment_by_tracking_number(
            "TRK1", {"destination": "Rome", "estimatedDelivery": "2024-03-15"}
        )

        assert updated.destination == "Rome"
        assert updated.estimated_delivery == date(2024, 3, 15)
        assert updated.status == "Pending"

    @pytest.mark.asyncio
    async def test_update_can_change_tracking_number(self, store):
        await store.create_shipment(_fields())

        await store.update_shipment_by_tracking_number("TRK1", {"trackingNumber": "TRK9"})

        assert (await store.get_shipment_by_tracking_number("TRK9")).destination == "Paris"
        with pytest.raises(NotFoundError):
            await store.get_shipment_by_tracking_number("TRK1")

    @pytest.mark.asyncio
    async def test_empty_update_leaves_record_unchanged(self, store):
        created = await store.create_shipment(_fields())

        updated = await store.update_shipment_by_tracking_number("TRK1", {})

        assert updated.id == created.id
        assert updated.status == "Pending"

    @pytest.mark.asyncio
    async def test_update_unknown_raises_not_found(self, store):
        with pytest.raises(NotFoundError):
            await store.update_shipment_by_tracking_number("NOPE", {"status": "Delivered"})

    @pytest.mark.asyncio
    async def test_update_null_value_rejected(self, store):
        await store.create_shipment(_fields())

        with pytest.raises(ValidationError):
            await store.update_shipment_by_tracking_number("TRK1", {"status": None})

        assert (await store.get_shipment_by_tracking_number("TRK1")).status == "Pending"

    @pytest.mark.asyncio
    async def test_update_malformed_date_rejected(self, store):
        await store.create_shipment(_fields())

        with pytest.raises(ValidationError):
            await store.update_shipment_by_tracking_number("TRK1", {"estimatedDelivery": "soon"})


class TestDeleteShipment:

    @pytest.mark.asyncio
    async def test_delete_then_get_raises_not_found(self, store):
        created = await store.create_shipment(_fields())

        deleted = await store.delete_shipment_by_tracking_number("TRK1")

        assert deleted.id == created.id
        with pytest.raises(NotFoundError):
            await store.get_shipment_by_tracking_number("TRK1")

    @pytest.mark.asyncio
    async def test_delete_unknown_raises_not_found(self, store):
        with pytest.raises(NotFoundError):
            await store.delete_shipment_by_tracking_number("NOPE")

    @pytest.mark.asyncio
    async def test_delete_removes_only_first_match(self, store):
        await store.create_shipment(_fields(destination="Paris"))
        await asyncio.sleep(0.01)
        await store.create_shipment(_fields(destination="Berlin"))

        await store.delete_shipment_by_tracking_number("TRK1")

        remaining = await store.get_shipment_by_tracking_number("TRK1")
        assert remaining.destination == "Berlin"


class TestStoreFailures:

    @pytest.mark.asyncio
    async def test_missing_table_raises_database_error(self, tmp_path):
        bare = ShipmentStore.from_url(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
        try:
            with pytest.raises(DatabaseError) as exc_info:
                await bare.list_shipments()
        finally:
            await bare.dispose()

        assert "no such table" in exc_info.value.message
