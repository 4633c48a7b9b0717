"""
Elite Logistic Backend — Shipment Store
=========================================

What:  Durable persistence of shipment records with lookup by tracking number.
Why:   Keeps validation, timestamps and SQL in one place, independent of HTTP.
How:   Owns an async engine and session factory. Every operation opens its own
       session, commits on success and rolls back on failure.
Who:   Constructed once at startup (create_app / lifespan) and injected into
       route handlers through the get_store dependency.

Lookup semantics:
    tracking_number is not unique. get/update/delete act on the first match,
    taken as the oldest record carrying that tracking number.

Error Handling Strategy:
    Bad caller input      → ValidationError (400)
    No matching record    → NotFoundError (404)
    Any SQLAlchemy error  → DatabaseError (500) carrying the driver message
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import asc, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from app.config import Settings
from app.database import Base, build_engine, build_session_factory
from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.shipment import Shipment
from app.schemas.shipment import ShipmentCreate, ShipmentUpdate

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

Fields = Union[Mapping[str, Any], BaseModel]


def _validate(schema: Type[SchemaT], fields: Fields) -> SchemaT:
    """
    Coerce caller fields into `schema`, translating Pydantic errors.

    The resulting message lists every offending field by its JSON name, e.g.
    "Shipment validation failed: trackingNumber: Field required".
    """
    if isinstance(fields, schema):
        return fields
    if isinstance(fields, BaseModel):
        fields = fields.model_dump(by_alias=True, exclude_unset=True)
    if not isinstance(fields, Mapping):
        raise ValidationError(message="Shipment validation failed: body must be a JSON object")

    try:
        return schema.model_validate(fields)
    except PydanticValidationError as e:
        names = []
        parts = []
        for err in e.errors():
            name = ".".join(str(loc) for loc in err["loc"]) or "body"
            names.append(name)
            parts.append(f"{name}: {err['msg']}")
        raise ValidationError(
            message="Shipment validation failed: " + ", ".join(parts),
            fields=names,
        )


class ShipmentStore:
    """
    Persistence layer for ShipmentRecord values.

    Responsibilities:
        - create_shipment(): validate and insert
        - list_shipments(): newest first
        - get/update/delete_shipment_by_tracking_number(): first-match lookups
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = build_session_factory(engine)

    @classmethod
    def from_url(cls, database_url: str, **engine_kwargs: Any) -> "ShipmentStore":
        return cls(build_engine(database_url, **engine_kwargs))

    @classmethod
    def from_settings(cls, settings: Settings) -> "ShipmentStore":
        return cls.from_url(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def create_schema(self) -> None:
        """Create tables directly from model metadata (tests and local runs)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Session with commit on success and rollback on any error.

        SQLAlchemy errors surface as DatabaseError; application errors
        (NotFoundError raised mid-operation) pass through untouched.
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Shipment store error: %s", str(e))
                raise DatabaseError(
                    message=str(getattr(e, "orig", None) or e),
                    context={"error_type": type(e).__name__},
                ) from e
            except Exception:
                await session.rollback()
                raise

    # ── Operations ────────────────────────────────────────────────────────

    async def create_shipment(self, fields: Fields) -> Shipment:
        """
        Insert a new shipment.

        Raises:
            ValidationError: a required field is missing, empty or malformed.
                Nothing is written in that case.
        """
        data = _validate(ShipmentCreate, fields)

        shipment = Shipment(
            tracking_number=data.tracking_number,
            destination=data.destination,
            status=data.status,
            estimated_delivery=data.estimated_delivery,
        )
        async with self.session() as db:
            db.add(shipment)
            await db.flush()

        logger.info("Shipment created: %s (%s)", shipment.tracking_number, shipment.id)
        return shipment

    async def list_shipments(self) -> List[Shipment]:
        """All shipments, most recently created first."""
        async with self.session() as db:
            result = await db.execute(
                select(Shipment).order_by(desc(Shipment.created_at))
            )
            return list(result.scalars().all())

    async def get_shipment_by_tracking_number(self, tracking_number: str) -> Shipment:
        """
        Raises:
            NotFoundError: no shipment carries this tracking number.
        """
        async with self.session() as db:
            return await self._first_match(db, tracking_number)

    async def update_shipment_by_tracking_number(
        self, tracking_number: str, fields: Fields
    ) -> Shipment:
        """
        Apply the given fields to the first matching shipment.

        Only keys present in `fields` change; id and created_at never do.

        Raises:
            ValidationError: a supplied value is null, empty or malformed.
            NotFoundError: no shipment carries this tracking number.
        """
        changes = _validate(ShipmentUpdate, fields).model_dump(exclude_unset=True)

        async with self.session() as db:
            shipment = await self._first_match(db, tracking_number)
            for name, value in changes.items():
                setattr(shipment, name, value)
            await db.flush()

        logger.info(
            "Shipment %s updated: %s",
            tracking_number,
            ", ".join(sorted(changes)) or "no changes",
        )
        return shipment

    async def delete_shipment_by_tracking_number(self, tracking_number: str) -> Shipment:
        """
        Permanently remove the first matching shipment and return it.

        Raises:
            NotFoundError: no shipment carries this tracking number.
        """
        async with self.session() as db:
            shipment = await self._first_match(db, tracking_number)
            await db.delete(shipment)

        logger.info("Shipment deleted: %s (%s)", tracking_number, shipment.id)
        return shipment

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _first_match(self, db: AsyncSession, tracking_number: str) -> Shipment:
        result = await db.execute(
            select(Shipment)
            .where(Shipment.tracking_number == tracking_number)
            .order_by(asc(Shipment.created_at), asc(Shipment.id))
            .limit(1)
        )
        shipment: Optional[Shipment] = result.scalar_one_or_none()
        if shipment is None:
            raise NotFoundError(resource="Shipment", key=tracking_number)
        return shipment
