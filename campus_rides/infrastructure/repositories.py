"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work) and exposes the
record-store contract the core relies on:

    get_by_id(id)            -> record | None
    create(**fields)         -> record with id and created_at
    update(id, **patch)      -> record | None
    list_all()               -> [record]
    list_where(field, value) -> [record]

No ordering or pagination is promised by ``list_*``.  Writes are plain
last-write-wins; there is no version column.
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .database import Base
from .models import DriverModel, FeedbackModel, RideModel
from campus_rides.domain.enums import ACTIVE_RIDE_STATUSES

ModelT = TypeVar("ModelT", bound=Base)


class RecordRepository(Generic[ModelT]):
    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, record_id: str) -> Optional[ModelT]:
        return await self.session.get(self.model, record_id)

    async def create(self, **fields: Any) -> ModelT:
        record = self.model(**fields)
        self.session.add(record)
        await self.session.flush()
        return record

    async def update(self, record_id: str, **patch: Any) -> Optional[ModelT]:
        record = await self.get_by_id(record_id)
        if record is None:
            return None
        for name, value in patch.items():
            setattr(record, name, value)
        await self.session.flush()
        return record

    async def list_all(self) -> list[ModelT]:
        result = await self.session.execute(select(self.model))
        return list(result.scalars().all())

    async def list_where(self, field: str, value: Any) -> list[ModelT]:
        result = await self.session.execute(
            select(self.model).where(getattr(self.model, field) == value)
        )
        return list(result.scalars().all())


class RideRepository(RecordRepository[RideModel]):
    model = RideModel

    async def get_active_for_driver(self, driver_id: str) -> Optional[RideModel]:
        """Most recent accepted / in-progress ride assigned to *driver_id*."""
        result = await self.session.execute(
            select(RideModel)
            .where(
                RideModel.driver_id == driver_id,
                RideModel.status.in_([s.value for s in ACTIVE_RIDE_STATUSES]),
            )
            .order_by(RideModel.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()


class DriverRepository(RecordRepository[DriverModel]):
    model = DriverModel

    async def get_by_code(self, driver_code: str) -> Optional[DriverModel]:
        result = await self.session.execute(
            select(DriverModel).where(DriverModel.driver_code == driver_code)
        )
        return result.scalar_one_or_none()


class FeedbackRepository(RecordRepository[FeedbackModel]):
    model = FeedbackModel
