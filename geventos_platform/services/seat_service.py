"""
Seat service for the direct seat endpoints.
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.cache import CacheInvalidator
from geventos_platform.models import Seat
from geventos_platform.schemas.seat import SeatCreate, SeatUpdate
from geventos_platform.services.area_store import AreaStore
from geventos_platform.services.seat_store import SeatStore
from geventos_platform.utils.exceptions import (
    AreaNotFoundError,
    SeatNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class SeatService:
    """Service class for seat management operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.store = SeatStore(db)
        self.areas = AreaStore(db)

    async def _require_area(self, area_id: int) -> None:
        if await self.areas.get_area(area_id) is None:
            raise AreaNotFoundError(area_id)

    async def list_seats(self, area_id: int) -> List[Seat]:
        """
        List the seats of an area by row and column.

        Raises:
            AreaNotFoundError: If area is not found
        """
        await self._require_area(area_id)
        return await self.store.list_by_area(area_id)

    async def get_seat(self, seat_id: int) -> Seat:
        seat = await self.store.get_seat(seat_id)
        if seat is None:
            raise SeatNotFoundError(seat_id)
        return seat

    async def create_seats(self, area_id: int, seats_data: List[SeatCreate]) -> List[int]:
        """
        Create several seats in one area, all or nothing.

        Returns:
            IDs of the created seats, in request order
        """
        if not seats_data:
            raise ValidationError("At least one seat is required")
        await self._require_area(area_id)

        seat_ids = []
        for seat_data in seats_data:
            seat = await self.store.create_seat(
                area_id,
                seat_data.code,
                seat_data.state,
                row=seat_data.row,
                column=seat_data.column
            )
            seat_ids.append(seat.id)
        await self.db.commit()

        await CacheInvalidator.invalidate_all_layouts()
        logger.info(f"{len(seat_ids)} seats created in area {area_id}")
        return seat_ids

    async def update_seat(self, seat_id: int, seat_data: SeatUpdate) -> Seat:
        """
        Apply a partial update to a seat.

        Raises:
            SeatNotFoundError: If seat is not found
            ValidationError: If no fields were provided
        """
        changes = seat_data.model_dump(exclude_unset=True, exclude={"area_id"})
        if not changes:
            raise ValidationError("No fields provided to update")

        seat = await self.get_seat(seat_id)
        await self.store.update_seat(seat, changes)
        await self.db.commit()

        await CacheInvalidator.invalidate_all_layouts()
        return seat

    async def delete_seat(self, seat_id: int) -> None:
        if not await self.store.delete_seat(seat_id):
            raise SeatNotFoundError(seat_id)
        await self.db.commit()

        await CacheInvalidator.invalidate_all_layouts()
