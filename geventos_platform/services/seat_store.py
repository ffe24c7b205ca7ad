"""
Persistence primitives for seats.

The store never commits; callers own the transaction.
"""

from typing import Any, Collection, List, Optional, Set

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.models import Area, Seat, SeatState


class SeatStore:
    """Reads and writes seat rows."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_seat(
        self,
        area_id: int,
        code: Optional[str],
        state: SeatState,
        row: Optional[int] = None,
        column: Optional[int] = None
    ) -> Seat:
        """Insert a seat and flush so its ID is assigned."""
        seat = Seat(
            area_id=area_id,
            code=code,
            row=row,
            column=column,
            state=state
        )
        self.db.add(seat)
        await self.db.flush()
        return seat

    async def update_seat_state(self, seat_id: int, state: SeatState) -> bool:
        """
        Set the state of one seat.

        Returns:
            True if the seat exists
        """
        result = await self.db.execute(
            update(Seat).where(Seat.id == seat_id).values(state=state)
        )
        return result.rowcount > 0

    async def update_seat(self, seat: Seat, changes: dict[str, Any]) -> Seat:
        for field, value in changes.items():
            setattr(seat, field, value)
        await self.db.flush()
        return seat

    async def get_seat(self, seat_id: int) -> Optional[Seat]:
        result = await self.db.execute(
            select(Seat)
            .where(Seat.id == seat_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_by_area(self, area_id: int) -> List[Seat]:
        """Seats of an area ordered by row then column."""
        result = await self.db.execute(
            select(Seat)
            .where(Seat.area_id == area_id)
            .order_by(Seat.row, Seat.column, Seat.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def list_by_venue(self, venue_id: int) -> List[Seat]:
        """Every seat in every area of a venue, ordered by seat ID."""
        result = await self.db.execute(
            select(Seat)
            .join(Area, Seat.area_id == Area.id)
            .where(Area.venue_id == venue_id)
            .order_by(Seat.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def ids_in_venue(self, seat_ids: Collection[int], venue_id: int) -> Set[int]:
        """Subset of ``seat_ids`` whose area belongs to ``venue_id``."""
        if not seat_ids:
            return set()
        result = await self.db.execute(
            select(Seat.id)
            .join(Area, Seat.area_id == Area.id)
            .where(Seat.id.in_(set(seat_ids)), Area.venue_id == venue_id)
        )
        return set(result.scalars().all())

    async def delete_seat(self, seat_id: int) -> bool:
        result = await self.db.execute(delete(Seat).where(Seat.id == seat_id))
        return result.rowcount > 0
