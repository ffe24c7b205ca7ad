"""
Persistence primitives for areas.

The store never commits; callers own the transaction.
"""

from typing import Any, Collection, List, Optional, Set

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.models import Area, AreaType, Seat


class AreaStore:
    """Reads and writes area rows."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_area(self, venue_id: int, name: str, capacity: int, area_type: AreaType) -> Area:
        """
        Insert an area and flush so its ID is assigned.

        Capacity and type are expected to be validated by the caller.
        """
        area = Area(
            venue_id=venue_id,
            name=name,
            capacity=capacity,
            area_type=area_type
        )
        self.db.add(area)
        await self.db.flush()
        return area

    async def get_area(self, area_id: int) -> Optional[Area]:
        result = await self.db.execute(
            select(Area)
            .where(Area.id == area_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_area_in_venue(self, area_id: int, venue_id: int) -> Optional[Area]:
        """Return the area only if it belongs to ``venue_id``."""
        result = await self.db.execute(
            select(Area).where(Area.id == area_id, Area.venue_id == venue_id)
        )
        return result.scalar_one_or_none()

    async def ids_in_venue(self, area_ids: Collection[int], venue_id: int) -> Set[int]:
        """Subset of ``area_ids`` that exist and belong to ``venue_id``."""
        if not area_ids:
            return set()
        result = await self.db.execute(
            select(Area.id).where(Area.id.in_(set(area_ids)), Area.venue_id == venue_id)
        )
        return set(result.scalars().all())

    async def list_by_venue(self, venue_id: int) -> List[Area]:
        result = await self.db.execute(
            select(Area)
            .where(Area.venue_id == venue_id)
            .order_by(Area.name, Area.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def update_area(self, area: Area, changes: dict[str, Any]) -> Area:
        for field, value in changes.items():
            setattr(area, field, value)
        await self.db.flush()
        return area

    async def delete_area(self, area_id: int) -> bool:
        """
        Delete an area together with its seats.

        Returns:
            True if a row was deleted
        """
        await self.db.execute(delete(Seat).where(Seat.area_id == area_id))
        result = await self.db.execute(delete(Area).where(Area.id == area_id))
        return result.rowcount > 0
