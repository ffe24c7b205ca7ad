"""
Area service for the direct area endpoints.
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.cache import CacheInvalidator
from geventos_platform.models import Area
from geventos_platform.schemas.area import AreaCreate, AreaUpdate
from geventos_platform.services.area_store import AreaStore
from geventos_platform.services.venue_service import VenueService
from geventos_platform.utils.exceptions import AreaNotFoundError, ValidationError

logger = logging.getLogger(__name__)


class AreaService:
    """Service class for area management operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.store = AreaStore(db)
        self.venues = VenueService(db)

    async def list_areas(self, venue_id: int) -> List[Area]:
        """
        List the areas of a venue.

        Raises:
            VenueNotFoundError: If venue is not found
        """
        await self.venues.get_venue(venue_id)
        return await self.store.list_by_venue(venue_id)

    async def get_area(self, area_id: int) -> Area:
        area = await self.store.get_area(area_id)
        if area is None:
            raise AreaNotFoundError(area_id)
        return area

    async def create_area(self, venue_id: int, area_data: AreaCreate) -> Area:
        await self.venues.get_venue(venue_id)
        area = await self.store.create_area(
            venue_id,
            name=area_data.name,
            capacity=area_data.capacity,
            area_type=area_data.area_type
        )
        await self.db.commit()

        logger.info(f"Area {area.id} created in venue {venue_id}")
        return area

    async def update_area(self, area_id: int, area_data: AreaUpdate) -> Area:
        """
        Apply a partial update to an area.

        Raises:
            AreaNotFoundError: If area is not found
            ValidationError: If no fields were provided
        """
        changes = area_data.model_dump(exclude_unset=True, exclude={"venue_id"})
        if not changes:
            raise ValidationError("No fields provided to update")

        area = await self.get_area(area_id)
        await self.store.update_area(area, changes)
        await self.db.commit()

        await CacheInvalidator.invalidate_all_layouts()
        return area

    async def delete_area(self, area_id: int) -> None:
        """Delete an area and its seats. Layout documents keep their tables."""
        await self.get_area(area_id)
        await self.store.delete_area(area_id)
        await self.db.commit()

        await CacheInvalidator.invalidate_all_layouts()
        logger.info(f"Area {area_id} deleted")
